"""
Constants package for the season progression engine

League alignment and roster composition constants.
"""

from .team_ids import (
    TeamIDs, AFC, NFC, CONFERENCES, DIVISION_NAMES,
    NFL_DIVISIONS, TEAM_INFO, get_team_alignment
)
from .roster_positions import ROSTER_TEMPLATE, STARTER_COUNTS, POSITIONS

__all__ = [
    'TeamIDs',
    'AFC',
    'NFC',
    'CONFERENCES',
    'DIVISION_NAMES',
    'NFL_DIVISIONS',
    'TEAM_INFO',
    'get_team_alignment',
    'ROSTER_TEMPLATE',
    'STARTER_COUNTS',
    'POSITIONS',
]
