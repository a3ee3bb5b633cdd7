"""
Playoff System

Conference seeding and bracket generation/progression.
"""

from .playoff_seeder import PlayoffSeeder, seed_conference
from .seeding_models import PlayoffSeeding, ConferenceSeeding, PlayoffSeed
from .playoff_manager import PlayoffManager
from .bracket_models import PlayoffMatchup, PlayoffBracket, PlayoffRound

__all__ = [
    'PlayoffSeeder',
    'seed_conference',
    'PlayoffSeeding',
    'ConferenceSeeding',
    'PlayoffSeed',
    'PlayoffManager',
    'PlayoffMatchup',
    'PlayoffBracket',
    'PlayoffRound',
]
