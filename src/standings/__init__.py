"""
Standings: folds team records into ranked division tables.

The ranking comparator is a single injectable function so tie-break rules
can be upgraded without touching seeding or draft-order callers.
"""

from .standings_models import TeamStanding, Standings
from .standings_engine import (
    StandingsEngine,
    Comparator,
    default_comparator,
    compute_standings,
    sort_standings,
)

__all__ = [
    'TeamStanding',
    'Standings',
    'StandingsEngine',
    'Comparator',
    'default_comparator',
    'compute_standings',
    'sort_standings',
]
