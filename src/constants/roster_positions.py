"""
Roster composition by position.

Usage:
    from constants.roster_positions import ROSTER_TEMPLATE

    sum(ROSTER_TEMPLATE.values())  # 53
"""

from typing import Dict, Tuple


# Position abbreviation -> players carried on a 53-man roster
ROSTER_TEMPLATE: Dict[str, int] = {
    "QB": 3,
    "RB": 4,
    "WR": 6,
    "TE": 3,
    "OL": 9,
    "DL": 9,
    "LB": 7,
    "CB": 6,
    "S": 4,
    "K": 1,
    "P": 1,
}

# Position abbreviation -> starters counted toward projected team strength
STARTER_COUNTS: Dict[str, int] = {
    "QB": 1,
    "RB": 1,
    "WR": 3,
    "TE": 1,
    "OL": 5,
    "DL": 4,
    "LB": 3,
    "CB": 2,
    "S": 2,
    "K": 1,
    "P": 1,
}

POSITIONS: Tuple[str, ...] = tuple(ROSTER_TEMPLATE)
