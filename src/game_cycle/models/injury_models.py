"""
Injury system models and enumerations.

Defines injury types, the body parts they affect, typical layoffs, and the
injury report a game simulator hands back for the week orchestrator to
apply. Roster-side severity (Out vs IR) lives on ``shared.league_models``.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Tuple


class InjuryType(Enum):
    """Trackable injury types."""
    # Head/Neck
    CONCUSSION = "concussion"
    NECK_STRAIN = "neck_strain"

    # Upper Body
    SHOULDER_SPRAIN = "shoulder_sprain"
    HAND_FRACTURE = "hand_fracture"
    RIB_CONTUSION = "rib_contusion"

    # Lower Body
    HAMSTRING_STRAIN = "hamstring_strain"
    KNEE_SPRAIN = "knee_sprain"
    ACL_TEAR = "acl_tear"
    HIGH_ANKLE_SPRAIN = "high_ankle_sprain"
    ANKLE_SPRAIN = "ankle_sprain"
    ACHILLES_TEAR = "achilles_tear"

    @property
    def display_name(self) -> str:
        return self.value.replace('_', ' ').title()


class BodyPart(Enum):
    """Body parts that can be injured."""
    HEAD = "head"
    NECK = "neck"
    SHOULDER = "shoulder"
    HAND = "hand"
    RIBS = "ribs"
    THIGH = "thigh"
    KNEE = "knee"
    ANKLE = "ankle"


# Map injury types to their affected body parts
INJURY_TYPE_TO_BODY_PART: Dict[InjuryType, BodyPart] = {
    InjuryType.CONCUSSION: BodyPart.HEAD,
    InjuryType.NECK_STRAIN: BodyPart.NECK,
    InjuryType.SHOULDER_SPRAIN: BodyPart.SHOULDER,
    InjuryType.HAND_FRACTURE: BodyPart.HAND,
    InjuryType.RIB_CONTUSION: BodyPart.RIBS,
    InjuryType.HAMSTRING_STRAIN: BodyPart.THIGH,
    InjuryType.KNEE_SPRAIN: BodyPart.KNEE,
    InjuryType.ACL_TEAR: BodyPart.KNEE,
    InjuryType.HIGH_ANKLE_SPRAIN: BodyPart.ANKLE,
    InjuryType.ANKLE_SPRAIN: BodyPart.ANKLE,
    InjuryType.ACHILLES_TEAR: BodyPart.ANKLE,
}


# Typical weeks out (inclusive range) by injury type
INJURY_TYPE_WEEKS: Dict[InjuryType, Tuple[int, int]] = {
    InjuryType.CONCUSSION: (1, 3),
    InjuryType.NECK_STRAIN: (1, 2),
    InjuryType.SHOULDER_SPRAIN: (1, 4),
    InjuryType.HAND_FRACTURE: (3, 6),
    InjuryType.RIB_CONTUSION: (1, 2),
    InjuryType.HAMSTRING_STRAIN: (1, 5),
    InjuryType.KNEE_SPRAIN: (2, 6),
    InjuryType.ACL_TEAR: (12, 18),           # Season-ending
    InjuryType.HIGH_ANKLE_SPRAIN: (4, 8),
    InjuryType.ANKLE_SPRAIN: (1, 3),
    InjuryType.ACHILLES_TEAR: (12, 18),      # Season-ending
}


# Relative likelihood of each injury type (most injuries are minor)
INJURY_TYPE_WEIGHTS: Dict[InjuryType, int] = {
    InjuryType.CONCUSSION: 8,
    InjuryType.NECK_STRAIN: 4,
    InjuryType.SHOULDER_SPRAIN: 8,
    InjuryType.HAND_FRACTURE: 4,
    InjuryType.RIB_CONTUSION: 6,
    InjuryType.HAMSTRING_STRAIN: 12,
    InjuryType.KNEE_SPRAIN: 8,
    InjuryType.ACL_TEAR: 2,
    InjuryType.HIGH_ANKLE_SPRAIN: 5,
    InjuryType.ANKLE_SPRAIN: 12,
    InjuryType.ACHILLES_TEAR: 1,
}


# Positions more likely to get hurt carry a larger weight when picking a victim
POSITION_INJURY_WEIGHTS: Dict[str, int] = {
    'QB': 2, 'RB': 5, 'WR': 4, 'TE': 4, 'OL': 3,
    'DL': 3, 'LB': 4, 'CB': 4, 'S': 3, 'K': 1, 'P': 1,
}


@dataclass(frozen=True)
class InjuryReport:
    """
    One new injury produced by a simulated game.

    Attributes:
        team_id: Team the player is rostered on
        player_id: Injured player
        weeks_remaining: Estimated weeks out
        description: Human-readable injury name
    """
    team_id: int
    player_id: int
    weeks_remaining: int
    description: str

    def __str__(self) -> str:
        return f"Player {self.player_id} (Team {self.team_id}): {self.description} - {self.weeks_remaining} weeks"


def injury_types() -> List[InjuryType]:
    """Injury types in a stable order for seeded selection."""
    return list(InjuryType)
