"""
Offseason Phase Enumeration

The twelve ordered sub-phases of the offseason, from the end of the
season to the start of the next one. Each maps 1:1 to the calendar's
offseason sub-phase counter.
"""

from enum import Enum
from typing import Optional


class OffseasonPhase(Enum):
    """
    Offseason phases in their fixed order.

    Phases never branch or repeat within a cycle.
    """

    SEASON_END = "season_end"
    """
    Season recap.

    - Draft order locked from final standings and playoff results
    - Season awards announced
    """

    COACHING_DECISIONS = "coaching_decisions"
    """
    Staff evaluation.

    - Hot-seat coaches flagged
    - Hires, firings, promotions and demotions
    """

    CONTRACT_MANAGEMENT = "contract_management"
    """
    Cap housekeeping before free agency.

    - Expiring contracts listed
    - Cuts, restructures, extensions, franchise and transition tags
    """

    COMBINE = "combine"
    """
    Scouting combine.

    - Measurables generated for every draft prospect
    """

    FREE_AGENCY = "free_agency"
    """
    Free agent signing period.

    - Day counter starts at 1 and is advanced explicitly
    - Signings checked against the salary cap
    """

    DRAFT = "draft"
    """
    Player draft.

    - Requires the draft order from SeasonEnd
    - 7 rounds, 32 picks per round
    """

    UDFA = "udfa"
    """
    Undrafted free agents.

    - Pool built from prospects left after the draft
    """

    OTAS = "otas"
    """
    Organized team activities.

    - Reports on young players with room to grow
    """

    TRAINING_CAMP = "training_camp"
    """
    Training camp.

    - Position battles previewed from current rosters
    """

    PRESEASON = "preseason"
    """
    Exhibition games.

    - Results recorded for review only
    """

    FINAL_CUTS = "final_cuts"
    """
    Cut-down day.

    - Rosters above the roster limit are flagged and must be trimmed
    """

    SEASON_START = "season_start"
    """
    Ready for the new season.

    - Owner expectations set from projected roster strength
    """

    def __str__(self) -> str:
        """Return human-readable phase name."""
        if self is OffseasonPhase.UDFA:
            return "UDFA"
        if self is OffseasonPhase.OTAS:
            return "OTAs"
        return self.value.replace('_', ' ').title()

    @property
    def index(self) -> int:
        """1-based position in the cycle (matches the calendar sub-phase)."""
        return PHASE_ORDER.index(self) + 1

    @property
    def next_phase(self) -> Optional["OffseasonPhase"]:
        position = PHASE_ORDER.index(self)
        return PHASE_ORDER[position + 1] if position + 1 < len(PHASE_ORDER) else None

    @classmethod
    def from_index(cls, index: int) -> "OffseasonPhase":
        """
        Phase for a calendar offseason sub-phase (1-12).

        Raises:
            ValueError: If index is outside 1..12
        """
        if not 1 <= index <= len(PHASE_ORDER):
            raise ValueError(f"Offseason sub-phase {index} outside 1..{len(PHASE_ORDER)}")
        return PHASE_ORDER[index - 1]

    @classmethod
    def get_display_name(cls, phase: 'OffseasonPhase') -> str:
        """
        Get user-friendly display name for phase.

        Example:
            >>> OffseasonPhase.get_display_name(OffseasonPhase.FINAL_CUTS)
            'Final Cuts'
        """
        return str(phase)


PHASE_ORDER = tuple(OffseasonPhase)
