"""
Calendar value types.

A Calendar is an immutable {year, week, phase, offseason_subphase} record.
Construction validates the phase rules, so every Calendar in a league
snapshot is a legal one.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from config.season_settings import SeasonSettings
from .calendar_exceptions import CalendarInvariantError


class SeasonPhase(Enum):
    """High-level phase of the league year."""
    PRESEASON = "preseason"
    REGULAR_SEASON = "regular_season"
    PLAYOFFS = "playoffs"
    OFFSEASON = "offseason"

    def __str__(self):
        return self.value.replace("_", " ").title()


# phase -> inclusive (first_week, last_week)
PHASE_WEEK_RANGES = {
    SeasonPhase.PRESEASON: (1, SeasonSettings.PRESEASON_WEEKS),
    SeasonPhase.REGULAR_SEASON: (1, SeasonSettings.REGULAR_SEASON_WEEKS),
    SeasonPhase.PLAYOFFS: (SeasonSettings.FIRST_PLAYOFF_WEEK, SeasonSettings.LAST_PLAYOFF_WEEK),
    SeasonPhase.OFFSEASON: (1, 1),
}


@dataclass(frozen=True)
class Calendar:
    """
    Position of the league in its yearly cycle.

    Attributes:
        year: Season year (a season keeps its year through its offseason)
        week: Week within the phase (playoffs use weeks 19-22)
        phase: Current SeasonPhase
        offseason_subphase: 1..12 while in the offseason, None otherwise
    """
    year: int
    week: int
    phase: SeasonPhase
    offseason_subphase: Optional[int] = None

    def __post_init__(self):
        if not isinstance(self.phase, SeasonPhase):
            raise CalendarInvariantError(f"Unknown phase: {self.phase!r}", phase=self.phase)

        if self.phase is SeasonPhase.OFFSEASON:
            if self.offseason_subphase is None:
                raise CalendarInvariantError(
                    "Offseason calendar requires an offseason_subphase",
                    year=self.year, week=self.week
                )
            if not 1 <= self.offseason_subphase <= SeasonSettings.OFFSEASON_PHASE_COUNT:
                raise CalendarInvariantError(
                    f"offseason_subphase {self.offseason_subphase} outside "
                    f"1..{SeasonSettings.OFFSEASON_PHASE_COUNT}",
                    year=self.year, offseason_subphase=self.offseason_subphase
                )
        elif self.offseason_subphase is not None:
            raise CalendarInvariantError(
                f"offseason_subphase must be None during {self.phase}",
                phase=self.phase.value, offseason_subphase=self.offseason_subphase
            )

        first_week, last_week = PHASE_WEEK_RANGES[self.phase]
        if not first_week <= self.week <= last_week:
            raise CalendarInvariantError(
                f"Week {self.week} is not valid during {self.phase} "
                f"(expected {first_week}-{last_week})",
                phase=self.phase.value, week=self.week
            )

    @property
    def is_offseason(self) -> bool:
        return self.phase is SeasonPhase.OFFSEASON

    @property
    def is_game_week(self) -> bool:
        """True when the week orchestrator has games to simulate."""
        return self.phase in (SeasonPhase.REGULAR_SEASON, SeasonPhase.PLAYOFFS)

    def describe(self) -> str:
        """Human-readable label, e.g. "2025 Regular Season Week 3"."""
        if self.is_offseason:
            return (f"{self.year} Offseason phase {self.offseason_subphase} "
                    f"of {SeasonSettings.OFFSEASON_PHASE_COUNT}")
        return f"{self.year} {self.phase} Week {self.week}"

    def __str__(self):
        return self.describe()
