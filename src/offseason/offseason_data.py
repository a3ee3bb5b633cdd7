"""
Offseason Data Models

Records produced during one offseason cycle. ``OffseasonData`` is the
per-cycle bag: phase entry routines overwrite their own generated fields,
dispatched actions append to their record tuples, and the whole bag is
archived when the calendar wraps into the next preseason.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, Iterable, Optional, Tuple

from .offseason_phases import OffseasonPhase


class CoachingChangeType(Enum):
    HIRE = "hire"
    FIRE = "fire"
    PROMOTE = "promote"
    DEMOTE = "demote"


class ContractDecisionType(Enum):
    CUT = "cut"
    RESTRUCTURE = "restructure"
    EXTENSION = "extension"
    FRANCHISE_TAG = "franchise_tag"
    TRANSITION_TAG = "transition_tag"


@dataclass(frozen=True)
class AwardWinner:
    award: str
    team_id: int
    player_id: Optional[int] = None
    detail: str = ""


@dataclass(frozen=True)
class CoachingChangeRecord:
    team_id: int
    change_type: CoachingChangeType
    coach_name: str
    experience_years: int = 0


@dataclass(frozen=True)
class ExpiringContract:
    team_id: int
    player_id: int
    annual_salary: int
    years_remaining: int


@dataclass(frozen=True)
class ContractDecisionRecord:
    team_id: int
    player_id: int
    decision: ContractDecisionType
    cap_delta: int                       # Positive frees cap space
    new_salary: Optional[int] = None
    new_years: Optional[int] = None


@dataclass(frozen=True)
class CombineResult:
    player_id: int
    position: str
    forty_yard_dash: float
    bench_press: int
    vertical_jump: float
    grade: int


@dataclass(frozen=True)
class FreeAgentSigningRecord:
    team_id: int
    player_id: int
    annual_salary: int
    years: int
    day: int
    cap_delta: int


@dataclass(frozen=True)
class DraftSelectionRecord:
    overall_pick: int
    round_number: int
    pick_in_round: int
    team_id: int
    player_id: int


@dataclass(frozen=True)
class UdfaSigningRecord:
    team_id: int
    player_id: int
    annual_salary: int


@dataclass(frozen=True)
class OtaReport:
    team_id: int
    player_id: int
    note: str


@dataclass(frozen=True)
class PositionBattle:
    team_id: int
    position: str
    player_ids: Tuple[int, ...]
    margin: int


@dataclass(frozen=True)
class PreseasonGameRecord:
    week: int
    home_team_id: int
    away_team_id: int
    home_score: int
    away_score: int


@dataclass(frozen=True)
class FinalCutRecord:
    team_id: int
    player_id: int
    dead_money: int


@dataclass(frozen=True)
class OwnerExpectations:
    """Targets set for the coming season from projected roster strength."""
    team_id: int
    projected_rank: int
    min_wins: int
    expected_wins: int
    stretch_wins: int
    playoffs_expected: bool
    patience: int                        # 0-100, lower means a shorter leash


@dataclass(frozen=True)
class ChangeLogEntry:
    phase: OffseasonPhase
    action_type: str
    message: str


@dataclass(frozen=True)
class OffseasonData:
    """Per-cycle bag of phase artifacts."""
    draft_order: Tuple[int, ...] = ()
    awards: Tuple[AwardWinner, ...] = ()
    hot_seat_team_ids: Tuple[int, ...] = ()
    coaching_changes: Tuple[CoachingChangeRecord, ...] = ()
    expiring_contracts: Tuple[ExpiringContract, ...] = ()
    contract_decisions: Tuple[ContractDecisionRecord, ...] = ()
    combine_results: Tuple[CombineResult, ...] = ()
    free_agency_day: int = 0
    free_agent_signings: Tuple[FreeAgentSigningRecord, ...] = ()
    draft_selections: Tuple[DraftSelectionRecord, ...] = ()
    udfa_pool: Tuple[int, ...] = ()
    udfa_signings: Tuple[UdfaSigningRecord, ...] = ()
    ota_reports: Tuple[OtaReport, ...] = ()
    position_battles: Tuple[PositionBattle, ...] = ()
    preseason_games: Tuple[PreseasonGameRecord, ...] = ()
    roster_excess: Tuple[Tuple[int, int], ...] = ()     # (team_id, players over the limit)
    final_cuts: Tuple[FinalCutRecord, ...] = ()
    owner_expectations: Tuple[OwnerExpectations, ...] = ()
    change_log: Tuple[ChangeLogEntry, ...] = ()

    def appended(self, field_name: str, items: Iterable) -> "OffseasonData":
        """New bag with items appended to one tuple field."""
        return replace(self, **{field_name: getattr(self, field_name) + tuple(items)})

    def with_log(self, phase: OffseasonPhase, action_type: str, message: str) -> "OffseasonData":
        return self.appended("change_log", [ChangeLogEntry(phase, action_type, message)])

    def excess_for(self, team_id: int) -> int:
        return dict(self.roster_excess).get(team_id, 0)

    def with_roster_excess(self, team_id: int, over: int) -> "OffseasonData":
        """New bag with one team's roster excess replaced; teams at or under the limit are dropped."""
        excess = dict(self.roster_excess)
        if over > 0:
            excess[team_id] = over
        else:
            excess.pop(team_id, None)
        return replace(self, roster_excess=tuple(sorted(excess.items())))


# Fields each phase's entry routine owns. Re-entering a phase resets only these.
PHASE_GENERATED_FIELDS: Dict[OffseasonPhase, Tuple[str, ...]] = {
    OffseasonPhase.SEASON_END: ("draft_order", "awards"),
    OffseasonPhase.COACHING_DECISIONS: ("hot_seat_team_ids",),
    OffseasonPhase.CONTRACT_MANAGEMENT: ("expiring_contracts",),
    OffseasonPhase.COMBINE: ("combine_results",),
    OffseasonPhase.FREE_AGENCY: ("free_agency_day",),
    OffseasonPhase.DRAFT: (),
    OffseasonPhase.UDFA: ("udfa_pool",),
    OffseasonPhase.OTAS: ("ota_reports",),
    OffseasonPhase.TRAINING_CAMP: ("position_battles",),
    OffseasonPhase.PRESEASON: ("preseason_games",),
    OffseasonPhase.FINAL_CUTS: ("roster_excess",),
    OffseasonPhase.SEASON_START: ("owner_expectations",),
}


@dataclass(frozen=True)
class OffseasonEvent:
    """Audit trail entry (phase_start, phase_complete, task_complete, action)."""
    event_type: str
    phase: OffseasonPhase
    message: str


@dataclass(frozen=True)
class OffseasonState:
    """
    State of one offseason cycle.

    Attributes:
        season: The season being wrapped up (the calendar year)
        current_phase: Phase currently open
        data: Phase artifacts for this cycle
        completed_tasks: (phase, completed task ids) pairs in the order phases were worked
        visited_phases: Phases entered so far, in order
        events: Audit trail
        is_complete: True once SeasonStart has been left and the calendar wrapped
    """
    season: int
    current_phase: OffseasonPhase = OffseasonPhase.SEASON_END
    data: OffseasonData = field(default_factory=OffseasonData)
    completed_tasks: Tuple[Tuple[OffseasonPhase, Tuple[str, ...]], ...] = ()
    visited_phases: Tuple[OffseasonPhase, ...] = ()
    events: Tuple[OffseasonEvent, ...] = ()
    is_complete: bool = False

    def completed_for(self, phase: OffseasonPhase) -> Tuple[str, ...]:
        for entry_phase, task_ids in self.completed_tasks:
            if entry_phase is phase:
                return task_ids
        return ()

    def is_task_complete(self, task_id: str, phase: Optional[OffseasonPhase] = None) -> bool:
        return task_id in self.completed_for(phase or self.current_phase)

    def with_task_completed(self, task_id: str) -> "OffseasonState":
        done = self.completed_for(self.current_phase)
        if task_id in done:
            return self
        entry = (self.current_phase, done + (task_id,))
        if not done:
            return replace(self, completed_tasks=self.completed_tasks + (entry,))
        completed = tuple(entry if phase is self.current_phase else (phase, task_ids)
                          for phase, task_ids in self.completed_tasks)
        return replace(self, completed_tasks=completed)

    def with_data(self, data: OffseasonData) -> "OffseasonState":
        return replace(self, data=data)

    def with_event(self, event_type: str, message: str) -> "OffseasonState":
        event = OffseasonEvent(event_type, self.current_phase, message)
        return replace(self, events=self.events + (event,))
