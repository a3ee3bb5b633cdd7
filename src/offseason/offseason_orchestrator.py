"""
Offseason Orchestrator

Twelve-phase state machine that runs between the Super Bowl and the next
preseason. Every operation takes a league snapshot and returns a
``PhaseResult`` holding the new snapshot; nothing is modified in place.

Lifecycle:
    initialize            -> SeasonEnd entered, draft order and awards generated
    enter_phase           -> (re)generate the current phase's data
    dispatch              -> apply a typed action to the current phase
    complete_task         -> tick a checklist item
    advance_to_next_phase -> next phase (or wrap the calendar past SeasonStart)

Error handling:
    WrongPhaseError, MissingDependencyError and CapViolationError are
    expected user-facing conditions and come back in ``PhaseResult.error``
    with the snapshot unchanged. InvalidTransitionError (caller sequencing
    bug) and DataIntegrityError (unknown team/player) are raised.

Usage:
    orchestrator = OffseasonOrchestrator()
    result = orchestrator.initialize(league)
    result = orchestrator.dispatch(result.state, ApplyCoachingChanges(...))
    if not result.success:
        print(result.error.message)
"""

import logging
from dataclasses import dataclass, replace
from typing import Callable, Dict, List, Optional, Tuple, Type, Union

from config.season_settings import SeasonSettings
from salary_cap.cap_calculator import CapCalculator
from season_calendar.calendar_clock import CalendarClock
from season_calendar.calendar_models import SeasonPhase
from shared.game_models import Schedule
from shared.league_exceptions import DataIntegrityError, InvalidTransitionError
from shared.league_models import Coach, Contract, Player, Team, TeamRecord
from shared.league_state import LeagueState
from standings.standings_engine import Comparator, default_comparator
from .draft_order_service import ROOKIE_CONTRACT_YEARS, DraftOrderService, rookie_contract_salary
from .offseason_data import (
    PHASE_GENERATED_FIELDS, CoachingChangeRecord, CoachingChangeType,
    ContractDecisionRecord, ContractDecisionType, DraftSelectionRecord,
    FinalCutRecord, FreeAgentSigningRecord, OffseasonData, OffseasonState,
    UdfaSigningRecord
)
from .offseason_exceptions import (
    ActionValidationError, CapViolationError, MissingDependencyError,
    OffseasonException, WrongPhaseError
)
from .offseason_phases import PHASE_ORDER, OffseasonPhase
from .phase_actions import (
    ACTION_CLASSES, AdvanceFreeAgencyDay, ApplyCoachingChanges,
    ApplyContractDecision, ApplyDraftSelections, ApplyFinalCuts,
    ApplyFreeAgencySigning, ApplyUdfaSigning, DraftPick, OffseasonAction,
    action_from_dict
)
from .phase_generators import PhaseDataGenerator
from .season_rollover import roll_over_league
from .phase_tasks import (
    DRAFT_COMPLETE, PHASE_TASKS, ROSTERS_WITHIN_LIMIT, PhaseTask, TaskKind,
    find_task, required_task_ids, tasks_for
)


logger = logging.getLogger(__name__)

UDFA_CONTRACT_YEARS = 2

# A handler returns the updated league (offseason untouched), the updated
# offseason data and the change-log lines describing what happened.
HandlerResult = Tuple[LeagueState, OffseasonData, List[str]]


@dataclass(frozen=True)
class PhaseResult:
    """
    Outcome of an orchestrator operation.

    Attributes:
        success: False when a recoverable error was returned
        state: New league snapshot (the input snapshot on failure)
        changes: Human-readable description of what changed
        error: WrongPhaseError, MissingDependencyError or CapViolationError
    """
    success: bool
    state: LeagueState
    changes: Tuple[str, ...] = ()
    error: Optional[OffseasonException] = None

    @property
    def offseason(self) -> Optional[OffseasonState]:
        return self.state.offseason

    @classmethod
    def failure(cls, state: LeagueState, error: OffseasonException) -> "PhaseResult":
        return cls(success=False, state=state, error=error)


def get_progress(offseason: OffseasonState) -> float:
    """
    Percent of the cycle completed: (phase_index - 1) / 12 * 100.

    Returns 100.0 once the cycle has wrapped into the next preseason.
    """
    if offseason.is_complete:
        return 100.0
    return (offseason.current_phase.index - 1) / len(PHASE_ORDER) * 100


class OffseasonOrchestrator:
    """
    Drives one offseason cycle over immutable league snapshots.

    Collaborators are injected so callers can swap the standings
    comparator, the cap rules or the clock.
    """

    def __init__(
        self,
        comparator: Comparator = default_comparator,
        cap_calculator: Optional[CapCalculator] = None,
        clock: Optional[CalendarClock] = None
    ):
        self.comparator = comparator
        self.cap_calculator = cap_calculator or CapCalculator()
        self.clock = clock or CalendarClock()
        self.generator = PhaseDataGenerator(comparator)
        self.draft_order_service = DraftOrderService(comparator)

    # ========================================================================
    # LIFECYCLE
    # ========================================================================

    def initialize(self, league: LeagueState) -> PhaseResult:
        """
        Start the offseason for a fully resolved season.

        Accepts a league at Offseason sub-phase 1, or at Playoffs week 22
        with the Super Bowl complete (the calendar is advanced).

        Raises:
            InvalidTransitionError: Games remain unplayed, the Super Bowl is
                not complete, the calendar is elsewhere, or an offseason is
                already running
        """
        if league.offseason is not None:
            raise InvalidTransitionError(
                f"Offseason for {league.offseason.season} is already running",
                operation="initialize_offseason", phase=str(league.offseason.current_phase)
            )

        unplayed = [game.game_id for game in league.schedule.games if not game.is_complete]
        if unplayed:
            raise InvalidTransitionError(
                f"Cannot start the offseason with {len(unplayed)} unplayed games",
                operation="initialize_offseason", first_unplayed=unplayed[0]
            )

        bracket = league.playoff_bracket
        if bracket is None or not bracket.is_complete:
            raise InvalidTransitionError(
                "Cannot start the offseason before the Super Bowl is complete",
                operation="initialize_offseason", season=league.season
            )

        calendar = league.calendar
        if calendar.phase is SeasonPhase.PLAYOFFS and calendar.week == SeasonSettings.LAST_PLAYOFF_WEEK:
            calendar = self.clock.advance(calendar)
        elif not (calendar.phase is SeasonPhase.OFFSEASON and calendar.offseason_subphase == 1):
            raise InvalidTransitionError(
                f"Offseason cannot start at {calendar}",
                operation="initialize_offseason", calendar=str(calendar)
            )

        offseason = OffseasonState(
            season=league.season,
            visited_phases=(OffseasonPhase.SEASON_END,),
        ).with_event("phase_start", f"{league.season} offseason begins: {OffseasonPhase.SEASON_END}")

        started = replace(league, calendar=calendar, offseason=offseason)
        logger.info(f"Offseason initialized for season {league.season}")

        result = self.enter_phase(started, OffseasonPhase.SEASON_END)
        if not result.success:
            return PhaseResult.failure(league, result.error)
        return result

    def enter_phase(self, league: LeagueState, phase: OffseasonPhase) -> PhaseResult:
        """
        Generate phase-scoped data for the current phase.

        Idempotent: re-entering overwrites only this phase's generated
        fields, so earlier phases' data and dispatched records survive.

        Returns:
            PhaseResult; WrongPhaseError if ``phase`` is not current,
            MissingDependencyError if required data is missing
        """
        offseason = self._require_offseason(league, "enter_phase")

        if phase is not offseason.current_phase:
            error = WrongPhaseError(str(phase), str(offseason.current_phase), "enter_phase")
            logger.warning(f"Rejected phase entry: {error.message}")
            return PhaseResult.failure(league, error)

        try:
            updates = self.generator.generate(phase, league, offseason.data)
        except MissingDependencyError as e:
            logger.warning(f"Cannot enter {phase}: {e.message}")
            return PhaseResult.failure(league, e)

        empty = OffseasonData()
        generated = {name: getattr(empty, name) for name in PHASE_GENERATED_FIELDS[phase]}
        generated.update(updates)
        data = replace(offseason.data, **generated)

        changes = tuple(f"{phase}: generated {name}" for name in sorted(generated))
        logger.debug(f"Entered {phase} ({len(generated)} generated fields)")
        return PhaseResult(True, replace(league, offseason=offseason.with_data(data)), changes)

    def dispatch(
        self,
        league: LeagueState,
        action: Union[OffseasonAction, Dict]
    ) -> PhaseResult:
        """
        Apply an action to the current phase.

        Args:
            league: Current league snapshot
            action: Typed action, or its wire-format dict

        Returns:
            PhaseResult. Actions targeting another phase return
            WrongPhaseError and leave the snapshot unchanged; cap failures
            return CapViolationError.

        Raises:
            ActionValidationError: Malformed payload or illegal field values
            DataIntegrityError: Unknown team or player
        """
        offseason = self._require_offseason(league, "dispatch")
        if isinstance(action, dict):
            action = action_from_dict(action)

        if action.phase is not offseason.current_phase:
            error = WrongPhaseError(str(action.phase), str(offseason.current_phase), action.action_type)
            logger.warning(f"Rejected {action.action_type}: {error.message}")
            return PhaseResult.failure(league, error)

        handler = ACTION_HANDLERS[type(action)]
        try:
            updated, data, changes = handler(self, league, action)
        except (CapViolationError, MissingDependencyError) as e:
            logger.warning(f"Rejected {action.action_type}: {e.message}")
            return PhaseResult.failure(league, e)

        for line in changes:
            data = data.with_log(offseason.current_phase, action.action_type, line)
        offseason = offseason.with_data(data).with_event(
            "action", f"{action.action_type}: {len(changes)} change(s)"
        )

        if action.COMPLETES_TASK and not offseason.is_task_complete(action.COMPLETES_TASK):
            task = find_task(offseason.current_phase, action.COMPLETES_TASK)
            if task is not None and self._task_condition_holds(task, updated, data):
                offseason = self._mark_task(offseason, task)

        logger.info(f"{offseason.current_phase}: applied {action.action_type}")
        return PhaseResult(True, replace(updated, offseason=offseason), tuple(changes))

    def complete_task(self, league: LeagueState, task_id: str) -> PhaseResult:
        """
        Mark a checklist task complete.

        Returns:
            PhaseResult; WrongPhaseError if the task belongs to another
            phase, MissingDependencyError if a validated task's condition
            does not hold yet

        Raises:
            ActionValidationError: If no phase defines ``task_id``
        """
        offseason = self._require_offseason(league, "complete_task")
        phase = offseason.current_phase

        task = find_task(phase, task_id)
        if task is None:
            owner = next((p for p, tasks in PHASE_TASKS.items()
                          if any(t.task_id == task_id for t in tasks)), None)
            if owner is None:
                raise ActionValidationError(f"Unknown offseason task {task_id!r}")
            return PhaseResult.failure(league, WrongPhaseError(str(owner), str(phase), task_id))

        if offseason.is_task_complete(task_id):
            return PhaseResult(True, league)

        if not self._task_condition_holds(task, league, offseason.data):
            error = MissingDependencyError(
                f"Task {task_id} cannot be completed: {task.condition} does not hold",
                phase=str(phase), dependency=task.condition,
            )
            logger.warning(error.message)
            return PhaseResult.failure(league, error)

        offseason = self._mark_task(offseason, task)
        return PhaseResult(True, replace(league, offseason=offseason), (f"Completed: {task.name}",))

    def can_advance(self, league: LeagueState) -> Tuple[bool, str]:
        """
        Check whether the current phase's required tasks are done.

        Returns:
            (can_advance, reason)
        """
        offseason = self._require_offseason(league, "can_advance")
        missing = [
            task_id for task_id in required_task_ids(offseason.current_phase)
            if not offseason.is_task_complete(task_id)
        ]
        if missing:
            return False, f"Incomplete required tasks in {offseason.current_phase}: {', '.join(missing)}"
        return True, "All required tasks complete"

    def advance_to_next_phase(self, league: LeagueState) -> PhaseResult:
        """
        Leave the current phase.

        Moves to the next phase, advances the calendar sub-phase and runs the
        next phase's entry. Leaving SeasonStart wraps the calendar into the
        next year's Preseason, archives the cycle and resets the season.

        Raises:
            InvalidTransitionError: Required tasks are incomplete
        """
        offseason = self._require_offseason(league, "advance_to_next_phase")
        ready, reason = self.can_advance(league)
        if not ready:
            raise InvalidTransitionError(reason, operation="advance_to_next_phase",
                                         phase=str(offseason.current_phase))

        current = offseason.current_phase
        offseason = offseason.with_event("phase_complete", f"{current} complete")
        calendar = self.clock.advance(league.calendar)

        next_phase = current.next_phase
        if next_phase is None:
            return self._finish_cycle(league, offseason, calendar)

        if calendar.offseason_subphase != next_phase.index:
            raise DataIntegrityError(
                f"Calendar sub-phase {calendar.offseason_subphase} out of sync with {next_phase}",
                operation="advance_to_next_phase", calendar=str(calendar)
            )

        offseason = replace(
            offseason,
            current_phase=next_phase,
            visited_phases=offseason.visited_phases + (next_phase,),
        ).with_event("phase_start", f"{next_phase} begins")

        result = self.enter_phase(replace(league, calendar=calendar, offseason=offseason), next_phase)
        if not result.success:
            return PhaseResult.failure(league, result.error)

        logger.info(f"Offseason advanced: {current} -> {next_phase}")
        return PhaseResult(True, result.state, (f"{current} -> {next_phase}",) + result.changes)

    def auto_complete_phase(self, league: LeagueState) -> PhaseResult:
        """
        Finish the current phase for every team.

        Draft: remaining picks take the best available prospect.
        FinalCuts: rosters over the limit release their lowest-rated players.
        Then every task in the phase is marked complete.
        """
        offseason = self._require_offseason(league, "auto_complete_phase")
        phase = offseason.current_phase
        changes: List[str] = []

        if phase is OffseasonPhase.DRAFT:
            picks = self._best_available_picks(league, offseason.data)
            if picks:
                result = self.dispatch(league, ApplyDraftSelections(tuple(picks)))
                if not result.success:
                    return result
                league = result.state
                changes.extend(result.changes)

        elif phase is OffseasonPhase.FINAL_CUTS:
            for team in league.teams:
                excess = team.roster_size - SeasonSettings.ROSTER_LIMIT
                if excess <= 0:
                    continue
                cuts = sorted(team.roster, key=lambda p: (p.overall, -p.player_id))[:excess]
                result = self.dispatch(league, ApplyFinalCuts(team.team_id, tuple(p.player_id for p in cuts)))
                if not result.success:
                    return result
                league = result.state
                changes.extend(result.changes)

        for task in tasks_for(phase):
            result = self.complete_task(league, task.task_id)
            if not result.success:
                return result
            league = result.state
            changes.extend(result.changes)

        logger.debug(f"Auto-completed {phase}")
        return PhaseResult(True, league, tuple(changes))

    def simulate_remaining(self, league: LeagueState) -> LeagueState:
        """
        Auto-complete and advance until the calendar wraps into Preseason.

        Raises:
            InvalidTransitionError: No offseason is running
            OffseasonException: If an automatic step is rejected
        """
        self._require_offseason(league, "simulate_remaining")
        while league.offseason is not None:
            result = self.auto_complete_phase(league)
            if not result.success:
                raise result.error
            result = self.advance_to_next_phase(result.state)
            if not result.success:
                raise result.error
            league = result.state
        return league

    # ========================================================================
    # ACTION HANDLERS
    # ========================================================================

    def _apply_coaching_changes(self, league: LeagueState, action: ApplyCoachingChanges) -> HandlerResult:
        data = league.offseason.data
        records = []
        changes = []
        for change in action.changes:
            team = league.team(change.team_id)
            if change.change_type in (CoachingChangeType.HIRE, CoachingChangeType.PROMOTE):
                team = replace(team, head_coach=Coach(change.coach_name, change.experience_years))
                changes.append(f"{team.full_name} {change.change_type.value}s {change.coach_name} as head coach")
            else:
                previous = team.head_coach.name if team.head_coach else change.coach_name
                team = replace(team, head_coach=None)
                changes.append(f"{team.full_name} {change.change_type.value}s head coach {previous}")
            league = league.with_team(team)
            records.append(CoachingChangeRecord(
                change.team_id, change.change_type, change.coach_name, change.experience_years
            ))
        return league, data.appended("coaching_changes", records), changes

    def _apply_contract_decision(self, league: LeagueState, action: ApplyContractDecision) -> HandlerResult:
        data = league.offseason.data
        team = league.team(action.team_id)
        player = self._rostered_player(team, action.player_id)
        contract = player.contract
        decision = action.decision

        if decision is ContractDecisionType.CUT:
            savings, dead_money = self.cap_calculator.calculate_release(player)
            team = replace(team.without_players([player.player_id]), dead_money=team.dead_money + dead_money)
            league = replace(league.with_team(team),
                             free_agents=league.free_agents + (replace(player, contract=None),))
            record = ContractDecisionRecord(team.team_id, player.player_id, decision, savings)
            message = f"{team.full_name} cut {player.name} (saves ${savings:,}, dead money ${dead_money:,})"
            return league, data.appended("contract_decisions", [record]), [message]

        if decision is ContractDecisionType.RESTRUCTURE:
            if action.new_salary is None or not SeasonSettings.MINIMUM_SALARY <= action.new_salary < contract.annual_salary:
                raise ActionValidationError(
                    f"Restructure needs a new_salary between the minimum and ${contract.annual_salary:,}",
                    payload=action.to_dict()
                )
            new_contract = replace(
                contract,
                annual_salary=action.new_salary,
                signing_bonus=contract.signing_bonus + contract.annual_salary - action.new_salary,
                years_remaining=contract.years_remaining + 1,
            )
        elif decision is ContractDecisionType.EXTENSION:
            if action.new_years is None or action.new_years < 1:
                raise ActionValidationError("Extension needs new_years >= 1", payload=action.to_dict())
            salary = action.new_salary if action.new_salary is not None else contract.annual_salary
            if salary < SeasonSettings.MINIMUM_SALARY:
                raise ActionValidationError(f"Salary ${salary:,} is below the minimum", payload=action.to_dict())
            new_contract = replace(contract, annual_salary=salary,
                                   years_remaining=contract.years_remaining + action.new_years)
        else:
            if contract.years_remaining > 1:
                raise ActionValidationError(
                    f"{player.name} is under contract for {contract.years_remaining} more years and cannot be tagged",
                    payload=action.to_dict()
                )
            already_tagged = any(
                d.team_id == team.team_id and d.decision is decision for d in data.contract_decisions
            )
            if already_tagged:
                raise ActionValidationError(
                    f"{team.full_name} already used its {decision.value.replace('_', ' ')} this offseason",
                    payload=action.to_dict()
                )
            is_franchise = decision is ContractDecisionType.FRANCHISE_TAG
            salary = SeasonSettings.FRANCHISE_TAG_SALARY if is_franchise else SeasonSettings.TRANSITION_TAG_SALARY
            new_contract = replace(contract, annual_salary=salary, years_remaining=1,
                                   is_franchise_tagged=is_franchise)

        cap_delta = self.cap_calculator.contract_cap_delta(contract, new_contract)
        self._check_cap(team, cap_delta)

        team = team.with_players_replaced({player.player_id: replace(player, contract=new_contract)})
        record = ContractDecisionRecord(
            team.team_id, player.player_id, decision, cap_delta,
            new_contract.annual_salary, new_contract.years_remaining
        )
        message = (f"{team.full_name} {decision.value.replace('_', ' ')} {player.name}: "
                   f"${new_contract.annual_salary:,} x {new_contract.years_remaining} (cap {cap_delta:+,})")
        return league.with_team(team), data.appended("contract_decisions", [record]), [message]

    def _apply_free_agency_signing(self, league: LeagueState, action: ApplyFreeAgencySigning) -> HandlerResult:
        data = league.offseason.data
        team = league.team(action.team_id)
        player = league.free_agent(action.player_id)
        if player is None:
            raise DataIntegrityError(f"Player {action.player_id} is not a free agent",
                                     operation="free_agency_signing", player_id=action.player_id)
        if action.annual_salary < SeasonSettings.MINIMUM_SALARY or action.years < 1:
            raise ActionValidationError("Signing needs at least the minimum salary and one year",
                                        payload=action.to_dict())

        cap_delta = -action.annual_salary
        self._check_cap(team, cap_delta)

        signed = replace(player, contract=Contract(action.annual_salary, action.years))
        team = team.with_roster(team.roster + (signed,))
        league = replace(
            league.with_team(team),
            free_agents=tuple(p for p in league.free_agents if p.player_id != player.player_id),
        )
        record = FreeAgentSigningRecord(team.team_id, player.player_id, action.annual_salary,
                                        action.years, data.free_agency_day, cap_delta)
        message = (f"Day {data.free_agency_day}: {team.full_name} sign {player.position} {player.name} "
                   f"(${action.annual_salary:,} x {action.years})")
        return league, data.appended("free_agent_signings", [record]), [message]

    def _advance_free_agency_day(self, league: LeagueState, action: AdvanceFreeAgencyDay) -> HandlerResult:
        data = league.offseason.data
        if action.days < 1:
            raise ActionValidationError("days must be at least 1", payload=action.to_dict())
        day = min(SeasonSettings.FREE_AGENCY_DAYS, data.free_agency_day + action.days)
        return league, replace(data, free_agency_day=day), [f"Free agency day {day}"]

    def _apply_draft_selections(self, league: LeagueState, action: ApplyDraftSelections) -> HandlerResult:
        data = league.offseason.data
        if not data.draft_order:
            raise MissingDependencyError("No draft order has been generated",
                                         phase=str(OffseasonPhase.DRAFT), dependency="draft_order")

        total_picks = len(data.draft_order) * SeasonSettings.DRAFT_ROUNDS
        prospects = {p.player_id: p for p in league.prospects}
        teams = {team.team_id: team for team in league.teams}
        records = []
        changes = []

        for selection in action.selections:
            overall = len(data.draft_selections) + len(records) + 1
            if overall > total_picks:
                raise ActionValidationError("The draft is already complete", payload=action.to_dict())
            pick = self.draft_order_service.pick_for(data.draft_order, overall)
            if selection.team_id != pick.team_id:
                raise ActionValidationError(
                    f"Pick #{overall} belongs to Team {pick.team_id}, not Team {selection.team_id}",
                    payload=action.to_dict()
                )
            if selection.team_id not in teams:
                raise DataIntegrityError(f"Team {selection.team_id} not found",
                                         operation="draft_selection", team_id=selection.team_id)
            prospect = prospects.pop(selection.player_id, None)
            if prospect is None:
                raise DataIntegrityError(f"Player {selection.player_id} is not an available prospect",
                                         operation="draft_selection", player_id=selection.player_id)

            rookie = replace(prospect, contract=Contract(rookie_contract_salary(pick.round_number),
                                                         ROOKIE_CONTRACT_YEARS))
            team = teams[pick.team_id]
            teams[pick.team_id] = team.with_roster(team.roster + (rookie,))
            records.append(DraftSelectionRecord(overall, pick.round_number, pick.pick_in_round,
                                                pick.team_id, prospect.player_id))
            changes.append(f"Round {pick.round_number}, Pick {pick.pick_in_round}: "
                           f"{team.full_name} select {prospect.position} {prospect.name}")

        league = replace(
            league.with_teams(teams.values()),
            prospects=tuple(p for p in league.prospects if p.player_id in prospects),
        )
        return league, data.appended("draft_selections", records), changes

    def _apply_udfa_signing(self, league: LeagueState, action: ApplyUdfaSigning) -> HandlerResult:
        data = league.offseason.data
        team = league.team(action.team_id)
        prospect = league.prospect(action.player_id)
        if prospect is None or action.player_id not in data.udfa_pool:
            raise DataIntegrityError(f"Player {action.player_id} is not in the UDFA pool",
                                     operation="udfa_signing", player_id=action.player_id)

        salary = SeasonSettings.MINIMUM_SALARY
        self._check_cap(team, -salary)

        signed = replace(prospect, contract=Contract(salary, UDFA_CONTRACT_YEARS))
        team = team.with_roster(team.roster + (signed,))
        league = replace(
            league.with_team(team),
            prospects=tuple(p for p in league.prospects if p.player_id != prospect.player_id),
        )
        data = replace(
            data.appended("udfa_signings", [UdfaSigningRecord(team.team_id, prospect.player_id, salary)]),
            udfa_pool=tuple(pid for pid in data.udfa_pool if pid != prospect.player_id),
        )
        return league, data, [f"{team.full_name} sign undrafted {prospect.position} {prospect.name}"]

    def _apply_final_cuts(self, league: LeagueState, action: ApplyFinalCuts) -> HandlerResult:
        data = league.offseason.data
        team = league.team(action.team_id)
        player_ids = list(dict.fromkeys(action.player_ids))
        released = [self._rostered_player(team, pid) for pid in player_ids]

        records = []
        changes = []
        dead_money = 0
        for player in released:
            _savings, dead = self.cap_calculator.calculate_release(player)
            dead_money += dead
            records.append(FinalCutRecord(team.team_id, player.player_id, dead))
            changes.append(f"{team.full_name} release {player.position} {player.name}")

        team = replace(team.without_players(player_ids), dead_money=team.dead_money + dead_money)
        league = replace(
            league.with_team(team),
            free_agents=league.free_agents + tuple(replace(p, contract=None) for p in released),
        )

        data = data.appended("final_cuts", records).with_roster_excess(
            team.team_id, team.roster_size - SeasonSettings.ROSTER_LIMIT
        )
        return league, data, changes

    # ========================================================================
    # HELPERS
    # ========================================================================

    @staticmethod
    def _require_offseason(league: LeagueState, operation: str) -> OffseasonState:
        if league.offseason is None:
            raise InvalidTransitionError("No offseason is running", operation=operation,
                                         calendar=str(league.calendar))
        return league.offseason

    @staticmethod
    def _rostered_player(team: Team, player_id: int) -> Player:
        player = team.player(player_id)
        if player is None:
            raise DataIntegrityError(f"Player {player_id} is not on {team.full_name}",
                                     operation="lookup_player", team_id=team.team_id, player_id=player_id)
        if player.contract is None:
            raise DataIntegrityError(f"Player {player_id} has no contract",
                                     operation="lookup_player", team_id=team.team_id, player_id=player_id)
        return player

    def _check_cap(self, team: Team, cap_delta: int) -> None:
        check = self.cap_calculator.validate_transaction(team, cap_delta)
        if not check.passed:
            raise CapViolationError(check.message, team.team_id, cap_delta, check.cap_space_before)

    def _task_condition_holds(self, task: PhaseTask, league: LeagueState, data: OffseasonData) -> bool:
        if task.kind is not TaskKind.VALIDATE:
            return True
        if task.condition == DRAFT_COMPLETE:
            total_picks = len(data.draft_order) * SeasonSettings.DRAFT_ROUNDS
            return len(data.draft_selections) >= total_picks or not league.prospects
        if task.condition == ROSTERS_WITHIN_LIMIT:
            return all(team.roster_size <= SeasonSettings.ROSTER_LIMIT for team in league.teams)
        raise ValueError(f"Unknown task condition: {task.condition}")

    @staticmethod
    def _mark_task(offseason: OffseasonState, task: PhaseTask) -> OffseasonState:
        return offseason.with_task_completed(task.task_id).with_event("task_complete", task.name)

    def _best_available_picks(self, league: LeagueState, data: OffseasonData) -> List[DraftPick]:
        if not data.draft_order:
            return []
        total_picks = len(data.draft_order) * SeasonSettings.DRAFT_ROUNDS
        board = sorted(league.prospects, key=lambda p: (-p.overall, p.player_id))
        picks = []
        overall = len(data.draft_selections) + 1
        while overall <= total_picks and board:
            pick = self.draft_order_service.pick_for(data.draft_order, overall)
            picks.append(DraftPick(pick.team_id, board.pop(0).player_id))
            overall += 1
        return picks

    def _finish_cycle(self, league: LeagueState, offseason: OffseasonState, calendar) -> PhaseResult:
        """
        Wrap into next year's Preseason and archive the cycle.

        Contracts play out a year (expired players become free agents),
        dead money is cleared, players age, and records, schedule and
        bracket are reset.
        """
        if calendar.phase is not SeasonPhase.PRESEASON:
            raise DataIntegrityError(
                f"Leaving {offseason.current_phase} produced {calendar}, expected Preseason",
                operation="finish_offseason"
            )

        rollover = roll_over_league(league, offseason.data)
        league = rollover.state
        archived = replace(offseason, is_complete=True)
        teams = tuple(replace(team, record=TeamRecord()) for team in league.teams)
        league = replace(
            league,
            calendar=calendar,
            teams=teams,
            schedule=Schedule(season=calendar.year),
            playoff_bracket=None,
            offseason=None,
            offseason_history=league.offseason_history + (archived,),
        )
        logger.info(f"Offseason {archived.season} complete; calendar now {calendar}")
        changes = (
            f"{archived.season} offseason complete",
            f"{len(rollover.expired_player_ids)} contracts expired",
            f"Now {calendar}",
        )
        return PhaseResult(True, league, changes)


ACTION_HANDLERS: Dict[Type[OffseasonAction], Callable[..., HandlerResult]] = {
    ApplyCoachingChanges: OffseasonOrchestrator._apply_coaching_changes,
    ApplyContractDecision: OffseasonOrchestrator._apply_contract_decision,
    ApplyFreeAgencySigning: OffseasonOrchestrator._apply_free_agency_signing,
    AdvanceFreeAgencyDay: OffseasonOrchestrator._advance_free_agency_day,
    ApplyDraftSelections: OffseasonOrchestrator._apply_draft_selections,
    ApplyUdfaSigning: OffseasonOrchestrator._apply_udfa_signing,
    ApplyFinalCuts: OffseasonOrchestrator._apply_final_cuts,
}

_unhandled = [cls.__name__ for cls in ACTION_CLASSES if cls not in ACTION_HANDLERS]
if _unhandled:
    raise TypeError(f"Offseason actions without a dispatch handler: {_unhandled}")
