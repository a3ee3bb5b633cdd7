"""
Unit Tests for offseason actions

Tests every action handler through ``OffseasonOrchestrator.dispatch``:
- Coaching changes
- Contract decisions (cut, restructure, extension, tags)
- Free agency signings, the day counter and cap violations
- Draft selections, UDFA signings and final cuts
- Wire-format payload validation
"""

import pytest

from config.season_settings import SeasonSettings
from offseason.draft_order_service import ROOKIE_CONTRACT_YEARS, rookie_contract_salary
from offseason.offseason_data import CoachingChangeType, ContractDecisionType
from offseason.offseason_exceptions import (
    ActionValidationError, CapViolationError, MissingDependencyError
)
from offseason.offseason_orchestrator import OffseasonOrchestrator
from offseason.offseason_phases import OffseasonPhase
from offseason.phase_actions import (
    AdvanceFreeAgencyDay, ApplyCoachingChanges, ApplyContractDecision,
    ApplyDraftSelections, ApplyFinalCuts, ApplyFreeAgencySigning,
    ApplyUdfaSigning, CoachingChange, DraftPick, action_from_dict
)
from shared.league_exceptions import DataIntegrityError


ORCHESTRATOR = OffseasonOrchestrator()


def advance_to(league, phase):
    """Auto-complete and advance until ``phase`` is current."""
    while league.offseason.current_phase is not phase:
        league = ORCHESTRATOR.auto_complete_phase(league).state
        league = ORCHESTRATOR.advance_to_next_phase(league).state
    return league


@pytest.fixture(scope="module")
def coaching_league(offseason_league):
    return advance_to(offseason_league, OffseasonPhase.COACHING_DECISIONS)


@pytest.fixture(scope="module")
def contract_league(coaching_league):
    return advance_to(coaching_league, OffseasonPhase.CONTRACT_MANAGEMENT)


@pytest.fixture(scope="module")
def free_agency_league(contract_league):
    return advance_to(contract_league, OffseasonPhase.FREE_AGENCY)


@pytest.fixture(scope="module")
def draft_league(free_agency_league):
    return advance_to(free_agency_league, OffseasonPhase.DRAFT)


@pytest.fixture(scope="module")
def udfa_league(draft_league):
    return advance_to(draft_league, OffseasonPhase.UDFA)


@pytest.fixture(scope="module")
def final_cuts_league(udfa_league):
    return advance_to(udfa_league, OffseasonPhase.FINAL_CUTS)


def multi_year_player(team):
    return next(p for p in sorted(team.roster, key=lambda p: p.player_id)
                if p.contract is not None and p.contract.years_remaining > 1)


class TestCoachingChanges:

    def test_fire_then_hire(self, coaching_league):
        team = coaching_league.team(3)
        action = ApplyCoachingChanges((
            CoachingChange(3, CoachingChangeType.FIRE, team.head_coach.name),
            CoachingChange(3, CoachingChangeType.HIRE, "Pat Reilly", 12),
        ))
        result = ORCHESTRATOR.dispatch(coaching_league, action)

        assert result.success
        coach = result.state.team(3).head_coach
        assert (coach.name, coach.experience_years) == ("Pat Reilly", 12)
        assert len(result.state.offseason.data.coaching_changes) == 2
        assert result.state.offseason.is_task_complete("make_changes")
        assert len(result.changes) == 2

    def test_unknown_team(self, coaching_league):
        action = ApplyCoachingChanges((CoachingChange(99, CoachingChangeType.HIRE, "Nobody"),))
        with pytest.raises(DataIntegrityError):
            ORCHESTRATOR.dispatch(coaching_league, action)

    def test_hot_seat_generated(self, coaching_league):
        hot_seat = coaching_league.offseason.data.hot_seat_team_ids
        for team_id in hot_seat:
            assert coaching_league.team(team_id).record.win_percentage < SeasonSettings.HOT_SEAT_WIN_PERCENTAGE


class TestContractDecisions:

    def test_cut_moves_player_to_free_agency(self, contract_league):
        team = contract_league.team(5)
        player = multi_year_player(team)
        result = ORCHESTRATOR.dispatch(
            contract_league, ApplyContractDecision(5, player.player_id, ContractDecisionType.CUT)
        )

        assert result.success
        updated = result.state.team(5)
        assert updated.player(player.player_id) is None
        assert updated.dead_money == team.dead_money + player.contract.signing_bonus
        signed_off = result.state.free_agent(player.player_id)
        assert signed_off is not None and signed_off.contract is None
        record = result.state.offseason.data.contract_decisions[-1]
        assert record.cap_delta == player.contract.annual_salary - player.contract.signing_bonus

    def test_restructure_lowers_salary_and_adds_year(self, contract_league):
        team = contract_league.team(6)
        player = max(team.roster, key=lambda p: (p.cap_hit, -p.player_id))
        new_salary = player.contract.annual_salary // 2
        result = ORCHESTRATOR.dispatch(contract_league, ApplyContractDecision(
            6, player.player_id, ContractDecisionType.RESTRUCTURE, new_salary=new_salary
        ))

        contract = result.state.team(6).player(player.player_id).contract
        assert contract.annual_salary == new_salary
        assert contract.years_remaining == player.contract.years_remaining + 1
        assert result.state.offseason.data.contract_decisions[-1].cap_delta > 0

    def test_restructure_needs_lower_salary(self, contract_league):
        player = multi_year_player(contract_league.team(6))
        with pytest.raises(ActionValidationError):
            ORCHESTRATOR.dispatch(contract_league, ApplyContractDecision(
                6, player.player_id, ContractDecisionType.RESTRUCTURE,
                new_salary=player.contract.annual_salary + 1
            ))

    def test_extension_adds_years(self, contract_league):
        player = multi_year_player(contract_league.team(7))
        result = ORCHESTRATOR.dispatch(contract_league, ApplyContractDecision(
            7, player.player_id, ContractDecisionType.EXTENSION, new_years=2
        ))
        contract = result.state.team(7).player(player.player_id).contract
        assert contract.years_remaining == player.contract.years_remaining + 2

    def test_franchise_tag_expiring_player_once(self, contract_league):
        expiring = contract_league.offseason.data.expiring_contracts[0]
        action = ApplyContractDecision(expiring.team_id, expiring.player_id, ContractDecisionType.FRANCHISE_TAG)
        result = ORCHESTRATOR.dispatch(contract_league, action)

        assert result.success
        contract = result.state.team(expiring.team_id).player(expiring.player_id).contract
        assert contract.is_franchise_tagged
        assert contract.annual_salary == SeasonSettings.FRANCHISE_TAG_SALARY
        assert contract.years_remaining == 1

        with pytest.raises(ActionValidationError):
            ORCHESTRATOR.dispatch(result.state, action)

    def test_cannot_tag_player_under_contract(self, contract_league):
        player = multi_year_player(contract_league.team(8))
        with pytest.raises(ActionValidationError):
            ORCHESTRATOR.dispatch(contract_league, ApplyContractDecision(
                8, player.player_id, ContractDecisionType.TRANSITION_TAG
            ))

    def test_player_not_on_team(self, contract_league):
        player = multi_year_player(contract_league.team(8))
        with pytest.raises(DataIntegrityError):
            ORCHESTRATOR.dispatch(contract_league, ApplyContractDecision(
                9, player.player_id, ContractDecisionType.CUT
            ))

    def test_expiring_contracts_listed(self, contract_league):
        for expiring in contract_league.offseason.data.expiring_contracts:
            player = contract_league.team(expiring.team_id).player(expiring.player_id)
            assert player.contract.years_remaining <= 1


class TestFreeAgency:

    def test_day_counter_starts_at_one(self, free_agency_league):
        assert free_agency_league.offseason.data.free_agency_day == 1

    def test_signing(self, free_agency_league):
        player = free_agency_league.free_agents[0]
        result = ORCHESTRATOR.dispatch(free_agency_league, ApplyFreeAgencySigning(
            10, player.player_id, SeasonSettings.MINIMUM_SALARY * 2, 2
        ))

        assert result.success
        signed = result.state.team(10).player(player.player_id)
        assert signed.contract.annual_salary == SeasonSettings.MINIMUM_SALARY * 2
        assert result.state.free_agent(player.player_id) is None
        record = result.state.offseason.data.free_agent_signings[-1]
        assert (record.day, record.cap_delta) == (1, -SeasonSettings.MINIMUM_SALARY * 2)

    def test_cap_violation_is_returned(self, free_agency_league):
        player = free_agency_league.free_agents[0]
        result = ORCHESTRATOR.dispatch(free_agency_league, ApplyFreeAgencySigning(
            10, player.player_id, SeasonSettings.SALARY_CAP, 1
        ))

        assert not result.success
        assert isinstance(result.error, CapViolationError)
        assert result.error.team_id == 10
        assert result.state is free_agency_league

    def test_unknown_free_agent(self, free_agency_league):
        with pytest.raises(DataIntegrityError):
            ORCHESTRATOR.dispatch(free_agency_league, ApplyFreeAgencySigning(
                10, 1001, SeasonSettings.MINIMUM_SALARY, 1
            ))

    def test_below_minimum_salary(self, free_agency_league):
        player = free_agency_league.free_agents[0]
        with pytest.raises(ActionValidationError):
            ORCHESTRATOR.dispatch(free_agency_league, ApplyFreeAgencySigning(
                10, player.player_id, SeasonSettings.MINIMUM_SALARY - 1, 1
            ))

    def test_day_counter_capped(self, free_agency_league):
        result = ORCHESTRATOR.dispatch(free_agency_league, AdvanceFreeAgencyDay(days=100))
        assert result.state.offseason.data.free_agency_day == SeasonSettings.FREE_AGENCY_DAYS

    def test_dispatch_from_wire_format(self, free_agency_league):
        result = ORCHESTRATOR.dispatch(free_agency_league, {
            "type": "advance_free_agency_day", "phase": "free_agency", "days": 2,
        })
        assert result.success
        assert result.state.offseason.data.free_agency_day == 3


class TestDraft:

    def test_first_pick(self, draft_league):
        order = draft_league.offseason.data.draft_order
        prospect = max(draft_league.prospects, key=lambda p: (p.overall, -p.player_id))
        result = ORCHESTRATOR.dispatch(draft_league, ApplyDraftSelections((
            DraftPick(order[0], prospect.player_id),
        )))

        assert result.success
        rookie = result.state.team(order[0]).player(prospect.player_id)
        assert rookie.contract.annual_salary == rookie_contract_salary(1)
        assert rookie.contract.years_remaining == ROOKIE_CONTRACT_YEARS
        assert result.state.prospect(prospect.player_id) is None
        selection = result.state.offseason.data.draft_selections[0]
        assert (selection.overall_pick, selection.round_number, selection.pick_in_round) == (1, 1, 1)
        assert not result.state.offseason.is_task_complete("make_picks")

    def test_out_of_turn_pick(self, draft_league):
        order = draft_league.offseason.data.draft_order
        with pytest.raises(ActionValidationError):
            ORCHESTRATOR.dispatch(draft_league, ApplyDraftSelections((
                DraftPick(order[1], draft_league.prospects[0].player_id),
            )))

    def test_unknown_prospect(self, draft_league):
        order = draft_league.offseason.data.draft_order
        with pytest.raises(DataIntegrityError):
            ORCHESTRATOR.dispatch(draft_league, ApplyDraftSelections((DraftPick(order[0], 1),)))

    def test_draft_task_needs_every_pick(self, draft_league):
        result = ORCHESTRATOR.complete_task(draft_league, "make_picks")
        assert not result.success
        assert isinstance(result.error, MissingDependencyError)

    def test_auto_complete_makes_every_pick(self, udfa_league):
        data = udfa_league.offseason.data
        assert len(data.draft_selections) == 32 * SeasonSettings.DRAFT_ROUNDS
        assert [s.overall_pick for s in data.draft_selections] == list(range(1, 225))
        assert udfa_league.offseason.is_task_complete("make_picks", OffseasonPhase.DRAFT)


class TestUdfa:

    def test_pool_is_leftover_prospects(self, udfa_league):
        assert set(udfa_league.offseason.data.udfa_pool) == {p.player_id for p in udfa_league.prospects}

    def test_signing(self, udfa_league):
        player_id = udfa_league.offseason.data.udfa_pool[0]
        result = ORCHESTRATOR.dispatch(udfa_league, ApplyUdfaSigning(12, player_id))

        assert result.success
        assert result.state.team(12).player(player_id).contract.annual_salary == SeasonSettings.MINIMUM_SALARY
        assert player_id not in result.state.offseason.data.udfa_pool
        assert result.state.prospect(player_id) is None

    def test_player_outside_pool(self, udfa_league):
        with pytest.raises(DataIntegrityError):
            ORCHESTRATOR.dispatch(udfa_league, ApplyUdfaSigning(12, 101))


class TestFinalCuts:

    def test_excess_reported_on_entry(self, final_cuts_league):
        data = final_cuts_league.offseason.data
        for team in final_cuts_league.teams:
            over = team.roster_size - SeasonSettings.ROSTER_LIMIT
            assert data.excess_for(team.team_id) == max(0, over)
        assert data.roster_excess

    def test_cut_task_blocked_while_over_limit(self, final_cuts_league):
        result = ORCHESTRATOR.complete_task(final_cuts_league, "cut_to_53")
        assert not result.success
        assert isinstance(result.error, MissingDependencyError)

    def test_partial_cut_updates_excess(self, final_cuts_league):
        team_id, over = final_cuts_league.offseason.data.roster_excess[0]
        team = final_cuts_league.team(team_id)
        cut = sorted(team.roster, key=lambda p: p.player_id)[0]
        result = ORCHESTRATOR.dispatch(final_cuts_league, ApplyFinalCuts(team_id, (cut.player_id,)))

        assert result.success
        assert result.state.team(team_id).roster_size == team.roster_size - 1
        assert result.state.offseason.data.excess_for(team_id) == over - 1
        assert result.state.free_agent(cut.player_id) is not None


class TestActionPayloads:

    def test_round_trip(self):
        action = ApplyDraftSelections((DraftPick(4, 90001), DraftPick(9, 90002)))
        payload = action.to_dict()
        assert payload["type"] == "apply_draft_selections"
        assert payload["phase"] == "draft"
        assert action_from_dict(payload) == action

    def test_unknown_type(self):
        with pytest.raises(ActionValidationError):
            action_from_dict({"type": "trade_everyone", "phase": "draft"})

    def test_missing_phase(self):
        with pytest.raises(ActionValidationError):
            action_from_dict({"type": "advance_free_agency_day", "days": 1})

    def test_bad_field_value(self):
        with pytest.raises(ActionValidationError):
            action_from_dict({"type": "advance_free_agency_day", "phase": "free_agency", "days": "two"})

    def test_validation_error_is_value_error(self):
        with pytest.raises(ValueError):
            action_from_dict({"type": "apply_final_cuts", "phase": "final_cuts"})

    def test_enum_fields_from_values(self):
        action = action_from_dict({
            "type": "apply_contract_decision", "phase": "contract_management",
            "team_id": 1, "player_id": 101, "decision": "franchise_tag",
        })
        assert action == ApplyContractDecision(1, 101, ContractDecisionType.FRANCHISE_TAG)
