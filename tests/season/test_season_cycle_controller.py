"""
Integration Tests for SeasonCycleController

Drives one complete league year (regular season, playoffs, offseason) and
checks the hand-offs between phases:
- Regular season: 18 weeks, 272 games, calendar ends at Playoffs week 19
- Playoffs: 13 games and a champion
- Offseason: 12 phases, full draft, wrap into next year's Preseason
- Preseason: entering the regular season builds a new schedule
"""

import pytest

from season import SeasonConstants, SeasonCycleController
from season_calendar.calendar_models import Calendar, SeasonPhase
from shared.league_exceptions import InvalidTransitionError


@pytest.fixture(scope="module")
def completed_year(base_league):
    """Controller after one simulate_full_year call, plus its summary."""
    controller = SeasonCycleController(base_league, seed=7)
    summary = controller.simulate_full_year()
    return controller, summary


@pytest.fixture
def preseason_controller(completed_year):
    controller, _ = completed_year
    return SeasonCycleController(controller.state, seed=7)


class TestFullYear:

    def test_regular_season_summary(self, completed_year):
        _, summary = completed_year
        regular = summary["regular_season"]
        assert summary["season"] == 2025
        assert regular["weeks"] == 18
        assert regular["games_played"] == SeasonConstants.REGULAR_SEASON_GAME_COUNT
        assert regular["best_team_id"] in range(1, 33)

    def test_playoffs_summary(self, completed_year):
        _, summary = completed_year
        playoffs = summary["playoffs"]
        assert playoffs["games_played"] == SeasonConstants.PLAYOFF_GAME_COUNT
        assert playoffs["champion_id"] != playoffs["runner_up_id"]

    def test_offseason_summary(self, completed_year):
        _, summary = completed_year
        offseason = summary["offseason"]
        assert offseason["season"] == 2025
        assert offseason["phases_visited"] == 12
        assert offseason["steps"] == SeasonConstants.WEEKS_PER_YEAR - 26
        assert offseason["draft_selections"] == SeasonConstants.DRAFT_TOTAL_PICKS
        assert offseason["next_season"] == 2026

    def test_total_games_played(self, completed_year):
        controller, _ = completed_year
        assert controller.total_games_played == (
            SeasonConstants.REGULAR_SEASON_GAME_COUNT + SeasonConstants.PLAYOFF_GAME_COUNT
        )

    def test_wraps_into_next_preseason(self, completed_year):
        controller, _ = completed_year
        assert controller.calendar == Calendar(year=2026, week=1, phase=SeasonPhase.PRESEASON)
        assert controller.state.offseason is None
        assert controller.get_playoff_bracket() is None
        assert len(controller.state.offseason_history) == 1

    def test_rosters_within_limit(self, completed_year):
        controller, _ = completed_year
        assert all(team.roster_size <= 53 for team in controller.state.teams)

    def test_new_draft_class(self, completed_year):
        controller, _ = completed_year
        league = controller.state
        prospect_ids = [p.player_id for p in league.prospects]
        assert len(prospect_ids) == 256
        assert len(set(prospect_ids)) == 256

        taken = {p.player_id for team in league.teams for p in team.roster}
        taken.update(p.player_id for p in league.free_agents)
        assert not taken & set(prospect_ids)


def veteran_under_contract(league, team_id=1):
    """Best player on a team with at least three contract years left."""
    candidates = [p for p in league.team(team_id).roster if p.contract.years_remaining >= 3]
    return max(candidates, key=lambda p: (p.overall, -p.player_id))


class TestYearOverYear:

    @pytest.fixture(scope="class")
    def second_year(self, completed_year):
        controller, _ = completed_year
        follow_up = SeasonCycleController(controller.state, seed=7)
        follow_up.simulate_full_year()
        return follow_up.state

    def test_contracts_and_ages_advance_each_year(self, base_league, completed_year, second_year):
        start = veteran_under_contract(base_league)
        seasons = [base_league, completed_year[0].state, second_year]
        tracked = [league.team(1).player(start.player_id) for league in seasons]
        assert [p.contract.years_remaining for p in tracked] == [
            start.contract.years_remaining - n for n in range(3)
        ]
        assert [p.age for p in tracked] == [start.age + n for n in range(3)]

    def test_expiring_contracts_reach_free_agency(self, base_league, completed_year):
        league = completed_year[0].state
        expiring = [p.player_id for p in base_league.team(1).roster if p.contract.years_remaining == 1]
        assert expiring
        for player_id in expiring:
            assert league.team(1).player(player_id) is None
            assert league.free_agent(player_id).contract is None

    def test_dead_money_does_not_carry_over(self, completed_year, second_year):
        for league in (completed_year[0].state, second_year):
            assert all(team.dead_money == 0 for team in league.teams)

    def test_second_year_wraps(self, second_year):
        assert second_year.calendar == Calendar(2027, 1, SeasonPhase.PRESEASON)
        assert len(second_year.offseason_history) == 2


class TestPreseason:

    def test_preseason_weeks_play_no_games(self, preseason_controller):
        for week in (2, 3, 4):
            summary = preseason_controller.advance_week()
            assert summary["games_played"] == 0
            assert not summary["phase_transition"]
            assert preseason_controller.calendar.week == week

    def test_entering_regular_season_builds_schedule(self, preseason_controller):
        for _ in range(3):
            preseason_controller.advance_week()
        summary = preseason_controller.advance_week()

        assert summary["phase_transition"]
        assert preseason_controller.calendar == Calendar(2026, 1, SeasonPhase.REGULAR_SEASON)
        schedule = preseason_controller.state.schedule
        assert schedule.season == 2026
        assert schedule.game_count == 272
        assert all(team.record.games_played == 0 for team in preseason_controller.state.teams)

    def test_get_current_state(self, preseason_controller):
        state = preseason_controller.get_current_state()
        assert state["phase"] == SeasonPhase.PRESEASON.value
        assert state["season"] == 2026
        assert state["games_scheduled"] == 0
        assert state["expected_games"] == 272
        assert state["offseason_phase"] is None
        assert state["total_games_played"] == 0


class TestPhaseGuards:

    def test_playoffs_require_playoff_phase(self, preseason_controller):
        with pytest.raises(InvalidTransitionError):
            preseason_controller.simulate_playoffs()

    def test_offseason_requires_offseason_phase(self, base_league):
        with pytest.raises(InvalidTransitionError):
            SeasonCycleController(base_league).run_offseason()

    def test_regular_season_rejected_in_playoffs(self, league_after_regular_season):
        with pytest.raises(InvalidTransitionError):
            SeasonCycleController(league_after_regular_season).simulate_regular_season()


class TestOffseasonStepping:

    def test_first_offseason_step_initializes(self, league_after_super_bowl):
        controller = SeasonCycleController(league_after_super_bowl, seed=7)
        summary = controller.advance_week()
        assert summary["offseason_phase"] == "season_end"
        assert summary["games_played"] == 0
        assert controller.state.offseason.current_phase.value == "coaching_decisions"
        assert controller.calendar.offseason_subphase == 2


class TestSeasonConstants:

    def test_derived_counts(self):
        assert SeasonConstants.REGULAR_SEASON_GAME_COUNT == 272
        assert SeasonConstants.PLAYOFF_GAME_COUNT == 13
        assert SeasonConstants.DRAFT_TOTAL_PICKS == 224
        assert SeasonConstants.WEEKS_PER_YEAR == 38
        assert SeasonConstants.BYE_WEEKS_PER_TEAM == 1
