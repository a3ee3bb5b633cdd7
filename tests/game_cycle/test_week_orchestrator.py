"""
Unit Tests for WeekOrchestrator

Tests week simulation including:
- Folding a single result into both teams' records
- Idempotent re-application of results
- A full regular season (17 games per team) rolling into the playoffs
- Playoff rounds scheduled one at a time through the Super Bowl
- Trade offer expiry and deterministic replays
"""

import copy
from dataclasses import replace

import pytest

from game_cycle import InstantGameSimulator, SimulatedGame, WeekOrchestrator, simulate_week
from game_cycle.models.injury_models import InjuryReport
from playoff_system import PlayoffRound
from season_calendar import Calendar, SeasonPhase
from shared.league_exceptions import DataIntegrityError, InvalidTransitionError
from shared.league_models import TradeOffer


class FixedScoreSimulator:
    """Every game ends with the same score."""

    def __init__(self, home_score=24, away_score=17):
        self.home_score = home_score
        self.away_score = away_score
        self.calls = 0

    def simulate(self, week, home_team_id, away_team_id, league):
        self.calls += 1
        return SimulatedGame(self.home_score, self.away_score)


class InjuringSimulator(FixedScoreSimulator):
    """Fixed scores; the first game reports one injury on the home team."""

    def __init__(self, player_id):
        super().__init__()
        self.player_id = player_id

    def simulate(self, week, home_team_id, away_team_id, league):
        result = super().simulate(week, home_team_id, away_team_id, league)
        if self.calls > 1:
            return result
        return replace(result, injuries=(InjuryReport(home_team_id, self.player_id, 3, "Knee Sprain"),))


@pytest.fixture
def orchestrator(simulator):
    return WeekOrchestrator(simulator)


class TestApplyResults:
    """Folding simulator output into the snapshot."""

    def test_home_win_updates_both_records(self, base_league):
        game = base_league.schedule.games_for_week(1)[0]
        result = WeekOrchestrator(FixedScoreSimulator()).apply_results(
            base_league, {game.game_id: SimulatedGame(24, 17)}
        )

        home = result.state.team(game.home_team_id).record
        away = result.state.team(game.away_team_id).record
        assert (home.wins, home.losses, home.points_for, home.points_against) == (1, 0, 24, 17)
        assert (away.wins, away.losses, away.points_for, away.points_against) == (0, 1, 17, 24)
        assert result.state.schedule.game(game.game_id).winner_id == game.home_team_id
        # Calendar is untouched by apply_results
        assert result.state.calendar == base_league.calendar

    def test_reapplying_complete_game_is_noop(self, base_league):
        game = base_league.schedule.games_for_week(1)[0]
        orchestrator = WeekOrchestrator(FixedScoreSimulator())
        results = {game.game_id: SimulatedGame(24, 17)}
        once = orchestrator.apply_results(base_league, results)

        twice = orchestrator.apply_results(once.state, results)
        assert not twice.simulated
        assert twice.state is once.state

    def test_unknown_game_rejected(self, base_league):
        with pytest.raises(DataIntegrityError):
            WeekOrchestrator(FixedScoreSimulator()).apply_results(
                base_league, {"2025_w99_g01": SimulatedGame(10, 7)}
            )

    def test_original_snapshot_untouched(self, base_league):
        game = base_league.schedule.games_for_week(1)[0]
        WeekOrchestrator(FixedScoreSimulator()).apply_results(base_league, {game.game_id: SimulatedGame(24, 17)})
        assert base_league.team(game.home_team_id).record.games_played == 0
        assert not base_league.schedule.game(game.game_id).is_complete


class TestRegularSeasonWeek:
    """One regular-season week."""

    def test_simulates_every_game_of_the_week(self, base_league):
        simulator = FixedScoreSimulator()
        result = WeekOrchestrator(simulator).simulate_week(base_league)
        week_games = base_league.schedule.games_for_week(1)

        assert simulator.calls == len(week_games)
        assert len(result.games_played) == len(week_games)
        assert result.state.calendar == Calendar(2025, 2, SeasonPhase.REGULAR_SEASON)

    def test_replay_is_deterministic(self, base_league, orchestrator):
        first = orchestrator.simulate_week(base_league)
        second = orchestrator.simulate_week(base_league)
        assert first.state == second.state

    def test_week_without_unplayed_games_is_noop(self, base_league, orchestrator):
        played = orchestrator.simulate_week(base_league).state
        rewound = replace(played, calendar=base_league.calendar)

        result = orchestrator.simulate_week(rewound)
        assert not result.simulated
        assert result.state is rewound

    def test_outside_game_weeks_rejected(self, base_league, orchestrator):
        preseason = replace(base_league, calendar=Calendar(2025, 2, SeasonPhase.PRESEASON))
        with pytest.raises(InvalidTransitionError):
            orchestrator.simulate_week(preseason)

    def test_cannot_close_season_with_unplayed_games(self, base_league, orchestrator):
        jumped = replace(base_league, calendar=Calendar(2025, 18, SeasonPhase.REGULAR_SEASON))
        with pytest.raises(InvalidTransitionError):
            orchestrator.simulate_week(jumped)

    def test_expired_trade_offers_dropped(self, base_league):
        offers = (
            TradeOffer("expiring", 1, 2, (101,), (201,), expires_week=1),
            TradeOffer("open", 3, 4, (301,), (401,), expires_week=5),
        )
        league = replace(base_league, trade_offers=offers)
        result = WeekOrchestrator(FixedScoreSimulator()).simulate_week(league)
        assert [o.offer_id for o in result.state.trade_offers] == ["open"]

    def test_unknown_injured_player_leaves_snapshot_unchanged(self, base_league):
        before = copy.deepcopy(base_league)
        with pytest.raises(DataIntegrityError) as exc_info:
            simulate_week(base_league, InjuringSimulator(player_id=999_999))

        assert exc_info.value.context["player_id"] == 999_999
        assert base_league == before

    def test_known_injured_player_applied(self, base_league):
        home_id = base_league.schedule.games_for_week(1)[0].home_team_id
        starter = base_league.team(home_id).roster[0]
        result = simulate_week(base_league, InjuringSimulator(player_id=starter.player_id))

        assert [r.player_id for r in result.new_injuries] == [starter.player_id]
        assert result.state.team(home_id).player(starter.player_id).injury.weeks_remaining == 2

    def test_module_shortcut(self, base_league, simulator):
        assert simulate_week(base_league, simulator).state == WeekOrchestrator(simulator).simulate_week(base_league).state


class TestFullRegularSeason:
    """All eighteen weeks."""

    def test_every_team_plays_seventeen(self, league_after_regular_season):
        for team in league_after_regular_season.teams:
            assert team.record.games_played == 17

    def test_records_balance(self, league_after_regular_season):
        teams = league_after_regular_season.teams
        assert sum(t.record.wins for t in teams) == sum(t.record.losses for t in teams)
        assert sum(t.record.points_for for t in teams) == sum(t.record.points_against for t in teams)

    def test_rolls_into_playoffs_with_wild_card_games(self, league_after_regular_season):
        league = league_after_regular_season
        assert league.calendar == Calendar(2025, 19, SeasonPhase.PLAYOFFS)
        assert league.schedule.is_regular_season_complete()
        assert league.playoff_bracket is not None

        wild_card = league.schedule.unplayed_for_week(19)
        assert len(wild_card) == 6
        assert all(g.is_playoff for g in wild_card)
        assert {g.game_id for g in wild_card} == {
            m.matchup_id for m in league.playoff_bracket.round_matchups(PlayoffRound.WILD_CARD)
        }


class TestPlayoffWeeks:
    """Weeks 19-22."""

    def test_super_bowl_crowns_champion(self, league_after_super_bowl):
        league = league_after_super_bowl
        assert league.calendar == Calendar(2025, 1, SeasonPhase.OFFSEASON, 1)
        bracket = league.playoff_bracket
        assert bracket.is_complete
        assert bracket.champion_id in bracket.seeding.playoff_team_ids
        assert len(bracket.matchups) == 13

    def test_no_playoff_ties(self, league_after_super_bowl):
        playoff = [g for g in league_after_super_bowl.schedule.games if g.is_playoff]
        assert len(playoff) == 13
        assert all(g.is_complete and not g.is_tie and g.winner_id is not None for g in playoff)

    def test_playoff_games_do_not_change_records(self, league_after_regular_season, league_after_super_bowl):
        before = {t.team_id: t.record for t in league_after_regular_season.teams}
        after = {t.team_id: t.record for t in league_after_super_bowl.teams}
        assert before == after

    def test_playoff_tie_rejected(self, league_after_regular_season):
        game = league_after_regular_season.schedule.unplayed_for_week(19)[0]
        with pytest.raises(DataIntegrityError):
            WeekOrchestrator(FixedScoreSimulator()).apply_results(
                league_after_regular_season, {game.game_id: SimulatedGame(20, 20)}
            )

    def test_each_round_scheduled_after_previous(self, league_after_regular_season, simulator):
        orchestrator = WeekOrchestrator(simulator)
        league = orchestrator.simulate_week(league_after_regular_season).state
        assert league.calendar.week == 20
        assert len(league.schedule.unplayed_for_week(20)) == 4
        assert league.schedule.unplayed_for_week(21) == ()

    def test_apply_results_records_bracket(self, league_after_regular_season):
        league = league_after_regular_season
        game = league.schedule.unplayed_for_week(19)[0]
        result = WeekOrchestrator(FixedScoreSimulator()).apply_results(
            league, {game.game_id: SimulatedGame(27, 13)}
        )

        matchup = result.state.playoff_bracket.matchup(game.game_id)
        assert matchup.is_complete
        assert (matchup.home_score, matchup.away_score) == (27, 13)
        assert matchup.winner_id == game.home_team_id
        assert league.playoff_bracket.matchup(game.game_id).winner_id is None

    def test_apply_results_schedules_next_round(self, league_after_regular_season):
        league = league_after_regular_season
        results = {g.game_id: SimulatedGame(27, 13) for g in league.schedule.unplayed_for_week(19)}
        state = WeekOrchestrator(FixedScoreSimulator()).apply_results(league, results).state

        assert state.playoff_bracket.is_round_complete(PlayoffRound.WILD_CARD)
        assert len(state.schedule.unplayed_for_week(20)) == 4
        assert state.calendar == league.calendar


class TestSimulatorInjection:
    """Any object with a simulate method works."""

    def test_custom_simulator_scores(self, base_league):
        result = WeekOrchestrator(FixedScoreSimulator(3, 30)).simulate_week(base_league)
        assert all(g.winner_id == g.away_team_id for g in result.games_played)

    def test_different_seeds_differ(self, base_league):
        first = WeekOrchestrator(InstantGameSimulator(seed=1)).simulate_week(base_league)
        second = WeekOrchestrator(InstantGameSimulator(seed=2)).simulate_week(base_league)
        assert ([(g.home_score, g.away_score) for g in first.games_played]
                != [(g.home_score, g.away_score) for g in second.games_played])
