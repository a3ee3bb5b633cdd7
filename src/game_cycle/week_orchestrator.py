"""
Week Orchestrator

Simulates one calendar week and folds the results into a new league
snapshot:

1. Call the game simulator once per unplayed game of the week
2. Mark each game complete (already-complete games are skipped)
3. Update both teams' records (regular season only)
4. Apply new injuries, then tick everyone's recovery
5. Playoff games: record bracket results and schedule the next round
6. Regular season week 18: seed the playoffs and schedule the wild card round
7. Drop expired trade offers
8. Advance the calendar

The fold is all-or-nothing: a DataIntegrityError anywhere leaves the input
snapshot as the caller's last valid state.
"""

import logging
from dataclasses import dataclass, replace
from typing import Iterable, List, Mapping, Optional, Tuple

from config.season_settings import SeasonSettings
from playoff_system.bracket_models import PlayoffBracket, PlayoffMatchup
from playoff_system.playoff_manager import PlayoffManager
from playoff_system.playoff_seeder import PlayoffSeeder
from season_calendar.calendar_clock import CalendarClock
from season_calendar.calendar_models import SeasonPhase
from shared.game_models import Game
from shared.league_exceptions import DataIntegrityError, InvalidTransitionError
from shared.league_state import LeagueState
from standings.standings_engine import Comparator, StandingsEngine, default_comparator
from .game_simulator import GameSimulator, SimulatedGame
from .injury_tracker import apply_new_injuries, tick_recovery
from .models.injury_models import InjuryReport


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WeekResult:
    """
    Outcome of one simulated week.

    Attributes:
        state: New league snapshot (the input snapshot when nothing was simulated)
        games_played: Games completed this week
        new_injuries: Injuries applied this week
        recovered_player_ids: Players whose injury cleared this week
        simulated: False when the week had no unplayed games
    """
    state: LeagueState
    games_played: Tuple[Game, ...] = ()
    new_injuries: Tuple[InjuryReport, ...] = ()
    recovered_player_ids: Tuple[int, ...] = ()
    simulated: bool = True


def playoff_games(matchups: Iterable[PlayoffMatchup]) -> List[Game]:
    """Schedule entries for bracket matchups (game_id == matchup_id)."""
    return [
        Game(
            game_id=matchup.matchup_id,
            week=matchup.round.week,
            home_team_id=matchup.home_team_id,
            away_team_id=matchup.away_team_id,
            is_playoff=True,
        )
        for matchup in matchups
    ]


class WeekOrchestrator:
    """
    Drives regular season and playoff weeks.

    Usage:
        orchestrator = WeekOrchestrator(InstantGameSimulator(seed=7))
        result = orchestrator.simulate_week(league)
        league = result.state
    """

    def __init__(
        self,
        simulator: GameSimulator,
        comparator: Comparator = default_comparator,
        clock: Optional[CalendarClock] = None
    ):
        self.simulator = simulator
        self.standings_engine = StandingsEngine(comparator)
        self.seeder = PlayoffSeeder(comparator)
        self.playoff_manager = PlayoffManager()
        self.clock = clock or CalendarClock()

    def simulate_week(self, league: LeagueState) -> WeekResult:
        """
        Simulate every unplayed game of the current week.

        Args:
            league: Snapshot in the regular season or playoffs

        Returns:
            WeekResult; ``simulated`` is False (and the calendar unchanged)
            when the week has no unplayed games

        Raises:
            InvalidTransitionError: Outside the regular season and playoffs,
                or closing the regular season with earlier games unplayed
            DataIntegrityError: A result references an unknown team or player,
                or a playoff game ends tied
        """
        calendar = league.calendar
        if not calendar.is_game_week:
            raise InvalidTransitionError(
                f"No games are played during {calendar.phase}",
                operation="simulate_week", calendar=str(calendar)
            )

        pending = league.schedule.unplayed_for_week(calendar.week)
        if not pending:
            logger.debug(f"{calendar}: no unplayed games, nothing to simulate")
            return WeekResult(state=league, simulated=False)

        if self._closes_regular_season(league):
            leftover = [
                g.game_id for g in league.schedule.regular_season_games
                if not g.is_complete and g.week != calendar.week
            ]
            if leftover:
                raise InvalidTransitionError(
                    f"Cannot close the regular season with {len(leftover)} unplayed games from earlier weeks",
                    operation="simulate_week", first_unplayed=leftover[0]
                )

        results = {
            game.game_id: self.simulator.simulate(calendar.week, game.home_team_id, game.away_team_id, league)
            for game in pending
        }
        folded = self.apply_results(league, results)
        updated = folded.state

        if self._closes_regular_season(league):
            updated = self._start_playoffs(updated)

        updated = replace(
            updated,
            trade_offers=tuple(o for o in updated.trade_offers if o.expires_week > calendar.week),
            calendar=self.clock.advance(calendar),
        )

        logger.info(f"{calendar}: {len(folded.games_played)} games played, "
                    f"{len(folded.new_injuries)} injuries, {len(folded.recovered_player_ids)} recoveries")
        return replace(folded, state=updated)

    def apply_results(self, league: LeagueState, results: Mapping[str, SimulatedGame]) -> WeekResult:
        """
        Fold simulator results into the snapshot without touching the calendar.

        Games that are already complete are skipped, so re-applying the same
        results is a no-op. Recovery ticks only when at least one game was
        applied. Playoff results are also recorded in the bracket, which
        schedules the next round once the current one is complete.

        Args:
            league: Current snapshot
            results: game_id -> SimulatedGame

        Returns:
            WeekResult (``simulated`` False when every game was already complete)

        Raises:
            DataIntegrityError: Unknown game, team or player; tied playoff game;
                playoff game missing from the bracket
        """
        teams = {team.team_id: team for team in league.teams}
        completed: List[Game] = []
        injuries: List[InjuryReport] = []

        for game_id, outcome in results.items():
            game = league.schedule.game(game_id)
            if game is None:
                raise DataIntegrityError(f"Result for unknown game {game_id}",
                                         operation="apply_results", game_id=game_id)
            if game.is_complete:
                logger.debug(f"Game {game_id} already complete, skipping")
                continue
            for team_id in (game.home_team_id, game.away_team_id):
                if team_id not in teams:
                    raise DataIntegrityError(f"Game {game_id} references unknown team {team_id}",
                                             operation="apply_results", game_id=game_id, team_id=team_id)
            if game.is_playoff and outcome.home_score == outcome.away_score:
                raise DataIntegrityError(f"Playoff game {game_id} cannot end in a tie",
                                         operation="apply_results", game_id=game_id)

            done = game.with_result(outcome.home_score, outcome.away_score)
            if not game.is_playoff:
                home = teams[game.home_team_id]
                away = teams[game.away_team_id]
                teams[home.team_id] = replace(
                    home, record=home.record.with_game(outcome.home_score, outcome.away_score))
                teams[away.team_id] = replace(
                    away, record=away.record.with_game(outcome.away_score, outcome.home_score))
            completed.append(done)
            injuries.extend(outcome.injuries)

        if not completed:
            return WeekResult(state=league, simulated=False)

        teams = apply_new_injuries(teams, injuries)
        teams, recovered = tick_recovery(teams)

        state = replace(
            league,
            teams=tuple(teams[team_id] for team_id in league.team_ids),
            schedule=league.schedule.replace_games(completed),
        )
        playoff_results = [game for game in completed if game.is_playoff]
        if playoff_results:
            state = self._record_playoff_results(state, playoff_results)
        return WeekResult(
            state=state,
            games_played=tuple(completed),
            new_injuries=tuple(injuries),
            recovered_player_ids=tuple(recovered),
        )

    # ========================================================================
    # PLAYOFFS
    # ========================================================================

    @staticmethod
    def _closes_regular_season(league: LeagueState) -> bool:
        calendar = league.calendar
        return (calendar.phase is SeasonPhase.REGULAR_SEASON
                and calendar.week == SeasonSettings.REGULAR_SEASON_WEEKS)

    def _start_playoffs(self, league: LeagueState) -> LeagueState:
        """Seed both conferences and schedule the wild card round."""
        if league.playoff_bracket is not None:
            return league
        standings = self.standings_engine.compute_standings(league.teams)
        seeding = self.seeder.calculate_seeding(standings, league.season)
        bracket = self.playoff_manager.generate_wild_card_bracket(seeding)
        return replace(
            league,
            playoff_bracket=bracket,
            schedule=league.schedule.with_added_games(playoff_games(bracket.matchups)),
        )

    def _record_playoff_results(self, league: LeagueState, games: Iterable[Game]) -> LeagueState:
        """Copy playoff scores into the bracket and schedule the next round."""
        bracket: Optional[PlayoffBracket] = league.playoff_bracket
        if bracket is None:
            raise DataIntegrityError("Playoff games played without a bracket",
                                     operation="record_playoff_results", season=league.season)

        for game in games:
            if bracket.matchup(game.game_id) is None:
                raise DataIntegrityError(f"Playoff game {game.game_id} is not in the bracket",
                                         operation="record_playoff_results", game_id=game.game_id)
            bracket = self.playoff_manager.record_result(bracket, game.game_id, game.home_score, game.away_score)

        schedule = league.schedule
        current = bracket.current_round
        if current is not None and current.next_round is not None and bracket.is_round_complete(current):
            before = len(bracket.matchups)
            bracket = self.playoff_manager.advance_bracket(bracket)
            schedule = schedule.with_added_games(playoff_games(bracket.matchups[before:]))
        elif bracket.is_complete:
            logger.info(f"{bracket.season} champion: Team {bracket.champion_id}")

        return replace(league, playoff_bracket=bracket, schedule=schedule)


def simulate_week(league: LeagueState, simulator: GameSimulator,
                  comparator: Comparator = default_comparator) -> WeekResult:
    """Module-level shortcut for ``WeekOrchestrator(simulator).simulate_week``."""
    return WeekOrchestrator(simulator, comparator).simulate_week(league)
