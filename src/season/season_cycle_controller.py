"""
Season Cycle Controller

Unified controller orchestrating the complete league year:
Preseason → Regular Season → Playoffs → Offseason → next Preseason.

Each ``advance_week()`` call moves the calendar exactly one step:
1. PRESEASON: the clock ticks; entering the regular season generates the
   new schedule and resets every team's record
2. REGULAR_SEASON / PLAYOFFS: the week orchestrator simulates the week
   (week 18 seeds the playoffs, week 22 crowns the champion)
3. OFFSEASON: the current phase is auto-completed and the cycle advances
   one phase (the first call also initializes the offseason); leaving
   SeasonStart wraps into next year's Preseason and refreshes the draft class

The controller owns the current snapshot (``self.state``). Engines never
modify it; every step replaces it with the returned snapshot, so callers may
persist ``state`` between calls.
"""

import logging
from dataclasses import replace
from typing import Any, Dict, Optional

from config.season_settings import SeasonSettings
from game_cycle.game_simulator import GameSimulator, InstantGameSimulator
from game_cycle.week_orchestrator import WeekOrchestrator
from offseason.offseason_orchestrator import OffseasonOrchestrator, PhaseResult
from playoff_system.bracket_models import PlayoffBracket
from scheduling import RandomScheduleGenerator
from season_calendar.calendar_clock import CalendarClock
from season_calendar.calendar_models import Calendar, SeasonPhase
from shared.league_exceptions import InvalidTransitionError
from shared.league_models import TeamRecord
from shared.league_state import LeagueState
from standings.standings_engine import Comparator, StandingsEngine, default_comparator
from standings.standings_models import Standings
from team_management.league_factory import LeagueFactory, next_player_id
from .season_constants import SeasonConstants


class SeasonCycleController:
    """
    Drives a league through whole seasons, one calendar step at a time.

    Usage:
        controller = SeasonCycleController(create_league(seed=7), seed=7)

        # Advance by week
        weekly_result = controller.advance_week()

        # Simulate phase by phase
        controller.simulate_regular_season()
        controller.simulate_playoffs()
        controller.run_offseason()

        # Or a whole year
        summary = controller.simulate_full_year()
    """

    def __init__(
        self,
        league: LeagueState,
        simulator: Optional[GameSimulator] = None,
        comparator: Comparator = default_comparator,
        seed: int = SeasonSettings.DEFAULT_SEED
    ):
        """
        Initialize season cycle controller.

        Args:
            league: Starting snapshot (any calendar position)
            simulator: Game simulator (defaults to a seeded InstantGameSimulator)
            comparator: Standings ranking function shared by every engine
            seed: Seed for schedules, draft classes and the default simulator
        """
        self.logger = logging.getLogger(self.__class__.__name__)
        self.seed = seed
        self.state = league
        self.total_games_played = 0

        self.clock = CalendarClock()
        self.simulator = simulator or InstantGameSimulator(seed)
        self.standings_engine = StandingsEngine(comparator)
        self.week_orchestrator = WeekOrchestrator(self.simulator, comparator, self.clock)
        self.offseason_orchestrator = OffseasonOrchestrator(comparator, clock=self.clock)
        self.schedule_generator = RandomScheduleGenerator(league.team_ids, seed=seed)
        self.league_factory = LeagueFactory(seed)

    @property
    def calendar(self) -> Calendar:
        return self.state.calendar

    @property
    def phase(self) -> SeasonPhase:
        return self.state.calendar.phase

    # ==================== Stepping ====================

    def advance_week(self) -> Dict[str, Any]:
        """
        Advance the calendar one step, routed by the current phase.

        Returns:
            Dictionary with the step summary

        Raises:
            InvalidTransitionError: A game week has no unplayed games, or the
                offseason cannot be started or advanced
            OffseasonException: An automatic offseason step was rejected
        """
        start = self.calendar
        if start.phase is SeasonPhase.PRESEASON:
            summary = self._advance_preseason_week()
        elif start.phase is SeasonPhase.OFFSEASON:
            summary = self._advance_offseason_phase()
        else:
            summary = self._simulate_game_week()

        end = self.calendar
        summary.update({
            "start": str(start),
            "end": str(end),
            "phase_transition": end.phase is not start.phase,
        })
        if summary["phase_transition"]:
            self.logger.info(f"Phase transition: {start.phase} -> {end.phase} ({end})")
        return summary

    def _advance_preseason_week(self) -> Dict[str, Any]:
        league = replace(self.state, calendar=self.clock.advance(self.calendar))
        if league.calendar.phase is SeasonPhase.REGULAR_SEASON:
            league = self._start_regular_season(league)
        self.state = league
        return {"games_played": 0}

    def _start_regular_season(self, league: LeagueState) -> LeagueState:
        """New schedule, clean records, no bracket."""
        schedule = self.schedule_generator.generate_season(league.season)
        teams = tuple(replace(team, record=TeamRecord()) for team in league.teams)
        self.logger.info(f"{league.season} regular season begins: {schedule.game_count} games scheduled")
        return replace(league, teams=teams, schedule=schedule, playoff_bracket=None)

    def _simulate_game_week(self) -> Dict[str, Any]:
        calendar = self.calendar
        result = self.week_orchestrator.simulate_week(self.state)
        if not result.simulated:
            raise InvalidTransitionError(
                f"{calendar} has no unplayed games to simulate",
                operation="advance_week", calendar=str(calendar)
            )

        self.state = result.state
        self.total_games_played += len(result.games_played)
        summary: Dict[str, Any] = {
            "games_played": len(result.games_played),
            "injuries": len(result.new_injuries),
            "recoveries": len(result.recovered_player_ids),
        }
        bracket = self.state.playoff_bracket
        if bracket is not None and bracket.is_complete and self.phase is SeasonPhase.OFFSEASON:
            summary["champion_id"] = bracket.champion_id
        return summary

    def _advance_offseason_phase(self) -> Dict[str, Any]:
        league = self.state
        changes = 0
        if league.offseason is None:
            result = self._require_success(self.offseason_orchestrator.initialize(league))
            league = result.state
            changes += len(result.changes)

        phase = league.offseason.current_phase
        result = self._require_success(self.offseason_orchestrator.auto_complete_phase(league))
        changes += len(result.changes)
        result = self._require_success(self.offseason_orchestrator.advance_to_next_phase(result.state))
        changes += len(result.changes)

        league = result.state
        if league.offseason is None:
            league = self._refresh_draft_class(league)
        self.state = league
        return {"games_played": 0, "offseason_phase": phase.value, "changes": changes}

    def _refresh_draft_class(self, league: LeagueState) -> LeagueState:
        """
        Undrafted, unsigned prospects join the free agent pool and a new
        draft class is generated for the coming year.
        """
        leftovers = league.prospects
        draft_class = self.league_factory.create_draft_class(league.season, next_player_id(league))
        self.logger.info(f"{league.season} draft class generated: {len(draft_class)} prospects "
                         f"({len(leftovers)} undrafted prospects moved to free agency)")
        return replace(
            league,
            free_agents=league.free_agents + leftovers,
            prospects=tuple(draft_class),
        )

    @staticmethod
    def _require_success(result: PhaseResult) -> PhaseResult:
        if not result.success:
            raise result.error
        return result

    # ==================== Bulk Simulation ====================

    def simulate_regular_season(self) -> Dict[str, Any]:
        """
        Simulate the rest of the preseason and regular season.

        Returns:
            Summary with the final standings; the calendar ends at Playoffs week 19

        Raises:
            InvalidTransitionError: Called outside the preseason or regular season
        """
        self._require_phase("simulate_regular_season", SeasonPhase.PRESEASON, SeasonPhase.REGULAR_SEASON)
        weeks = games = 0
        while self.phase in (SeasonPhase.PRESEASON, SeasonPhase.REGULAR_SEASON):
            games += self.advance_week()["games_played"]
            weeks += 1

        best = self.standings_engine.rank_teams(self.state.teams)[0]
        self.logger.info(f"{self.state.season} regular season complete: {games} games")
        return {
            "season": self.state.season,
            "weeks": weeks,
            "games_played": games,
            "standings": self.get_current_standings(),
            "best_team_id": best.team_id,
            "best_record": best.record_str,
        }

    def simulate_playoffs(self) -> Dict[str, Any]:
        """
        Simulate every remaining playoff round.

        Returns:
            Summary with the champion and runner-up

        Raises:
            InvalidTransitionError: Called outside the playoffs
        """
        self._require_phase("simulate_playoffs", SeasonPhase.PLAYOFFS)
        games = 0
        while self.phase is SeasonPhase.PLAYOFFS:
            games += self.advance_week()["games_played"]

        bracket = self.state.playoff_bracket
        self.logger.info(f"{self.state.season} playoffs complete: Team {bracket.champion_id} champion")
        return {
            "season": self.state.season,
            "games_played": games,
            "champion_id": bracket.champion_id,
            "runner_up_id": bracket.runner_up_id,
        }

    def run_offseason(self) -> Dict[str, Any]:
        """
        Run the offseason to completion with every phase auto-completed.

        Returns:
            Summary of the archived cycle; the calendar ends at next year's Preseason week 1

        Raises:
            InvalidTransitionError: Called outside the offseason
        """
        self._require_phase("run_offseason", SeasonPhase.OFFSEASON)
        steps = 0
        while self.phase is SeasonPhase.OFFSEASON:
            self.advance_week()
            steps += 1

        archived = self.state.offseason_history[-1]
        return {
            "season": archived.season,
            "phases_visited": len(archived.visited_phases),
            "draft_selections": len(archived.data.draft_selections),
            "final_cuts": len(archived.data.final_cuts),
            "steps": steps,
            "next_season": self.state.season,
        }

    def simulate_full_year(self) -> Dict[str, Any]:
        """
        Simulate from the current position to the next year's Preseason week 1.

        Returns:
            Per-phase summaries keyed "regular_season", "playoffs", "offseason"
            (only the phases actually run)
        """
        season = self.state.season
        summary: Dict[str, Any] = {"season": season}
        if self.phase in (SeasonPhase.PRESEASON, SeasonPhase.REGULAR_SEASON):
            summary["regular_season"] = self.simulate_regular_season()
        if self.phase is SeasonPhase.PLAYOFFS:
            summary["playoffs"] = self.simulate_playoffs()
        if self.phase is SeasonPhase.OFFSEASON:
            summary["offseason"] = self.run_offseason()
        self.logger.info(f"Season {season} cycle complete; now {self.calendar}")
        return summary

    def simulate_seasons(self, count: int) -> Dict[str, Any]:
        """Run ``count`` consecutive calls to ``simulate_full_year``."""
        summaries = [self.simulate_full_year() for _ in range(count)]
        return {"seasons": summaries, "total_games_played": self.total_games_played}

    def _require_phase(self, operation: str, *phases: SeasonPhase) -> None:
        if self.phase not in phases:
            raise InvalidTransitionError(
                f"{operation} is not available during {self.phase}",
                operation=operation, calendar=str(self.calendar)
            )

    # ==================== Queries ====================

    def get_current_standings(self) -> Standings:
        return self.standings_engine.compute_standings(self.state.teams)

    def get_playoff_bracket(self) -> Optional[PlayoffBracket]:
        return self.state.playoff_bracket

    def get_current_state(self) -> Dict[str, Any]:
        """Lightweight status dictionary for display."""
        schedule = self.state.schedule
        return {
            "calendar": str(self.calendar),
            "phase": self.phase.value,
            "season": self.state.season,
            "games_completed": sum(1 for game in schedule.regular_season_games if game.is_complete),
            "games_scheduled": len(schedule.regular_season_games),
            "expected_games": SeasonConstants.REGULAR_SEASON_GAME_COUNT,
            "offseason_phase": (str(self.state.offseason.current_phase)
                                if self.state.offseason is not None else None),
            "total_games_played": self.total_games_played,
        }
