"""
Game Simulator Collaborator

The week orchestrator consumes any object with a ``simulate`` method
returning a ``SimulatedGame``. ``InstantGameSimulator`` is the reference
implementation: instant scores plus occasional injuries, deterministic for
a given seed.
"""

import logging
import random
from dataclasses import dataclass
from typing import Protocol, Tuple

from config.season_settings import SeasonSettings
from shared.league_models import Team
from shared.league_state import LeagueState
from .game_result_generator import generate_instant_result
from .models.injury_models import (
    INJURY_TYPE_WEEKS, INJURY_TYPE_WEIGHTS, POSITION_INJURY_WEIGHTS,
    InjuryReport, injury_types
)


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SimulatedGame:
    """Final score and the injuries sustained in one game."""
    home_score: int
    away_score: int
    injuries: Tuple[InjuryReport, ...] = ()


class GameSimulator(Protocol):
    """Anything that can turn a scheduled game into a result."""

    def simulate(self, week: int, home_team_id: int, away_team_id: int,
                 league: LeagueState) -> SimulatedGame:
        ...


class InstantGameSimulator:
    """
    Seeded instant-result simulator.

    Each game draws from its own ``random.Random`` seeded with
    (seed, season, week, home, away), so results do not depend on the order
    games are simulated in and a replayed week yields identical results.
    Playoff weeks never produce ties.
    """

    def __init__(self, seed: int = SeasonSettings.DEFAULT_SEED,
                 injury_rate: float = SeasonSettings.INJURY_RATE_PER_TEAM_GAME):
        self.seed = seed
        self.injury_rate = injury_rate

    def simulate(self, week: int, home_team_id: int, away_team_id: int,
                 league: LeagueState) -> SimulatedGame:
        """
        Simulate one game.

        Args:
            week: Calendar week (19+ is the playoffs)
            home_team_id: Home team
            away_team_id: Away team
            league: Current league snapshot

        Returns:
            SimulatedGame with scores and new injuries

        Raises:
            DataIntegrityError: If either team is not in the league
        """
        home = league.team(home_team_id)
        away = league.team(away_team_id)
        rng = random.Random(f"{self.seed}-{league.season}-{week}-{home_team_id}-{away_team_id}")

        is_playoff = week >= SeasonSettings.FIRST_PLAYOFF_WEEK
        home_score, away_score = generate_instant_result(
            rng, home.projected_strength, away.projected_strength, is_playoff
        )

        injuries = []
        for team in (home, away):
            report = self._roll_injury(rng, team)
            if report is not None:
                injuries.append(report)

        logger.debug(f"Week {week}: Team {away_team_id} {away_score} @ Team {home_team_id} {home_score}"
                     f"{f' ({len(injuries)} injuries)' if injuries else ''}")
        return SimulatedGame(home_score, away_score, tuple(injuries))

    def _roll_injury(self, rng: random.Random, team: Team):
        """At most one new injury per team per game, to a healthy player."""
        if rng.random() >= self.injury_rate:
            return None
        healthy = [p for p in sorted(team.roster, key=lambda p: p.player_id) if not p.is_injured]
        if not healthy:
            return None

        weights = [POSITION_INJURY_WEIGHTS.get(p.position, 1) for p in healthy]
        player = rng.choices(healthy, weights=weights)[0]

        types = injury_types()
        injury_type = rng.choices(types, weights=[INJURY_TYPE_WEIGHTS[t] for t in types])[0]
        low, high = INJURY_TYPE_WEEKS[injury_type]
        return InjuryReport(
            team_id=team.team_id,
            player_id=player.player_id,
            weeks_remaining=rng.randint(low, high),
            description=injury_type.display_name,
        )
