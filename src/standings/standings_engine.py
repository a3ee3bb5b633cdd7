"""
Standings Engine

Pure ranking of team records. ``compute_standings`` groups teams by
conference and division and ranks each division with a comparator.

The default comparator ranks by wins (more first), then losses (more
first, so a team with fewer combined decisions ranks lower). It is a
deliberate simplification of real tie-break procedures (head-to-head,
division record, strength of schedule); swap in another comparator to
change it everywhere at once.

Ordering is deterministic: inputs are pre-sorted by team_id and the sort
is stable, so teams the comparator considers equal keep id order.
"""

import logging
from dataclasses import replace
from functools import cmp_to_key
from typing import Callable, Dict, Iterable, List, Sequence

from constants.team_ids import CONFERENCES, DIVISION_NAMES
from shared.league_models import Team
from .standings_models import Standings, TeamStanding


logger = logging.getLogger(__name__)

# Negative when a ranks above b, positive when b ranks above a, 0 when equal
Comparator = Callable[[TeamStanding, TeamStanding], int]


def default_comparator(a: TeamStanding, b: TeamStanding) -> int:
    """Wins descending, then losses descending."""
    if a.wins != b.wins:
        return b.wins - a.wins
    return b.losses - a.losses


def sort_standings(
    standings: Iterable[TeamStanding],
    comparator: Comparator = default_comparator
) -> List[TeamStanding]:
    """
    Rank standings best to worst.

    Args:
        standings: Standings to rank
        comparator: Ranking comparator

    Returns:
        New list, best team first
    """
    by_id = sorted(standings, key=lambda s: s.team_id)
    return sorted(by_id, key=cmp_to_key(comparator))


class StandingsEngine:
    """
    Computes standings tables with an injectable comparator.

    Usage:
        engine = StandingsEngine()
        table = engine.compute_standings(league.teams)
        table["AFC"]["North"][0]   # division leader
    """

    def __init__(self, comparator: Comparator = default_comparator):
        self.comparator = comparator

    def compute_standings(self, teams: Iterable[Team]) -> Standings:
        """
        Rank every division.

        Args:
            teams: All league teams

        Returns:
            {conference: {division: ranked TeamStanding tuple}}
        """
        grouped: Dict[str, Dict[str, List[TeamStanding]]] = {
            conference: {division: [] for division in DIVISION_NAMES}
            for conference in CONFERENCES
        }
        for team in teams:
            conference = grouped.setdefault(team.conference, {})
            conference.setdefault(team.division, []).append(TeamStanding.from_team(team))

        standings: Standings = {}
        for conference, divisions in grouped.items():
            standings[conference] = {}
            for division, rows in divisions.items():
                ranked = sort_standings(rows, self.comparator)
                standings[conference][division] = tuple(
                    replace(row, division_rank=rank)
                    for rank, row in enumerate(ranked, start=1)
                )

        logger.debug(f"Computed standings for {sum(1 for _ in self._all_rows(standings))} teams")
        return standings

    def rank_teams(self, teams: Iterable[Team]) -> List[TeamStanding]:
        """Flat league-wide ranking, best first."""
        return sort_standings((TeamStanding.from_team(t) for t in teams), self.comparator)

    def conference_standings(self, standings: Standings, conference: str) -> List[TeamStanding]:
        """All teams of one conference ranked together, best first."""
        rows = [row for division in standings.get(conference, {}).values() for row in division]
        return sort_standings(rows, self.comparator)

    def division_leaders(self, standings: Standings, conference: str) -> List[TeamStanding]:
        """First-place team of each non-empty division, ranked against each other."""
        leaders = [rows[0] for rows in standings.get(conference, {}).values() if rows]
        return sort_standings(leaders, self.comparator)

    @staticmethod
    def _all_rows(standings: Standings) -> Iterable[TeamStanding]:
        for divisions in standings.values():
            for rows in divisions.values():
                yield from rows


def compute_standings(
    teams: Sequence[Team],
    comparator: Comparator = default_comparator
) -> Standings:
    """Module-level shortcut for ``StandingsEngine(comparator).compute_standings``."""
    return StandingsEngine(comparator).compute_standings(teams)
