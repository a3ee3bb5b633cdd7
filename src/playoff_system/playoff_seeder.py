"""
Playoff Seeder

Calculates conference playoff seeding from standings.
Pure calculation logic - no side effects.

Seeding rules:
- Seeds 1-4: the four division winners, ranked against each other
- Seeds 5-7: the best three remaining conference teams (wild cards)
Both steps use the same comparator as the standings engine.
"""

import logging
from typing import Tuple

from config.season_settings import SeasonSettings
from constants.team_ids import AFC, NFC
from standings.standings_engine import Comparator, StandingsEngine, default_comparator
from standings.standings_models import Standings, TeamStanding
from .playoff_exceptions import InvalidSeedingException
from .seeding_models import ConferenceSeeding, PlayoffSeed, PlayoffSeeding


logger = logging.getLogger(__name__)


class PlayoffSeeder:
    """
    Calculates playoff seeding from a standings table.

    Usage:
        seeder = PlayoffSeeder()
        standings = compute_standings(league.teams)
        seeding = seeder.calculate_seeding(standings, season=2025)
        seeding.afc.get_seed_by_number(1)
    """

    def __init__(self, comparator: Comparator = default_comparator):
        self.engine = StandingsEngine(comparator)

    def calculate_seeding(self, standings: Standings, season: int) -> PlayoffSeeding:
        """
        Seed both conferences.

        Args:
            standings: Output of ``compute_standings``
            season: Season year

        Returns:
            PlayoffSeeding with seven seeds per conference
        """
        seeding = PlayoffSeeding(
            season=season,
            afc=ConferenceSeeding(AFC, self.seed_conference(standings, AFC)),
            nfc=ConferenceSeeding(NFC, self.seed_conference(standings, NFC)),
        )
        logger.info(
            f"Seeded {season} playoffs: AFC {list(seeding.afc.team_ids)}, "
            f"NFC {list(seeding.nfc.team_ids)}"
        )
        return seeding

    def seed_conference(self, standings: Standings, conference: str) -> Tuple[PlayoffSeed, ...]:
        """
        Seed one conference.

        Args:
            standings: Output of ``compute_standings``
            conference: 'AFC' or 'NFC'

        Returns:
            Seven PlayoffSeed records ordered 1-7

        Raises:
            InvalidSeedingException: If the conference cannot fill seven seeds
        """
        divisions = standings.get(conference)
        if not divisions:
            raise InvalidSeedingException(f"No standings for conference {conference}", conference=conference)

        empty = [name for name, rows in divisions.items() if not rows]
        if empty:
            raise InvalidSeedingException(
                f"Divisions without teams: {empty}", conference=conference
            )

        # Step 1: Division winners ranked against each other (seeds 1-4)
        division_winners = self.engine.division_leaders(standings, conference)
        winner_ids = {row.team_id for row in division_winners}

        # Step 2: Best remaining teams (wild cards)
        remaining = [
            row for row in self.engine.conference_standings(standings, conference)
            if row.team_id not in winner_ids
        ]
        wildcard_count = SeasonSettings.PLAYOFF_TEAMS_PER_CONFERENCE - len(division_winners)
        if len(remaining) < wildcard_count:
            raise InvalidSeedingException(
                f"{conference} has {len(remaining)} non-division-winners, "
                f"needs {wildcard_count} wild cards",
                conference=conference
            )
        wildcards = remaining[:wildcard_count]

        # Step 3: Create playoff seeds
        seeds = tuple(
            self._create_playoff_seed(row, seed_number, row.team_id in winner_ids)
            for seed_number, row in enumerate(division_winners + wildcards, start=1)
        )
        logger.debug(f"{conference} seeds: {[(s.seed, s.team_id) for s in seeds]}")
        return seeds

    @staticmethod
    def _create_playoff_seed(row: TeamStanding, seed: int, is_division_winner: bool) -> PlayoffSeed:
        return PlayoffSeed(
            seed=seed,
            team_id=row.team_id,
            conference=row.conference,
            division=row.division,
            division_winner=is_division_winner,
            wins=row.wins,
            losses=row.losses,
            ties=row.ties,
            points_for=row.record.points_for,
            points_against=row.record.points_against,
        )


def seed_conference(
    standings: Standings,
    conference: str,
    comparator: Comparator = default_comparator
) -> Tuple[PlayoffSeed, ...]:
    """Module-level shortcut for ``PlayoffSeeder(comparator).seed_conference``."""
    return PlayoffSeeder(comparator).seed_conference(standings, conference)
