"""
Regular Season Schedule Generator

Generates a seeded, valid regular season:
- 18 weeks, 17 games per team (272 games for 32 teams)
- Exactly one bye per team, all byes between weeks 5 and 14
- No team plays twice in the same week
- No matchup repeats

Construction: a circle-method round robin yields 31 rounds in which every
team plays once. Seventeen of them are drawn at random. Fifteen become full
weeks; the last two are spread over three bye weeks by three-coloring the
alternating cycles their pairings form, so every team sits out exactly one
of the three.
"""

import logging
import random
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from config.season_settings import SeasonSettings
from constants.team_ids import TeamIDs
from shared.game_models import Game, Schedule


Pairing = Tuple[int, int]


class RandomScheduleGenerator:
    """
    Generates random but valid regular season schedules.

    The same (seed, season) always produces the same schedule.

    Usage:
        generator = RandomScheduleGenerator(seed=7)
        schedule = generator.generate_season(2025)
    """

    TOTAL_WEEKS = SeasonSettings.REGULAR_SEASON_WEEKS
    GAMES_PER_TEAM = SeasonSettings.GAMES_PER_TEAM

    # Byes only fall inside this window (inclusive)
    BYE_WEEK_EARLIEST = 5
    BYE_WEEK_LATEST = 14

    # Weeks built from split rounds; every team is idle in exactly one
    BYE_WEEK_COUNT = 3

    def __init__(
        self,
        team_ids: Optional[Iterable[int]] = None,
        seed: int = SeasonSettings.DEFAULT_SEED,
        logger: logging.Logger = None
    ):
        """
        Initialize random schedule generator.

        Args:
            team_ids: Teams to schedule (defaults to the full league)
            seed: Base seed, combined with the season year per schedule
            logger: Optional logger for tracking generation progress

        Raises:
            ValueError: Team count cannot produce a 17-game, one-bye season
        """
        self.seed = seed
        self.logger = logger or logging.getLogger(__name__)
        ids = TeamIDs.get_all_team_ids() if team_ids is None else team_ids
        self._all_team_ids = sorted(set(ids))

        team_count = len(self._all_team_ids)
        if team_count % 2 != 0 or team_count <= self.GAMES_PER_TEAM:
            raise ValueError(
                f"Cannot schedule {team_count} teams: need an even count above "
                f"{self.GAMES_PER_TEAM}. Team IDs: {self._all_team_ids}"
            )
        if self.TOTAL_WEEKS != self.GAMES_PER_TEAM + 1:
            raise ValueError(
                f"{self.GAMES_PER_TEAM} games over {self.TOTAL_WEEKS} weeks "
                f"does not leave exactly one bye per team"
            )

    @property
    def expected_game_count(self) -> int:
        return len(self._all_team_ids) * self.GAMES_PER_TEAM // 2

    def generate_season(self, season_year: int) -> Schedule:
        """
        Generate a complete regular season schedule.

        Args:
            season_year: Season the schedule belongs to

        Returns:
            Schedule with every game unplayed

        Raises:
            ValueError: If the generated schedule fails validation
        """
        self.logger.info(f"Generating {season_year} regular season schedule (seed {self.seed})...")
        rng = random.Random(f"schedule-{self.seed}-{season_year}")

        teams = list(self._all_team_ids)
        rng.shuffle(teams)
        rounds = self._round_robin(teams)
        chosen = [rounds[i] for i in rng.sample(range(len(rounds)), self.GAMES_PER_TEAM)]

        full_rounds = chosen[:-2]
        split_weeks = self._split_rounds(chosen[-2], chosen[-1])

        bye_weeks = sorted(rng.sample(
            range(self.BYE_WEEK_EARLIEST, self.BYE_WEEK_LATEST + 1), self.BYE_WEEK_COUNT
        ))
        week_pairings: Dict[int, List[Pairing]] = {}
        full_iter = iter(full_rounds)
        split_iter = iter(split_weeks)
        for week_number in range(1, self.TOTAL_WEEKS + 1):
            week_pairings[week_number] = next(split_iter) if week_number in bye_weeks else next(full_iter)

        home_counts = {team_id: 0 for team_id in self._all_team_ids}
        all_games: List[Game] = []
        for week_number in range(1, self.TOTAL_WEEKS + 1):
            week_games = self._assign_home_teams(
                rng, season_year, week_number, week_pairings[week_number], home_counts
            )
            all_games.extend(week_games)
            self.logger.debug(f"Week {week_number}: {len(week_games)} games")

        self._validate_season_schedule(all_games)

        self.logger.info(
            f"Schedule generation complete! Total games: {len(all_games)} "
            f"(bye weeks {', '.join(str(w) for w in bye_weeks)})"
        )
        return Schedule(season=season_year, games=tuple(all_games))

    # ==================== Pairing Construction ====================

    @staticmethod
    def _round_robin(teams: Sequence[int]) -> List[List[Pairing]]:
        """Circle method: n-1 rounds in which every team plays exactly once."""
        fixed, rotating = teams[0], list(teams[1:])
        half = len(teams) // 2
        rounds = []
        for _ in range(len(teams) - 1):
            lineup = [fixed] + rotating
            rounds.append([(lineup[i], lineup[-1 - i]) for i in range(half)])
            rotating = rotating[-1:] + rotating[:-1]
        return rounds

    @staticmethod
    def _split_rounds(first: List[Pairing], second: List[Pairing]) -> List[List[Pairing]]:
        """
        Spread two full rounds over three weeks with one bye per team.

        The two rounds are perfect matchings with no pairing in common, so
        together they form even cycles of length four or more. Coloring each
        cycle's pairings 0,1,2,0,1,2,... (patching a trailing 0 to 1 when the
        length leaves remainder one) never gives a team two games in the same
        week, and every color appears in every cycle.
        """
        partner_a = {}
        for a, b in first:
            partner_a[a], partner_a[b] = b, a
        partner_b = {}
        for a, b in second:
            partner_b[a], partner_b[b] = b, a

        weeks: List[List[Pairing]] = [[], [], []]
        visited = set()
        for start in sorted(partner_a):
            if start in visited:
                continue
            cycle: List[Pairing] = []
            current, use_first = start, True
            while True:
                visited.add(current)
                nxt = partner_a[current] if use_first else partner_b[current]
                cycle.append((current, nxt))
                current, use_first = nxt, not use_first
                if current == start:
                    break

            colors = [i % 3 for i in range(len(cycle))]
            if len(cycle) % 3 == 1:
                colors[-1] = 1
            for pairing, color in zip(cycle, colors):
                weeks[color].append(pairing)
        return weeks

    def _assign_home_teams(
        self,
        rng: random.Random,
        season_year: int,
        week_number: int,
        pairings: List[Pairing],
        home_counts: Dict[int, int]
    ) -> List[Game]:
        """Give home field to the team with fewer home games so far."""
        games = []
        for game_number, (a, b) in enumerate(sorted(pairings, key=lambda p: min(p)), start=1):
            if home_counts[a] == home_counts[b]:
                home, away = (a, b) if rng.random() < 0.5 else (b, a)
            elif home_counts[a] < home_counts[b]:
                home, away = a, b
            else:
                home, away = b, a
            home_counts[home] += 1
            games.append(Game(
                game_id=f"{season_year}_w{week_number:02d}_g{game_number:02d}",
                week=week_number,
                home_team_id=home,
                away_team_id=away,
            ))
        return games

    # ==================== Validation ====================

    def _validate_season_schedule(self, all_games: List[Game]) -> None:
        """
        Validate complete season schedule for correctness.

        Raises:
            ValueError: If validation fails
        """
        if len(all_games) != self.expected_game_count:
            raise ValueError(
                f"Invalid total games: {len(all_games)}, expected {self.expected_game_count}"
            )

        weeks_played: Dict[int, List[int]] = {team_id: [] for team_id in self._all_team_ids}
        matchups = set()
        for game in all_games:
            key = frozenset((game.home_team_id, game.away_team_id))
            if key in matchups:
                raise ValueError(f"Matchup {sorted(key)} scheduled twice")
            matchups.add(key)
            weeks_played[game.home_team_id].append(game.week)
            weeks_played[game.away_team_id].append(game.week)

        for team_id, weeks in weeks_played.items():
            if len(weeks) != self.GAMES_PER_TEAM:
                raise ValueError(
                    f"Team {team_id} plays {len(weeks)} games, expected {self.GAMES_PER_TEAM}"
                )
            if len(set(weeks)) != len(weeks):
                raise ValueError(f"Team {team_id} plays twice in the same week")
            byes = set(range(1, self.TOTAL_WEEKS + 1)) - set(weeks)
            if len(byes) != 1:
                raise ValueError(f"Team {team_id} has {len(byes)} bye weeks, expected 1")

        self.logger.info("Schedule validation passed")


def create_schedule_generator(
    team_ids: Optional[Iterable[int]] = None,
    seed: int = SeasonSettings.DEFAULT_SEED,
    logger: logging.Logger = None
) -> RandomScheduleGenerator:
    """
    Factory function to create a schedule generator.

    Args:
        team_ids: Teams to schedule (defaults to the full league)
        seed: Base seed
        logger: Optional logger instance

    Returns:
        Configured RandomScheduleGenerator instance
    """
    return RandomScheduleGenerator(team_ids, seed, logger)
