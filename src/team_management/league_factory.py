"""
League Factory

Builds a complete, deterministic starting league snapshot:
- 32 teams aligned by conference and division
- 53-man rosters filled from the roster template, every player under contract
- A head coach per team
- A draft prospect pool and a veteran free agent pool
- A generated regular season schedule with the calendar at week 1

Player ids are allocated in disjoint ranges so rostered players, free
agents and prospects never collide, including after the draft moves
prospects onto rosters.
"""

import logging
import random
from typing import List, Optional, Tuple

from config.season_settings import SeasonSettings
from constants.roster_positions import ROSTER_TEMPLATE, STARTER_COUNTS
from constants.team_ids import TEAM_INFO, TeamIDs, get_team_alignment
from scheduling import RandomScheduleGenerator
from season_calendar.calendar_models import Calendar, SeasonPhase
from shared.league_models import Coach, Contract, Player, Team
from shared.league_state import LeagueState


logger = logging.getLogger(__name__)

# team_id * ROSTER_ID_BLOCK + slot
ROSTER_ID_BLOCK = 100
FREE_AGENT_ID_START = 80001
PROSPECT_ID_START = 90001


class LeagueFactory:
    """
    Deterministic league generator.

    The same seed always produces the same league.

    Usage:
        league = LeagueFactory(seed=7).create_league(2025)
    """

    FIRST_NAMES = [
        "Aaron", "Adrian", "Antonio", "Brandon", "Calvin", "Darius", "DeAndre",
        "Derek", "Devon", "Ezekiel", "Frank", "Garrett", "Isaiah", "Jalen",
        "Jamal", "Jordan", "Justin", "Keion", "Lamar", "Marcus", "Marshawn",
        "Michael", "Nick", "Patrick", "Quentin", "Robert", "Saquon", "Terrell",
        "Tyler", "Victor", "Zach", "Alvin", "Carlos", "Damien", "Eddie", "Felix"
    ]

    LAST_NAMES = [
        "Adams", "Allen", "Anderson", "Brown", "Davis", "Garcia", "Harris",
        "Jackson", "Johnson", "Jones", "Lewis", "Martin", "Miller", "Moore",
        "Robinson", "Smith", "Taylor", "Thomas", "Thompson", "Washington",
        "White", "Williams", "Wilson", "Young", "Bell", "Cooper", "Green",
        "Hill", "King", "Lee", "Parker", "Reed", "Scott", "Turner", "Walker"
    ]

    # Overall rating offsets by depth role
    STARTER_BASE = 74
    BACKUP_OFFSET = -8
    DEPTH_OFFSET = -15
    RATING_VARIANCE = 6
    TEAM_QUALITY_SPREAD = 6

    # Salary curve: minimum plus a premium growing with overall above this floor
    SALARY_RATING_FLOOR = 55
    SALARY_PER_POINT_SQUARED = 12_000

    # Opening payrolls are scaled to leave at least this share of the cap free
    OPENING_CAP_HEADROOM = 0.12

    def __init__(self, seed: int = SeasonSettings.DEFAULT_SEED):
        self.seed = seed
        self.rng = random.Random(f"league-{seed}")

    def create_league(self, season_year: int = SeasonSettings.DEFAULT_START_YEAR,
                      team_ids: Optional[List[int]] = None) -> LeagueState:
        """
        Build a league ready for regular season week 1.

        Args:
            season_year: Season the league starts in
            team_ids: Teams to include (defaults to all 32)

        Returns:
            LeagueState at RegularSeason week 1 with a fresh schedule
        """
        ids = sorted(team_ids) if team_ids is not None else TeamIDs.get_all_team_ids()
        teams = tuple(self.create_team(team_id) for team_id in ids)
        schedule = RandomScheduleGenerator(ids, seed=self.seed).generate_season(season_year)

        league = LeagueState(
            calendar=Calendar(year=season_year, week=1, phase=SeasonPhase.REGULAR_SEASON),
            teams=teams,
            schedule=schedule,
            free_agents=tuple(self.create_free_agents(SeasonSettings.FREE_AGENT_POOL_SIZE)),
            prospects=tuple(self.create_prospects(SeasonSettings.PROSPECT_POOL_SIZE)),
        )
        logger.info(f"Created {season_year} league: {len(teams)} teams, "
                    f"{len(league.free_agents)} free agents, {len(league.prospects)} prospects")
        return league

    def create_team(self, team_id: int) -> Team:
        """Team with a full 53-man roster, contracts and a head coach."""
        city, nickname, abbreviation = TEAM_INFO[team_id]
        conference, division = get_team_alignment(team_id)
        quality = self.rng.randint(-self.TEAM_QUALITY_SPREAD, self.TEAM_QUALITY_SPREAD)

        roster: List[Player] = []
        slot = 1
        for position, count in ROSTER_TEMPLATE.items():
            starters = STARTER_COUNTS.get(position, 0)
            for depth in range(count):
                if depth < starters:
                    base = self.STARTER_BASE + quality
                elif depth < starters * 2:
                    base = self.STARTER_BASE + quality + self.BACKUP_OFFSET
                else:
                    base = self.STARTER_BASE + quality + self.DEPTH_OFFSET
                roster.append(self._create_player(
                    team_id * ROSTER_ID_BLOCK + slot, position, base, age_range=(22, 33)
                ))
                slot += 1

        roster = self._fit_payroll_under_cap(roster)
        coach = Coach(name=self._generate_name(), experience_years=self.rng.randint(0, 20))
        return Team(
            team_id=team_id,
            city=city,
            nickname=nickname,
            abbreviation=abbreviation,
            conference=conference,
            division=division,
            roster=tuple(roster),
            head_coach=coach,
        )

    def create_prospects(self, count: int, id_start: int = PROSPECT_ID_START) -> List[Player]:
        """Draft class: young, unsigned, wide spread of upside."""
        prospects = []
        for offset in range(count):
            position = self._weighted_position()
            overall = int(self.rng.triangular(45, 80, 58))
            prospects.append(Player(
                player_id=id_start + offset,
                name=self._generate_name(),
                position=position,
                overall=overall,
                age=self.rng.randint(21, 23),
                potential=min(99, overall + self.rng.randint(5, 20)),
            ))
        return prospects

    def create_draft_class(self, season_year: int, id_start: int,
                           count: int = SeasonSettings.PROSPECT_POOL_SIZE) -> List[Player]:
        """
        Fresh prospect pool for a later season's draft.

        Seeded by (seed, season) so replaying a season yields the same class.
        """
        self.rng = random.Random(f"draft-class-{self.seed}-{season_year}")
        return self.create_prospects(count, id_start)

    def create_free_agents(self, count: int) -> List[Player]:
        """Unsigned veterans."""
        free_agents = []
        for offset in range(count):
            overall = int(self.rng.triangular(50, 78, 62))
            free_agents.append(Player(
                player_id=FREE_AGENT_ID_START + offset,
                name=self._generate_name(),
                position=self._weighted_position(),
                overall=overall,
                age=self.rng.randint(26, 34),
                potential=overall,
            ))
        return free_agents

    # ==================== Player Helpers ====================

    def _generate_name(self) -> str:
        return f"{self.rng.choice(self.FIRST_NAMES)} {self.rng.choice(self.LAST_NAMES)}"

    def _weighted_position(self) -> str:
        positions = list(ROSTER_TEMPLATE)
        return self.rng.choices(positions, weights=[ROSTER_TEMPLATE[p] for p in positions])[0]

    def _create_player(self, player_id: int, position: str, base: int,
                       age_range: Tuple[int, int]) -> Player:
        overall = max(40, min(99, base + self.rng.randint(-self.RATING_VARIANCE, self.RATING_VARIANCE)))
        age = self.rng.randint(*age_range)
        upside = self.rng.randint(0, 12) if age <= 25 else self.rng.randint(0, 3)
        years = self.rng.randint(1, 5)
        salary = self.salary_for_overall(overall)
        return Player(
            player_id=player_id,
            name=self._generate_name(),
            position=position,
            overall=overall,
            age=age,
            potential=min(99, overall + upside),
            contract=Contract(
                annual_salary=salary,
                years_remaining=years,
                signing_bonus=salary // 5 if years > 1 else 0,
            ),
        )

    @classmethod
    def salary_for_overall(cls, overall: int) -> int:
        premium = max(0, overall - cls.SALARY_RATING_FLOOR) ** 2 * cls.SALARY_PER_POINT_SQUARED
        return SeasonSettings.MINIMUM_SALARY + premium

    def _fit_payroll_under_cap(self, roster: List[Player]) -> List[Player]:
        """Scale salary premiums down so the opening payroll leaves cap headroom."""
        budget = int(SeasonSettings.SALARY_CAP * (1 - self.OPENING_CAP_HEADROOM))
        minimum_total = SeasonSettings.MINIMUM_SALARY * len(roster)
        premium_total = sum(p.contract.annual_salary for p in roster) - minimum_total
        if minimum_total + premium_total <= budget or premium_total <= 0:
            return roster

        factor = (budget - minimum_total) / premium_total
        scaled = []
        for player in roster:
            contract = player.contract
            premium = contract.annual_salary - SeasonSettings.MINIMUM_SALARY
            salary = SeasonSettings.MINIMUM_SALARY + int(premium * factor)
            scaled.append(Player(
                player_id=player.player_id,
                name=player.name,
                position=player.position,
                overall=player.overall,
                age=player.age,
                potential=player.potential,
                contract=Contract(
                    annual_salary=salary,
                    years_remaining=contract.years_remaining,
                    signing_bonus=salary // 5 if contract.years_remaining > 1 else 0,
                ),
            ))
        return scaled


def create_league(seed: int = SeasonSettings.DEFAULT_SEED,
                  season_year: int = SeasonSettings.DEFAULT_START_YEAR) -> LeagueState:
    """Shortcut for ``LeagueFactory(seed).create_league(season_year)``."""
    return LeagueFactory(seed).create_league(season_year)


def next_player_id(league: LeagueState) -> int:
    """First player id above every rostered player, free agent and prospect."""
    ids = [player.player_id for team in league.teams for player in team.roster]
    ids.extend(player.player_id for player in league.free_agents)
    ids.extend(player.player_id for player in league.prospects)
    return max(ids, default=PROSPECT_ID_START - 1) + 1
