"""
Centralized Season Progression Settings

Tunable league rules in one place. Every engine module reads its limits
from here instead of hard-coding them.
"""


class SeasonSettings:
    """
    League structure and offseason rules.

    Values model a 32-team, two-conference league with an 18-week regular
    season and a 14-team playoff field.
    """

    # ================================================================
    # LEAGUE STRUCTURE
    # ================================================================

    TEAM_COUNT = 32
    CONFERENCE_COUNT = 2
    DIVISIONS_PER_CONFERENCE = 4
    TEAMS_PER_DIVISION = 4

    # ================================================================
    # CALENDAR
    # ================================================================

    PRESEASON_WEEKS = 4
    # Preseason weeks 1..4, then RegularSeason week 1

    REGULAR_SEASON_WEEKS = 18
    # Week 18 rolls into Playoffs week 19

    GAMES_PER_TEAM = 17
    # 17 games over 18 weeks: every team gets exactly one bye

    FIRST_PLAYOFF_WEEK = 19
    LAST_PLAYOFF_WEEK = 22
    # Wild Card = 19, Divisional = 20, Conference = 21, Super Bowl = 22

    OFFSEASON_PHASE_COUNT = 12

    # ================================================================
    # PLAYOFFS
    # ================================================================

    PLAYOFF_TEAMS_PER_CONFERENCE = 7
    WILD_CARDS_PER_CONFERENCE = 3

    # ================================================================
    # ROSTERS AND INJURIES
    # ================================================================

    ROSTER_LIMIT = 53
    # Enforced at FinalCuts

    IR_THRESHOLD_WEEKS = 4
    # New injuries longer than this go on IR, otherwise Out

    # ================================================================
    # SALARY CAP (whole dollars)
    # ================================================================

    SALARY_CAP = 255_400_000
    MINIMUM_SALARY = 795_000
    FRANCHISE_TAG_SALARY = 24_000_000
    TRANSITION_TAG_SALARY = 20_000_000

    # ================================================================
    # OFFSEASON
    # ================================================================

    DRAFT_ROUNDS = 7
    PROSPECT_POOL_SIZE = 256
    # Must cover DRAFT_ROUNDS * TEAM_COUNT picks with some left for UDFA

    FREE_AGENT_POOL_SIZE = 120

    FREE_AGENCY_DAYS = 30

    HOT_SEAT_WIN_PERCENTAGE = 0.35
    # Coaches below this regular-season win pct are flagged at CoachingDecisions

    POSITION_BATTLE_MARGIN = 3
    # Starter and backup within this many overall points = open competition

    PRESEASON_EXHIBITION_WEEKS = 3

    # ================================================================
    # SIMULATION
    # ================================================================

    DEFAULT_SEED = 2025
    DEFAULT_START_YEAR = 2025
    INJURY_RATE_PER_TEAM_GAME = 0.12
