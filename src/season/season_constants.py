"""
Season Constants

Season counts derived from the league settings, so callers compare against
named values instead of magic numbers.

Usage:
    from season.season_constants import SeasonConstants

    if games_played >= SeasonConstants.REGULAR_SEASON_GAME_COUNT:
        # Transition to playoffs
"""

from config.season_settings import SeasonSettings


class SeasonConstants:
    """
    NFL Season simulation constants.

    Every value is derived from ``SeasonSettings``; change the settings, not
    these.
    """

    # ==================== Game Counts ====================

    REGULAR_SEASON_WEEKS = SeasonSettings.REGULAR_SEASON_WEEKS
    """Number of regular season weeks (18-week schedule introduced in 2021)"""

    REGULAR_SEASON_GAMES_PER_TEAM = SeasonSettings.GAMES_PER_TEAM
    """Games per team in regular season"""

    REGULAR_SEASON_GAME_COUNT = SeasonSettings.TEAM_COUNT * SeasonSettings.GAMES_PER_TEAM // 2
    """Total regular season games (32 teams × 17 games / 2 teams per game)"""

    BYE_WEEKS_PER_TEAM = SeasonSettings.REGULAR_SEASON_WEEKS - SeasonSettings.GAMES_PER_TEAM

    # Playoffs
    WILD_CARD_GAMES = SeasonSettings.WILD_CARDS_PER_CONFERENCE * SeasonSettings.CONFERENCE_COUNT
    DIVISIONAL_GAMES = 2 * SeasonSettings.CONFERENCE_COUNT
    CONFERENCE_CHAMPIONSHIP_GAMES = SeasonSettings.CONFERENCE_COUNT
    SUPER_BOWL_GAMES = 1

    PLAYOFF_GAME_COUNT = (
        WILD_CARD_GAMES + DIVISIONAL_GAMES + CONFERENCE_CHAMPIONSHIP_GAMES + SUPER_BOWL_GAMES
    )
    """
    Total playoff games:
    - Wild Card Round: 6 games (3 AFC + 3 NFC)
    - Divisional Round: 4 games (2 AFC + 2 NFC)
    - Conference Championships: 2 games (1 AFC + 1 NFC)
    - Super Bowl: 1 game
    """

    # ==================== Draft ====================

    DRAFT_PICKS_PER_ROUND = SeasonSettings.TEAM_COUNT
    """Draft picks per round (one per team)"""

    DRAFT_TOTAL_PICKS = SeasonSettings.DRAFT_ROUNDS * DRAFT_PICKS_PER_ROUND
    """Total picks per draft (7 rounds × 32 teams = 224)"""

    # ==================== Calendar ====================

    WEEKS_PER_YEAR = (
        SeasonSettings.PRESEASON_WEEKS
        + SeasonSettings.REGULAR_SEASON_WEEKS
        + (SeasonSettings.LAST_PLAYOFF_WEEK - SeasonSettings.FIRST_PLAYOFF_WEEK + 1)
        + SeasonSettings.OFFSEASON_PHASE_COUNT
    )
    """Calendar advances in one league year (4 + 18 + 4 + 12 = 38)"""

