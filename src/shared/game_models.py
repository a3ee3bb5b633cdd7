"""
Game and Schedule Models

A Game is either unplayed (no scores) or complete with exactly one of a
winner or a tie. Schedule keeps games in week order and is replaced, never
edited, when results arrive.
"""

from dataclasses import dataclass, replace
from typing import Dict, Iterable, Optional, Tuple

from config.season_settings import SeasonSettings


@dataclass(frozen=True)
class Game:
    """
    One scheduled game.

    Attributes:
        game_id: Stable id; results are folded at most once per id
        week: Calendar week (1-18 regular season, 19-22 playoffs)
        home_team_id: Home team (listed first at neutral sites)
        away_team_id: Away team
        home_score: Final home score, None until played
        away_score: Final away score, None until played
        is_complete: Whether a result has been applied
        winner_id: Winning team, None for ties and unplayed games
        is_tie: True only for a completed tied game
        is_playoff: Playoff games do not count toward regular-season records
    """
    game_id: str
    week: int
    home_team_id: int
    away_team_id: int
    home_score: Optional[int] = None
    away_score: Optional[int] = None
    is_complete: bool = False
    winner_id: Optional[int] = None
    is_tie: bool = False
    is_playoff: bool = False

    def __post_init__(self):
        if self.home_team_id == self.away_team_id:
            raise ValueError(f"Game {self.game_id}: team {self.home_team_id} cannot play itself")
        if self.is_complete:
            if self.home_score is None or self.away_score is None:
                raise ValueError(f"Game {self.game_id}: completed game requires both scores")
            if (self.winner_id is not None) == self.is_tie:
                raise ValueError(f"Game {self.game_id}: completed game needs exactly one of winner or tie")
        elif self.winner_id is not None or self.is_tie:
            raise ValueError(f"Game {self.game_id}: unplayed game cannot have a result")

    def with_result(self, home_score: int, away_score: int) -> "Game":
        """Return the completed version of this game."""
        if home_score > away_score:
            winner_id, is_tie = self.home_team_id, False
        elif away_score > home_score:
            winner_id, is_tie = self.away_team_id, False
        else:
            winner_id, is_tie = None, True
        return replace(
            self,
            home_score=home_score,
            away_score=away_score,
            is_complete=True,
            winner_id=winner_id,
            is_tie=is_tie,
        )

    @property
    def loser_id(self) -> Optional[int]:
        if self.winner_id is None:
            return None
        return self.away_team_id if self.winner_id == self.home_team_id else self.home_team_id

    def involves(self, team_id: int) -> bool:
        return team_id in (self.home_team_id, self.away_team_id)

    def __str__(self):
        if not self.is_complete:
            return f"Week {self.week}: {self.away_team_id} @ {self.home_team_id}"
        return (f"Week {self.week}: {self.away_team_id} {self.away_score} @ "
                f"{self.home_team_id} {self.home_score}")


@dataclass(frozen=True)
class Schedule:
    """All games for one season, sorted by (week, game_id)."""
    season: int
    games: Tuple[Game, ...] = ()

    def __post_init__(self):
        ids = [game.game_id for game in self.games]
        if len(ids) != len(set(ids)):
            raise ValueError(f"Schedule {self.season} contains duplicate game ids")

    @property
    def game_count(self) -> int:
        return len(self.games)

    @property
    def regular_season_games(self) -> Tuple[Game, ...]:
        return tuple(game for game in self.games if not game.is_playoff)

    def game(self, game_id: str) -> Optional[Game]:
        for game in self.games:
            if game.game_id == game_id:
                return game
        return None

    def games_for_week(self, week: int) -> Tuple[Game, ...]:
        return tuple(game for game in self.games if game.week == week)

    def unplayed_for_week(self, week: int) -> Tuple[Game, ...]:
        return tuple(game for game in self.games if game.week == week and not game.is_complete)

    def games_for_team(self, team_id: int) -> Tuple[Game, ...]:
        return tuple(game for game in self.games if game.involves(team_id))

    def is_regular_season_complete(self) -> bool:
        regular = self.regular_season_games
        return bool(regular) and all(game.is_complete for game in regular)

    def replace_games(self, updated: Iterable[Game]) -> "Schedule":
        """New schedule with games swapped in by game_id."""
        by_id: Dict[str, Game] = {game.game_id: game for game in updated}
        if not by_id:
            return self
        unknown = set(by_id) - {game.game_id for game in self.games}
        if unknown:
            raise KeyError(f"Unknown game ids: {sorted(unknown)}")
        return replace(self, games=tuple(by_id.get(g.game_id, g) for g in self.games))

    def with_added_games(self, new_games: Iterable[Game]) -> "Schedule":
        games = self.games + tuple(new_games)
        return replace(self, games=tuple(sorted(games, key=lambda g: (g.week, g.game_id))))

    def expected_regular_season_games(self, team_count: int = SeasonSettings.TEAM_COUNT) -> int:
        return team_count * SeasonSettings.GAMES_PER_TEAM // 2
