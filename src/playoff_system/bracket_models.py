"""
Playoff Bracket Data Models

The bracket holds both conferences' seeds and every matchup generated so
far. Rounds are appended one at a time as the previous round completes.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, List, Optional, Tuple

from config.season_settings import SeasonSettings
from constants.team_ids import CONFERENCES
from .playoff_exceptions import InvalidBracketException
from .seeding_models import PlayoffSeeding


class PlayoffRound(Enum):
    """Playoff rounds in the order they are played."""
    WILD_CARD = "wild_card"
    DIVISIONAL = "divisional"
    CONFERENCE = "conference"
    SUPER_BOWL = "super_bowl"

    @property
    def week(self) -> int:
        """Calendar week the round is played in (19-22)."""
        return SeasonSettings.FIRST_PLAYOFF_WEEK + list(PlayoffRound).index(self)

    @property
    def expected_game_count(self) -> int:
        return {
            PlayoffRound.WILD_CARD: 6,      # 3 AFC + 3 NFC
            PlayoffRound.DIVISIONAL: 4,     # 2 AFC + 2 NFC
            PlayoffRound.CONFERENCE: 2,     # 1 AFC + 1 NFC
            PlayoffRound.SUPER_BOWL: 1,
        }[self]

    @property
    def display_name(self) -> str:
        return {
            PlayoffRound.WILD_CARD: "Wild Card",
            PlayoffRound.DIVISIONAL: "Divisional Round",
            PlayoffRound.CONFERENCE: "Conference Championship",
            PlayoffRound.SUPER_BOWL: "Super Bowl",
        }[self]

    @property
    def next_round(self) -> Optional["PlayoffRound"]:
        rounds = list(PlayoffRound)
        index = rounds.index(self)
        return rounds[index + 1] if index + 1 < len(rounds) else None

    @classmethod
    def for_week(cls, week: int) -> "PlayoffRound":
        for playoff_round in cls:
            if playoff_round.week == week:
                return playoff_round
        raise ValueError(f"Week {week} is not a playoff week")


TOTAL_PLAYOFF_GAMES = sum(r.expected_game_count for r in PlayoffRound)


@dataclass(frozen=True)
class PlayoffMatchup:
    """
    One playoff game in bracket terms.

    The lower seed number hosts. The Super Bowl is a neutral-site game with
    the NFC champion listed as home and conference set to None.
    """
    matchup_id: str
    round: PlayoffRound
    conference: Optional[str]
    home_seed: int
    away_seed: int
    home_team_id: int
    away_team_id: int
    home_score: Optional[int] = None
    away_score: Optional[int] = None
    winner_id: Optional[int] = None
    is_complete: bool = False

    @property
    def loser_id(self) -> Optional[int]:
        if self.winner_id is None:
            return None
        return self.away_team_id if self.winner_id == self.home_team_id else self.home_team_id

    @property
    def is_neutral_site(self) -> bool:
        return self.round is PlayoffRound.SUPER_BOWL

    @property
    def team_ids(self) -> Tuple[int, int]:
        return (self.home_team_id, self.away_team_id)

    def seed_of(self, team_id: int) -> int:
        return self.home_seed if team_id == self.home_team_id else self.away_seed

    def with_result(self, home_score: int, away_score: int) -> "PlayoffMatchup":
        """
        Record the final score.

        Raises:
            ValueError: On a tie (playoff games always produce a winner)
        """
        if home_score == away_score:
            raise ValueError(f"Playoff matchup {self.matchup_id} cannot end in a tie")
        winner_id = self.home_team_id if home_score > away_score else self.away_team_id
        return replace(self, home_score=home_score, away_score=away_score,
                       winner_id=winner_id, is_complete=True)

    @property
    def matchup_string(self) -> str:
        """e.g. '(7) Team 6 @ (2) Team 1'."""
        if self.is_neutral_site:
            return f"Team {self.away_team_id} vs Team {self.home_team_id}"
        return f"({self.away_seed}) Team {self.away_team_id} @ ({self.home_seed}) Team {self.home_team_id}"


@dataclass(frozen=True)
class PlayoffBracket:
    """
    Seeds plus all matchups generated for a season.

    A complete bracket holds 6 + 4 + 2 + 1 = 13 matchups and one champion.
    """
    season: int
    seeding: PlayoffSeeding
    matchups: Tuple[PlayoffMatchup, ...] = ()

    def round_matchups(self, playoff_round: PlayoffRound) -> Tuple[PlayoffMatchup, ...]:
        return tuple(m for m in self.matchups if m.round is playoff_round)

    def matchup(self, matchup_id: str) -> Optional[PlayoffMatchup]:
        for matchup in self.matchups:
            if matchup.matchup_id == matchup_id:
                return matchup
        return None

    @property
    def current_round(self) -> Optional[PlayoffRound]:
        """Latest round with generated matchups."""
        current = None
        for playoff_round in PlayoffRound:
            if self.round_matchups(playoff_round):
                current = playoff_round
        return current

    def is_round_complete(self, playoff_round: PlayoffRound) -> bool:
        games = self.round_matchups(playoff_round)
        return bool(games) and all(m.is_complete for m in games)

    @property
    def is_complete(self) -> bool:
        return self.is_round_complete(PlayoffRound.SUPER_BOWL)

    @property
    def champion_id(self) -> Optional[int]:
        super_bowl = self.round_matchups(PlayoffRound.SUPER_BOWL)
        if super_bowl and super_bowl[0].is_complete:
            return super_bowl[0].winner_id
        return None

    @property
    def runner_up_id(self) -> Optional[int]:
        super_bowl = self.round_matchups(PlayoffRound.SUPER_BOWL)
        if super_bowl and super_bowl[0].is_complete:
            return super_bowl[0].loser_id
        return None

    def eliminated_by_round(self) -> Dict[PlayoffRound, List[int]]:
        """Losers of each completed matchup, grouped by round."""
        eliminated: Dict[PlayoffRound, List[int]] = {r: [] for r in PlayoffRound}
        for matchup in self.matchups:
            if matchup.is_complete:
                eliminated[matchup.round].append(matchup.loser_id)
        return eliminated

    def with_matchups(self, matchups) -> "PlayoffBracket":
        """Append newly generated matchups."""
        return replace(self, matchups=self.matchups + tuple(matchups))

    def with_result(self, matchup_id: str, home_score: int, away_score: int) -> "PlayoffBracket":
        found = False
        updated = []
        for matchup in self.matchups:
            if matchup.matchup_id == matchup_id:
                found = True
                matchup = matchup.with_result(home_score, away_score)
            updated.append(matchup)
        if not found:
            raise KeyError(f"Unknown playoff matchup: {matchup_id}")
        return replace(self, matchups=tuple(updated))

    def validate(self) -> bool:
        """
        Validate bracket structure.

        Checks every generated round for its game count and conference
        split, and that no team appears twice within a round.

        Raises:
            InvalidBracketException: If the bracket is malformed
        """
        for playoff_round in PlayoffRound:
            games = self.round_matchups(playoff_round)
            if not games:
                continue

            if len(games) != playoff_round.expected_game_count:
                raise InvalidBracketException(
                    f"Expected {playoff_round.expected_game_count} games for "
                    f"{playoff_round.value}, got {len(games)}",
                    round_name=playoff_round.value
                )

            team_ids = [team_id for m in games for team_id in m.team_ids]
            if len(team_ids) != len(set(team_ids)):
                raise InvalidBracketException(
                    f"A team appears twice in the {playoff_round.value} round",
                    round_name=playoff_round.value
                )

            if playoff_round is not PlayoffRound.SUPER_BOWL:
                expected_per_conf = playoff_round.expected_game_count // 2
                for conference in CONFERENCES:
                    count = sum(1 for m in games if m.conference == conference)
                    if count != expected_per_conf:
                        raise InvalidBracketException(
                            f"Expected {expected_per_conf} {conference} games in "
                            f"{playoff_round.value}, got {count}",
                            round_name=playoff_round.value
                        )

        if len(self.matchups) > TOTAL_PLAYOFF_GAMES:
            raise InvalidBracketException(
                f"Bracket has {len(self.matchups)} matchups, maximum is {TOTAL_PLAYOFF_GAMES}"
            )

        return True
