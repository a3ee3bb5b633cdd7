"""
Shared League Entity Models

Immutable records for players, contracts, injuries, coaches, team records
and teams. They are imported by every engine package, so this module only
depends on config and constants.

All updates go through ``dataclasses.replace`` (or the helper methods
below, which wrap it) so a snapshot held by a caller is never modified.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, Optional, Tuple

from config.season_settings import SeasonSettings
from constants.roster_positions import STARTER_COUNTS


class InjurySeverity(Enum):
    """Roster availability of an injured player."""
    OUT = "out"                     # Short-term, stays on the active roster
    IR = "injured_reserve"          # Longer than the IR threshold

    @classmethod
    def for_weeks(cls, weeks_remaining: int) -> "InjurySeverity":
        """IR when the layoff exceeds the IR threshold, otherwise Out."""
        if weeks_remaining > SeasonSettings.IR_THRESHOLD_WEEKS:
            return cls.IR
        return cls.OUT


@dataclass(frozen=True)
class PlayerInjury:
    """An active injury. Cleared (set to None on the player) at zero weeks."""
    description: str
    weeks_remaining: int
    severity: InjurySeverity


@dataclass(frozen=True)
class Contract:
    """
    Player contract.

    Attributes:
        annual_salary: Cap hit per season in whole dollars
        years_remaining: Seasons left including the current one
        signing_bonus: Unamortized bonus; becomes dead money on release
        is_franchise_tagged: One-year tag contract
    """
    annual_salary: int
    years_remaining: int
    signing_bonus: int = 0
    is_franchise_tagged: bool = False

    @property
    def cap_hit(self) -> int:
        return self.annual_salary

    @property
    def dead_money_if_released(self) -> int:
        if self.years_remaining <= 0:
            return 0
        return self.signing_bonus

    def next_season(self) -> Optional["Contract"]:
        """
        Contract after one season is played out.

        One year of the signing bonus is amortized. Returns None when the
        season just finished was the last one.
        """
        if self.years_remaining <= 1:
            return None
        return replace(
            self,
            years_remaining=self.years_remaining - 1,
            signing_bonus=self.signing_bonus - self.signing_bonus // self.years_remaining,
        )


@dataclass(frozen=True)
class Player:
    player_id: int
    name: str
    position: str
    overall: int
    age: int
    potential: int
    contract: Optional[Contract] = None
    injury: Optional[PlayerInjury] = None

    @property
    def is_injured(self) -> bool:
        return self.injury is not None and self.injury.weeks_remaining > 0

    @property
    def cap_hit(self) -> int:
        return self.contract.cap_hit if self.contract else 0


@dataclass(frozen=True)
class Coach:
    name: str
    experience_years: int = 0


@dataclass(frozen=True)
class TeamRecord:
    """
    Regular-season record.

    ``streak`` is signed: +3 is a three-game winning streak, -2 a two-game
    losing streak, 0 after a tie or before the first game.
    """
    wins: int = 0
    losses: int = 0
    ties: int = 0
    points_for: int = 0
    points_against: int = 0
    streak: int = 0

    @property
    def games_played(self) -> int:
        return self.wins + self.losses + self.ties

    @property
    def win_percentage(self) -> float:
        """Win percentage counting ties as half a win."""
        if self.games_played == 0:
            return 0.0
        return (self.wins + 0.5 * self.ties) / self.games_played

    @property
    def point_differential(self) -> int:
        return self.points_for - self.points_against

    @property
    def record_string(self) -> str:
        """Format record as string (e.g., '10-6-1')."""
        if self.ties > 0:
            return f"{self.wins}-{self.losses}-{self.ties}"
        return f"{self.wins}-{self.losses}"

    @property
    def streak_string(self) -> str:
        """'W3', 'L2' or '-' when there is no active streak."""
        if self.streak > 0:
            return f"W{self.streak}"
        if self.streak < 0:
            return f"L{-self.streak}"
        return "-"

    def with_game(self, points_for: int, points_against: int) -> "TeamRecord":
        """
        Fold one completed game into the record.

        Args:
            points_for: Points this team scored
            points_against: Points the opponent scored

        Returns:
            New TeamRecord
        """
        if points_for > points_against:
            streak = self.streak + 1 if self.streak > 0 else 1
            return replace(
                self,
                wins=self.wins + 1,
                points_for=self.points_for + points_for,
                points_against=self.points_against + points_against,
                streak=streak,
            )
        if points_for < points_against:
            streak = self.streak - 1 if self.streak < 0 else -1
            return replace(
                self,
                losses=self.losses + 1,
                points_for=self.points_for + points_for,
                points_against=self.points_against + points_against,
                streak=streak,
            )
        return replace(
            self,
            ties=self.ties + 1,
            points_for=self.points_for + points_for,
            points_against=self.points_against + points_against,
            streak=0,
        )


@dataclass(frozen=True)
class Team:
    team_id: int
    city: str
    nickname: str
    abbreviation: str
    conference: str
    division: str
    record: TeamRecord = TeamRecord()
    roster: Tuple[Player, ...] = ()
    head_coach: Optional[Coach] = None
    dead_money: int = 0

    @property
    def full_name(self) -> str:
        return f"{self.city} {self.nickname}"

    @property
    def roster_size(self) -> int:
        return len(self.roster)

    @property
    def payroll(self) -> int:
        """Total cap charges: active contracts plus dead money."""
        return sum(player.cap_hit for player in self.roster) + self.dead_money

    @property
    def projected_strength(self) -> float:
        """Average overall of the projected starters at every position."""
        starters = []
        for position, count in STARTER_COUNTS.items():
            starters.extend(p.overall for p in self.players_at(position)[:count])
        if not starters:
            return 0.0
        return sum(starters) / len(starters)

    def player(self, player_id: int) -> Optional[Player]:
        for player in self.roster:
            if player.player_id == player_id:
                return player
        return None

    def players_at(self, position: str) -> Tuple[Player, ...]:
        """Players at a position, best overall first (ties by player_id)."""
        return tuple(sorted(
            (p for p in self.roster if p.position == position),
            key=lambda p: (-p.overall, p.player_id)
        ))

    def with_roster(self, roster) -> "Team":
        return replace(self, roster=tuple(roster))

    def with_players_replaced(self, updated: Dict[int, Player]) -> "Team":
        """Swap in new versions of existing players, keyed by player_id."""
        if not updated:
            return self
        return replace(self, roster=tuple(updated.get(p.player_id, p) for p in self.roster))

    def without_players(self, player_ids) -> "Team":
        removed = set(player_ids)
        return replace(self, roster=tuple(p for p in self.roster if p.player_id not in removed))

    def __str__(self):
        return f"{self.full_name} ({self.record.record_string})"


@dataclass(frozen=True)
class TradeOffer:
    """
    Pending trade offer. Expiry is a plain week number; offers past it are
    dropped by the week orchestrator.
    """
    offer_id: str
    from_team_id: int
    to_team_id: int
    offered_player_ids: Tuple[int, ...]
    requested_player_ids: Tuple[int, ...]
    expires_week: int
