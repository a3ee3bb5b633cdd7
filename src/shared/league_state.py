"""
League State Snapshot

The single immutable root every engine transition consumes and returns.
Optional subsystems (playoff bracket, offseason cycle, trade offers) are
explicit fields rather than ad hoc attachments.

Transitions never mutate a LeagueState; they build a new one with
``dataclasses.replace`` and the ``with_*`` helpers below. Callers persist
the returned snapshot before requesting the next transition.
"""

from dataclasses import dataclass, replace
from typing import Dict, Iterable, Optional, Tuple

from offseason.offseason_data import OffseasonState
from playoff_system.bracket_models import PlayoffBracket
from season_calendar.calendar_models import Calendar
from .game_models import Schedule
from .league_exceptions import DataIntegrityError
from .league_models import Player, Team, TradeOffer


@dataclass(frozen=True)
class LeagueState:
    """
    Complete league snapshot.

    Attributes:
        calendar: Current calendar position
        teams: All teams ordered by team_id
        schedule: Current season's schedule (playoff games appended per round)
        playoff_bracket: Current season's bracket once the regular season ends
        offseason: Live offseason cycle, None outside the offseason
        free_agents: Unsigned veterans
        prospects: Draft-eligible players not yet drafted or signed
        offseason_history: Archived, completed offseason cycles
        trade_offers: Pending trade offers
    """
    calendar: Calendar
    teams: Tuple[Team, ...]
    schedule: Schedule
    playoff_bracket: Optional[PlayoffBracket] = None
    offseason: Optional[OffseasonState] = None
    free_agents: Tuple[Player, ...] = ()
    prospects: Tuple[Player, ...] = ()
    offseason_history: Tuple[OffseasonState, ...] = ()
    trade_offers: Tuple[TradeOffer, ...] = ()

    def __post_init__(self):
        ids = [team.team_id for team in self.teams]
        if len(ids) != len(set(ids)):
            raise DataIntegrityError("Duplicate team ids in league", team_ids=ids)

    @property
    def season(self) -> int:
        return self.calendar.year

    @property
    def team_ids(self) -> Tuple[int, ...]:
        return tuple(team.team_id for team in self.teams)

    def has_team(self, team_id: int) -> bool:
        return any(team.team_id == team_id for team in self.teams)

    def team(self, team_id: int) -> Team:
        """
        Look up a team.

        Raises:
            DataIntegrityError: If the team is not part of the league
        """
        for team in self.teams:
            if team.team_id == team_id:
                return team
        raise DataIntegrityError(f"Team {team_id} not found", operation="lookup_team", team_id=team_id)

    def teams_in_conference(self, conference: str) -> Tuple[Team, ...]:
        return tuple(team for team in self.teams if team.conference == conference)

    def find_player(self, player_id: int) -> Tuple[Team, Player]:
        """
        Locate a rostered player.

        Raises:
            DataIntegrityError: If no team rosters the player
        """
        for team in self.teams:
            player = team.player(player_id)
            if player is not None:
                return team, player
        raise DataIntegrityError(
            f"Player {player_id} is not on any roster", operation="lookup_player", player_id=player_id
        )

    def free_agent(self, player_id: int) -> Optional[Player]:
        for player in self.free_agents:
            if player.player_id == player_id:
                return player
        return None

    def prospect(self, player_id: int) -> Optional[Player]:
        for player in self.prospects:
            if player.player_id == player_id:
                return player
        return None

    def with_teams(self, updated: Iterable[Team]) -> "LeagueState":
        """New snapshot with teams swapped in by team_id."""
        by_id: Dict[int, Team] = {team.team_id: team for team in updated}
        unknown = set(by_id) - set(self.team_ids)
        if unknown:
            raise DataIntegrityError(f"Unknown team ids: {sorted(unknown)}", operation="replace_teams")
        return replace(self, teams=tuple(by_id.get(t.team_id, t) for t in self.teams))

    def with_team(self, team: Team) -> "LeagueState":
        return self.with_teams([team])
