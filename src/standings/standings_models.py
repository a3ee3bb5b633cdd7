"""
Standings data models.
"""

from dataclasses import dataclass
from typing import Dict, Tuple

from shared.league_models import Team, TeamRecord


@dataclass(frozen=True)
class TeamStanding:
    """A team's row in the standings table."""
    team_id: int
    conference: str
    division: str
    record: TeamRecord
    division_rank: int = 0

    @classmethod
    def from_team(cls, team: Team) -> "TeamStanding":
        return cls(
            team_id=team.team_id,
            conference=team.conference,
            division=team.division,
            record=team.record,
        )

    @property
    def wins(self) -> int:
        return self.record.wins

    @property
    def losses(self) -> int:
        return self.record.losses

    @property
    def ties(self) -> int:
        return self.record.ties

    @property
    def win_percentage(self) -> float:
        return self.record.win_percentage

    @property
    def record_str(self) -> str:
        return self.record.record_string


# conference -> division -> standings ranked best to worst
Standings = Dict[str, Dict[str, Tuple[TeamStanding, ...]]]
