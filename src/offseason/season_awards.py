"""
Season Awards

Computes end-of-season honors from the final league snapshot. Awards are
derived from records and roster ratings only; there is no stat tracking in
the engine.

Awards:
- Champion: Super Bowl winner
- Best Record: top team by the standings comparator
- MVP: highest-rated player on the best-record team
- Coach of the Year: head coach of the team with the best point differential
"""

import logging
from typing import List, Optional, Sequence

from playoff_system.bracket_models import PlayoffBracket
from shared.league_models import Team
from standings.standings_engine import Comparator, StandingsEngine, default_comparator
from .offseason_data import AwardWinner


logger = logging.getLogger(__name__)

CHAMPION = "champion"
BEST_RECORD = "best_record"
MVP = "mvp"
COACH_OF_THE_YEAR = "coach_of_the_year"


def calculate_awards(
    teams: Sequence[Team],
    bracket: Optional[PlayoffBracket],
    comparator: Comparator = default_comparator
) -> List[AwardWinner]:
    """
    Calculate season awards.

    Args:
        teams: All league teams with final records
        bracket: Season bracket (champion award skipped if incomplete)
        comparator: Standings comparator used for Best Record

    Returns:
        AwardWinner list in presentation order
    """
    if not teams:
        return []

    awards = []
    by_id = {team.team_id: team for team in teams}

    if bracket is not None and bracket.champion_id is not None:
        champion = by_id.get(bracket.champion_id)
        if champion is not None:
            awards.append(AwardWinner(CHAMPION, champion.team_id, detail=champion.full_name))

    best = StandingsEngine(comparator).rank_teams(teams)[0]
    best_team = by_id[best.team_id]
    awards.append(AwardWinner(BEST_RECORD, best_team.team_id, detail=best.record_str))

    if best_team.roster:
        mvp = min(best_team.roster, key=lambda p: (-p.overall, p.player_id))
        awards.append(AwardWinner(MVP, best_team.team_id, mvp.player_id,
                                  detail=f"{mvp.position} {mvp.name} ({mvp.overall} OVR)"))

    coached = [team for team in teams if team.head_coach is not None]
    if coached:
        coy_team = min(coached, key=lambda t: (-t.record.point_differential, t.team_id))
        awards.append(AwardWinner(
            COACH_OF_THE_YEAR, coy_team.team_id,
            detail=f"{coy_team.head_coach.name} ({coy_team.record.point_differential:+d})"
        ))

    logger.info(f"Season awards: {', '.join(f'{a.award}=Team {a.team_id}' for a in awards)}")
    return awards
