"""
Injury Tracker

Applies a week's new injuries and ticks every player's recovery counter.

Order within a week: new injuries are applied first, then every player in
the league with weeks remaining is decremented (whether or not the team
played). A counter reaching zero clears the injury.
"""

import logging
from dataclasses import replace
from typing import Dict, Iterable, List, Tuple

from shared.league_exceptions import DataIntegrityError
from shared.league_models import InjurySeverity, PlayerInjury, Team
from .models.injury_models import InjuryReport


logger = logging.getLogger(__name__)


def apply_new_injuries(
    teams: Dict[int, Team],
    reports: Iterable[InjuryReport]
) -> Dict[int, Team]:
    """
    Put newly injured players on the injury list.

    Severity is IR when the layoff exceeds the IR threshold, otherwise Out.
    A player already injured keeps the longer of the two layoffs.

    Args:
        teams: team_id -> Team (not modified)
        reports: New injuries from this week's games

    Returns:
        New team_id -> Team mapping

    Raises:
        DataIntegrityError: Report names an unknown team, or a player not on that team
    """
    updated = dict(teams)
    for report in reports:
        team = updated.get(report.team_id)
        if team is None:
            raise DataIntegrityError(
                f"Injury report for unknown team {report.team_id}",
                operation="apply_injuries", team_id=report.team_id
            )
        player = team.player(report.player_id)
        if player is None:
            raise DataIntegrityError(
                f"Injury report for player {report.player_id} not on team {report.team_id}",
                operation="apply_injuries", team_id=report.team_id, player_id=report.player_id
            )
        if report.weeks_remaining <= 0:
            continue

        weeks = report.weeks_remaining
        if player.injury is not None:
            weeks = max(weeks, player.injury.weeks_remaining)
        injury = PlayerInjury(report.description, weeks, InjurySeverity.for_weeks(weeks))
        updated[team.team_id] = team.with_players_replaced({player.player_id: replace(player, injury=injury)})
        logger.debug(f"{report} ({injury.severity.value})")
    return updated


def tick_recovery(teams: Dict[int, Team]) -> Tuple[Dict[int, Team], List[int]]:
    """
    Decrement every injured player's weeks remaining by one.

    Returns:
        (new team_id -> Team mapping, ids of players whose injury cleared)
    """
    updated = {}
    recovered: List[int] = []
    for team_id, team in teams.items():
        healed = {}
        for player in team.roster:
            if player.injury is None or player.injury.weeks_remaining <= 0:
                continue
            weeks = player.injury.weeks_remaining - 1
            if weeks == 0:
                healed[player.player_id] = replace(player, injury=None)
                recovered.append(player.player_id)
            else:
                healed[player.player_id] = replace(player, injury=replace(player.injury, weeks_remaining=weeks))
        updated[team_id] = team.with_players_replaced(healed)

    if recovered:
        logger.debug(f"{len(recovered)} players recovered from injury")
    return updated, sorted(recovered)
