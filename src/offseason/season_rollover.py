"""
Season Rollover

Roster bookkeeping applied when the offseason wraps into the next league
year:
- Every contract plays out one season; a contract that runs out sends the
  player to free agency
- Contracts signed during this offseason (free agents, draft picks, UDFAs
  and tags) cover the coming season and are not charged a year
- Dead money from the finished season is cleared
- Every player ages one year
"""

import logging
from dataclasses import dataclass, replace
from typing import List, Set, Tuple

from shared.league_models import Player
from shared.league_state import LeagueState
from .offseason_data import ContractDecisionType, OffseasonData


logger = logging.getLogger(__name__)

TAG_DECISIONS = (ContractDecisionType.FRANCHISE_TAG, ContractDecisionType.TRANSITION_TAG)


@dataclass(frozen=True)
class RolloverResult:
    """League after the rollover plus the players whose contracts ran out."""
    state: LeagueState
    expired_player_ids: Tuple[int, ...]
    dead_money_cleared: int


def new_contract_player_ids(data: OffseasonData) -> Set[int]:
    """Players whose current contract was signed during this offseason."""
    player_ids = {signing.player_id for signing in data.free_agent_signings}
    player_ids.update(selection.player_id for selection in data.draft_selections)
    player_ids.update(signing.player_id for signing in data.udfa_signings)
    player_ids.update(d.player_id for d in data.contract_decisions if d.decision in TAG_DECISIONS)
    return player_ids


def _aged(player: Player) -> Player:
    return replace(player, age=player.age + 1)


def roll_over_league(league: LeagueState, data: OffseasonData) -> RolloverResult:
    """
    Play out one contract year for every rostered player.

    Args:
        league: Snapshot at the end of SeasonStart
        data: The finishing cycle's offseason data (identifies new contracts)

    Returns:
        RolloverResult with expired players moved to ``free_agents``
    """
    fresh = new_contract_player_ids(data)
    expired: List[Player] = []
    teams = []
    for team in league.teams:
        roster = []
        for player in team.roster:
            contract = player.contract
            if contract is not None and player.player_id not in fresh:
                contract = contract.next_season()
                if contract is None:
                    expired.append(_aged(replace(player, contract=None)))
                    continue
            roster.append(_aged(replace(player, contract=contract)))
        teams.append(replace(team, roster=tuple(roster), dead_money=0))

    dead_money = sum(team.dead_money for team in league.teams)
    state = replace(
        league,
        teams=tuple(teams),
        free_agents=tuple(_aged(p) for p in league.free_agents) + tuple(expired),
        prospects=tuple(_aged(p) for p in league.prospects),
    )
    logger.info(f"Season rollover: {len(expired)} contracts expired, "
                f"${dead_money:,} dead money cleared")
    return RolloverResult(state, tuple(p.player_id for p in expired), dead_money)
