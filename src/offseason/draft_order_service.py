"""
Draft Order Service

Calculates draft order after the Super Bowl from regular season records
and playoff results.

Draft Order Rules:
1. Non-playoff teams (worst → best by the standings comparator)
2. Wild Card Round losers (worst → best)
3. Divisional Round losers (worst → best)
4. Conference Championship losers (worst → best)
5. Super Bowl loser
6. Super Bowl winner
7. Rounds 2-7: Same order as Round 1

"Worst → best" uses the same comparator as the standings, reversed, so
teams the comparator cannot separate keep team_id order.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from config.season_settings import SeasonSettings
from playoff_system.bracket_models import PlayoffBracket, PlayoffRound
from shared.league_exceptions import DataIntegrityError
from shared.league_models import Team
from standings.standings_engine import Comparator, default_comparator, sort_standings
from standings.standings_models import TeamStanding


# Configure module logger
logger = logging.getLogger(__name__)


# Elimination groups in draft order, with the reason recorded on each pick
ELIMINATION_GROUPS: Tuple[Tuple[PlayoffRound, str], ...] = (
    (PlayoffRound.WILD_CARD, "wild_card_loss"),
    (PlayoffRound.DIVISIONAL, "divisional_loss"),
    (PlayoffRound.CONFERENCE, "conference_loss"),
    (PlayoffRound.SUPER_BOWL, "super_bowl_loss"),
)


@dataclass(frozen=True)
class DraftPickOrder:
    """Single draft pick in order"""
    round_number: int
    pick_in_round: int
    overall_pick: int
    team_id: int
    reason: str          # e.g., "non_playoff", "wild_card_loss", "super_bowl_win"
    team_record: str     # e.g., "4-13"

    def __str__(self) -> str:
        return (f"Round {self.round_number}, Pick {self.pick_in_round} "
                f"(#{self.overall_pick} overall): Team {self.team_id} - "
                f"{self.reason} ({self.team_record})")


def rookie_contract_salary(round_number: int) -> int:
    """Annual salary of a drafted rookie; earlier rounds earn more."""
    return SeasonSettings.MINIMUM_SALARY * (1 + SeasonSettings.DRAFT_ROUNDS - round_number)


ROOKIE_CONTRACT_YEARS = 4


class DraftOrderService:
    """
    Service for calculating draft order from records and playoff results.

    Usage:
        service = DraftOrderService()
        order = service.calculate_draft_order(league.teams, league.playoff_bracket)
        picks = service.build_pick_list(order, league.teams)
    """

    PICKS_PER_ROUND = SeasonSettings.TEAM_COUNT

    def __init__(self, comparator: Comparator = default_comparator):
        self.comparator = comparator

    def calculate_draft_order(
        self,
        teams: Sequence[Team],
        bracket: Optional[PlayoffBracket]
    ) -> Tuple[int, ...]:
        """
        Calculate the Round 1 order.

        Args:
            teams: All league teams
            bracket: Completed playoff bracket, or None to rank every team by
                record alone

        Returns:
            Team ids, first pick first

        Raises:
            DataIntegrityError: If the bracket names a team not in the league
                or is missing its champion
        """
        standings = {team.team_id: TeamStanding.from_team(team) for team in teams}

        if bracket is None:
            order = self._worst_to_best(standings.values())
            logger.info(f"Draft order from records only: {len(order)} teams")
            return tuple(order)

        champion_id = bracket.champion_id
        if champion_id is None:
            raise DataIntegrityError(
                "Draft order requires a completed Super Bowl",
                operation="calculate_draft_order", season=bracket.season
            )

        eliminated = bracket.eliminated_by_round()
        playoff_ids = set(bracket.seeding.playoff_team_ids) | {champion_id}
        unknown = playoff_ids - set(standings)
        if unknown:
            raise DataIntegrityError(
                f"Bracket references unknown teams: {sorted(unknown)}",
                operation="calculate_draft_order"
            )

        # 1. Non-playoff teams (worst → best)
        order = self._worst_to_best(s for tid, s in standings.items() if tid not in playoff_ids)

        # 2-5. Playoff losers by round eliminated (worst → best within a round)
        for playoff_round, _reason in ELIMINATION_GROUPS:
            losers = [standings[tid] for tid in eliminated[playoff_round]]
            order.extend(self._worst_to_best(losers))

        # 6. Champion picks last
        order.append(champion_id)

        if len(order) != len(standings) or len(set(order)) != len(order):
            raise DataIntegrityError(
                f"Draft order covers {len(set(order))} of {len(standings)} teams",
                operation="calculate_draft_order"
            )

        logger.info(f"Draft order calculated: #1 Team {order[0]}, #{len(order)} Team {order[-1]}")
        return tuple(order)

    def build_pick_list(
        self,
        draft_order: Sequence[int],
        teams: Iterable[Team],
        bracket: Optional[PlayoffBracket] = None,
        rounds: int = SeasonSettings.DRAFT_ROUNDS
    ) -> List[DraftPickOrder]:
        """
        Expand Round 1 order into every pick.

        Args:
            draft_order: Round 1 team ids
            teams: All teams (for record strings)
            bracket: Bracket used to label pick reasons
            rounds: Number of rounds

        Returns:
            rounds × len(draft_order) picks in selection order
        """
        records = {team.team_id: team.record.record_string for team in teams}
        reasons = self._pick_reasons(bracket)

        picks = []
        overall_pick = 1
        for round_number in range(1, rounds + 1):
            for pick_in_round, team_id in enumerate(draft_order, start=1):
                picks.append(DraftPickOrder(
                    round_number=round_number,
                    pick_in_round=pick_in_round,
                    overall_pick=overall_pick,
                    team_id=team_id,
                    reason=reasons.get(team_id, "non_playoff"),
                    team_record=records.get(team_id, "0-0"),
                ))
                overall_pick += 1

        logger.debug(f"Generated {len(picks)} total picks across {rounds} rounds")
        return picks

    def pick_for(self, draft_order: Sequence[int], overall_pick: int) -> DraftPickOrder:
        """
        Locate one pick by its overall number (1-based).

        Raises:
            ValueError: If the pick is outside the draft
        """
        per_round = len(draft_order)
        if per_round == 0 or not 1 <= overall_pick <= per_round * SeasonSettings.DRAFT_ROUNDS:
            raise ValueError(f"Pick #{overall_pick} is outside the draft")
        round_number, index = divmod(overall_pick - 1, per_round)
        return DraftPickOrder(
            round_number=round_number + 1,
            pick_in_round=index + 1,
            overall_pick=overall_pick,
            team_id=draft_order[index],
            reason="",
            team_record="",
        )

    def _worst_to_best(self, standings: Iterable[TeamStanding]) -> List[int]:
        ranked = sort_standings(standings, lambda a, b: self.comparator(b, a))
        return [row.team_id for row in ranked]

    @staticmethod
    def _pick_reasons(bracket: Optional[PlayoffBracket]) -> Dict[int, str]:
        if bracket is None:
            return {}
        reasons = {}
        eliminated = bracket.eliminated_by_round()
        for playoff_round, reason in ELIMINATION_GROUPS:
            for team_id in eliminated[playoff_round]:
                reasons[team_id] = reason
        if bracket.champion_id is not None:
            reasons[bracket.champion_id] = "super_bowl_win"
        return reasons
