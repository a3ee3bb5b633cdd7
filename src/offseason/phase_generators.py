"""
Offseason Phase Entry Generators

Each offseason phase has an entry routine that derives phase-scoped data
from the league snapshot. Generators are pure: they read the league and
return the new values for the fields the phase owns (see
``PHASE_GENERATED_FIELDS``). The orchestrator writes them into
``OffseasonData``, so re-entering a phase overwrites only its own fields.

Randomized generators (combine, preseason) seed ``random.Random`` from the
season and phase, so re-entry always produces the same data.
"""

import logging
import random
from typing import Any, Callable, Dict, List, Tuple

from config.season_settings import SeasonSettings
from constants.roster_positions import STARTER_COUNTS
from shared.league_state import LeagueState
from standings.standings_engine import Comparator, default_comparator
from .draft_order_service import DraftOrderService
from .offseason_data import (
    CombineResult, ExpiringContract, OffseasonData, OtaReport,
    OwnerExpectations, PositionBattle, PreseasonGameRecord
)
from .offseason_exceptions import MissingDependencyError
from .offseason_phases import OffseasonPhase
from .season_awards import calculate_awards


logger = logging.getLogger(__name__)

PhaseGenerator = Callable[[LeagueState, OffseasonData], Dict[str, Any]]

OTA_MIN_UPSIDE = 8
OTA_MAX_AGE = 24
OTA_REPORTS_PER_TEAM = 2


class PhaseDataGenerator:
    """
    Phase entry routines, keyed by OffseasonPhase.

    Usage:
        generator = PhaseDataGenerator()
        updates = generator.generate(OffseasonPhase.UDFA, league, data)
        data = dataclasses.replace(data, **updates)
    """

    def __init__(self, comparator: Comparator = default_comparator):
        self.comparator = comparator
        self.draft_order_service = DraftOrderService(comparator)
        self._generators: Dict[OffseasonPhase, PhaseGenerator] = {
            OffseasonPhase.SEASON_END: self.season_end,
            OffseasonPhase.COACHING_DECISIONS: self.coaching_decisions,
            OffseasonPhase.CONTRACT_MANAGEMENT: self.contract_management,
            OffseasonPhase.COMBINE: self.combine,
            OffseasonPhase.FREE_AGENCY: self.free_agency,
            OffseasonPhase.DRAFT: self.draft,
            OffseasonPhase.UDFA: self.udfa,
            OffseasonPhase.OTAS: self.otas,
            OffseasonPhase.TRAINING_CAMP: self.training_camp,
            OffseasonPhase.PRESEASON: self.preseason,
            OffseasonPhase.FINAL_CUTS: self.final_cuts,
            OffseasonPhase.SEASON_START: self.season_start,
        }
        missing = set(OffseasonPhase) - set(self._generators)
        if missing:
            raise RuntimeError(f"No entry generator for phases: {sorted(p.name for p in missing)}")

    def generate(self, phase: OffseasonPhase, league: LeagueState, data: OffseasonData) -> Dict[str, Any]:
        """
        Run one phase's entry routine.

        Args:
            phase: Phase being entered
            league: Current league snapshot
            data: Current offseason data (read-only)

        Returns:
            Field name -> new value for the phase's generated fields

        Raises:
            MissingDependencyError: If the phase needs data that does not exist yet
        """
        updates = self._generators[phase](league, data)
        logger.debug(f"Generated {phase} data: {sorted(updates)}")
        return updates

    # ========================================================================
    # ENTRY ROUTINES
    # ========================================================================

    def season_end(self, league: LeagueState, data: OffseasonData) -> Dict[str, Any]:
        draft_order = self.draft_order_service.calculate_draft_order(league.teams, league.playoff_bracket)
        awards = calculate_awards(league.teams, league.playoff_bracket, self.comparator)
        return {"draft_order": draft_order, "awards": tuple(awards)}

    def coaching_decisions(self, league: LeagueState, data: OffseasonData) -> Dict[str, Any]:
        hot_seat = tuple(
            team.team_id for team in league.teams
            if team.record.win_percentage < SeasonSettings.HOT_SEAT_WIN_PERCENTAGE
        )
        return {"hot_seat_team_ids": hot_seat}

    def contract_management(self, league: LeagueState, data: OffseasonData) -> Dict[str, Any]:
        expiring = []
        for team in league.teams:
            for player in sorted(team.roster, key=lambda p: p.player_id):
                if player.contract is not None and player.contract.years_remaining <= 1:
                    expiring.append(ExpiringContract(
                        team_id=team.team_id,
                        player_id=player.player_id,
                        annual_salary=player.contract.annual_salary,
                        years_remaining=player.contract.years_remaining,
                    ))
        return {"expiring_contracts": tuple(expiring)}

    def combine(self, league: LeagueState, data: OffseasonData) -> Dict[str, Any]:
        rng = random.Random(f"combine-{league.season}")
        results = []
        for prospect in sorted(league.prospects, key=lambda p: p.player_id):
            athleticism = (prospect.overall - 50) / 50
            results.append(CombineResult(
                player_id=prospect.player_id,
                position=prospect.position,
                forty_yard_dash=round(4.95 - 0.4 * athleticism + rng.uniform(-0.15, 0.15), 2),
                bench_press=max(5, int(18 + 8 * athleticism + rng.randint(-4, 4))),
                vertical_jump=round(31.0 + 6.0 * athleticism + rng.uniform(-2.5, 2.5), 1),
                grade=max(0, min(100, prospect.overall + rng.randint(-5, 5))),
            ))
        return {"combine_results": tuple(results)}

    def free_agency(self, league: LeagueState, data: OffseasonData) -> Dict[str, Any]:
        return {"free_agency_day": 1}

    def draft(self, league: LeagueState, data: OffseasonData) -> Dict[str, Any]:
        if not data.draft_order:
            raise MissingDependencyError(
                "Cannot open the draft before the draft order exists",
                phase=str(OffseasonPhase.DRAFT),
                dependency="draft_order",
            )
        return {}

    def udfa(self, league: LeagueState, data: OffseasonData) -> Dict[str, Any]:
        pool = sorted(league.prospects, key=lambda p: (-p.overall, p.player_id))
        return {"udfa_pool": tuple(p.player_id for p in pool)}

    def otas(self, league: LeagueState, data: OffseasonData) -> Dict[str, Any]:
        reports = []
        for team in league.teams:
            risers = [
                p for p in team.roster
                if p.age <= OTA_MAX_AGE and p.potential - p.overall >= OTA_MIN_UPSIDE
            ]
            risers.sort(key=lambda p: (p.overall - p.potential, p.player_id))
            for player in risers[:OTA_REPORTS_PER_TEAM]:
                reports.append(OtaReport(
                    team_id=team.team_id,
                    player_id=player.player_id,
                    note=(f"{player.position} {player.name} is flashing upside: "
                          f"{player.overall} OVR, {player.potential} POT"),
                ))
        return {"ota_reports": tuple(reports)}

    def training_camp(self, league: LeagueState, data: OffseasonData) -> Dict[str, Any]:
        battles = []
        for team in league.teams:
            for position, starters in STARTER_COUNTS.items():
                depth = team.players_at(position)
                if len(depth) <= starters:
                    continue
                incumbent, challenger = depth[starters - 1], depth[starters]
                margin = incumbent.overall - challenger.overall
                if margin <= SeasonSettings.POSITION_BATTLE_MARGIN:
                    battles.append(PositionBattle(
                        team_id=team.team_id,
                        position=position,
                        player_ids=(incumbent.player_id, challenger.player_id),
                        margin=margin,
                    ))
        return {"position_battles": tuple(battles)}

    def preseason(self, league: LeagueState, data: OffseasonData) -> Dict[str, Any]:
        team_ids = list(league.team_ids)
        strength = {team.team_id: team.projected_strength for team in league.teams}
        games: List[PreseasonGameRecord] = []
        for week in range(1, SeasonSettings.PRESEASON_EXHIBITION_WEEKS + 1):
            rng = random.Random(f"preseason-{league.season}-{week}")
            order = sorted(team_ids)
            rng.shuffle(order)
            for home_id, away_id in zip(order[::2], order[1::2]):
                edge = int(round((strength[home_id] - strength[away_id]) / 4))
                games.append(PreseasonGameRecord(
                    week=week,
                    home_team_id=home_id,
                    away_team_id=away_id,
                    home_score=max(0, rng.randint(6, 30) + edge),
                    away_score=max(0, rng.randint(6, 30) - edge),
                ))
        return {"preseason_games": tuple(games)}

    def final_cuts(self, league: LeagueState, data: OffseasonData) -> Dict[str, Any]:
        excess = sorted(
            (team.team_id, team.roster_size - SeasonSettings.ROSTER_LIMIT)
            for team in league.teams
            if team.roster_size > SeasonSettings.ROSTER_LIMIT
        )
        return {"roster_excess": tuple(excess)}

    def season_start(self, league: LeagueState, data: OffseasonData) -> Dict[str, Any]:
        return {"owner_expectations": tuple(calculate_owner_expectations(league.teams))}


def calculate_owner_expectations(teams) -> List[OwnerExpectations]:
    """
    Set win targets from projected roster strength.

    The strongest projected roster is expected to win 13 games, the weakest
    4, linearly in between. Minimum and stretch targets sit two wins either
    side; stronger teams get less patience.
    """
    ranked: List[Tuple[float, int]] = sorted(
        ((team.projected_strength, team.team_id) for team in teams),
        key=lambda item: (-item[0], item[1])
    )
    count = len(ranked)
    span = max(1, count - 1)
    expectations = []
    for rank, (_strength, team_id) in enumerate(ranked, start=1):
        expected = int(round(4 + (count - rank) / span * 9))
        expectations.append(OwnerExpectations(
            team_id=team_id,
            projected_rank=rank,
            min_wins=max(0, expected - 2),
            expected_wins=expected,
            stretch_wins=min(SeasonSettings.GAMES_PER_TEAM, expected + 2),
            playoffs_expected=rank <= 2 * SeasonSettings.PLAYOFF_TEAMS_PER_CONFERENCE,
            patience=20 + int(round(80 * (rank - 1) / span)),
        ))
    expectations.sort(key=lambda e: e.team_id)
    return expectations
