"""
Salary Cap Calculator

Cap arithmetic for offseason contract actions:
- Team cap space (active contracts plus dead money)
- Release savings and dead money
- Transaction validation against the cap

Sign convention: ``cap_impact`` is negative when a move consumes space
(a signing) and positive when it frees space (a release).
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from config.season_settings import SeasonSettings
from shared.league_models import Contract, Player, Team


@dataclass(frozen=True)
class CapCheckResult:
    """Outcome of ``CapCalculator.validate_transaction``."""
    passed: bool
    cap_delta: int
    cap_space_before: int
    message: str = ""

    @property
    def cap_space_after(self) -> int:
        return self.cap_space_before + self.cap_delta


class CapCalculator:
    """
    Salary cap calculation engine.

    Pure arithmetic over Team snapshots; holds only the cap ceiling.
    """

    def __init__(self, salary_cap: int = SeasonSettings.SALARY_CAP):
        self.salary_cap = salary_cap
        self.logger = logging.getLogger(__name__)

    # ========================================================================
    # CAP SPACE
    # ========================================================================

    def calculate_team_cap_space(self, team: Team) -> int:
        """Cap ceiling minus active contracts and dead money."""
        return self.salary_cap - team.payroll

    def calculate_release(self, player: Player) -> Tuple[int, int]:
        """
        Cap effect of releasing a player.

        Returns:
            (cap_savings, dead_money)
        """
        if player.contract is None:
            return 0, 0
        dead_money = player.contract.dead_money_if_released
        return player.contract.cap_hit - dead_money, dead_money

    def contract_cap_delta(self, old: Optional[Contract], new: Contract) -> int:
        """Change in cap space when ``old`` is replaced by ``new``."""
        old_hit = old.cap_hit if old else 0
        return old_hit - new.cap_hit

    # ========================================================================
    # VALIDATION
    # ========================================================================

    def validate_transaction(self, team: Team, cap_impact: int) -> CapCheckResult:
        """
        Validate if a team has cap space for a transaction.

        Args:
            team: Team snapshot before the transaction
            cap_impact: Change in cap space (negative consumes space)

        Returns:
            CapCheckResult with pass/fail and the computed delta

        Examples:
            - Signing a $10M player: cap_impact = -10_000_000
            - Releasing a player saving $5M: cap_impact = +5_000_000
        """
        current_cap_space = self.calculate_team_cap_space(team)
        cap_space_after = current_cap_space + cap_impact

        if cap_impact < 0 and cap_space_after < 0:
            shortage = abs(cap_space_after)
            message = (
                f"Insufficient cap space. Need ${shortage:,} more. "
                f"Current space: ${current_cap_space:,}, "
                f"Transaction cost: ${abs(cap_impact):,}"
            )
            self.logger.debug(f"Team {team.team_id} cap check failed: {message}")
            return CapCheckResult(False, cap_impact, current_cap_space, message)

        return CapCheckResult(True, cap_impact, current_cap_space)

    def check_cap_compliance(self, team: Team) -> Tuple[bool, str]:
        """
        Check if a team is cap-compliant (cap space >= 0).

        Returns:
            Tuple of (is_compliant, message)
        """
        cap_space = self.calculate_team_cap_space(team)
        if cap_space < 0:
            return False, f"Over the cap by ${abs(cap_space):,}"
        return True, f"Compliant with ${cap_space:,} in space"
