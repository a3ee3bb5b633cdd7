"""
Unit Tests for CapCalculator

Tests cap arithmetic used by offseason contract actions:
- Cap space from contracts and dead money
- Release savings versus dead money
- Transaction validation and compliance
"""

from dataclasses import replace

import pytest

from salary_cap import CapCalculator, CapCheckResult
from shared.league_models import Contract


@pytest.fixture
def calculator():
    return CapCalculator(salary_cap=100_000_000)


@pytest.fixture
def team(make_team, make_player):
    roster = [
        make_player(101, salary=40_000_000, years=3, bonus=8_000_000),
        make_player(102, salary=30_000_000, years=1),
        make_player(103),
    ]
    return replace(make_team(1, roster=roster), dead_money=5_000_000)


class TestCapSpace:

    def test_contracts_and_dead_money_count(self, calculator, team):
        assert calculator.calculate_team_cap_space(team) == 25_000_000

    def test_unsigned_players_are_free(self, calculator, make_team, make_player):
        assert calculator.calculate_team_cap_space(make_team(2, roster=[make_player(201)])) == 100_000_000


class TestRelease:

    def test_bonus_becomes_dead_money(self, calculator, team):
        assert calculator.calculate_release(team.roster[0]) == (32_000_000, 8_000_000)

    def test_no_bonus_full_savings(self, calculator, team):
        assert calculator.calculate_release(team.roster[1]) == (30_000_000, 0)

    def test_unsigned_player(self, calculator, team):
        assert calculator.calculate_release(team.roster[2]) == (0, 0)


class TestContractDelta:

    def test_raise_consumes_space(self, calculator):
        old = Contract(annual_salary=10_000_000, years_remaining=1)
        new = Contract(annual_salary=15_000_000, years_remaining=3)
        assert calculator.contract_cap_delta(old, new) == -5_000_000

    def test_new_contract(self, calculator):
        assert calculator.contract_cap_delta(None, Contract(2_000_000, 2)) == -2_000_000


class TestValidateTransaction:

    def test_signing_that_fits(self, calculator, team):
        result = calculator.validate_transaction(team, -20_000_000)
        assert result == CapCheckResult(True, -20_000_000, 25_000_000)
        assert result.cap_space_after == 5_000_000

    def test_signing_over_the_cap(self, calculator, team):
        result = calculator.validate_transaction(team, -30_000_000)
        assert not result.passed
        assert result.cap_space_after == -5_000_000
        assert "Need $5,000,000 more" in result.message

    def test_savings_always_pass(self, calculator, team):
        over = replace(team, dead_money=50_000_000)
        assert calculator.validate_transaction(over, 1_000_000).passed


class TestCompliance:

    def test_compliant(self, calculator, team):
        assert calculator.check_cap_compliance(team) == (True, "Compliant with $25,000,000 in space")

    def test_over_the_cap(self, calculator, team):
        compliant, message = calculator.check_cap_compliance(replace(team, dead_money=40_000_000))
        assert not compliant
        assert message == "Over the cap by $10,000,000"
