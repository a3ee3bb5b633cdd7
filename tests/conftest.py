"""
Pytest configuration for test discovery and imports.

Provides fixtures for testing including:
- A deterministic 32-team league at Regular Season week 1
- The same league after the regular season and after the Super Bowl
- A seeded instant game simulator
- Builders for small hand-made teams
"""

import sys
from dataclasses import replace
from pathlib import Path

import pytest


# Determine paths
project_root = Path(__file__).parent.parent
src_path = project_root / "src"
tests_path = project_root / "tests"


def pytest_configure(config):
    """Configure pytest - runs very early in startup.

    Project root and src go to the front of sys.path; the tests directory is
    removed so test folders named after packages never shadow them. Logging
    uses the quiet testing preset.
    """
    seen = set()
    new_path = []
    for p in sys.path:
        if p not in seen and p != str(tests_path):
            seen.add(p)
            new_path.append(p)

    for path in [str(src_path), str(project_root)]:
        if path in new_path:
            new_path.remove(path)

    new_path.insert(0, str(src_path))
    new_path.insert(0, str(project_root))

    sys.path[:] = new_path

    from logging_config import setup_testing_logging
    setup_testing_logging()


TEST_SEED = 7
TEST_SEASON = 2025


# ============================================================================
# LEAGUE FIXTURES (snapshots are immutable, so session scope is safe)
# ============================================================================

@pytest.fixture(scope="session")
def base_league():
    """Fresh league at 2025 Regular Season week 1."""
    from team_management.league_factory import LeagueFactory
    return LeagueFactory(TEST_SEED).create_league(TEST_SEASON)


@pytest.fixture(scope="session")
def simulator():
    """Seeded instant simulator."""
    from game_cycle.game_simulator import InstantGameSimulator
    return InstantGameSimulator(seed=TEST_SEED)


@pytest.fixture(scope="session")
def league_after_regular_season(base_league, simulator):
    """All 18 regular-season weeks played; calendar at Playoffs week 19."""
    from game_cycle.week_orchestrator import WeekOrchestrator
    orchestrator = WeekOrchestrator(simulator)
    league = base_league
    for _ in range(18):
        league = orchestrator.simulate_week(league).state
    return league


@pytest.fixture(scope="session")
def league_after_super_bowl(league_after_regular_season, simulator):
    """Super Bowl played; calendar at Offseason sub-phase 1."""
    from game_cycle.week_orchestrator import WeekOrchestrator
    orchestrator = WeekOrchestrator(simulator)
    league = league_after_regular_season
    for _ in range(4):
        league = orchestrator.simulate_week(league).state
    return league


@pytest.fixture(scope="session")
def offseason_league(league_after_super_bowl):
    """Offseason initialized at SeasonEnd."""
    from offseason.offseason_orchestrator import OffseasonOrchestrator
    result = OffseasonOrchestrator().initialize(league_after_super_bowl)
    assert result.success
    return result.state


# ============================================================================
# BUILDERS
# ============================================================================

@pytest.fixture
def make_team():
    """
    Build a team with a given record.

    Usage:
        team = make_team(5, wins=10, losses=7)
    """
    from constants.team_ids import TEAM_INFO, get_team_alignment
    from shared.league_models import Team, TeamRecord

    def _make(team_id, wins=0, losses=0, ties=0, points_for=0, points_against=0, roster=()):
        city, nickname, abbreviation = TEAM_INFO[team_id]
        conference, division = get_team_alignment(team_id)
        return Team(
            team_id=team_id,
            city=city,
            nickname=nickname,
            abbreviation=abbreviation,
            conference=conference,
            division=division,
            record=TeamRecord(wins=wins, losses=losses, ties=ties,
                              points_for=points_for, points_against=points_against),
            roster=tuple(roster),
        )

    return _make


@pytest.fixture
def make_player():
    """Build a player, optionally under contract."""
    from shared.league_models import Contract, Player

    def _make(player_id, position="WR", overall=70, age=26, potential=None,
              salary=None, years=2, bonus=0):
        contract = None
        if salary is not None:
            contract = Contract(annual_salary=salary, years_remaining=years, signing_bonus=bonus)
        return Player(
            player_id=player_id,
            name=f"Player {player_id}",
            position=position,
            overall=overall,
            age=age,
            potential=overall if potential is None else potential,
            contract=contract,
        )

    return _make


@pytest.fixture
def league_with_records(base_league):
    """
    Replace every team's record with a distinct one.

    Team n gets (n // 2) wins, so higher ids rank higher; losses fill out
    17 games.
    """
    from shared.league_models import TeamRecord

    def _apply(league=base_league):
        teams = []
        for team in league.teams:
            wins = team.team_id // 2
            teams.append(replace(team, record=TeamRecord(wins=wins, losses=17 - wins)))
        return league.with_teams(teams)

    return _apply
