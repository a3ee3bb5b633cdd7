"""
Unit Tests for offseason phase entry generators

Each generator is a pure function of the league snapshot, so these tests
call them directly instead of walking the orchestrator through the cycle.
"""

from dataclasses import replace

import pytest

from config.season_settings import SeasonSettings
from offseason.offseason_data import OffseasonData
from offseason.offseason_exceptions import MissingDependencyError
from offseason.offseason_phases import OffseasonPhase
from offseason.phase_generators import PhaseDataGenerator, calculate_owner_expectations


@pytest.fixture
def generator():
    return PhaseDataGenerator()


class TestGenerators:

    def test_every_phase_has_a_generator(self, generator, offseason_league):
        for phase in OffseasonPhase:
            if phase is OffseasonPhase.DRAFT:
                continue
            assert isinstance(generator.generate(phase, offseason_league, OffseasonData()), dict)

    def test_combine_is_seeded(self, generator, offseason_league):
        first = generator.combine(offseason_league, OffseasonData())
        second = generator.combine(offseason_league, OffseasonData())
        assert first == second
        results = first["combine_results"]
        assert len(results) == len(offseason_league.prospects)
        assert all(0 <= r.grade <= 100 for r in results)

    def test_draft_requires_order(self, generator, offseason_league):
        with pytest.raises(MissingDependencyError):
            generator.draft(offseason_league, OffseasonData())
        assert generator.draft(offseason_league, OffseasonData(draft_order=(1, 2))) == {}

    def test_free_agency_opens_on_day_one(self, generator, offseason_league):
        assert generator.free_agency(offseason_league, OffseasonData()) == {"free_agency_day": 1}

    def test_udfa_pool_best_first(self, generator, offseason_league):
        pool = generator.udfa(offseason_league, OffseasonData())["udfa_pool"]
        overalls = [offseason_league.prospect(pid).overall for pid in pool]
        assert overalls == sorted(overalls, reverse=True)

    def test_preseason_pairs_every_team_each_week(self, generator, offseason_league):
        games = generator.preseason(offseason_league, OffseasonData())["preseason_games"]
        assert len(games) == 16 * SeasonSettings.PRESEASON_EXHIBITION_WEEKS
        for week in range(1, SeasonSettings.PRESEASON_EXHIBITION_WEEKS + 1):
            teams = [t for g in games if g.week == week for t in (g.home_team_id, g.away_team_id)]
            assert sorted(teams) == list(range(1, 33))

    def test_final_cuts_reports_only_oversized_rosters(self, generator, offseason_league, make_player):
        team = offseason_league.team(1)
        extra = [make_player(95000 + i) for i in range(3)]
        league = offseason_league.with_team(team.with_roster(team.roster + tuple(extra)))
        excess = generator.final_cuts(league, OffseasonData())["roster_excess"]
        assert excess == ((1, team.roster_size + 3 - SeasonSettings.ROSTER_LIMIT),)

    def test_position_battles_within_margin(self, generator, offseason_league):
        battles = generator.training_camp(offseason_league, OffseasonData())["position_battles"]
        for battle in battles:
            assert 0 <= battle.margin <= SeasonSettings.POSITION_BATTLE_MARGIN
            assert len(battle.player_ids) == 2

    def test_ota_reports_young_risers(self, generator, offseason_league, make_player):
        team = offseason_league.team(2)
        riser = make_player(95100, position="CB", overall=60, age=22, potential=80)
        league = offseason_league.with_team(team.with_roster(team.roster + (riser,)))
        reports = generator.otas(league, OffseasonData())["ota_reports"]
        assert any(r.player_id == 95100 and r.team_id == 2 for r in reports)
        assert all(league.find_player(r.player_id)[1].age <= 24 for r in reports)


class TestOwnerExpectations:

    def test_strongest_roster_expected_to_win_most(self, offseason_league):
        expectations = calculate_owner_expectations(offseason_league.teams)
        assert [e.team_id for e in expectations] == list(range(1, 33))

        best = min(expectations, key=lambda e: e.projected_rank)
        worst = max(expectations, key=lambda e: e.projected_rank)
        assert (best.expected_wins, worst.expected_wins) == (13, 4)
        assert best.playoffs_expected and not worst.playoffs_expected
        assert best.patience < worst.patience

    def test_targets_bracket_expected(self, offseason_league):
        for e in calculate_owner_expectations(offseason_league.teams):
            assert e.min_wins <= e.expected_wins <= e.stretch_wins <= SeasonSettings.GAMES_PER_TEAM

    def test_hot_seat_threshold(self, generator, offseason_league):
        teams = [replace(t, record=replace(t.record, wins=2, losses=15)) if t.team_id == 4 else t
                 for t in offseason_league.teams]
        league = offseason_league.with_teams(teams)
        assert 4 in generator.coaching_decisions(league, OffseasonData())["hot_seat_team_ids"]
