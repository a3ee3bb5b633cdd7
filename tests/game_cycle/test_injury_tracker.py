"""
Unit Tests for injury tracking

Tests:
- Out vs IR severity from the layoff length
- Longer layoff wins when a player is re-injured
- Weekly recovery ticks and injury clearing
- Reports naming unknown teams or players
"""

from dataclasses import replace

import pytest

from game_cycle.injury_tracker import apply_new_injuries, tick_recovery
from game_cycle.models.injury_models import InjuryReport, InjuryType, INJURY_TYPE_WEEKS
from shared.league_exceptions import DataIntegrityError
from shared.league_models import InjurySeverity, PlayerInjury


@pytest.fixture
def teams(make_team, make_player):
    return {
        1: make_team(1, roster=[make_player(101, "QB"), make_player(102, "RB")]),
        2: make_team(2, roster=[make_player(201, "WR")]),
    }


class TestApplyNewInjuries:

    def test_short_injury_is_out(self, teams):
        updated = apply_new_injuries(teams, [InjuryReport(1, 102, 2, "Ankle Sprain")])
        injury = updated[1].player(102).injury
        assert injury == PlayerInjury("Ankle Sprain", 2, InjurySeverity.OUT)
        # Input mapping is not modified
        assert teams[1].player(102).injury is None

    def test_long_injury_goes_on_ir(self, teams):
        updated = apply_new_injuries(teams, [InjuryReport(2, 201, 12, "Acl Tear")])
        assert updated[2].player(201).injury.severity is InjurySeverity.IR

    def test_threshold_boundary_is_out(self, teams):
        updated = apply_new_injuries(teams, [InjuryReport(1, 101, 4, "Knee Sprain")])
        assert updated[1].player(101).injury.severity is InjurySeverity.OUT

    def test_reinjury_keeps_longer_layoff(self, teams):
        hurt = apply_new_injuries(teams, [InjuryReport(1, 101, 6, "High Ankle Sprain")])
        again = apply_new_injuries(hurt, [InjuryReport(1, 101, 2, "Concussion")])
        assert again[1].player(101).injury.weeks_remaining == 6

    def test_unknown_team(self, teams):
        with pytest.raises(DataIntegrityError):
            apply_new_injuries(teams, [InjuryReport(9, 101, 2, "Concussion")])

    def test_player_not_on_team(self, teams):
        with pytest.raises(DataIntegrityError):
            apply_new_injuries(teams, [InjuryReport(1, 201, 2, "Concussion")])


class TestTickRecovery:

    def test_decrements_and_clears(self, teams):
        hurt = apply_new_injuries(teams, [
            InjuryReport(1, 101, 1, "Neck Strain"),
            InjuryReport(2, 201, 3, "Rib Contusion"),
        ])
        ticked, recovered = tick_recovery(hurt)

        assert recovered == [101]
        assert ticked[1].player(101).injury is None
        assert ticked[2].player(201).injury.weeks_remaining == 2

    def test_healthy_league_unchanged(self, teams):
        ticked, recovered = tick_recovery(teams)
        assert recovered == []
        assert ticked == teams

    def test_full_recovery_takes_weeks_remaining_ticks(self, teams):
        state = apply_new_injuries(teams, [InjuryReport(1, 102, 3, "Hamstring Strain")])
        for _ in range(2):
            state, _ = tick_recovery(state)
            assert state[1].player(102).is_injured
        state, recovered = tick_recovery(state)
        assert recovered == [102]

    def test_zero_week_injury_is_ignored(self, teams, make_player):
        stale = {1: teams[1].with_players_replaced({
            101: replace(make_player(101, "QB"), injury=PlayerInjury("Old", 0, InjurySeverity.OUT))
        })}
        ticked, recovered = tick_recovery(stale)
        assert recovered == []
        assert ticked[1].player(101).injury.weeks_remaining == 0


class TestInjuryModels:

    def test_every_type_has_layoff_range(self):
        for injury_type in InjuryType:
            low, high = INJURY_TYPE_WEEKS[injury_type]
            assert 1 <= low <= high

    def test_display_name(self):
        assert InjuryType.HIGH_ANKLE_SPRAIN.display_name == "High Ankle Sprain"
