"""
Unit Tests for snapshot persistence

Snapshots must survive a JSON round trip unchanged, including int and enum
keys, optional fields and nested offseason state.
"""

import json
from typing import Dict

import pytest

from offseason.offseason_data import OffseasonData
from offseason.offseason_phases import OffseasonPhase
from persistence import (
    from_primitive, load_snapshot, save_snapshot, snapshot_from_dict, snapshot_to_dict, to_primitive
)
from season_calendar.calendar_models import Calendar, SeasonPhase


class TestPrimitives:

    def test_enum_and_optional(self):
        calendar = Calendar(2025, 1, SeasonPhase.OFFSEASON, offseason_subphase=3)
        primitive = to_primitive(calendar)
        assert primitive["phase"] == SeasonPhase.OFFSEASON.value
        assert from_primitive(Calendar, primitive) == calendar

    def test_int_keys_restored(self):
        primitive = json.loads(json.dumps(to_primitive({4: 2, 11: 1})))
        assert primitive == {"4": 2, "11": 1}
        assert from_primitive(Dict[int, int], primitive) == {4: 2, 11: 1}

    def test_pair_tuples_restored(self):
        data = OffseasonData(roster_excess=((4, 2), (9, 1)), draft_order=(3, 1, 2))
        primitive = json.loads(json.dumps(to_primitive(data)))
        assert primitive["roster_excess"] == [[4, 2], [9, 1]]
        assert from_primitive(OffseasonData, primitive) == data

    def test_unknown_field_rejected(self):
        with pytest.raises(ValueError):
            from_primitive(Calendar, {"year": 2025, "week": 1, "phase": "preseason", "extra": 1})

    def test_wrong_type_rejected(self):
        with pytest.raises(TypeError):
            from_primitive(Calendar, {"year": "2025", "week": 1, "phase": SeasonPhase.PRESEASON.value})


class TestLeagueSnapshots:

    def test_offseason_snapshot_round_trip(self, offseason_league):
        payload = json.loads(json.dumps(snapshot_to_dict(offseason_league)))
        restored = snapshot_from_dict(payload)
        assert restored == offseason_league
        assert restored.offseason.current_phase is OffseasonPhase.SEASON_END
        assert all(isinstance(phase, OffseasonPhase) for phase, _tasks in restored.offseason.completed_tasks)

    def test_save_and_load(self, league_after_super_bowl, tmp_path):
        target = tmp_path / "saves" / "slot1.json"
        written = save_snapshot(league_after_super_bowl, target)
        assert written == target
        assert target.exists()
        assert load_snapshot(target) == league_after_super_bowl

    def test_unsupported_version(self, base_league):
        payload = snapshot_to_dict(base_league)
        payload["format_version"] = 99
        with pytest.raises(ValueError):
            snapshot_from_dict(payload)

    def test_malformed_payload(self):
        with pytest.raises(ValueError):
            snapshot_from_dict({"format_version": 1, "league": {"calendar": "2025"}})
