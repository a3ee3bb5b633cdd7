"""
Unit Tests for RandomScheduleGenerator

Tests schedule generation including:
- 272 games, 17 per team, no repeated matchups
- Exactly one bye per team, inside weeks 5-14
- Determinism per (seed, season)
- Rejection of league sizes that cannot be scheduled
"""

from collections import Counter

import pytest

from scheduling import RandomScheduleGenerator, create_schedule_generator


@pytest.fixture(scope="module")
def schedule():
    return RandomScheduleGenerator(seed=7).generate_season(2025)


class TestGenerateSeason:

    def test_total_games(self, schedule):
        assert schedule.game_count == 272
        assert schedule.season == 2025
        assert not any(game.is_complete or game.is_playoff for game in schedule.games)

    def test_seventeen_games_per_team(self, schedule):
        counts = Counter(team_id for g in schedule.games for team_id in (g.home_team_id, g.away_team_id))
        assert set(counts) == set(range(1, 33))
        assert set(counts.values()) == {17}

    def test_one_bye_per_team_in_window(self, schedule):
        for team_id in range(1, 33):
            weeks = [g.week for g in schedule.games_for_team(team_id)]
            assert len(weeks) == len(set(weeks))
            byes = set(range(1, 19)) - set(weeks)
            assert len(byes) == 1
            assert 5 <= byes.pop() <= 14

    def test_no_repeated_matchups(self, schedule):
        matchups = [frozenset((g.home_team_id, g.away_team_id)) for g in schedule.games]
        assert len(matchups) == len(set(matchups))

    def test_weeks_outside_bye_window_are_full(self, schedule):
        for week in list(range(1, 5)) + list(range(15, 19)):
            assert len(schedule.games_for_week(week)) == 16

    def test_game_ids(self, schedule):
        first = schedule.games_for_week(1)[0]
        assert first.game_id == "2025_w01_g01"
        assert all(g.game_id.startswith(f"2025_w{g.week:02d}_") for g in schedule.games)

    def test_home_games_spread(self, schedule):
        home = Counter(g.home_team_id for g in schedule.games)
        assert all(4 <= home[team_id] <= 13 for team_id in range(1, 33))


class TestDeterminism:

    def test_same_seed_same_schedule(self, schedule):
        assert RandomScheduleGenerator(seed=7).generate_season(2025) == schedule

    def test_next_season_differs(self, schedule):
        assert RandomScheduleGenerator(seed=7).generate_season(2026).games != schedule.games

    def test_other_seed_differs(self, schedule):
        assert RandomScheduleGenerator(seed=8).generate_season(2025).games != schedule.games


class TestConstruction:

    @pytest.mark.parametrize("team_ids", [range(1, 18), range(1, 20), range(1, 32)])
    def test_rejects_unschedulable_leagues(self, team_ids):
        with pytest.raises(ValueError):
            RandomScheduleGenerator(team_ids=team_ids)

    def test_custom_league_size(self):
        generator = create_schedule_generator(team_ids=range(1, 21), seed=3)
        schedule = generator.generate_season(2030)
        assert schedule.game_count == generator.expected_game_count == 170

    def test_round_robin_covers_every_pair(self):
        rounds = RandomScheduleGenerator._round_robin(list(range(1, 9)))
        assert len(rounds) == 7
        pairs = {frozenset(p) for r in rounds for p in r}
        assert len(pairs) == 28
