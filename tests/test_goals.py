# tests/test_goals.py
import pytest

from utils.lead_tracker import GoalEvaluator, GoalSet, GoalTargets


class TestProgressPercent:

    @pytest.mark.parametrize("current, target, expected", [
        (50, 100, 50),
        (150, 100, 100),
        (0, 100, 0),
        (5, 0, 0),
        (5, -1, 0),
    ])
    def test_higher_is_better(self, current, target, expected):
        assert GoalEvaluator.progress_percent(current, target) == pytest.approx(expected)

    @pytest.mark.parametrize("current, target, expected", [
        (3, 4, 100),
        (4, 4, 100),
        (6, 4, 50),
        (10, 4, 0),
        (0, 4, 0),
        (0, 0, 0),
        (3, 0, 0),
    ])
    def test_lower_is_better(self, current, target, expected):
        assert GoalEvaluator.progress_percent(current, target, lower_is_better=True) == pytest.approx(expected)

    def test_always_within_bounds(self):
        for current in (0, 0.5, 1, 5, 50, 500):
            for target in (0, 1, 4, 100):
                for lower in (True, False):
                    assert 0 <= GoalEvaluator.progress_percent(current, target, lower) <= 100


class TestProgress:

    def test_team_progress(self, store, evaluator, team):
        store.save_goals(GoalSet(team=GoalTargets(sales=10, leads=22, appointments=3, sph=4)))
        progress = evaluator.team_progress("2024-W42")

        assert progress['sales'].percent == pytest.approx(50)
        assert progress['leads'].percent == pytest.approx(50)
        assert progress['appointments'].percent == pytest.approx(100)
        assert progress['appointments'].is_met
        assert progress['sph'].current == 5.6
        assert progress['sph'].lower_is_better
        assert progress['sph'].percent == pytest.approx(60)

    def test_individual_progress(self, store, evaluator, team):
        alice = team["alice"]
        store.save_goals(GoalSet(individual={alice.id: GoalTargets(sales=4, sph=5)}))
        progress = evaluator.individual_progress(alice.id, "2024-W42")

        assert progress['sales'].percent == pytest.approx(50)
        assert progress['sph'].percent == pytest.approx(100)
        assert progress['leads'].has_target is False
        assert progress['leads'].percent == 0

    def test_missing_goals_give_no_progress(self, evaluator, team):
        progress = evaluator.individual_progress(team["cara"].id, "2024-W42")
        assert all(item.percent == 0 and not item.has_target for item in progress.values())


class TestLeaderboard:

    def test_ascending_sph_with_zero_last(self, evaluator, team):
        board = evaluator.rank_by_efficiency("2024-W42")

        assert [e.name for e in board] == ["Bob", "Alice", "Cara"]
        assert [e.rank for e in board] == [1, 2, 3]
        assert [e.sph for e in board] == [2.0, 5.0, 0.0]
        assert board[2].has_sales is False

    def test_zero_sph_after_every_positive(self, store, evaluator):
        for name, hours, sales in [("A", 0, 0), ("B", 90, 1), ("C", 0, 0), ("D", 1, 10)]:
            gen = store.add_generator(name)
            store.set(gen.id, "2024-W9", "hoursWorked", hours)
            store.set(gen.id, "2024-W9", "grossSales", sales)

        board = evaluator.rank_by_efficiency("2024-W9")
        assert [e.name for e in board] == ["D", "B", "A", "C"]

    def test_ties_keep_insertion_order(self, store, evaluator):
        for name in ("X", "Y", "Z"):
            gen = store.add_generator(name)
            store.set(gen.id, "2024-W9", "hoursWorked", 4)
            store.set(gen.id, "2024-W9", "grossSales", 2)

        assert [e.name for e in evaluator.rank_by_efficiency("2024-W9")] == ["X", "Y", "Z"]

    def test_empty_week_and_no_generators(self, store, evaluator):
        assert evaluator.rank_by_efficiency("2024-W1") == []
        store.add_generator("Solo")
        assert [e.rank for e in evaluator.rank_by_efficiency("2024-W1")] == [1]

    def test_does_not_materialize(self, store, evaluator, team):
        evaluator.rank_by_efficiency("2024-W30")
        assert "2024-W30" not in store.data.weekly_data


class TestSparkline:

    def test_rolls_back_into_previous_year(self, store, evaluator, team):
        values = evaluator.sparkline(team["alice"].id, 2024, 2)
        assert values == [0.0, 3.0, 2.0, 0.0]
        assert "2023-W51" not in store.data.weekly_data

    def test_always_lookback_long(self, evaluator, team):
        assert len(evaluator.sparkline("nobody", 2024, 30)) == 4
        assert evaluator.sparkline("nobody", 2024, 30) == [0.0] * 4
        assert len(evaluator.sparkline(team["bob"].id, 2024, 5, lookback=6)) == 6

    def test_current_week_last(self, evaluator, team):
        assert evaluator.sparkline(team["alice"].id, 2024, 42)[-1] == 5.0
