# tests/test_store.py
import pytest

from utils.lead_tracker import AppData, MetricRecord, MetricsStore, GoalSet, GoalTargets


class TestRecords:

    def test_sph_scenario(self, store):
        gen = store.add_generator("G1")
        store.set(gen.id, "2024-W42", "hoursWorked", "10")
        record = store.set(gen.id, "2024-W42", "grossSales", "2")
        assert record.sales_per_hour == "5.00"

    def test_sph_zero_without_sales(self, store):
        gen = store.add_generator("G1")
        record = store.set(gen.id, "2024-W1", "hoursWorked", 40)
        assert record.sales_per_hour == "0.00"

    def test_sph_recomputed_on_every_write(self, store):
        gen = store.add_generator("G1")
        store.set(gen.id, "2024-W1", "hoursWorked", 9)
        store.set(gen.id, "2024-W1", "grossSales", 3)
        record = store.set(gen.id, "2024-W1", "hoursWorked", 6)
        assert record.sales_per_hour == "2.00"

    @pytest.mark.parametrize("raw", ["", "abc", "-5", None, "nan", "inf", -1.5])
    def test_bad_input_becomes_zero(self, store, raw):
        gen = store.add_generator("G1")
        record = store.set(gen.id, "2024-W1", "hoursWorked", raw)
        assert record.hours_worked == 0

    def test_decimal_input(self, store):
        gen = store.add_generator("G1")
        record = store.set(gen.id, "2024-W1", "hoursWorked", " 7.5 ")
        assert record.hours_worked == 7.5

    def test_integral_values_stay_int(self, store):
        gen = store.add_generator("G1")
        record = store.set(gen.id, "2024-W1", "leadsBooked", "3")
        assert record.leads_booked == 3
        assert isinstance(record.leads_booked, int)

    def test_unknown_field_rejected(self, store):
        gen = store.add_generator("G1")
        with pytest.raises(ValueError):
            store.set(gen.id, "2024-W1", "salesPerHour", 5)

    def test_get_materializes_zero_record(self, store):
        gen = store.add_generator("G1")
        record = store.get(gen.id, "2024-W3")
        assert record == MetricRecord()
        assert gen.id in store.data.weekly_data["2024-W3"]

    def test_peek_does_not_materialize(self, store):
        gen = store.add_generator("G1")
        record = store.peek(gen.id, "2024-W3")
        assert record == MetricRecord()
        assert "2024-W3" not in store.data.weekly_data

    def test_week_bucket_missing(self, store):
        assert store.week_bucket("2030-W1") == {}


class TestGenerators:

    def test_add_trims_name(self, store):
        gen = store.add_generator("  Alice  ")
        assert gen.name == "Alice"
        assert store.generators == [gen]

    def test_empty_name_rejected(self, store):
        with pytest.raises(ValueError):
            store.add_generator("   ")

    def test_rename_keeps_id(self, store):
        gen = store.add_generator("Alice")
        renamed = store.rename_generator(gen.id, "Alicia")
        assert renamed.id == gen.id
        assert store.find_generator(gen.id).name == "Alicia"

    def test_rename_unknown(self, store):
        with pytest.raises(KeyError):
            store.rename_generator("missing", "Name")

    def test_remove_cascades_to_every_week(self, store, team):
        alice = team["alice"]
        assert store.remove_generator(alice.id) is True

        assert store.find_generator(alice.id) is None
        for bucket in store.data.weekly_data.values():
            assert alice.id not in bucket

    def test_remove_keeps_empty_buckets(self, store, team):
        # 2023-W52 only held Alice's record
        store.remove_generator(team["alice"].id)
        assert store.data.weekly_data["2023-W52"] == {}

    def test_remove_drops_individual_goals(self, store, team):
        alice, bob = team["alice"], team["bob"]
        store.save_goals(GoalSet(
            team=GoalTargets(sales=10),
            individual={alice.id: GoalTargets(sales=4), bob.id: GoalTargets(leads=3)},
        ))

        store.remove_generator(alice.id)

        assert alice.id not in store.goals.individual
        assert alice.id not in store.data.to_dict()["goals"]["individual"]
        assert store.goals.individual[bob.id].leads == 3
        assert store.goals.team.sales == 10

    def test_remove_unknown_is_noop(self, store, team):
        before = AppData.from_dict(store.data.to_dict())
        assert store.remove_generator("missing") is False
        assert store.data == before

    def test_readding_same_name_gets_new_id(self, store):
        first = store.add_generator("Alice")
        store.remove_generator(first.id)
        second = store.add_generator("Alice")
        assert second.id != first.id

    def test_insertion_order(self, store, team):
        assert [g.name for g in store.generators] == ["Alice", "Bob", "Cara"]


class TestListeners:

    def test_every_mutation_notifies(self, store):
        calls = []
        store.add_listener(lambda data: calls.append(data))

        gen = store.add_generator("Alice")
        store.set(gen.id, "2024-W1", "hoursWorked", 4)
        store.rename_generator(gen.id, "Al")
        store.save_goals(GoalSet(team=GoalTargets(sales=10)))
        store.remove_generator(gen.id)

        assert len(calls) == 5
        assert all(data is store.data for data in calls)

    def test_reads_do_not_notify(self, store):
        gen = store.add_generator("Alice")
        calls = []
        store.add_listener(lambda data: calls.append(data))

        store.get(gen.id, "2024-W1")
        store.peek(gen.id, "2024-W2")
        assert calls == []

    def test_save_goals_replaces_wholesale(self, store):
        store.save_goals(GoalSet(individual={"x": GoalTargets(leads=5)}))
        store.save_goals(GoalSet(team=GoalTargets(sales=1)))
        assert store.goals.individual == {}
        assert store.goals.team.sales == 1
