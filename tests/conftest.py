# tests/conftest.py
import os
import tempfile

# Keep the config singleton away from the real home directory
os.environ.setdefault("TRACKER_DATA_DIR", tempfile.mkdtemp(prefix="lead_tracker_tests_"))

import pytest

from utils.lead_tracker import MetricsStore, AggregationEngine, GoalEvaluator


@pytest.fixture
def store():
    return MetricsStore()


@pytest.fixture
def team(store):
    """Three generators with a few weeks of data in 2023/2024."""
    alice = store.add_generator("Alice")
    bob = store.add_generator("Bob")
    cara = store.add_generator("Cara")

    # 2024-W42: Alice 10h / 2 sales, Bob 6h / 3 sales, Cara no sales
    store.set(alice.id, "2024-W42", "hoursWorked", 10)
    store.set(alice.id, "2024-W42", "grossSales", 2)
    store.set(alice.id, "2024-W42", "leadsBooked", 7)
    store.set(alice.id, "2024-W42", "appointmentsSat", 3)
    store.set(bob.id, "2024-W42", "hoursWorked", 6)
    store.set(bob.id, "2024-W42", "grossSales", 3)
    store.set(bob.id, "2024-W42", "leadsBooked", 4)
    store.set(cara.id, "2024-W42", "hoursWorked", 12)

    # January 2024 and the last week of 2023
    store.set(alice.id, "2024-W1", "hoursWorked", 8)
    store.set(alice.id, "2024-W1", "grossSales", 4)
    store.set(bob.id, "2024-W5", "hoursWorked", 5)
    store.set(bob.id, "2024-W5", "grossSales", 1)
    store.set(alice.id, "2023-W52", "hoursWorked", 9)
    store.set(alice.id, "2023-W52", "grossSales", 3)

    return {"alice": alice, "bob": bob, "cara": cara}


@pytest.fixture
def engine(store):
    return AggregationEngine(store)


@pytest.fixture
def evaluator(store, engine):
    return GoalEvaluator(store, engine)
