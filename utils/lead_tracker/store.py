# utils/lead_tracker/store.py
"""
In-memory Metrics Store

Owns the AppData document shared by every session of the app. Every
mutation goes through this class under one lock, so listeners (persistence)
see each change exactly once and in order.

Reads come in two flavours:
- get():  returns the record and materializes a zero record when missing
          (the data-entry view uses this, so displayed weeks show up in the
          saved document as explicit zero records)
- peek(): pure read, returns a detached zero record when missing
          (aggregation, sparklines and export use this)
"""

import logging
import threading
from typing import Callable, Dict, List, Optional

from .models import (
    AppData,
    Generator,
    GoalSet,
    MetricRecord,
    new_generator_id,
    to_number,
)

logger = logging.getLogger(__name__)

ChangeListener = Callable[[AppData], None]


class MetricsStore:
    """
    Per-generator, per-week record storage.

    Usage:
        store = MetricsStore(app_data)
        store.add_listener(persistence.save)

        gen = store.add_generator("Alice")
        store.set(gen.id, "2024-W42", "hoursWorked", "10")
        record = store.peek(gen.id, "2024-W42")
    """

    def __init__(self, data: Optional[AppData] = None):
        self.data = data if data is not None else AppData()
        self._listeners: List[ChangeListener] = []
        self._lock = threading.RLock()

    # =========================================================================
    # LISTENERS
    # =========================================================================

    def add_listener(self, callback: ChangeListener):
        self._listeners.append(callback)

    def _notify(self):
        for callback in self._listeners:
            callback(self.data)

    # =========================================================================
    # GENERATORS
    # =========================================================================

    @property
    def generators(self) -> List[Generator]:
        return self.data.generators

    def find_generator(self, generator_id: str) -> Optional[Generator]:
        return next((g for g in self.data.generators if g.id == generator_id), None)

    def add_generator(self, name: str) -> Generator:
        name = (name or "").strip()
        if not name:
            raise ValueError("Generator name cannot be empty")

        generator = Generator(id=new_generator_id(), name=name)
        with self._lock:
            self.data.generators.append(generator)
            logger.info(f"➕ Added generator '{name}' ({generator.id})")
            self._notify()
        return generator

    def rename_generator(self, generator_id: str, name: str) -> Generator:
        name = (name or "").strip()
        if not name:
            raise ValueError("Generator name cannot be empty")

        with self._lock:
            generator = self.find_generator(generator_id)
            if generator is None:
                raise KeyError(generator_id)

            generator.name = name
            self._notify()
        return generator

    def remove_generator(self, generator_id: str) -> bool:
        """
        Remove a generator, its records from every week bucket and its
        individual goals.

        Week buckets left empty are kept.

        Returns:
            False if the generator does not exist
        """
        with self._lock:
            if self.find_generator(generator_id) is None:
                logger.warning(f"Cannot remove unknown generator {generator_id}")
                return False

            self.data.generators = [g for g in self.data.generators if g.id != generator_id]

            removed = 0
            for bucket in self.data.weekly_data.values():
                if bucket.pop(generator_id, None) is not None:
                    removed += 1
            self.data.goals.individual.pop(generator_id, None)

            logger.info(f"🗑️ Removed generator {generator_id} and {removed} weekly records")
            self._notify()
        return True

    # =========================================================================
    # RECORDS
    # =========================================================================

    def week_bucket(self, week_key: str) -> Dict[str, MetricRecord]:
        """All records of a week. Missing weeks give an empty dict."""
        return self.data.weekly_data.get(week_key, {})

    def get(self, generator_id: str, week_key: str) -> MetricRecord:
        """Return the record, inserting a zero record when it does not exist."""
        with self._lock:
            bucket = self.data.weekly_data.setdefault(week_key, {})
            if generator_id not in bucket:
                bucket[generator_id] = MetricRecord()
            return bucket[generator_id]

    def peek(self, generator_id: str, week_key: str) -> MetricRecord:
        """Return the record or a zero record, without storing anything."""
        record = self.week_bucket(week_key).get(generator_id)
        return record if record is not None else MetricRecord()

    def set(self, generator_id: str, week_key: str, field: str, raw_value) -> MetricRecord:
        """
        Write one raw field and refresh salesPerHour.

        Bad input (empty, text, negative) is stored as 0.

        Raises:
            ValueError: field is not one of the four raw metric fields
        """
        if field not in MetricRecord.FIELD_MAP:
            raise ValueError(f"Unknown metric field: {field}")

        with self._lock:
            record = self.get(generator_id, week_key)
            record.set_field(field, to_number(raw_value))

            logger.debug(f"✏️ {week_key} {generator_id} {field}={record.get_field(field)}")
            self._notify()
        return record

    # =========================================================================
    # GOALS
    # =========================================================================

    @property
    def goals(self) -> GoalSet:
        return self.data.goals

    def save_goals(self, goals: GoalSet):
        """Replace the whole goal configuration."""
        with self._lock:
            self.data.goals = goals
            logger.info("🎯 Goals updated")
            self._notify()
