# utils/session.py
"""
Tracker Session Manager for Streamlit Apps

Version: 1.0.0
Features:
- All sessions edit the one shared MetricsStore of the data file
- Every store mutation is saved through the shared JsonDataStore
- Last save error surfaced as a non-fatal warning
- Current year / week navigation state kept per browser session
"""

import streamlit as st
import logging
from typing import Optional

from .storage import get_data_store, get_shared_store
from .lead_tracker import (
    AggregationEngine,
    GoalEvaluator,
    MetricsStore,
    current_week,
    make_week_key,
    shift_week,
)

logger = logging.getLogger(__name__)


class TrackerSession:
    """Session-scoped navigation over the shared tracker store"""

    YEAR_KEY = "tracker_year"
    WEEK_KEY = "tracker_week"

    def __init__(self, data_path=None):
        self.storage = get_data_store(data_path)
        self._store = get_shared_store(data_path)
        self._ensure_initialized()

    # ==================== INITIALIZATION ====================

    def _ensure_initialized(self):
        if self.YEAR_KEY not in st.session_state or self.WEEK_KEY not in st.session_state:
            year, week = current_week()
            st.session_state[self.YEAR_KEY] = year
            st.session_state[self.WEEK_KEY] = week
            logger.info(f"🚀 Tracker session started at {year}-W{week}")

    # ==================== COMPONENTS ====================

    @property
    def store(self) -> MetricsStore:
        return self._store

    @property
    def engine(self) -> AggregationEngine:
        return AggregationEngine(self.store)

    @property
    def evaluator(self) -> GoalEvaluator:
        return GoalEvaluator(self.store, self.engine)

    def last_save_error(self) -> Optional[str]:
        return self.storage.last_error

    def show_save_status(self):
        """Non-fatal notice when the last save failed"""
        error = self.last_save_error()
        if error:
            st.warning(f"⚠️ {error}. Your changes are kept in memory; editing can continue.")

    # ==================== NAVIGATION ====================

    @property
    def year(self) -> int:
        return st.session_state[self.YEAR_KEY]

    @property
    def week(self) -> int:
        return st.session_state[self.WEEK_KEY]

    @property
    def week_key(self) -> str:
        return make_week_key(self.year, self.week)

    def set_year(self, year: int):
        st.session_state[self.YEAR_KEY] = int(year)

    def set_week(self, week: int):
        st.session_state[self.WEEK_KEY] = int(week)

    def move_week(self, delta: int):
        year, week = shift_week(self.year, self.week, delta)
        self.set_year(year)
        self.set_week(week)
