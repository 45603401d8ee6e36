# utils/storage.py
"""
JSON Document Persistence

Version: 1.0.0
Features:
- Singleton store per data file with thread-safe double-checked locking
- One shared MetricsStore per data file, so every session edits the same document
- Serialized, atomic writes (temp file + os.replace)
- Last-write-wins: a snapshot older than the one already on disk is dropped
- Load never raises: missing or unreadable files give None
"""

import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Dict, Optional, Tuple, Union

from .config import config
from .lead_tracker.models import AppData
from .lead_tracker.store import MetricsStore

logger = logging.getLogger(__name__)


class JsonDataStore:
    """
    Load/save the AppData document.

    Usage:
        storage = JsonDataStore(path)
        data = storage.load() or AppData()

        ok, error = storage.save(data)
        if not ok:
            st.warning(error)
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._write_lock = threading.Lock()
        self._counter_lock = threading.Lock()
        self._next_generation = 0
        self._written_generation = -1
        self.last_error: Optional[str] = None

    # ==================== LOAD ====================

    def load(self) -> Optional[AppData]:
        """
        Read the saved document.

        Returns:
            AppData, or None when the file is missing or cannot be parsed
        """
        if not self.path.exists():
            logger.info(f"📭 No saved data at {self.path}")
            return None

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = json.load(f)
            data = AppData.from_dict(raw)
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
            logger.error(f"❌ Error loading data from {self.path}: {e}")
            return None

        logger.info(
            f"📂 Loaded {len(data.generators)} generators, "
            f"{len(data.weekly_data)} weeks from {self.path}"
        )
        return data

    # ==================== SAVE ====================

    def save(self, data: AppData) -> Tuple[bool, Optional[str]]:
        """
        Write the document.

        The snapshot is serialized and numbered in one critical section,
        so generation order is snapshot order. A save that loses the race
        for the write lock to a newer one is skipped instead of
        overwriting newer data.

        Returns:
            Tuple of (success: bool, error_message: str or None)
        """
        with self._counter_lock:
            payload = json.dumps(data.to_dict(), indent=2)
            generation = self._next_generation
            self._next_generation += 1

        with self._write_lock:
            if generation < self._written_generation:
                logger.debug(f"Skipping stale save #{generation}")
                return True, None

            try:
                self._atomic_write(payload)
            except OSError as e:
                error_msg = f"Could not save data: {e}"
                logger.error(f"❌ Error saving data to {self.path}: {e}")
                self.last_error = error_msg
                return False, error_msg

            self._written_generation = generation
            self.last_error = None

        logger.debug(f"💾 Saved data (#{generation}) to {self.path}")
        return True, None

    def _atomic_write(self, payload: str):
        self.path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_path = tempfile.mkstemp(
            prefix=f".{self.path.name}.", suffix=".tmp", dir=str(self.path.parent)
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_path, self.path)
        except OSError:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise


# ==================== SINGLETON STORE ====================

_stores: Dict[Path, JsonDataStore] = {}
_shared: Dict[Path, MetricsStore] = {}
_stores_lock = threading.Lock()


def get_data_store(path: Union[str, Path, None] = None) -> JsonDataStore:
    """
    Get the JsonDataStore for a data file (singleton per path)

    All sessions of the app share one store so their writes are ordered.
    """
    path = Path(path) if path else config.get_data_path()

    if path not in _stores:
        with _stores_lock:
            if path not in _stores:
                _stores[path] = JsonDataStore(path)

    return _stores[path]


def load_app_data(storage: Optional[JsonDataStore] = None) -> AppData:
    """Load saved data, falling back to an empty document."""
    storage = storage or get_data_store()
    data = storage.load()
    if data is None:
        logger.info("🆕 Starting with empty tracker data")
        return AppData()
    return data


def get_shared_store(path: Union[str, Path, None] = None) -> MetricsStore:
    """
    Get the MetricsStore for a data file (singleton per path)

    Loaded once and saved on every mutation. Sessions must share it:
    each save writes the whole document, so a second in-memory copy
    would erase edits made through the first.
    """
    storage = get_data_store(path)

    if storage.path not in _shared:
        with _stores_lock:
            if storage.path not in _shared:
                store = MetricsStore(load_app_data(storage))
                store.add_listener(storage.save)
                _shared[storage.path] = store
                logger.info(f"🚀 Tracker data opened ({storage.path})")

    return _shared[storage.path]


def reset_data_stores():
    """Forget cached stores (tests / config changes)."""
    with _stores_lock:
        _stores.clear()
        _shared.clear()
