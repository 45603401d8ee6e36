# utils/__init__.py
"""
Shared Utilities Package for the Lead Tracker app

This package contains common utilities shared across all pages:
- config: Configuration management (local .env + Streamlit secrets)
- storage: JSON document persistence with serialized writes
- session: Per-session tracker state (store, engine, evaluator)
- lead_tracker: Core tracking logic, charts and export

Usage:
    # Import specific modules
    from utils.config import config
    from utils.storage import get_data_store, load_app_data

    # Or import commonly used items directly
    from utils import config, get_data_store
"""

# Configuration
from .config import (
    config,
    Config,
)

# Storage
from .storage import (
    JsonDataStore,
    get_data_store,
    get_shared_store,
    load_app_data,
    reset_data_stores,
)

__all__ = [
    # Config
    'config',
    'Config',

    # Storage
    'JsonDataStore',
    'get_data_store',
    'get_shared_store',
    'load_app_data',
    'reset_data_stores',
]

__version__ = '1.0.0'
