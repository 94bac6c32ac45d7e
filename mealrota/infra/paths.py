from pathlib import Path

from mealrota.utilities.config import DATA_DIR as _CONFIGURED_DATA_DIR

# Centralized paths for data files (single source of truth)
DATA_DIR = Path(_CONFIGURED_DATA_DIR).resolve()
LOCAL_STORE_FILE = DATA_DIR / 'local_store.json'
STATE_BLOB_FILE = DATA_DIR / 'state.json'

__all__ = ['DATA_DIR', 'LOCAL_STORE_FILE', 'STATE_BLOB_FILE']
