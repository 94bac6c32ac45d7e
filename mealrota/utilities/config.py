"""Configuration management for the Meal Rotation planner."""
import os
from typing import Final
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
env_path = Path(__file__).parent.parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)

# Remote state endpoint; empty means local-only persistence
API_BASE: Final[str] = os.getenv('MEALROTA_API_BASE', '').strip()
REMOTE_TIMEOUT: Final[float] = float(os.getenv('MEALROTA_REMOTE_TIMEOUT', '5'))

# Application Settings
APP_HOST: Final[str] = os.getenv('APP_HOST', '0.0.0.0')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '8000'))
DEBUG: Final[bool] = os.getenv('DEBUG', 'False').lower() == 'true'

# Autosave quiescence window
AUTOSAVE_DEBOUNCE_SECONDS: Final[float] = float(os.getenv('AUTOSAVE_DEBOUNCE_SECONDS', '0.4'))

# Anchor meal time used when projecting dates
DINNER_HOUR: Final[int] = int(os.getenv('DINNER_HOUR', '18'))
DINNER_MINUTES: Final[int] = int(os.getenv('DINNER_MINUTES', '0'))

# File Paths
BASE_DIR: Final[Path] = Path(__file__).parent.parent
DATA_DIR: Final[Path] = Path(os.getenv('MEALROTA_DATA_DIR', str(BASE_DIR / 'data')))
