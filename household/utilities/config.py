"""Configuration management for the household shopping-list service."""
import os
from typing import Final, Optional
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
env_path = Path(__file__).parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)

# Application Settings
APP_HOST: Final[str] = os.getenv('APP_HOST', '0.0.0.0')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '8000'))
DEBUG: Final[bool] = os.getenv('DEBUG', 'False').lower() == 'true'
LOG_LEVEL: Final[str] = os.getenv('LOG_LEVEL', 'DEBUG' if DEBUG else 'INFO').upper()

# Pricing fallback when an ingredient has no price entry
DEFAULT_PRICE_MIN: Final[float] = float(os.getenv('DEFAULT_PRICE_MIN', '1.00'))
DEFAULT_PRICE_MAX: Final[float] = float(os.getenv('DEFAULT_PRICE_MAX', '3.00'))

# File Paths
BASE_DIR: Final[Path] = Path(__file__).parent.parent
DATA_DIR: Final[Path] = Path(os.getenv('HOUSEHOLD_DATA_DIR', str(BASE_DIR / 'data'))).resolve()
_catalog_env = os.getenv('PACKAGE_CATALOG_FILE')
PACKAGE_CATALOG_FILE: Final[Optional[Path]] = Path(_catalog_env).resolve() if _catalog_env else None
