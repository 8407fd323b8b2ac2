"""Configuration management for the NutriLens application."""
import os
from typing import Final
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
env_path = Path(__file__).parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)

# Generative text model
OPENAI_API_KEY: Final[str] = os.getenv('OPENAI_API_KEY', '')
OPENAI_MODEL: Final[str] = os.getenv('OPENAI_MODEL', 'gpt-4o-mini')
GENERATION_TIMEOUT: Final[float] = float(os.getenv('GENERATION_TIMEOUT', '30'))

# Nutrition lookup (CalorieNinjas)
CALORIENINJAS_API_KEY: Final[str] = os.getenv('CALORIENINJAS_API_KEY', '')
CALORIENINJAS_URL: Final[str] = os.getenv('CALORIENINJAS_URL', 'https://api.calorieninjas.com/v1/nutrition')

# Product lookup (Open Food Facts)
OPENFOODFACTS_URL: Final[str] = os.getenv('OPENFOODFACTS_URL', 'https://world.openfoodfacts.org/api/v0/product')
LOOKUP_TIMEOUT: Final[float] = float(os.getenv('LOOKUP_TIMEOUT', '10'))

# Application Settings
APP_HOST: Final[str] = os.getenv('APP_HOST', '0.0.0.0')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '8000'))
DEBUG: Final[bool] = os.getenv('DEBUG', 'False').lower() == 'true'
LOG_LEVEL: Final[str] = os.getenv('LOG_LEVEL', 'DEBUG' if DEBUG else 'INFO').upper()

# File Paths
BASE_DIR: Final[Path] = Path(__file__).parent.parent
DATA_DIR: Final[Path] = Path(os.getenv('NUTRILENS_DATA_DIR', str(BASE_DIR / 'data')))
