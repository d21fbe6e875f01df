# ABOUTME: Runtime settings for the time and weather tools, read from the environment.
# ABOUTME: Loads a .env file first so local overrides work without exporting variables.

import os

from dotenv import load_dotenv

load_dotenv()

GEOCODING_URL = os.environ.get("GEOCODING_URL", "https://geocoding-api.open-meteo.com/v1/search")
FORECAST_URL = os.environ.get("FORECAST_URL", "https://api.open-meteo.com/v1/forecast")
AIR_QUALITY_URL = os.environ.get("AIR_QUALITY_URL", "https://air-quality-api.open-meteo.com/v1/air-quality")

GEOCODING_LANGUAGE = os.environ.get("GEOCODING_LANGUAGE", "zh")

# Applies to connect, read, write and pool acquisition alike
REQUEST_TIMEOUT_SECONDS = float(os.environ.get("REQUEST_TIMEOUT_SECONDS", "10"))

OPENROUTER_EXTRA_MODEL = os.environ.get("OPENROUTER_EXTRA_MODEL", "")
OPENROUTER_MODEL = os.environ.get("OPENROUTER_MODEL", "anthropic/claude-sonnet-4-5")

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
