# ABOUTME: Shared test fixtures for the time and weather tool test suite.
# ABOUTME: Blocks real LLM calls and provides a fixture that pins the service clock.

from datetime import datetime, timezone

import pydantic_ai.models
import pytest

from timeweather import time_service

# Prevent accidental LLM calls during testing
pydantic_ai.models.ALLOW_MODEL_REQUESTS = False

# 2024-02-29 23:59:59.999 UTC, a leap day one millisecond before midnight
FIXED_NOW = datetime(2024, 2, 29, 23, 59, 59, 999000, tzinfo=timezone.utc)


@pytest.fixture
def fixed_clock(monkeypatch):
    """Pin time_service's clock to FIXED_NOW (expressed in UTC)."""
    monkeypatch.setattr(time_service, "_now", lambda: FIXED_NOW)
    return FIXED_NOW
