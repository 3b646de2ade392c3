"""Shared fixtures. Tests never reach a real model endpoint."""

from __future__ import annotations

import os
from datetime import date

import pytest

os.environ["OPENAI_API_KEY"] = ""
os.environ.setdefault("ENVIRONMENT", "development")

from callpad.config import Settings, get_settings  # noqa: E402
from callpad.services.pattern_detector import PatternDetector  # noqa: E402

get_settings.cache_clear()

# Wednesday
WEDNESDAY = date(2026, 10, 14)
# Saturday
SATURDAY = date(2026, 10, 17)


@pytest.fixture
def today() -> date:
    return WEDNESDAY


@pytest.fixture(scope="session")
def detector() -> PatternDetector:
    return PatternDetector()


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, openai_api_key="", debounce_seconds=0.01)


@pytest.fixture
def ai_settings() -> Settings:
    return Settings(
        _env_file=None,
        openai_api_key="test-key",
        openai_base_url="https://llm.test/v1",
        debounce_seconds=0.01,
    )
