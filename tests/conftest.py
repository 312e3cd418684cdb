"""Global pytest configuration and fixtures.

Provides the on-disk fixture plugins (tests/fixtures/acme) and a fresh
application context per test.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from plugwire.app import build_application
from plugwire.config import Settings
from plugwire.host.container import Application

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixture_plugins(monkeypatch: pytest.MonkeyPatch) -> Path:
    """Make the acme fixture plugins importable."""
    monkeypatch.syspath_prepend(str(FIXTURES_DIR))
    return FIXTURES_DIR / "acme"


@pytest.fixture
def settings() -> Settings:
    """Settings that ignore any local .env file."""
    return Settings(_env_file=None, plugins=[])


@pytest.fixture
def app(settings: Settings) -> Application:
    """Application context with host services registered, no plugins booted."""
    return build_application(settings)
