"""Shared test fixtures for Best Save."""

from __future__ import annotations

from pathlib import Path

import pytest
import structlog

from best_save.config.manager import ConfigManager
from best_save.config.schema import AppConfig, ConstraintsConfig


@pytest.fixture
def config() -> AppConfig:
    """Provide a default test configuration."""
    return AppConfig()


@pytest.fixture
def config_manager(tmp_path: Path) -> ConfigManager:
    """Provide a config manager with test paths."""
    defaults = tmp_path / "config.defaults.yaml"
    defaults.write_text("constraints:\n  max_minutes_off: 2\n  min_minutes_off: 2\n")
    user = tmp_path / "config.yaml"
    mgr = ConfigManager(defaults_path=defaults, user_path=user)
    mgr.load()
    return mgr


@pytest.fixture
def strict_recovery() -> ConstraintsConfig:
    """Two-slot off runs that need a full equal-length recovery."""
    return ConstraintsConfig(
        max_minutes_off=2,
        min_minutes_off=2,
        recovery_percentage=100,
        recovery_max_minutes=None,
        min_saving=0,
    )


@pytest.fixture(autouse=True)
def _clean_log_context():
    structlog.contextvars.clear_contextvars()
    yield
    structlog.contextvars.clear_contextvars()
