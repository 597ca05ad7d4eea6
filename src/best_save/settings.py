"""Process-wide settings holder for the command line and embedding apps."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from best_save.config.manager import ConfigManager
from best_save.config.schema import AppConfig

_config_manager: ConfigManager | None = None


def load_settings(
    defaults_path: Path | None = None,
    user_path: Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> AppConfig:
    """Load the planner configuration and remember its manager."""
    global _config_manager
    _config_manager = ConfigManager(
        defaults_path=defaults_path,
        user_path=user_path,
    )
    return _config_manager.load(overrides)


def get_config_manager() -> ConfigManager:
    """Get the active config manager instance."""
    if _config_manager is None:
        raise RuntimeError("Settings not loaded. Call load_settings() first.")
    return _config_manager
