"""Configuration management for Best Save."""

from best_save.config.schema import AppConfig
from best_save.config.manager import ConfigManager

__all__ = ["AppConfig", "ConfigManager"]
