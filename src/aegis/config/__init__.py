"""Configuration module for Aegis."""

from .loader import Config, get_config, load_preferences, reload_config

__all__ = ["Config", "get_config", "load_preferences", "reload_config"]
