"""
Configuration management for the Invasion Factor engine.

Loads settings from environment variables and an optional .env file.
Exposes a single source of truth for calibration path, batch and log settings.
"""

from invasion_factor.config.settings import Settings, get_settings  # noqa: F401

__all__ = ["Settings", "get_settings"]
