"""
Configuration management for Interest Profiler.

Loads settings from environment variables and an optional .env file.
"""

from interest_profiler.config.settings import Settings, get_settings  # noqa: F401

__all__ = ["Settings", "get_settings"]
