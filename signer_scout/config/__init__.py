"""
Configuration management for signer-scout.

Loads and validates settings from environment variables and an optional
.env file. Exposes a single source of truth for run configuration.
"""

from signer_scout.config.settings import Settings, get_settings  # noqa: F401

__all__ = ["Settings", "get_settings"]
