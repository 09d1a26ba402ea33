"""Configuration management for monolive.

Loads and validates YAML-based configuration with Pydantic models.
"""

from monolive.config.settings import Settings, load_settings

__all__ = ["Settings", "load_settings"]
