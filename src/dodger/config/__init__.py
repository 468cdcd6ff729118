"""Configuration for the dodger engine."""

from .settings import Settings, FieldSettings, GameSettings, get_settings

__all__ = ["Settings", "FieldSettings", "GameSettings", "get_settings"]
