"""Configuration: base directories and runtime settings."""

from game_detector.config.paths import BaseDirs
from game_detector.config.settings import Settings, settings

__all__ = ["BaseDirs", "Settings", "settings"]
