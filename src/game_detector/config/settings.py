"""
Runtime settings for Game Detector.

Values are read from GAME_DETECTOR_* environment variables once, when the
module is imported.
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from game_detector.config.paths import BaseDirs


class Settings(BaseSettings):
    """Settings read from the environment."""

    model_config = SettingsConfigDict(env_prefix="GAME_DETECTOR_")

    LOG_LEVEL: str = "WARNING"

    @field_validator("LOG_LEVEL")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        return value.strip().upper()

    def get_base_dirs(self) -> BaseDirs:
        """Get the base directories launchers are resolved against."""
        return BaseDirs.from_env()


settings = Settings()
