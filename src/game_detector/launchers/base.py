"""
Base class for launcher probes.

Every supported launcher implements is_detected() and get_detected_games();
detect() combines both with the short-circuit shared by all launchers.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from game_detector.games.models import Game, SupportedLauncher

logger = logging.getLogger(__name__)


def resolve_flatpak_fallback(
    path_native: Path,
    path_flatpak: Path,
    launcher: SupportedLauncher,
) -> tuple[Path, bool]:
    """
    Pick the native launcher directory, or the Flatpak one if it is missing.

    Returns:
        The directory to use and whether it is the Flatpak one
    """
    if path_native.is_dir():
        return path_native, False

    logger.debug("%s - Attempting to fall back to flatpak", launcher)
    return path_flatpak, True


def debug_path(launcher: SupportedLauncher, description: str, path: Optional[Path]) -> None:
    """Log whether a path a launcher relies on exists."""
    exists = path is not None and path.exists()
    logger.debug("%s - %s exists at %s: %s", launcher, description, path, exists)


class Launcher(ABC):
    """
    A source of installed games, e.g. Steam or Lutris.

    Subclasses only read the filesystem; they never write or launch anything.
    """

    launcher_type: SupportedLauncher

    #: True when the launcher was found in its Flatpak location
    is_using_flatpak: bool = False

    @abstractmethod
    def is_detected(self) -> bool:
        """
        Check if the launcher is installed.

        True iff the launcher's defining file or directory exists, regardless
        of whether it has any games.
        """

    @abstractmethod
    def get_detected_games(self) -> list[Game]:
        """
        Get all games installed through this launcher.

        Sources that fail individually (one corrupt manifest among many) are
        logged and skipped. Errors that make the whole launcher unusable
        propagate to the caller.
        """

    def detect(self) -> tuple[bool, list[Game]]:
        """
        Detect the launcher and its games.

        Returns:
            (is_present, games); games is empty and nothing is parsed when
            the launcher is not present
        """
        if not self.is_detected():
            return False, []

        games = self.get_detected_games()
        if not games:
            logger.warning("%s - No games found", self.launcher_type)

        return True, games

    def __repr__(self) -> str:
        return f"{type(self).__name__}(is_using_flatpak={self.is_using_flatpak})"
