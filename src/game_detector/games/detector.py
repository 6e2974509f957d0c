"""
Game detector.

Runs every launcher probe and combines their results. A probe that fails
is logged and reported as an empty list; it never affects the other probes.
"""

import logging
from typing import Optional

from game_detector.config.paths import BaseDirs
from game_detector.games.models import DetectionResult, Game, SupportedLauncher
from game_detector.launchers import (
    BottlesLauncher,
    HeroicAmazonLauncher,
    HeroicEpicLauncher,
    HeroicGOGLauncher,
    HeroicSideloadLauncher,
    ItchLauncher,
    Launcher,
    LutrisLauncher,
    MinecraftATLauncher,
    MinecraftPrismLauncher,
    SteamLauncher,
)

logger = logging.getLogger(__name__)

# Probe classes in SupportedLauncher order
LAUNCHER_CLASSES: tuple[type[Launcher], ...] = (
    SteamLauncher,
    HeroicGOGLauncher,
    HeroicEpicLauncher,
    HeroicAmazonLauncher,
    HeroicSideloadLauncher,
    LutrisLauncher,
    BottlesLauncher,
    MinecraftPrismLauncher,
    MinecraftATLauncher,
    ItchLauncher,
)


class GamesDetector:
    """
    Detects installed games across launchers.

    Each call re-reads the filesystem; nothing is cached between calls.

    Usage:
        detector = get_detector()
        for game in detector.get_all_detected_games():
            print(game.title, game.launch_command)
    """

    def __init__(self, launchers: list[Launcher]):
        self.launchers = tuple(launchers)

    def _is_detected(self, launcher: Launcher) -> bool:
        try:
            return launcher.is_detected()
        except Exception:
            logger.exception("%s - Failed to check if installed", launcher.launcher_type)
            return False

    def _run(self, launcher: Launcher) -> tuple[bool, list[Game]]:
        """Run one probe; a failure keeps its presence and yields no games."""
        try:
            is_present, games = launcher.detect()
        except Exception:
            logger.exception("%s - Failed to detect games", launcher.launcher_type)
            return self._is_detected(launcher), []

        logger.debug(
            "%s - Detected: %s, games found: %d", launcher.launcher_type, is_present, len(games)
        )
        return is_present, games

    def detect_all(self) -> DetectionResult:
        """Run every probe once and collect presence and games per launcher."""
        result = DetectionResult()
        for launcher in self.launchers:
            is_present, games = self._run(launcher)
            result.detected[launcher.launcher_type] = is_present
            result.games[launcher.launcher_type] = games
        return result

    def get_detected_launchers(self) -> list[SupportedLauncher]:
        """Get launchers which are installed, whether or not they have games."""
        return [launcher.launcher_type for launcher in self.launchers if self._is_detected(launcher)]

    def get_all_detected_games(self) -> list[Game]:
        """
        Get games from every launcher.

        Returns:
            Games in launcher order, then in the order each launcher found
            them. The same game installed through two launchers appears twice.
        """
        return self.detect_all().all_games

    def get_all_detected_games_with_box_art(self) -> list[Game]:
        """Get games from every launcher which have box art."""
        return [game for game in self.get_all_detected_games() if game.path_box_art is not None]

    def get_all_detected_games_per_launcher(self) -> dict[SupportedLauncher, list[Game]]:
        """Get games grouped by launcher; launchers without games map to []."""
        return self.detect_all().games

    def get_all_detected_games_from_specific_launcher(
        self, launcher_type: SupportedLauncher
    ) -> list[Game]:
        """
        Get games of one launcher, running only that probe.

        Args:
            launcher_type: Launcher to query

        Returns:
            Its games, or an empty list if the launcher is not known
        """
        for launcher in self.launchers:
            if launcher.launcher_type == launcher_type:
                return self._run(launcher)[1]

        logger.warning("No detector is registered for launcher: %s", launcher_type)
        return []


def get_detector(base_dirs: Optional[BaseDirs] = None) -> GamesDetector:
    """
    Create a detector with every supported launcher.

    Args:
        base_dirs: Base directories to search (resolved from the
            environment if not given)
    """
    if base_dirs is None:
        base_dirs = BaseDirs.from_env()

    logger.debug("Base directories: %s", base_dirs)
    return GamesDetector([launcher_class(base_dirs) for launcher_class in LAUNCHER_CLASSES])
