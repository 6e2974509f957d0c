"""
Game Detector - Find games installed by Linux game launchers.

Reads the files of Steam, Heroic, Lutris, Bottles, Prism Launcher,
ATLauncher and itch to list installed games with their launch command,
install directory, box art and icon.
"""

import logging

from game_detector.config.paths import BaseDirs
from game_detector.games import (
    DetectionResult,
    Game,
    GamesDetector,
    LaunchCommand,
    SupportedLauncher,
    get_detector,
)

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    "BaseDirs",
    "DetectionResult",
    "Game",
    "GamesDetector",
    "LaunchCommand",
    "SupportedLauncher",
    "get_detector",
]
