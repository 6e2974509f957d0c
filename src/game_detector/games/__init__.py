"""Game models and the detector that collects them from every launcher."""

from game_detector.games.models import DetectionResult, Game, LaunchCommand, SupportedLauncher
from game_detector.games.detector import GamesDetector, get_detector

__all__ = [
    "DetectionResult",
    "Game",
    "LaunchCommand",
    "SupportedLauncher",
    "GamesDetector",
    "get_detector",
]
