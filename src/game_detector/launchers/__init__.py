"""Launcher probes, one per supported launcher."""

from game_detector.launchers.base import Launcher
from game_detector.launchers.bottles import BottlesLauncher
from game_detector.launchers.heroic import (
    HeroicAmazonLauncher,
    HeroicEpicLauncher,
    HeroicGOGLauncher,
    HeroicSideloadLauncher,
)
from game_detector.launchers.itch import ItchLauncher
from game_detector.launchers.lutris import LutrisLauncher
from game_detector.launchers.minecraft import MinecraftATLauncher, MinecraftPrismLauncher
from game_detector.launchers.steam import SteamLauncher

__all__ = [
    "Launcher",
    "SteamLauncher",
    "HeroicGOGLauncher",
    "HeroicEpicLauncher",
    "HeroicAmazonLauncher",
    "HeroicSideloadLauncher",
    "LutrisLauncher",
    "BottlesLauncher",
    "MinecraftPrismLauncher",
    "MinecraftATLauncher",
    "ItchLauncher",
]
