"""
Game data models for the game detector.
"""

import os
import shlex
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional, Union


class SupportedLauncher(Enum):
    """Source a game was detected from. Declaration order is probe order."""

    STEAM = "steam"  # Steam games and non-Steam shortcuts
    HEROIC_GOG = "heroic_gog"
    HEROIC_EPIC = "heroic_epic"  # Legendary
    HEROIC_AMAZON = "heroic_amazon"  # Nile
    HEROIC_SIDELOAD = "heroic_sideload"  # Added manually in Heroic
    LUTRIS = "lutris"
    BOTTLES = "bottles"
    MINECRAFT_PRISM = "minecraft_prism"
    MINECRAFT_AT = "minecraft_at"
    ITCH = "itch"

    @property
    def display_name(self) -> str:
        """Get human-readable launcher name."""
        return _DISPLAY_NAMES[self]

    def __str__(self) -> str:
        return self.display_name


_DISPLAY_NAMES = {
    SupportedLauncher.STEAM: "Steam",
    SupportedLauncher.HEROIC_GOG: "Heroic Games Launcher (GOG)",
    SupportedLauncher.HEROIC_EPIC: "Heroic Games Launcher (Epic Games Store)",
    SupportedLauncher.HEROIC_AMAZON: "Heroic Games Launcher (Amazon Prime Gaming)",
    SupportedLauncher.HEROIC_SIDELOAD: "Heroic Games Launcher (Sideload)",
    SupportedLauncher.LUTRIS: "Lutris",
    SupportedLauncher.BOTTLES: "Bottles",
    SupportedLauncher.MINECRAFT_PRISM: "Prism Launcher",
    SupportedLauncher.MINECRAFT_AT: "ATLauncher",
    SupportedLauncher.ITCH: "itch",
}


@dataclass(frozen=True)
class LaunchCommand:
    """
    Command which starts a game.

    Only describes the command; this package never runs it.
    """

    program: str
    args: tuple[str, ...] = ()
    env: tuple[tuple[str, str], ...] = ()

    @property
    def argv(self) -> list[str]:
        """Argument vector, without environment variables."""
        return [self.program, *self.args]

    def get_env(self, base: Optional[dict[str, str]] = None) -> dict[str, str]:
        """
        Environment to run the command with.

        Args:
            base: Environment to extend (defaults to os.environ)
        """
        env = dict(os.environ if base is None else base)
        env.update(self.env)
        return env

    def to_shell(self) -> str:
        """Render as a single shell command line."""
        prefix = [f"{key}={shlex.quote(value)}" for key, value in self.env]
        return " ".join(prefix + [shlex.join(self.argv)])

    def __str__(self) -> str:
        return self.to_shell()


@dataclass
class Game:
    """
    A game detected from one launcher.

    Paths are only set when they exist on disk.
    """

    title: str
    launch_command: LaunchCommand
    source: SupportedLauncher

    # Launcher-native ID (Steam app ID, Epic app name, Lutris DB row, ...)
    app_id: Optional[str] = None

    path_game_dir: Optional[Path] = None
    path_box_art: Optional[Path] = None
    path_icon: Optional[Path] = None

    def __post_init__(self) -> None:
        if not self.title or not self.title.strip():
            raise ValueError(f"{self.source} - game title must not be empty")

    @property
    def key(self) -> tuple[SupportedLauncher, str]:
        """
        Identity of this game.

        (source, app_id) when the launcher provides an ID, otherwise
        (source, normalized install path), falling back to the title.
        """
        if self.app_id:
            return (self.source, self.app_id)
        if self.path_game_dir is not None:
            return (self.source, os.path.normpath(str(self.path_game_dir)))
        return (self.source, self.title)

    def to_dict(self) -> dict[str, Union[str, list[str], dict[str, str], None]]:
        """Convert to a JSON serializable dictionary."""

        def _path(value: Optional[Path]) -> Optional[str]:
            return str(value) if value is not None else None

        return {
            "title": self.title,
            "source": self.source.value,
            "app_id": self.app_id,
            "launch_command": self.launch_command.to_shell(),
            "launch_argv": self.launch_command.argv,
            "launch_env": dict(self.launch_command.env),
            "path_game_dir": _path(self.path_game_dir),
            "path_box_art": _path(self.path_box_art),
            "path_icon": _path(self.path_icon),
        }


@dataclass
class DetectionResult:
    """
    Result of running every launcher once.

    Both mappings contain every launcher the detector owns; a launcher that
    was not detected (or failed) maps to False and an empty list.
    """

    detected: dict[SupportedLauncher, bool] = field(default_factory=dict)
    games: dict[SupportedLauncher, list[Game]] = field(default_factory=dict)

    @property
    def detected_launchers(self) -> list[SupportedLauncher]:
        """Launchers which were found on the system."""
        return [launcher for launcher, present in self.detected.items() if present]

    @property
    def all_games(self) -> list[Game]:
        """All games, in launcher order then discovery order."""
        return [game for games in self.games.values() for game in games]
