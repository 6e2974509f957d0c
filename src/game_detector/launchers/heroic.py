"""
Heroic Games Launcher (Epic via Legendary, Amazon via Nile, GOG, sideloaded).

Paths:
- ~/.config/heroic
- Flatpak: ~/.var/app/com.heroicgameslauncher.hgl/config/heroic
"""

import json
import logging
from pathlib import Path, PurePath
from typing import Any, Iterator, Optional

from game_detector.config.paths import BaseDirs
from game_detector.games.models import Game, LaunchCommand, SupportedLauncher
from game_detector.launchers.base import Launcher, debug_path, resolve_flatpak_fallback
from game_detector.utils import (
    clean_game_title,
    get_launch_command,
    get_launch_command_flatpak,
    some_if_dir,
    some_if_file,
)

logger = logging.getLogger(__name__)

FLATPAK_ID = "com.heroicgameslauncher.hgl"


def get_heroic_config_path(base_dirs: BaseDirs, launcher: SupportedLauncher) -> tuple[Path, bool]:
    """Get the Heroic config directory and whether it is the Flatpak one."""
    return resolve_flatpak_fallback(
        base_dirs.config / "heroic",
        base_dirs.home / ".var/app/com.heroicgameslauncher.hgl/config/heroic",
        launcher,
    )


def get_launch_command_for_heroic_source(
    source: str, app_id: str, is_using_flatpak: bool
) -> LaunchCommand:
    """
    Build a heroic:// launch command.

    Args:
        source: Heroic runner name (legendary, nile, gog or sideload)
        app_id: Heroic app name of the game
        is_using_flatpak: Whether Heroic is installed with Flatpak
    """
    args = [f"heroic://launch/{source}/{app_id}"]
    if is_using_flatpak:
        return get_launch_command_flatpak(FLATPAK_ID, args)
    return get_launch_command("xdg-open", args)


def iter_library_entries(data: Any, list_keys: tuple[str, ...]) -> Iterator[dict]:
    """
    Yield the game records of a Heroic library file.

    Heroic versions differ in whether the records are the top level list or
    are stored under a key such as "library" or "installed".
    """
    if isinstance(data, dict):
        for key in list_keys:
            if isinstance(data.get(key), list):
                data = data[key]
                break
        else:
            # Some versions map app names to records
            data = list(data.values())

    if not isinstance(data, list):
        return

    for entry in data:
        if isinstance(entry, dict):
            yield entry


def _get_str(entry: dict, *keys: str) -> Optional[str]:
    for key in keys:
        value = entry.get(key)
        if isinstance(value, str) and value.strip():
            return value
    return None


class HeroicLauncher(Launcher):
    """
    Common probe for one Heroic source.

    Subclasses set the library file, the runner name used in launch URIs and
    how a record is turned into a game.
    """

    #: Library file, relative to the Heroic config directory
    library_file: str
    #: Runner name used in heroic://launch/<runner>/<app_id>
    runner: str
    #: Keys which may hold the list of records
    list_keys: tuple[str, ...] = ("library", "games", "installed")

    def __init__(self, base_dirs: BaseDirs):
        path_heroic_config, self.is_using_flatpak = get_heroic_config_path(
            base_dirs, self.launcher_type
        )
        self.path_library = path_heroic_config / self.library_file
        self.path_icons = path_heroic_config / "icons"
        debug_path(self.launcher_type, "library file", self.path_library)

    def is_detected(self) -> bool:
        return self.path_library.exists()

    def read_library(self) -> Any:
        """
        Load the library file.

        Raises:
            OSError: If the file cannot be read
            json.JSONDecodeError: If the file is not valid JSON
        """
        with open(self.path_library, encoding="utf-8") as f:
            return json.load(f)

    def get_launch_command(self, app_id: str) -> LaunchCommand:
        return get_launch_command_for_heroic_source(self.runner, app_id, self.is_using_flatpak)

    def parse_entry(self, entry: dict) -> Optional[Game]:
        """Turn one library record into a game, or None if it is not installed."""
        if entry.get("is_installed") is False:
            return None

        app_id = _get_str(entry, "app_name", "appName")
        title = _get_str(entry, "title")

        install = entry.get("install")
        install_path = _get_str(install, "install_path") if isinstance(install, dict) else None
        install_path = install_path or _get_str(entry, "install_path", "folder_name")

        if app_id is None or title is None:
            logger.warning("%s - Skipped library record without app name or title", self.launcher_type)
            return None

        title = clean_game_title(title)
        if not title:
            return None

        return Game(
            title=title,
            launch_command=self.get_launch_command(app_id),
            source=self.launcher_type,
            app_id=app_id,
            path_game_dir=some_if_dir(Path(install_path)) if install_path else None,
            path_box_art=some_if_file(self.path_icons / f"{app_id}.jpg"),
        )

    def get_detected_games(self) -> list[Game]:
        data = self.read_library()

        games = []
        for entry in iter_library_entries(data, self.list_keys):
            try:
                game = self.parse_entry(entry)
            except (TypeError, ValueError) as e:
                logger.warning("%s - Dropped library record: %s", self.launcher_type, e)
                continue
            if game is not None:
                logger.debug("%s - Found game: %s", self.launcher_type, game.title)
                games.append(game)

        return games


class HeroicEpicLauncher(HeroicLauncher):
    """Epic Games Store games installed through Legendary."""

    launcher_type = SupportedLauncher.HEROIC_EPIC
    library_file = "store_cache/legendary_library.json"
    runner = "legendary"


class HeroicAmazonLauncher(HeroicLauncher):
    """Amazon Prime Gaming games installed through Nile."""

    launcher_type = SupportedLauncher.HEROIC_AMAZON
    library_file = "store_cache/nile_library.json"
    runner = "nile"


class HeroicSideloadLauncher(HeroicLauncher):
    """Games added manually to Heroic."""

    launcher_type = SupportedLauncher.HEROIC_SIDELOAD
    library_file = "sideload_apps/library.json"
    runner = "sideload"
    list_keys = ("games",)


class HeroicGOGLauncher(HeroicLauncher):
    """
    GOG games.

    installed.json has no titles; the title is the name of the install
    directory.
    """

    launcher_type = SupportedLauncher.HEROIC_GOG
    library_file = "gog_store/installed.json"
    runner = "gog"
    list_keys = ("installed",)

    def parse_entry(self, entry: dict) -> Optional[Game]:
        app_id = _get_str(entry, "appName", "app_name")
        install_path = _get_str(entry, "install_path")

        if app_id is None or install_path is None:
            logger.warning("%s - Skipped installed record without app name or path", self.launcher_type)
            return None

        title = clean_game_title(PurePath(install_path.rstrip("/")).name)
        if not title:
            return None

        return Game(
            title=title,
            launch_command=self.get_launch_command(app_id),
            source=self.launcher_type,
            app_id=app_id,
            path_game_dir=some_if_dir(Path(install_path)),
            path_icon=some_if_file(self.path_icons / f"{app_id}.png"),
        )
