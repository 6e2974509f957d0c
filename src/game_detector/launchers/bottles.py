"""
Programs added to the Bottles library.

Paths:
- ~/.local/share/bottles
- Flatpak: ~/.var/app/com.usebottles.bottles/data/bottles

library.yml lists the programs shown in the library; each bottle's
bottle.yml holds the install folder of its programs, matched by ID.
"""

import logging
from pathlib import Path
from typing import Any, Optional

import yaml

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

LAUNCHER = SupportedLauncher.BOTTLES
FLATPAK_ID = "com.usebottles.bottles"

THUMBNAIL_PREFIX = "grid:"


def get_bottles_launch_command(title: str, bottle_name: str, is_using_flatpak: bool) -> LaunchCommand:
    args = ["run", "-p", title, "-b", bottle_name]
    if is_using_flatpak:
        return get_launch_command_flatpak(FLATPAK_ID, args, flatpak_args=["--command=bottles-cli"])
    return get_launch_command("bottles-cli", args)


def load_yaml(path: Path) -> Any:
    """
    Load a YAML file.

    Raises:
        OSError: If the file cannot be read
        yaml.YAMLError: If the file is not valid YAML
    """
    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f)


class BottlesLauncher(Launcher):
    """Probe for programs in the Bottles library."""

    launcher_type = LAUNCHER

    def __init__(self, base_dirs: BaseDirs):
        path_bottles_data, self.is_using_flatpak = resolve_flatpak_fallback(
            base_dirs.data / "bottles",
            base_dirs.home / ".var/app/com.usebottles.bottles/data/bottles",
            LAUNCHER,
        )
        self.path_bottles_dir = path_bottles_data / "bottles"
        self.path_bottles_library = path_bottles_data / "library.yml"

        debug_path(LAUNCHER, "bottles directory", self.path_bottles_dir)
        debug_path(LAUNCHER, "library yaml file", self.path_bottles_library)

    def is_detected(self) -> bool:
        return self.path_bottles_library.is_file()

    def get_program_folders(self) -> dict[str, str]:
        """
        Map program IDs to their install folder, across every bottle.

        Unreadable bottle.yml files are logged and skipped.
        """
        folders: dict[str, str] = {}

        try:
            paths = sorted(self.path_bottles_dir.glob("*/bottle.yml"))
        except OSError as e:
            logger.error("%s - Error with reading the bottles directory: %s", LAUNCHER, e)
            return folders

        for path_bottle_yml in paths:
            try:
                data = load_yaml(path_bottle_yml)
            except (OSError, yaml.YAMLError) as e:
                logger.error(
                    "%s - Error with reading bottle yaml file at %s: %s", LAUNCHER, path_bottle_yml, e
                )
                continue

            programs = data.get("External_Programs") if isinstance(data, dict) else None
            if not isinstance(programs, dict):
                logger.debug("%s - No programs in %s", LAUNCHER, path_bottle_yml)
                continue

            for key, program in programs.items():
                if not isinstance(program, dict):
                    continue
                program_id = str(program.get("id", key))
                folder = program.get("folder")
                if isinstance(folder, str) and folder:
                    folders[program_id] = folder

        return folders

    def get_box_art(self, bottle_path: str, thumbnail: Any) -> Optional[Path]:
        if not isinstance(thumbnail, str) or not thumbnail.startswith(THUMBNAIL_PREFIX):
            return None
        file_name = thumbnail[len(THUMBNAIL_PREFIX):]
        return some_if_file(self.path_bottles_dir / bottle_path / "grids" / file_name)

    def get_game(self, key: str, entry: dict, folders: dict[str, str]) -> Optional[Game]:
        program_id = str(entry.get("id", key))
        title = clean_game_title(str(entry.get("name") or ""))
        bottle = entry.get("bottle")

        if not title or not isinstance(bottle, dict) or not bottle.get("name"):
            logger.warning("%s - Dropped library record %s without a name or bottle", LAUNCHER, key)
            return None

        folder = folders.get(program_id)
        if folder is None:
            logger.warning(
                "%s - Dropped '%s' as no bottle lists a program with ID %s", LAUNCHER, title, program_id
            )
            return None

        bottle_name = str(bottle["name"])
        icon = entry.get("icon")

        return Game(
            title=title,
            launch_command=get_bottles_launch_command(title, bottle_name, self.is_using_flatpak),
            source=LAUNCHER,
            app_id=program_id,
            path_game_dir=some_if_dir(Path(folder)),
            path_box_art=self.get_box_art(str(bottle.get("path") or bottle_name), entry.get("thumbnail")),
            path_icon=some_if_file(Path(icon)) if isinstance(icon, str) and icon else None,
        )

    def get_detected_games(self) -> list[Game]:
        library = load_yaml(self.path_bottles_library)
        if not isinstance(library, dict):
            logger.warning("%s - Library file at %s is empty", LAUNCHER, self.path_bottles_library)
            return []

        folders = self.get_program_folders()

        games = []
        for key, entry in library.items():
            if not isinstance(entry, dict):
                continue
            game = self.get_game(str(key), entry, folders)
            if game is not None:
                games.append(game)

        return games
