"""
Steam games and non-Steam shortcuts.

Paths:
- ~/.local/share/Steam (also reachable through ~/.steam/steam or ~/.steam/root)
- Flatpak: ~/.var/app/com.valvesoftware.Steam/data/Steam
"""

import logging
import os
from pathlib import Path
from typing import Optional

from game_detector.config.paths import BaseDirs
from game_detector.errors import ParseError
from game_detector.games.models import Game, LaunchCommand, SupportedLauncher
from game_detector.launchers.base import Launcher, debug_path
from game_detector.parsers import keyvalues
from game_detector.steam.manifest import (
    AppManifest,
    extract_app_manifests,
    extract_library_folders,
    matches_manifest_filename,
)
from game_detector.steam.shortcuts import RawShortcut, list_shortcuts
from game_detector.utils import (
    clean_game_title,
    get_existing_image_path,
    get_launch_command,
    get_launch_command_flatpak,
    some_if_dir,
    some_if_file,
)

logger = logging.getLogger(__name__)

LAUNCHER = SupportedLauncher.STEAM
FLATPAK_ID = "com.valvesoftware.Steam"

BOX_ART_FILENAMES = ("library_600x900.jpg", "library_capsule.jpg")
# Icons in the newer library cache are named by their SHA-1, e.g.
# a4c7a8cce43d797c275aaf601d6855b90ba87769.jpg
ICON_FILENAME_LENGTH = 44


def get_steam_launch_command(game_id: str, is_using_flatpak: bool) -> LaunchCommand:
    """Build the command which runs a game (or shortcut) through Steam."""
    args = [f"steam://rungameid/{game_id}"]
    if is_using_flatpak:
        return get_launch_command_flatpak(FLATPAK_ID, args)
    return get_launch_command("steam", args)


def get_path_steamapps_dir(path_parent_dir: Path) -> Path:
    """Get the steamapps directory, which is capitalised on some systems."""
    path_capitalised = path_parent_dir / "Steamapps"
    if path_capitalised.is_dir():
        return path_capitalised
    return path_parent_dir / "steamapps"


def find_steam_dir(base_dirs: BaseDirs) -> tuple[Path, bool]:
    """
    Locate the Steam installation directory.

    Returns:
        The directory (which may not exist) and whether it is the Flatpak one
    """
    candidates = [
        base_dirs.data / "Steam",
        base_dirs.home / ".steam" / "steam",
        base_dirs.home / ".steam" / "root",
    ]
    for path in candidates:
        if path.is_dir():
            return path, False

    logger.debug("%s - Attempting to fall back to flatpak", LAUNCHER)
    return base_dirs.home / ".var/app/com.valvesoftware.Steam/data/Steam", True


class SteamLauncher(Launcher):
    """Probe for Steam libraries, app manifests and user shortcuts."""

    launcher_type = LAUNCHER

    def __init__(self, base_dirs: BaseDirs):
        self.path_steam_dir, self.is_using_flatpak = find_steam_dir(base_dirs)
        debug_path(LAUNCHER, "main Steam directory", self.path_steam_dir)

    @property
    def path_library_cache(self) -> Path:
        return self.path_steam_dir / "appcache" / "librarycache"

    def is_detected(self) -> bool:
        return self.path_steam_dir.is_dir()

    # LIBRARIES --------------------------------------------------------------

    def get_library_paths(self) -> list[Path]:
        """
        Get the root directory of every Steam library.

        Falls back to the Steam directory itself when libraryfolders.vdf is
        missing or unusable. Duplicates are removed, keeping file order.
        """
        path_vdf = get_path_steamapps_dir(self.path_steam_dir) / "libraryfolders.vdf"
        debug_path(LAUNCHER, "libraryfolders.vdf", path_vdf)

        paths: list[Path] = []
        try:
            paths = [folder.path for folder in extract_library_folders(keyvalues.load(path_vdf))]
        except FileNotFoundError:
            logger.warning("%s - No libraryfolders.vdf at %s", LAUNCHER, path_vdf)
        except (OSError, ParseError) as e:
            logger.error("%s - Error with parsing Steam libraries at %s: %s", LAUNCHER, path_vdf, e)

        if not paths:
            paths = [self.path_steam_dir]

        unique_paths = []
        seen = set()
        for path in paths:
            normalized = os.path.normpath(str(path))
            if normalized in seen:
                continue
            seen.add(normalized)
            unique_paths.append(path)

        logger.debug("%s - Libraries detected: %s", LAUNCHER, unique_paths)
        return unique_paths

    def get_manifest_paths(self, path_library: Path) -> list[Path]:
        """Get app manifest files of a library, sorted by name."""
        path_steamapps = get_path_steamapps_dir(path_library)
        try:
            entries = sorted(path_steamapps.iterdir())
        except OSError as e:
            logger.error(
                "%s - Failed to read library directory at %s: %s", LAUNCHER, path_steamapps, e
            )
            return []

        manifest_paths = []
        for path in entries:
            if matches_manifest_filename(path.name) and path.is_file():
                manifest_paths.append(path)
            else:
                logger.debug("%s - Skipped non-manifest file: %s", LAUNCHER, path.name)

        if not manifest_paths:
            logger.warning("%s - No app manifest files found for library: %s", LAUNCHER, path_library)

        return manifest_paths

    def get_images(self, app_id: str) -> tuple[Optional[Path], Optional[Path]]:
        """
        Find box art and icon for an app in the library cache.

        Returns:
            (box art, icon), each None when not found
        """
        path_box_art = some_if_file(self.path_library_cache / f"{app_id}_{BOX_ART_FILENAMES[0]}")
        path_icon = some_if_file(self.path_library_cache / f"{app_id}_icon.jpg")

        # Newer clients store images anywhere within <app_id>/, up to two levels deep
        path_app_cache = self.path_library_cache / app_id
        if not path_app_cache.is_dir():
            return path_box_art, path_icon

        candidates = sorted(path_app_cache.glob("*/*")) + sorted(path_app_cache.glob("*"))
        for path in candidates:
            if not path.is_file():
                continue
            if path.name in BOX_ART_FILENAMES:
                path_box_art = path
            elif len(path.name) == ICON_FILENAME_LENGTH and path.name.endswith(".jpg"):
                path_icon = path

        return path_box_art, path_icon

    def get_game(self, path_library: Path, manifest: AppManifest) -> Optional[Game]:
        title = clean_game_title(manifest.name)
        if not title:
            logger.warning("%s - Skipped app %s with an empty title", LAUNCHER, manifest.app_id)
            return None

        path_box_art, path_icon = self.get_images(manifest.app_id)

        # Runtimes, redistributables and tools have no box art
        if path_box_art is None:
            logger.debug("%s - Skipped app without box art: %s", LAUNCHER, title)
            return None

        path_common = get_path_steamapps_dir(path_library) / "common"
        return Game(
            title=title,
            launch_command=get_steam_launch_command(manifest.app_id, self.is_using_flatpak),
            source=LAUNCHER,
            app_id=manifest.app_id,
            path_game_dir=some_if_dir(path_common / manifest.install_dir),
            path_box_art=path_box_art,
            path_icon=path_icon,
        )

    def get_library_games(self, path_library: Path) -> list[Game]:
        """Get games from every app manifest of one library."""
        games = []

        for path_manifest in self.get_manifest_paths(path_library):
            try:
                manifests = extract_app_manifests(keyvalues.load(path_manifest))
            except (OSError, ParseError) as e:
                logger.error(
                    "%s - Error with reading app manifest file at %s: %s", LAUNCHER, path_manifest, e
                )
                continue

            for manifest in manifests:
                game = self.get_game(path_library, manifest)
                if game is not None:
                    games.append(game)

        return games

    # SHORTCUTS --------------------------------------------------------------

    def get_shortcut_files(self) -> list[Path]:
        """Get shortcuts.vdf of every numeric user directory."""
        path_userdata = self.path_steam_dir / "userdata"
        if not path_userdata.is_dir():
            logger.debug("%s - No userdata directory at %s", LAUNCHER, path_userdata)
            return []

        paths = []
        for path_user in sorted(path_userdata.iterdir()):
            if not path_user.name.isdigit() or not path_user.is_dir():
                continue
            path_shortcuts = path_user / "config" / "shortcuts.vdf"
            if path_shortcuts.is_file():
                paths.append(path_shortcuts)

        return paths

    def get_shortcut_game(self, path_shortcuts: Path, shortcut: RawShortcut) -> Optional[Game]:
        title = clean_game_title(shortcut.app_name)
        if not title:
            return None

        path_grid = path_shortcuts.parent / "grid"
        path_box_art = get_existing_image_path(
            path_grid, f"{shortcut.app_id}p"
        ) or get_existing_image_path(path_grid, str(shortcut.app_id))

        start_dir = shortcut.start_dir.strip().strip('"')
        path_game_dir = some_if_dir(Path(start_dir)) if start_dir else None

        return Game(
            title=title,
            launch_command=get_steam_launch_command(str(shortcut.game_id), self.is_using_flatpak),
            source=LAUNCHER,
            app_id=str(shortcut.app_id),
            path_game_dir=path_game_dir,
            path_box_art=path_box_art,
        )

    def get_shortcut_games(self) -> list[Game]:
        """Get non-Steam games added by any user."""
        games = []

        for path_shortcuts in self.get_shortcut_files():
            try:
                shortcuts = list_shortcuts(path_shortcuts)
            except (OSError, ValueError) as e:
                logger.error(
                    "%s - Error with reading shortcuts file at %s: %s", LAUNCHER, path_shortcuts, e
                )
                continue

            for shortcut in shortcuts:
                game = self.get_shortcut_game(path_shortcuts, shortcut)
                if game is not None:
                    games.append(game)

        return games

    # ------------------------------------------------------------------------

    def get_detected_games(self) -> list[Game]:
        games: list[Game] = []
        for path_library in self.get_library_paths():
            library_games = self.get_library_games(path_library)
            logger.debug("%s - Games for library at %s: %s", LAUNCHER, path_library, library_games)
            games.extend(library_games)

        games.extend(self.get_shortcut_games())

        # The same app can be listed by two libraries or two users
        unique_games = []
        seen = set()
        for game in games:
            if game.key in seen:
                logger.debug("%s - Skipped duplicate app %s", LAUNCHER, game.app_id)
                continue
            seen.add(game.key)
            unique_games.append(game)

        return unique_games
