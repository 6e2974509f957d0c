"""
Lutris games, read from its pga.db SQLite database.

Paths:
- ~/.local/share/lutris (cover art may also live in ~/.config/lutris or ~/.cache/lutris)
- Flatpak: ~/.var/app/net.lutris.Lutris/data/lutris
"""

import logging
import sqlite3
from contextlib import closing
from pathlib import Path
from typing import Optional

from game_detector.config.paths import BaseDirs
from game_detector.games.models import Game, LaunchCommand, SupportedLauncher
from game_detector.launchers.base import Launcher, debug_path
from game_detector.utils import (
    clean_game_title,
    get_existing_image_path,
    get_launch_command,
    get_launch_command_flatpak,
    open_readonly_db,
    some_if_dir,
)

logger = logging.getLogger(__name__)

LAUNCHER = SupportedLauncher.LUTRIS
FLATPAK_ID = "net.lutris.Lutris"

PGA_DB_QUERY = """
    SELECT id, name, slug, installer_slug, parent_slug, directory, playtime
    FROM games
    WHERE installed = 1
"""

ICONS_SUBDIR = "icons/hicolor/128x128/apps"


def get_lutris_launch_command(run_id: str, is_using_flatpak: bool) -> LaunchCommand:
    args = [f"lutris:rungameid/{run_id}"]
    env = [("LUTRIS_SKIP_INIT", "1")]
    if is_using_flatpak:
        # Passed to the sandbox as a flatpak run option
        return get_launch_command_flatpak(
            FLATPAK_ID, args, flatpak_args=["--env=LUTRIS_SKIP_INIT=1"]
        )
    return get_launch_command("lutris", args, env)


class LutrisLauncher(Launcher):
    """Probe for games installed through Lutris."""

    launcher_type = LAUNCHER

    def __init__(self, base_dirs: BaseDirs):
        path_data = base_dirs.data
        path_data_lutris = path_data / "lutris"

        if not path_data_lutris.is_dir() and not (base_dirs.config / "lutris").is_dir():
            logger.debug("%s - Attempting to fall back to flatpak", LAUNCHER)
            self.is_using_flatpak = True
            path_data = base_dirs.home / ".var/app/net.lutris.Lutris/data"
            path_data_lutris = path_data / "lutris"

        self.path_pga_db = path_data_lutris / "pga.db"

        box_art_dirs = [
            path_data_lutris / "coverart",
            base_dirs.config / "lutris" / "coverart",
            base_dirs.cache / "lutris" / "coverart",
        ]
        self.path_box_art_dir = next((p for p in box_art_dirs if p.is_dir()), box_art_dirs[0])
        self.icon_dirs = [path_data / ICONS_SUBDIR, path_data_lutris / ICONS_SUBDIR]

        debug_path(LAUNCHER, "pga.db file", self.path_pga_db)
        debug_path(LAUNCHER, "box art directory", self.path_box_art_dir)

    def is_detected(self) -> bool:
        return self.path_pga_db.is_file()

    def get_db_rows(self) -> list[sqlite3.Row]:
        """
        Read installed games from pga.db.

        Raises:
            sqlite3.Error: If the database cannot be opened or queried
        """
        with closing(open_readonly_db(self.path_pga_db)) as conn:
            rows = conn.execute(PGA_DB_QUERY).fetchall()

        if not rows:
            logger.warning("%s - No games were parsed from pga.db at %s", LAUNCHER, self.path_pga_db)
        return rows

    def get_icon(self, slug: str) -> Optional[Path]:
        for path_dir in self.icon_dirs:
            path_icon = get_existing_image_path(path_dir, f"lutris_{slug}")
            if path_icon:
                return path_icon
        return None

    def get_images(self, row: sqlite3.Row) -> tuple[Optional[Path], Optional[Path]]:
        """Find box art and icon by installer slug first, then by slug."""
        slugs = [slug for slug in (row["installer_slug"], row["slug"]) if slug]

        path_box_art = None
        path_icon = None
        for slug in slugs:
            path_box_art = path_box_art or get_existing_image_path(self.path_box_art_dir, slug)
            path_icon = path_icon or self.get_icon(slug)

        return path_box_art, path_icon

    def get_game(self, row: sqlite3.Row) -> Optional[Game]:
        title = clean_game_title(row["name"] or "")
        if not title:
            logger.warning("%s - Skipped game %s without a name", LAUNCHER, row["id"])
            return None

        run_id = str(row["id"])
        path_box_art, path_icon = self.get_images(row)
        directory = row["directory"]

        return Game(
            title=title,
            launch_command=get_lutris_launch_command(run_id, self.is_using_flatpak),
            source=LAUNCHER,
            app_id=run_id,
            path_game_dir=some_if_dir(Path(directory)) if directory else None,
            path_box_art=path_box_art,
            path_icon=path_icon,
        )

    def get_detected_games(self) -> list[Game]:
        games = []
        for row in self.get_db_rows():
            game = self.get_game(row)
            if game is not None:
                games.append(game)
        return games
