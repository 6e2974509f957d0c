"""
Games installed with the itch app, read from butler's SQLite database.

Paths:
- ~/.config/itch
- Flatpak: ~/.var/app/io.itch.itch/config/itch

Each installed game is a "cave"; its verdict is a JSON document describing
the install directory and the executables butler found in it.
"""

import json
import logging
import sqlite3
from contextlib import closing
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from game_detector.config.paths import BaseDirs
from game_detector.games.models import Game, LaunchCommand, SupportedLauncher
from game_detector.launchers.base import Launcher, debug_path, resolve_flatpak_fallback
from game_detector.utils import clean_game_title, get_launch_command, open_readonly_db, some_if_dir

logger = logging.getLogger(__name__)

LAUNCHER = SupportedLauncher.ITCH

BUTLER_DB_QUERY = """
    SELECT g.title, g.url, g.cover_url, il.path AS base_path, c.id AS caves_id, c.verdict
    FROM caves c, games g, install_locations il
    WHERE g.id == c.game_id AND il.id == c.install_location_id
"""


@dataclass
class Verdict:
    """The parts of a cave verdict needed to launch the game."""

    base_path: str
    bin_path: str
    interpreter: Optional[str] = None

    @classmethod
    def from_json(cls, verdict: str) -> "Verdict":
        """
        Parse a verdict.

        Raises:
            ValueError: If the verdict is not JSON or has no executable candidate
        """
        data = json.loads(verdict)
        if not isinstance(data, dict):
            raise ValueError("verdict is not an object")

        base_path = data.get("basePath")
        candidates = data.get("candidates")
        if not isinstance(base_path, str) or not base_path:
            raise ValueError("verdict has no basePath")
        if not isinstance(candidates, list) or not candidates or not isinstance(candidates[0], dict):
            raise ValueError("verdict has no candidates")

        candidate = candidates[0]
        bin_path = candidate.get("path")
        if not isinstance(bin_path, str) or not bin_path:
            raise ValueError("verdict candidate has no path")

        script_info = candidate.get("scriptInfo")
        interpreter = script_info.get("interpreter") if isinstance(script_info, dict) else None

        return cls(
            base_path=base_path,
            bin_path=bin_path,
            interpreter=interpreter if isinstance(interpreter, str) and interpreter else None,
        )

    def get_launch_command(self) -> LaunchCommand:
        path_bin = str(Path(self.base_path) / self.bin_path)
        if self.interpreter:
            return get_launch_command(self.interpreter, [path_bin])
        return get_launch_command(path_bin)


class ItchLauncher(Launcher):
    """Probe for games installed with the itch app."""

    launcher_type = LAUNCHER

    def __init__(self, base_dirs: BaseDirs):
        path_config_itch, self.is_using_flatpak = resolve_flatpak_fallback(
            base_dirs.config / "itch",
            base_dirs.home / ".var/app/io.itch.itch/config/itch",
            LAUNCHER,
        )
        self.path_butler_db = path_config_itch / "db" / "butler.db"
        debug_path(LAUNCHER, "butler DB file", self.path_butler_db)

    def is_detected(self) -> bool:
        return self.path_butler_db.is_file()

    def get_db_rows(self) -> list[sqlite3.Row]:
        """
        Read installed games from butler.db.

        Raises:
            sqlite3.Error: If the database cannot be opened or queried
        """
        with closing(open_readonly_db(self.path_butler_db)) as conn:
            return conn.execute(BUTLER_DB_QUERY).fetchall()

    def get_game(self, row: sqlite3.Row) -> Optional[Game]:
        title = clean_game_title(row["title"] or "")
        if not title:
            logger.warning("%s - Skipped cave %s without a title", LAUNCHER, row["caves_id"])
            return None

        try:
            verdict = Verdict.from_json(row["verdict"] or "")
        except ValueError as e:
            logger.error("%s - Failed to parse verdict for '%s': %s", LAUNCHER, title, e)
            return None

        return Game(
            title=title,
            launch_command=verdict.get_launch_command(),
            source=LAUNCHER,
            app_id=str(row["caves_id"]),
            path_game_dir=some_if_dir(Path(verdict.base_path)),
        )

    def get_detected_games(self) -> list[Game]:
        games = []
        for row in self.get_db_rows():
            game = self.get_game(row)
            if game is not None:
                games.append(game)
        return games
