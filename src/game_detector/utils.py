"""Helpers shared by the launchers."""

import re
import sqlite3
from pathlib import Path
from typing import Iterable, Optional

from game_detector.games.models import LaunchCommand

IMAGE_EXTENSIONS = ("png", "jpg", "jpeg")

_TRADEMARK_SIGNS = re.compile("[™®]")


def clean_game_title(title: str) -> str:
    """Remove trademark signs and surrounding whitespace from a title."""
    return _TRADEMARK_SIGNS.sub("", title).strip()


def some_if_file(path: Path) -> Optional[Path]:
    """Return the path if it points to an existing file."""
    return path if path.is_file() else None


def some_if_dir(path: Path) -> Optional[Path]:
    """Return the path if it points to an existing directory."""
    return path if path.is_dir() else None


def get_existing_image_path(base_path: Path, file_name: str) -> Optional[Path]:
    """
    Find an image by name regardless of its extension.

    Args:
        base_path: Directory to look in
        file_name: File name without extension

    Returns:
        First of base_path/file_name.{png,jpg,jpeg} which exists, or None
    """
    for extension in IMAGE_EXTENSIONS:
        path = some_if_file(base_path / f"{file_name}.{extension}")
        if path:
            return path
    return None


def get_launch_command(
    program: str,
    args: Iterable[str] = (),
    env: Iterable[tuple[str, str]] = (),
) -> LaunchCommand:
    """Build a launch command for a program on $PATH."""
    return LaunchCommand(program=program, args=tuple(args), env=tuple(env))


def get_launch_command_flatpak(
    flatpak_id: str,
    args: Iterable[str] = (),
    flatpak_args: Iterable[str] = (),
    env: Iterable[tuple[str, str]] = (),
) -> LaunchCommand:
    """
    Build a launch command for an application installed with Flatpak.

    Args:
        flatpak_id: Flatpak application ID, e.g. com.valvesoftware.Steam
        args: Arguments passed to the application
        flatpak_args: Arguments for `flatpak run` itself, e.g. --command=...
        env: Extra environment variables
    """
    return LaunchCommand(
        program="flatpak",
        args=("run", *flatpak_args, flatpak_id, *args),
        env=tuple(env),
    )


def open_readonly_db(path: Path) -> sqlite3.Connection:
    """
    Open an SQLite database without write access.

    Rows are returned as sqlite3.Row so columns can be read by name.

    Raises:
        sqlite3.Error: If the database cannot be opened
    """
    conn = sqlite3.connect(f"{Path(path).absolute().as_uri()}?mode=ro", uri=True)
    conn.row_factory = sqlite3.Row
    return conn
