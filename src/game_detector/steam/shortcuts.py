"""
Reader for Steam's binary shortcuts.vdf (non-Steam games added by the user).

The binary VDF format itself is decoded by the `vdf` package.
"""

import logging
import struct
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import vdf

logger = logging.getLogger(__name__)

# Steam marks the 64 bit game ID of a shortcut with this value in the low bits
_SHORTCUT_GAME_ID_FLAG = 0x02000000


@dataclass
class RawShortcut:
    """A single entry of shortcuts.vdf."""

    app_id: int  # unsigned 32 bit
    app_name: str
    start_dir: str = ""

    @property
    def game_id(self) -> int:
        """64 bit game ID used by steam://rungameid/ URIs."""
        return (self.app_id << 32) | _SHORTCUT_GAME_ID_FLAG


def _lookup(entry: dict, key: str, default: Any = None) -> Any:
    """Case-insensitive key lookup (older Steam versions write lowercase keys)."""
    folded = key.casefold()
    for entry_key, value in entry.items():
        if entry_key.casefold() == folded:
            return value
    return default


def _to_unsigned(app_id: int) -> int:
    return app_id & 0xFFFFFFFF


def _parse_entry(index: str, entry: Any) -> Optional[RawShortcut]:
    if not isinstance(entry, dict):
        logger.debug("Steam - Skipped shortcut %s which is not a record", index)
        return None

    app_id = _lookup(entry, "appid")
    app_name = _lookup(entry, "AppName", "")

    if not isinstance(app_id, int):
        logger.warning("Steam - Skipped shortcut %s without an app ID", index)
        return None
    if not isinstance(app_name, str) or not app_name.strip():
        logger.warning("Steam - Skipped shortcut %s without a name", index)
        return None

    return RawShortcut(
        app_id=_to_unsigned(app_id),
        app_name=app_name,
        start_dir=_lookup(entry, "StartDir", ""),
    )


def list_shortcuts(path: Path) -> list[RawShortcut]:
    """
    Read all shortcuts from a binary shortcuts.vdf file.

    Args:
        path: Path to userdata/<user>/config/shortcuts.vdf

    Returns:
        Shortcuts in file order; malformed entries are skipped

    Raises:
        OSError: If the file cannot be read
        ValueError: If the file is not valid binary VDF
    """
    with open(path, "rb") as f:
        try:
            data = vdf.binary_load(f)
        except (SyntaxError, ValueError, IndexError, struct.error) as e:
            raise ValueError(f"invalid binary VDF in {path}: {e}") from e

    shortcuts_data = _lookup(data, "shortcuts", {})
    if not isinstance(shortcuts_data, dict):
        raise ValueError(f"no 'shortcuts' table in {path}")

    shortcuts = []
    for index, entry in shortcuts_data.items():
        shortcut = _parse_entry(index, entry)
        if shortcut is not None:
            shortcuts.append(shortcut)

    return shortcuts
