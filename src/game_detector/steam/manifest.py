"""
Extract typed records from parsed Steam KeyValues files.

Two file kinds are handled:
- appmanifest_<appid>.acf: one "AppState" block per installed app
- libraryfolders.vdf: one block per Steam library on the system

Extraction is a read-only projection of the tree. A record missing a
required field is dropped and logged; its siblings are still returned.
"""

import logging
import re
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from game_detector.errors import ExtractionError
from game_detector.parsers.keyvalues import KeyValues

logger = logging.getLogger(__name__)

_MANIFEST_FILENAME = re.compile(r"^appmanifest_[A-Za-z0-9]+\.acf$")


@dataclass
class AppManifest:
    """Installed Steam app described by an appmanifest file."""

    app_id: str
    name: str
    install_dir: str


@dataclass
class LibraryFolder:
    """Steam library folder listed in libraryfolders.vdf."""

    path: Path


def matches_manifest_filename(filename: str) -> bool:
    """Check if a file name is an app manifest (not e.g. a .acf.tmp file)."""
    return _MANIFEST_FILENAME.match(filename) is not None


def _require(block: KeyValues, key: str, context: str) -> str:
    value = block.get_str(key)
    if value is None or not value.strip():
        raise ExtractionError(key, context)
    return value


def _extract_app_state(block: KeyValues) -> AppManifest:
    app_id = _require(block, "appid", "AppState")
    install_dir = _require(block, "installdir", f"AppState {app_id}")

    name = block.get_str("name")
    if not name or not name.strip():
        # Derive from the install directory, e.g. "common/Portal 2" -> "Portal 2"
        name = PurePosixPath(install_dir.replace("\\", "/")).name or install_dir

    return AppManifest(app_id=app_id, name=name, install_dir=install_dir)


def extract_app_manifests(tree: KeyValues) -> list[AppManifest]:
    """
    Extract every app described by an appmanifest tree.

    Args:
        tree: Parsed appmanifest_*.acf file

    Returns:
        One AppManifest per valid "AppState" block at the root
    """
    manifests = []

    for block in tree.get_all("AppState"):
        if not isinstance(block, KeyValues):
            logger.warning("Steam - Skipped 'AppState' entry which is not a block")
            continue

        try:
            manifests.append(_extract_app_state(block))
        except ExtractionError as e:
            logger.warning("Steam - Dropped app manifest record: %s", e)

    return manifests


def _extract_library_block(key: str, block: KeyValues) -> LibraryFolder:
    return LibraryFolder(path=Path(_require(block, "path", f"library folder {key!r}")))


def extract_library_folders(tree: KeyValues) -> list[LibraryFolder]:
    """
    Extract Steam library folders from a libraryfolders.vdf tree.

    Both the current format, where each library is a block with a "path" key,
    and the legacy format, where numbered keys map straight to a path, are
    supported.

    Args:
        tree: Parsed libraryfolders.vdf file

    Returns:
        One LibraryFolder per valid entry, in file order
    """
    root = tree.get_block("libraryfolders")
    if root is None:
        logger.warning("Steam - No 'libraryfolders' block found")
        return []

    folders = []

    for key, value in root:
        # Other keys hold metadata such as "contentstatsid"
        if not key.isdigit():
            continue

        if isinstance(value, str):
            if value.strip():
                folders.append(LibraryFolder(path=Path(value)))
            else:
                logger.warning("Steam - Dropped library folder %r with an empty path", key)
            continue

        try:
            folders.append(_extract_library_block(key, value))
        except ExtractionError as e:
            logger.warning("Steam - Dropped library folder record: %s", e)

    return folders
