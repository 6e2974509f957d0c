"""Steam file formats: app manifests, library folders and shortcuts."""

from game_detector.steam.manifest import (
    AppManifest,
    LibraryFolder,
    extract_app_manifests,
    extract_library_folders,
    matches_manifest_filename,
)
from game_detector.steam.shortcuts import RawShortcut, list_shortcuts

__all__ = [
    "AppManifest",
    "LibraryFolder",
    "RawShortcut",
    "extract_app_manifests",
    "extract_library_folders",
    "list_shortcuts",
    "matches_manifest_filename",
]
