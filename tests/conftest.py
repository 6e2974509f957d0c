"""
Pytest configuration and fixtures for Game Detector tests.

Tests never touch the real home directory: every launcher is pointed at a
mock home built under tmp_path.
"""

import json
import sqlite3
from pathlib import Path

import pytest

from game_detector.config.paths import BaseDirs


def write_file(path: Path, content: str = "") -> Path:
    """Write a text file, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def write_bytes(path: Path, content: bytes = b"\xff\xd8") -> Path:
    """Write a binary file (an image placeholder by default)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)
    return path


def write_json(path: Path, data) -> Path:
    return write_file(path, json.dumps(data))


def create_db(path: Path, script: str) -> Path:
    """Create an SQLite database from an SQL script."""
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(path)
    try:
        conn.executescript(script)
        conn.commit()
    finally:
        conn.close()
    return path


@pytest.fixture
def mock_home(tmp_path: Path) -> Path:
    """Empty home directory."""
    home = tmp_path / "home"
    home.mkdir()
    return home


@pytest.fixture
def base_dirs(mock_home: Path) -> BaseDirs:
    """Base directories with XDG defaults under the mock home."""
    return BaseDirs.from_home(mock_home)
