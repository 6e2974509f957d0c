"""
Unit tests for the Bottles launcher probe.
"""

import pytest
import yaml

from conftest import write_bytes, write_file
from game_detector.games.models import SupportedLauncher
from game_detector.launchers.bottles import BottlesLauncher


def write_yaml(path, data):
    return write_file(path, yaml.safe_dump(data))


@pytest.fixture
def bottles_dir(base_dirs):
    path = base_dirs.data / "bottles"
    path.mkdir(parents=True)
    return path


def library_entry(program_id: str, name: str, bottle_name: str, bottle_path: str, thumbnail: str = ""):
    return {
        "bottle": {"name": bottle_name, "path": bottle_path},
        "executable": f"{name}.exe",
        "icon": "",
        "id": program_id,
        "name": name,
        "thumbnail": thumbnail,
    }


class TestBottles:
    """Tests for the Bottles library."""

    def test_not_installed(self, base_dirs):
        launcher = BottlesLauncher(base_dirs)

        assert launcher.detect() == (False, [])
        assert launcher.is_using_flatpak

    def test_library_games(self, bottles_dir, base_dirs, tmp_path):
        game_dir = tmp_path / "drive_c" / "Games" / "Celeste"
        game_dir.mkdir(parents=True)
        write_yaml(
            bottles_dir / "library.yml",
            {
                "3f8c": library_entry(
                    "3f8c", "Celeste", "Gaming", "Gaming", thumbnail="grid:celeste.png"
                ),
            },
        )
        write_yaml(
            bottles_dir / "bottles" / "Gaming" / "bottle.yml",
            {
                "Name": "Gaming",
                "External_Programs": {
                    "3f8c": {
                        "executable": "Celeste.exe",
                        "folder": str(game_dir),
                        "id": "3f8c",
                        "name": "Celeste",
                        "path": str(game_dir / "Celeste.exe"),
                    }
                },
            },
        )
        write_bytes(bottles_dir / "bottles" / "Gaming" / "grids" / "celeste.png")

        is_present, games = BottlesLauncher(base_dirs).detect()

        assert is_present
        assert len(games) == 1
        game = games[0]
        assert game.title == "Celeste"
        assert game.source == SupportedLauncher.BOTTLES
        assert game.path_game_dir == game_dir
        assert game.path_box_art == bottles_dir / "bottles" / "Gaming" / "grids" / "celeste.png"
        assert game.launch_command.argv == ["bottles-cli", "run", "-p", "Celeste", "-b", "Gaming"]

    def test_entry_without_program_is_dropped(self, bottles_dir, base_dirs):
        write_yaml(
            bottles_dir / "library.yml",
            {"a": library_entry("a", "Orphan", "Gone", "Gone")},
        )

        assert BottlesLauncher(base_dirs).detect() == (True, [])

    def test_corrupt_bottle_is_isolated(self, bottles_dir, base_dirs, tmp_path):
        write_yaml(
            bottles_dir / "library.yml",
            {
                "a": library_entry("a", "Good", "One", "One"),
                "b": library_entry("b", "Bad", "Two", "Two"),
            },
        )
        write_yaml(
            bottles_dir / "bottles" / "One" / "bottle.yml",
            {"External_Programs": {"a": {"id": "a", "folder": str(tmp_path)}}},
        )
        write_file(bottles_dir / "bottles" / "Two" / "bottle.yml", "External_Programs: [unclosed")

        games = BottlesLauncher(base_dirs).get_detected_games()

        assert [g.title for g in games] == ["Good"]

    def test_flatpak_launch_command(self, base_dirs, tmp_path):
        bottles_dir = base_dirs.home / ".var/app/com.usebottles.bottles/data/bottles"
        write_yaml(bottles_dir / "library.yml", {"a": library_entry("a", "Game", "B", "B")})
        write_yaml(
            bottles_dir / "bottles" / "B" / "bottle.yml",
            {"External_Programs": {"a": {"id": "a", "folder": str(tmp_path)}}},
        )

        games = BottlesLauncher(base_dirs).get_detected_games()

        assert games[0].launch_command.argv == [
            "flatpak",
            "run",
            "--command=bottles-cli",
            "com.usebottles.bottles",
            "run",
            "-p",
            "Game",
            "-b",
            "B",
        ]

    def test_empty_library(self, bottles_dir, base_dirs):
        write_file(bottles_dir / "library.yml", "")

        assert BottlesLauncher(base_dirs).detect() == (True, [])

    def test_corrupt_library_raises(self, bottles_dir, base_dirs):
        write_file(bottles_dir / "library.yml", "a: [unclosed")

        with pytest.raises(yaml.YAMLError):
            BottlesLauncher(base_dirs).get_detected_games()
