"""
Unit tests for the itch launcher probe.
"""

import json

import pytest

from conftest import create_db
from game_detector.games.models import SupportedLauncher
from game_detector.launchers.itch import ItchLauncher, Verdict

SCHEMA = """
CREATE TABLE games (id INTEGER PRIMARY KEY, title TEXT, url TEXT, cover_url TEXT);
CREATE TABLE install_locations (id TEXT PRIMARY KEY, path TEXT);
CREATE TABLE caves (id TEXT PRIMARY KEY, game_id INTEGER, install_location_id TEXT, verdict TEXT);
"""


def create_butler_db(path, caves: list[tuple[str, str, dict]], base_path: str = "/games"):
    """Create butler.db with one game per cave: (cave id, title, verdict)."""
    statements = [SCHEMA, f"INSERT INTO install_locations VALUES ('loc', '{base_path}');"]
    for index, (cave_id, title, verdict) in enumerate(caves):
        verdict_sql = json.dumps(verdict).replace("'", "''")
        statements.append(
            f"INSERT INTO games VALUES ({index}, '{title}', 'https://x.itch.io/{index}', '');"
        )
        statements.append(
            f"INSERT INTO caves VALUES ('{cave_id}', {index}, 'loc', '{verdict_sql}');"
        )
    return create_db(path, "\n".join(statements))


class TestVerdict:
    """Tests for parsing cave verdicts."""

    def test_native_binary(self):
        verdict = Verdict.from_json(
            json.dumps({"basePath": "/games/foo", "candidates": [{"path": "foo.x86_64"}]})
        )

        assert verdict.get_launch_command().argv == ["/games/foo/foo.x86_64"]

    def test_script_with_interpreter(self):
        verdict = Verdict.from_json(
            json.dumps(
                {
                    "basePath": "/games/bar",
                    "candidates": [
                        {"path": "run.sh", "scriptInfo": {"interpreter": "/bin/bash"}},
                        {"path": "other"},
                    ],
                }
            )
        )

        assert verdict.get_launch_command().argv == ["/bin/bash", "/games/bar/run.sh"]

    @pytest.mark.parametrize(
        "verdict",
        ["", "[]", '{"candidates": [{"path": "x"}]}', '{"basePath": "/x", "candidates": []}'],
    )
    def test_invalid(self, verdict):
        with pytest.raises(ValueError):
            Verdict.from_json(verdict)


class TestItch:
    """Tests for reading butler.db."""

    def test_not_installed(self, base_dirs):
        launcher = ItchLauncher(base_dirs)

        assert launcher.detect() == (False, [])
        assert launcher.is_using_flatpak

    def test_installed_games(self, base_dirs, tmp_path):
        game_dir = tmp_path / "itch" / "celeste-classic"
        game_dir.mkdir(parents=True)
        create_butler_db(
            base_dirs.config / "itch" / "db" / "butler.db",
            [
                (
                    "cave-1",
                    "Celeste Classic",
                    {"basePath": str(game_dir), "candidates": [{"path": "celeste"}]},
                ),
                ("cave-2", "Broken Verdict", {"candidates": []}),
            ],
        )

        launcher = ItchLauncher(base_dirs)
        is_present, games = launcher.detect()

        assert is_present
        assert not launcher.is_using_flatpak
        assert len(games) == 1
        game = games[0]
        assert game.title == "Celeste Classic"
        assert game.app_id == "cave-1"
        assert game.source == SupportedLauncher.ITCH
        assert game.path_game_dir == game_dir
        assert game.launch_command.argv == [str(game_dir / "celeste")]

    def test_flatpak(self, base_dirs):
        create_butler_db(
            base_dirs.home / ".var/app/io.itch.itch/config/itch/db/butler.db",
            [("c", "Game", {"basePath": "/games/g", "candidates": [{"path": "g"}]})],
        )

        launcher = ItchLauncher(base_dirs)

        assert launcher.is_using_flatpak
        assert [g.title for g in launcher.get_detected_games()] == ["Game"]
