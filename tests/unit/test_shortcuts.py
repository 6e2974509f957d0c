"""
Unit tests for reading Steam's binary shortcuts.vdf.
"""

import pytest
import vdf

from game_detector.steam.shortcuts import RawShortcut, list_shortcuts


def write_shortcuts(path, entries: dict):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(vdf.binary_dumps({"shortcuts": entries}))
    return path


class TestListShortcuts:
    """Tests for list_shortcuts()."""

    def test_reads_entries(self, tmp_path):
        path = write_shortcuts(
            tmp_path / "shortcuts.vdf",
            {
                "0": {
                    "appid": 123456,
                    "AppName": "My Game",
                    "Exe": '"/opt/mygame/run.sh"',
                    "StartDir": '"/opt/mygame/"',
                    "LaunchOptions": "--fullscreen",
                    "IsHidden": 0,
                },
            },
        )

        shortcuts = list_shortcuts(path)

        assert shortcuts == [
            RawShortcut(
                app_id=123456,
                app_name="My Game",
                start_dir='"/opt/mygame/"',
            )
        ]

    def test_negative_app_id_is_made_unsigned(self, tmp_path):
        """Steam stores the app ID as a signed 32 bit integer."""
        path = write_shortcuts(tmp_path / "shortcuts.vdf", {"0": {"appid": -1234, "AppName": "Neg"}})

        shortcut = list_shortcuts(path)[0]

        assert shortcut.app_id == 2**32 - 1234

    def test_lowercase_keys(self, tmp_path):
        path = write_shortcuts(tmp_path / "shortcuts.vdf", {"0": {"appid": 7, "appname": "Old"}})
        assert list_shortcuts(path)[0].app_name == "Old"

    def test_entries_without_id_or_name_are_skipped(self, tmp_path):
        path = write_shortcuts(
            tmp_path / "shortcuts.vdf",
            {
                "0": {"AppName": "No ID"},
                "1": {"appid": 5, "AppName": ""},
                "2": {"appid": 6, "AppName": "Kept"},
            },
        )

        assert [s.app_name for s in list_shortcuts(path)] == ["Kept"]

    def test_empty_shortcuts(self, tmp_path):
        path = write_shortcuts(tmp_path / "shortcuts.vdf", {})
        assert list_shortcuts(path) == []

    def test_invalid_file(self, tmp_path):
        path = tmp_path / "shortcuts.vdf"
        path.write_bytes(b"\x00shortcuts\x00\x00Broken")

        with pytest.raises(ValueError):
            list_shortcuts(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            list_shortcuts(tmp_path / "missing.vdf")


class TestRawShortcut:
    def test_game_id(self):
        shortcut = RawShortcut(app_id=0xABCDEF01, app_name="x")
        assert shortcut.game_id == (0xABCDEF01 << 32) | 0x02000000
