"""
Unit tests for the Prism Launcher and ATLauncher probes.
"""

from conftest import write_bytes, write_file, write_json
from game_detector.games.models import SupportedLauncher
from game_detector.launchers.minecraft import (
    MinecraftATLauncher,
    MinecraftPrismLauncher,
    get_minecraft_title,
    read_cfg,
)


def test_minecraft_title():
    assert get_minecraft_title("Vanilla 1.21") == "Minecraft: Vanilla 1.21"


class TestReadCfg:
    def test_key_values(self, tmp_path):
        path = write_file(
            tmp_path / "instance.cfg",
            "[General]\nInstanceType=OneSix\nname=My Pack\n# comment\niconKey=default\n",
        )

        assert read_cfg(path) == {"InstanceType": "OneSix", "name": "My Pack", "iconKey": "default"}

    def test_value_containing_equals(self, tmp_path):
        path = write_file(tmp_path / "a.cfg", "JvmArgs=-Dfoo=bar\n")
        assert read_cfg(path)["JvmArgs"] == "-Dfoo=bar"


class TestPrism:
    """Tests for Prism Launcher instances."""

    def test_not_installed(self, base_dirs):
        launcher = MinecraftPrismLauncher(base_dirs)

        assert launcher.detect() == (False, [])
        assert launcher.is_using_flatpak

    def test_instances(self, base_dirs):
        root = base_dirs.data / "PrismLauncher"
        write_file(root / "prismlauncher.cfg", "[General]\nInstanceDir=instances\n")
        write_file(root / "instances" / "vanilla" / "instance.cfg", "name=Vanilla 1.21\n")
        write_bytes(root / "instances" / "vanilla" / "minecraft" / "icon.png")
        write_file(root / "instances" / "fabric" / "instance.cfg", "InstanceType=OneSix\n")
        (root / "instances" / "_MMC_TEMP").mkdir()

        is_present, games = MinecraftPrismLauncher(base_dirs).detect()

        assert is_present
        assert [g.title for g in games] == ["Minecraft: fabric", "Minecraft: Vanilla 1.21"]
        vanilla = games[1]
        assert vanilla.source == SupportedLauncher.MINECRAFT_PRISM
        assert vanilla.path_game_dir == root / "instances" / "vanilla"
        assert vanilla.path_icon == root / "instances" / "vanilla" / "minecraft" / "icon.png"
        assert vanilla.launch_command.argv == ["prismlauncher", "--launch", "vanilla"]

    def test_absolute_instance_dir(self, base_dirs, tmp_path):
        instances = tmp_path / "elsewhere"
        root = base_dirs.data / "PrismLauncher"
        write_file(root / "prismlauncher.cfg", f"InstanceDir={instances}\n")
        write_file(instances / "pack" / "instance.cfg", "")

        games = MinecraftPrismLauncher(base_dirs).get_detected_games()

        assert [g.path_game_dir for g in games] == [instances / "pack"]

    def test_default_instance_dir(self, base_dirs):
        root = base_dirs.data / "PrismLauncher"
        write_file(root / "prismlauncher.cfg", "[General]\n")
        write_file(root / "instances" / "pack" / "instance.cfg", "")

        assert len(MinecraftPrismLauncher(base_dirs).get_detected_games()) == 1

    def test_missing_instance_dir(self, base_dirs):
        write_file(base_dirs.data / "PrismLauncher" / "prismlauncher.cfg", "InstanceDir=nowhere\n")

        assert MinecraftPrismLauncher(base_dirs).detect() == (True, [])

    def test_flatpak(self, base_dirs):
        root = base_dirs.home / ".var/app/org.prismlauncher.PrismLauncher/data/PrismLauncher"
        write_file(root / "prismlauncher.cfg", "InstanceDir=instances\n")
        write_file(root / "instances" / "pack" / "instance.cfg", "")

        games = MinecraftPrismLauncher(base_dirs).get_detected_games()

        assert games[0].launch_command.argv == [
            "flatpak",
            "run",
            "org.prismlauncher.PrismLauncher",
            "--launch",
            "pack",
        ]


class TestATLauncher:
    """Tests for ATLauncher instances."""

    def test_not_installed(self, base_dirs):
        assert MinecraftATLauncher(base_dirs).detect() == (False, [])

    def test_instances(self, base_dirs):
        instances = base_dirs.data / "atlauncher" / "instances"
        write_json(instances / "SkyFactory4" / "instance.json", {"launcher": {"name": "SkyFactory 4"}})
        write_bytes(instances / "SkyFactory4" / "instance.png")
        write_json(instances / "Vanilla" / "instance.json", {"name": "Vanilla"})

        is_present, games = MinecraftATLauncher(base_dirs).detect()

        assert is_present
        assert [g.title for g in games] == ["Minecraft: SkyFactory 4", "Minecraft: Vanilla"]
        assert games[0].source == SupportedLauncher.MINECRAFT_AT
        assert games[0].path_icon == instances / "SkyFactory4" / "instance.png"
        assert games[0].launch_command.argv == ["atlauncher", "--launch", "SkyFactory 4"]
        assert games[1].path_icon is None

    def test_corrupt_instance_is_isolated(self, base_dirs):
        instances = base_dirs.data / "atlauncher" / "instances"
        write_file(instances / "Broken" / "instance.json", "{")
        write_json(instances / "Fine" / "instance.json", {"launcher": {"name": "Fine"}})

        games = MinecraftATLauncher(base_dirs).get_detected_games()

        assert [g.title for g in games] == ["Minecraft: Fine"]

    def test_flatpak(self, base_dirs):
        instances = base_dirs.home / ".var/app/com.atlauncher.ATLauncher/data/atlauncher/instances"
        write_json(instances / "Pack" / "instance.json", {"launcher": {"name": "Pack"}})

        launcher = MinecraftATLauncher(base_dirs)
        games = launcher.get_detected_games()

        assert launcher.is_using_flatpak
        assert games[0].launch_command.argv[:3] == ["flatpak", "run", "com.atlauncher.ATLauncher"]
