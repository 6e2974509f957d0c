"""
Minecraft instances of Prism Launcher and ATLauncher.

Paths:
- ~/.local/share/PrismLauncher, ~/.local/share/atlauncher
- Flatpak: ~/.var/app/org.prismlauncher.PrismLauncher/data/PrismLauncher,
  ~/.var/app/com.atlauncher.ATLauncher/data/atlauncher
"""

import json
import logging
from pathlib import Path
from typing import Optional

from game_detector.config.paths import BaseDirs
from game_detector.games.models import Game, LaunchCommand, SupportedLauncher
from game_detector.launchers.base import Launcher, debug_path, resolve_flatpak_fallback
from game_detector.utils import (
    get_existing_image_path,
    get_launch_command,
    get_launch_command_flatpak,
    some_if_file,
)

logger = logging.getLogger(__name__)

PRISM_FLATPAK_ID = "org.prismlauncher.PrismLauncher"
AT_FLATPAK_ID = "com.atlauncher.ATLauncher"

DEFAULT_PRISM_INSTANCE_DIR = "instances"


def get_minecraft_title(title: str) -> str:
    return f"Minecraft: {title}"


def read_cfg(path: Path) -> dict[str, str]:
    """
    Read a Qt style key=value settings file.

    Section headers and comments are ignored; later keys win.

    Raises:
        OSError: If the file cannot be read
    """
    values = {}
    for line in path.read_text(encoding="utf-8", errors="replace").splitlines():
        line = line.strip()
        if not line or line.startswith(("[", "#", ";")) or "=" not in line:
            continue
        key, value = line.split("=", 1)
        values[key.strip()] = value.strip()
    return values


def _launch_command(
    program: str, flatpak_id: str, instance: str, is_using_flatpak: bool
) -> LaunchCommand:
    args = ["--launch", instance]
    if is_using_flatpak:
        return get_launch_command_flatpak(flatpak_id, args)
    return get_launch_command(program, args)


class MinecraftPrismLauncher(Launcher):
    """Probe for Prism Launcher instances."""

    launcher_type = SupportedLauncher.MINECRAFT_PRISM

    def __init__(self, base_dirs: BaseDirs):
        self.path_root, self.is_using_flatpak = resolve_flatpak_fallback(
            base_dirs.data / "PrismLauncher",
            base_dirs.home / ".var/app/org.prismlauncher.PrismLauncher/data/PrismLauncher",
            self.launcher_type,
        )
        self.path_config = self.path_root / "prismlauncher.cfg"
        debug_path(self.launcher_type, "config file", self.path_config)

    def is_detected(self) -> bool:
        return self.path_config.is_file()

    def get_instances_dir(self) -> Path:
        """Get the instances directory, relative paths being relative to the root."""
        instance_dir = read_cfg(self.path_config).get("InstanceDir") or DEFAULT_PRISM_INSTANCE_DIR
        path_instances = Path(instance_dir)
        if not path_instances.is_absolute():
            path_instances = self.path_root / path_instances
        return path_instances

    @staticmethod
    def get_path_icon(path_instance: Path) -> Optional[Path]:
        return (
            some_if_file(path_instance / "icon.png")
            or some_if_file(path_instance / "minecraft" / "icon.png")
            or some_if_file(path_instance / ".minecraft" / "icon.png")
        )

    def get_instance_name(self, path_instance: Path) -> str:
        """Display name from instance.cfg, falling back to the directory name."""
        try:
            name = read_cfg(path_instance / "instance.cfg").get("name")
        except OSError as e:
            logger.error("%s - Error with reading instance.cfg in %s: %s", self.launcher_type, path_instance, e)
            name = None
        return name or path_instance.name

    def get_detected_games(self) -> list[Game]:
        path_instances = self.get_instances_dir()
        if not path_instances.is_dir():
            logger.error("%s - The instances directory does not exist: %s", self.launcher_type, path_instances)
            return []

        games = []
        for path_instance in sorted(path_instances.iterdir()):
            if not path_instance.is_dir() or not (path_instance / "instance.cfg").is_file():
                continue

            games.append(
                Game(
                    title=get_minecraft_title(self.get_instance_name(path_instance)),
                    launch_command=_launch_command(
                        "prismlauncher", PRISM_FLATPAK_ID, path_instance.name, self.is_using_flatpak
                    ),
                    source=self.launcher_type,
                    app_id=path_instance.name,
                    path_game_dir=path_instance,
                    path_icon=self.get_path_icon(path_instance),
                )
            )

        return games


class MinecraftATLauncher(Launcher):
    """Probe for ATLauncher instances."""

    launcher_type = SupportedLauncher.MINECRAFT_AT

    def __init__(self, base_dirs: BaseDirs):
        path_root, self.is_using_flatpak = resolve_flatpak_fallback(
            base_dirs.data / "atlauncher",
            base_dirs.home / ".var/app/com.atlauncher.ATLauncher/data/atlauncher",
            self.launcher_type,
        )
        self.path_instances = path_root / "instances"
        debug_path(self.launcher_type, "instances directory", self.path_instances)

    def is_detected(self) -> bool:
        return self.path_instances.is_dir()

    def get_instance_name(self, path_instance_json: Path) -> Optional[str]:
        """
        Read the instance name from instance.json.

        Returns:
            The name, or None if the file is unusable
        """
        try:
            with open(path_instance_json, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error("%s - Error with reading %s: %s", self.launcher_type, path_instance_json, e)
            return None

        if not isinstance(data, dict):
            return None

        launcher = data.get("launcher")
        name = launcher.get("name") if isinstance(launcher, dict) else None
        name = name or data.get("name")
        return name if isinstance(name, str) and name.strip() else None

    def get_detected_games(self) -> list[Game]:
        games = []
        for path_instance in sorted(self.path_instances.iterdir()):
            path_instance_json = path_instance / "instance.json"
            if not path_instance_json.is_file():
                continue

            name = self.get_instance_name(path_instance_json)
            if name is None:
                logger.warning("%s - Skipped instance without a name: %s", self.launcher_type, path_instance)
                continue

            games.append(
                Game(
                    title=get_minecraft_title(name),
                    launch_command=_launch_command(
                        "atlauncher", AT_FLATPAK_ID, name, self.is_using_flatpak
                    ),
                    source=self.launcher_type,
                    app_id=path_instance.name,
                    path_game_dir=path_instance,
                    path_icon=get_existing_image_path(path_instance, "instance"),
                )
            )

        return games
