"""Base directories used to resolve launcher paths."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional


def _xdg_dir(environ: Mapping[str, str], variable: str, default: Path) -> Path:
    """
    Resolve an XDG base directory variable.

    Relative values are ignored, as XDG Base Directory requires.
    """
    value = environ.get(variable)
    if value and Path(value).is_absolute():
        return Path(value)
    return default


@dataclass(frozen=True)
class BaseDirs:
    """
    User directories the launchers keep their data in.

    Attributes:
        home: The user's home directory
        config: $XDG_CONFIG_HOME (~/.config)
        data: $XDG_DATA_HOME (~/.local/share)
        cache: $XDG_CACHE_HOME (~/.cache)
    """

    home: Path
    config: Path
    data: Path
    cache: Path

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "BaseDirs":
        """
        Resolve base directories from environment variables.

        Args:
            environ: Mapping to read variables from (defaults to os.environ)

        Returns:
            BaseDirs for the current user
        """
        if environ is None:
            environ = os.environ

        home_value = environ.get("HOME")
        home = Path(home_value) if home_value else Path.home()

        return cls(
            home=home,
            config=_xdg_dir(environ, "XDG_CONFIG_HOME", home / ".config"),
            data=_xdg_dir(environ, "XDG_DATA_HOME", home / ".local" / "share"),
            cache=_xdg_dir(environ, "XDG_CACHE_HOME", home / ".cache"),
        )

    @classmethod
    def from_home(cls, home: Path) -> "BaseDirs":
        """Base directories with XDG defaults under the given home directory."""
        return cls.from_env({"HOME": str(home)})
