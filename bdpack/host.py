"""Locating the BetterDiscord data directory on the host machine."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Mapping, Protocol

from .errors import HostDirectoryError


class HostLocator(Protocol):
    def plugins_dir(self) -> Path:
        """Return the folder BetterDiscord loads plugins from."""


class PlatformHostLocator:
    """Resolves BetterDiscord's folder from platform conventions and environment variables."""

    APP_FOLDER = "BetterDiscord"

    def __init__(self, platform: str | None = None, environ: Mapping[str, str] | None = None) -> None:
        self.platform = platform or sys.platform
        self.environ = environ if environ is not None else os.environ

    def config_root(self) -> Path:
        if self.platform == "win32":
            return Path(self._require("APPDATA"))
        if self.platform == "darwin":
            return Path(self._require("HOME")) / "Library" / "Preferences"
        xdg = self.environ.get("XDG_CONFIG_HOME")
        if xdg:
            return Path(xdg)
        return Path(self._require("HOME")) / ".config"

    def plugins_dir(self) -> Path:
        return self.config_root() / self.APP_FOLDER / "plugins"

    def _require(self, key: str) -> str:
        value = self.environ.get(key)
        if not value:
            raise HostDirectoryError(
                f"${key} is not set; cannot locate the {self.APP_FOLDER} folder"
            )
        return value


__all__ = ["HostLocator", "PlatformHostLocator"]
