"""Template substitution and artifact persistence."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Mapping, Optional

from .host import HostLocator
from .logging import get_logger
from .models import BuildResult

PLACEHOLDER = re.compile(r"\{\{([A-Z_]+)\}\}")
INSTALL_SCRIPT_END = "\n/*@end@*/"
ARTIFACT_SUFFIX = ".plugin.js"


def format_string(template: str, values: Mapping[str, str]) -> str:
    """Replace ``{{KEY}}`` placeholders in a single pass; inserted text is never rescanned."""

    def _substitute(match: re.Match[str]) -> str:
        key = match.group(1)
        if key not in values:
            return match.group(0)
        return values[key]

    return PLACEHOLDER.sub(_substitute, template)


def assemble(
    template: str,
    *,
    plugin_name: str,
    config: str,
    inner: str,
    header: str,
    install_script: Optional[str] = None,
) -> str:
    result = format_string(
        template,
        {
            "PLUGIN_NAME": plugin_name,
            "CONFIG": config,
            "INNER": inner,
            "HEADER": header,
            "INSTALL_SCRIPT": install_script or "",
        },
    )
    if install_script is not None:
        result += INSTALL_SCRIPT_END
    return result


def artifact_name(plugin_name: str) -> str:
    return f"{plugin_name}{ARTIFACT_SUFFIX}"


class ArtifactWriter:
    """Writes built plugins to the release folder and optionally into BetterDiscord."""

    def __init__(self, host_locator: HostLocator | None = None, *, cwd: Path | None = None) -> None:
        self.host_locator = host_locator
        self.cwd = cwd or Path.cwd()
        self.logger = get_logger("assembly")

    def release_dir(self, release_folder: str, plugin_name: str) -> Path:
        """Expand ``{{PLUGIN_NAME}}`` in the release folder for per-plugin output directories."""
        folder = Path(format_string(release_folder, {"PLUGIN_NAME": plugin_name}))
        return folder if folder.is_absolute() else self.cwd / folder

    def write(
        self,
        text: str,
        *,
        plugin_name: str,
        release_folder: str,
        copy_to_bd: bool = False,
    ) -> BuildResult:
        target_dir = self.release_dir(release_folder, plugin_name)
        target_dir.mkdir(parents=True, exist_ok=True)
        artifact = target_dir / artifact_name(plugin_name)
        artifact.write_text(text, encoding="utf-8", newline="")
        result = BuildResult(plugin_name=plugin_name, artifact=artifact)

        if copy_to_bd:
            if self.host_locator is None:
                raise ValueError("copy_to_bd requires a host locator")
            self.logger.info("Copying %s to BD folder", plugin_name)
            host_copy = self.host_locator.plugins_dir() / artifact_name(plugin_name)
            host_copy.write_text(text, encoding="utf-8", newline="")
            result.host_copy = host_copy
        return result


__all__ = ["ArtifactWriter", "artifact_name", "assemble", "format_string"]
