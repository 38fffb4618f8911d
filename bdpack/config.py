"""Configuration resolution for bdpack (defaults, package.json, config files, CLI)."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional

import yaml

from .errors import ConfigError
from .logging import get_logger

DEFAULTS: Dict[str, Any] = {
    "pluginFolder": "./plugins",
    "releaseFolder": "./release",
    "copyToBD": False,
    "addInstallScript": False,
    "packLib": False,
    "multiPlugin": False,
    "oldHeader": False,
}

_logger = get_logger("config")


@dataclass
class EffectiveConfig:
    """Merged settings driving one build run."""

    plugin_folder: str = DEFAULTS["pluginFolder"]
    release_folder: str = DEFAULTS["releaseFolder"]
    copy_to_bd: bool = False
    add_install_script: bool = False
    pack_lib: bool = False
    multi_plugin: bool = False
    old_header: bool = False

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "EffectiveConfig":
        return cls(
            plugin_folder=_as_path(data, "pluginFolder"),
            release_folder=_as_path(data, "releaseFolder"),
            copy_to_bd=_as_bool(data, "copyToBD"),
            add_install_script=_as_bool(data, "addInstallScript"),
            pack_lib=_as_bool(data, "packLib"),
            multi_plugin=_as_bool(data, "multiPlugin"),
            old_header=_as_bool(data, "oldHeader"),
        )


def resolve_config(
    cwd: Path,
    cli_options: Mapping[str, Any] | None = None,
    *,
    config_file: Path | None = None,
) -> EffectiveConfig:
    """Merge every configuration source, later sources winning per key."""
    cwd = Path(cwd)
    package_json = _read_optional(cwd / "package.json")
    local_path = config_file if config_file is not None else cwd / "config.json"
    if not local_path.is_absolute():
        local_path = cwd / local_path

    merged = merge_sources(
        (
            ("defaults", DEFAULTS),
            ("package.json defaultConfig", package_json.get("defaultConfig")),
            (local_path.name, _read_optional(local_path)),
            ("package.json buildConfig", package_json.get("buildConfig")),
            ("command line", cli_options),
        )
    )
    return EffectiveConfig.from_mapping(merged)


def merge_sources(sources: Iterable[tuple[str, Optional[Mapping[str, Any]]]]) -> Dict[str, Any]:
    """Overwrite recognised keys source by source; missing sources contribute nothing."""
    merged: Dict[str, Any] = {}
    for label, source in sources:
        if source is None:
            continue
        if not isinstance(source, Mapping):
            raise ConfigError(f"{label} must be a mapping, got {type(source).__name__}")
        for key, value in source.items():
            if key not in DEFAULTS:
                _logger.debug("Ignoring unknown option %r from %s", key, label)
                continue
            merged[key] = value
    return merged


def _read_optional(path: Path) -> Dict[str, Any]:
    if not path.is_file():
        return {}
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        if path.suffix.lower() in {".yml", ".yaml"}:
            loaded = yaml.safe_load(text)
        else:
            loaded = json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigError(f"{path.name} must contain a mapping at the root")
    return loaded


def _as_path(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key, DEFAULTS[key])
    if isinstance(value, Path):
        return str(value)
    if not isinstance(value, str) or not value:
        raise ConfigError(f"{key} must be a non-empty path string")
    return value


def _as_bool(data: Mapping[str, Any], key: str) -> bool:
    value = data.get(key, DEFAULTS[key])
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    raise ConfigError(f"{key} must be a boolean, got {value!r}")


__all__ = ["DEFAULTS", "EffectiveConfig", "merge_sources", "resolve_config"]
