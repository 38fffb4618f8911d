"""Loading of per-plugin config.json manifests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import List

from .errors import ManifestError, MissingManifestError
from .models import PluginManifest

MANIFEST_NAME = "config.json"


def load_manifest(plugin_dir: Path) -> PluginManifest:
    """Read ``config.json`` from a plugin directory, checking only required keys."""
    path = Path(plugin_dir) / MANIFEST_NAME
    if not path.is_file():
        raise MissingManifestError(path)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ManifestError(f"Failed to parse {path}: {exc}") from exc
    if not isinstance(raw, dict):
        raise ManifestError(f"{path} must contain a JSON object")

    main = raw.get("main")
    if not isinstance(main, str) or not main:
        raise ManifestError(f'{path} is missing the "main" entry file')
    info = raw.get("info")
    if not isinstance(info, dict):
        raise ManifestError(f'{path} is missing the "info" block')
    return PluginManifest(path=path, main=main, info=info, raw=raw)


def sibling_files(manifest: PluginManifest) -> List[str]:
    """Names of files next to the entry point that local directives may reference."""
    excluded = {MANIFEST_NAME, manifest.main}
    return sorted(
        entry.name
        for entry in manifest.plugin_dir.iterdir()
        if entry.is_file() and entry.name not in excluded
    )


__all__ = ["MANIFEST_NAME", "load_manifest", "sibling_files"]
