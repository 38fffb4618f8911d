"""Resolution of installed npm packages through their package.json."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

from ..errors import EmbeddingError

DEFAULT_MAIN = "index.js"


class PackageResolver:
    """Finds the entry point of packages installed under a node_modules folder."""

    def __init__(self, node_modules: Path) -> None:
        self.node_modules = Path(node_modules)

    def manifest_path(self, package: str) -> Path:
        if any(segment in ("", ".", "..") for segment in package.split("/")):
            raise EmbeddingError(f"Invalid package name {package!r}: must stay inside {self.node_modules}")
        return self.node_modules / package / "package.json"

    def entry_point(self, package: str) -> Optional[Path]:
        """Return the package's main module, or None when it is not installed."""
        manifest = self.manifest_path(package)
        if not manifest.is_file():
            return None
        try:
            data = json.loads(manifest.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise EmbeddingError(f"Failed to parse {manifest}: {exc}") from exc
        main = data.get("main") if isinstance(data, dict) else None
        return (manifest.parent / (main or DEFAULT_MAIN)).resolve()


__all__ = ["PackageResolver"]
