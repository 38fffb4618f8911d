"""Core data models shared across bdpack components."""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional


@dataclass
class PluginManifest:
    """Decoded config.json for a single plugin."""

    path: Path
    main: str
    info: Dict[str, Any]
    raw: Dict[str, Any]

    @property
    def plugin_dir(self) -> Path:
        return self.path.parent

    def to_json(self) -> str:
        """Serialise the manifest the way JSON.stringify would."""
        return json.dumps(self.raw, separators=(",", ":"), ensure_ascii=False)


@dataclass
class BuildResult:
    """Outcome of a single plugin build."""

    plugin_name: str
    artifact: Path
    host_copy: Optional[Path] = None


@dataclass
class BuildReport:
    """Aggregate outcome of one bdpack run."""

    built: List[BuildResult] = field(default_factory=list)
    skipped: List[Path] = field(default_factory=list)
