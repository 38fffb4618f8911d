"""Inspects the runtime shape of CommonJS module exports using node."""

from __future__ import annotations

import json
import os
import subprocess
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Optional, Protocol

from ..errors import EmbeddingError
from ..logging import get_logger

DESCRIBE_SCRIPT = Path(__file__).with_name("describe.js")
OUTPUT_MARKER = "@@bdpack-export@@"


class ExportKind(str, Enum):
    """Shapes a module export can take, each with its own inlining strategy."""

    FUNCTION = "function"
    SEQUENCE = "sequence"
    OBJECT = "object"
    SCALAR = "scalar"


@dataclass(frozen=True)
class ExportShape:
    """Classified module export."""

    kind: ExportKind
    source: Optional[str] = None
    value: Any = None


class ModuleInspector(Protocol):
    def describe(self, path: Path, *, unwrap_default: bool = False) -> ExportShape:
        """Load the module at ``path`` and classify its export."""


class NodeInspector:
    """Runs ``describe.js`` under node to classify a module export."""

    ENV_EXECUTABLE_KEY = "BDPACK_NODE"

    def __init__(self, executable: str | None = None, *, script: Path | None = None) -> None:
        self.executable = executable or os.environ.get(self.ENV_EXECUTABLE_KEY) or "node"
        self.script = script or DESCRIBE_SCRIPT
        self.logger = get_logger("js.inspector")

    def describe(self, path: Path, *, unwrap_default: bool = False) -> ExportShape:
        path = Path(path).resolve()
        args = [self.executable, str(self.script), str(path)]
        if unwrap_default:
            args.append("--default")
        self.logger.debug("Inspecting exports of %s", path)
        try:
            completed = subprocess.run(
                args,
                check=True,
                capture_output=True,
                text=True,
                cwd=str(path.parent),
            )
        except FileNotFoundError as exc:
            raise EmbeddingError(
                f"Unable to locate '{self.executable}'. Install Node.js to build plugins."
            ) from exc
        except subprocess.CalledProcessError as exc:
            message = exc.stderr.strip() or exc.stdout.strip() or str(exc.returncode)
            raise EmbeddingError(f"Failed to load {path}: {message}") from exc
        return parse_shape(completed.stdout, path)


def parse_shape(output: str, path: Path) -> ExportShape:
    """Decode the JSON line printed by ``describe.js`` after any module output."""
    _, marker, payload = output.rpartition(OUTPUT_MARKER)
    if not marker:
        raise EmbeddingError(f"node produced no export description for {path}")
    try:
        data = json.loads(payload.strip())
        kind = ExportKind(data["kind"])
    except (json.JSONDecodeError, KeyError, ValueError) as exc:
        raise EmbeddingError(f"Malformed export description for {path}: {exc}") from exc
    return ExportShape(kind=kind, source=data.get("source"), value=data.get("value"))


__all__ = ["ExportKind", "ExportShape", "ModuleInspector", "NodeInspector", "parse_shape"]
