"""Recording test doubles for the JavaScript toolchain and host lookups."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Mapping

from bdpack.js.inspector import ExportKind, ExportShape


def _package_name(entry: Path) -> str:
    for parent in entry.parents:
        if parent.parent.name == "node_modules":
            return parent.name
    return entry.parent.name


def function_shape(source: str) -> ExportShape:
    return ExportShape(kind=ExportKind.FUNCTION, source=source)


class FakeInspector:
    """Returns canned export shapes keyed by file name."""

    def __init__(self, shapes: Mapping[str, ExportShape]) -> None:
        self.shapes = dict(shapes)
        self.calls: list[tuple[str, bool]] = []

    def describe(self, path: Path, *, unwrap_default: bool = False) -> ExportShape:
        name = Path(path).name
        self.calls.append((name, unwrap_default))
        return self.shapes[name]


class FakeBundler:
    """Produces ncc-like output naming the bundled package, with optional per-package delays."""

    def __init__(self, delays: Mapping[str, float] | None = None) -> None:
        self.delays = dict(delays or {})
        self.calls: list[Path] = []
        self.completed: list[str] = []

    async def bundle(self, entry: Path) -> str:
        package = _package_name(Path(entry))
        self.calls.append(Path(entry))
        await asyncio.sleep(self.delays.get(package, 0))
        self.completed.append(package)
        return (
            "(() => { var __webpack_exports__ = "
            f'"{package}"; module.exports = __webpack_exports__; }})()'
        )


class StaticHostLocator:
    """Host locator pointing at a fixed directory."""

    def __init__(self, directory: Path) -> None:
        self.directory = directory

    def plugins_dir(self) -> Path:
        return self.directory


def evaluate_template_literal(literal: str) -> str:
    """Evaluate a JS template literal that contains only escape sequences, no substitutions."""
    assert literal.startswith("`") and literal.endswith("`")
    body = literal[1:-1]
    out: list[str] = []
    index = 0
    while index < len(body):
        char = body[index]
        if char == "\\":
            out.append(body[index + 1])
            index += 2
            continue
        assert char != "`", "unescaped backtick terminates the literal"
        assert not body.startswith("${", index), "unescaped substitution marker"
        out.append(char)
        index += 1
    return "".join(out)


__all__ = [
    "FakeBundler",
    "FakeInspector",
    "StaticHostLocator",
    "evaluate_template_literal",
    "function_shape",
]
