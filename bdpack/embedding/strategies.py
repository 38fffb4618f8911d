"""Inlining strategies for local JavaScript modules, keyed by export shape."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Callable, Dict

from ..errors import EmbeddingError
from ..js.inspector import ExportKind, ExportShape
from .directives import EXPORT_ASSIGNMENT, comment_safe

InlineStrategy = Callable[[ExportShape, Path], str]


def read_source(path: Path) -> str:
    """Read a file as UTF-8 text without newline translation."""
    try:
        return path.read_bytes().decode("utf-8")
    except UnicodeDecodeError as exc:
        raise EmbeddingError(f"{path} is not valid UTF-8 text: {exc}") from exc


def _json_literal(value: object) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def inline_function(shape: ExportShape, path: Path) -> str:
    return f"({shape.source})"


def inline_sequence(shape: ExportShape, path: Path) -> str:
    return f"({_json_literal(shape.value)})"


def inline_object(shape: ExportShape, path: Path) -> str:
    # Only files that assign module.exports can be wrapped; the assignment becomes the return.
    body, replaced = EXPORT_ASSIGNMENT.subn("return ", read_source(path), count=1)
    if not replaced:
        raise EmbeddingError(
            f"{path} exports an object but has no `module.exports =` assignment to inline"
        )
    return f"(() => {{{body}}})() /* {comment_safe(str(path))} */"


def inline_scalar(shape: ExportShape, path: Path) -> str:
    return f"({_json_literal(shape.value)})"


STRATEGIES: Dict[ExportKind, InlineStrategy] = {
    ExportKind.FUNCTION: inline_function,
    ExportKind.SEQUENCE: inline_sequence,
    ExportKind.OBJECT: inline_object,
    ExportKind.SCALAR: inline_scalar,
}


def inline_module(shape: ExportShape, path: Path) -> str:
    return STRATEGIES[shape.kind](shape, path)


__all__ = ["STRATEGIES", "inline_module", "read_source"]
