"""Directive patterns and the text rewrites applied when inlining them."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Pattern, Sequence

LIBRARY_DIRECTIVE = re.compile(
    r"""require\( *['"`]([a-z0-9_@./-]+)['"`] */\* *zlibrarybuilder embed *\*/ *\)""",
    re.IGNORECASE,
)

BUNDLE_EXPORT = "module.exports = __webpack_exports__"
BUNDLE_RETURN = "return __webpack_exports__"

EXPORT_ASSIGNMENT = re.compile(r"module\.exports\s*=(?!=)\s*")


@dataclass(frozen=True)
class LibraryDirective:
    """A ``require("pkg" /* zlibrarybuilder embed */)`` occurrence."""

    text: str
    start: int
    end: int
    package: str


def find_library_directives(content: str) -> List[LibraryDirective]:
    return [
        LibraryDirective(text=match.group(0), start=match.start(), end=match.end(), package=match.group(1))
        for match in LIBRARY_DIRECTIVE.finditer(content)
    ]


def local_file_pattern(file_name: str) -> Pattern[str]:
    """Match ``require("<file_name>")`` with any JS quote character."""
    return re.compile(r"require\((['\"`])" + re.escape(file_name) + r"(['\"`])\)")


def splice(content: str, directives: Sequence[LibraryDirective], replacements: Sequence[str]) -> str:
    """Replace each directive span with its replacement, in input order."""
    parts: List[str] = []
    cursor = 0
    for directive, replacement in zip(directives, replacements):
        parts.append(content[cursor:directive.start])
        parts.append(replacement)
        cursor = directive.end
    parts.append(content[cursor:])
    return "".join(parts)


def escape_template_literal(text: str) -> str:
    """Escape text so a JS template literal evaluates back to it verbatim."""
    return text.replace("\\", "\\\\").replace("${", "\\${").replace("`", "\\`")


def comment_safe(text: str) -> str:
    """Neutralise comment terminators so ``text`` can sit inside a block comment."""
    return text.replace("*/", "*\\/")


def rewrite_bundle(code: str) -> str:
    """Turn ncc's trailing exports assignment into a return so the bundle is an expression."""
    return code.replace(BUNDLE_EXPORT, BUNDLE_RETURN, 1)


__all__ = [
    "EXPORT_ASSIGNMENT",
    "LIBRARY_DIRECTIVE",
    "LibraryDirective",
    "comment_safe",
    "escape_template_literal",
    "find_library_directives",
    "local_file_pattern",
    "rewrite_bundle",
    "splice",
]
