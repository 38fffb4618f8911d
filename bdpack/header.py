"""JSDoc header synthesis from a plugin's ``config.info`` block."""

from __future__ import annotations

import json
import math
from typing import Any, Dict, List, Mapping, MutableMapping, Optional, Tuple

# (JSDoc tag, config.info key) pairs emitted in legacy mode.
LEGACY_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("name", "name"),
    ("version", "version"),
    ("website", "github"),
    ("source", "github_raw"),
    ("patreon", "patreonLink"),
    ("donate", "paypalLink"),
    ("authorLink", "authorLink"),
    ("invite", "inviteCode"),
)


def sanitize_name(name: str) -> str:
    """Drop the first newline and first space, which break compiled plugin names."""
    return name.replace("\n", "", 1).replace(" ", "", 1)


def ensure_authors(info: MutableMapping[str, Any]) -> None:
    """Convert BetterDiscord ``author``/``authorId`` fields into ZLibrary's ``authors`` list."""
    if info.get("authors") or not info.get("author"):
        return
    author: Dict[str, Any] = {"name": info["author"]}
    if info.get("authorId"):
        author["discord_id"] = info["authorId"]
    info["authors"] = [author]


def legacy_header(name: str, info: Optional[Mapping[str, Any]]) -> str:
    info = info or {}
    entries = [(tag, info.get(key) or "") for tag, key in LEGACY_FIELDS]
    entries[0] = ("name", sanitize_name(str(entries[0][1] or name)))
    return _render(entries)


def passthrough_header(name: str, info: Optional[MutableMapping[str, Any]]) -> str:
    """Emit one tag per truthy ``info`` key.

    Mutates ``info``: the sanitised display name is written back to ``name`` and
    :func:`ensure_authors` fills ``authors``, so the embedded config matches the header.
    """
    if info is None:
        return ""
    info["name"] = sanitize_name(str(info.get("name") or name))
    ensure_authors(info)
    entries: List[Tuple[str, Any]] = [("name", info["name"])]
    for key, value in info.items():
        if key in ("name", "authors") or not _is_truthy(value):
            continue
        entries.append((key, value))
    return _render(entries)


def build_header(name: str, info: Optional[MutableMapping[str, Any]], *, legacy: bool = False) -> str:
    if legacy:
        return legacy_header(name, info)
    return passthrough_header(name, info)


def _render(entries: List[Tuple[str, Any]]) -> str:
    lines = ["/**"]
    for tag, value in entries:
        lines.append(f" * @{tag} {_format_value(value)}".rstrip())
    lines.append(" */")
    return "\n".join(lines)


def _is_truthy(value: Any) -> bool:
    # JavaScript truthiness: empty lists and mappings count as set.
    if value is None or isinstance(value, bool):
        return bool(value)
    if isinstance(value, float):
        return not (value == 0 or math.isnan(value))
    if isinstance(value, (int, str)):
        return bool(value)
    return True


def _format_value(value: Any) -> str:
    # Mirror JavaScript template-string coercion for non-string values.
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, (list, tuple)):
        return ",".join("" if item is None else _format_value(item) for item in value)
    if isinstance(value, dict):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


__all__ = [
    "LEGACY_FIELDS",
    "build_header",
    "ensure_authors",
    "legacy_header",
    "passthrough_header",
    "sanitize_name",
]
