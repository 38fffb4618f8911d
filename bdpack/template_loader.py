"""Loads the artifact templates shipped with bdpack."""

from __future__ import annotations

from pathlib import Path

TEMPLATES_DIR = Path(__file__).with_name("templates")
LOCAL_TEMPLATE = "template.local.js"
REMOTE_TEMPLATE = "template.remote.js"
INSTALL_SCRIPT = "installscript.js"


def template_name(pack_lib: bool) -> str:
    """Return the template file used for the given library packing mode."""
    return REMOTE_TEMPLATE if pack_lib else LOCAL_TEMPLATE


def load_template(pack_lib: bool, templates_dir: Path | None = None) -> str:
    directory = templates_dir or TEMPLATES_DIR
    return (directory / template_name(pack_lib)).read_text(encoding="utf-8")


def load_install_script(templates_dir: Path | None = None) -> str:
    """Return the Windows Script Host preamble that lets users self-install a plugin."""
    directory = templates_dir or TEMPLATES_DIR
    return (directory / INSTALL_SCRIPT).read_text(encoding="utf-8")


__all__ = ["load_install_script", "load_template", "template_name"]
