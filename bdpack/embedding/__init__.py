"""Inlining of library and local-file directives into plugin sources."""

from .engine import EmbeddingEngine, render_entry_point
from .packages import PackageResolver

__all__ = ["EmbeddingEngine", "PackageResolver", "render_entry_point"]
