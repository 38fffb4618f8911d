"""Rewrites plugin sources by inlining library and local-file directives."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Iterable

from ..errors import EmbeddingError
from ..js.bundler import Bundler
from ..js.inspector import ExportKind, ModuleInspector
from ..logging import get_logger
from .directives import (
    LibraryDirective,
    comment_safe,
    escape_template_literal,
    find_library_directives,
    local_file_pattern,
    rewrite_bundle,
    splice,
)
from .packages import PackageResolver
from .strategies import inline_module, read_source

CODE_SUFFIX = ".js"


def render_entry_point(inspector: ModuleInspector, path: Path) -> str:
    """Return the source text of the plugin's exported function or class."""
    shape = inspector.describe(path, unwrap_default=True)
    if shape.kind is not ExportKind.FUNCTION or shape.source is None:
        raise EmbeddingError(
            f"{path} must export a plugin function or class, found {shape.kind.value}"
        )
    return shape.source


class EmbeddingEngine:
    """Two-pass inliner: npm packages first, then files next to the entry point."""

    def __init__(
        self,
        inspector: ModuleInspector,
        bundler: Bundler,
        *,
        node_modules: Path | None = None,
    ) -> None:
        self.inspector = inspector
        self.bundler = bundler
        self.packages = PackageResolver(node_modules or Path.cwd() / "node_modules")
        self.logger = get_logger("embedding")

    async def embed(self, content: str, plugin_dir: Path, files: Iterable[str]) -> str:
        content = await self.embed_libraries(content)
        return await asyncio.to_thread(self.embed_local_files, content, Path(plugin_dir), list(files))

    async def embed_libraries(self, content: str) -> str:
        directives = find_library_directives(content)
        if not directives:
            return content
        replacements = await asyncio.gather(
            *(self._resolve_library(directive) for directive in directives)
        )
        return splice(content, directives, replacements)

    async def _resolve_library(self, directive: LibraryDirective) -> str:
        entry = self.packages.entry_point(directive.package)
        self.logger.debug("Looked up %s", self.packages.manifest_path(directive.package))
        if entry is None:
            return directive.text
        self.logger.info("detected node module %s. compiling and embedding...", directive.package)
        code = await self.bundler.bundle(entry)
        self.logger.info("compiled %s!", directive.package)
        return f"{rewrite_bundle(code)} /* {comment_safe(directive.text)} */"

    def embed_local_files(self, content: str, plugin_dir: Path, files: Iterable[str]) -> str:
        for file_name in files:
            pattern = local_file_pattern(file_name)
            if not pattern.search(content):
                continue
            replacement = self.inline_file(plugin_dir / file_name)
            content = pattern.sub(lambda _match: replacement, content)
        return content

    def inline_file(self, path: Path) -> str:
        if path.suffix != CODE_SUFFIX:
            return f"`{escape_template_literal(read_source(path))}`"
        return inline_module(self.inspector.describe(path), path)


__all__ = ["CODE_SUFFIX", "EmbeddingEngine", "render_entry_point"]
