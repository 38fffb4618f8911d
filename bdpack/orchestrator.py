"""Pipeline orchestration for single and multi plugin builds."""

from __future__ import annotations

import asyncio
import time
from pathlib import Path
from typing import List, Optional

from .assembly import ArtifactWriter, assemble
from .config import EffectiveConfig
from .embedding import EmbeddingEngine, render_entry_point
from .errors import MissingManifestError
from .header import build_header, sanitize_name
from .host import HostLocator, PlatformHostLocator
from .js import Bundler, ModuleInspector, NccBundler, NodeInspector
from .logging import get_logger
from .manifest import load_manifest, sibling_files
from .models import BuildReport, BuildResult
from .template_loader import load_install_script, load_template


class Orchestrator:
    """Builds every requested plugin directory, one after another."""

    def __init__(
        self,
        config: EffectiveConfig,
        *,
        inspector: ModuleInspector | None = None,
        bundler: Bundler | None = None,
        host_locator: HostLocator | None = None,
        cwd: Path | None = None,
        templates_dir: Path | None = None,
    ) -> None:
        self.config = config
        self.cwd = (cwd or Path.cwd()).resolve()
        self.inspector = inspector or NodeInspector()
        self.engine = EmbeddingEngine(
            self.inspector,
            bundler or NccBundler(cwd=self.cwd),
            node_modules=self.cwd / "node_modules",
        )
        self.writer = ArtifactWriter(host_locator or PlatformHostLocator(), cwd=self.cwd)
        self.template = load_template(config.pack_lib, templates_dir)
        self.install_script = (
            load_install_script(templates_dir) if config.add_install_script else None
        )
        self.logger = get_logger("orchestrator")

    def plugin_dirs(self) -> List[Path]:
        root = self.cwd / self.config.plugin_folder
        if not self.config.multi_plugin:
            return [root]
        return sorted(entry for entry in root.iterdir() if entry.is_dir())

    async def run(self) -> BuildReport:
        started = time.perf_counter()
        report = BuildReport()
        for plugin_dir in self.plugin_dirs():
            result = await self.build_plugin(plugin_dir)
            if result is None:
                report.skipped.append(plugin_dir)
            else:
                report.built.append(result)
        self.logger.info("Build took %.2fs", time.perf_counter() - started)
        return report

    async def build_plugin(self, plugin_dir: Path) -> Optional[BuildResult]:
        plugin_dir = (self.cwd / plugin_dir).resolve()
        try:
            manifest = load_manifest(plugin_dir)
        except MissingManifestError as exc:
            self.logger.warning("%s", exc)
            return None

        plugin_name = sanitize_name(manifest.info.get("name") or plugin_dir.name)
        self.logger.info("Building %s from %s", plugin_name, manifest.path)

        # node runs synchronously; keep it off the event loop.
        entry_source = await asyncio.to_thread(
            render_entry_point, self.inspector, plugin_dir / manifest.main
        )
        inner = await self.engine.embed(entry_source, plugin_dir, sibling_files(manifest))

        # Pass-through mode also fills info.name and info.authors, so serialise the manifest afterwards.
        header = build_header(plugin_name, manifest.info, legacy=self.config.old_header)
        self.logger.debug("Manifest for %s: %s", plugin_name, manifest.to_json())

        text = assemble(
            self.template,
            plugin_name=plugin_name,
            config=manifest.to_json(),
            inner=inner,
            header=header,
            install_script=self.install_script,
        )
        result = self.writer.write(
            text,
            plugin_name=plugin_name,
            release_folder=self.config.release_folder,
            copy_to_bd=self.config.copy_to_bd,
        )
        self.logger.info("%s built successfully", plugin_name)
        self.logger.info("%s saved as %s", plugin_name, result.artifact)
        return result


__all__ = ["Orchestrator"]
