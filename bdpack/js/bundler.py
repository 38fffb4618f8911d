"""Adapter for @vercel/ncc, which compiles npm packages into dependency-free code."""

from __future__ import annotations

import asyncio
import os
import shlex
import tempfile
from pathlib import Path
from typing import Protocol, Sequence

from ..errors import EmbeddingError
from ..logging import get_logger


class Bundler(Protocol):
    async def bundle(self, entry: Path) -> str:
        """Return self-contained code for the module at ``entry``."""


class NccBundler:
    """Invokes the ncc CLI and returns the compiled ``index.js``."""

    DEFAULT_COMMAND = ("npx", "--yes", "@vercel/ncc")
    ENV_COMMAND_KEY = "BDPACK_NCC"

    def __init__(self, command: Sequence[str] | None = None, *, cwd: Path | None = None) -> None:
        if command is None:
            override = os.environ.get(self.ENV_COMMAND_KEY)
            command = shlex.split(override) if override else self.DEFAULT_COMMAND
        self.command = list(command)
        self.cwd = cwd
        self.logger = get_logger("js.bundler")

    async def bundle(self, entry: Path) -> str:
        with tempfile.TemporaryDirectory(prefix="bdpack-ncc-") as out_dir:
            args = [*self.command, "build", str(entry), "-o", out_dir, "--quiet"]
            self.logger.debug("Running %s", " ".join(args))
            try:
                process = await asyncio.create_subprocess_exec(
                    *args,
                    stdout=asyncio.subprocess.PIPE,
                    stderr=asyncio.subprocess.PIPE,
                    cwd=str(self.cwd) if self.cwd else None,
                )
            except FileNotFoundError as exc:
                raise EmbeddingError(
                    f"Unable to locate '{self.command[0]}'. Install Node.js and @vercel/ncc."
                ) from exc
            stdout, stderr = await process.communicate()
            if process.returncode != 0:
                message = stderr.decode("utf-8", "replace").strip() or stdout.decode(
                    "utf-8", "replace"
                ).strip()
                raise EmbeddingError(
                    f"ncc failed for {entry} with exit code {process.returncode}: {message}"
                )
            output = Path(out_dir) / "index.js"
            if not output.is_file():
                raise EmbeddingError(f"ncc produced no index.js for {entry}")
            return output.read_text(encoding="utf-8")


__all__ = ["Bundler", "NccBundler"]
