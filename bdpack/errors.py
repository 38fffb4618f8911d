"""Exception hierarchy for bdpack builds."""

from __future__ import annotations


class BdpackError(RuntimeError):
    """Base class for errors reported to the operator without a traceback."""


class ConfigError(BdpackError):
    """Raised when a configuration source cannot be decoded."""


class ManifestError(BdpackError):
    """Raised when a plugin manifest exists but is unusable."""


class MissingManifestError(BdpackError):
    """Raised when a plugin directory has no config.json."""

    def __init__(self, path) -> None:
        super().__init__(f'Could not find "{path}". Skipping...')
        self.path = path


class EmbeddingError(BdpackError):
    """Raised when a directive cannot be inlined."""


class HostDirectoryError(BdpackError):
    """Raised when the BetterDiscord directory cannot be located."""


__all__ = [
    "BdpackError",
    "ConfigError",
    "EmbeddingError",
    "HostDirectoryError",
    "ManifestError",
    "MissingManifestError",
]
