"""Adapters around the JavaScript toolchain (node, ncc)."""

from .bundler import Bundler, NccBundler
from .inspector import ExportKind, ExportShape, ModuleInspector, NodeInspector

__all__ = [
    "Bundler",
    "ExportKind",
    "ExportShape",
    "ModuleInspector",
    "NccBundler",
    "NodeInspector",
]
