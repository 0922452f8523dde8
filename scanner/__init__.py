"""Scanner module for import extraction and dependency resolution."""

from .imports import read_imports
from .resolver import canonicalize, resolve_dependency
from .builder import build_graph

__all__ = [
    "read_imports",
    "canonicalize",
    "resolve_dependency",
    "build_graph",
]
