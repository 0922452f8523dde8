"""Path resolution utilities for mapping dependency names to actual files."""

from pathlib import Path
from typing import Optional, Sequence, Union

from .errors import InputNotFoundError


PathLike = Union[str, Path]


def canonicalize(path: PathLike) -> Optional[Path]:
    """
    Resolve a path to its absolute, link-free form.

    Returns:
        The canonical Path if it exists, None otherwise.
    """
    try:
        return Path(path).resolve(strict=True)
    except (OSError, RuntimeError, ValueError):
        return None


def canonicalize_input(path: PathLike) -> Path:
    """
    Canonicalize an initial module path.

    Raises:
        InputNotFoundError: If the path does not exist.
    """
    resolved = canonicalize(path)
    if resolved is None:
        raise InputNotFoundError(path)
    return resolved


def resolve_dependency(
    name: str,
    search_dirs: Sequence[PathLike],
) -> Optional[Path]:
    """
    Resolve a dependency name against an ordered list of search directories.

    Each directory is joined with the name in turn and the first candidate
    that exists wins; later directories are not consulted. Nothing is parsed
    or validated here. Names that are not bare file names never resolve.

    Args:
        name: The dependency name declared in an import table.
        search_dirs: Directories to probe, highest precedence first.

    Returns:
        Canonical Path of the first existing candidate, None otherwise.
    """
    if not is_plain_name(name):
        return None

    for directory in search_dirs:
        resolved = canonicalize(Path(directory) / name)
        if resolved is not None:
            return resolved

    return None


def is_plain_name(name: str) -> bool:
    """
    Check that a dependency name is a bare file name.

    Absolute names, names with path separators and the special entries
    "." and ".." would escape the search directories.
    """
    if not name or name in {".", ".."}:
        return False
    return "/" not in name and "\\" not in name and ":" not in name
