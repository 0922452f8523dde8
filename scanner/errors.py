"""Error types raised while scanning modules and resolving dependencies."""

from pathlib import Path
from typing import Union


class DllMapError(Exception):
    """Base class for all dllmap errors."""


class InputNotFoundError(DllMapError):
    """An initial module path does not exist on disk."""

    def __init__(self, path: Union[str, Path]):
        self.path = str(path)
        super().__init__(f"{self.path}: file not found")


class ModuleError(DllMapError):
    """
    A located module could not be turned into a list of imports.

    Subclasses tag the failure kind so callers can tell them apart.
    """

    kind = "module"

    def __init__(self, path: Union[str, Path], detail: str):
        self.path = str(path)
        self.detail = detail
        super().__init__(detail)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ModuleError):
            return NotImplemented
        return type(self) is type(other) and (self.path, self.detail) == (other.path, other.detail)

    def __hash__(self) -> int:
        return hash((type(self), self.path, self.detail))


class ParseInvalidError(ModuleError):
    """The image is not a PE file, or its import table is corrupt."""

    kind = "parse"


class NameDecodeError(ModuleError):
    """A declared dependency name is not valid text."""

    kind = "decode"


class ModuleReadError(ModuleError):
    """The module exists but could not be read."""

    kind = "io"


class IncompleteTraversalError(DllMapError):
    """A record was still queued when the map was rendered."""


class ConfigError(DllMapError):
    """The configuration file is missing or malformed."""
