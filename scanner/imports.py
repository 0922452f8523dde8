"""Import-table extraction for PE images, backed by pefile."""

import logging
from pathlib import Path
from typing import Any, List

import pefile

from .errors import ModuleReadError, NameDecodeError, ParseInvalidError


logger = logging.getLogger(__name__)

IMPORT_DIRECTORY = pefile.DIRECTORY_ENTRY["IMAGE_DIRECTORY_ENTRY_IMPORT"]


def open_image(path: Path) -> pefile.PE:
    """
    Open a module image without parsing its data directories.

    Readability is checked before pefile sees the path, since pefile
    reports open and mmap failures as a plain Exception.

    Raises:
        ModuleReadError: The file could not be read.
        ParseInvalidError: The file is not a PE image.
    """
    path = Path(path)
    if not path.is_file():
        raise ModuleReadError(path, "cannot read module: not a regular file")
    try:
        with open(path, "rb"):
            pass
    except OSError as e:
        raise ModuleReadError(path, f"cannot read module: {e.strerror or e}") from e

    try:
        return pefile.PE(str(path), fast_load=True)
    except pefile.PEFormatError as e:
        raise ParseInvalidError(path, f"invalid PE image: {e.value}") from e
    except OSError as e:
        raise ModuleReadError(path, f"cannot read module: {e.strerror or e}") from e


def parse_imports(image: Any, path: Path = Path("<image>")) -> List[str]:
    """
    Extract the declared DLL names of an opened image, in table order.

    An image without an import directory declares no dependencies.

    Raises:
        ParseInvalidError: The import table is structurally corrupt.
        NameDecodeError: A DLL name is not valid UTF-8.
    """
    try:
        image.parse_data_directories(directories=[IMPORT_DIRECTORY])
    except pefile.PEFormatError as e:
        raise ParseInvalidError(path, f"corrupt import table: {e.value}") from e

    for warning in image.get_warnings():
        logger.debug("%s: %s", path, warning)

    names: List[str] = []
    for entry in getattr(image, "DIRECTORY_ENTRY_IMPORT", []):
        raw = entry.dll
        if raw is None:
            raise ParseInvalidError(path, "corrupt import table: import descriptor without a name")
        try:
            names.append(raw.decode("utf-8"))
        except UnicodeDecodeError as e:
            raise NameDecodeError(path, f"dependency name is not valid UTF-8: {raw!r}") from e
    return names


def read_imports(path: Path) -> List[str]:
    """Open a module, read its import names and release the image."""
    image = open_image(path)
    try:
        return parse_imports(image, path)
    finally:
        image.close()
