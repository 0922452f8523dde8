"""Configuration file loading for search directories and report options."""

import json
import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from .errors import ConfigError


logger = logging.getLogger(__name__)

FORMATS = ("text", "json")
KNOWN_KEYS = {"search_dirs", "long", "found_only", "format"}


@dataclass
class ScanConfig:
    """Settings read from a configuration file."""

    search_dirs: List[Path] = field(default_factory=list)
    show_long: bool = False
    found_only: bool = False
    format: Optional[str] = None


def parse_config_file(file_path: Path) -> Any:
    """
    Parse a configuration file according to its extension.

    Raises:
        ConfigError: If the file cannot be read or parsed.
    """
    suffix = file_path.suffix.lower()

    try:
        content = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"cannot read config file {file_path}: {e}") from e

    try:
        if suffix == ".toml":
            return tomllib.loads(content)
        elif suffix in {".yaml", ".yml"}:
            return yaml.safe_load(content)
        elif suffix == ".json":
            return json.loads(content)
    except (tomllib.TOMLDecodeError, yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigError(f"cannot parse config file {file_path}: {e}") from e

    raise ConfigError(f"unsupported config file type: {file_path.name}")


def load_config(file_path: Union[str, Path]) -> ScanConfig:
    """
    Load a configuration file.

    Relative search directories are taken relative to the directory that
    holds the configuration file.

    Raises:
        ConfigError: If the file is unreadable or holds invalid values.
    """
    file_path = Path(file_path)
    data = parse_config_file(file_path)

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"{file_path}: top level must be a mapping")

    for key in sorted(set(data) - KNOWN_KEYS):
        logger.debug("%s: ignoring unknown key %r", file_path, key)

    return ScanConfig(
        search_dirs=_get_search_dirs(data, file_path),
        show_long=_get_bool(data, "long", file_path),
        found_only=_get_bool(data, "found_only", file_path),
        format=_get_format(data, file_path),
    )


def merge_search_dirs(cli_dirs: Optional[List[str]], config: ScanConfig) -> List[Path]:
    """Search directories from the command line first, then from the config."""
    dirs = [Path(d) for d in cli_dirs or []]
    dirs.extend(config.search_dirs)
    return dirs


def _get_search_dirs(data: Dict[str, Any], file_path: Path) -> List[Path]:
    value = data.get("search_dirs", [])
    if not isinstance(value, list) or not all(isinstance(d, str) for d in value):
        raise ConfigError(f"{file_path}: 'search_dirs' must be a list of strings")

    base = file_path.parent
    return [base / d if not Path(d).is_absolute() else Path(d) for d in value]


def _get_bool(data: Dict[str, Any], key: str, file_path: Path) -> bool:
    value = data.get(key, False)
    if not isinstance(value, bool):
        raise ConfigError(f"{file_path}: '{key}' must be true or false")
    return value


def _get_format(data: Dict[str, Any], file_path: Path) -> Optional[str]:
    value = data.get("format")
    if value is not None and value not in FORMATS:
        raise ConfigError(f"{file_path}: 'format' must be one of {', '.join(FORMATS)}")
    return value
