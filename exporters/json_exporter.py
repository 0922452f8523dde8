"""JSON exporter for dependency maps (machine-friendly format)."""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from graph.model import DependencyMap, RecordState
from scanner.errors import IncompleteTraversalError
from .text_exporter import get_display_name


def to_json(
    dep_map: DependencyMap,
    found_only: bool = False,
    base: Optional[Path] = None,
    indent: int = 2,
) -> str:
    """
    Convert a dependency map to JSON format.

    Args:
        dep_map: A completely traversed dependency map.
        found_only: If True, omit unresolved dependency names.
        base: Optional base path for relative path display.
        indent: JSON indentation level.

    Returns:
        JSON string representation of the map.
    """
    modules: List[Dict[str, Any]] = []

    for module_id, record in dep_map.items():
        if record.state is RecordState.QUEUED:
            raise IncompleteTraversalError(f"{module_id} was never processed")
        if found_only and record.state is RecordState.NOT_FOUND:
            continue

        entry: Dict[str, Any] = {
            "module": get_display_name(module_id, base),
            "kind": module_id.kind,
            "status": record.state.value,
        }
        if record.state is RecordState.FOUND:
            entry["dependencies"] = list(record.names)
        elif record.state is RecordState.INVALID:
            entry["error"] = str(record.error)
            entry["error_kind"] = getattr(record.error, "kind", None)
        modules.append(entry)

    data: Dict[str, Any] = {
        "modules": modules,
        "missing_inputs": dep_map.missing_inputs,
    }

    return json.dumps(data, indent=indent)
