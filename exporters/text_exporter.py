"""Line-oriented text exporter for dependency maps."""

from pathlib import Path
from typing import List, Optional

from graph.model import DependencyMap, ModuleId, RecordState
from scanner.errors import IncompleteTraversalError


DEPENDENCY_PREFIX = "    -> "
NOT_FOUND_MARKER = "[NOT FOUND]"
INVALID_MARKER = "[INVALID]"


def render_lines(
    dep_map: DependencyMap,
    show_long: bool = False,
    found_only: bool = False,
    base: Optional[Path] = None,
) -> List[str]:
    """
    Render a dependency map as output lines, in map order.

    Args:
        dep_map: A completely traversed dependency map.
        show_long: If True, list each found module's dependency names
                   beneath it.
        found_only: If True, omit unresolved dependency names.
        base: Optional base path for relative path display.

    Returns:
        List of output lines.

    Raises:
        IncompleteTraversalError: If a record is still queued.
    """
    lines: List[str] = []

    for module_id, record in dep_map.items():
        display = get_display_name(module_id, base)

        if record.state is RecordState.FOUND:
            lines.append(display)
            if show_long:
                for name in record.names:
                    lines.append(f"{DEPENDENCY_PREFIX}{name}")

        elif record.state is RecordState.NOT_FOUND:
            if not found_only:
                lines.append(f"{display} {NOT_FOUND_MARKER}")

        elif record.state is RecordState.INVALID:
            lines.append(f"{display} {INVALID_MARKER} {record.error}")

        else:
            raise IncompleteTraversalError(f"{module_id} was never processed")

    return lines


def to_text(
    dep_map: DependencyMap,
    show_long: bool = False,
    found_only: bool = False,
    base: Optional[Path] = None,
) -> str:
    """Render a dependency map as a single newline-joined string."""
    return "\n".join(render_lines(dep_map, show_long, found_only, base))


def get_display_name(module_id: ModuleId, base: Optional[Path] = None) -> str:
    """Get the display string of an identity, relative to base when possible."""
    path = module_id.path
    if path is None or base is None:
        return str(module_id)
    try:
        return str(path.relative_to(base.resolve()))
    except ValueError:
        return str(path)
