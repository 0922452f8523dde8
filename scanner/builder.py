"""Graph builder that drives the dependency traversal."""

import logging
from collections import deque
from pathlib import Path
from typing import Callable, Deque, Dict, Iterable, List, Optional, Sequence, Union

from graph.model import DependencyMap, ModuleId
from .errors import InputNotFoundError, ModuleError
from .imports import read_imports as read_pe_imports
from .resolver import canonicalize_input, resolve_dependency


logger = logging.getLogger(__name__)

ImportReader = Callable[[Path], List[str]]


def build_graph(
    initial_paths: Iterable[Union[str, Path]],
    search_dirs: Sequence[Union[str, Path]],
    read_imports: ImportReader = read_pe_imports,
) -> DependencyMap:
    """
    Compute the transitive dependencies of the given modules.

    Initial paths that do not exist are reported through the log and
    recorded in ``missing_inputs``; they never become map keys. Each located
    module is read exactly once, and a failure to read one module never stops
    the others from being processed.

    Args:
        initial_paths: Modules to start from.
        search_dirs: Directories used to resolve dependency names, in order.
        read_imports: Callable returning the declared dependency names of a
                      module, raising ModuleError on failure.

    Returns:
        DependencyMap in which every discovered identity is terminal.
    """
    dep_map = DependencyMap()
    queue: Deque[ModuleId] = deque()

    for raw_path in initial_paths:
        try:
            path = canonicalize_input(raw_path)
        except InputNotFoundError as e:
            logger.error("%s", e)
            dep_map.add_missing_input(str(raw_path))
            continue
        module_id = ModuleId.from_path(path)
        if dep_map.add_queued(module_id):
            queue.append(module_id)

    # Resolution is memoized so one name always maps to one identity
    resolved_names: Dict[str, Optional[Path]] = {}

    while queue:
        module_id = queue.popleft()
        logger.debug("reading imports of %s", module_id)

        try:
            names = read_imports(module_id.path)
        except ModuleError as e:
            logger.debug("%s is invalid: %s", module_id, e)
            dep_map.mark_invalid(module_id, e)
            continue

        dep_map.mark_found(module_id, names)

        for name in names:
            if name not in resolved_names:
                resolved_names[name] = resolve_dependency(name, search_dirs)
            resolved = resolved_names[name]

            if resolved is None:
                dep_map.add_not_found(ModuleId.from_name(name))
                continue

            dependency_id = ModuleId.from_path(resolved)
            if dep_map.add_queued(dependency_id):
                logger.debug("queued %s (from %s)", dependency_id, name)
                queue.append(dependency_id)

    return dep_map
