from __future__ import annotations

"""
Route Tree Builder.

Walks the handler root depth-first and turns directories into Groups and
method-named handler files into RouteLeaf entries. Sibling order is fixed
by sorting, never by the order the filesystem happens to list entries in,
so repeated scans of an unchanged tree produce identical trees.
"""

import logging
import os
from typing import Dict, FrozenSet, List, Tuple

from fsrouter.core.analysis.classifier import classify_directory, classify_handler
from fsrouter.domain.config import DEFAULT_SOURCE_EXTENSION
from fsrouter.domain.errors import FilesystemError, StructureError
from fsrouter.domain.route_models import Group, RouteLeaf, RouteTree, Segment

logger = logging.getLogger(__name__)

# Upper bound on nesting below the API root
MAX_DEPTH = 64

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def build_route_tree(api_root: str, extension: str = DEFAULT_SOURCE_EXTENSION) -> RouteTree:
    """
    Scan an API root directory into a RouteTree.

    Args:
        api_root: Directory holding the handler packages.
        extension: Source extension of handler files (".go").

    Returns:
        RouteTree: Root group plus flattened group lists in traversal order.

    Raises:
        FilesystemError: If the root cannot be read, a symbolic-link cycle
            is found, or nesting exceeds MAX_DEPTH.
        StructureError: If directory names are malformed or ambiguous, or a
            directory holds two handlers for the same method.
    """
    root_path = os.path.abspath(api_root)
    if not os.path.exists(root_path):
        raise FilesystemError("API root does not exist", root_path)
    if not os.path.isdir(root_path):
        raise FilesystemError("API root is not a directory", root_path)

    logger.info(f"Scanning handler tree: {root_path}")

    root = Group()
    _populate(
        root,
        root_path,
        extension,
        ancestors=(os.path.realpath(root_path),),
        bound_params=frozenset(),
    )

    tree = RouteTree(
        root=root,
        top_level_groups=list(root.children.values()),
        leaf_groups=[g for g in root.walk() if g.leaves],
    )
    logger.debug(
        f"Route tree built: {len(tree.top_level_groups)} groups, "
        f"{tree.route_count} routes"
    )
    return tree

# -----------------------------------------------------------------------------
# INTERNAL HELPERS (TRAVERSAL)
# -----------------------------------------------------------------------------

def _populate(
        group: Group,
        dir_path: str,
        extension: str,
        ancestors: Tuple[str, ...],
        bound_params: FrozenSet[str],
) -> None:
    """Fill one group with its leaves and recurse into its subdirectories."""
    if len(group.segments) > MAX_DEPTH:
        raise FilesystemError(f"Directory nesting exceeds {MAX_DEPTH} levels", dir_path)

    dir_names, file_names = _list_directory(dir_path)

    group.leaves = _collect_leaves(group, dir_path, file_names, extension)

    for segment in _classify_children(dir_path, dir_names):
        child_path = os.path.join(dir_path, segment.name)

        real_path = os.path.realpath(child_path)
        if real_path in ancestors:
            raise FilesystemError("Symbolic link cycle detected", child_path)

        params = bound_params
        if segment.is_dynamic:
            if segment.param_name in bound_params:
                raise StructureError(
                    f"Path parameter '{segment.param_name}' is already bound by a parent directory",
                    child_path,
                )
            params = bound_params | {str(segment.param_name)}

        child = Group(segments=group.segments + (segment,), is_top_level=not group.segments)
        group.children[segment.name] = child
        _populate(child, child_path, extension, ancestors + (real_path,), params)


def _list_directory(dir_path: str) -> Tuple[List[str], List[str]]:
    """Return sorted (directories, files), skipping hidden entries."""
    dirs: List[str] = []
    files: List[str] = []
    try:
        with os.scandir(dir_path) as it:
            for entry in it:
                if entry.name.startswith("."):
                    continue
                if entry.is_dir():
                    dirs.append(entry.name)
                elif entry.is_file():
                    files.append(entry.name)
    except OSError as e:
        raise FilesystemError(f"Cannot read directory ({e.strerror or e})", dir_path) from e

    dirs.sort()
    files.sort()
    return dirs, files

# -----------------------------------------------------------------------------
# INTERNAL HELPERS (CLASSIFICATION)
# -----------------------------------------------------------------------------

def _classify_children(dir_path: str, dir_names: List[str]) -> List[Segment]:
    """
    Classify subdirectories and order them: static names ascending, then the
    dynamic one.

    This is not plain name order (``[id]`` would sort before ``me``). mux
    dispatches to the first matching route, so the parameter slot goes last
    to keep literal siblings reachable.
    """
    segments = [classify_directory(name, os.path.join(dir_path, name)) for name in dir_names]

    dynamic = [s.name for s in segments if s.is_dynamic]
    if len(dynamic) > 1:
        raise StructureError(
            f"Ambiguous dynamic segments {', '.join(dynamic)} share one path level",
            dir_path,
        )

    return sorted(segments, key=lambda s: (s.is_dynamic, s.name))


def _collect_leaves(
        group: Group,
        dir_path: str,
        file_names: List[str],
        extension: str,
) -> List[RouteLeaf]:
    """Build one RouteLeaf per handler file, rejecting duplicate methods."""
    by_method: Dict[str, RouteLeaf] = {}
    for file_name in file_names:
        match = classify_handler(file_name, extension)
        if match is None:
            continue

        previous = by_method.get(match.method)
        if previous is not None:
            raise StructureError(
                f"Duplicate {match.method} handlers '{previous.file_name}' and '{file_name}'",
                dir_path,
            )

        by_method[match.method] = RouteLeaf(
            method=match.method,
            exported_symbol=match.exported_symbol,
            source_package_path=group.source_package_path,
            file_name=file_name,
        )

    return [by_method[m] for m in sorted(by_method)]
