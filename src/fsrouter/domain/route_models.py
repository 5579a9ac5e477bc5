from __future__ import annotations

"""
Route Tree Data Models.

Provides the structural nodes produced by the tree builder and consumed by
the code emitter: path segments, handler leaves, directory groups, the
route tree itself, and the resolved middleware attachment plan.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple

from fsrouter.domain.errors import MiddlewareReferenceWarning

# -----------------------------------------------------------------------------
# PATH COMPONENTS
# -----------------------------------------------------------------------------

class SegmentKind(str, Enum):
    STATIC = "static"
    DYNAMIC = "dynamic"


@dataclass(frozen=True)
class Segment:
    """
    One directory component below the API root.

    Attributes:
        name: Raw directory name as found on disk.
        kind: STATIC for literal names, DYNAMIC for bracket-wrapped names.
        param_name: Interior of the brackets; set only for DYNAMIC segments.
    """
    name: str
    kind: SegmentKind = SegmentKind.STATIC
    param_name: Optional[str] = None

    @property
    def is_dynamic(self) -> bool:
        return self.kind is SegmentKind.DYNAMIC

    @property
    def url_part(self) -> str:
        """Path fragment as it appears in a mux route pattern."""
        if self.is_dynamic:
            return "{" + str(self.param_name) + "}"
        return self.name


@dataclass(frozen=True)
class RouteLeaf:
    """
    A handler file bound to one HTTP method.

    Attributes:
        method: Uppercase HTTP verb (GET, POST, ...).
        exported_symbol: Go function the handler package must export.
        source_package_path: POSIX directory path relative to the API root.
        file_name: Handler file name on disk.
    """
    method: str
    exported_symbol: str
    source_package_path: str
    file_name: str


# -----------------------------------------------------------------------------
# TREE NODES
# -----------------------------------------------------------------------------

@dataclass
class Group:
    """
    A directory node of the route tree.

    Children are stored in deterministic order (the builder inserts them
    sorted), so iterating ``children`` never depends on the filesystem.
    """
    segments: Tuple[Segment, ...] = ()
    is_top_level: bool = False
    children: Dict[str, "Group"] = field(default_factory=dict)
    leaves: List[RouteLeaf] = field(default_factory=list)
    middleware_names: List[str] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.segments[-1].name if self.segments else ""

    @property
    def source_package_path(self) -> str:
        return "/".join(s.name for s in self.segments)

    @property
    def route_path(self) -> str:
        """Absolute URL pattern of this directory."""
        return "/" + "/".join(s.url_part for s in self.segments)

    @property
    def relative_route_path(self) -> str:
        """URL pattern below the owning top-level group ("" for the group itself)."""
        return "".join("/" + s.url_part for s in self.segments[1:])

    def walk(self) -> Iterator["Group"]:
        """Pre-order traversal: this node, then each child subtree in order."""
        yield self
        for child in self.children.values():
            yield from child.walk()


@dataclass
class RouteTree:
    """
    Result of scanning an API root.

    Attributes:
        root: Group for the API root itself (no segments).
        top_level_groups: Immediate children of the root, in tree order.
        leaf_groups: Every group holding at least one handler, in traversal order.
    """
    root: Group
    top_level_groups: List[Group] = field(default_factory=list)
    leaf_groups: List[Group] = field(default_factory=list)

    @property
    def route_count(self) -> int:
        return sum(len(g.leaves) for g in self.leaf_groups)

    def top_level_names(self) -> List[str]:
        return [g.name for g in self.top_level_groups]

    def group_for(self, name: str) -> Optional[Group]:
        return self.root.children.get(name)


# -----------------------------------------------------------------------------
# MIDDLEWARE PLAN
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class MiddlewarePlan:
    """
    Ordered middleware attachment plan.

    Attributes:
        global_names: Attached to the root router, in wrapping order.
        per_group: Top-level group name to names attached to its subrouter.
        warnings: Rules that were ignored because their group is missing.
    """
    global_names: Tuple[str, ...] = ()
    per_group: Dict[str, Tuple[str, ...]] = field(default_factory=dict)
    warnings: Tuple[MiddlewareReferenceWarning, ...] = ()

    def for_group(self, name: str) -> Tuple[str, ...]:
        return self.per_group.get(name, ())
