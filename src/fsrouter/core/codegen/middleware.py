from __future__ import annotations

"""
Middleware Resolver.

Turns the configured global list and per-group mapping into an ordered,
deduplicated attachment plan, and records the per-group names on the
matching top-level groups of the route tree.
"""

import logging
from typing import Dict, Iterable, List, Mapping, Sequence, Tuple

from fsrouter.domain.errors import MiddlewareReferenceWarning
from fsrouter.domain.route_models import MiddlewarePlan, RouteTree

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def resolve_middlewares(
        global_names: Sequence[str],
        group_map: Mapping[str, Sequence[str]],
        top_level_names: Iterable[str],
) -> MiddlewarePlan:
    """
    Build the middleware attachment plan.

    Attachment order is wrapping order, so the first occurrence of each name
    keeps its position. A name may appear both globally and for a group; both
    attachments are kept. Rules for unknown groups are dropped with a warning.

    Args:
        global_names: Middlewares for the root router.
        group_map: Top-level group name to its middlewares.
        top_level_names: Names of the top-level groups present in the tree.

    Returns:
        MiddlewarePlan: Deduplicated plan with any reference warnings.
    """
    known = set(top_level_names)
    per_group: Dict[str, Tuple[str, ...]] = {}
    warnings: List[MiddlewareReferenceWarning] = []

    for group in sorted(group_map):
        names = dedupe_keep_first(group_map[group])
        if group not in known:
            warning = MiddlewareReferenceWarning(group, names)
            logger.warning(str(warning))
            warnings.append(warning)
            continue
        per_group[group] = names

    plan = MiddlewarePlan(
        global_names=dedupe_keep_first(global_names),
        per_group=per_group,
        warnings=tuple(warnings),
    )
    logger.debug(f"Middleware plan: global={list(plan.global_names)} groups={sorted(per_group)}")
    return plan


def apply_plan(tree: RouteTree, plan: MiddlewarePlan) -> None:
    """Copy per-group middleware names onto the top-level groups of the tree."""
    for group in tree.top_level_groups:
        group.middleware_names = list(plan.for_group(group.name))


def dedupe_keep_first(names: Iterable[str]) -> Tuple[str, ...]:
    """Remove repeated names, keeping the first occurrence of each."""
    seen = set()
    out: List[str] = []
    for name in names:
        if name in seen:
            continue
        seen.add(name)
        out.append(name)
    return tuple(out)
