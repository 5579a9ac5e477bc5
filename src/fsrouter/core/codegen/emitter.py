from __future__ import annotations

"""
Go Router Code Emitter.

Renders a RouteTree and a MiddlewarePlan into a gofmt-formatted Go source
file exposing ``RegisterRoutes() *mux.Router``. Every ordering decision is
derived from sorted data, and the file carries no timestamp, so the output
is byte-identical for identical inputs.
"""

import json
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

from fsrouter.core.codegen.identifiers import package_alias, router_variable
from fsrouter.domain.config import ENTRYPOINT_NAME, MIDDLEWARE_ALIAS, ROUTER_IMPORT
from fsrouter.domain.route_models import Group, MiddlewarePlan, RouteTree

GENERATED_HEADER = "// Code generated by fsrouter. DO NOT EDIT."
DEFAULT_NOT_FOUND_FUNC = "defaultNotFoundHandler"
ROOT_ROUTER = "r"

_DEFAULT_NOT_FOUND_BODY = [
    f"func {DEFAULT_NOT_FOUND_FUNC}(w http.ResponseWriter, r *http.Request) {{",
    '\tw.Header().Set("Content-Type", "application/json")',
    "\tw.WriteHeader(http.StatusNotFound)",
    '\t_ = json.NewEncoder(w).Encode(map[string]string{"error": "not found"})',
    "}",
]


@dataclass(frozen=True)
class EmitOptions:
    """
    Target-side settings for the generated file.

    Attributes:
        package_name: Go package clause of the generated file.
        import_prefix: Module path prepended to each handler directory.
        middleware_package: Import path that bare middleware names live in.
        not_found_handler: ``pkg.Symbol`` or ``Symbol``; empty for the default.
        not_found_import: Import path for the not-found handler's package.
    """
    package_name: str
    import_prefix: str
    middleware_package: str = ""
    not_found_handler: str = ""
    not_found_import: str = ""

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def emit_router_source(tree: RouteTree, plan: MiddlewarePlan, options: EmitOptions) -> str:
    """
    Render the complete Go source file.

    Order: header, package clause, imports, router construction, global
    middleware, root-level routes, one block per top-level group (subrouter,
    its middleware, its routes), not-found wiring, return, and the default
    not-found handler when no custom one is configured.

    Args:
        tree: Route tree from the builder.
        plan: Resolved middleware plan.
        options: Package and import settings.

    Returns:
        str: Go source text ending with a newline.
    """
    uses_mw_package = bool(options.middleware_package) and any(
        "." not in name for name in _all_middleware_names(tree, plan)
    )
    groups = [g for g in tree.top_level_groups if _is_emitted(g)]

    lines: List[str] = [GENERATED_HEADER, "", f"package {options.package_name}", ""]
    lines.extend(_render_imports(tree, options, uses_mw_package))
    lines.append("")

    lines.append(f"func {ENTRYPOINT_NAME}() *mux.Router {{")
    lines.append(f"\t{ROOT_ROUTER} := mux.NewRouter()")

    if plan.global_names:
        lines.append("")
        lines.append("\t// Global middleware")
        for name in plan.global_names:
            lines.append(f"\t{ROOT_ROUTER}.Use({_middleware_ref(name, options)})")

    if tree.root.leaves:
        lines.append("")
        lines.append("\t// Root routes")
        lines.extend(_render_routes(ROOT_ROUTER, tree.root, "/"))

    for group in groups:
        lines.append("")
        lines.extend(_render_group(group, options))

    lines.append("")
    lines.append("\t// 404 handler")
    handler = options.not_found_handler or DEFAULT_NOT_FOUND_FUNC
    lines.append(f"\t{ROOT_ROUTER}.NotFoundHandler = http.HandlerFunc({handler})")
    lines.append("")
    lines.append(f"\treturn {ROOT_ROUTER}")
    lines.append("}")

    if not options.not_found_handler:
        lines.append("")
        lines.extend(_DEFAULT_NOT_FOUND_BODY)

    return "\n".join(lines) + "\n"


def handler_import_path(import_prefix: str, source_package_path: str) -> str:
    """Full Go import path of a handler directory."""
    prefix = import_prefix.rstrip("/")
    return f"{prefix}/{source_package_path}" if source_package_path else prefix

# -----------------------------------------------------------------------------
# INTERNAL HELPERS (IMPORTS)
# -----------------------------------------------------------------------------

def _render_imports(tree: RouteTree, options: EmitOptions, uses_mw_package: bool) -> List[str]:
    """Import block as gofmt keeps it: groups separated by blank lines, each sorted."""
    std = ["net/http"]
    if not options.not_found_handler:
        std.append("encoding/json")

    local: List[Tuple[str, str]] = []
    if uses_mw_package:
        local.append((options.middleware_package, MIDDLEWARE_ALIAS))
    if options.not_found_import and "." in options.not_found_handler:
        qualifier = options.not_found_handler.split(".", 1)[0]
        local.append((options.not_found_import, qualifier))

    handlers: Dict[str, str] = {}
    for group in tree.leaf_groups:
        path = handler_import_path(options.import_prefix, group.source_package_path)
        handlers[path] = package_alias(group.segments)

    blocks: List[List[str]] = [
        [_quote(p) for p in sorted(std)],
        [_quote(ROUTER_IMPORT)],
    ]
    if local:
        blocks.append([f"{alias} {_quote(p)}" for p, alias in sorted(local)])
    if handlers:
        blocks.append([f"{handlers[p]} {_quote(p)}" for p in sorted(handlers)])

    lines = ["import ("]
    for i, block in enumerate(blocks):
        if i:
            lines.append("")
        lines.extend(f"\t{spec}" for spec in block)
    lines.append(")")
    return lines

# -----------------------------------------------------------------------------
# INTERNAL HELPERS (ROUTES)
# -----------------------------------------------------------------------------

def _render_group(group: Group, options: EmitOptions) -> List[str]:
    """Subrouter declaration, its middleware, then every route beneath it."""
    var = router_variable(group.segments[0])
    lines = [
        f"\t// Group: {group.route_path}",
        f"\t{var} := {ROOT_ROUTER}.PathPrefix({_quote(group.route_path)}).Subrouter()",
    ]
    for name in group.middleware_names:
        lines.append(f"\t{var}.Use({_middleware_ref(name, options)})")

    for node in group.walk():
        if node.leaves:
            lines.extend(_render_routes(var, node, node.relative_route_path))
    return lines


def _render_routes(router: str, node: Group, pattern: str) -> List[str]:
    alias = package_alias(node.segments)
    return [
        f"\t{router}.HandleFunc({_quote(pattern)}, {alias}.{leaf.exported_symbol})"
        f".Methods({_quote(leaf.method)})"
        for leaf in node.leaves
    ]


def _is_emitted(group: Group) -> bool:
    """A subrouter variable is only declared when something uses it."""
    return bool(group.middleware_names) or any(node.leaves for node in group.walk())

# -----------------------------------------------------------------------------
# INTERNAL HELPERS (MIDDLEWARE)
# -----------------------------------------------------------------------------

def _middleware_ref(name: str, options: EmitOptions) -> str:
    if "." in name or not options.middleware_package:
        return name
    return f"{MIDDLEWARE_ALIAS}.{name}"


def _all_middleware_names(tree: RouteTree, plan: MiddlewarePlan) -> Sequence[str]:
    names = list(plan.global_names)
    for group in tree.top_level_groups:
        names.extend(group.middleware_names)
    return names


def _quote(text: str) -> str:
    """Go interpreted string literal; JSON escaping is a valid subset."""
    return json.dumps(text, ensure_ascii=False)
