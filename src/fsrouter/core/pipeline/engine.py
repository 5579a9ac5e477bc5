from __future__ import annotations

"""
Generation pipeline.

Coordinates one generator run:
1. Validates configuration.
2. Scans the handler tree.
3. Resolves middleware against the groups actually found.
4. Renders the Go source in memory.
5. Writes the output file (skipped on dry runs).

Fatal errors are turned into a failed GenerationResult. Since the write is
the last step, a failure at any earlier stage leaves a previously generated
file untouched.
"""

import logging
import os
from typing import Any, Dict, List, Optional, Tuple

from fsrouter.core.analysis.tree_builder import build_route_tree
from fsrouter.core.codegen.emitter import EmitOptions, emit_router_source
from fsrouter.core.codegen.middleware import apply_plan, resolve_middlewares
from fsrouter.core.pipeline.validator import validate_config
from fsrouter.domain.errors import GenerationError
from fsrouter.domain.pipeline_models import (
    GenerationResult,
    create_error_result,
    create_success_result,
)
from fsrouter.domain.route_models import MiddlewarePlan, RouteTree
from fsrouter.infra.fs import normalize_path, write_text_atomic

logger = logging.getLogger(__name__)


def run_generation(
        config: Optional[Dict[str, Any]],
        *,
        dry_run: bool = False,
) -> GenerationResult:
    """
    Execute a full generator run.

    Args:
        config: Raw or partial configuration dictionary.
        dry_run: If True, render the source without writing it.

    Returns:
        GenerationResult: Status, counters, warnings and the rendered source.
    """
    logger.info("Route generation started.")
    warnings: List[str] = []
    api_root = ""
    output_path = ""

    try:
        cfg, cfg_warnings = validate_config(config, strict=False)
        for w in cfg_warnings:
            logger.warning(f"Configuration Warning: {w}")
        warnings.extend(cfg_warnings)

        cwd = os.getcwd()
        api_root = normalize_path(cfg["api_root"], cwd)
        output_path = normalize_path(cfg["output_path"], cwd)

        source, tree, plan = generate_source(cfg, api_root)
        warnings.extend(str(w) for w in plan.warnings)

        if dry_run:
            logger.info("Dry run: skipping write.")
        else:
            write_text_atomic(output_path, source)
            logger.info(f"Routes written to {output_path}")

    except GenerationError as e:
        logger.error(f"{e.kind.capitalize()} error: {e}")
        return create_error_result(str(e), e.kind, api_root, output_path, warnings)

    return create_success_result(
        api_root=api_root,
        output_path=output_path,
        source=source,
        route_count=tree.route_count,
        group_count=len(tree.top_level_groups),
        written=not dry_run,
        dry_run=dry_run,
        warnings=warnings,
    )


def generate_source(
        cfg: Dict[str, Any],
        api_root: str,
) -> Tuple[str, RouteTree, MiddlewarePlan]:
    """
    Build, resolve and emit for an already validated configuration.

    Returns:
        Tuple[str, RouteTree, MiddlewarePlan]: Source text and the models
        it was rendered from.

    Raises:
        GenerationError: On any filesystem or structure failure.
    """
    tree = build_route_tree(api_root, cfg["source_extension"])

    plan = resolve_middlewares(
        cfg["global_middlewares"],
        cfg["group_middlewares"],
        tree.top_level_names(),
    )
    apply_plan(tree, plan)

    options = EmitOptions(
        package_name=cfg["package_name"],
        import_prefix=cfg["import_prefix"],
        middleware_package=cfg["middleware_package"],
        not_found_handler=cfg["not_found_handler"],
        not_found_import=cfg["not_found_import"],
    )
    source = emit_router_source(tree, plan, options)
    logger.debug(f"Rendered {len(source.splitlines())} lines for {tree.route_count} routes")
    return source, tree, plan
