from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, merging of configuration
sources (defaults, optional JSON file, command-line overrides), generator
execution, and result rendering. Designed to be invoked from
``//go:generate`` lines.
"""

import json
import sys
from typing import Any, Dict, List, Optional

from fsrouter.core.pipeline.engine import run_generation
from fsrouter.core.pipeline.validator import validate_config
from fsrouter.domain.config import CONFIG_KEYS, load_config_file
from fsrouter.domain.errors import ConfigurationError
from fsrouter.domain.pipeline_models import GenerationResult
from fsrouter.infra.logging import LoggingConfig, configure_logging, get_logger
from fsrouter.interface.cli import args as cli_args

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CONFIG = 2
EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code.
    """
    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Logging bootstrap (console on stderr, stdout stays clean for --dry-run)
    log_level = "DEBUG" if args.debug else "INFO"
    configure_logging(LoggingConfig(level=log_level, console=True, log_file=args.log_file))

    # 3. Configuration hierarchy: file values, then command-line overrides
    try:
        base_conf: Dict[str, Any] = {}
        if args.config_file:
            base_conf = load_config_file(args.config_file)
        raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))

        if args.dump_config:
            clean_conf, _ = validate_config(raw_conf, strict=False)
            print(json.dumps(clean_conf, ensure_ascii=False, indent=2, sort_keys=True))
            return EXIT_OK
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return EXIT_CONFIG

    # 4. Generation phase
    try:
        result = run_generation(raw_conf, dry_run=bool(args.dry_run))
    except KeyboardInterrupt:
        logger.warning("Interrupted; no output was written.")
        return EXIT_INTERRUPTED

    # 5. Output rendering phase
    if args.json_output:
        print(json.dumps(result.summary(), ensure_ascii=False, indent=2))
    elif args.dry_run and result.ok:
        sys.stdout.write(result.source)
    else:
        _print_human_summary(result)

    if result.ok:
        return EXIT_OK
    return EXIT_CONFIG if result.error_kind == ConfigurationError.kind else EXIT_FAILURE

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Shallow-merge override values into the base configuration.

    Only known keys are merged, and None means "not given".
    """
    out = dict(base)
    for k in CONFIG_KEYS:
        if k in overrides and overrides[k] is not None:
            out[k] = overrides[k]
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING (HUMAN READABLE)
# -----------------------------------------------------------------------------

def _print_human_summary(result: GenerationResult) -> None:
    if not result.ok:
        print(f"ERROR: {result.error}", file=sys.stderr)
        return

    print(f"Generated {result.route_count} routes in {result.group_count} groups")
    print(f"Output: {result.output_path}")
    for w in result.warnings:
        print(f"  warning: {w}")

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
