from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema and translates the parsed namespace into
configuration overrides. Each generator option accepts both a GNU-style
long flag and the single-dash spelling used in ``//go:generate`` lines,
e.g. ``--import-prefix=x`` and ``-importPREFIX=x``.
"""

import argparse
from typing import Any, Dict, List, Optional

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the fsrouter CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="fsrouter",
        description="Generate gorilla/mux route registration code from an api/ directory tree.",
        allow_abbrev=False,
    )

    # --- Paths ---
    p.add_argument(
        "--api", "-api",
        dest="api_root",
        default=None,
        help="Directory of API handlers (default: api).",
    )
    p.add_argument(
        "--out", "-out",
        dest="output_path",
        default=None,
        help="Output file path (default: routes_gen.go).",
    )

    # --- Generated package ---
    p.add_argument(
        "--pkg", "-pkg",
        dest="package_name",
        default=None,
        help="Package name for the generated file (default: main).",
    )
    p.add_argument(
        "--import-prefix", "-importPREFIX",
        dest="import_prefix",
        default=None,
        help="Import path prefix for API handler packages (required).",
    )
    p.add_argument(
        "--ext",
        dest="source_extension",
        default=None,
        help="Handler file extension (default: .go).",
    )

    # --- Middleware ---
    p.add_argument(
        "--middleware", "-middleware",
        dest="middleware_package",
        default=None,
        help="Import path of the package holding middleware functions.",
    )
    p.add_argument(
        "--middlewares", "-middlewares",
        dest="global_middlewares",
        default=None,
        help="Comma-separated global middlewares (default: loggingMiddleware).",
    )
    p.add_argument(
        "--group-middlewares", "-groupMiddlewares",
        dest="group_middlewares",
        default=None,
        help='JSON mapping of group to middlewares, e.g. {"users":"auth,rateLimit"}.',
    )

    # --- 404 handling ---
    p.add_argument(
        "--not-found", "-notFound",
        dest="not_found_handler",
        default=None,
        help="Custom 404 handler (package.Handler). Default: built-in JSON handler.",
    )
    p.add_argument(
        "--not-found-import",
        dest="not_found_import",
        default=None,
        help="Import path of the custom 404 handler's package.",
    )

    # --- Runtime ---
    p.add_argument(
        "--config",
        dest="config_file",
        default=None,
        help="JSON configuration file; command-line flags take precedence.",
    )
    p.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the generated source instead of writing it.",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the effective configuration as JSON and exit.",
    )
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the run summary as JSON.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write logs to this file.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into configuration overrides.

    Flags that were not given map to None so the merge step can keep the
    value from the config file or defaults.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides.
    """
    overrides: Dict[str, Any] = {
        "api_root": args.api_root,
        "output_path": args.output_path,
        "package_name": args.package_name,
        "import_prefix": args.import_prefix,
        "source_extension": args.source_extension,
        "middleware_package": args.middleware_package,
        "not_found_handler": args.not_found_handler,
        "not_found_import": args.not_found_import,
        # JSON text; decoded by the validator
        "group_middlewares": args.group_middlewares,
    }

    # An explicit empty value disables the default global middleware
    if args.global_middlewares is not None:
        overrides["global_middlewares"] = _split_csv(args.global_middlewares)
    else:
        overrides["global_middlewares"] = None

    return overrides

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _split_csv(value: Optional[str]) -> Optional[List[str]]:
    """Convert a comma-separated string into a list of trimmed, non-empty items."""
    if value is None:
        return None
    parts = [x.strip() for x in value.split(",")]
    return [x for x in parts if x]
