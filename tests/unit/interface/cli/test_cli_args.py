from __future__ import annotations

"""
Unit tests for CLI Argument Parsing.

Verifies:
1. Long flags and go:generate style single-dash flags map to the same keys.
2. CSV parsing of the global middleware list.
3. Unset flags map to None so the merge keeps lower-priority values.
"""

from fsrouter.interface.cli.app import _merge_config
from fsrouter.interface.cli.args import args_to_overrides, build_parser


def parse_args(arg_list):
    """Helper to simulate CLI argument parsing."""
    parser = build_parser()
    return parser.parse_args(arg_list)


def test_go_generate_style_flags() -> None:
    args = parse_args([
        "-api=./api",
        "-out=routes_gen.go",
        "-pkg=main",
        "-importPREFIX=yourmodule/api",
        "-middleware=yourmodule/middleware",
        "-middlewares=loggingMiddleware,authMiddleware,corsMiddleware",
        '-groupMiddlewares={"users":"authMiddleware"}',
        "-notFound=customHandlers.NotFound",
    ])

    overrides = args_to_overrides(args)

    assert overrides["api_root"] == "./api"
    assert overrides["output_path"] == "routes_gen.go"
    assert overrides["package_name"] == "main"
    assert overrides["import_prefix"] == "yourmodule/api"
    assert overrides["middleware_package"] == "yourmodule/middleware"
    assert overrides["global_middlewares"] == ["loggingMiddleware", "authMiddleware", "corsMiddleware"]
    assert overrides["group_middlewares"] == '{"users":"authMiddleware"}'
    assert overrides["not_found_handler"] == "customHandlers.NotFound"


def test_long_flags() -> None:
    args = parse_args([
        "--api", "handlers",
        "--import-prefix", "example.com/handlers",
        "--not-found-import", "example.com/errors",
        "--ext", ".go",
    ])

    overrides = args_to_overrides(args)

    assert overrides["api_root"] == "handlers"
    assert overrides["import_prefix"] == "example.com/handlers"
    assert overrides["not_found_import"] == "example.com/errors"
    assert overrides["source_extension"] == ".go"


def test_empty_middlewares_flag_disables_globals() -> None:
    overrides = args_to_overrides(parse_args(["-middlewares="]))

    assert overrides["global_middlewares"] == []


def test_unset_flags_are_none() -> None:
    overrides = args_to_overrides(parse_args([]))

    assert overrides["api_root"] is None
    assert overrides["global_middlewares"] is None
    assert overrides["group_middlewares"] is None


def test_runtime_flags() -> None:
    args = parse_args(["--dry-run", "--json", "--debug", "--config", "fsrouter.json"])

    assert args.dry_run is True
    assert args.json_output is True
    assert args.debug is True
    assert args.config_file == "fsrouter.json"


def test_merge_prefers_overrides_and_skips_none() -> None:
    base = {"api_root": "from_file", "package_name": "routes"}
    overrides = {"api_root": "from_cli", "package_name": None, "unknown": "x"}

    merged = _merge_config(base, overrides)

    assert merged == {"api_root": "from_cli", "package_name": "routes"}
