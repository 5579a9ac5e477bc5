from __future__ import annotations

"""
Integration tests for the Generation Engine.

Runs the full validate → scan → resolve → emit → write chain against real
directory trees and checks the resulting file and GenerationResult.
"""

import logging
import os
import stat
from pathlib import Path
from typing import Any, Dict

import pytest

from fsrouter.core.pipeline.engine import run_generation


def test_run_writes_output(base_config: Dict[str, Any]) -> None:
    result = run_generation(base_config)

    assert result.ok, result.error
    assert result.written is True
    assert result.route_count == 5
    assert result.group_count == 3

    out = Path(result.output_path)
    assert out.read_text(encoding="utf-8") == result.source
    assert "func RegisterRoutes() *mux.Router {" in result.source


def test_dry_run_does_not_write(base_config: Dict[str, Any]) -> None:
    result = run_generation(base_config, dry_run=True)

    assert result.ok
    assert result.dry_run is True
    assert result.written is False
    assert not Path(base_config["output_path"]).exists()
    assert result.source.startswith("// Code generated by fsrouter. DO NOT EDIT.")


def test_rerun_is_byte_identical(base_config: Dict[str, Any]) -> None:
    run_generation(base_config)
    first = Path(base_config["output_path"]).read_bytes()

    run_generation(base_config)
    second = Path(base_config["output_path"]).read_bytes()

    assert first == second


def test_structure_error_keeps_previous_output(
        base_config: Dict[str, Any],
        sample_api: Path,
) -> None:
    out = Path(base_config["output_path"])
    out.parent.mkdir(parents=True)
    out.write_text("// previous", encoding="utf-8")
    (sample_api / "users" / "[bad").mkdir()

    result = run_generation(base_config)

    assert result.ok is False
    assert result.error_kind == "structure"
    assert "[bad" in result.error
    assert out.read_text(encoding="utf-8") == "// previous"


def test_missing_api_root(base_config: Dict[str, Any], tmp_path: Path) -> None:
    base_config["api_root"] = str(tmp_path / "nope")

    result = run_generation(base_config)

    assert result.ok is False
    assert result.error_kind == "filesystem"
    assert not Path(base_config["output_path"]).exists()


def test_missing_import_prefix(base_config: Dict[str, Any]) -> None:
    base_config["import_prefix"] = ""

    result = run_generation(base_config)

    assert result.ok is False
    assert result.error_kind == "configuration"


def test_unknown_group_is_a_warning(base_config: Dict[str, Any], caplog) -> None:
    base_config["group_middlewares"] = '{"billing": "auditMiddleware", "users": "authMiddleware"}'

    with caplog.at_level(logging.WARNING):
        result = run_generation(base_config)

    assert result.ok
    assert any("billing" in w for w in result.warnings)
    assert "billing" in caplog.text
    assert "usersRouter.Use(authMiddleware)" in result.source
    assert "auditMiddleware" not in result.source


def test_relative_paths_resolve_against_cwd(
        make_api,
        tmp_path: Path,
        monkeypatch,
) -> None:
    make_api(["ping/get.go"])
    monkeypatch.chdir(tmp_path)

    result = run_generation({"import_prefix": "example.com/app/api"})

    assert result.ok, result.error
    assert Path(result.output_path).resolve() == (tmp_path / "routes_gen.go").resolve()
    assert (tmp_path / "routes_gen.go").exists()
    assert "r.Use(loggingMiddleware)" in result.source


@pytest.mark.skipif(os.name == "nt", reason="POSIX byte file names")
def test_non_utf8_directory_fails_cleanly(base_config: Dict[str, Any], sample_api: Path) -> None:
    raw = os.path.join(os.fsencode(str(sample_api)), b"caf\xe9")
    try:
        os.mkdir(raw)
        with open(os.path.join(raw, b"get.go"), "w", encoding="utf-8") as f:
            f.write("package handler\n")
    except (OSError, ValueError):
        pytest.skip("filesystem rejects non UTF-8 names")

    result = run_generation(base_config)

    assert result.ok is False
    assert result.error_kind == "structure"
    assert "caf\\xe9" in result.error
    assert not Path(base_config["output_path"]).exists()


@pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")
def test_regeneration_keeps_output_permissions(base_config: Dict[str, Any]) -> None:
    out = Path(base_config["output_path"])
    out.parent.mkdir(parents=True)
    out.write_text("// previous", encoding="utf-8")
    out.chmod(0o644)

    result = run_generation(base_config)

    assert result.ok, result.error
    assert stat.S_IMODE(out.stat().st_mode) == 0o644
