from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Builders for throwaway handler trees under tmp_path.
3. A base generator configuration shared across tests.
"""

import os
import sys
from pathlib import Path
from typing import Any, Callable, Dict, Iterable

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def make_api(tmp_path: Path) -> Callable[[Iterable[str]], Path]:
    """
    Return a builder that materializes a handler tree.

    Entries ending with '/' are created as (possibly empty) directories;
    all others as files with a one-line Go body.
    """
    def _make(entries: Iterable[str], root_name: str = "api") -> Path:
        root = tmp_path / root_name
        root.mkdir(exist_ok=True)
        for entry in entries:
            target = root / entry
            if entry.endswith("/"):
                target.mkdir(parents=True, exist_ok=True)
                continue
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text("package handler\n", encoding="utf-8")
        return root

    return _make


@pytest.fixture
def sample_api(make_api) -> Path:
    """
    Handler tree mirroring the documented example layout.

    Structure:
    /api
      /admin
        /dashboard
          get.go
      /auth
        /login
          post.go
      /users
        get.go
        helpers.go
        /[userId]
          get.go
          post.go
    """
    return make_api([
        "admin/dashboard/get.go",
        "auth/login/post.go",
        "users/get.go",
        "users/helpers.go",
        "users/[userId]/get.go",
        "users/[userId]/post.go",
    ])


@pytest.fixture
def base_config(sample_api: Path, tmp_path: Path) -> Dict[str, Any]:
    """Complete, valid generator configuration pointing at sample_api."""
    return {
        "api_root": str(sample_api),
        "output_path": str(tmp_path / "out" / "routes_gen.go"),
        "package_name": "main",
        "import_prefix": "example.com/app/api",
        "middleware_package": "",
        "global_middlewares": ["loggingMiddleware"],
        "group_middlewares": {},
        "not_found_handler": "",
        "not_found_import": "",
        "source_extension": ".go",
    }
