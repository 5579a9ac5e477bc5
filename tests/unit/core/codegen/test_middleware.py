from __future__ import annotations

"""
Unit tests for the Middleware Resolver.

Verifies:
1. Keep-first deduplication and order preservation.
2. Independence of global and group lists.
3. Warnings for rules naming missing groups.
"""

import logging
from pathlib import Path

from fsrouter.core.analysis.tree_builder import build_route_tree
from fsrouter.core.codegen.middleware import apply_plan, dedupe_keep_first, resolve_middlewares
from fsrouter.domain.errors import MiddlewareReferenceWarning


def test_dedupe_keeps_first_occurrence() -> None:
    assert dedupe_keep_first(["A", "A", "B"]) == ("A", "B")
    assert dedupe_keep_first(["B", "A", "B", "C", "A"]) == ("B", "A", "C")
    assert dedupe_keep_first([]) == ()


def test_global_order_is_preserved() -> None:
    plan = resolve_middlewares(["A", "A", "B"], {}, [])

    assert plan.global_names == ("A", "B")


def test_group_lists_are_independent_of_global() -> None:
    plan = resolve_middlewares(
        ["logging", "auth"],
        {"users": ["auth", "auth", "rateLimit"]},
        ["users"],
    )

    assert plan.global_names == ("logging", "auth")
    assert plan.for_group("users") == ("auth", "rateLimit")
    assert plan.warnings == ()


def test_unknown_group_is_warning_not_error(caplog) -> None:
    with caplog.at_level(logging.WARNING):
        plan = resolve_middlewares([], {"admin": ["adminAuth"], "users": ["auth"]}, ["users"])

    assert "admin" not in plan.per_group
    assert plan.for_group("users") == ("auth",)
    assert len(plan.warnings) == 1
    assert isinstance(plan.warnings[0], MiddlewareReferenceWarning)
    assert plan.warnings[0].group == "admin"
    assert "admin" in caplog.text


def test_apply_plan_sets_top_level_groups(make_api) -> None:
    root: Path = make_api(["users/get.go", "billing/"])
    tree = build_route_tree(str(root))

    plan = resolve_middlewares([], {"billing": ["audit"]}, tree.top_level_names())
    apply_plan(tree, plan)

    assert tree.group_for("billing").middleware_names == ["audit"]
    assert tree.group_for("users").middleware_names == []
