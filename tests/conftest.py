# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT
"""
Pytest configuration and fixtures for omnigate tests.

Shared fixtures for graph, resolver, deployment and pipeline tests.
"""

from __future__ import annotations

import os

import pytest

from omnigate.deployment import MockExecutor
from omnigate.enums import EnumComplexityClass
from omnigate.graph import DependencyGraph
from omnigate.resolver import Target, TargetCatalog

# =========================================================================
# Environment
# =========================================================================


@pytest.fixture(autouse=True)
def _clean_omnigate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep OMNIGATE_* variables from the host out of settings tests."""
    for key in list(os.environ):
        if key.startswith("OMNIGATE_"):
            monkeypatch.delenv(key)


# =========================================================================
# Graph Fixtures
# =========================================================================


@pytest.fixture
def graph() -> DependencyGraph:
    """Empty graph with forward references allowed."""
    return DependencyGraph()


@pytest.fixture
def strict_graph() -> DependencyGraph:
    """Empty graph rejecting unknown dependency ids at insertion."""
    return DependencyGraph(allow_forward_references=False)


@pytest.fixture
def diamond_graph() -> DependencyGraph:
    """A depends on B and C, both depend on D."""
    g = DependencyGraph()
    g.insert_node("D", "iaas").unwrap()
    g.insert_node("B", "iaas", ["D"]).unwrap()
    g.insert_node("C", "paas", ["D"]).unwrap()
    g.insert_node("A", "iaas", ["B", "C"]).unwrap()
    return g


# =========================================================================
# Target Fixtures
# =========================================================================


@pytest.fixture
def py_target() -> Target:
    return Target(
        target_id="py",
        complexity_class=EnumComplexityClass.CONSTANT,
        domains=frozenset({"iaas", "paas"}),
    )


@pytest.fixture
def rs_target() -> Target:
    return Target(
        target_id="rs",
        complexity_class=EnumComplexityClass.LINEAR,
        domains=frozenset({"iaas"}),
    )


@pytest.fixture
def catalog(py_target: Target, rs_target: Target) -> TargetCatalog:
    """Two targets in priority order: py first, rs second."""
    return TargetCatalog([py_target, rs_target])


# =========================================================================
# Deployment Fixtures
# =========================================================================


@pytest.fixture
def mock_executor() -> MockExecutor:
    """Executor passing every binding."""
    return MockExecutor()
