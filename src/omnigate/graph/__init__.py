# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Dependency graph with topological ordering and cycle detection."""

from omnigate.graph.dependency_graph import DependencyGraph
from omnigate.graph.locking import ReadWriteLock
from omnigate.graph.models import AuxCostFn, Node

__all__ = [
    "AuxCostFn",
    "DependencyGraph",
    "Node",
    "ReadWriteLock",
]
