# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""DependencyGraph: acyclic graph of named nodes with dependency edges.

Owns topological ordering and cycle detection for the pipeline.

Invariants:
    - The edge relation is acyclic at all times. An insertion that would
      close a cycle is rejected atomically (graph unchanged) and reported
      as a ``CycleError`` carrying the cycle.
    - Structural mutation (insert/remove) holds the write lock; ordering
      and queries hold the read lock.

Forward References:
    By default a dependency may name a node that is not inserted yet, so
    nodes can be inserted in any order. Missing dependencies then surface
    from ``topological_order`` as ``NotFoundError``. A graph built with
    ``allow_forward_references=False`` rejects unknown dependency ids at
    insertion time instead.

Batch Policy:
    ``insert_batch`` is all-or-nothing: if the combined edge set of the
    batch and the current graph has a cycle, no node of the batch is
    inserted.
"""

from __future__ import annotations

import heapq
import logging
from collections.abc import Callable, Iterable, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING

from omnigate.exceptions import CycleError, InUseError, NotFoundError, OmniGateError
from omnigate.graph.locking import ReadWriteLock
from omnigate.graph.models import AuxCostFn, Node
from omnigate.result import Result

if TYPE_CHECKING:
    from omnigate.config import OmniGateSettings

logger = logging.getLogger(__name__)

# DFS colouring
_WHITE = 0
_GREY = 1
_BLACK = 2


def _canonical_cycle(cycle: list[str]) -> tuple[str, ...]:
    """Rotate a cycle so that its smallest id comes first."""
    start = cycle.index(min(cycle))
    return tuple(cycle[start:] + cycle[:start])


def _find_cycle(
    starts: Iterable[str],
    deps_of: Callable[[str], tuple[str, ...]],
) -> tuple[str, ...] | None:
    """Iterative DFS along dependency edges looking for a back edge.

    Args:
        starts: Ids to start the search from. Any cycle reachable from
            them is found.
        deps_of: Dependency ids of a node (empty for unknown ids).

    Returns:
        The cycle in dependency-edge order, canonically rotated, or None.
    """
    colour: dict[str, int] = {}
    for start in starts:
        if colour.get(start, _WHITE) != _WHITE:
            continue
        colour[start] = _GREY
        path = [start]
        stack = [iter(deps_of(start))]
        while stack:
            descended = False
            for dep in stack[-1]:
                state = colour.get(dep, _WHITE)
                if state == _GREY:
                    return _canonical_cycle(path[path.index(dep) :])
                if state == _WHITE:
                    colour[dep] = _GREY
                    path.append(dep)
                    stack.append(iter(deps_of(dep)))
                    descended = True
                    break
            if not descended:
                colour[path.pop()] = _BLACK
                stack.pop()
    return None


class DependencyGraph:
    """Directed acyclic graph of pipeline nodes.

    Thread Safety:
        Safe for concurrent use. Mutations are serialized behind a
        writer-preferring readers/writer lock; reads run concurrently.

    Args:
        allow_forward_references: Accept dependency ids not yet present.
    """

    def __init__(self, *, allow_forward_references: bool = True) -> None:
        self._nodes: dict[str, Node] = {}
        # dependency id -> ids of inserted nodes that depend on it
        self._dependents: dict[str, set[str]] = {}
        self._lock = ReadWriteLock()
        self._allow_forward_references = allow_forward_references

    @classmethod
    def from_settings(cls, settings: OmniGateSettings) -> DependencyGraph:
        """Build an empty graph configured from settings."""
        return cls(allow_forward_references=settings.allow_forward_references)

    @property
    def allow_forward_references(self) -> bool:
        return self._allow_forward_references

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def insert_node(
        self,
        node_id: str,
        domain: str,
        deps: Iterable[str] = (),
        *,
        aux_cost: AuxCostFn | None = None,
    ) -> Result[Node]:
        """Insert (or update) a node after checking the edge set for cycles.

        Args:
            node_id: Unique node id. An existing id is replaced.
            domain: Opaque domain tag.
            deps: Ids the node depends on.
            aux_cost: Optional declared auxiliary cost of input size.

        Returns:
            Result with the inserted Node, or ``CycleError`` (or, without
            forward references, ``NotFoundError``). On error the graph is
            unchanged.
        """
        return self.insert(Node(node_id, domain, tuple(deps), aux_cost))

    def insert(self, node: Node) -> Result[Node]:
        """Insert (or update) a prebuilt Node. See ``insert_node``."""
        with self._lock.write():
            error = self._check_staged({node.node_id: node})
            if error is not None:
                logger.info(
                    "Rejected insertion of node %s: %s", node.node_id, error.message
                )
                return Result.failure(error)
            self._commit(node)
        logger.debug(
            "Inserted node %s (domain=%s, deps=%s)",
            node.node_id,
            node.domain,
            list(node.dependencies),
        )
        return Result.success(node)

    def insert_batch(self, nodes: Iterable[Node]) -> Result[tuple[Node, ...]]:
        """Insert several nodes together, all-or-nothing.

        Raises:
            ValueError: If the batch names the same id twice.

        Returns:
            Result with the inserted nodes in the given order, or the first
            error found over the combined edge set. On error no node of the
            batch is inserted.
        """
        batch = tuple(nodes)
        staged: dict[str, Node] = {}
        for node in batch:
            if node.node_id in staged:
                msg = f"Batch contains node id {node.node_id!r} more than once"
                raise ValueError(msg)
            staged[node.node_id] = node

        with self._lock.write():
            error = self._check_staged(staged)
            if error is not None:
                logger.info(
                    "Rejected batch of %d node(s): %s", len(batch), error.message
                )
                return Result.failure(error)
            for node in batch:
                self._commit(node)
        logger.debug("Inserted batch of %d node(s)", len(batch))
        return Result.success(batch)

    def remove_node(self, node_id: str) -> Result[Node]:
        """Remove a node no other node depends on.

        Returns:
            Result with the removed Node, ``NotFoundError`` if absent, or
            ``InUseError`` listing the dependents still referencing it.
        """
        with self._lock.write():
            node = self._nodes.get(node_id)
            if node is None:
                return Result.failure(NotFoundError(node_id))
            dependents = self._dependents.get(node_id)
            if dependents:
                error = InUseError(node_id, dependents)
                logger.info("Rejected removal of node %s: %s", node_id, error.message)
                return Result.failure(error)
            self._unlink(node)
            del self._nodes[node_id]
        logger.debug("Removed node %s", node_id)
        return Result.success(node)

    # ------------------------------------------------------------------
    # Ordering
    # ------------------------------------------------------------------

    def topological_order(self, root_id: str) -> Result[tuple[str, ...]]:
        """Order ``root_id`` and its transitive dependencies.

        Kahn's algorithm over the induced subgraph: every node appears after
        all of its dependencies; ties among ready nodes break by ascending
        id, so repeated calls on an unchanged graph return the same order.

        Returns:
            Result with the ordered ids (root last), ``NotFoundError`` if the
            root or any transitive dependency is absent, or ``CycleError``
            if the induced subgraph cannot be fully consumed.
        """
        with self._lock.read():
            return self._order(root_id)

    def ordered_nodes(self, root_id: str) -> Result[tuple[Node, ...]]:
        """Like ``topological_order`` but returns the nodes themselves.

        Ordering and node lookup happen under one read lock, so every
        returned node carries exactly the dependencies the order was
        computed from.
        """
        with self._lock.read():
            ordered = self._order(root_id)
            if not ordered.ok:
                return Result.failure(ordered.error)  # type: ignore[arg-type]
            ids: tuple[str, ...] = ordered.value  # type: ignore[assignment]
            return Result.success(tuple(self._nodes[nid] for nid in ids))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get(self, node_id: str) -> Node | None:
        """Return the node with ``node_id``, or None."""
        with self._lock.read():
            return self._nodes.get(node_id)

    def node_ids(self) -> tuple[str, ...]:
        """All node ids, sorted."""
        with self._lock.read():
            return tuple(sorted(self._nodes))

    def dependents_of(self, node_id: str) -> tuple[str, ...]:
        """Sorted ids of inserted nodes that depend directly on ``node_id``."""
        with self._lock.read():
            return tuple(sorted(self._dependents.get(node_id, ())))

    def snapshot(self) -> Mapping[str, Node]:
        """Immutable copy of the node mapping.

        Workers can read the snapshot without holding the graph lock; it
        does not reflect later mutations.
        """
        with self._lock.read():
            return MappingProxyType(dict(self._nodes))

    def __contains__(self, node_id: object) -> bool:
        with self._lock.read():
            return node_id in self._nodes

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._nodes)

    # ------------------------------------------------------------------
    # Internal helpers (callers hold the lock)
    # ------------------------------------------------------------------

    def _order(self, root_id: str) -> Result[tuple[str, ...]]:
        if root_id not in self._nodes:
            return Result.failure(NotFoundError(root_id))

        closure: set[str] = {root_id}
        pending = [root_id]
        while pending:
            current = pending.pop()
            for dep in self._nodes[current].dependencies:
                if dep not in self._nodes:
                    return Result.failure(NotFoundError(dep, referenced_by=current))
                if dep not in closure:
                    closure.add(dep)
                    pending.append(dep)

        in_degree = {nid: len(self._nodes[nid].dependencies) for nid in closure}
        successors: dict[str, list[str]] = {nid: [] for nid in closure}
        for nid in closure:
            for dep in self._nodes[nid].dependencies:
                successors[dep].append(nid)

        ready = [nid for nid, degree in in_degree.items() if degree == 0]
        heapq.heapify(ready)
        order: list[str] = []
        while ready:
            current = heapq.heappop(ready)
            order.append(current)
            for successor in successors[current]:
                in_degree[successor] -= 1
                if in_degree[successor] == 0:
                    heapq.heappush(ready, successor)

        if len(order) != len(closure):
            remaining = sorted(closure.difference(order))
            cycle = _find_cycle(remaining, self._existing_deps)
            logger.error(
                "Cycle found while ordering %s; graph invariant was broken",
                root_id,
            )
            return Result.failure(CycleError(cycle or remaining))

        return Result.success(tuple(order))

    def _existing_deps(self, node_id: str) -> tuple[str, ...]:
        node = self._nodes.get(node_id)
        return node.dependencies if node is not None else ()

    def _check_staged(self, staged: Mapping[str, Node]) -> OmniGateError | None:
        """Validate staged nodes against the prospective edge set."""
        if not self._allow_forward_references:
            for node_id in sorted(staged):
                for dep in staged[node_id].dependencies:
                    if dep not in staged and dep not in self._nodes:
                        return NotFoundError(dep, referenced_by=node_id)

        def prospective_deps(node_id: str) -> tuple[str, ...]:
            if node_id in staged:
                return staged[node_id].dependencies
            return self._existing_deps(node_id)

        # The committed graph is acyclic, so any new cycle passes through a
        # staged node and is reachable from it.
        cycle = _find_cycle(sorted(staged), prospective_deps)
        if cycle is not None:
            return CycleError(cycle)
        return None

    def _commit(self, node: Node) -> None:
        previous = self._nodes.get(node.node_id)
        if previous is not None:
            self._unlink(previous)
        self._nodes[node.node_id] = node
        for dep in node.dependencies:
            self._dependents.setdefault(dep, set()).add(node.node_id)

    def _unlink(self, node: Node) -> None:
        for dep in node.dependencies:
            dependents = self._dependents.get(dep)
            if dependents is None:
                continue
            dependents.discard(node.node_id)
            if not dependents:
                del self._dependents[dep]


__all__ = ["DependencyGraph"]
