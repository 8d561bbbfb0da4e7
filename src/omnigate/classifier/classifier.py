# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""ProblemClassifier: maps problems to graph nodes and submits them.

``classify`` is a pure function of the declared domain tag and declared
dependency ids. Caller-supplied DomainRules may canonicalize the tag; the
first matching rule wins and an unmatched tag is kept as declared.

``submit`` classifies and inserts into the DependencyGraph, forwarding the
graph's error unchanged.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from omnigate.classifier.models import DomainRule, ProblemDescriptor
from omnigate.graph import DependencyGraph, Node
from omnigate.result import Result

logger = logging.getLogger(__name__)


class ProblemClassifier:
    """Classifies problems and inserts them into a dependency graph.

    Args:
        graph: Graph that ``submit`` inserts into.
        rules: Ordered domain rules; first match wins.
    """

    def __init__(
        self,
        graph: DependencyGraph,
        rules: Sequence[DomainRule] = (),
    ) -> None:
        self._graph = graph
        self._rules: tuple[DomainRule, ...] = tuple(rules)

    @property
    def graph(self) -> DependencyGraph:
        return self._graph

    def resolve_domain(self, tag: str) -> str:
        """Canonical domain for a declared tag."""
        for rule in self._rules:
            if rule.matches(tag):
                return rule.domain
        return tag

    def classify(self, problem: ProblemDescriptor) -> Node:
        """Map a problem descriptor to a Node. Pure; no graph access."""
        return Node(
            node_id=problem.problem_id,
            domain=self.resolve_domain(problem.domain),
            dependencies=problem.dependencies,
            aux_cost=problem.aux_cost,
        )

    def submit(self, problem: ProblemDescriptor) -> Result[str]:
        """Classify then insert into the graph.

        Returns:
            Result with the node id, or the graph's ``CycleError`` /
            ``NotFoundError``.
        """
        node = self.classify(problem)
        inserted = self._graph.insert(node)
        if not inserted.ok:
            return Result.failure(inserted.error)  # type: ignore[arg-type]
        logger.debug("Submitted problem %s as domain %s", node.node_id, node.domain)
        return Result.success(node.node_id)

    def submit_batch(
        self, problems: Iterable[ProblemDescriptor]
    ) -> Result[tuple[str, ...]]:
        """Classify and insert several problems, all-or-nothing."""
        nodes = [self.classify(problem) for problem in problems]
        inserted = self._graph.insert_batch(nodes)
        if not inserted.ok:
            return Result.failure(inserted.error)  # type: ignore[arg-type]
        return Result.success(tuple(node.node_id for node in nodes))


__all__ = ["ProblemClassifier"]
