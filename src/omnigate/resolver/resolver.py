# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""BindingResolver: binds a classified node to the first compatible target.

Selection Rule:
    Candidates are evaluated in caller order (order encodes priority, e.g.
    preferred languages first). The first candidate for which the
    compatibility predicate holds is selected. Later candidates are never
    preferred, even if "better" by some external metric: the rule is
    deterministic, O(number of candidates), and needs no scoring model.

Independence from the budget gate:
    The resolver does not look at complexity ceilings. A compatible but too
    expensive first candidate is still returned here and rejected by the
    ComplexityBudgetValidator; the caller then drops it from the candidate
    list and resolves again.

Resolution is pure: it never mutates the graph, and re-resolving the same
node against the same candidates yields an equal Binding.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from omnigate.enums import EnumComplexityClass
from omnigate.exceptions import NoCandidateError
from omnigate.graph import Node
from omnigate.resolver.models import Binding, Target
from omnigate.resolver.predicates import (
    CompatibilityPredicate,
    ComplexityAccessor,
    accept_all,
)
from omnigate.result import Result

logger = logging.getLogger(__name__)


def declared_complexity(target: Target) -> EnumComplexityClass:
    """Default complexity accessor: the target's declared class."""
    return target.complexity_class


class BindingResolver:
    """Selects the first compatible candidate target for a node.

    Args:
        compatible: Caller predicate ``(domain, target) -> bool``. Defaults
            to accepting every target.
        complexity_of: Accessor for a target's complexity class. Defaults to
            the target's declared class.
    """

    def __init__(
        self,
        *,
        compatible: CompatibilityPredicate = accept_all,
        complexity_of: ComplexityAccessor = declared_complexity,
    ) -> None:
        self._compatible = compatible
        self._complexity_of = complexity_of

    def resolve(self, node: Node, candidates: Sequence[Target]) -> Result[Binding]:
        """Bind ``node`` to the first compatible candidate.

        Args:
            node: Classified node to bind.
            candidates: Targets in priority order.

        Returns:
            Result with the Binding, or ``NoCandidateError`` if no candidate
            is compatible (including an empty candidate list).
        """
        evaluated: list[str] = []
        for target in candidates:
            evaluated.append(target.target_id)
            if not self._compatible(node.domain, target):
                continue
            binding = Binding(
                node=node,
                target_id=target.target_id,
                compatible=True,
                complexity_class=self._complexity_of(target),
            )
            logger.debug(
                "Resolved node %s -> %s (%s, candidate %d of %d)",
                node.node_id,
                target.target_id,
                binding.complexity_class.value,
                len(evaluated),
                len(candidates),
            )
            return Result.success(binding)

        logger.info(
            "No compatible target for node %s (domain=%s, candidates=%s)",
            node.node_id,
            node.domain,
            evaluated,
        )
        return Result.failure(NoCandidateError(node.node_id, evaluated))


__all__ = ["BindingResolver", "declared_complexity"]
