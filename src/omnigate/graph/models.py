# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Node model for the dependency graph."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

# Declared auxiliary-resource cost as a function of input size
AuxCostFn = Callable[[int], float]


def _ordered_unique(ids: Iterable[str]) -> tuple[str, ...]:
    """De-duplicate ids keeping first-seen order."""
    return tuple(dict.fromkeys(ids))


@dataclass(frozen=True)
class Node:
    """A unit of work with an identity, a domain tag, and dependency edges.

    Attributes:
        node_id: Unique id within one graph.
        domain: Opaque domain tag supplied by the caller.
        dependencies: Ids this node requires resolved first. Duplicates are
            dropped, first-seen order kept.
        aux_cost: Optional declared auxiliary cost of input size. Excluded
            from equality so that re-classifying a problem yields an equal
            Node.
    """

    node_id: str
    domain: str
    dependencies: tuple[str, ...] = ()
    aux_cost: AuxCostFn | None = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        if not self.node_id:
            msg = "Node id must be a non-empty string"
            raise ValueError(msg)
        object.__setattr__(self, "dependencies", _ordered_unique(self.dependencies))

    def declared_cost(self, input_size: int) -> float | None:
        """Evaluate the declared auxiliary cost, or None when undeclared."""
        if self.aux_cost is None:
            return None
        return float(self.aux_cost(input_size))


__all__ = ["AuxCostFn", "Node"]
