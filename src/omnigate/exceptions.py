# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Structured error taxonomy for the omnigate pipeline.

Every stage returns its failures as values inside a ``Result`` rather than
raising them. The error types are still ``Exception`` subclasses so callers
that prefer exceptions can ``Result.unwrap()`` and get a typed raise, and so
the executor's own exception can be chained onto ``DeployError``.

Error Codes:
    - GRAPH_001: Cycle in the dependency edge set (mutation rejected)
    - GRAPH_002: Referenced node id is absent
    - GRAPH_003: Removal blocked by dependents
    - RESOLVE_001: No compatible candidate target
    - BUDGET_001: Binding exceeds the complexity ceiling
    - DEPLOY_001: Executor failure (wrapped verbatim)
    - DEPLOY_002: Deployed binding failed functional or latency checks
    - RUN_001: Illegal run state transition
"""

from __future__ import annotations

from collections.abc import Sequence


class OmniGateError(Exception):
    """Base exception for all omnigate pipeline errors.

    Attributes:
        message: Human-readable error description.
        code: Stable error code (e.g., GRAPH_001).

    Example:
        >>> try:
        ...     raise OmniGateError("Something failed", code="TEST_999")
        ... except OmniGateError as e:
        ...     print(f"Error {e.code}: {e.message}")
        Error TEST_999: Something failed
    """

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message


class CycleError(OmniGateError):
    """Raised when an edge set would contain a cycle.

    Recoverable: Yes, by dropping the offending edge or the whole node.

    Attributes:
        cycle: Ids on the cycle in dependency-edge order, rotated so the
            smallest id comes first. A self dependency is a 1-tuple.
    """

    def __init__(self, cycle: Sequence[str]) -> None:
        self.cycle: tuple[str, ...] = tuple(cycle)
        path = " -> ".join((*self.cycle, self.cycle[0])) if self.cycle else ""
        super().__init__(f"Dependency cycle detected: {path}", code="GRAPH_001")


class NotFoundError(OmniGateError):
    """Raised when a referenced node id is absent from the graph.

    Recoverable: No (caller bug, surfaced immediately).

    Attributes:
        node_id: The missing id.
        referenced_by: The node that referenced it, if any.
    """

    def __init__(self, node_id: str, *, referenced_by: str | None = None) -> None:
        self.node_id = node_id
        self.referenced_by = referenced_by
        if referenced_by is None:
            message = f"Node {node_id!r} not found"
        else:
            message = f"Node {node_id!r} (dependency of {referenced_by!r}) not found"
        super().__init__(message, code="GRAPH_002")


class InUseError(OmniGateError):
    """Raised when removing a node that other nodes still depend on.

    Recoverable: Yes, after the dependents are removed first.

    Attributes:
        node_id: The node whose removal was blocked.
        dependents: Sorted ids of the nodes still depending on it.
    """

    def __init__(self, node_id: str, dependents: Sequence[str]) -> None:
        self.node_id = node_id
        self.dependents: tuple[str, ...] = tuple(sorted(dependents))
        super().__init__(
            f"Node {node_id!r} is still required by: {', '.join(self.dependents)}",
            code="GRAPH_003",
        )


class NoCandidateError(OmniGateError):
    """Raised when no candidate target is compatible with a node.

    Recoverable: Yes, by widening the candidate set.

    Attributes:
        node_id: The node that could not be bound.
        candidates: Target ids that were evaluated, in evaluation order.
    """

    def __init__(self, node_id: str, candidates: Sequence[str] = ()) -> None:
        self.node_id = node_id
        self.candidates: tuple[str, ...] = tuple(candidates)
        super().__init__(
            f"No compatible target for node {node_id!r} "
            f"({len(self.candidates)} candidate(s) evaluated)",
            code="RESOLVE_001",
        )


class BudgetExceededError(OmniGateError):
    """Raised when a binding's complexity exceeds the caller's ceiling.

    Never silently downgraded. The caller may pick another candidate or
    relax the ceiling.

    Attributes:
        node_id: Bound node.
        target_id: Bound target.
        complexity_class: The binding's declared class (value string).
        ceiling: The ceiling it was checked against (value string).
        declared_cost: Declared auxiliary cost at the checked input size,
            when the rejection came from the cost check.
        allowed_cost: Cost bound the declared cost exceeded.
    """

    def __init__(
        self,
        *,
        node_id: str,
        target_id: str,
        complexity_class: str,
        ceiling: str,
        declared_cost: float | None = None,
        allowed_cost: float | None = None,
    ) -> None:
        self.node_id = node_id
        self.target_id = target_id
        self.complexity_class = complexity_class
        self.ceiling = ceiling
        self.declared_cost = declared_cost
        self.allowed_cost = allowed_cost
        if declared_cost is None:
            message = (
                f"Binding {node_id!r} -> {target_id!r} is {complexity_class}, "
                f"exceeds ceiling {ceiling}"
            )
        else:
            message = (
                f"Node {node_id!r} declares auxiliary cost {declared_cost:g}, "
                f"exceeds {ceiling} bound {allowed_cost:g}"
            )
        super().__init__(message, code="BUDGET_001")


class DeployError(OmniGateError):
    """Wraps the executor's own failure, propagated verbatim.

    The original exception is kept on ``cause`` and chained as
    ``__cause__``.

    Attributes:
        node_id: Node of the binding being deployed.
        target_id: Target of the binding being deployed.
        cause: The exception raised by the executor.
    """

    def __init__(self, *, node_id: str, target_id: str, cause: BaseException) -> None:
        self.node_id = node_id
        self.target_id = target_id
        self.cause = cause
        super().__init__(
            f"Deployment of {node_id!r} on {target_id!r} failed: "
            f"{type(cause).__name__}: {cause}",
            code="DEPLOY_001",
        )
        self.__cause__ = cause


class VerificationError(OmniGateError):
    """Raised when a deployed binding fails its functional or latency check.

    Attributes:
        node_id: Node of the failing binding.
        target_id: Target of the failing binding.
        functional_pass: Functional outcome from the report.
        latency_ms: Measured latency in milliseconds.
    """

    def __init__(
        self,
        *,
        node_id: str,
        target_id: str,
        functional_pass: bool,
        latency_ms: float,
    ) -> None:
        self.node_id = node_id
        self.target_id = target_id
        self.functional_pass = functional_pass
        self.latency_ms = latency_ms
        if functional_pass:
            reason = "latency over budget"
        else:
            reason = "functional check failed"
        super().__init__(
            f"Verification of {node_id!r} on {target_id!r} failed: {reason} "
            f"(latency {latency_ms:.1f} ms)",
            code="DEPLOY_002",
        )


class InvalidTransitionError(OmniGateError):
    """Raised on an illegal run-state transition.

    Attributes:
        current: State (or description) the subject was in.
        requested: State (or action) that was requested.
    """

    def __init__(self, current: str, requested: str) -> None:
        self.current = current
        self.requested = requested
        super().__init__(
            f"Invalid transition from {current!r} to {requested!r}",
            code="RUN_001",
        )


__all__ = [
    "BudgetExceededError",
    "CycleError",
    "DeployError",
    "InUseError",
    "InvalidTransitionError",
    "NoCandidateError",
    "NotFoundError",
    "OmniGateError",
    "VerificationError",
]
