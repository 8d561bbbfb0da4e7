# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Per-run state machine.

Transitions:
    RECEIVED -> CLASSIFIED -> RESOLVED -> BUDGET_CHECKED -> DEPLOYED -> VERIFIED
    any non-terminal state -> FAILED

Terminal states never transition. No transition re-enters an earlier state;
a failed run is resubmitted as a new run.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field

from omnigate.enums import EnumRunState
from omnigate.exceptions import InvalidTransitionError, OmniGateError
from omnigate.result import Result

_TRANSITIONS: dict[EnumRunState, frozenset[EnumRunState]] = {
    EnumRunState.RECEIVED: frozenset({EnumRunState.CLASSIFIED, EnumRunState.FAILED}),
    EnumRunState.CLASSIFIED: frozenset({EnumRunState.RESOLVED, EnumRunState.FAILED}),
    EnumRunState.RESOLVED: frozenset(
        {EnumRunState.BUDGET_CHECKED, EnumRunState.FAILED}
    ),
    EnumRunState.BUDGET_CHECKED: frozenset(
        {EnumRunState.DEPLOYED, EnumRunState.FAILED}
    ),
    EnumRunState.DEPLOYED: frozenset({EnumRunState.VERIFIED, EnumRunState.FAILED}),
    EnumRunState.VERIFIED: frozenset(),
    EnumRunState.FAILED: frozenset(),
}


@dataclass
class PipelineRun:
    """Mutable lifecycle record of one submitted problem.

    Attributes:
        root_id: Id of the submitted problem (root node).
        run_id: Correlation id for logs.
        state: Current state.
        history: Every state entered, in order (starts with RECEIVED).
        error: The error that failed the run, if any.
    """

    root_id: str
    run_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    state: EnumRunState = EnumRunState.RECEIVED
    history: list[EnumRunState] = field(
        default_factory=lambda: [EnumRunState.RECEIVED]
    )
    error: OmniGateError | None = None

    @property
    def is_terminal(self) -> bool:
        return self.state.is_terminal

    def can_transition(self, target: EnumRunState) -> bool:
        return target in _TRANSITIONS[self.state]

    def advance(self, target: EnumRunState) -> Result[EnumRunState]:
        """Move to ``target`` if the transition is legal.

        Returns:
            Result with the new state, or ``InvalidTransitionError`` (the
            run is left unchanged).
        """
        if not self.can_transition(target):
            return Result.failure(
                InvalidTransitionError(self.state.value, target.value)
            )
        self.state = target
        self.history.append(target)
        return Result.success(target)

    def fail(self, error: OmniGateError) -> Result[EnumRunState]:
        """Move to FAILED recording ``error``."""
        moved = self.advance(EnumRunState.FAILED)
        if moved.ok:
            self.error = error
        return moved


__all__ = ["PipelineRun"]
