# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Protocol for the externally supplied deployment executor.

The executor performs the side-effecting work of running a binding on its
target. It lives outside the pipeline core; the DeploymentGate depends on
this protocol only.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from omnigate.deployment.models import ExecutionReport
from omnigate.resolver import Binding


@runtime_checkable
class ProtocolExecutor(Protocol):
    """Executes a validated binding and reports the result.

    Implementations raise on failure; the gate wraps the exception in a
    ``DeployError`` without altering it. Implementations must tolerate
    cancellation (``asyncio.CancelledError``) at any await point.
    """

    async def execute(self, binding: Binding) -> ExecutionReport:
        """Run ``binding`` and return its functional/performance report."""
        ...


__all__ = ["ProtocolExecutor"]
