# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""DeploymentGate: drives execution of validated bindings.

Contract:
    - Each ``deploy`` call invokes the executor exactly once. There are no
      implicit retries; retry policy belongs to the caller, who resubmits
      a fresh run and so makes a fresh ``deploy`` call.
    - An executor exception is propagated as ``DeployError`` wrapping the
      original exception verbatim (``cause`` and ``__cause__``).
    - Cancellation is never swallowed. A caller that abandons the deploy
      (timeout, shutdown) gets ``asyncio.CancelledError``.

The gate keeps no per-binding state, so a cancelled or failed deployment
never blocks a later resubmission. Sharing one in-flight deployment
between concurrent runs is the PipelineRunner's job.

Thread Safety:
    Intended for use from a single event loop.
"""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import TYPE_CHECKING

from omnigate.deployment.models import ExecutionReport
from omnigate.deployment.protocols import ProtocolExecutor
from omnigate.exceptions import DeployError
from omnigate.resolver import Binding
from omnigate.result import Result

if TYPE_CHECKING:
    from omnigate.config import OmniGateSettings

logger = logging.getLogger(__name__)


class DeploymentGate:
    """Invokes an external executor for validated bindings.

    Args:
        latency_budget: Optional latency ceiling used by ``passed``.
    """

    def __init__(self, *, latency_budget: timedelta | None = None) -> None:
        self._latency_budget = latency_budget

    @classmethod
    def from_settings(cls, settings: OmniGateSettings) -> DeploymentGate:
        return cls(latency_budget=settings.latency_budget)

    @property
    def latency_budget(self) -> timedelta | None:
        return self._latency_budget

    async def deploy(
        self,
        binding: Binding,
        executor: ProtocolExecutor,
    ) -> Result[ExecutionReport]:
        """Execute ``binding`` through ``executor`` once.

        Returns:
            Result with the executor's report, or ``DeployError`` wrapping
            an executor failure.

        Raises:
            asyncio.CancelledError: If the caller cancels the deployment.
        """
        logger.debug("Deploying %s on %s", binding.node_id, binding.target_id)
        try:
            report = await executor.execute(binding)
        except Exception as exc:
            error = DeployError(
                node_id=binding.node_id,
                target_id=binding.target_id,
                cause=exc,
            )
            logger.warning("Deployment failed: %s", error.message)
            return Result.failure(error)

        if not isinstance(report, ExecutionReport):
            cause = TypeError(
                f"executor returned {type(report).__name__}, expected ExecutionReport"
            )
            return Result.failure(
                DeployError(
                    node_id=binding.node_id,
                    target_id=binding.target_id,
                    cause=cause,
                )
            )

        logger.debug(
            "Deployed %s on %s: functional_pass=%s latency=%s",
            binding.node_id,
            binding.target_id,
            report.functional_pass,
            report.latency,
        )
        return Result.success(report)

    def passed(self, report: ExecutionReport) -> bool:
        """Functional pass and latency within this gate's budget."""
        return report.passed(self._latency_budget)


__all__ = ["DeploymentGate"]
