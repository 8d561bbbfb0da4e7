# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""In-memory executor for unit tests and dry runs.

Production executors live outside the pipeline and only need to satisfy
``ProtocolExecutor``.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from datetime import timedelta

from omnigate.deployment.models import ExecutionReport
from omnigate.resolver import Binding

DEFAULT_LATENCY = timedelta(milliseconds=5)

# ---------------------------------------------------------------------------
# MockExecutor (for unit testing)
# ---------------------------------------------------------------------------


class MockExecutor:
    """Mock executor for unit testing.

    Captures every call so tests can count executions per node.
    Nodes without a configured report pass with ``DEFAULT_LATENCY``.

    Attributes:
        calls: ``(node_id, target_id)`` of each execute call, in order.
        reports: node id -> report to return.
        failures: node id -> exception to raise.
        delay: Seconds to sleep before answering (exercises timeouts).
    """

    def __init__(
        self,
        *,
        reports: Mapping[str, ExecutionReport] | None = None,
        failures: Mapping[str, Exception] | None = None,
        delay: float = 0.0,
    ) -> None:
        self.calls: list[tuple[str, str]] = []
        self.reports: dict[str, ExecutionReport] = dict(reports or {})
        self.failures: dict[str, Exception] = dict(failures or {})
        self.delay = delay

    async def execute(self, binding: Binding) -> ExecutionReport:
        """Record the call, then answer from the configured tables."""
        self.calls.append(binding.key)
        if self.delay:
            await asyncio.sleep(self.delay)
        failure = self.failures.get(binding.node_id)
        if failure is not None:
            raise failure
        report = self.reports.get(binding.node_id)
        if report is None:
            return ExecutionReport(functional_pass=True, latency=DEFAULT_LATENCY)
        return report

    @property
    def call_count(self) -> int:
        return len(self.calls)

    def calls_for(self, node_id: str) -> int:
        """Number of execute calls for ``node_id``."""
        return sum(1 for called, _ in self.calls if called == node_id)


__all__ = ["DEFAULT_LATENCY", "MockExecutor"]
