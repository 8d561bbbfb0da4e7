# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Execution report returned by deployment executors."""

from __future__ import annotations

from datetime import timedelta
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ExecutionReport(BaseModel):
    """Functional and performance results of one deployment.

    Attributes:
        functional_pass: Whether the deployed binding behaved correctly.
        latency: Measured latency (non-negative).
        detail: Optional free-form description from the executor.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    functional_pass: bool = Field(description="Functional verification outcome")
    latency: timedelta = Field(description="Measured latency")
    detail: str = Field(default="", description="Executor-supplied detail")

    @field_validator("latency")
    @classmethod
    def _non_negative(cls, value: timedelta) -> timedelta:
        if value < timedelta(0):
            msg = "latency must be non-negative"
            raise ValueError(msg)
        return value

    def performance_pass(self, latency_budget: timedelta | None) -> bool:
        """True when no budget is set or latency is within it."""
        return latency_budget is None or self.latency <= latency_budget

    def passed(self, latency_budget: timedelta | None = None) -> bool:
        """Functional and performance checks both pass."""
        return self.functional_pass and self.performance_pass(latency_budget)

    def to_dict(self) -> dict[str, Any]:
        return {
            "functional_pass": self.functional_pass,
            "latency_ms": self.latency.total_seconds() * 1000.0,
            "detail": self.detail,
        }


__all__ = ["ExecutionReport"]
