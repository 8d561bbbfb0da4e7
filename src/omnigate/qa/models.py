# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Data models for the QA ledger.

GateRecord is one immutable ledger entry per gate decision. QAMetrics is the
four-bucket confusion matrix over all recorded decisions.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from omnigate.enums import EnumQABucket


def gate_key(gate_name: str | Enum) -> str:
    """Plain string form of a gate name (enum members map to their value)."""
    if isinstance(gate_name, Enum):
        return str(gate_name.value)
    return gate_name


@dataclass(frozen=True)
class GateRecord:
    """One gate decision, classified against its ground truth.

    Attributes:
        node_id: Node the decision was about.
        gate_name: Gate that decided (e.g. ``"budget"``).
        expected: Ground-truth validity (known in tests/simulation).
        actual: The gate's decision (True = accept).
        ordinal: Monotonic position in the ledger, starting at 1.
        bucket: Confusion-matrix bucket derived from expected/actual.
        failure_code: Error code of the rejecting error, if any.
        recorded_at: Wall-clock time of the append.
    """

    node_id: str
    gate_name: str
    expected: bool
    actual: bool
    ordinal: int
    bucket: EnumQABucket
    recorded_at: datetime
    failure_code: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize for audit export."""
        return {
            "node_id": self.node_id,
            "gate_name": self.gate_name,
            "expected": self.expected,
            "actual": self.actual,
            "ordinal": self.ordinal,
            "bucket": self.bucket.value,
            "failure_code": self.failure_code,
            "recorded_at": self.recorded_at.isoformat(),
        }


@dataclass(frozen=True)
class QAMetrics:
    """Confusion-matrix counts over recorded gate decisions."""

    true_accept: int = 0
    true_reject: int = 0
    false_accept: int = 0
    false_reject: int = 0

    @property
    def total(self) -> int:
        return self.true_accept + self.true_reject + self.false_accept + self.false_reject

    @property
    def accuracy(self) -> float:
        """Fraction of correct decisions; 1.0 when nothing was recorded."""
        if self.total == 0:
            return 1.0
        return (self.true_accept + self.true_reject) / self.total

    @property
    def false_accept_rate(self) -> float:
        """False accepts over all invalid inputs (0.0 if none)."""
        negatives = self.true_reject + self.false_accept
        return self.false_accept / negatives if negatives else 0.0

    @property
    def false_reject_rate(self) -> float:
        """False rejects over all valid inputs (0.0 if none)."""
        positives = self.true_accept + self.false_reject
        return self.false_reject / positives if positives else 0.0

    def as_tuple(self) -> tuple[int, int, int, int]:
        """(true_accept, true_reject, false_accept, false_reject)."""
        return (self.true_accept, self.true_reject, self.false_accept, self.false_reject)

    def to_dict(self) -> dict[str, Any]:
        return {
            "true_accept": self.true_accept,
            "true_reject": self.true_reject,
            "false_accept": self.false_accept,
            "false_reject": self.false_reject,
            "total": self.total,
            "accuracy": self.accuracy,
        }


__all__ = ["GateRecord", "QAMetrics", "gate_key"]
