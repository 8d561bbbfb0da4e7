# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""QAVerifier: append-only ledger of gate decisions.

Every ``record`` call appends one immutable GateRecord and increments
exactly one of the four buckets, so after N calls the bucket counts sum to
N. The ledger is observational: the pipeline never changes behavior based
on it; test harnesses read ``metrics()`` to assert correctness bounds
(false accepts and false rejects must trend to zero).

Lifetime is the caller's choice: construct one per run or share one for the
process, read it at the end, discard or persist it.
"""

from __future__ import annotations

import logging
import threading
from collections import Counter
from datetime import UTC, datetime
from enum import Enum

from omnigate.enums import EnumQABucket
from omnigate.qa.models import GateRecord, QAMetrics, gate_key

logger = logging.getLogger(__name__)


class QAVerifier:
    """Thread-safe, append-only confusion-matrix ledger."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._records: list[GateRecord] = []
        self._counts: Counter[EnumQABucket] = Counter()

    def record(
        self,
        node_id: str,
        gate_name: str | Enum,
        expected: bool,
        actual: bool,
        *,
        failure_code: str | None = None,
    ) -> GateRecord:
        """Append a gate decision and classify it.

        Args:
            node_id: Node the decision was about.
            gate_name: Gate that made the decision.
            expected: Ground truth (True = input was valid).
            actual: Decision (True = accepted).
            failure_code: Error code of the rejection, if any.

        Returns:
            The appended GateRecord.
        """
        bucket = EnumQABucket.classify(expected=expected, actual=actual)
        with self._lock:
            entry = GateRecord(
                node_id=node_id,
                gate_name=gate_key(gate_name),
                expected=expected,
                actual=actual,
                ordinal=len(self._records) + 1,
                bucket=bucket,
                recorded_at=datetime.now(UTC),
                failure_code=failure_code,
            )
            self._records.append(entry)
            self._counts[bucket] += 1

        if bucket in (EnumQABucket.FALSE_ACCEPT, EnumQABucket.FALSE_REJECT):
            logger.warning(
                "QA %s: node=%s gate=%s failure_code=%s",
                bucket.value,
                node_id,
                entry.gate_name,
                failure_code,
            )
        return entry

    def metrics(self) -> QAMetrics:
        """Current bucket counts."""
        with self._lock:
            return QAMetrics(
                true_accept=self._counts[EnumQABucket.TRUE_ACCEPT],
                true_reject=self._counts[EnumQABucket.TRUE_REJECT],
                false_accept=self._counts[EnumQABucket.FALSE_ACCEPT],
                false_reject=self._counts[EnumQABucket.FALSE_REJECT],
            )

    def records(self) -> tuple[GateRecord, ...]:
        """All records in append order."""
        with self._lock:
            return tuple(self._records)

    def records_for(self, node_id: str) -> tuple[GateRecord, ...]:
        with self._lock:
            return tuple(r for r in self._records if r.node_id == node_id)

    def records_for_gate(self, gate_name: str | Enum) -> tuple[GateRecord, ...]:
        with self._lock:
            return tuple(r for r in self._records if r.gate_name == gate_key(gate_name))

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)


__all__ = ["QAVerifier"]
