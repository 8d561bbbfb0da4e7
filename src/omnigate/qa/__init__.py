# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""QA ledger of gate decisions (true/false accept/reject)."""

from omnigate.qa.expectations import ExpectationTable, GroundTruthOracle
from omnigate.qa.models import GateRecord, QAMetrics, gate_key
from omnigate.qa.verifier import QAVerifier

__all__ = [
    "ExpectationTable",
    "GateRecord",
    "GroundTruthOracle",
    "QAMetrics",
    "QAVerifier",
    "gate_key",
]
