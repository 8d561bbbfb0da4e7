# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Names of the pipeline gates whose decisions are recorded in the QA ledger."""

from __future__ import annotations

from enum import Enum


class EnumGateName(str, Enum):
    """Gate identifiers used as ``gate_name`` in GateRecords.

    Callers may record decisions under arbitrary string gate names; these are
    the names the pipeline runner itself uses.
    """

    CLASSIFY = "classify"
    RESOLVE = "resolve"
    BUDGET = "budget"
    DEPLOY = "deploy"


__all__ = ["EnumGateName"]
