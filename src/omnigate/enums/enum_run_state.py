# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Pipeline run states.

A run moves forward through the stages and ends in exactly one terminal
state::

    RECEIVED -> CLASSIFIED -> RESOLVED -> BUDGET_CHECKED -> DEPLOYED -> VERIFIED

Any non-terminal state may move to FAILED. No transition re-enters an
earlier state. A failed run is resubmitted as a new run, never mutated
in place.
"""

from __future__ import annotations

from enum import Enum


class EnumRunState(str, Enum):
    """Lifecycle states of a single pipeline run."""

    RECEIVED = "received"
    CLASSIFIED = "classified"
    RESOLVED = "resolved"
    BUDGET_CHECKED = "budget_checked"
    DEPLOYED = "deployed"
    VERIFIED = "verified"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        """True for VERIFIED and FAILED."""
        return self in (EnumRunState.VERIFIED, EnumRunState.FAILED)


__all__ = ["EnumRunState"]
