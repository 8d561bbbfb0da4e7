# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Complexity budget gate."""

from omnigate.budget.validator import (
    ComplexityBudgetValidator,
    ceiling_bound,
    is_admissible,
)

__all__ = ["ComplexityBudgetValidator", "ceiling_bound", "is_admissible"]
