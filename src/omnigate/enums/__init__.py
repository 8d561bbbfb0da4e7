# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Enumerations shared across the omnigate pipeline."""

from omnigate.enums.enum_complexity_class import EnumComplexityClass
from omnigate.enums.enum_gate_name import EnumGateName
from omnigate.enums.enum_qa_bucket import EnumQABucket
from omnigate.enums.enum_run_state import EnumRunState

__all__ = [
    "EnumComplexityClass",
    "EnumGateName",
    "EnumQABucket",
    "EnumRunState",
]
