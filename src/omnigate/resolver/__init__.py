# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Binding resolution: node to first compatible implementation target."""

from omnigate.resolver.catalog import TargetCatalog
from omnigate.resolver.models import Binding, Target
from omnigate.resolver.predicates import (
    CompatibilityPredicate,
    ComplexityAccessor,
    accept_all,
    domain_match,
    domain_rules,
)
from omnigate.resolver.resolver import BindingResolver, declared_complexity

__all__ = [
    "Binding",
    "BindingResolver",
    "CompatibilityPredicate",
    "ComplexityAccessor",
    "Target",
    "TargetCatalog",
    "accept_all",
    "declared_complexity",
    "domain_match",
    "domain_rules",
]
