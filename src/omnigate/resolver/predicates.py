# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Compatibility predicates for the BindingResolver.

A predicate answers ``compatible(domain, target) -> bool``. Domain tags are
opaque: predicates match them exactly or through caller-supplied rules,
never by interpretation.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping

from omnigate.enums import EnumComplexityClass
from omnigate.resolver.models import Target

CompatibilityPredicate = Callable[[str, Target], bool]
ComplexityAccessor = Callable[[Target], EnumComplexityClass]


def accept_all(domain: str, target: Target) -> bool:
    """Every target is compatible with every domain."""
    return True


def domain_match(domain: str, target: Target) -> bool:
    """Compatible iff the target declares the domain (exact match)."""
    return domain in target.domains


def domain_rules(
    rules: Mapping[str, Callable[[str], bool] | Iterable[str]],
    *,
    default: bool = False,
) -> CompatibilityPredicate:
    """Build a predicate from a per-target rule table.

    Args:
        rules: target id -> either a predicate over the domain tag or an
            iterable of accepted domain tags.
        default: Answer for targets without a rule.

    Example:
        >>> pred = domain_rules({"py": {"iaas", "paas"}, "rs": lambda d: d != "ui"})
    """
    table: dict[str, Callable[[str], bool]] = {}
    for target_id, rule in rules.items():
        if callable(rule):
            table[target_id] = rule
        else:
            accepted = frozenset(rule)
            table[target_id] = accepted.__contains__

    def predicate(domain: str, target: Target) -> bool:
        rule = table.get(target.target_id)
        if rule is None:
            return default
        return bool(rule(domain))

    return predicate


__all__ = [
    "CompatibilityPredicate",
    "ComplexityAccessor",
    "accept_all",
    "domain_match",
    "domain_rules",
]
