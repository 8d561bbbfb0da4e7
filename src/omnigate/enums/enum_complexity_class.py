# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Complexity class enumeration with a fixed total order.

The complexity class is a coarse ordinal label bounding a binding's declared
auxiliary-resource cost. The order is fixed:

    constant < logarithmic < linear < polynomial < exponential

Example:
    >>> from omnigate.enums import EnumComplexityClass
    >>> EnumComplexityClass.LINEAR <= EnumComplexityClass.POLYNOMIAL
    True
    >>> EnumComplexityClass.parse("log")
    <EnumComplexityClass.LOGARITHMIC: 'logarithmic'>
"""

from __future__ import annotations

from enum import Enum

# Accepted shorthand spellings (manifests, env vars, CLI flags)
_ALIASES: dict[str, str] = {
    "o(1)": "constant",
    "const": "constant",
    "log": "logarithmic",
    "logn": "logarithmic",
    "o(log n)": "logarithmic",
    "n": "linear",
    "o(n)": "linear",
    "poly": "polynomial",
    "exp": "exponential",
}


class EnumComplexityClass(str, Enum):
    """Closed set of complexity classes, totally ordered by growth rate."""

    CONSTANT = "constant"
    LOGARITHMIC = "logarithmic"
    LINEAR = "linear"
    POLYNOMIAL = "polynomial"
    EXPONENTIAL = "exponential"

    @property
    def rank(self) -> int:
        """Position in the total order (0 = constant)."""
        return _RANKS[self]

    # str would otherwise compare the string values
    def __lt__(self, other: object) -> bool:
        if not isinstance(other, EnumComplexityClass):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, EnumComplexityClass):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, EnumComplexityClass):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, EnumComplexityClass):
            return NotImplemented
        return self.rank >= other.rank

    @classmethod
    def parse(cls, value: str | EnumComplexityClass) -> EnumComplexityClass:
        """Parse an enum member, value, name, or shorthand alias.

        Raises:
            ValueError: If ``value`` names no complexity class.
        """
        if isinstance(value, EnumComplexityClass):
            return value
        normalized = str(value).strip().lower()
        normalized = _ALIASES.get(normalized, normalized)
        try:
            return cls(normalized)
        except ValueError:
            valid = ", ".join(member.value for member in cls)
            msg = f"Unknown complexity class {value!r} (expected one of: {valid})"
            raise ValueError(msg) from None


_RANKS: dict[EnumComplexityClass, int] = {
    member: index for index, member in enumerate(EnumComplexityClass)
}


__all__ = ["EnumComplexityClass"]
