# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Result value distinguishing success from a specific error kind.

Stages return ``Result`` instead of raising for expected failures (cycles,
missing nodes, rejected bindings). Callers branch on ``ok`` and inspect the
typed ``error``; ``unwrap()`` converts back to exception style.

Example:
    >>> from omnigate.result import Result
    >>> Result.success(3).unwrap()
    3
    >>> Result.success(3).ok
    True
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from omnigate.exceptions import OmniGateError

T = TypeVar("T")
E = TypeVar("E", bound=OmniGateError)


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of a pipeline operation.

    Exactly one of ``value`` / ``error`` is meaningful: ``error`` is None on
    success. ``value`` may legitimately be None for operations without a
    payload.

    Attributes:
        value: The success payload.
        error: The structured error, or None on success.
    """

    value: T | None = None
    error: OmniGateError | None = None

    @classmethod
    def success(cls, value: T | None = None) -> Result[T]:
        """Build a successful result."""
        return cls(value=value, error=None)

    @classmethod
    def failure(cls, error: OmniGateError) -> Result[T]:
        """Build a failed result carrying ``error``."""
        return cls(value=None, error=error)

    @property
    def ok(self) -> bool:
        """True when the operation succeeded."""
        return self.error is None

    def unwrap(self) -> T:
        """Return the value, or raise the carried error.

        Raises:
            OmniGateError: The carried error, when the result failed.
        """
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]

    def error_as(self, error_type: type[E]) -> E | None:
        """Return the error if it is an instance of ``error_type``."""
        if isinstance(self.error, error_type):
            return self.error
        return None

    def __bool__(self) -> bool:
        return self.ok

    def __str__(self) -> str:
        if self.error is None:
            return f"Result(OK: {self.value!r})"
        return f"Result(ERR {self.error.code}: {self.error.message})"


__all__ = ["Result"]
