# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Confusion-matrix buckets for gate decisions."""

from __future__ import annotations

from enum import Enum


class EnumQABucket(str, Enum):
    """Classification of one gate decision against its ground truth.

    Values:
        TRUE_ACCEPT: Valid input accepted.
        TRUE_REJECT: Invalid input rejected.
        FALSE_ACCEPT: Invalid input let through. Must trend to zero.
        FALSE_REJECT: Valid input wrongly blocked. Must trend to zero.
    """

    TRUE_ACCEPT = "true_accept"
    TRUE_REJECT = "true_reject"
    FALSE_ACCEPT = "false_accept"
    FALSE_REJECT = "false_reject"

    @classmethod
    def classify(cls, *, expected: bool, actual: bool) -> EnumQABucket:
        """Map an (expected, actual) decision pair to its bucket."""
        if expected and actual:
            return cls.TRUE_ACCEPT
        if not expected and not actual:
            return cls.TRUE_REJECT
        if actual:
            return cls.FALSE_ACCEPT
        return cls.FALSE_REJECT


__all__ = ["EnumQABucket"]
