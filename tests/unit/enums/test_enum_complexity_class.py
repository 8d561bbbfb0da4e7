# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Unit tests for the pipeline enumerations.

EnumComplexityClass must order by growth rate, never by string value.
"""

from __future__ import annotations

import pytest

from omnigate.enums import EnumComplexityClass, EnumRunState

# =========================================================================
# Constants
# =========================================================================

EXPECTED_ORDER = [
    "constant",
    "logarithmic",
    "linear",
    "polynomial",
    "exponential",
]


# =========================================================================
# Tests: EnumComplexityClass
# =========================================================================


@pytest.mark.unit
class TestComplexityOrder:
    def test_member_order(self) -> None:
        assert [m.value for m in EnumComplexityClass] == EXPECTED_ORDER

    def test_ranks(self) -> None:
        assert [m.rank for m in EnumComplexityClass] == [0, 1, 2, 3, 4]

    def test_sorted_by_growth_not_alphabet(self) -> None:
        shuffled = [
            EnumComplexityClass.LINEAR,
            EnumComplexityClass.EXPONENTIAL,
            EnumComplexityClass.CONSTANT,
            EnumComplexityClass.POLYNOMIAL,
            EnumComplexityClass.LOGARITHMIC,
        ]
        assert [m.value for m in sorted(shuffled)] == EXPECTED_ORDER

    def test_comparisons(self) -> None:
        assert EnumComplexityClass.LINEAR < EnumComplexityClass.POLYNOMIAL
        assert EnumComplexityClass.EXPONENTIAL > EnumComplexityClass.LINEAR
        assert EnumComplexityClass.LINEAR <= EnumComplexityClass.LINEAR
        assert EnumComplexityClass.CONSTANT >= EnumComplexityClass.CONSTANT
        assert max(EnumComplexityClass) is EnumComplexityClass.EXPONENTIAL


@pytest.mark.unit
class TestComplexityParse:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("constant", EnumComplexityClass.CONSTANT),
            ("  Linear ", EnumComplexityClass.LINEAR),
            ("O(1)", EnumComplexityClass.CONSTANT),
            ("log", EnumComplexityClass.LOGARITHMIC),
            ("o(n)", EnumComplexityClass.LINEAR),
            ("poly", EnumComplexityClass.POLYNOMIAL),
            ("exp", EnumComplexityClass.EXPONENTIAL),
            (EnumComplexityClass.LINEAR, EnumComplexityClass.LINEAR),
        ],
    )
    def test_parse(self, raw: str, expected: EnumComplexityClass) -> None:
        assert EnumComplexityClass.parse(raw) is expected

    def test_unknown_rejected(self) -> None:
        with pytest.raises(ValueError, match="Unknown complexity class"):
            EnumComplexityClass.parse("quadratic-ish")


# =========================================================================
# Tests: EnumRunState
# =========================================================================


@pytest.mark.unit
def test_terminal_run_states() -> None:
    terminal = {state for state in EnumRunState if state.is_terminal}
    assert terminal == {EnumRunState.VERIFIED, EnumRunState.FAILED}
