# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Ground-truth oracles for gate decisions.

Expected validity is only knowable in tests and simulations. The pipeline
runner asks an oracle ``(node_id, gate_name) -> bool`` for each decision it
records.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from enum import Enum

from omnigate.qa.models import gate_key

GroundTruthOracle = Callable[[str, str], bool]


class ExpectationTable:
    """Table-driven oracle with a default answer.

    Args:
        expectations: ``(node_id, gate_name) -> expected`` entries.
        default: Answer for pairs not in the table.

    Example:
        >>> oracle = ExpectationTable({("n1", "budget"): False})
        >>> oracle("n1", "budget"), oracle("n1", "deploy")
        (False, True)
    """

    def __init__(
        self,
        expectations: Mapping[tuple[str, str], bool] | None = None,
        *,
        default: bool = True,
    ) -> None:
        self._table: dict[tuple[str, str], bool] = dict(expectations or {})
        self._default = default

    def expect(self, node_id: str, gate_name: str | Enum, valid: bool) -> None:
        """Set the expected validity of one (node, gate) decision."""
        self._table[(node_id, gate_key(gate_name))] = valid

    def __call__(self, node_id: str, gate_name: str | Enum) -> bool:
        return self._table.get((node_id, gate_key(gate_name)), self._default)


__all__ = ["ExpectationTable", "GroundTruthOracle"]
