# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""ComplexityBudgetValidator: admits bindings whose complexity fits a ceiling.

A binding is admissible iff its complexity class is <= the ceiling under the
fixed total order constant < logarithmic < linear < polynomial <
exponential. Admissibility is monotone: a binding admissible under
``linear`` is admissible under every larger ceiling.

Declared Cost Check:
    When the bound node declares an auxiliary cost function and the caller
    passes an ``input_size``, the validator also evaluates the declared cost
    at that size and compares it to the ceiling's bound::

        constant     factor
        logarithmic  factor * ceil(log2(n))   (at least factor)
        linear       factor * n
        polynomial   factor * n ** degree
        exponential  unbounded

The validator is pure and deterministic. It never downgrades a binding.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from omnigate.enums import EnumComplexityClass
from omnigate.exceptions import BudgetExceededError
from omnigate.resolver import Binding
from omnigate.result import Result

if TYPE_CHECKING:
    from omnigate.config import OmniGateSettings

logger = logging.getLogger(__name__)


def is_admissible(
    complexity_class: EnumComplexityClass | str,
    ceiling: EnumComplexityClass | str,
) -> bool:
    """True iff ``complexity_class`` does not exceed ``ceiling``.

    Accepts enum members or their string names.
    """
    declared = EnumComplexityClass.parse(complexity_class)
    return declared <= EnumComplexityClass.parse(ceiling)


def ceiling_bound(
    ceiling: EnumComplexityClass | str,
    input_size: int,
    *,
    factor: float = 1.0,
    degree: int = 2,
) -> float:
    """Largest declared cost admitted by ``ceiling`` at ``input_size``.

    Raises:
        ValueError: If ``input_size`` is negative.
    """
    if input_size < 0:
        msg = f"input_size must be >= 0, got {input_size}"
        raise ValueError(msg)
    ceiling = EnumComplexityClass.parse(ceiling)
    if ceiling is EnumComplexityClass.CONSTANT:
        return factor
    if ceiling is EnumComplexityClass.LOGARITHMIC:
        return factor * max(1, math.ceil(math.log2(max(input_size, 1))))
    if ceiling is EnumComplexityClass.LINEAR:
        return factor * input_size
    if ceiling is EnumComplexityClass.POLYNOMIAL:
        return factor * input_size**degree
    return math.inf


class ComplexityBudgetValidator:
    """Checks bindings against a caller-declared complexity ceiling.

    Args:
        cost_factor: Constant factor of the declared-cost bounds.
        polynomial_degree: Exponent of the polynomial declared-cost bound.
    """

    def __init__(self, *, cost_factor: float = 1.0, polynomial_degree: int = 2) -> None:
        if cost_factor <= 0:
            msg = f"cost_factor must be > 0, got {cost_factor}"
            raise ValueError(msg)
        self._cost_factor = cost_factor
        self._polynomial_degree = polynomial_degree

    @classmethod
    def from_settings(cls, settings: OmniGateSettings) -> ComplexityBudgetValidator:
        return cls(
            cost_factor=settings.cost_factor,
            polynomial_degree=settings.polynomial_degree,
        )

    def validate(
        self,
        binding: Binding,
        ceiling: EnumComplexityClass | str,
        *,
        input_size: int | None = None,
    ) -> Result[Binding]:
        """Admit or reject ``binding`` under ``ceiling``.

        Args:
            binding: Binding produced by the resolver.
            ceiling: Maximum admissible complexity class.
            input_size: When given and the node declares an auxiliary cost,
                also check the declared cost at this size.

        Returns:
            Result with the unchanged binding, or ``BudgetExceededError``.
        """
        ceiling = EnumComplexityClass.parse(ceiling)
        if not is_admissible(binding.complexity_class, ceiling):
            error = BudgetExceededError(
                node_id=binding.node_id,
                target_id=binding.target_id,
                complexity_class=binding.complexity_class.value,
                ceiling=ceiling.value,
            )
            logger.info("Budget rejected: %s", error.message)
            return Result.failure(error)

        if input_size is not None:
            declared = binding.node.declared_cost(input_size)
            if declared is not None:
                allowed = ceiling_bound(
                    ceiling,
                    input_size,
                    factor=self._cost_factor,
                    degree=self._polynomial_degree,
                )
                if declared > allowed:
                    error = BudgetExceededError(
                        node_id=binding.node_id,
                        target_id=binding.target_id,
                        complexity_class=binding.complexity_class.value,
                        ceiling=ceiling.value,
                        declared_cost=declared,
                        allowed_cost=allowed,
                    )
                    logger.info("Budget rejected: %s", error.message)
                    return Result.failure(error)

        return Result.success(binding)


__all__ = ["ComplexityBudgetValidator", "ceiling_bound", "is_admissible"]
