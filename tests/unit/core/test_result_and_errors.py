# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Unit tests for Result and the error taxonomy."""

from __future__ import annotations

import pytest

from omnigate.exceptions import (
    BudgetExceededError,
    CycleError,
    DeployError,
    InUseError,
    InvalidTransitionError,
    NoCandidateError,
    NotFoundError,
    OmniGateError,
    VerificationError,
)
from omnigate.result import Result

# ---------------------------------------------------------------------------
# Result
# ---------------------------------------------------------------------------


@pytest.mark.unit
class TestResult:
    def test_success(self) -> None:
        result = Result.success(3)
        assert result.ok
        assert bool(result)
        assert result.unwrap() == 3
        assert result.error_as(CycleError) is None
        assert str(result) == "Result(OK: 3)"

    def test_success_without_payload(self) -> None:
        assert Result.success().ok

    def test_failure(self) -> None:
        error = NotFoundError("A")
        result: Result[int] = Result.failure(error)

        assert not result.ok
        assert not result
        assert result.value is None
        assert result.error_as(NotFoundError) is error
        assert result.error_as(OmniGateError) is error
        assert result.error_as(CycleError) is None
        assert str(result).startswith("Result(ERR GRAPH_002")

    def test_unwrap_raises_carried_error(self) -> None:
        error = CycleError(("A", "B"))
        with pytest.raises(CycleError) as exc_info:
            Result.failure(error).unwrap()
        assert exc_info.value is error


# ---------------------------------------------------------------------------
# Error codes and messages
# ---------------------------------------------------------------------------


@pytest.mark.unit
class TestErrors:
    @pytest.mark.parametrize(
        ("error", "code"),
        [
            (CycleError(("A",)), "GRAPH_001"),
            (NotFoundError("A"), "GRAPH_002"),
            (InUseError("A", ["B"]), "GRAPH_003"),
            (NoCandidateError("A"), "RESOLVE_001"),
            (
                BudgetExceededError(
                    node_id="A",
                    target_id="py",
                    complexity_class="linear",
                    ceiling="constant",
                ),
                "BUDGET_001",
            ),
            (
                DeployError(node_id="A", target_id="py", cause=OSError("x")),
                "DEPLOY_001",
            ),
            (
                VerificationError(
                    node_id="A", target_id="py", functional_pass=False, latency_ms=1.0
                ),
                "DEPLOY_002",
            ),
            (InvalidTransitionError("received", "verified"), "RUN_001"),
        ],
    )
    def test_codes(self, error: OmniGateError, code: str) -> None:
        assert error.code == code
        assert isinstance(error, OmniGateError)
        assert str(error) == error.message

    def test_cycle_message_closes_loop(self) -> None:
        error = CycleError(("X", "Y"))
        assert error.cycle == ("X", "Y")
        assert "X -> Y -> X" in error.message

    def test_self_cycle(self) -> None:
        assert "A -> A" in CycleError(("A",)).message

    def test_not_found_mentions_referrer(self) -> None:
        error = NotFoundError("B", referenced_by="A")
        assert error.referenced_by == "A"
        assert "dependency of 'A'" in error.message

    def test_in_use_dependents_sorted(self) -> None:
        assert InUseError("D", ["C", "B"]).dependents == ("B", "C")

    def test_no_candidate_counts_evaluated(self) -> None:
        error = NoCandidateError("A", ["py", "rs"])
        assert error.candidates == ("py", "rs")
        assert "2 candidate(s)" in error.message

    def test_budget_message_for_declared_cost(self) -> None:
        error = BudgetExceededError(
            node_id="A",
            target_id="py",
            complexity_class="constant",
            ceiling="linear",
            declared_cost=400.0,
            allowed_cost=20.0,
        )
        assert "declares auxiliary cost 400" in error.message

    def test_deploy_error_chains_cause(self) -> None:
        cause = TimeoutError("slow")
        error = DeployError(node_id="A", target_id="py", cause=cause)
        assert error.__cause__ is cause
        assert "TimeoutError: slow" in error.message

    def test_verification_reason(self) -> None:
        slow = VerificationError(
            node_id="A", target_id="py", functional_pass=True, latency_ms=12.0
        )
        assert "latency over budget" in slow.message
