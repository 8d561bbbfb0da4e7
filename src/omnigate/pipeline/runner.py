# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""PipelineRunner: drives a problem through every gate.

Control Flow:
    1. Classify and submit the problem (gate ``classify``).
    2. Order the root's transitive dependencies topologically.
    3. Resolve a binding per node, in order (gate ``resolve``).
    4. Budget-check every binding (gate ``budget``).
    5. Deploy every binding, in order, through the executor (gate ``deploy``).
    6. VERIFIED when every report passes; FAILED otherwise.

Fail Fast:
    The first error ends the run in FAILED with that error. Later stages
    are not attempted and no stage recovers from another stage's error.

QA Recording:
    When both a QAVerifier and a ground-truth oracle are configured, every
    gate decision is recorded as ``(node_id, gate, expected, actual)``.
    Without an oracle there is no ground truth and nothing is recorded.

Abandonment:
    A deployment exceeding the timeout is cancelled and the run is returned
    with ``abandoned=True``. It stays in its last state (never VERIFIED or
    FAILED); ledger records written before remain valid. Cancelling the
    run itself cancels its deployment and re-raises ``CancelledError``.

Shared Dependencies:
    Runs that need a binding while its deployment is in flight (e.g.
    concurrent runs from ``run_many``) await that one deployment and
    observe the same outcome. A deployment is forgotten as soon as it
    finishes, fails or is cancelled; a later run, including a resubmission
    after a failure or timeout, deploys the binding again.
"""

from __future__ import annotations

import asyncio
import functools
import logging
from collections import deque
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from omnigate.budget import ComplexityBudgetValidator
from omnigate.classifier import DomainRule, ProblemClassifier, ProblemDescriptor
from omnigate.config import OmniGateSettings
from omnigate.deployment import DeploymentGate, ExecutionReport, ProtocolExecutor
from omnigate.enums import EnumComplexityClass, EnumGateName, EnumRunState
from omnigate.exceptions import OmniGateError, VerificationError
from omnigate.graph import DependencyGraph, Node
from omnigate.pipeline.run import PipelineRun
from omnigate.qa import GroundTruthOracle, QAVerifier
from omnigate.resolver import Binding, BindingResolver, Target, TargetCatalog
from omnigate.result import Result

logger = logging.getLogger(__name__)

CandidateSource = Callable[[Node], Sequence[Target]]


@dataclass(frozen=True)
class PipelinePlan:
    """Resolved and budget-checked bindings for one root, in deploy order."""

    root_id: str
    order: tuple[str, ...]
    bindings: tuple[Binding, ...]
    ceiling: EnumComplexityClass

    def to_dict(self) -> dict[str, object]:
        return {
            "root_id": self.root_id,
            "order": list(self.order),
            "ceiling": self.ceiling.value,
            "bindings": [binding.to_dict() for binding in self.bindings],
        }


@dataclass(frozen=True)
class RunOutcome:
    """Final view of one run.

    Attributes:
        run: The run's state machine (terminal unless abandoned).
        order: Topological order of the root, when computed.
        bindings: Bindings, when resolved and budget-checked.
        reports: Execution reports by node id, for deployed nodes.
        abandoned: True if the deployment timed out (here or in a run
            sharing the binding).
    """

    run: PipelineRun
    order: tuple[str, ...] = ()
    bindings: tuple[Binding, ...] = ()
    reports: Mapping[str, ExecutionReport] = field(default_factory=dict)
    abandoned: bool = False

    @property
    def state(self) -> EnumRunState:
        return self.run.state

    @property
    def error(self) -> OmniGateError | None:
        return self.run.error

    @property
    def verified(self) -> bool:
        return self.run.state is EnumRunState.VERIFIED


class PipelineRunner:
    """Orchestrates classifier, resolver, budget validator and deployment gate.

    Args:
        classifier: Classifier bound to the graph runs are submitted to.
        candidates: Catalog (or callable node -> ordered targets) supplying
            candidates to the resolver.
        executor: External executor used by the deployment gate. Required
            by ``run``; ``plan`` works without it.
        resolver: Binding resolver (default: accept every target).
        validator: Budget validator (default: from settings).
        gate: Deployment gate (default: from settings).
        verifier: QA ledger receiving gate decisions.
        oracle: Ground truth for QA recording.
        settings: Runtime settings (default: from environment).
    """

    def __init__(
        self,
        classifier: ProblemClassifier,
        candidates: TargetCatalog | CandidateSource,
        *,
        executor: ProtocolExecutor | None = None,
        resolver: BindingResolver | None = None,
        validator: ComplexityBudgetValidator | None = None,
        gate: DeploymentGate | None = None,
        verifier: QAVerifier | None = None,
        oracle: GroundTruthOracle | None = None,
        settings: OmniGateSettings | None = None,
    ) -> None:
        self._settings = settings or OmniGateSettings()
        self._classifier = classifier
        self._graph = classifier.graph
        if isinstance(candidates, TargetCatalog):
            self._candidates_for: CandidateSource = candidates.candidates_for
        else:
            self._candidates_for = candidates
        self._executor = executor
        self._resolver = resolver or BindingResolver()
        self._validator = validator or ComplexityBudgetValidator.from_settings(
            self._settings
        )
        self._gate = gate or DeploymentGate.from_settings(self._settings)
        self._verifier = verifier
        self._oracle = oracle
        # in-flight deployments only
        self._deployments: dict[
            tuple[str, str], asyncio.Future[Result[ExecutionReport]]
        ] = {}
        self._runs: deque[PipelineRun] = deque(
            maxlen=self._settings.max_run_history
        )

    @classmethod
    def from_settings(
        cls,
        settings: OmniGateSettings,
        candidates: TargetCatalog | CandidateSource,
        *,
        rules: Sequence[DomainRule] = (),
        **kwargs: Any,
    ) -> PipelineRunner:
        """Build a runner with a fresh graph and classifier from settings."""
        graph = DependencyGraph.from_settings(settings)
        classifier = ProblemClassifier(graph, rules)
        return cls(classifier, candidates, settings=settings, **kwargs)

    @property
    def graph(self) -> DependencyGraph:
        return self._graph

    @property
    def verifier(self) -> QAVerifier | None:
        return self._verifier

    def runs(self) -> tuple[PipelineRun, ...]:
        """The most recent runs started by this runner, oldest first.

        At most ``settings.max_run_history`` runs are kept, abandoned ones
        included.
        """
        return tuple(self._runs)

    def pending_deployments(self) -> tuple[tuple[str, str], ...]:
        """``(node_id, target_id)`` of deployments currently in flight."""
        return tuple(self._deployments)

    # ------------------------------------------------------------------
    # Planning (no side effects beyond QA records)
    # ------------------------------------------------------------------

    def plan(
        self,
        root_id: str,
        *,
        ceiling: EnumComplexityClass | str | None = None,
        input_size: int | None = None,
    ) -> Result[PipelinePlan]:
        """Order, resolve and budget-check ``root_id`` without deploying.

        Returns:
            Result with the plan, or the first ordering/resolution/budget
            error.
        """
        return self._plan(root_id, ceiling=ceiling, input_size=input_size, run=None)

    def _plan(
        self,
        root_id: str,
        *,
        ceiling: EnumComplexityClass | str | None,
        input_size: int | None,
        run: PipelineRun | None,
    ) -> Result[PipelinePlan]:
        effective_ceiling = (
            self._settings.default_ceiling
            if ceiling is None
            else EnumComplexityClass.parse(ceiling)
        )

        ordered = self._graph.ordered_nodes(root_id)
        if not ordered.ok:
            self._record(root_id, EnumGateName.RESOLVE, ordered.error)
            return Result.failure(ordered.error)  # type: ignore[arg-type]
        nodes: tuple[Node, ...] = ordered.value  # type: ignore[assignment]
        order = tuple(node.node_id for node in nodes)

        bindings: list[Binding] = []
        for node in nodes:
            resolved = self._resolver.resolve(node, self._candidates_for(node))
            self._record(node.node_id, EnumGateName.RESOLVE, resolved.error)
            if not resolved.ok:
                return Result.failure(resolved.error)  # type: ignore[arg-type]
            bindings.append(resolved.value)  # type: ignore[arg-type]
        if run is not None:
            run.advance(EnumRunState.RESOLVED)

        for binding in bindings:
            checked = self._validator.validate(
                binding, effective_ceiling, input_size=input_size
            )
            self._record(binding.node_id, EnumGateName.BUDGET, checked.error)
            if not checked.ok:
                return Result.failure(checked.error)  # type: ignore[arg-type]
        if run is not None:
            run.advance(EnumRunState.BUDGET_CHECKED)

        return Result.success(
            PipelinePlan(
                root_id=root_id,
                order=order,
                bindings=tuple(bindings),
                ceiling=effective_ceiling,
            )
        )

    # ------------------------------------------------------------------
    # Full runs
    # ------------------------------------------------------------------

    async def run(
        self,
        problem: ProblemDescriptor,
        *,
        ceiling: EnumComplexityClass | str | None = None,
        input_size: int | None = None,
        timeout: float | None = None,
    ) -> RunOutcome:
        """Drive ``problem`` through every gate.

        Args:
            problem: The problem to submit.
            ceiling: Complexity ceiling (default: settings).
            input_size: Input size for the declared-cost check.
            timeout: Per-deployment timeout in seconds (default: settings).

        Returns:
            RunOutcome. Check ``verified``, ``error`` and ``abandoned``.

        Raises:
            ValueError: If the runner has no executor.
            asyncio.CancelledError: If the caller cancels the run.
        """
        if self._executor is None:
            msg = "PipelineRunner.run() requires an executor"
            raise ValueError(msg)

        run = PipelineRun(root_id=problem.problem_id)
        self._runs.append(run)
        extra = {"correlation_id": run.run_id}
        logger.info("Run started for problem %s", problem.problem_id, extra=extra)

        submitted = self._classifier.submit(problem)
        self._record(problem.problem_id, EnumGateName.CLASSIFY, submitted.error)
        if not submitted.ok:
            return self._failed(run, submitted.error)  # type: ignore[arg-type]
        run.advance(EnumRunState.CLASSIFIED)

        planned = self._plan(
            run.root_id, ceiling=ceiling, input_size=input_size, run=run
        )
        if not planned.ok:
            return self._failed(run, planned.error)  # type: ignore[arg-type]
        plan: PipelinePlan = planned.value  # type: ignore[assignment]

        deploy_timeout = (
            self._settings.deploy_timeout_seconds if timeout is None else timeout
        )
        reports: dict[str, ExecutionReport] = {}
        for binding in plan.bindings:
            deployment = self._deployment_for(binding)
            try:
                deployed = await asyncio.wait_for(
                    asyncio.shield(deployment),
                    timeout=deploy_timeout,
                )
            except TimeoutError:
                self._cancel_deployment(binding.key, deployment)
                logger.warning(
                    "Run abandoned: deployment of %s exceeded %ss",
                    binding.node_id,
                    deploy_timeout,
                    extra=extra,
                )
                return self._abandoned(run, plan, reports)
            except asyncio.CancelledError:
                current = asyncio.current_task()
                caller_cancelled = current is not None and current.cancelling() > 0
                if caller_cancelled or not deployment.cancelled():
                    self._cancel_deployment(binding.key, deployment)
                    raise
                # abandoned by another run sharing this binding
                logger.warning(
                    "Run abandoned: shared deployment of %s was cancelled",
                    binding.node_id,
                    extra=extra,
                )
                return self._abandoned(run, plan, reports)

            if not deployed.ok:
                self._record(binding.node_id, EnumGateName.DEPLOY, deployed.error)
                return self._failed(run, deployed.error, plan, reports)  # type: ignore[arg-type]

            report: ExecutionReport = deployed.value  # type: ignore[assignment]
            reports[binding.node_id] = report
            if not self._gate.passed(report):
                error = VerificationError(
                    node_id=binding.node_id,
                    target_id=binding.target_id,
                    functional_pass=report.functional_pass,
                    latency_ms=report.latency.total_seconds() * 1000.0,
                )
                self._record(binding.node_id, EnumGateName.DEPLOY, error)
                run.advance(EnumRunState.DEPLOYED)
                return self._failed(run, error, plan, reports)

            self._record(binding.node_id, EnumGateName.DEPLOY, None)

        run.advance(EnumRunState.DEPLOYED)
        run.advance(EnumRunState.VERIFIED)
        logger.info(
            "Run verified for problem %s (%d node(s))",
            run.root_id,
            len(plan.order),
            extra=extra,
        )
        return RunOutcome(
            run=run,
            order=plan.order,
            bindings=plan.bindings,
            reports=reports,
        )

    async def run_many(
        self,
        problems: Iterable[ProblemDescriptor],
        *,
        ceiling: EnumComplexityClass | str | None = None,
        input_size: int | None = None,
        timeout: float | None = None,
    ) -> list[RunOutcome]:
        """Run independent problems concurrently (bounded by max_concurrency).

        Outcomes are returned in input order.
        """
        semaphore = asyncio.Semaphore(self._settings.max_concurrency)

        async def _bounded(problem: ProblemDescriptor) -> RunOutcome:
            async with semaphore:
                return await self.run(
                    problem, ceiling=ceiling, input_size=input_size, timeout=timeout
                )

        return list(await asyncio.gather(*(_bounded(p) for p in problems)))

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _deployment_for(
        self, binding: Binding
    ) -> asyncio.Future[Result[ExecutionReport]]:
        """Join the in-flight deployment of ``binding`` or start a new one."""
        deployment = self._deployments.get(binding.key)
        if deployment is None or deployment.done():
            assert self._executor is not None
            deployment = asyncio.ensure_future(
                self._gate.deploy(binding, self._executor)
            )
            self._deployments[binding.key] = deployment
            deployment.add_done_callback(functools.partial(self._forget, binding.key))
        return deployment

    def _forget(
        self,
        key: tuple[str, str],
        deployment: asyncio.Future[Result[ExecutionReport]],
    ) -> None:
        if self._deployments.get(key) is deployment:
            del self._deployments[key]

    def _cancel_deployment(
        self,
        key: tuple[str, str],
        deployment: asyncio.Future[Result[ExecutionReport]],
    ) -> None:
        self._forget(key, deployment)
        deployment.cancel()

    def _abandoned(
        self,
        run: PipelineRun,
        plan: PipelinePlan,
        reports: Mapping[str, ExecutionReport],
    ) -> RunOutcome:
        return RunOutcome(
            run=run,
            order=plan.order,
            bindings=plan.bindings,
            reports=dict(reports),
            abandoned=True,
        )

    def _failed(
        self,
        run: PipelineRun,
        error: OmniGateError,
        plan: PipelinePlan | None = None,
        reports: Mapping[str, ExecutionReport] | None = None,
    ) -> RunOutcome:
        run.fail(error)
        logger.info(
            "Run failed for problem %s: [%s] %s",
            run.root_id,
            error.code,
            error.message,
            extra={"correlation_id": run.run_id},
        )
        return RunOutcome(
            run=run,
            order=plan.order if plan is not None else (),
            bindings=plan.bindings if plan is not None else (),
            reports=dict(reports or {}),
        )

    def _record(
        self,
        node_id: str,
        gate: EnumGateName,
        error: OmniGateError | None,
    ) -> None:
        """Record one gate decision when ground truth is available."""
        if self._verifier is None or self._oracle is None:
            return
        self._verifier.record(
            node_id,
            gate,
            self._oracle(node_id, gate.value),
            error is None,
            failure_code=error.code if error is not None else None,
        )


__all__ = ["CandidateSource", "PipelinePlan", "PipelineRunner", "RunOutcome"]
