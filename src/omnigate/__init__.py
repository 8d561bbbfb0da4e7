# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""omnigate - gated resolution pipeline for dependency graphs of problems.

Problems are classified into graph nodes, ordered topologically, bound to
implementation targets, checked against a complexity budget, deployed
through an external executor and verified. Every gate decision can be
recorded in a QA ledger.

Example:
    >>> from omnigate import DependencyGraph
    >>> graph = DependencyGraph()
    >>> _ = graph.insert_node("B", "iaas")
    >>> _ = graph.insert_node("A", "iaas", ["B"])
    >>> graph.topological_order("A").unwrap()
    ('B', 'A')
"""

from omnigate.budget import ComplexityBudgetValidator
from omnigate.classifier import DomainRule, ProblemClassifier, ProblemDescriptor
from omnigate.config import OmniGateSettings
from omnigate.deployment import DeploymentGate, ExecutionReport, ProtocolExecutor
from omnigate.enums import (
    EnumComplexityClass,
    EnumGateName,
    EnumQABucket,
    EnumRunState,
)
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
from omnigate.graph import DependencyGraph, Node
from omnigate.pipeline import PipelinePlan, PipelineRun, PipelineRunner, RunOutcome
from omnigate.qa import ExpectationTable, GateRecord, QAMetrics, QAVerifier
from omnigate.resolver import Binding, BindingResolver, Target, TargetCatalog
from omnigate.result import Result

__version__ = "0.1.0"

__all__ = [
    "Binding",
    "BindingResolver",
    "BudgetExceededError",
    "ComplexityBudgetValidator",
    "CycleError",
    "DeployError",
    "DependencyGraph",
    "DeploymentGate",
    "DomainRule",
    "EnumComplexityClass",
    "EnumGateName",
    "EnumQABucket",
    "EnumRunState",
    "ExecutionReport",
    "ExpectationTable",
    "GateRecord",
    "InUseError",
    "InvalidTransitionError",
    "NoCandidateError",
    "Node",
    "NotFoundError",
    "OmniGateError",
    "OmniGateSettings",
    "PipelinePlan",
    "PipelineRun",
    "PipelineRunner",
    "ProblemClassifier",
    "ProblemDescriptor",
    "ProtocolExecutor",
    "QAMetrics",
    "QAVerifier",
    "Result",
    "RunOutcome",
    "Target",
    "TargetCatalog",
    "VerificationError",
    "__version__",
]
