# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Deployment gate and the executor protocol it drives."""

from omnigate.deployment.executors import MockExecutor
from omnigate.deployment.gate import DeploymentGate
from omnigate.deployment.models import ExecutionReport
from omnigate.deployment.protocols import ProtocolExecutor

__all__ = ["DeploymentGate", "ExecutionReport", "MockExecutor", "ProtocolExecutor"]
