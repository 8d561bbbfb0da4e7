# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""End-to-end pipeline: per-run state machine and the runner driving it."""

from omnigate.pipeline.run import PipelineRun
from omnigate.pipeline.runner import (
    CandidateSource,
    PipelinePlan,
    PipelineRunner,
    RunOutcome,
)

__all__ = [
    "CandidateSource",
    "PipelinePlan",
    "PipelineRun",
    "PipelineRunner",
    "RunOutcome",
]
