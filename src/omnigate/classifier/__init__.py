# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Problem classification into dependency-graph nodes."""

from omnigate.classifier.classifier import ProblemClassifier
from omnigate.classifier.models import DomainRule, ProblemDescriptor

__all__ = [
    "DomainRule",
    "ProblemClassifier",
    "ProblemDescriptor",
]
