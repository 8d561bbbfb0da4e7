# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Data models for problem classification.

ProblemDescriptor is the boundary model for incoming problems (validated
with pydantic). DomainRule is a caller-supplied mapping from a declared tag
to a canonical domain, matched either exactly or by predicate. No inference
is performed on the tag itself.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProblemDescriptor(BaseModel):
    """An incoming unit of work.

    Attributes:
        problem_id: Unique id; becomes the node id.
        domain: Declared domain tag (opaque).
        dependencies: Declared dependency ids.
        aux_cost: Optional declared auxiliary cost of input size.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    problem_id: str = Field(min_length=1, description="Unique problem id")
    domain: str = Field(min_length=1, description="Declared domain tag")
    dependencies: tuple[str, ...] = Field(
        default=(),
        description="Ids of problems that must be resolved first",
    )
    aux_cost: Callable[[int], float] | None = Field(
        default=None,
        exclude=True,
        description="Declared auxiliary cost as a function of input size",
    )

    @field_validator("dependencies")
    @classmethod
    def _no_empty_ids(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if any(not dep for dep in value):
            msg = "dependency ids must be non-empty strings"
            raise ValueError(msg)
        return value


@dataclass(frozen=True)
class DomainRule:
    """Maps a declared domain tag to a canonical domain.

    Exactly one of ``tag`` (exact match) or ``predicate`` must be set.

    Attributes:
        domain: Canonical domain assigned when the rule matches.
        tag: Declared tag matched exactly.
        predicate: Caller predicate over the declared tag.
    """

    domain: str
    tag: str | None = None
    predicate: Callable[[str], bool] | None = None

    def __post_init__(self) -> None:
        if (self.tag is None) == (self.predicate is None):
            msg = "DomainRule needs exactly one of 'tag' or 'predicate'"
            raise ValueError(msg)

    @classmethod
    def exact(cls, tag: str, domain: str) -> DomainRule:
        """Rule matching ``tag`` exactly."""
        return cls(domain=domain, tag=tag)

    @classmethod
    def when(cls, predicate: Callable[[str], bool], domain: str) -> DomainRule:
        """Rule matching any tag for which ``predicate`` holds."""
        return cls(domain=domain, predicate=predicate)

    def matches(self, tag: str) -> bool:
        if self.tag is not None:
            return tag == self.tag
        assert self.predicate is not None
        return bool(self.predicate(tag))


__all__ = ["DomainRule", "ProblemDescriptor"]
