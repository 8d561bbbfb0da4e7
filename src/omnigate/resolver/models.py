# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Data models for binding resolution.

Target is the caller-facing descriptor of an implementation target
(validated with pydantic). Binding is the value produced by the resolver:
it pairs a Node with the chosen target id and carries the compatibility
result and declared complexity class computed once at resolution time.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from omnigate.enums import EnumComplexityClass
from omnigate.graph import Node


class Target(BaseModel):
    """An implementation target a node can be bound to.

    Attributes:
        target_id: Opaque target identifier (e.g. ``"py"``, ``"rs"``).
        complexity_class: Declared complexity class of the target.
        domains: Domain tags the target declares support for. Only used by
            the ``domain_match`` predicate; empty means "not declared".
        metadata: Free-form string metadata carried through to callers.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    target_id: str = Field(min_length=1, description="Opaque target identifier")
    complexity_class: EnumComplexityClass = Field(
        description="Declared complexity class",
    )
    domains: frozenset[str] = Field(
        default_factory=frozenset,
        description="Domain tags this target supports",
    )
    metadata: dict[str, str] = Field(
        default_factory=dict,
        description="Free-form metadata",
    )

    @field_validator("complexity_class", mode="before")
    @classmethod
    def _parse_complexity(cls, value: Any) -> EnumComplexityClass:
        return EnumComplexityClass.parse(value)


@dataclass(frozen=True)
class Binding:
    """A node bound to an implementation target.

    Bindings are values: re-resolving the same node against the same
    candidates yields an equal Binding.

    Attributes:
        node: The bound node.
        target_id: Id of the chosen target.
        compatible: Compatibility predicate result at resolution time.
        complexity_class: Declared complexity class of the chosen target.
    """

    node: Node
    target_id: str
    compatible: bool
    complexity_class: EnumComplexityClass

    @property
    def node_id(self) -> str:
        return self.node.node_id

    @property
    def key(self) -> tuple[str, str]:
        """(node_id, target_id) identity used to share in-flight deployments."""
        return (self.node.node_id, self.target_id)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for logs and CLI output."""
        return {
            "node_id": self.node.node_id,
            "domain": self.node.domain,
            "target_id": self.target_id,
            "compatible": self.compatible,
            "complexity_class": self.complexity_class.value,
        }


__all__ = ["Binding", "Target"]
