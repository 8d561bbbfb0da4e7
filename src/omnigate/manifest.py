# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""YAML manifest describing a graph and its candidate targets.

Format:
    ceiling: logarithmic          # optional
    nodes:
      - id: A
        domain: iaas
        deps: [B]
      - id: B
        domain: iaas
    targets:
      - id: py
        complexity: constant
        domains: [iaas]

Node and target order in the file is irrelevant for the graph; target
order is candidate priority.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from omnigate.enums import EnumComplexityClass
from omnigate.graph import DependencyGraph, Node
from omnigate.resolver import TargetCatalog
from omnigate.result import Result


class ManifestNode(BaseModel):
    """One ``nodes`` entry."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    node_id: str = Field(alias="id", min_length=1)
    domain: str = Field(min_length=1)
    deps: tuple[str, ...] = Field(default=())

    def to_node(self) -> Node:
        return Node(self.node_id, self.domain, self.deps)


class Manifest(BaseModel):
    """Parsed manifest.

    Attributes:
        nodes: Node entries.
        targets: Target entries in priority order (``TargetCatalog`` form).
        ceiling: Optional complexity ceiling for ``plan``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    nodes: tuple[ManifestNode, ...] = Field(default=())
    targets: tuple[dict[str, Any], ...] = Field(default=())
    ceiling: EnumComplexityClass | None = Field(default=None)

    @field_validator("ceiling", mode="before")
    @classmethod
    def _parse_ceiling(cls, value: Any) -> EnumComplexityClass | None:
        if value is None:
            return None
        return EnumComplexityClass.parse(value)

    @classmethod
    def from_yaml(cls, path: str | Path) -> Manifest:
        """Load a manifest file.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If the file is not a mapping (pydantic
                ``ValidationError`` is a ``ValueError``).
        """
        manifest_path = Path(path)
        with manifest_path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            msg = f"Manifest {manifest_path} must contain a mapping"
            raise ValueError(msg)
        return cls.model_validate(data)

    def build_graph(
        self, *, allow_forward_references: bool = True
    ) -> Result[DependencyGraph]:
        """Insert every node as one all-or-nothing batch.

        Raises:
            ValueError: If two entries share an id.
        """
        graph = DependencyGraph(allow_forward_references=allow_forward_references)
        inserted = graph.insert_batch(entry.to_node() for entry in self.nodes)
        if not inserted.ok:
            return Result.failure(inserted.error)  # type: ignore[arg-type]
        return Result.success(graph)

    def build_catalog(self) -> TargetCatalog:
        return TargetCatalog.from_dicts(self.targets)


__all__ = ["Manifest", "ManifestNode"]
