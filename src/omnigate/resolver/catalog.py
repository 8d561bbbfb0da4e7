# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""TargetCatalog: ordered collection of implementation targets.

Catalog order is candidate priority. ``without`` builds the reduced
candidate list used when the caller skips a target rejected by the budget
gate and resolves again.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path
from typing import Any

import yaml

from omnigate.graph import Node
from omnigate.resolver.models import Target


class TargetCatalog:
    """Ordered, id-unique catalog of Targets.

    Raises:
        ValueError: On construction with duplicate target ids.
    """

    def __init__(self, targets: Iterable[Target] = ()) -> None:
        self._targets: dict[str, Target] = {}
        for target in targets:
            self.register(target)

    @classmethod
    def from_dicts(cls, entries: Iterable[Mapping[str, Any]]) -> TargetCatalog:
        """Build from plain dicts (manifest form).

        Each entry needs ``id`` (or ``target_id``) and ``complexity`` (or
        ``complexity_class``); ``domains`` and ``metadata`` are optional.
        """
        targets = []
        for entry in entries:
            data = dict(entry)
            if "id" in data:
                data["target_id"] = data.pop("id")
            if "complexity" in data:
                data["complexity_class"] = data.pop("complexity")
            targets.append(Target(**data))
        return cls(targets)

    @classmethod
    def from_yaml(cls, path: str | Path) -> TargetCatalog:
        """Load a catalog from a YAML file holding a ``targets`` list."""
        with Path(path).open(encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        entries = data.get("targets", []) if isinstance(data, dict) else data
        if not isinstance(entries, list):
            msg = f"Catalog file {path} must hold a list of targets"
            raise ValueError(msg)
        return cls.from_dicts(entries)

    def register(self, target: Target) -> None:
        """Append a target at the lowest priority."""
        if target.target_id in self._targets:
            msg = f"Duplicate target id {target.target_id!r}"
            raise ValueError(msg)
        self._targets[target.target_id] = target

    def get(self, target_id: str) -> Target | None:
        return self._targets.get(target_id)

    def candidates_for(self, node: Node, *, by_domain: bool = False) -> list[Target]:
        """Candidate targets for ``node`` in priority order.

        Args:
            node: Node being resolved.
            by_domain: Keep only targets that declare ``node.domain``.
                Targets with no declared domains are kept.
        """
        if not by_domain:
            return list(self._targets.values())
        return [
            target
            for target in self._targets.values()
            if not target.domains or node.domain in target.domains
        ]

    def without(self, *target_ids: str) -> TargetCatalog:
        """A new catalog with the given targets removed, order kept."""
        skipped = set(target_ids)
        return TargetCatalog(
            target for tid, target in self._targets.items() if tid not in skipped
        )

    def __iter__(self) -> Iterator[Target]:
        return iter(list(self._targets.values()))

    def __len__(self) -> int:
        return len(self._targets)

    def __contains__(self, target_id: object) -> bool:
        return target_id in self._targets


__all__ = ["TargetCatalog"]
