# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT
"""
omnigate CLI: order and plan a manifest without deploying.

Usage:
    python -m omnigate order manifest.yaml A
    python -m omnigate plan manifest.yaml A
    python -m omnigate plan manifest.yaml A --ceiling linear --json
    python -m omnigate plan manifest.yaml A --input-size 1024 --by-domain

Exit Codes:
    0 - Success: order computed / every binding admissible
    1 - Pipeline error: cycle, missing node, no candidate, budget exceeded
    2 - Error: CLI usage error, unreadable or invalid manifest
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from omnigate.classifier import ProblemClassifier
from omnigate.config import OmniGateSettings
from omnigate.exceptions import OmniGateError
from omnigate.manifest import Manifest
from omnigate.pipeline import PipelinePlan, PipelineRunner
from omnigate.resolver import BindingResolver, accept_all, domain_match

# JSON output indentation (spaces)
JSON_INDENT_SPACES = 2


def _format_error(error: OmniGateError, as_json: bool) -> str:
    if as_json:
        payload: dict[str, Any] = {"error": error.message, "code": error.code}
        cycle = getattr(error, "cycle", None)
        if cycle is not None:
            payload["cycle"] = list(cycle)
        return json.dumps(payload, indent=JSON_INDENT_SPACES)
    return f"Error [{error.code}]: {error.message}"


def _format_plan_text(plan: PipelinePlan) -> str:
    """Format a plan as one line per binding, in deploy order.

    Example:
        B -> py (constant)
        A -> py (constant)

        Summary: 2 binding(s) within ceiling logarithmic
    """
    lines = [
        f"{b.node_id} -> {b.target_id} ({b.complexity_class.value})"
        for b in plan.bindings
    ]
    lines.append("")
    lines.append(
        f"Summary: {len(plan.bindings)} binding(s) within ceiling "
        f"{plan.ceiling.value}"
    )
    return "\n".join(lines)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Order and plan dependency graphs against a complexity budget",
        prog="python -m omnigate",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s order manifest.yaml A              # Topological order of A
  %(prog)s plan manifest.yaml A               # Resolve and budget-check A
  %(prog)s plan manifest.yaml A -c linear     # Override the ceiling
  %(prog)s plan manifest.yaml A --json        # JSON output for CI
""",
    )
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--config",
        type=Path,
        default=None,
        metavar="PATH",
        help="Settings YAML file (default: environment variables)",
    )
    common.add_argument(
        "--json",
        action="store_true",
        help="Output in JSON format",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    order = subparsers.add_parser(
        "order", parents=[common], help="Print the topological order"
    )
    order.add_argument("manifest", type=Path, help="Manifest YAML file")
    order.add_argument("root", help="Root node id")

    plan = subparsers.add_parser(
        "plan", parents=[common], help="Resolve and budget-check without deploying"
    )
    plan.add_argument("manifest", type=Path, help="Manifest YAML file")
    plan.add_argument("root", help="Root node id")
    plan.add_argument(
        "--ceiling",
        "-c",
        default=None,
        help="Complexity ceiling (default: manifest, then settings)",
    )
    plan.add_argument(
        "--input-size",
        "-n",
        type=int,
        default=None,
        help="Input size for the declared-cost check",
    )
    plan.add_argument(
        "--by-domain",
        action="store_true",
        help="Only bind targets that declare the node's domain",
    )
    return parser


def _run_command(
    parsed_args: argparse.Namespace, settings: OmniGateSettings
) -> tuple[int, str]:
    manifest = Manifest.from_yaml(parsed_args.manifest)
    built = manifest.build_graph(
        allow_forward_references=settings.allow_forward_references
    )
    if not built.ok:
        return 1, _format_error(built.error, parsed_args.json)  # type: ignore[arg-type]
    graph = built.value
    assert graph is not None

    if parsed_args.command == "order":
        ordered = graph.topological_order(parsed_args.root)
        if not ordered.ok:
            return 1, _format_error(ordered.error, parsed_args.json)  # type: ignore[arg-type]
        order = list(ordered.value or ())
        if parsed_args.json:
            return 0, json.dumps(
                {"root": parsed_args.root, "order": order},
                indent=JSON_INDENT_SPACES,
            )
        return 0, "\n".join(order)

    resolver = BindingResolver(
        compatible=domain_match if parsed_args.by_domain else accept_all
    )
    runner = PipelineRunner(
        ProblemClassifier(graph),
        manifest.build_catalog(),
        resolver=resolver,
        settings=settings,
    )
    ceiling = parsed_args.ceiling or manifest.ceiling
    planned = runner.plan(
        parsed_args.root, ceiling=ceiling, input_size=parsed_args.input_size
    )
    if not planned.ok:
        return 1, _format_error(planned.error, parsed_args.json)  # type: ignore[arg-type]
    plan: PipelinePlan = planned.value  # type: ignore[assignment]
    if parsed_args.json:
        return 0, json.dumps(plan.to_dict(), indent=JSON_INDENT_SPACES)
    return 0, _format_plan_text(plan)


def main(args: list[str] | None = None) -> int:
    """CLI entry point.

    Args:
        args: Command line arguments (uses sys.argv if None).

    Returns:
        Exit code: 0 success, 1 pipeline error, 2 usage or manifest error.
    """
    parser = _build_parser()
    try:
        parsed_args = parser.parse_args(args)
    except SystemExit as e:
        return int(e.code or 0)

    try:
        if parsed_args.config is not None:
            settings = OmniGateSettings.from_yaml(parsed_args.config)
        else:
            settings = OmniGateSettings()
        logging.basicConfig(
            level=settings.log_level.value,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
        exit_code, output = _run_command(parsed_args, settings)

    except (FileNotFoundError, ValidationError, ValueError, yaml.YAMLError) as e:
        error_msg = f"Error: {e}"
        if parsed_args.json:
            print(
                json.dumps(
                    {"error": error_msg, "error_type": "invalid_input"},
                    indent=JSON_INDENT_SPACES,
                )
            )
        else:
            print(error_msg, file=sys.stderr)
        return 2

    if exit_code == 0 or parsed_args.json:
        print(output)
    else:
        print(output, file=sys.stderr)
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
