#!/usr/bin/env python3
# Copyright 2026 SchemaGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Run all CI checks locally.

Besides format, lint, tests and build, the runner generates schemas for the
small ``inventory`` catalog below ``tools/smoke`` and checks that the
constraint policy shows up in the written documents.
"""

import argparse
import json
import shutil
import subprocess
import sys
import time
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from yachalk import chalk

# ###############
# Public Interface
# ###############

SMOKE_PACKAGE = "inventory"
SMOKE_CLASSPATH = Path("tools") / "smoke"
SMOKE_OUTPUT = Path("build") / "smoke-schemas"

NUMERIC_BOUND = 214748624
LIMIT = 255


@dataclass(frozen=True)
class Step:
    """A CI step: either an external command or an in-process check returning problems."""

    name: str
    command: list[str] | None = None
    check: Callable[[Path], list[str]] | None = None


def check_smoke_schemas(root: Path) -> list[str]:
    """Return the problems found in the documents of the smoke run."""
    output = root / SMOKE_OUTPUT / SMOKE_PACKAGE
    problems: list[str] = []
    documents: dict[str, dict] = {}
    for relative in ("items/Item.json", "items/Unit.json", "orders/lines/OrderLine.json"):
        path = output / relative
        if not path.is_file():
            problems.append(f"missing {path}")
            continue
        documents[relative] = json.loads(path.read_text(encoding="utf-8"))
    if problems:
        return problems

    item = documents["items/Item.json"]
    expectations = [
        (item["additionalProperties"] is False, "Item accepts additional properties"),
        (item["properties"]["sku"].get("maxLength") == LIMIT, "Item.sku has no length limit"),
        (item["properties"]["stock"].get("minimum") == -NUMERIC_BOUND, "Item.stock has no lower bound"),
        (item["properties"]["tags"].get("maxItems") == LIMIT, "Item.tags has no item limit"),
        (documents["items/Unit.json"].get("enum") == ["PIECE", "KILOGRAM"], "Unit is not listed by name"),
        (
            documents["orders/lines/OrderLine.json"]["properties"].get("qty", {}).get("maximum") == NUMERIC_BOUND,
            "OrderLine.qty has no upper bound",
        ),
    ]
    for document in documents.values():
        if "$schema" not in document:
            problems.append(f"{document.get('title')} has no $schema")
    return problems + [message for passed, message in expectations if not passed]


STEPS: list[Step] = [
    Step("Format check", command=["uv", "run", "ruff", "format", "--check", "src/", "tests/"]),
    Step("Lint", command=["uv", "run", "ruff", "check", "src/", "tests/"]),
    Step("Tests", command=["uv", "run", "pytest", "--cov=schemagen", "--cov-report=term-missing"]),
    Step(
        "Schema smoke run",
        command=[
            "uv",
            "run",
            "schemagen",
            "generate",
            SMOKE_PACKAGE,
            "--classpath",
            str(SMOKE_CLASSPATH),
            "--output",
            str(SMOKE_OUTPUT),
            "--fail-fast",
        ],
    ),
    Step("Schema check", check=check_smoke_schemas),
    Step("Build", command=["uv", "build"]),
]


def main() -> int:
    """Run the selected CI steps and report results."""
    parser = argparse.ArgumentParser(description="Run SchemaGen's CI checks locally.")
    parser.add_argument(
        "--skip",
        action="append",
        default=[],
        metavar="STEP",
        help="Name of a step to leave out (repeatable)",
    )
    args = parser.parse_args()

    unknown = set(args.skip) - {step.name for step in STEPS}
    if unknown:
        parser.error(f"unknown step(s): {', '.join(sorted(unknown))}")

    root = _repo_root()
    shutil.rmtree(root / SMOKE_OUTPUT, ignore_errors=True)

    results: list[tuple[str, bool, float]] = []
    for step in STEPS:
        if step.name in args.skip:
            continue
        _banner(step.name)
        start = time.monotonic()
        results.append((step.name, _run(step, root), time.monotonic() - start))

    _banner("  Summary")
    for name, passed, elapsed in results:
        color = chalk.green if passed else chalk.red
        print(color(f"  {'PASS' if passed else 'FAIL'}  {name} ({elapsed:.1f}s)"))

    print()
    return 0 if all(passed for _, passed, _ in results) else 1


# ################
# Implementation
# ################


def _run(step: Step, root: Path) -> bool:
    if step.command is not None:
        return subprocess.run(step.command, cwd=root).returncode == 0
    problems = step.check(root) if step.check is not None else []
    for problem in problems:
        print(chalk.red(f"  {problem}"))
    return not problems


def _banner(title: str) -> None:
    sep = chalk.blue("=" * 60)
    print(f"\n{sep}")
    print(chalk.blue(title))
    print(sep)


def _repo_root() -> Path:
    return Path(__file__).parent.parent


if __name__ == "__main__":
    sys.exit(main())
