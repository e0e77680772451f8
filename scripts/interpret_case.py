#!/usr/bin/env python3
"""Interpret a PFT case file from the command line.

Reads one measurement record from a YAML or JSON file (a flat mapping of
``MeasurementRecord`` field names to values; blanks and typos are fine) and
prints the interpretation as a rich table, or as JSON with ``--json``.

Usage::

    # Install deps (first time only)
    pip install -e ".[scripts]"

    # Pretty table
    python scripts/interpret_case.py cases/obstruction.yaml

    # JSON including the tagged sections
    python scripts/interpret_case.py cases/obstruction.yaml --json --sections

    # Debug logging of every branch decision
    python scripts/interpret_case.py cases/obstruction.yaml -v
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

# ---------------------------------------------------------------------------
# Ensure the src/ layout is importable when run from a checkout.
# ---------------------------------------------------------------------------
_SCRIPT_DIR = Path(__file__).resolve().parent
_REPO_ROOT = _SCRIPT_DIR.parent
sys.path.insert(0, str(_REPO_ROOT / "src"))

import yaml  # noqa: E402
from rich.console import Console  # noqa: E402
from rich.table import Table  # noqa: E402

from pft_interpreter.constants import GUIDELINE_REFERENCE  # noqa: E402
from pft_interpreter.engine import InterpretationEngine  # noqa: E402
from pft_interpreter.grading import GradingStore, load_yaml  # noqa: E402
from pft_interpreter.models.record import MeasurementRecord  # noqa: E402
from pft_interpreter.models.result import InterpretationResult  # noqa: E402


def load_case(path: Path) -> MeasurementRecord:
    """Load a case file into a record; YAML is a superset of JSON."""
    data = load_yaml(path)
    if not isinstance(data, dict):
        raise ValueError(f"{path}: case file must contain a mapping of field names to values")
    return MeasurementRecord.from_form(data)


def print_table(console: Console, result: InterpretationResult) -> None:
    table = Table(title=f"PFT Interpretation ({GUIDELINE_REFERENCE})", show_lines=True)
    table.add_column("Section", style="bold cyan", min_width=14)
    table.add_column("Interpretation", min_width=60)

    rows = [
        ("Spirometry", " ".join(result.spirometry)),
        ("Bronchodilator", result.bronchodilator),
        ("Comparison", result.comparison),
        ("Lung volumes", " ".join(result.lung_volumes)),
        ("Resistance", result.resistance),
        ("DLCO", result.dlco),
        ("Oximetry", result.oximetry),
    ]
    for section, text in rows:
        if text:
            table.add_row(section, text)
    table.add_row("[bold]Summary[/]", f"[bold]{result.summary}[/]")
    console.print(table)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Interpret a PFT case file.")
    parser.add_argument("case", type=Path, help="YAML or JSON file with measurement fields")
    parser.add_argument("--json", action="store_true", help="print JSON instead of a table")
    parser.add_argument("--sections", action="store_true", help="include tagged sections in JSON output")
    parser.add_argument("--rules-dir", type=Path, default=None, help="directory holding grading.yaml")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    console = Console()
    try:
        record = load_case(args.case)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as exc:
        console.print(f"[red]error:[/] {exc}")
        return 1

    engine = InterpretationEngine(GradingStore(rules_dir=args.rules_dir).load())
    result = engine.interpret(record)

    if args.json:
        exclude = None if args.sections else {"sections"}
        print(json.dumps(result.model_dump(mode="json", exclude=exclude), ensure_ascii=False, indent=2))
    else:
        print_table(console, result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
