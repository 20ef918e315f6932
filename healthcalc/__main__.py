"""
Command line entry point.

    healthcalc list                      catalog of calculators
    healthcalc search QUERY              search the catalog
    healthcalc calc ID key=value ...     evaluate one calculator
    healthcalc demo                      evaluate a few sample inputs
    healthcalc serve                     run the HTTP API
"""

import argparse
import json
from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from healthcalc.catalog import CALCULATORS, get_calculator_info, search_calculators
from healthcalc.config import get_config
from healthcalc.domain.errors import UnknownCalculatorError
from healthcalc.domain.models import CalculationResult, CalculatorInfo
from healthcalc.logging_config import configure_logging
from healthcalc.services.evaluation import CalculatorEvaluator, default_evaluator

console = Console()

DEMO_INPUTS: tuple[tuple[str, dict[str, Any]], ...] = (
    ("bmi", {"weight": 70, "height": 175}),
    ("mean-arterial-pressure", {"systolic": 120, "diastolic": 80}),
    ("creatinine-clearance", {"gender": "male", "age": 60, "weight": 72, "creatinine": 1.1}),
    ("one-rep-max", {"weight": 100, "reps": 5}),
    ("cholesterol-ratio", {"total_cholesterol": 200, "hdl": 50, "triglycerides": 450}),
)


def _parse_pairs(pairs: list[str]) -> dict[str, str]:
    raw: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep:
            raise SystemExit(f"Expected key=value, got '{pair}'")
        raw[key.strip()] = value.strip()
    return raw


def _catalog_table(title: str, entries: list[CalculatorInfo]) -> Table:
    table = Table(title=title)
    table.add_column("ID", style="cyan")
    table.add_column("Title")
    table.add_column("Category", style="magenta")
    for info in entries:
        table.add_row(info.id, info.title, info.category)
    return table


def _print_result(outcome: CalculationResult) -> None:
    info = get_calculator_info(outcome.calculator_id)
    heading = info.title if info else outcome.calculator_id
    table = Table(title=heading)
    table.add_column("Value")
    table.add_column("Result", justify="right", style="green")
    for name, value in outcome.values.items():
        table.add_row(name, f"{value:g}")
    console.print(table)
    if outcome.category:
        console.print(f"Category: [bold]{outcome.category}[/bold]")
    if outcome.description:
        console.print(outcome.description)
    for warning in outcome.warnings:
        console.print(f"Warning: {warning}", style="yellow")


def _evaluate(evaluator: CalculatorEvaluator, calculator_id: str, raw: dict[str, Any]) -> bool:
    try:
        outcome = evaluator.evaluate(calculator_id, raw)
    except UnknownCalculatorError as exc:
        console.print(str(exc), style="red")
        return False
    if outcome.is_err():
        error = outcome.unwrap_err()
        console.print(f"{calculator_id}: {type(error).__name__}", style="red")
        for field_error in error.errors:
            label = field_error.field or "form"
            console.print(f"  {label}: {field_error.message}", style="red")
        return False
    _print_result(outcome.unwrap())
    return True


def _demo(evaluator: CalculatorEvaluator) -> None:
    console.print(Panel("Sample calculations", style="blue"))
    for calculator_id, raw in DEMO_INPUTS:
        console.print(f"\n{calculator_id} {json.dumps(raw)}", style="dim")
        _evaluate(evaluator, calculator_id, raw)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="healthcalc", description=__doc__.splitlines()[1])
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("list")
    search = sub.add_parser("search")
    search.add_argument("query", nargs="?", default="")
    calc = sub.add_parser("calc")
    calc.add_argument("calculator_id")
    calc.add_argument("fields", nargs="*", help="key=value pairs")
    sub.add_parser("demo")
    sub.add_parser("serve")
    args = parser.parse_args(argv)

    configure_logging(get_config().logging)

    if args.command == "serve":
        from adapters.web import run

        run()
        return 0
    if args.command == "list":
        console.print(_catalog_table("Calculators", list(CALCULATORS)))
        return 0
    if args.command == "search":
        console.print(_catalog_table(f"Search: {args.query!r}", search_calculators(args.query)))
        return 0

    evaluator = default_evaluator()
    if args.command == "demo":
        _demo(evaluator)
        return 0
    return 0 if _evaluate(evaluator, args.calculator_id, _parse_pairs(args.fields)) else 1


if __name__ == "__main__":
    raise SystemExit(main())
