"""
CLI interface for Firebase Cost Estimator.

Provides the estimator form on the command line: one-shot estimates,
the default price list and an interactive editing session.
"""

import logging
import sys
from typing import List, Optional, Tuple

import typer
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.prompt import Prompt
from rich.table import Table

from firebase_cost_estimator import __version__
from firebase_cost_estimator.config.loader import load_scenario
from firebase_cost_estimator.core.calculator import CostCalculator, Estimate
from firebase_cost_estimator.core.fields import BUDGET_FIELD, PRICE_FIELDS, USAGE_SECTIONS
from firebase_cost_estimator.core.formatting import format_currency, format_months
from firebase_cost_estimator.core.prices import DEFAULT_PRICE_TABLE

app = typer.Typer(help="Estimate your monthly Firebase bill and budget runway.")
console = Console()

EXIT_CODE_PASS = 0
EXIT_CODE_FAIL = 1

FOOTER = (
    "Estimates exclude taxes and region-specific surcharges. Free-tier allowances "
    "are NOT auto-deducted here; enter your net billable usage."
)

_QUIT_COMMANDS = {"quit", "exit", "q"}
PACKAGE_LOGGER = "firebase_cost_estimator"


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"firebase-cost-estimator {__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    """Attach a rich stderr handler to the package logger."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(console=Console(stderr=True), show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    version: bool = typer.Option(
        False, "--version", "-V", help="Show version", callback=_version_callback, is_eager=True
    ),
):
    """Firebase Cost Estimator CLI."""
    _configure_logging(verbose)
    if ctx.invoked_subcommand is None:
        console.print("Firebase Cost Estimator - Use --help to see available commands")


@app.command()
def estimate(
    budget: Optional[float] = typer.Option(
        None,
        "--budget",
        "-b",
        help="Budget in USD (default 100)"
    ),
    config: Optional[str] = typer.Option(
        None,
        "--config",
        "-c",
        help="YAML scenario file with budget, prices and usage overrides"
    ),
    price: Optional[List[str]] = typer.Option(
        None,
        "--price",
        "-p",
        help="Override a unit price, e.g. rtdbStoragePerGB=4.5"
    ),
    usage: Optional[List[str]] = typer.Option(
        None,
        "--usage",
        "-u",
        help="Set a usage figure, e.g. firestore.reads=3000000"
    ),
    detailed: bool = typer.Option(
        False,
        "--detailed",
        "-d",
        help="Show every line item within each category"
    ),
):
    """
    Estimate the monthly cost and how long the budget lasts.

    Starts from the built-in defaults, then applies the scenario file,
    --price and --usage overrides, and finally --budget.
    """
    try:
        calculator = CostCalculator()
        if config:
            load_scenario(config).apply_to(calculator)

        for assignment in price or []:
            key, raw = _split_assignment(assignment, "--price")
            calculator.set_price(key, raw)

        for assignment in usage or []:
            target, raw = _split_assignment(assignment, "--usage")
            category, name = _split_usage_target(target)
            calculator.set_usage(category, name, raw)

        if budget is not None:
            calculator.set_budget(budget)

        _display_estimate(calculator.estimate, calculator.state.budget, detailed=detailed)
        sys.exit(EXIT_CODE_PASS)

    except (ValueError, FileNotFoundError, yaml.YAMLError) as e:
        console.print(f"[red]Error:[/] {str(e)}")
        sys.exit(EXIT_CODE_FAIL)


@app.command()
def prices():
    """List the unit prices with their defaults and form steps."""
    table = Table(title="Unit Prices (USD)")
    table.add_column("Key", style="cyan", no_wrap=True)
    table.add_column("Label")
    table.add_column("Default", justify="right")
    table.add_column("Step", justify="right", style="dim")

    for key, spec in PRICE_FIELDS.items():
        table.add_row(key.value, spec.label, f"{DEFAULT_PRICE_TABLE[key]:g}", f"{spec.step:g}")

    console.print(table)


@app.command()
def interactive(
    config: Optional[str] = typer.Option(
        None,
        "--config",
        "-c",
        help="YAML scenario file to start from"
    ),
):
    """
    Edit usage, prices and budget; totals update after every change.

    Enter edits as "<field> <value>":
      firestore.reads 3000000
      price.rtdbStoragePerGB 4.5
      budget 250
    Other commands: show, fields, reset, quit.
    """
    calculator = CostCalculator()
    if config:
        try:
            load_scenario(config).apply_to(calculator)
        except (ValueError, FileNotFoundError, yaml.YAMLError) as e:
            console.print(f"[red]Error:[/] {str(e)}")
            sys.exit(EXIT_CODE_FAIL)

    calculator.subscribe(lambda est: _display_summary(est, calculator.state.budget))
    _display_estimate(calculator.estimate, calculator.state.budget)

    while True:
        try:
            text = Prompt.ask("\n[bold cyan]>[/bold cyan]", console=console)
        except (KeyboardInterrupt, EOFError):
            console.print("\n[dim]Exiting.[/dim]")
            break

        text = text.strip()
        if not text:
            continue

        command = text.lower()
        if command in _QUIT_COMMANDS:
            break
        if command == "show":
            _display_estimate(calculator.estimate, calculator.state.budget, detailed=True)
            continue
        if command == "fields":
            _display_fields()
            continue
        if command == "reset":
            calculator.reset()
            continue

        parts = text.split(None, 1)
        if len(parts) != 2:
            console.print("[yellow]Enter an edit as '<field> <value>', or 'quit'.[/yellow]")
            continue

        try:
            _apply_edit(calculator, parts[0], parts[1])
        except ValueError as e:
            console.print(f"[red]Error:[/] {str(e)}")

    _display_estimate(calculator.estimate, calculator.state.budget)
    sys.exit(EXIT_CODE_PASS)


def _apply_edit(calculator: CostCalculator, target: str, raw: str) -> Estimate:
    """Route one interactive edit to the matching calculator setter.

    Raises:
        ValueError: If the target names no known field
    """
    if target == "budget":
        return calculator.set_budget(raw)
    if target.startswith("price."):
        return calculator.set_price(target[len("price."):], raw)
    category, name = _split_usage_target(target)
    return calculator.set_usage(category, name, raw)


def _split_assignment(assignment: str, option: str) -> Tuple[str, str]:
    """Split a KEY=VALUE option value."""
    key, sep, raw = assignment.partition("=")
    if not sep or not key.strip():
        raise ValueError(f"{option} expects KEY=VALUE, got '{assignment}'")
    return key.strip(), raw.strip()


def _split_usage_target(target: str) -> Tuple[str, str]:
    """Split a category.field usage target."""
    category, sep, name = target.partition(".")
    if not sep or not category or not name:
        raise ValueError(f"Expected <category>.<field>, got '{target}'")
    return category, name


def _display_summary(estimate: Estimate, budget: float) -> None:
    console.print(
        f"Total per month: [bold]{format_currency(estimate.total)}[/bold]  "
        f"Budget: {format_currency(budget)}  "
        f"Months covered: [bold]{format_months(estimate.months_covered)}[/bold]"
    )


def _display_estimate(estimate: Estimate, budget: float, detailed: bool = False) -> None:
    """Display the monthly cost breakdown and budget coverage."""
    breakdown = estimate.breakdown
    table = Table(title="Monthly Cost Breakdown")
    table.add_column("Category", style="cyan")
    table.add_column("Monthly", justify="right")

    for category, subtotal in breakdown.subtotals.items():
        table.add_row(USAGE_SECTIONS[category].title, format_currency(subtotal), style="bold" if detailed else None)
        if detailed:
            for name, amount in breakdown.line_items[category].items():
                table.add_row(f"  {name.replace('_', ' ')}", format_currency(amount), style="dim")

    console.print(table)
    console.print(f"Est. Monthly Cost: [bold]{format_currency(breakdown.total)}[/bold]")
    console.print(f"Budget: {format_currency(budget)}")
    console.print(f"Months Covered by Budget: [bold]{format_months(estimate.months_covered)}[/bold]")
    console.print(f"[dim]{FOOTER}[/dim]")


def _display_fields() -> None:
    """List every editable field name."""
    table = Table(title="Editable Fields")
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Label")
    table.add_column("Step", justify="right", style="dim")

    table.add_row(BUDGET_FIELD.name, BUDGET_FIELD.label, f"{BUDGET_FIELD.step:g}")
    for section in USAGE_SECTIONS.values():
        for spec in section.fields:
            table.add_row(f"{section.category.value}.{spec.name}", f"{section.title}: {spec.label}", f"{spec.step:g}")
    for spec in PRICE_FIELDS.values():
        table.add_row(f"price.{spec.name}", spec.label, f"{spec.step:g}")

    console.print(table)
    for section in USAGE_SECTIONS.values():
        if section.hint:
            console.print(f"[dim]{section.title}: {section.hint}[/dim]")


if __name__ == "__main__":
    app()
