"""Command line entrypoint for the quarterly simulation.

Implements two commands:

* ``play``: run a headless game with a fixed decision every quarter.
* ``calendar``: show the year/quarter label of a quarter index.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from core.calendar import format_quarter
from core.errors import ConfigError
from core.state import DecisionInput

from .config import EngineConfig, load_engine_config
from .run_log import dumps_run_export
from .sim_runner import ScriptedPolicy, run_headless_sim

__version__ = "0.1.0"

app = typer.Typer(add_completion=False, help="Quarterly business simulation CLI")


def _exit_with_error(msg: str) -> None:
    typer.echo(f"Error: {msg}", err=True)
    raise typer.Exit(code=1)


def _show_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False, "--version", callback=_show_version, is_eager=True, help="Show version and exit"
    ),
):
    pass


@app.command("play")
def play(
    price: float = typer.Option(1000.0, help="Unit price each quarter"),
    hire_engineers: float = typer.Option(0, "--hire-engineers", help="Engineers hired each quarter"),
    hire_sales: float = typer.Option(0, "--hire-sales", help="Sales staff hired each quarter"),
    salary_pct: float = typer.Option(100.0, "--salary-pct", help="Salary as % of industry baseline"),
    quarters: int = typer.Option(40, help="Maximum quarters to play"),
    config: Optional[Path] = typer.Option(None, help="YAML/JSON engine config"),
    export: Optional[Path] = typer.Option(None, help="Write the run log JSON here"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable chatty logging"),
):
    """Play a headless game and print one line per quarter."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG)

    cfg = EngineConfig()
    if config is not None:
        try:
            cfg = load_engine_config(config)
        except ConfigError as exc:
            _exit_with_error(str(exc))

    decision = DecisionInput(
        price=price,
        new_engineers=hire_engineers,
        new_sales_staff=hire_sales,
        salary_pct=salary_pct,
    )
    result = run_headless_sim(ScriptedPolicy([decision]), max_quarters=quarters, config=cfg)

    for snap in result["snapshots"]:
        typer.echo(
            f"{format_quarter(snap.quarter)}  cash={snap.cash:,.0f}  revenue={snap.revenue:,.0f}  "
            f"net={snap.net_income:,.0f}  eng={snap.engineers}  sales={snap.sales_staff}  quality={snap.quality:.1f}"
        )
    typer.echo(f"Outcome: {result['outcome']} after {result['quarters_played']} quarters")

    if export is not None:
        export.write_text(dumps_run_export(result["export"]))
        typer.echo(f"Run log written to {export}")


@app.command("calendar")
def calendar(quarter: int = typer.Argument(..., help="1-based quarter index")):
    """Print the year/quarter label for QUARTER."""
    if quarter < 1:
        _exit_with_error("quarter must be >= 1")
    typer.echo(format_quarter(quarter))


def main() -> None:  # pragma: no cover - thin wrapper for console_script
    app()


__all__ = ["app", "main"]


if __name__ == "__main__":  # pragma: no cover
    main()
