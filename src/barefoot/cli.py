"""Command line entry points for the Barefoot debt planner."""

from __future__ import annotations

import json
from datetime import date, datetime
from pathlib import Path
from typing import Any

import click

from .config import BaseConfig
from .domain.money import Money
from .logging_config import get_logger, setup_logging
from .services.debts import EngineLimits, simulate
from .services.export_csv import export_mortgage_comparison_csv, export_payoff_plan_csv
from .services.import_debts import load_debts
from .services.mortgage import compare_overpayment
from .services.payoff_plan import build_payoff_plan

logger = get_logger(__name__)

_debts_argument = click.argument(
    "debts_file", type=click.Path(exists=True, dir_okay=False, path_type=Path)
)
_extra_option = click.option(
    "--extra",
    "extra_cents",
    type=click.IntRange(min=0),
    default=0,
    show_default=True,
    help="Fire Extinguisher amount per period, in cents.",
)
_start_option = click.option(
    "--start",
    "start",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Date of the first payment (YYYY-MM-DD). Defaults to today.",
)
_csv_option = click.option(
    "--csv",
    "csv_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Also write the timeline to this CSV file.",
)


def _extra(config: BaseConfig, extra_cents: int) -> Money:
    return Money(extra_cents, config.CURRENCY)


def _start_date(value: datetime | None) -> date:
    return value.date() if value is not None else date.today()


def _load(debts_file: Path):
    try:
        return load_debts(debts_file)
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc


def _emit(payload: dict[str, Any]) -> None:
    click.echo(json.dumps(payload, indent=2))


@click.group()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory for logs (overrides BAREFOOT_DATA_DIR).",
)
@click.pass_context
def cli(ctx: click.Context, data_dir: Path | None) -> None:
    """Barefoot snowball and mortgage overpayment calculators."""

    try:
        config = BaseConfig(data_dir)
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc
    setup_logging(config)
    ctx.obj = config


@cli.command("simulate")
@_debts_argument
@_extra_option
@click.option(
    "--period",
    type=click.Choice(["month", "fortnight"], case_sensitive=False),
    default="fortnight",
    show_default=True,
)
@click.pass_obj
def simulate_command(config: BaseConfig, debts_file: Path, extra_cents: int, period: str) -> None:
    """Simulate a snowball payoff and print the timeline as JSON."""

    debts = _load(debts_file)
    result = simulate(
        debts=debts,
        extra_payment=_extra(config, extra_cents),
        period_kind=period,
        limits=EngineLimits.from_config(config),
    )
    logger.info("Simulated %d debts over %d periods", len(debts), result.periods)
    _emit(result.as_dict())


@cli.command("mortgage")
@_debts_argument
@_extra_option
@_start_option
@_csv_option
@click.pass_obj
def mortgage_command(
    config: BaseConfig,
    debts_file: Path,
    extra_cents: int,
    start: datetime | None,
    csv_path: Path | None,
) -> None:
    """Compare minimum-only mortgage payoff against the Fire Extinguisher cascade."""

    comparison = compare_overpayment(
        debts=_load(debts_file),
        fortnightly_extra=_extra(config, extra_cents),
        start_date=_start_date(start),
        limits=EngineLimits.from_config(config),
    )
    if csv_path is not None:
        export_mortgage_comparison_csv(comparison=comparison, output_path=csv_path)
    _emit(comparison.as_dict())


@cli.command("plan")
@_debts_argument
@_extra_option
@_start_option
@_csv_option
@click.pass_obj
def plan_command(
    config: BaseConfig,
    debts_file: Path,
    extra_cents: int,
    start: datetime | None,
    csv_path: Path | None,
) -> None:
    """Print the fortnight-by-fortnight payoff plan as JSON."""

    plan = build_payoff_plan(
        debts=_load(debts_file),
        fortnightly_extra=_extra(config, extra_cents),
        start_date=_start_date(start),
        limits=EngineLimits.from_config(config),
    )
    if csv_path is not None:
        export_payoff_plan_csv(plan=plan, output_path=csv_path)
    _emit(plan.as_dict())


def main() -> None:
    cli(prog_name="barefoot")


if __name__ == "__main__":  # pragma: no cover
    main()
