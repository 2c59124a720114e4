"""Command line entry point for DebtSage."""

from __future__ import annotations

import json
from decimal import Decimal
from pathlib import Path

import click

from .config import BaseConfig
from .errors import DebtSageError
from .logging_config import setup_logging
from .models.account import DebtAccount
from .models.results import RepaymentPolicy, SimulationResult
from .services.accounts_io import (
    comparison_to_dict,
    export_trajectory_csv,
    load_accounts_csv,
    load_accounts_json,
    result_to_dict,
)
from .services.comparison import compare
from .services.debts import simulate


def _load_accounts(path: Path) -> list[DebtAccount]:
    if path.suffix.lower() == ".csv":
        return load_accounts_csv(path)
    return load_accounts_json(path)


def _fmt(amount: Decimal) -> str:
    return f"{amount.quantize(Decimal('0.01')):,}"


def _describe(result: SimulationResult) -> str:
    if not result.converged:
        return (
            f"{result.policy_name.label}: does not pay off within {result.payoff_months} months "
            f"(remaining {_fmt(result.remaining_balance)}, interest {_fmt(result.total_interest_paid)})"
        )
    return (
        f"{result.policy_name.label}: debt-free in {result.payoff_months} months, "
        f"total interest {_fmt(result.total_interest_paid)}"
    )


@click.group()
@click.pass_context
def main(ctx: click.Context) -> None:
    """Simulate avalanche and snowball debt repayment plans."""

    try:
        config = BaseConfig()
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc
    setup_logging(config)
    ctx.obj = config


@main.command("simulate")
@click.argument("accounts_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--extra", "extra", default="0", show_default=True, help="Extra monthly payment")
@click.option(
    "--policy",
    type=click.Choice([p.value for p in RepaymentPolicy], case_sensitive=False),
    default=RepaymentPolicy.AVALANCHE.value,
    show_default=True,
)
@click.option("--json", "as_json", is_flag=True, default=False, help="Emit JSON instead of text")
@click.option("--schedule", is_flag=True, default=False, help="Include per-account rows in JSON")
@click.pass_obj
def simulate_command(
    config: BaseConfig,
    accounts_file: Path,
    extra: str,
    policy: str,
    as_json: bool,
    schedule: bool,
) -> None:
    """Run one payoff simulation for ACCOUNTS_FILE (JSON or CSV)."""

    try:
        accounts = _load_accounts(accounts_file)
        result = simulate(accounts, extra, policy, **config.simulation_options())
    except (DebtSageError, json.JSONDecodeError) as exc:
        raise click.ClickException(str(exc)) from exc

    if as_json:
        click.echo(json.dumps(result_to_dict(result, include_schedule=schedule), indent=2))
        return
    click.echo(_describe(result))


@main.command("compare")
@click.argument("accounts_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--extra", "extra", default="0", show_default=True, help="Extra monthly payment")
@click.option(
    "--increment",
    "increments",
    multiple=True,
    help="What-if increment to add to the extra payment (repeatable)",
)
@click.option("--json", "as_json", is_flag=True, default=False, help="Emit JSON instead of text")
@click.option(
    "--trajectory-csv",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the recommended plan's balance trajectory to this CSV file",
)
@click.pass_obj
def compare_command(
    config: BaseConfig,
    accounts_file: Path,
    extra: str,
    increments: tuple[str, ...],
    as_json: bool,
    trajectory_csv: Path | None,
) -> None:
    """Compare avalanche and snowball plans for ACCOUNTS_FILE."""

    try:
        accounts = _load_accounts(accounts_file)
        comparison = compare(
            accounts,
            extra,
            increments=list(increments) if increments else list(config.WHAT_IF_INCREMENTS),
            **config.simulation_options(),
        )
    except (DebtSageError, json.JSONDecodeError) as exc:
        raise click.ClickException(str(exc)) from exc

    if trajectory_csv is not None:
        export_trajectory_csv(result=comparison.recommended, output_path=trajectory_csv)

    if as_json:
        click.echo(json.dumps(comparison_to_dict(comparison), indent=2))
        return

    click.echo(_describe(comparison.avalanche))
    click.echo(_describe(comparison.snowball))
    click.echo(f"Recommended: {comparison.recommended_policy.label}")
    click.echo(f"Interest saved versus minimum payments: {_fmt(comparison.interest_delta)}")
    for scenario in comparison.what_if:
        if scenario.months_saved > 0:
            click.echo(
                f"  +{_fmt(scenario.increment)}/mo: pay off {scenario.months_saved} months sooner"
            )


if __name__ == "__main__":  # pragma: no cover
    main()
