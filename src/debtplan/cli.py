"""Command line interface for DebtPlan."""

from __future__ import annotations

import json
from dataclasses import asdict
from datetime import date
from pathlib import Path

import click

from .config import BaseConfig
from .forms import DEFAULT_STRATEGIES, DebtForm
from .logging_config import get_logger, setup_logging
from .services.amortization import PayoffRejected, estimate_payoff
from .services.debts import StrategyRejected, plan_summary, simulate_strategy
from .services.export_csv import export_balance_series_csv, export_strategy_csv
from .services.projection import default_chart_payment, project_balances

logger = get_logger(__name__)


def _echo_json(payload: dict) -> None:
    click.echo(json.dumps(payload, indent=2, default=str))


def _parse_debt(text: str) -> DebtForm:
    form = DebtForm.from_text(text)
    if not form.validate():
        raise click.BadParameter("; ".join(form.error_messages), param_hint=f"--debt {text!r}")
    return form


def _single_debt(principal: str, apr: str, minimum: str) -> DebtForm:
    form = DebtForm(name="debt", principal=principal, apr=apr, minimum_payment=minimum)
    if not form.validate():
        raise click.UsageError("; ".join(form.error_messages))
    return form


@click.group()
@click.pass_context
def main(ctx: click.Context) -> None:
    """Debt payoff calculator, strategy planner and balance projector."""

    config = BaseConfig()
    setup_logging(config)
    ctx.obj = config


@main.command("payoff")
@click.option("--principal", required=True, help="Outstanding balance.")
@click.option("--apr", required=True, help="Annual percentage rate, in percent.")
@click.option("--payment", required=True, type=float, help="Fixed monthly payment.")
@click.option("--today", type=click.DateTime(formats=["%Y-%m-%d"]), default=None)
def payoff_command(principal: str, apr: str, payment: float, today) -> None:
    """Months, total paid and interest to retire one debt."""

    debt = _single_debt(principal, apr, "0").to_debt()
    start = today.date() if today else date.today()
    logger.info("Solving payoff", extra={"principal": debt.principal, "payment": payment})

    estimate = estimate_payoff(debt.principal, debt.annual_rate, payment, today=start)
    if isinstance(estimate.result, PayoffRejected):
        raise click.ClickException(estimate.message)

    payload = asdict(estimate.result)
    payload["payoff_date"] = estimate.payoff_date
    payload["message"] = estimate.message
    _echo_json(payload)


@main.command("strategy")
@click.option(
    "--debt",
    "debts",
    multiple=True,
    required=True,
    help="Debt as name:principal:apr[:minimum]; repeat for each debt.",
)
@click.option("--budget", required=True, type=float, help="Monthly amount devoted to debts.")
@click.option(
    "--strategy",
    type=click.Choice(sorted(DEFAULT_STRATEGIES)),
    default=None,
    help="Payoff ordering; defaults to DEBTPLAN_DEFAULT_STRATEGY.",
)
@click.option("--today", type=click.DateTime(formats=["%Y-%m-%d"]), default=None)
@click.option("--csv", "csv_path", type=click.Path(dir_okay=False, path_type=Path), default=None)
@click.pass_obj
def strategy_command(
    config: BaseConfig, debts, budget: float, strategy: str | None, today, csv_path: Path | None
) -> None:
    """Order debts and schedule their payoff one at a time."""

    inputs = [_parse_debt(text).to_debt() for text in debts]
    chosen = strategy or config.DEFAULT_STRATEGY.value
    start = today.date() if today else date.today()
    logger.info("Simulating strategy", extra={"strategy": chosen, "debts": len(inputs)})

    outcome = simulate_strategy(inputs, chosen, budget, today=start)
    if isinstance(outcome, StrategyRejected):
        raise click.ClickException(outcome.message)

    payoff_date, total_interest, months = plan_summary(outcome)
    rows = [
        {
            "order": index,
            "name": row.debt.name,
            "principal": row.debt.principal,
            "annual_rate": row.debt.annual_rate,
            "payment_used": row.payment_used,
            "months_to_payoff": row.months_to_payoff,
            "cumulative_months": row.cumulative_months_at_payoff,
            "payoff_date": row.payoff_date,
            "total_interest": row.total_interest,
        }
        for index, row in enumerate(outcome.rows, start=1)
    ]
    if csv_path is not None:
        export_strategy_csv(plan=outcome, output_path=csv_path)
        logger.info("Strategy exported", extra={"path": str(csv_path)})

    _echo_json(
        {
            "strategy": chosen,
            "rows": rows,
            "summary": {
                "payoff_date": payoff_date,
                "total_interest": total_interest,
                "months": months,
            },
            "message": outcome.message,
        }
    )


@main.command("project")
@click.option("--principal", required=True, help="Outstanding balance.")
@click.option("--apr", required=True, help="Annual percentage rate, in percent.")
@click.option("--payment", type=float, default=None, help="Monthly payment to chart.")
@click.option("--minimum", default="0", help="Minimum payment used when --payment is omitted.")
@click.option("--max-periods", type=click.IntRange(min=1), default=None)
@click.option("--csv", "csv_path", type=click.Path(dir_okay=False, path_type=Path), default=None)
@click.pass_obj
def project_command(
    config: BaseConfig,
    principal: str,
    apr: str,
    payment: float | None,
    minimum: str,
    max_periods: int | None,
    csv_path: Path | None,
) -> None:
    """Month-by-month balance trajectory for one debt."""

    debt = _single_debt(principal, apr, minimum).to_debt()
    if payment is None:
        payment = default_chart_payment(debt.principal, debt.minimum_payment)
    horizon = max_periods or config.MAX_PERIODS

    series = project_balances(debt.principal, debt.annual_rate, payment, max_periods=horizon)
    logger.info("Projected balances", extra={"points": len(series), "horizon": horizon})
    if csv_path is not None:
        export_balance_series_csv(series=series, output_path=csv_path)

    _echo_json({"payment": payment, "labels": series.labels, "balances": series.balances})


if __name__ == "__main__":  # pragma: no cover
    main()
