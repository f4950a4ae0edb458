"""Calculation CLI command for Finiquito Calc.

Reads a tab-separated roster and prints settlements, either as a summary of
every employee or as the itemized statement for one.
"""

import json

import click
from pydantic import ValidationError
from rich.console import Console

from finiquito.sdk import (
    AdjustmentInputs,
    BracketNotFoundError,
    NoValidRecordsError,
    SeveranceOverrides,
    SeveranceSettings,
    compute_batch,
    load_economic_config,
    load_roster,
)

from .renderers.settlement_renderer import render_settlement, render_summary


@click.command("calc")
@click.argument("roster_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--type", "calc_type", type=click.Choice(["finiquito", "liquidacion", "liquidación"]),
              default="finiquito", help="Calculation type (default: finiquito)")
@click.option("--employee", "employee_id", help="Show the itemized statement for this employee code")
@click.option("--uma", type=float, help="UMA for this run (overrides settings)")
@click.option("--minimum-wage", type=float, help="Daily minimum wage for this run (overrides settings)")
@click.option("--prior-income", help="Taxable income of the first half-month")
@click.option("--prior-tax", help="ISR withheld in the first half-month")
@click.option("--double-overtime", help="Extra double-rate overtime in pesos")
@click.option("--triple-overtime", help="Extra triple-rate overtime in pesos")
@click.option("--salary-days", help="Days of base salary to pay (default: derived from the date)")
@click.option("--additional", help="Additional fully taxable perception")
@click.option("--no-90-days", "no_90_days", is_flag=True, help="Exclude the 90-day indemnity")
@click.option("--no-20-days", "no_20_days", is_flag=True, help="Exclude 20 days per year of service")
@click.option("--no-seniority-premium", is_flag=True, help="Exclude the seniority premium")
@click.option("--no-proportional-premium", is_flag=True, help="Exclude the proportional seniority premium")
@click.option("--override-90-days", "override_90_days", help="Manual 90-day indemnity amount")
@click.option("--override-20-days", "override_20_days", help="Manual 20-days-per-year amount")
@click.option("--override-seniority-premium", help="Manual seniority premium amount")
@click.option("--override-proportional-premium", help="Manual proportional seniority premium amount")
@click.option("--format", "output_format", type=click.Choice(["table", "json"]), default="table",
              help="Output format (default: table)")
def calc(
    roster_file,
    calc_type,
    employee_id,
    uma,
    minimum_wage,
    prior_income,
    prior_tax,
    double_overtime,
    triple_overtime,
    salary_days,
    additional,
    no_90_days,
    no_20_days,
    no_seniority_premium,
    no_proportional_premium,
    override_90_days,
    override_20_days,
    override_seniority_premium,
    override_proportional_premium,
    output_format,
):
    """Calculate settlements for every employee in ROSTER_FILE.

    ROSTER_FILE is tab-separated text pasted from a spreadsheet, header line
    first. Adjustments and severance options apply to every employee
    calculated in this run.

    \b
    Examples:
        finiquito calc nomina.tsv
        finiquito calc nomina.tsv --type liquidacion --employee 1042
        finiquito calc nomina.tsv --employee 1042 --prior-income 7500 --prior-tax 412.30
        finiquito calc nomina.tsv --type liquidacion --no-90-days --format json
    """
    try:
        employees = load_roster(roster_file)
    except NoValidRecordsError as e:
        raise click.ClickException(str(e))

    if employee_id is not None:
        employees = [e for e in employees if e.id == employee_id]
        if not employees:
            raise click.ClickException(f"Employee '{employee_id}' not found in {roster_file}")

    try:
        config = load_economic_config()
    except (ValidationError, ValueError) as e:
        raise click.ClickException(f"Invalid settings: {e}")

    adjustments = AdjustmentInputs(
        prior_period_income=prior_income,
        prior_period_tax=prior_tax,
        extra_double_overtime=double_overtime,
        extra_triple_overtime=triple_overtime,
        salary_days_override=salary_days,
        additional_perception=additional,
    )
    settings = SeveranceSettings(
        include_90_days=not no_90_days,
        include_20_days=not no_20_days,
        include_seniority_premium=not no_seniority_premium,
        include_proportional_seniority_premium=not no_proportional_premium,
    )
    overrides = SeveranceOverrides(
        ninety_day_pay=override_90_days,
        twenty_days_per_year=override_20_days,
        seniority_premium=override_seniority_premium,
        proportional_seniority_premium=override_proportional_premium,
    )

    try:
        batch = compute_batch(
            employees,
            uma if uma is not None else config.uma,
            minimum_wage if minimum_wage is not None else config.minimum_wage,
            calc_type,
            adjustments=adjustments,
            severance_settings=settings,
            severance_overrides=overrides,
        )
    except (BracketNotFoundError, ValueError) as e:
        raise click.ClickException(str(e))

    if output_format == "json":
        if employee_id is not None:
            payload = batch.results[0].model_dump(mode="json")
        else:
            payload = batch.model_dump(mode="json")
            payload["net_total"] = batch.net_total
        click.echo(json.dumps(payload, indent=2, ensure_ascii=False))
        return

    console = Console(width=120)
    if employee_id is not None:
        render_settlement(console, batch.results[0])
    else:
        render_summary(console, batch)
