"""Rich renderer for settlement results.

Transforms SDK results into an itemized statement: perceptions with their
taxable/exempt split, severance components, the ISR audit trail, IMSS
branches, and the net total.
"""

from typing import Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from finiquito.sdk.schemas import (
    BatchResult,
    IsrComputation,
    SettlementResult,
    SeveranceBreakdown,
)


PERCEPTION_LABELS = {
    "salary": "Sueldo",
    "aguinaldo": "Aguinaldo",
    "vacation": "Vacaciones",
    "vacation_premium": "Prima vacacional",
    "pending_vacation": "Vacaciones pendientes",
    "additional": "Percepcion adicional",
    "overtime": "Horas extra",
}

SEVERANCE_LABELS = {
    "ninety_day_pay": "Indemnizacion (90 dias)",
    "twenty_days_per_year": "20 dias por año",
    "seniority_premium": "Prima de antigüedad",
    "proportional_seniority_premium": "Prima de antigüedad proporcional",
}


def _fmt(value: Optional[float]) -> str:
    """Format a peso amount."""
    if value is None:
        return "-"
    if value < 0:
        return f"[red]-${abs(value):,.2f}[/red]"
    return f"${value:,.2f}"


def _fmt_days(value: Optional[float]) -> str:
    if value is None:
        return ""
    return f"{value:,.2f}"


def render_summary(console: Console, batch: BatchResult) -> None:
    """Render one row per employee with the net total."""
    table = Table(
        title=f"Resultados ({batch.calculation_type})",
        box=box.ROUNDED,
    )
    table.add_column("Empleado", style="bold")
    table.add_column("Codigo / Puesto", style="dim")
    table.add_column("Antigüedad", justify="right")
    table.add_column("Percepciones", justify="right")
    table.add_column("Deducciones", justify="right")
    table.add_column("Neto a pagar", justify="right", style="green")

    for result in batch.results:
        employee = result.employee
        table.add_row(
            employee.full_name,
            f"{employee.id} - {employee.position}",
            f"{result.seniority_years} años",
            _fmt(result.gross_total),
            _fmt(result.deduction_total),
            _fmt(result.net_total),
        )

    table.add_section()
    table.add_row("[bold]Total[/bold]", "", "", "", "", f"[bold]{_fmt(batch.net_total)}[/bold]")
    console.print(table)


def render_settlement(console: Console, result: SettlementResult) -> None:
    """Render the full itemized statement for one employee."""
    _render_header(console, result)
    _render_perceptions(console, result)
    if result.severance is not None:
        _render_severance(console, result.severance)
    _render_isr(console, result)
    _render_imss(console, result)
    _render_net(console, result)


def _render_header(console: Console, result: SettlementResult) -> None:
    employee = result.employee
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("key", style="dim")
    table.add_column("value")
    table.add_row("Nombre", employee.full_name)
    table.add_row("RFC", employee.rfc)
    table.add_row("Puesto", f"{employee.position} ({employee.location})")
    table.add_row("Alta / Baja", f"{employee.hire_date:%d/%m/%Y} - {employee.termination_date:%d/%m/%Y}")
    table.add_row("Salario diario", _fmt(employee.daily_salary))
    table.add_row("SDI", _fmt(result.sdi))
    table.add_row("Antigüedad", f"{result.seniority_years} años")
    table.add_row("UMA aplicada", _fmt(result.uma))
    console.print(Panel(table, title=f"Recibo de {result.calculation_type}", border_style="dim"))


def _render_perceptions(console: Console, result: SettlementResult) -> None:
    perceptions = result.perceptions
    table = Table(title="Percepciones (finiquito)", box=box.ROUNDED)
    table.add_column("Concepto", style="bold", min_width=24)
    table.add_column("Dias", justify="right")
    table.add_column("Importe", justify="right")
    table.add_column("Exento", justify="right")
    table.add_column("Gravado", justify="right")

    for name, line in perceptions.lines().items():
        if line.gross == 0 and name in ("pending_vacation", "additional", "overtime"):
            continue
        table.add_row(
            PERCEPTION_LABELS[name],
            _fmt_days(line.days),
            _fmt(line.gross),
            _fmt(line.exempt),
            _fmt(line.taxable),
        )

    table.add_section()
    table.add_row(
        "[bold]Subtotal[/bold]", "",
        f"[bold]{_fmt(perceptions.total)}[/bold]",
        _fmt(perceptions.exempt_total),
        _fmt(perceptions.taxable_total),
    )
    console.print(table)
    console.print(
        f"[dim]Dias trabajados en el año: {perceptions.days_worked_in_year} de "
        f"{perceptions.days_in_year}; dias desde el ultimo aniversario: "
        f"{perceptions.days_since_last_anniversary}; vacaciones por año: "
        f"{perceptions.vacation_days_per_year}[/dim]"
    )


def _render_severance(console: Console, severance: SeveranceBreakdown) -> None:
    table = Table(title="Percepciones (indemnizacion)", box=box.ROUNDED)
    table.add_column("Concepto", style="bold", min_width=24)
    table.add_column("Calculado", justify="right")
    table.add_column("Origen")
    table.add_column("Importe", justify="right")

    source_styles = {
        "calculated": "calculado",
        "disabled": "[dim]desactivado[/dim]",
        "override": "[magenta]manual[/magenta]",
    }
    for name, component in severance.components().items():
        table.add_row(
            SEVERANCE_LABELS[name],
            _fmt(component.calculated),
            source_styles[component.source],
            _fmt(component.final),
        )

    table.add_section()
    table.add_row("[bold]Subtotal[/bold]", "", "", f"[bold]{_fmt(severance.total)}[/bold]")
    console.print(table)
    console.print(f"[dim]Salario topado prima de antigüedad: {_fmt(severance.premium_wage_base)}[/dim]")


def _isr_rows(table: Table, isr: IsrComputation) -> None:
    upper = "en adelante" if isr.upper_limit is None else _fmt(isr.upper_limit)
    table.add_row("Base mensual", _fmt(isr.income))
    table.add_row("Limite inferior", f"{_fmt(isr.lower_limit)} - {upper}")
    table.add_row("Excedente", _fmt(isr.surplus))
    table.add_row("Tasa marginal", f"{isr.rate:.2%}")
    table.add_row("Impuesto marginal", _fmt(isr.marginal_tax))
    table.add_row("Cuota fija", _fmt(isr.fixed_quota))
    table.add_row("ISR antes de subsidio", _fmt(isr.tax_before_subsidy))
    table.add_row("Subsidio al empleo", f"{_fmt(isr.subsidy)} ({isr.subsidy_rate:.2%})")
    table.add_row("ISR mensual", _fmt(isr.tax))


def _render_isr(console: Console, result: SettlementResult) -> None:
    tax = result.tax
    table = Table(title="I.S.R.", box=box.ROUNDED, show_header=False)
    table.add_column("", style="bold", min_width=28)
    table.add_column("", justify="right")

    table.add_row("Ingreso gravado del periodo", _fmt(tax.period_taxable_income))
    table.add_row("Ingreso periodo anterior", _fmt(tax.prior_period_income))
    _isr_rows(table, tax.monthly)
    table.add_row("ISR retenido periodo anterior", _fmt(tax.prior_period_tax))
    table.add_row("[bold]ISR finiquito[/bold]", f"[bold]{_fmt(tax.ordinary)}[/bold]")

    if tax.severance is not None:
        severance = tax.severance
        table.add_section()
        table.add_row("Total indemnizacion", _fmt(severance.severance_income))
        table.add_row("Exento (90 UMA por año)", _fmt(severance.exempt))
        table.add_row("Gravado", _fmt(severance.taxable))
        table.add_row("Ultimo sueldo mensual ordinario", _fmt(severance.reference_income))
        table.add_row("ISR del sueldo mensual", _fmt(severance.reference.tax))
        table.add_row("Tasa efectiva", f"{severance.effective_rate:.4f}")
        table.add_row("[bold]ISR liquidacion[/bold]", f"[bold]{_fmt(severance.tax)}[/bold]")

    console.print(table)


def _render_imss(console: Console, result: SettlementResult) -> None:
    imss = result.social_security
    table = Table(title="I.M.S.S.", box=box.ROUNDED, show_header=False)
    table.add_column("", style="bold", min_width=28)
    table.add_column("", justify="right")
    table.add_row("SBC", _fmt(imss.sbc))
    table.add_row("Dias", _fmt_days(imss.salary_days))
    table.add_row("Excedente de 3 UMA", _fmt(imss.excess_over_threshold))
    table.add_row("Enfermedad y maternidad", _fmt(imss.sickness_maternity))
    table.add_row("Invalidez y vida", _fmt(imss.disability_life))
    table.add_row("Cesantia y vejez", _fmt(imss.unemployment_old_age))
    table.add_row("Prestaciones en dinero", _fmt(imss.cash_benefits))
    table.add_row("Gastos medicos pensionados", _fmt(imss.pensioner_medical))
    table.add_row("[bold]Total IMSS[/bold]", f"[bold]{_fmt(imss.total)}[/bold]")
    console.print(table)


def _render_net(console: Console, result: SettlementResult) -> None:
    table = Table(box=box.ROUNDED, show_header=False)
    table.add_column("", style="bold", min_width=28)
    table.add_column("", justify="right")
    table.add_row("Total percepciones", _fmt(result.gross_total))
    table.add_row("Total deducciones", _fmt(result.deduction_total))
    table.add_row("[bold]Neto a pagar[/bold]", f"[bold]{_fmt(result.net_total)}[/bold]")
    console.print(table)
    if result.net_total < 0:
        console.print(Panel(
            "[yellow]Net total is negative. Review the inputs for this employee.[/yellow]",
            title="Note",
            border_style="yellow",
        ))
