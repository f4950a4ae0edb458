"""Settlement calculation engine.

Turns an employee record plus economic configuration into a fully itemized
finiquito or liquidacion:

    dates -> proportional benefits -> exemptions -> severance / ISR / IMSS -> totals

Every call is independent: nothing is cached between calls except the
parsed statutory tables, and no input is mutated. A negative net total is
returned as-is; it means the inputs need review.
"""

import logging
from typing import Iterable, List, Optional

from .benefits import calc_proportional_benefits, integrated_daily_wage
from .dates import days_worked_in_year, seniority_years as calc_seniority_years
from .exemptions import (
    aguinaldo_ceiling,
    resolve_uma,
    severance_exemption,
    split_exempt,
    split_overtime,
    vacation_premium_ceiling,
)
from .money import round_cents
from .schemas import (
    AdjustmentInputs,
    BatchResult,
    EmployeeRecord,
    PerceptionBreakdown,
    SettlementResult,
    SeveranceBreakdown,
    SeveranceOverrides,
    SeveranceSettings,
    TaxWithholding,
    normalize_calculation_type,
)
from .severance import calc_severance
from .taxes import (
    TaxRules,
    calc_imss,
    calc_ordinary_isr,
    calc_severance_isr,
    load_tax_rules,
    subsidy_rate_for,
)

logger = logging.getLogger(__name__)


def build_perceptions(
    employee: EmployeeRecord,
    seniority: int,
    uma: float,
    adjustments: AdjustmentInputs,
    rules: TaxRules,
) -> PerceptionBreakdown:
    """Ordinary perceptions with their taxable/exempt split."""
    benefits = calc_proportional_benefits(
        employee.hire_date,
        employee.termination_date,
        employee.daily_salary,
        seniority,
        rules.labor,
        salary_days_override=adjustments.salary_days_override,
    )

    lines = {
        "salary": split_exempt(benefits.salary_amount, None, days=benefits.salary_days),
        "aguinaldo": split_exempt(
            benefits.aguinaldo_amount, aguinaldo_ceiling(uma, rules), days=benefits.aguinaldo_days
        ),
        "vacation": split_exempt(benefits.vacation_amount, None, days=benefits.vacation_days),
        "vacation_premium": split_exempt(
            benefits.vacation_premium_amount, vacation_premium_ceiling(uma, rules)
        ),
        "pending_vacation": split_exempt(
            employee.pending_vacation_days * employee.daily_salary,
            None,
            days=employee.pending_vacation_days,
        ),
        "additional": split_exempt(adjustments.additional_perception, None),
        "overtime": split_overtime(
            employee.overtime + adjustments.extra_double_overtime,
            adjustments.extra_triple_overtime,
            uma,
            rules,
        ),
    }

    return PerceptionBreakdown(
        **lines,
        total=round_cents(sum(line.gross for line in lines.values())),
        taxable_total=round_cents(sum(line.taxable for line in lines.values())),
        exempt_total=round_cents(sum(line.exempt for line in lines.values())),
        days_worked_in_year=benefits.days_worked_in_year,
        days_since_last_anniversary=benefits.days_since_last_anniversary,
        days_in_year=benefits.days_in_year,
        vacation_days_per_year=benefits.vacation_days_per_year,
        proportional_vacation_days=benefits.proportional_vacation_days_raw,
        proportional_aguinaldo_days=benefits.proportional_aguinaldo_days_raw,
    )


def compute_settlement(
    employee: EmployeeRecord,
    uma: float,
    minimum_wage: float,
    calculation_type: str = "finiquito",
    adjustments: Optional[AdjustmentInputs] = None,
    severance_settings: Optional[SeveranceSettings] = None,
    severance_overrides: Optional[SeveranceOverrides] = None,
    rules: Optional[TaxRules] = None,
) -> SettlementResult:
    """Compute a finiquito or liquidacion for one employee.

    Args:
        employee: Employee record
        uma: Current UMA supplied by the caller (replaced by the prior year's
             UMA for terminations in the reference year's first month)
        minimum_wage: General daily minimum wage
        calculation_type: 'finiquito' or 'liquidacion' ('liquidación' accepted)
        adjustments: Prior-period ISR data, extra overtime, salary-days
                     override, additional perception
        severance_settings: Enable toggles (liquidacion only)
        severance_overrides: Manual severance amounts (liquidacion only)
        rules: Statutory tables (defaults to the packaged reference year)

    Returns:
        SettlementResult with every intermediate amount

    Raises:
        ValueError: Unknown calculation type
        BracketNotFoundError: Taxable income outside the ISR table
    """
    calc_type = normalize_calculation_type(calculation_type)
    adjustments = adjustments or AdjustmentInputs()
    rules = rules or load_tax_rules()

    termination = employee.termination_date
    effective_uma = resolve_uma(termination, uma, rules)
    if effective_uma != uma:
        logger.debug(f"{employee.id}: termination {termination} uses prior-year UMA {effective_uma}")

    seniority = calc_seniority_years(employee.hire_date, termination)
    wage = integrated_daily_wage(employee.daily_salary, seniority, rules.labor)

    perceptions = build_perceptions(employee, seniority, effective_uma, adjustments, rules)

    severance: Optional[SeveranceBreakdown] = None
    if calc_type == "liquidacion":
        severance = calc_severance(
            wage.sdi,
            seniority,
            days_worked_in_year(employee.hire_date, termination),
            minimum_wage,
            rules.severance,
            settings=severance_settings,
            overrides=severance_overrides,
        )

    ordinary = calc_ordinary_isr(
        perceptions.taxable_total,
        termination,
        effective_uma,
        rules,
        prior_period_income=adjustments.prior_period_income,
        prior_period_tax=adjustments.prior_period_tax,
    )

    severance_tax = None
    if severance is not None:
        severance_tax = calc_severance_isr(
            severance.total,
            severance_exemption(effective_uma, seniority, rules),
            employee.daily_salary,
            effective_uma,
            subsidy_rate_for(termination, rules),
            rules.isr,
        )

    tax = TaxWithholding(
        period_taxable_income=perceptions.taxable_total,
        prior_period_income=ordinary["prior_period_income"],
        prior_period_tax=ordinary["prior_period_tax"],
        monthly=ordinary["monthly"],
        ordinary=ordinary["withheld"],
        severance=severance_tax,
        total=round_cents(ordinary["withheld"] + (severance_tax.tax if severance_tax else 0.0)),
    )

    imss = calc_imss(wage.sdi, effective_uma, perceptions.salary.days, rules.imss)

    gross_total = round_cents(perceptions.total + (severance.total if severance else 0.0))
    deduction_total = round_cents(tax.total + imss.total)
    net_total = round_cents(gross_total - deduction_total)

    if net_total < 0:
        logger.warning(f"{employee.id}: negative net total {net_total:.2f}, review inputs")

    logger.debug(
        f"{employee.id} {calc_type}: gross {gross_total:.2f} - isr {tax.total:.2f} "
        f"- imss {imss.total:.2f} = {net_total:.2f}"
    )

    return SettlementResult(
        employee=employee,
        calculation_type=calc_type,
        uma=effective_uma,
        minimum_wage=minimum_wage,
        seniority_years=seniority,
        sdi=wage.sdi,
        daily_aguinaldo=wage.daily_aguinaldo,
        daily_vacation_premium=wage.daily_vacation_premium,
        perceptions=perceptions,
        severance=severance,
        tax=tax,
        social_security=imss,
        gross_total=gross_total,
        deduction_total=deduction_total,
        net_total=net_total,
    )


def compute_batch(
    employees: Iterable[EmployeeRecord],
    uma: float,
    minimum_wage: float,
    calculation_type: str = "finiquito",
    adjustments: Optional[AdjustmentInputs] = None,
    severance_settings: Optional[SeveranceSettings] = None,
    severance_overrides: Optional[SeveranceOverrides] = None,
    rules: Optional[TaxRules] = None,
) -> BatchResult:
    """Compute settlements for several employees with shared inputs."""
    calc_type = normalize_calculation_type(calculation_type)
    rules = rules or load_tax_rules()
    results: List[SettlementResult] = [
        compute_settlement(
            employee,
            uma,
            minimum_wage,
            calc_type,
            adjustments=adjustments,
            severance_settings=severance_settings,
            severance_overrides=severance_overrides,
            rules=rules,
        )
        for employee in employees
    ]
    return BatchResult(calculation_type=calc_type, results=results)
