"""Proportional benefit accruals.

Computes the integrated daily wage (SDI) and the proportional vacation and
aguinaldo owed at termination. Amounts are rounded to cents where they are
computed because the exemption ceilings compare against rounded pesos.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional

from .dates import (
    days_in_year,
    days_since_last_anniversary,
    days_worked_in_year,
    default_salary_days,
)
from .money import round_cents
from .taxes.schemas import LaborRules


@dataclass(frozen=True)
class IntegratedWage:
    """SDI and the daily shares it is built from."""
    sdi: float
    daily_aguinaldo: float
    daily_vacation_premium: float
    vacation_days_per_year: int


@dataclass(frozen=True)
class ProportionalBenefits:
    """Day counts and peso amounts for the ordinary settlement."""
    salary_days: float
    salary_amount: float
    days_worked_in_year: int
    days_since_last_anniversary: int
    days_in_year: int
    vacation_days_per_year: int
    proportional_vacation_days_raw: float
    vacation_days: float
    vacation_amount: float
    vacation_premium_amount: float
    proportional_aguinaldo_days_raw: float
    aguinaldo_days: float
    aguinaldo_amount: float


def vacation_days_for_seniority(seniority_years: int, rules: LaborRules) -> int:
    """Vacation entitlement for the service year in progress.

    An employee with N completed years is working through year N + 1.
    """
    return rules.vacation_days.days_for_year(seniority_years + 1)


def integrated_daily_wage(daily_salary: float, seniority_years: int, rules: LaborRules) -> IntegratedWage:
    """SDI = salary + daily share of aguinaldo + daily share of vacation premium."""
    vacation_days = vacation_days_for_seniority(seniority_years, rules)
    daily_aguinaldo = daily_salary * rules.aguinaldo_days / 365
    daily_vacation_premium = daily_salary * vacation_days * rules.vacation_premium_rate / 365
    return IntegratedWage(
        sdi=round_cents(daily_salary + daily_aguinaldo + daily_vacation_premium),
        daily_aguinaldo=daily_aguinaldo,
        daily_vacation_premium=daily_vacation_premium,
        vacation_days_per_year=vacation_days,
    )


def resolve_salary_days(termination_date: date, override: Optional[float] = None) -> float:
    """Days of base salary to pay; an explicit override always wins, even 0."""
    if override is not None:
        return override
    return default_salary_days(termination_date)


def calc_proportional_benefits(
    hire_date: date,
    termination_date: date,
    daily_salary: float,
    seniority_years: int,
    rules: LaborRules,
    salary_days_override: Optional[float] = None,
) -> ProportionalBenefits:
    """Compute salary continuation, proportional vacation and aguinaldo."""
    year_length = days_in_year(termination_date.year)
    worked_in_year = days_worked_in_year(hire_date, termination_date)
    since_anniversary = days_since_last_anniversary(hire_date, termination_date)
    vacation_days_per_year = vacation_days_for_seniority(seniority_years, rules)

    salary_days = resolve_salary_days(termination_date, salary_days_override)

    raw_aguinaldo_days = (rules.aguinaldo_days / year_length) * worked_in_year
    aguinaldo_days = round_cents(raw_aguinaldo_days)

    raw_vacation_days = (vacation_days_per_year / year_length) * since_anniversary
    vacation_days = round_cents(raw_vacation_days)
    vacation_amount = round_cents(vacation_days * daily_salary)

    return ProportionalBenefits(
        salary_days=salary_days,
        salary_amount=round_cents(salary_days * daily_salary),
        days_worked_in_year=worked_in_year,
        days_since_last_anniversary=since_anniversary,
        days_in_year=year_length,
        vacation_days_per_year=vacation_days_per_year,
        proportional_vacation_days_raw=raw_vacation_days,
        vacation_days=vacation_days,
        vacation_amount=vacation_amount,
        vacation_premium_amount=round_cents(vacation_amount * rules.vacation_premium_rate),
        proportional_aguinaldo_days_raw=raw_aguinaldo_days,
        aguinaldo_days=aguinaldo_days,
        aguinaldo_amount=round_cents(aguinaldo_days * daily_salary),
    )
