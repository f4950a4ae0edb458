"""ISR (income tax) withholding on settlements.

Two methods apply:

- Ordinary perceptions are taxed with the monthly Art. 96 table plus the
  employment subsidy. Terminations after the 15th add the first half-month's
  taxable income and credit the tax already withheld on it.
- Severance (liquidacion only) is taxed at a flat rate: the effective rate
  of a regular month (daily salary x 30) run through the same table, applied
  to the severance amount above its 90-UMA-per-year exemption.
"""

import logging
from datetime import date

from ..money import round_cents, round_to
from ..schemas import IsrComputation, SeveranceTax
from .schemas import IsrBracket, IsrRules, TaxRules
from .tables import is_first_month_of_reference_year

logger = logging.getLogger(__name__)

DAYS_PER_REFERENCE_MONTH = 30
EFFECTIVE_RATE_PLACES = 4


class BracketNotFoundError(Exception):
    """Raised when no ISR bracket covers an income amount."""
    pass


def find_bracket(income: float, rules: IsrRules) -> IsrBracket:
    """Locate the bracket containing a monthly income.

    Each bracket covers [lower_limit, next lower_limit); the top bracket is
    unbounded. The one-cent step between a statutory upper limit and the next
    lower limit belongs to the lower bracket.

    Raises:
        BracketNotFoundError: If the income is below the first lower limit
    """
    found = None
    for bracket in rules.brackets:
        if income >= bracket.lower_limit:
            found = bracket
        else:
            break
    if found is None:
        raise BracketNotFoundError(
            f"No ISR bracket covers monthly income {income:.2f} "
            f"(table starts at {rules.brackets[0].lower_limit:.2f})"
        )
    return found


def subsidy_rate_for(termination_date: date, rules: TaxRules) -> float:
    """Subsidy rate for the month, higher in the reference year's first month."""
    if is_first_month_of_reference_year(termination_date, rules):
        return rules.isr.subsidy.rate_first_month
    return rules.isr.subsidy.rate


def calc_monthly_isr(income: float, uma: float, subsidy_rate: float, rules: IsrRules) -> IsrComputation:
    """Run one income through the monthly table and the employment subsidy.

    The subsidy is granted when income is at or below the ceiling.
    """
    bracket = find_bracket(income, rules)

    surplus = round_cents(income - bracket.lower_limit)
    marginal_tax = round_cents(surplus * bracket.rate)
    tax_before_subsidy = round_cents(marginal_tax + bracket.fixed_quota)

    if income <= rules.subsidy.income_limit:
        applied_rate = subsidy_rate
        exact_subsidy = uma * subsidy_rate * rules.monthly_factor
    else:
        applied_rate = 0.0
        exact_subsidy = 0.0
    subsidy = round_cents(exact_subsidy)

    tax = round_cents(max(0.0, tax_before_subsidy - subsidy))
    exact_tax = max(
        0.0,
        (income - bracket.lower_limit) * bracket.rate + bracket.fixed_quota - exact_subsidy,
    )

    logger.debug(
        f"ISR on {income:.2f}: bracket {bracket.lower_limit:.2f} @ {bracket.rate:.4f}, "
        f"before subsidy {tax_before_subsidy:.2f}, subsidy {subsidy:.2f}, tax {tax:.2f}"
    )

    return IsrComputation(
        income=round_cents(income),
        lower_limit=bracket.lower_limit,
        upper_limit=bracket.upper_limit,
        rate=bracket.rate,
        surplus=surplus,
        marginal_tax=marginal_tax,
        fixed_quota=bracket.fixed_quota,
        tax_before_subsidy=tax_before_subsidy,
        subsidy_rate=applied_rate,
        subsidy=subsidy,
        tax=tax,
        exact_tax=exact_tax,
    )


def calc_severance_isr(
    severance_income: float,
    severance_exempt: float,
    daily_salary: float,
    uma: float,
    subsidy_rate: float,
    rules: IsrRules,
) -> SeveranceTax:
    """Tax severance at the last ordinary month's effective rate.

    The rate divides the unrounded monthly tax by the unrounded reference
    income; only the rate and the resulting tax are rounded.

    Args:
        severance_income: Total severance paid
        severance_exempt: Exempt portion (90 UMA per year of service)
        daily_salary: Daily base salary
        uma: UMA in force
        subsidy_rate: Subsidy rate for the termination month
        rules: ISR table
    """
    taxable = round_cents(max(0.0, severance_income - severance_exempt))
    reference_income = daily_salary * DAYS_PER_REFERENCE_MONTH
    reference = calc_monthly_isr(reference_income, uma, subsidy_rate, rules)

    if reference_income > 0:
        effective_rate = round_to(reference.exact_tax / reference_income, EFFECTIVE_RATE_PLACES)
    else:
        effective_rate = 0.0

    return SeveranceTax(
        severance_income=round_cents(severance_income),
        exempt=round_cents(severance_exempt),
        taxable=taxable,
        reference_income=reference_income,
        reference=reference,
        effective_rate=effective_rate,
        tax=round_cents(taxable * effective_rate),
    )


def calc_ordinary_isr(
    period_taxable_income: float,
    termination_date: date,
    uma: float,
    rules: TaxRules,
    prior_period_income: float = 0,
    prior_period_tax: float = 0,
) -> dict:
    """Withholding on ordinary perceptions for the termination half-month.

    Prior-period amounts only count for terminations after the 15th.

    Returns:
        Dict with:
            - prior_period_income / prior_period_tax: amounts actually applied
            - monthly: IsrComputation on the combined monthly income
            - withheld: max(0, monthly tax - prior-period tax)
    """
    if termination_date.day <= 15:
        prior_period_income = 0.0
        prior_period_tax = 0.0

    monthly_income = period_taxable_income + prior_period_income
    monthly = calc_monthly_isr(monthly_income, uma, subsidy_rate_for(termination_date, rules), rules.isr)
    withheld = round_cents(max(0.0, monthly.tax - prior_period_tax))

    return {
        "prior_period_income": round_cents(prior_period_income),
        "prior_period_tax": round_cents(prior_period_tax),
        "monthly": monthly,
        "withheld": withheld,
    }
