"""Taxable/exempt splitting of settlement perceptions.

Ceilings are UMA multiples. The UMA applied is resolved here: a termination
in the first month of the reference year still uses the prior year's UMA,
since the new value only takes effect in February.
"""

from datetime import date
from typing import Optional

from .money import round_cents
from .schemas import PerceptionLine
from .taxes.schemas import TaxRules
from .taxes.tables import is_first_month_of_reference_year


def resolve_uma(termination_date: date, uma: float, rules: TaxRules) -> float:
    """UMA in force on the termination date."""
    if is_first_month_of_reference_year(termination_date, rules):
        return rules.uma.prior_year
    return uma


def split_exempt(gross: float, ceiling: Optional[float], days: Optional[float] = None) -> PerceptionLine:
    """Split a perception against its exemption ceiling.

    `ceiling=None` means the perception has no exemption and is fully taxable.
    """
    gross = round_cents(gross)
    if ceiling is None:
        return PerceptionLine(days=days, gross=gross, taxable=gross, exempt=0.0)
    exempt = round_cents(min(gross, ceiling))
    return PerceptionLine(
        days=days,
        gross=gross,
        taxable=round_cents(gross - exempt),
        exempt=exempt,
        ceiling=round_cents(ceiling),
    )


def aguinaldo_ceiling(uma: float, rules: TaxRules) -> float:
    return rules.exemptions.aguinaldo_uma * uma


def vacation_premium_ceiling(uma: float, rules: TaxRules) -> float:
    return rules.exemptions.vacation_premium_uma * uma


def split_overtime(double_rate: float, triple_rate: float, uma: float, rules: TaxRules) -> PerceptionLine:
    """Overtime split: half of double-rate pay up to 5 UMA is exempt.

    Triple-rate overtime is always fully taxable.
    """
    ceiling = min(rules.exemptions.overtime_exempt_share * double_rate, rules.exemptions.overtime_uma * uma)
    ceiling = max(0.0, ceiling)
    gross = round_cents(double_rate + triple_rate)
    exempt = round_cents(min(gross, ceiling))
    return PerceptionLine(
        gross=gross,
        taxable=round_cents(gross - exempt),
        exempt=exempt,
        ceiling=round_cents(ceiling),
    )


def severance_exemption(uma: float, seniority_years: int, rules: TaxRules) -> float:
    """Exempt portion of severance income: 90 UMA per year of service."""
    return round_cents(rules.exemptions.severance_uma_per_year * uma * seniority_years)
