"""IMSS employee contributions for the settlement pay period."""

from ..money import round_cents
from ..schemas import SocialSecurityContribution
from .schemas import ImssRules


def calc_imss(sdi: float, uma: float, salary_days: float, rules: ImssRules) -> SocialSecurityContribution:
    """Employee share of the five IMSS branches for the days being paid.

    The contribution base (SBC) is the SDI capped at 25 UMA. Only the
    sickness/maternity branch is charged on the excess over 3 UMA; the
    other branches use the full SBC.

    Args:
        sdi: Integrated daily wage
        uma: UMA in force
        salary_days: Days of salary in this settlement
        rules: Caps and rates

    Returns:
        SocialSecurityContribution with per-branch amounts rounded to cents
        and the total rounded from the unrounded branch sum.
    """
    sbc = min(sdi, rules.sbc_uma_cap * uma)
    excess = max(0.0, sbc - rules.excess_uma_threshold * uma)
    rates = rules.rates

    branches = {
        "sickness_maternity": excess * rates.sickness_maternity_excess * salary_days,
        "disability_life": sbc * rates.disability_life * salary_days,
        "unemployment_old_age": sbc * rates.unemployment_old_age * salary_days,
        "cash_benefits": sbc * rates.cash_benefits * salary_days,
        "pensioner_medical": sbc * rates.pensioner_medical * salary_days,
    }

    return SocialSecurityContribution(
        sbc=round_cents(sbc),
        uma=uma,
        salary_days=salary_days,
        excess_over_threshold=round_cents(excess),
        total=round_cents(sum(branches.values())),
        **{name: round_cents(amount) for name, amount in branches.items()},
    )
