"""Severance indemnity for liquidacion settlements.

Each component resolves in three steps:

    disabled             -> 0
    enabled, no override -> calculated value
    override present     -> override, whether or not the toggle is enabled

A manually entered amount always wins; disabling a component only zeroes
its calculated value.
"""

from typing import Optional

from .money import round_cents
from .schemas import (
    SeveranceBreakdown,
    SeveranceComponent,
    SeveranceOverrides,
    SeveranceSettings,
)
from .taxes.schemas import SeveranceRules


def resolve_component(enabled: bool, computed: float, override: Optional[float]) -> SeveranceComponent:
    calculated = round_cents(computed) if enabled else 0.0
    if override is not None:
        return SeveranceComponent(calculated=calculated, final=override, source="override")
    return SeveranceComponent(
        calculated=calculated,
        final=calculated,
        source="calculated" if enabled else "disabled",
    )


def premium_wage_base(sdi: float, minimum_wage: float, rules: SeveranceRules) -> float:
    """Seniority premium wage, capped at a multiple of the minimum wage."""
    return min(sdi, rules.seniority_premium_wage_cap * minimum_wage)


def calc_severance(
    sdi: float,
    seniority_years: int,
    days_worked_in_year: int,
    minimum_wage: float,
    rules: SeveranceRules,
    settings: Optional[SeveranceSettings] = None,
    overrides: Optional[SeveranceOverrides] = None,
) -> SeveranceBreakdown:
    """Compute the four severance components and their total.

    Args:
        sdi: Integrated daily wage
        seniority_years: Completed years of service
        days_worked_in_year: Days worked in the termination's calendar year
        minimum_wage: General daily minimum wage
        rules: Severance day counts
        settings: Enable toggles (all enabled by default)
        overrides: Manual amounts replacing calculated values
    """
    settings = settings or SeveranceSettings()
    overrides = overrides or SeveranceOverrides()

    base = premium_wage_base(sdi, minimum_wage, rules)
    proportional_premium_days = (rules.seniority_premium_days_per_year / 365) * days_worked_in_year

    ninety = resolve_component(
        settings.include_90_days,
        rules.indemnity_days * sdi,
        overrides.ninety_day_pay,
    )
    twenty = resolve_component(
        settings.include_20_days,
        rules.days_per_year * sdi * seniority_years,
        overrides.twenty_days_per_year,
    )
    premium = resolve_component(
        settings.include_seniority_premium,
        rules.seniority_premium_days_per_year * base * seniority_years,
        overrides.seniority_premium,
    )
    proportional = resolve_component(
        settings.include_proportional_seniority_premium,
        base * proportional_premium_days,
        overrides.proportional_seniority_premium,
    )

    total = round_cents(ninety.final + twenty.final + premium.final + proportional.final)

    return SeveranceBreakdown(
        ninety_day_pay=ninety,
        twenty_days_per_year=twenty,
        seniority_premium=premium,
        proportional_seniority_premium=proportional,
        premium_wage_base=round_cents(base),
        total=total,
    )
