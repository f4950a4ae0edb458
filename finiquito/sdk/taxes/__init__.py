"""taxes - Statutory tables and withholding logic.

Scope:
- Year-specific rules loaded from taxes/rules/{year}.yaml (LFT, LISR, LSS)
- ISR withholding on ordinary perceptions and on severance
- IMSS employee contributions

Constraints:
- Pure calculation - no settings.json access (that's in config)
- Receives amounts, returns itemized results

Usage:
    from finiquito.sdk.taxes import load_tax_rules, calc_monthly_isr

    rules = load_tax_rules(2026)
    isr = calc_monthly_isr(8000.00, 117.31, rules.isr.subsidy.rate, rules.isr)
"""

# Rules schemas and loading
from .schemas import TaxRules, IsrBracket
from .tables import (
    REFERENCE_YEAR,
    load_tax_rules,
    get_available_years,
    is_first_month_of_reference_year,
)

# ISR withholding
from .isr import (
    BracketNotFoundError,
    find_bracket,
    subsidy_rate_for,
    calc_monthly_isr,
    calc_ordinary_isr,
    calc_severance_isr,
)

# IMSS contributions
from .imss import calc_imss

__all__ = [
    # Rules
    "TaxRules",
    "IsrBracket",
    "REFERENCE_YEAR",
    "load_tax_rules",
    "get_available_years",
    "is_first_month_of_reference_year",
    # ISR
    "BracketNotFoundError",
    "find_bracket",
    "subsidy_rate_for",
    "calc_monthly_isr",
    "calc_ordinary_isr",
    "calc_severance_isr",
    # IMSS
    "calc_imss",
]
