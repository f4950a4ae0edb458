"""Statutory rule table loading."""

from datetime import date
from functools import lru_cache
from pathlib import Path

import yaml

from .schemas import TaxRules


REFERENCE_YEAR = 2026


def _get_rules_dir() -> Path:
    """Get the directory holding the per-year rule files."""
    return Path(__file__).parent / "rules"


def get_available_years() -> list[int]:
    """Get sorted list of available rule years (descending)."""
    years = [int(p.stem) for p in _get_rules_dir().glob("*.yaml") if p.stem.isdigit()]
    return sorted(years, reverse=True)


@lru_cache(maxsize=None)
def load_tax_rules(year: int = REFERENCE_YEAR) -> TaxRules:
    """Load and validate rules for a specific year from rules/YYYY.yaml.

    Raises:
        FileNotFoundError: If no rule file exists for the year
        pydantic.ValidationError: If the file does not match the schema
    """
    config_file = _get_rules_dir() / f"{year}.yaml"
    if not config_file.exists():
        raise FileNotFoundError(f"Tax rules file not found for year {year}: {config_file}")

    with open(config_file, "r") as f:
        return TaxRules.model_validate(yaml.safe_load(f))


def is_first_month_of_reference_year(termination_date: date, rules: TaxRules) -> bool:
    """True for terminations in January of the rules' reference year."""
    return termination_date.year == rules.reference_year and termination_date.month == 1
