"""Tests for statutory rule tables."""

import pytest
from pydantic import ValidationError

from finiquito.sdk.taxes import REFERENCE_YEAR, get_available_years, load_tax_rules
from finiquito.sdk.taxes.schemas import IsrRules


def make_isr(brackets):
    return {
        "monthly_factor": 30.4,
        "brackets": brackets,
        "subsidy": {"income_limit": 11492.66, "rate_first_month": 0.1559, "rate": 0.1502},
    }


class TestLoadRules:

    def test_reference_year_available(self):
        assert REFERENCE_YEAR in get_available_years()

    def test_loads_and_caches(self):
        rules = load_tax_rules(REFERENCE_YEAR)
        assert rules is load_tax_rules(REFERENCE_YEAR)
        assert rules.reference_year == REFERENCE_YEAR
        assert len(rules.isr.brackets) == 11
        assert rules.isr.brackets[0].lower_limit == 0

    def test_missing_year(self):
        with pytest.raises(FileNotFoundError):
            load_tax_rules(1999)


class TestBracketValidation:

    def test_contiguous_table_accepted(self):
        IsrRules.model_validate(make_isr([
            {"lower_limit": 0, "upper_limit": 100.00, "fixed_quota": 0, "rate": 0.1},
            {"lower_limit": 100.01, "upper_limit": None, "fixed_quota": 10, "rate": 0.2},
        ]))

    def test_gap_rejected(self):
        with pytest.raises(ValidationError, match="not contiguous"):
            IsrRules.model_validate(make_isr([
                {"lower_limit": 0, "upper_limit": 100.00, "fixed_quota": 0, "rate": 0.1},
                {"lower_limit": 150.00, "upper_limit": None, "fixed_quota": 10, "rate": 0.2},
            ]))

    def test_must_start_at_zero(self):
        with pytest.raises(ValidationError, match="start at 0"):
            IsrRules.model_validate(make_isr([
                {"lower_limit": 0.01, "upper_limit": None, "fixed_quota": 0, "rate": 0.1},
            ]))

    def test_last_must_be_unbounded(self):
        with pytest.raises(ValidationError, match="unbounded"):
            IsrRules.model_validate(make_isr([
                {"lower_limit": 0, "upper_limit": 100.00, "fixed_quota": 0, "rate": 0.1},
            ]))

    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError):
            IsrRules.model_validate({**make_isr([
                {"lower_limit": 0, "upper_limit": None, "fixed_quota": 0, "rate": 0.1},
            ]), "surprise": 1})


class TestRulesImmutable:

    def test_cached_rules_cannot_be_modified(self):
        rules = load_tax_rules(REFERENCE_YEAR)
        with pytest.raises(ValidationError):
            rules.minimum_wage = 1.0
        with pytest.raises(ValidationError):
            rules.isr.subsidy.rate = 0.0
        assert load_tax_rules(REFERENCE_YEAR).minimum_wage == 315.04
