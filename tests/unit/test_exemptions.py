"""Tests for taxable/exempt splitting."""

from datetime import date

import pytest

from finiquito.sdk.exemptions import (
    aguinaldo_ceiling,
    resolve_uma,
    severance_exemption,
    split_exempt,
    split_overtime,
    vacation_premium_ceiling,
)
from finiquito.sdk.taxes import load_tax_rules


@pytest.fixture
def rules():
    return load_tax_rules()


class TestResolveUma:

    def test_january_of_reference_year_uses_prior_uma(self, rules):
        assert resolve_uma(date(2026, 1, 31), 117.31, rules) == 113.14

    def test_february_uses_supplied_uma(self, rules):
        assert resolve_uma(date(2026, 2, 1), 117.31, rules) == 117.31

    def test_january_of_other_year_uses_supplied_uma(self, rules):
        assert resolve_uma(date(2025, 1, 10), 117.31, rules) == 117.31


class TestSplitExempt:

    def test_no_ceiling_is_fully_taxable(self):
        line = split_exempt(2500.0, None, days=5)
        assert (line.gross, line.taxable, line.exempt, line.days) == (2500.0, 2500.0, 0.0, 5)

    def test_below_ceiling_is_fully_exempt(self):
        line = split_exempt(1078.75, 1759.65)
        assert line.exempt == 1078.75
        assert line.taxable == 0.0

    def test_above_ceiling_splits(self, rules):
        line = split_exempt(3525.0, aguinaldo_ceiling(117.31, rules))
        assert line.exempt == 3519.30
        assert line.taxable == 5.70
        assert line.taxable + line.exempt == pytest.approx(line.gross)

    def test_ceilings(self, rules):
        assert aguinaldo_ceiling(117.31, rules) == pytest.approx(3519.30)
        assert vacation_premium_ceiling(117.31, rules) == pytest.approx(1759.65)


class TestOvertime:

    def test_half_of_double_rate_is_exempt(self, rules):
        line = split_overtime(400.0, 0.0, 117.31, rules)
        assert line.exempt == 200.0
        assert line.taxable == 200.0

    def test_exemption_capped_at_five_uma(self, rules):
        line = split_overtime(2000.0, 0.0, 117.31, rules)
        assert line.exempt == 586.55
        assert line.taxable == 1413.45

    def test_triple_rate_fully_taxable(self, rules):
        line = split_overtime(0.0, 300.0, 117.31, rules)
        assert line.exempt == 0.0
        assert line.taxable == 300.0


class TestSeveranceExemption:

    def test_ninety_uma_per_year(self, rules):
        assert severance_exemption(117.31, 4, rules) == 42231.60

    def test_zero_seniority(self, rules):
        assert severance_exemption(117.31, 0, rules) == 0.0
