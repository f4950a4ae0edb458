"""Tests for the settlement engine.

Expected amounts are worked by hand from the statutory tables for an
employee earning 500.00 a day, hired 15/01/2020.
"""

from datetime import date

import pytest

from finiquito.sdk import (
    AdjustmentInputs,
    BracketNotFoundError,
    EmployeeRecord,
    SeveranceOverrides,
    SeveranceSettings,
    compute_batch,
    compute_settlement,
    load_tax_rules,
)

UMA = 117.31
MINIMUM_WAGE = 315.04


def make_employee(termination=date(2024, 6, 20), hire=date(2020, 1, 15), **kwargs):
    """Create an employee record for testing."""
    fields = {
        "id": "1042",
        "full_name": "MARIA LOPEZ HERNANDEZ",
        "rfc": "LOHM850101AB1",
        "position": "AUXILIAR",
        "location": "MONTERREY",
        "hire_date": hire,
        "termination_date": termination,
        "daily_salary": 500.0,
    }
    fields.update(kwargs)
    return EmployeeRecord(**fields)


class TestFiniquito:
    """Voluntary separation mid-year."""

    @pytest.fixture
    def result(self):
        return compute_settlement(make_employee(), UMA, MINIMUM_WAGE, "finiquito")

    def test_seniority_and_sdi(self, result):
        assert result.seniority_years == 4
        assert result.sdi == 527.40
        assert result.uma == UMA

    def test_perceptions(self, result):
        p = result.perceptions
        assert p.salary.gross == 2500.00
        assert p.aguinaldo.days == 7.05
        assert p.aguinaldo.gross == 3525.00
        assert p.aguinaldo.exempt == 3519.30
        assert p.aguinaldo.taxable == 5.70
        assert p.vacation.days == 8.63
        assert p.vacation.gross == 4315.00
        assert p.vacation_premium.gross == 1078.75
        assert p.vacation_premium.taxable == 0.0
        assert p.total == 11418.75
        assert p.taxable_total == 6820.70
        assert p.vacation_days_per_year == 20
        assert p.days_worked_in_year == 172
        assert p.days_since_last_anniversary == 158

    def test_subsidy_covers_isr(self, result):
        assert result.tax.monthly.tax_before_subsidy == 398.69
        assert result.tax.monthly.subsidy == 535.65
        assert result.tax.ordinary == 0.0
        assert result.tax.severance is None

    def test_net(self, result):
        assert result.severance is None
        assert result.social_security.total == 66.14
        assert result.gross_total == 11418.75
        assert result.deduction_total == 66.14
        assert result.net_total == 11352.61


class TestLiquidacion:
    """Separation with severance and a manual 90-day amount."""

    @pytest.fixture
    def result(self):
        return compute_settlement(
            make_employee(),
            UMA,
            MINIMUM_WAGE,
            "liquidacion",
            severance_overrides=SeveranceOverrides(ninety_day_pay=10000),
        )

    def test_severance(self, result):
        s = result.severance
        assert s.ninety_day_pay.source == "override"
        assert s.twenty_days_per_year.final == 42192.00
        assert s.seniority_premium.final == 25315.20
        assert s.proportional_seniority_premium.final == 2982.34
        assert s.total == 80489.54

    def test_severance_tax(self, result):
        t = result.tax.severance
        assert t.exempt == 42231.60
        assert t.taxable == 38257.94
        assert t.effective_rate == 0.0935
        assert t.tax == 3577.12

    def test_net(self, result):
        assert result.gross_total == 91908.29
        assert result.deduction_total == 3643.26
        assert result.net_total == 88265.03

    def test_accented_type(self):
        result = compute_settlement(make_employee(), UMA, MINIMUM_WAGE, "liquidación")
        assert result.calculation_type == "liquidacion"
        assert result.severance is not None


class TestFirstMonthOfReferenceYear:
    """Termination in January 2026 uses the prior UMA and first-month subsidy."""

    @pytest.fixture
    def result(self):
        return compute_settlement(make_employee(termination=date(2026, 1, 20)), UMA, MINIMUM_WAGE)

    def test_prior_uma_applied(self, result):
        assert result.uma == 113.14
        assert result.social_security.uma == 113.14

    def test_first_month_subsidy(self, result):
        assert result.tax.monthly.subsidy_rate == 0.1559
        assert result.tax.monthly.subsidy == 536.21

    def test_perceptions(self, result):
        p = result.perceptions
        assert result.seniority_years == 6
        assert p.vacation_days_per_year == 22
        assert p.days_worked_in_year == 20
        assert p.aguinaldo.gross == 410.00
        assert p.aguinaldo.taxable == 0.0
        assert p.vacation.gross == 180.00
        assert p.vacation_premium.gross == 45.00
        assert p.taxable_total == 2680.00
        assert result.tax.ordinary == 0.0


class TestAdjustments:

    def test_non_numeric_strings_become_zero(self):
        adjustments = AdjustmentInputs(
            prior_period_income="abc",
            prior_period_tax="",
            extra_double_overtime=None,
            additional_perception="1,000",
            salary_days_override="n/a",
        )
        assert adjustments.prior_period_income == 0.0
        assert adjustments.prior_period_tax == 0.0
        assert adjustments.extra_double_overtime == 0.0
        assert adjustments.additional_perception == 1000.0
        assert adjustments.salary_days_override is None

    def test_additional_perception_fully_taxable(self):
        base = compute_settlement(make_employee(), UMA, MINIMUM_WAGE)
        result = compute_settlement(
            make_employee(), UMA, MINIMUM_WAGE, adjustments=AdjustmentInputs(additional_perception=1000)
        )
        assert result.perceptions.taxable_total == pytest.approx(base.perceptions.taxable_total + 1000)

    def test_salary_days_override_drives_imss(self):
        result = compute_settlement(
            make_employee(), UMA, MINIMUM_WAGE, adjustments=AdjustmentInputs(salary_days_override=0)
        )
        assert result.perceptions.salary.gross == 0.0
        assert result.social_security.total == 0.0

    def test_prior_period_tax_credited(self):
        adjustments = AdjustmentInputs(prior_period_income=9000, prior_period_tax=400)
        result = compute_settlement(make_employee(), UMA, MINIMUM_WAGE, adjustments=adjustments)
        assert result.tax.monthly.income == 15820.70
        assert result.tax.ordinary == pytest.approx(result.tax.monthly.tax - 400)

    def test_overtime_from_record_and_adjustment(self):
        result = compute_settlement(
            make_employee(overtime=300.0),
            UMA,
            MINIMUM_WAGE,
            adjustments=AdjustmentInputs(extra_double_overtime=100, extra_triple_overtime=50),
        )
        assert result.perceptions.overtime.gross == 450.0
        assert result.perceptions.overtime.exempt == 200.0

    def test_pending_vacation_days(self):
        result = compute_settlement(make_employee(pending_vacation_days=3), UMA, MINIMUM_WAGE)
        assert result.perceptions.pending_vacation.gross == 1500.0
        assert result.perceptions.pending_vacation.taxable == 1500.0


class TestSettlementProperties:

    @pytest.mark.parametrize("termination", [
        date(2024, 6, 20), date(2024, 6, 10), date(2026, 1, 5), date(2025, 12, 31),
    ])
    @pytest.mark.parametrize("calc_type", ["finiquito", "liquidacion"])
    def test_net_identity(self, termination, calc_type):
        r = compute_settlement(make_employee(termination=termination), UMA, MINIMUM_WAGE, calc_type)
        severance_total = r.severance.total if r.severance else 0.0
        assert r.gross_total == pytest.approx(r.perceptions.total + severance_total, abs=0.011)
        assert r.net_total == pytest.approx(
            r.gross_total - r.tax.total - r.social_security.total, abs=0.011
        )
        for line in r.perceptions.lines().values():
            assert line.taxable + line.exempt == pytest.approx(line.gross, abs=0.011)

    def test_repeatable(self):
        employee = make_employee()
        first = compute_settlement(employee, UMA, MINIMUM_WAGE, "liquidacion")
        second = compute_settlement(employee, UMA, MINIMUM_WAGE, "liquidacion")
        assert first.model_dump() == second.model_dump()

    def test_severance_grows_with_seniority(self):
        totals = [
            compute_settlement(make_employee(hire=date(year, 1, 15)), UMA, MINIMUM_WAGE, "liquidacion")
            .severance.total
            for year in (2023, 2021, 2018, 2012)
        ]
        assert totals == sorted(totals)

    def test_zero_seniority(self):
        r = compute_settlement(make_employee(hire=date(2024, 6, 1)), UMA, MINIMUM_WAGE, "liquidacion")
        assert r.seniority_years == 0
        assert r.perceptions.vacation_days_per_year == 12
        assert r.severance.twenty_days_per_year.final == 0.0
        assert r.severance.seniority_premium.final == 0.0
        assert r.tax.severance.exempt == 0.0

    def test_disabled_severance_components(self):
        settings = SeveranceSettings(
            include_90_days=False,
            include_20_days=False,
            include_seniority_premium=False,
            include_proportional_seniority_premium=False,
        )
        r = compute_settlement(
            make_employee(), UMA, MINIMUM_WAGE, "liquidacion", severance_settings=settings
        )
        assert r.severance.total == 0.0
        assert r.tax.severance.tax == 0.0


class TestErrors:

    def test_unknown_calculation_type(self):
        with pytest.raises(ValueError, match="Unknown calculation type"):
            compute_settlement(make_employee(), UMA, MINIMUM_WAGE, "despido")

    def test_negative_taxable_income_raises(self):
        with pytest.raises(BracketNotFoundError):
            compute_settlement(
                make_employee(),
                UMA,
                MINIMUM_WAGE,
                adjustments=AdjustmentInputs(additional_perception=-20000),
            )

    def test_negative_net_is_returned(self):
        r = compute_settlement(
            make_employee(),
            UMA,
            MINIMUM_WAGE,
            adjustments=AdjustmentInputs(prior_period_income=200000, prior_period_tax=0, additional_perception=-11000),
        )
        assert r.net_total < 0

    def test_non_positive_salary_rejected(self):
        with pytest.raises(ValueError):
            make_employee(daily_salary=0)


class TestBatch:

    def test_one_result_per_employee(self):
        employees = [make_employee(), make_employee(id="2001", termination=date(2026, 1, 20))]
        batch = compute_batch(employees, UMA, MINIMUM_WAGE, "finiquito")
        assert [r.employee.id for r in batch.results] == ["1042", "2001"]
        assert batch.results[1].uma == 113.14
        assert batch.net_total == pytest.approx(sum(r.net_total for r in batch.results), abs=0.01)

    def test_injected_rules(self):
        rules = load_tax_rules()
        batch = compute_batch([make_employee()], UMA, MINIMUM_WAGE, rules=rules)
        assert batch.results[0].net_total == 11352.61
