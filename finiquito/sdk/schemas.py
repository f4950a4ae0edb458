"""Pydantic schemas for finiquito data.

Inputs (employee records, adjustments, severance settings) are frozen and
reject unknown fields, so a typo in a JSON payload causes a clear error
rather than being silently ignored. Result schemas check their own
arithmetic on construction.
"""

from datetime import date
from typing import ClassVar, Dict, List, Literal, Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from .money import parse_number, round_cents


CalculationType = Literal["finiquito", "liquidacion"]

CALCULATION_TYPE_ALIASES = {
    "finiquito": "finiquito",
    "liquidacion": "liquidacion",
    "liquidación": "liquidacion",
}

# Tolerance for identities between rounded amounts.
CENT_TOLERANCE = 0.011


def normalize_calculation_type(value: str) -> CalculationType:
    """Map user spellings (accented or not, any case) to a calculation type."""
    key = (value or "").strip().lower()
    if key not in CALCULATION_TYPE_ALIASES:
        raise ValueError(
            f"Unknown calculation type '{value}'. Use 'finiquito' or 'liquidacion'."
        )
    return CALCULATION_TYPE_ALIASES[key]


# =============================================================================
# Inputs
# =============================================================================


class EmployeeRecord(BaseModel):
    """Contract facts for a terminated employee."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str = Field(..., description="Employee code")
    full_name: str = Field(..., description="Full name")
    rfc: str = Field(default="", description="Tax ID (RFC)")
    position: str = Field(default="")
    location: str = Field(default="")
    hire_date: date
    termination_date: date
    daily_salary: float = Field(..., gt=0, description="Daily base salary")
    pending_vacation_days: float = Field(default=0, description="Vacation days owed from prior years")
    overtime: float = Field(default=0, description="Accrued double-rate overtime amount")


class EconomicConfig(BaseModel):
    """Economy-wide values supplied from outside the engine."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    uma: float = Field(..., gt=0, description="Unidad de Medida y Actualizacion")
    minimum_wage: float = Field(..., gt=0, description="General daily minimum wage")


class AdjustmentInputs(BaseModel):
    """Per-calculation adjustments typed in by the user.

    Non-numeric values become 0, except `salary_days_override` where they
    mean "not supplied" and the default day count is used.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    prior_period_income: float = Field(default=0, description="Taxable income of the first half-month")
    prior_period_tax: float = Field(default=0, description="ISR withheld in the first half-month")
    extra_double_overtime: float = Field(default=0, description="Extra double-rate overtime (pesos)")
    extra_triple_overtime: float = Field(default=0, description="Extra triple-rate overtime (pesos)")
    salary_days_override: Optional[float] = Field(default=None, description="Days of base salary to pay")
    additional_perception: float = Field(default=0, description="Additional fully taxable perception")

    @field_validator(
        "prior_period_income",
        "prior_period_tax",
        "extra_double_overtime",
        "extra_triple_overtime",
        "additional_perception",
        mode="before",
    )
    @classmethod
    def amount_or_zero(cls, v):
        return parse_number(v, 0.0)

    @field_validator("salary_days_override", mode="before")
    @classmethod
    def override_or_none(cls, v):
        return parse_number(v, None)


class SeveranceSettings(BaseModel):
    """Enable toggles for each severance component."""

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    include_90_days: bool = Field(
        default=True, validation_alias=AliasChoices("include_90_days", "include90Days")
    )
    include_20_days: bool = Field(
        default=True, validation_alias=AliasChoices("include_20_days", "include20Days")
    )
    include_seniority_premium: bool = Field(
        default=True,
        validation_alias=AliasChoices("include_seniority_premium", "includeSeniorityPremium"),
    )
    include_proportional_seniority_premium: bool = Field(
        default=True,
        validation_alias=AliasChoices(
            "include_proportional_seniority_premium", "includeProportionalSeniorityPremium"
        ),
    )


class SeveranceOverrides(BaseModel):
    """Manually entered severance amounts that replace calculated ones."""

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    ninety_day_pay: Optional[float] = Field(
        default=None, validation_alias=AliasChoices("ninety_day_pay", "indemnizacion90dias")
    )
    twenty_days_per_year: Optional[float] = Field(
        default=None, validation_alias=AliasChoices("twenty_days_per_year", "veinteDiasPorAnio")
    )
    seniority_premium: Optional[float] = Field(
        default=None, validation_alias=AliasChoices("seniority_premium", "primaAntiguedad")
    )
    proportional_seniority_premium: Optional[float] = Field(
        default=None,
        validation_alias=AliasChoices(
            "proportional_seniority_premium", "primaAntiguedadProporcional"
        ),
    )

    @field_validator("*", mode="before")
    @classmethod
    def amount_or_none(cls, v):
        return parse_number(v, None)


# =============================================================================
# Results
# =============================================================================


class PerceptionLine(BaseModel):
    """Gross amount of one perception with its taxable/exempt split."""

    model_config = ConfigDict(extra="forbid")

    days: Optional[float] = Field(default=None, description="Days paid, where the line is day-based")
    gross: float
    taxable: float
    exempt: float = 0
    ceiling: Optional[float] = Field(default=None, description="Exemption ceiling applied")

    @model_validator(mode="after")
    def check_split(self) -> "PerceptionLine":
        if abs(self.taxable + self.exempt - self.gross) > CENT_TOLERANCE:
            raise ValueError(
                f"taxable ({self.taxable:.2f}) + exempt ({self.exempt:.2f}) "
                f"!= gross ({self.gross:.2f})"
            )
        return self


class PerceptionBreakdown(BaseModel):
    """Ordinary settlement perceptions."""

    model_config = ConfigDict(extra="forbid")

    salary: PerceptionLine
    aguinaldo: PerceptionLine
    vacation: PerceptionLine
    vacation_premium: PerceptionLine
    pending_vacation: PerceptionLine
    additional: PerceptionLine
    overtime: PerceptionLine
    total: float
    taxable_total: float
    exempt_total: float

    # Inputs to the proportional formulas, kept for the itemized statement
    days_worked_in_year: int
    days_since_last_anniversary: int
    days_in_year: int
    vacation_days_per_year: int
    proportional_vacation_days: float = Field(..., description="Unrounded")
    proportional_aguinaldo_days: float = Field(..., description="Unrounded")

    LINE_NAMES: ClassVar[tuple] = (
        "salary",
        "aguinaldo",
        "vacation",
        "vacation_premium",
        "pending_vacation",
        "additional",
        "overtime",
    )

    def lines(self) -> Dict[str, PerceptionLine]:
        """Perception lines in statement order."""
        return {name: getattr(self, name) for name in self.LINE_NAMES}


SeveranceSource = Literal["disabled", "calculated", "override"]


class SeveranceComponent(BaseModel):
    """One severance component and how its final value was resolved."""

    model_config = ConfigDict(extra="forbid")

    calculated: float = Field(..., description="Value after applying the enable toggle")
    final: float = Field(..., description="Value paid")
    source: SeveranceSource


class SeveranceBreakdown(BaseModel):
    """Severance indemnity (liquidacion only)."""

    model_config = ConfigDict(extra="forbid")

    ninety_day_pay: SeveranceComponent
    twenty_days_per_year: SeveranceComponent
    seniority_premium: SeveranceComponent
    proportional_seniority_premium: SeveranceComponent
    premium_wage_base: float = Field(..., description="min(SDI, cap x minimum wage)")
    total: float

    COMPONENT_NAMES: ClassVar[tuple] = (
        "ninety_day_pay",
        "twenty_days_per_year",
        "seniority_premium",
        "proportional_seniority_premium",
    )

    def components(self) -> Dict[str, SeveranceComponent]:
        return {name: getattr(self, name) for name in self.COMPONENT_NAMES}


class IsrComputation(BaseModel):
    """Monthly table + subsidy run over one income amount."""

    model_config = ConfigDict(extra="forbid")

    income: float
    lower_limit: float
    upper_limit: Optional[float]
    rate: float
    surplus: float
    marginal_tax: float
    fixed_quota: float
    tax_before_subsidy: float
    subsidy_rate: float = Field(..., description="0 when income exceeds the subsidy ceiling")
    subsidy: float
    tax: float = Field(..., description="max(0, tax_before_subsidy - subsidy)")
    exact_tax: float = Field(..., description="Same tax with no intermediate rounding")


class SeveranceTax(BaseModel):
    """ISR on severance at the last ordinary month's effective rate."""

    model_config = ConfigDict(extra="forbid")

    severance_income: float
    exempt: float
    taxable: float
    reference_income: float = Field(..., description="Daily salary x 30, unrounded")
    reference: IsrComputation
    effective_rate: float
    tax: float


class TaxWithholding(BaseModel):
    """ISR audit trail."""

    model_config = ConfigDict(extra="forbid")

    period_taxable_income: float
    prior_period_income: float
    prior_period_tax: float
    monthly: IsrComputation
    ordinary: float = Field(..., description="Withholding on ordinary perceptions")
    severance: Optional[SeveranceTax] = None
    total: float


class SocialSecurityContribution(BaseModel):
    """IMSS employee contribution for the days being paid."""

    model_config = ConfigDict(extra="forbid")

    sbc: float = Field(..., description="Contribution-base wage (capped SDI)")
    uma: float
    salary_days: float
    excess_over_threshold: float
    sickness_maternity: float
    disability_life: float
    unemployment_old_age: float
    cash_benefits: float
    pensioner_medical: float
    total: float


class SettlementResult(BaseModel):
    """Fully itemized settlement."""

    model_config = ConfigDict(extra="forbid")

    employee: EmployeeRecord
    calculation_type: CalculationType
    uma: float = Field(..., description="UMA actually applied")
    minimum_wage: float
    seniority_years: int
    sdi: float = Field(..., description="Integrated daily wage")
    daily_aguinaldo: float
    daily_vacation_premium: float
    perceptions: PerceptionBreakdown
    severance: Optional[SeveranceBreakdown] = None
    tax: TaxWithholding
    social_security: SocialSecurityContribution
    gross_total: float
    deduction_total: float
    net_total: float

    @model_validator(mode="after")
    def check_coherence(self) -> "SettlementResult":
        """Validate internal consistency of totals."""
        errors = []

        if (self.calculation_type == "liquidacion") != (self.severance is not None):
            errors.append(f"severance breakdown presence does not match '{self.calculation_type}'")

        severance_total = self.severance.total if self.severance else 0.0
        expected_gross = self.perceptions.total + severance_total
        if abs(self.gross_total - expected_gross) > CENT_TOLERANCE:
            errors.append(
                f"gross_total ({self.gross_total:.2f}) != perceptions + severance ({expected_gross:.2f})"
            )

        expected_deductions = self.tax.total + self.social_security.total
        if abs(self.deduction_total - expected_deductions) > CENT_TOLERANCE:
            errors.append(
                f"deduction_total ({self.deduction_total:.2f}) != isr + imss ({expected_deductions:.2f})"
            )

        if abs(self.net_total - (self.gross_total - self.deduction_total)) > CENT_TOLERANCE:
            errors.append(
                f"net_total ({self.net_total:.2f}) != gross - deductions "
                f"({self.gross_total - self.deduction_total:.2f})"
            )

        if errors:
            raise ValueError("; ".join(errors))
        return self


class BatchResult(BaseModel):
    """Settlements for a roster."""

    model_config = ConfigDict(extra="forbid")

    calculation_type: CalculationType
    results: List[SettlementResult] = Field(default_factory=list)

    @property
    def net_total(self) -> float:
        return round_cents(sum(r.net_total for r in self.results))
