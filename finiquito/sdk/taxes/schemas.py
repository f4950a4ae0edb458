"""Pydantic schemas for statutory rule validation.

These schemas validate the taxes/rules/*.yaml files and provide typed access
to parameters like the ISR monthly table, UMA values, and IMSS rates.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


# A statutory table jumps one cent between an upper limit and the next lower limit.
BRACKET_GAP_TOLERANCE = 0.011


class UmaRules(BaseModel):
    """UMA values for the reference year and the one before it."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    current: float = Field(..., gt=0, description="UMA for the reference year")
    prior_year: float = Field(..., gt=0, description="UMA still in force during the first month")


class VacationDayRules(BaseModel):
    """Vacation entitlement by seniority year (Art. 76 LFT)."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    by_year: Dict[int, int] = Field(..., description="Explicit days for the first years")
    band_years: int = Field(..., gt=0, description="Length of each band after the table")
    band_increment: int = Field(..., ge=0, description="Days added per band")

    @model_validator(mode="after")
    def check_table(self) -> "VacationDayRules":
        expected = list(range(1, len(self.by_year) + 1))
        if sorted(self.by_year) != expected:
            raise ValueError(f"vacation table must cover years {expected}, got {sorted(self.by_year)}")
        return self

    def days_for_year(self, year: int) -> int:
        """Vacation days owed for the given service year (1-based)."""
        if year <= 0:
            return 0
        if year in self.by_year:
            return self.by_year[year]
        last_year = max(self.by_year)
        bands = 1 + (year - last_year - 1) // self.band_years
        return self.by_year[last_year] + bands * self.band_increment


class LaborRules(BaseModel):
    """Benefits defined by the federal labor law."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    aguinaldo_days: int = Field(..., gt=0)
    vacation_premium_rate: float = Field(..., ge=0, le=1)
    vacation_days: VacationDayRules


class ExemptionRules(BaseModel):
    """Exemption ceilings expressed as UMA multiples."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    aguinaldo_uma: float = Field(..., ge=0)
    vacation_premium_uma: float = Field(..., ge=0)
    overtime_uma: float = Field(..., ge=0)
    overtime_exempt_share: float = Field(..., ge=0, le=1)
    severance_uma_per_year: float = Field(..., ge=0)


class IsrBracket(BaseModel):
    """Single row of the monthly ISR table."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    lower_limit: float = Field(..., ge=0)
    upper_limit: Optional[float] = Field(default=None, description="None on the top bracket")
    fixed_quota: float = Field(..., ge=0)
    rate: float = Field(..., ge=0, le=1, description="Marginal rate as decimal")


class SubsidyRules(BaseModel):
    """Employment subsidy parameters."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    income_limit: float = Field(..., gt=0, description="Monthly income ceiling (inclusive)")
    rate_first_month: float = Field(..., ge=0, le=1, description="Rate for the reference year's first month")
    rate: float = Field(..., ge=0, le=1)


class IsrRules(BaseModel):
    """Monthly income tax table and subsidy."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    monthly_factor: float = Field(..., gt=0)
    brackets: List[IsrBracket] = Field(..., min_length=1)
    subsidy: SubsidyRules

    @model_validator(mode="after")
    def check_brackets(self) -> "IsrRules":
        """Brackets must cover [0, inf) without gaps or overlaps."""
        errors = []
        if self.brackets[0].lower_limit != 0:
            errors.append(f"first bracket must start at 0, got {self.brackets[0].lower_limit}")

        for prev, nxt in zip(self.brackets, self.brackets[1:]):
            if prev.upper_limit is None:
                errors.append(f"bracket starting at {prev.lower_limit} is unbounded but not last")
                continue
            gap = nxt.lower_limit - prev.upper_limit
            if gap <= 0 or gap > BRACKET_GAP_TOLERANCE:
                errors.append(
                    f"brackets {prev.upper_limit:.2f} -> {nxt.lower_limit:.2f} are not contiguous"
                )

        if self.brackets[-1].upper_limit is not None:
            errors.append("last bracket must be unbounded (upper_limit: null)")

        if errors:
            raise ValueError("; ".join(errors))
        return self


class ImssRates(BaseModel):
    """Employee contribution rate per branch."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    sickness_maternity_excess: float = Field(..., ge=0, le=1)
    disability_life: float = Field(..., ge=0, le=1)
    unemployment_old_age: float = Field(..., ge=0, le=1)
    cash_benefits: float = Field(..., ge=0, le=1)
    pensioner_medical: float = Field(..., ge=0, le=1)


class ImssRules(BaseModel):
    """Social security contribution base caps and rates."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    sbc_uma_cap: float = Field(..., gt=0)
    excess_uma_threshold: float = Field(..., ge=0)
    rates: ImssRates


class SeveranceRules(BaseModel):
    """Day counts for the severance indemnity components."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    indemnity_days: float = Field(..., ge=0)
    days_per_year: float = Field(..., ge=0)
    seniority_premium_days_per_year: float = Field(..., ge=0)
    seniority_premium_wage_cap: float = Field(..., gt=0, description="Cap as minimum wage multiple")


class TaxRules(BaseModel):
    """Complete statutory rules for a reference year."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    reference_year: int = Field(..., gt=1900)
    uma: UmaRules
    minimum_wage: float = Field(..., gt=0)
    labor: LaborRules
    exemptions: ExemptionRules
    isr: IsrRules
    imss: ImssRules
    severance: SeveranceRules
