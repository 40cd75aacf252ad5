from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

TenureUnit = Literal["days", "months", "years"]
LoanTenureUnit = Literal["months", "years"]
DepositFrequency = Literal["monthly", "quarterly", "halfYearly", "yearly"]
CompoundFrequency = Literal["daily", "monthly", "quarterly", "halfYearly", "yearly"]
InterestPayout = Literal["maturity", "monthly", "quarterly", "yearly"]

MAX_LOAN_MONTHS = 480


class Prepayment(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    year: int = Field(ge=1, le=40)
    amount: float = Field(gt=0)


class LoanInput(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    principal: float = Field(gt=0)
    annualRatePercent: float = Field(ge=0, le=100)
    tenure: int = Field(gt=0)
    tenureUnit: LoanTenureUnit = "years"
    prepayments: List[Prepayment] = Field(default_factory=list)

    @property
    def months(self) -> int:
        return self.tenure * 12 if self.tenureUnit == "years" else self.tenure

    @model_validator(mode="after")
    def check_tenure_and_prepayments(self) -> "LoanInput":
        if self.months > MAX_LOAN_MONTHS:
            raise ValueError(f"loan tenure cannot exceed {MAX_LOAN_MONTHS} months")
        # prepayments land at a year end, which must come before the final installment
        last_year = (self.months - 1) // 12
        for prepayment in self.prepayments:
            if prepayment.year > last_year:
                raise ValueError(
                    f"prepayment year {prepayment.year} does not end before the loan's last month "
                    f"(latest allowed year {last_year})"
                )
        return self


class RecurringInput(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    periodicAmount: float = Field(gt=0)
    annualRatePercent: float = Field(ge=0, le=100)
    years: int = Field(gt=0, le=50)
    annualStepUpPercent: float = Field(default=0.0, ge=0, le=100)


class SingleInvestmentInput(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    product: Literal["fixedDeposit", "lumpsum"] = "fixedDeposit"
    principal: float = Field(gt=0)
    annualRatePercent: float = Field(ge=0, le=100)
    tenure: float = Field(gt=0)
    tenureUnit: TenureUnit = "years"
    compoundingFrequency: DepositFrequency = "quarterly"
    interestPayout: InterestPayout = "maturity"

    @model_validator(mode="after")
    def check_lumpsum_payout(self) -> "SingleInvestmentInput":
        if self.product == "lumpsum" and self.interestPayout != "maturity":
            raise ValueError("a lumpsum investment only pays out at maturity")
        return self


class CompoundInput(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    principal: float = Field(gt=0)
    annualRatePercent: float = Field(ge=0, le=100)
    years: int = Field(gt=0, le=50)
    compoundingFrequency: CompoundFrequency = "yearly"
    monthlyContribution: float = Field(default=0.0, ge=0)


class RecurringDepositInput(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    monthlyDeposit: float = Field(gt=0)
    annualRatePercent: float = Field(ge=0, le=100)
    months: int = Field(gt=0, le=600)


class GoalInput(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    targetAmount: float = Field(gt=0)
    currentSavings: float = Field(default=0.0, ge=0)
    years: int = Field(gt=0, le=50)
    annualRatePercent: float = Field(ge=0, le=100)


class CagrInput(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    initialValue: float = Field(gt=0)
    finalValue: float = Field(gt=0)
    years: float = Field(gt=0, le=100)
