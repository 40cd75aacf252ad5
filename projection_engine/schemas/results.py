"""Result records returned by every calculator."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Metric(BaseModel):
    """A labelled figure with its display string."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    label: str
    value: float
    formatted: str


class ChartBucket(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    label: str
    value: float
    color: str


class PeriodRow(BaseModel):
    """One month of a loan amortization schedule."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    month: int = Field(..., ge=1)
    year: int = Field(..., ge=1)
    emi: int
    principal: int
    interest: int
    balance: int = Field(..., ge=0)


class LoanYearRow(BaseModel):
    """Monthly loan rows rolled up into one calendar year of the loan."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    year: int = Field(..., ge=1)
    principal: int
    interest: int
    balance: int = Field(..., ge=0)


class YearlyRow(BaseModel):
    """Cumulative position of an investment at the end of a year."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    year: int = Field(..., ge=1)
    invested: int
    returns: int
    total: int


class ProjectionResult(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    primary: Metric
    secondary: List[Metric]
    chartData: List[ChartBucket] = Field(..., min_length=2, max_length=2)


class PrepaymentSummary(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    newTenureMonths: int
    newTotalInterest: int
    newTotalPayment: int
    interestSaved: int
    monthsSaved: int
    yearlyBreakdown: List[LoanYearRow]


class LoanResult(ProjectionResult):
    emi: int
    totalInterest: int
    totalPayment: int
    breakdown: List[PeriodRow]
    yearlyBreakdown: List[LoanYearRow]
    prepayment: Optional[PrepaymentSummary] = None


class InvestmentResult(ProjectionResult):
    maturityValue: int
    totalInvested: int
    totalReturns: int
    breakdown: List[YearlyRow]
