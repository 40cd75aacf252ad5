"""Data contracts for the inverse (solve-for) endpoints."""

from pydantic import BaseModel, ConfigDict, Field

from projection_engine.models import DepositFrequency, TenureUnit


class AffordablePrincipalRequest(BaseModel):
    """Largest loan a monthly budget can service."""

    model_config = ConfigDict(extra="forbid")

    targetEmi: float = Field(..., gt=0)
    annualRatePercent: float = Field(..., ge=0, le=100)
    months: int = Field(..., gt=0)


class RequiredTenureRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    principal: float = Field(..., gt=0)
    emi: float = Field(..., gt=0)
    annualRatePercent: float = Field(..., ge=0, le=100)


class RequiredContributionRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    targetAmount: float = Field(..., gt=0)
    annualRatePercent: float = Field(..., ge=0, le=100)
    years: int = Field(..., gt=0, le=50)


class RequiredDepositRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    targetAmount: float = Field(..., gt=0)
    annualRatePercent: float = Field(..., ge=0, le=100)
    tenure: float = Field(..., gt=0)
    tenureUnit: TenureUnit = "years"
    compoundingFrequency: DepositFrequency = "quarterly"


class InverseResponse(BaseModel):
    value: float
    formatted: str
