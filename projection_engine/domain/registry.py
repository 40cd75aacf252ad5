"""Calculator registry used by the HTTP layer to dispatch by calculator id."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Type

from pydantic import BaseModel

from projection_engine.core.formatting import NumberFormat
from projection_engine.core.loan import calculate_loan
from projection_engine.core.recurring import (
    calculate_goal,
    calculate_recurring,
    calculate_recurring_deposit,
)
from projection_engine.core.single import (
    calculate_cagr_projection,
    calculate_compound,
    calculate_fixed_deposit,
    calculate_lumpsum,
)
from projection_engine.domain.errors import DomainError
from projection_engine.models import (
    CagrInput,
    CompoundInput,
    GoalInput,
    LoanInput,
    RecurringDepositInput,
    RecurringInput,
    SingleInvestmentInput,
)
from projection_engine.schemas.results import ProjectionResult

Engine = Callable[[BaseModel, Optional[NumberFormat]], ProjectionResult]


@dataclass(frozen=True)
class Calculator:
    id: str
    name: str
    description: str
    input_model: Type[BaseModel]
    engine: Engine
    fixed: Optional[Dict[str, object]] = None

    def run(self, payload: Dict[str, object], number_format: Optional[NumberFormat] = None) -> ProjectionResult:
        data = dict(payload)
        for field, value in (self.fixed or {}).items():
            if data.setdefault(field, value) != value:
                raise DomainError(f"the {self.id} calculator requires {field}={value!r}, got {data[field]!r}")
        return self.engine(self.input_model.model_validate(data), number_format)


CALCULATORS: Dict[str, Calculator] = {
    calculator.id: calculator
    for calculator in (
        Calculator(
            id="emi",
            name="EMI Calculator",
            description="Monthly installment and amortization schedule for a loan.",
            input_model=LoanInput,
            engine=calculate_loan,
        ),
        Calculator(
            id="sip",
            name="SIP Calculator",
            description="Future value of monthly investments, with optional annual step-up.",
            input_model=RecurringInput,
            engine=calculate_recurring,
        ),
        Calculator(
            id="fd",
            name="FD Calculator",
            description="Fixed deposit maturity under a chosen compounding frequency.",
            input_model=SingleInvestmentInput,
            engine=calculate_fixed_deposit,
            fixed={"product": "fixedDeposit"},
        ),
        Calculator(
            id="lumpsum",
            name="Lumpsum Calculator",
            description="Growth of a one-time investment with annual compounding.",
            input_model=SingleInvestmentInput,
            engine=calculate_lumpsum,
            fixed={"product": "lumpsum", "compoundingFrequency": "yearly"},
        ),
        Calculator(
            id="compound",
            name="Compound Interest Calculator",
            description="Compound growth of a principal plus optional monthly additions.",
            input_model=CompoundInput,
            engine=calculate_compound,
        ),
        Calculator(
            id="rd",
            name="RD Calculator",
            description="Recurring deposit maturity with quarterly compounding.",
            input_model=RecurringDepositInput,
            engine=calculate_recurring_deposit,
        ),
        Calculator(
            id="goal",
            name="Goal Planner",
            description="Monthly investment needed to reach a target amount.",
            input_model=GoalInput,
            engine=calculate_goal,
        ),
        Calculator(
            id="cagr",
            name="CAGR Calculator",
            description="Compound annual growth rate between two values.",
            input_model=CagrInput,
            engine=calculate_cagr_projection,
        ),
    )
}


def get_calculator(calculator_id: str) -> Optional[Calculator]:
    return CALCULATORS.get(calculator_id)


def list_calculators() -> List[Dict[str, str]]:
    return [
        {"id": calculator.id, "name": calculator.name, "description": calculator.description}
        for calculator in CALCULATORS.values()
    ]
