"""Debt records consumed by the payoff simulations."""

from __future__ import annotations

from enum import Enum

from pydantic import field_validator, model_validator
from sqlmodel import Field, SQLModel

from ..domain.periods import PaymentFrequency, PeriodKind, convert_minimum

CREDIT_CARD_MAX_RATE = 0.36
MORTGAGE_MAX_RATE = 0.10
MORTGAGE_MIN_PRIORITY = 5


class DebtType(str, Enum):
    """Supported debt categories."""

    CREDIT_CARD = "credit-card"
    MORTGAGE = "mortgage"


class Debt(SQLModel):
    """A debt obligation as fed into a simulation run.

    Amounts are integer cents. ``interest_rate`` is the nominal annual rate
    as a fraction (0.1999 for 19.99%). Lower ``priority`` values are attacked
    first by the snowball; mortgages must sit at priority 5 or above so credit
    cards clear first.
    """

    id: str = Field(min_length=1)
    name: str = Field(max_length=255)
    debt_type: DebtType = Field(default=DebtType.CREDIT_CARD)
    original_principal: int = Field(ge=0)
    current_balance: int = Field(ge=0)
    interest_rate: float = Field(default=0.0, ge=0)
    minimum_payment: int = Field(default=0, ge=0)
    min_payment_frequency: PaymentFrequency = Field(default=PaymentFrequency.FORTNIGHTLY)
    priority: int = Field(default=1, ge=0)

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("Debt name cannot be empty")
        return value

    @model_validator(mode="after")
    def _check_type_rules(self) -> "Debt":
        if self.debt_type is DebtType.CREDIT_CARD and self.interest_rate > CREDIT_CARD_MAX_RATE:
            raise ValueError("Credit card interest rate cannot exceed 36%")
        if self.debt_type is DebtType.MORTGAGE:
            if self.interest_rate > MORTGAGE_MAX_RATE:
                raise ValueError("Mortgage interest rate cannot exceed 10%")
            if self.priority < MORTGAGE_MIN_PRIORITY:
                raise ValueError(
                    "Mortgage priority must be >= 5 to ensure credit cards are paid first"
                )
        if self.current_balance > self.original_principal:
            raise ValueError("Current balance cannot exceed original debt amount")
        return self

    @property
    def is_mortgage(self) -> bool:
        return self.debt_type is DebtType.MORTGAGE

    def minimum_for(self, kind: PeriodKind) -> int:
        """Minimum payment in cents per simulation period of ``kind``."""

        return convert_minimum(self.minimum_payment, self.min_payment_frequency, kind)
