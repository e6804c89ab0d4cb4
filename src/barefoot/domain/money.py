"""Money value object and cent rounding helpers.

All amounts are integer cents so the payoff simulations never accumulate
floating-point drift. Rounding to the cent is half-up (half away from zero for
the non-negative balances the engine works with), applied at every step.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_FLOOR, ROUND_HALF_UP, Decimal
from typing import Union

from .exceptions import ValidationError

DEFAULT_CURRENCY = "AUD"

Number = Union[int, float, Decimal]


def round_cents(value: Number) -> int:
    """Round a fractional cent amount to whole cents (half-up)."""

    if isinstance(value, float):
        value = Decimal(str(value))
    return int(Decimal(value).quantize(Decimal(1), rounding=ROUND_HALF_UP))


@dataclass(frozen=True, slots=True)
class Money:
    """Immutable monetary amount in integer cents."""

    cents: int
    currency: str = DEFAULT_CURRENCY

    def __post_init__(self) -> None:
        if isinstance(self.cents, bool) or not isinstance(self.cents, int):
            raise ValidationError("Money expects an integer number of cents")

    @classmethod
    def zero(cls, currency: str = DEFAULT_CURRENCY) -> "Money":
        return cls(0, currency)

    @classmethod
    def coerce(cls, value: "Money | int", currency: str = DEFAULT_CURRENCY) -> "Money":
        """Accept either a Money or a raw cent count."""

        if isinstance(value, Money):
            return value
        return cls(value, currency)

    def _check_currency(self, other: "Money") -> None:
        if self.currency != other.currency:
            raise ValidationError(
                f"Cannot operate on different currencies: {self.currency} vs {other.currency}"
            )

    def add(self, other: "Money") -> "Money":
        self._check_currency(other)
        return Money(self.cents + other.cents, self.currency)

    def subtract(self, other: "Money") -> "Money":
        self._check_currency(other)
        return Money(self.cents - other.cents, self.currency)

    def negate(self) -> "Money":
        return Money(-self.cents, self.currency)

    def multiply(self, factor: Number) -> "Money":
        """Multiply by a factor; the product must land on whole cents."""

        product = Decimal(self.cents) * Decimal(str(factor))
        if product != product.to_integral_value():
            raise ValidationError("Multiplication factor must result in integer cents")
        return Money(int(product), self.currency)

    def divide(self, divisor: Number) -> "Money":
        """Divide, rounding the quotient down to whole cents."""

        if divisor == 0:
            raise ValidationError("Cannot divide by zero")
        quotient = Decimal(self.cents) / Decimal(str(divisor))
        return Money(int(quotient.to_integral_value(rounding=ROUND_FLOOR)), self.currency)

    def is_zero(self) -> bool:
        return self.cents == 0

    def __lt__(self, other: "Money") -> bool:
        self._check_currency(other)
        return self.cents < other.cents

    def __le__(self, other: "Money") -> bool:
        self._check_currency(other)
        return self.cents <= other.cents

    def __gt__(self, other: "Money") -> bool:
        self._check_currency(other)
        return self.cents > other.cents

    def __ge__(self, other: "Money") -> bool:
        self._check_currency(other)
        return self.cents >= other.cents

    def __str__(self) -> str:
        sign = "-" if self.cents < 0 else ""
        dollars = Decimal(abs(self.cents)) / Decimal(100)
        return f"{sign}${dollars:,.2f} {self.currency}"


__all__ = ["DEFAULT_CURRENCY", "Money", "round_cents"]
