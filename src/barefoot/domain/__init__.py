"""Domain value objects and rules."""

from .exceptions import DomainError, ValidationError
from .money import Money, round_cents
from .periods import PaymentFrequency, PeriodKind

__all__ = [
    "DomainError",
    "Money",
    "PaymentFrequency",
    "PeriodKind",
    "ValidationError",
    "round_cents",
]
