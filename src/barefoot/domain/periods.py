"""Simulation cadences, interest-rate and minimum-payment conversions."""

from __future__ import annotations

import calendar
from datetime import date, timedelta
from decimal import Decimal
from enum import Enum

from .exceptions import ValidationError
from .money import round_cents

DAYS_PER_FORTNIGHT = 14


class PeriodKind(str, Enum):
    """Compounding / payment cadence of a simulation run."""

    MONTH = "MONTH"
    FORTNIGHT = "FORTNIGHT"

    @property
    def periods_per_year(self) -> int:
        return 12 if self is PeriodKind.MONTH else 26


class PaymentFrequency(str, Enum):
    """How often a debt's contractual minimum is quoted."""

    FORTNIGHTLY = "FORTNIGHTLY"
    MONTHLY = "MONTHLY"


def parse_period_kind(value: PeriodKind | str) -> PeriodKind:
    """Accept enum members or case-insensitive names ("month", "fortnight")."""

    if isinstance(value, PeriodKind):
        return value
    normalized = str(value).strip().upper()
    try:
        return PeriodKind(normalized)
    except ValueError as exc:
        raise ValidationError(f"Unknown period kind: {value!r}") from exc


def accrue_interest(balance_cents: int, annual_rate: float, kind: PeriodKind) -> int:
    """Interest for one period on ``balance_cents``, rounded to the cent."""

    if balance_cents <= 0 or annual_rate <= 0:
        return 0
    accrued = Decimal(balance_cents) * Decimal(str(annual_rate)) / Decimal(kind.periods_per_year)
    return round_cents(accrued)


def convert_minimum(minimum_cents: int, frequency: PaymentFrequency, kind: PeriodKind) -> int:
    """Express a minimum payment in the units of the simulation period.

    Conversions are exact ratios of periods per year (26 fortnights vs 12
    months), not calendar-day based, so the annual total is preserved up to
    cent rounding.
    """

    if kind is PeriodKind.FORTNIGHT and frequency is PaymentFrequency.MONTHLY:
        return round_cents(Decimal(minimum_cents) * Decimal(12) / Decimal(26))
    if kind is PeriodKind.MONTH and frequency is PaymentFrequency.FORTNIGHTLY:
        return round_cents(Decimal(minimum_cents) * Decimal(26) / Decimal(12))
    return minimum_cents


def fortnight_date(start: date, offset: int) -> date:
    """Date ``offset`` fortnights after ``start``."""

    return start + timedelta(days=DAYS_PER_FORTNIGHT * offset)


def _add_months(value: date, months: int) -> date:
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def period_date(start: date, offset: int, kind: PeriodKind) -> date:
    """Date ``offset`` periods of ``kind`` after ``start``.

    Monthly offsets keep the day of month, clamped to the month's last day.
    """

    if kind is PeriodKind.FORTNIGHT:
        return fortnight_date(start, offset)
    return _add_months(start, offset)


__all__ = [
    "DAYS_PER_FORTNIGHT",
    "PaymentFrequency",
    "PeriodKind",
    "accrue_interest",
    "convert_minimum",
    "fortnight_date",
    "parse_period_kind",
    "period_date",
]
