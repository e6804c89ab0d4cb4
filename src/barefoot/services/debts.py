"""Debt payoff simulation (Barefoot snowball).

Every period the engine accrues interest on each outstanding debt, pays each
debt's minimum, then throws whatever cash is left (the Fire Extinguisher
amount plus any minimum that was not needed) at the first outstanding debt in
snowball order. Debts that reach zero drop out and never come back.

Snowball order is fixed once per run: ascending priority, then ascending
starting balance. It is deliberately not re-evaluated as balances shrink.
All arithmetic is integer cents, rounded to the cent at every step.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from ..config import DEFAULT_MAX_FORTNIGHTS, DEFAULT_MAX_MONTHS, BaseConfig
from ..domain.money import Money
from ..domain.periods import PeriodKind, accrue_interest, parse_period_kind, period_date
from ..logging_config import get_logger
from ..models.debt import Debt

logger = get_logger(__name__)

_EMPTY_BALANCES: Mapping[str, int] = MappingProxyType({})


@dataclass(frozen=True, slots=True)
class EngineLimits:
    """Iteration ceilings that bound a run when minimums never clear a debt."""

    max_months: int = DEFAULT_MAX_MONTHS
    max_fortnights: int = DEFAULT_MAX_FORTNIGHTS

    def __post_init__(self) -> None:
        if self.max_months <= 0 or self.max_fortnights <= 0:
            raise ValueError("Iteration ceilings must be positive")

    @classmethod
    def from_config(cls, config: BaseConfig) -> "EngineLimits":
        return cls(max_months=config.MAX_MONTHS, max_fortnights=config.MAX_FORTNIGHTS)

    def ceiling_for(self, kind: PeriodKind) -> int:
        return self.max_months if kind is PeriodKind.MONTH else self.max_fortnights


@dataclass(frozen=True, slots=True)
class PeriodSnapshot:
    """State of the payoff after one period.

    ``principal_paid`` is the net reduction in outstanding balances, so
    ``principal_paid + interest == total_paid`` every period. It goes negative
    when interest outpaces payments.
    """

    period: int
    debts_paid: tuple[Debt, ...]
    debts_continuing: tuple[Debt, ...]
    interest: Money
    principal_paid: Money
    total_paid: Money
    interest_by_debt: Mapping[str, int] = field(default_factory=lambda: _EMPTY_BALANCES)
    remaining_balances: Mapping[str, int] = field(default_factory=lambda: _EMPTY_BALANCES)

    def as_dict(self) -> dict[str, Any]:
        return {
            "period": self.period,
            "debts_paid": [debt.id for debt in self.debts_paid],
            "debts_continuing": [debt.id for debt in self.debts_continuing],
            "interest_cents": self.interest.cents,
            "principal_paid_cents": self.principal_paid.cents,
            "total_paid_cents": self.total_paid.cents,
            "interest_by_debt": dict(self.interest_by_debt),
            "remaining_balances": dict(self.remaining_balances),
        }


@dataclass(frozen=True, slots=True)
class SimulationResult:
    """Outcome of a payoff run.

    ``terminated_early`` is set when the iteration ceiling was reached with
    debts still outstanding (minimums never outpaced interest).
    """

    periods: int
    total_interest: Money
    timeline: tuple[PeriodSnapshot, ...]
    period_kind: PeriodKind
    terminated_early: bool = False

    @classmethod
    def empty(cls, kind: PeriodKind, currency: str) -> "SimulationResult":
        return cls(periods=0, total_interest=Money.zero(currency), timeline=(), period_kind=kind)

    @property
    def paid_off(self) -> bool:
        return not self.terminated_early

    def interest_for(self, debt_id: str) -> int:
        """Total interest in cents accrued on a single debt over the run."""

        return sum(snapshot.interest_by_debt.get(debt_id, 0) for snapshot in self.timeline)

    def as_dict(self) -> dict[str, Any]:
        return {
            "period_kind": self.period_kind.value,
            "periods": self.periods,
            "total_interest_cents": self.total_interest.cents,
            "terminated_early": self.terminated_early,
            "timeline": [snapshot.as_dict() for snapshot in self.timeline],
        }


def snowball_order(debts: Iterable[Debt]) -> list[Debt]:
    """Return debts sorted by priority, then starting balance (both ascending)."""

    return sorted(debts, key=lambda d: (d.priority, d.current_balance))


class _RunState:
    """Working balances owned by a single simulation call."""

    def __init__(self, debts: list[Debt], kind: PeriodKind) -> None:
        self.debts = debts
        self.kind = kind
        self.balances: dict[str, int] = {d.id: d.current_balance for d in debts}

    def _outstanding(self) -> Iterable[Debt]:
        return (d for d in self.debts if d.id in self.balances)

    def accrue_interest(self) -> dict[str, int]:
        accrued: dict[str, int] = {}
        for debt in self._outstanding():
            interest = accrue_interest(self.balances[debt.id], debt.interest_rate, self.kind)
            self.balances[debt.id] += interest
            accrued[debt.id] = interest
        return accrued

    def pay_minimums(self, extra_cents: int) -> tuple[int, int]:
        """Pay every minimum; return (amount paid, cash left over).

        Cash available is the extra amount plus the sum of this period's
        minimums, i.e. minimums are always assumed to be funded.
        """

        minimums = {d.id: d.minimum_for(self.kind) for d in self._outstanding()}
        remaining = extra_cents + sum(minimums.values())
        paid = 0
        for debt in self._outstanding():
            balance = self.balances[debt.id]
            payment = max(0, min(minimums[debt.id], balance, remaining))
            self.balances[debt.id] = balance - payment
            remaining -= payment
            paid += payment
        return paid, max(0, remaining)

    def apply_surplus(self, surplus_cents: int) -> int:
        """Put leftover cash on the first outstanding debt; return amount applied."""

        if surplus_cents <= 0:
            return 0
        for debt in self._outstanding():
            balance = self.balances[debt.id]
            if balance <= 0:
                continue
            payment = min(surplus_cents, balance)
            self.balances[debt.id] = balance - payment
            return payment
        return 0

    def remove_paid(self) -> list[Debt]:
        paid_off = [d for d in self._outstanding() if self.balances[d.id] <= 0]
        for debt in paid_off:
            del self.balances[debt.id]
        return paid_off


def simulate(
    *,
    debts: Iterable[Debt],
    extra_payment: Money | int,
    period_kind: PeriodKind | str,
    limits: EngineLimits | None = None,
) -> SimulationResult:
    """Simulate a snowball payoff, one period at a time.

    Args:
        debts: Debts to pay off; ids must be unique within the run
        extra_payment: Fire Extinguisher amount per period (Money or cents)
        period_kind: MONTH (rate / 12) or FORTNIGHT (rate / 26) compounding
        limits: Iteration ceilings; defaults to 600 months / 1300 fortnights

    Returns:
        SimulationResult with one snapshot per simulated period
    """
    kind = parse_period_kind(period_kind)
    extra = Money.coerce(extra_payment)
    limits = limits or EngineLimits()
    ordered = snowball_order(debts)

    if not ordered:
        return SimulationResult.empty(kind, extra.currency)

    ceiling = limits.ceiling_for(kind)
    state = _RunState(ordered, kind)
    timeline: list[PeriodSnapshot] = []
    total_interest = 0
    period = 0

    logger.debug(
        "Starting payoff simulation",
        extra={"period_kind": kind.value, "debts": len(ordered), "extra_cents": extra.cents},
    )

    while state.balances and period < ceiling:
        period += 1

        accrued = state.accrue_interest()
        interest = sum(accrued.values())
        total_interest += interest

        minimums_paid, leftover = state.pay_minimums(extra.cents)
        surplus_paid = state.apply_surplus(leftover)
        paid_off = state.remove_paid()

        total_paid = minimums_paid + surplus_paid
        timeline.append(
            PeriodSnapshot(
                period=period,
                debts_paid=tuple(paid_off),
                debts_continuing=tuple(d for d in ordered if d.id in state.balances),
                interest=Money(interest, extra.currency),
                principal_paid=Money(total_paid - interest, extra.currency),
                total_paid=Money(total_paid, extra.currency),
                interest_by_debt=MappingProxyType(accrued),
                remaining_balances=(
                    MappingProxyType(dict(state.balances))
                    if kind is PeriodKind.FORTNIGHT
                    else _EMPTY_BALANCES
                ),
            )
        )

    terminated_early = bool(state.balances)
    if terminated_early:
        logger.warning(
            "Payoff simulation hit its iteration ceiling with debts outstanding",
            extra={
                "period_kind": kind.value,
                "periods": period,
                "outstanding": sorted(state.balances),
            },
        )
    else:
        logger.debug(
            "Payoff simulation finished",
            extra={"period_kind": kind.value, "periods": period, "interest_cents": total_interest},
        )

    return SimulationResult(
        periods=period,
        total_interest=Money(total_interest, extra.currency),
        timeline=tuple(timeline),
        period_kind=kind,
        terminated_early=terminated_early,
    )


def calculate_snowball(
    *, debts: Iterable[Debt], extra_payment: Money | int, limits: EngineLimits | None = None
) -> SimulationResult:
    """Monthly snowball payoff."""
    return simulate(debts=debts, extra_payment=extra_payment, period_kind=PeriodKind.MONTH, limits=limits)


def calculate_snowball_fortnightly(
    *, debts: Iterable[Debt], extra_payment: Money | int, limits: EngineLimits | None = None
) -> SimulationResult:
    """Fortnightly snowball payoff; snapshots carry remaining balances."""
    return simulate(
        debts=debts, extra_payment=extra_payment, period_kind=PeriodKind.FORTNIGHT, limits=limits
    )


def schedule_summary(result: SimulationResult, *, start_date: date) -> tuple[str | None, int, int]:
    """Return (payoff_date_iso, total_interest_cents, periods).

    The payoff date is the date of the final period's payment, with period 1
    falling on ``start_date``. It is ``None`` when nothing was simulated or the
    run never cleared every debt.
    """

    if not result.timeline or not result.paid_off:
        return None, result.total_interest.cents, result.periods
    payoff = period_date(start_date, result.periods - 1, result.period_kind)
    return payoff.isoformat(), result.total_interest.cents, result.periods


__all__ = [
    "EngineLimits",
    "PeriodSnapshot",
    "SimulationResult",
    "calculate_snowball",
    "calculate_snowball_fortnightly",
    "schedule_summary",
    "simulate",
    "snowball_order",
]
