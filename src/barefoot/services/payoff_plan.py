"""Fortnight-by-fortnight payoff plan for display."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date
from typing import Any, Iterable

from ..domain.money import Money
from ..domain.periods import PeriodKind, fortnight_date
from ..models.debt import Debt
from .debts import EngineLimits, PeriodSnapshot, calculate_snowball_fortnightly


@dataclass(frozen=True, slots=True)
class DebtRef:
    id: str
    name: str
    debt_type: str

    @classmethod
    def of(cls, debt: Debt) -> "DebtRef":
        return cls(id=debt.id, name=debt.name, debt_type=debt.debt_type.value)


@dataclass(frozen=True, slots=True)
class MinimumPayment:
    debt_id: str
    debt_name: str
    minimum_payment_cents: int
    remaining_balance_cents: int


@dataclass(frozen=True, slots=True)
class PlanEntry:
    """One fortnight of the plan: who is being attacked and what is left."""

    fortnight: int
    payment_date: str
    debt_being_paid: DebtRef | None
    payment_to_active_debt_cents: int
    remaining_balance_of_active_debt_cents: int
    minimum_payments_on_other_debts: tuple[MinimumPayment, ...]
    total_debt_remaining_cents: int
    debts_paid_off: tuple[DebtRef, ...]
    interest_cents: int


@dataclass(frozen=True, slots=True)
class PayoffPlan:
    total_fortnights_to_payoff: int
    total_interest_cents: int
    fortnightly_fire_extinguisher_cents: int
    terminated_early: bool
    timeline: tuple[PlanEntry, ...]

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


def _plan_entry(snapshot: PeriodSnapshot, *, extra_cents: int, start_date: date) -> PlanEntry:
    balances = snapshot.remaining_balances
    continuing = snapshot.debts_continuing
    # The first continuing debt is the one the snowball is attacking.
    active = continuing[0] if continuing else None
    active_balance = balances.get(active.id, 0) if active else 0

    others = tuple(
        MinimumPayment(
            debt_id=debt.id,
            debt_name=debt.name,
            minimum_payment_cents=debt.minimum_for(PeriodKind.FORTNIGHT),
            remaining_balance_cents=balances.get(debt.id, 0),
        )
        for debt in continuing[1:]
    )

    return PlanEntry(
        fortnight=snapshot.period,
        payment_date=fortnight_date(start_date, snapshot.period - 1).isoformat(),
        debt_being_paid=DebtRef.of(active) if active else None,
        payment_to_active_debt_cents=min(extra_cents, active_balance) if active else 0,
        remaining_balance_of_active_debt_cents=active_balance,
        minimum_payments_on_other_debts=others,
        total_debt_remaining_cents=sum(balances.get(debt.id, 0) for debt in continuing),
        debts_paid_off=tuple(DebtRef.of(debt) for debt in snapshot.debts_paid),
        interest_cents=snapshot.interest.cents,
    )


def build_payoff_plan(
    *,
    debts: Iterable[Debt],
    fortnightly_extra: Money | int,
    start_date: date,
    limits: EngineLimits | None = None,
) -> PayoffPlan:
    """Run the fortnightly snowball and shape it into a readable plan.

    Fortnight ``n`` is paid on ``start_date + (n - 1) * 14 days``.
    """

    extra = Money.coerce(fortnightly_extra)
    result = calculate_snowball_fortnightly(debts=debts, extra_payment=extra, limits=limits)
    timeline = tuple(
        _plan_entry(snapshot, extra_cents=extra.cents, start_date=start_date)
        for snapshot in result.timeline
    )
    return PayoffPlan(
        total_fortnights_to_payoff=result.periods,
        total_interest_cents=result.total_interest.cents,
        fortnightly_fire_extinguisher_cents=extra.cents,
        terminated_early=result.terminated_early,
        timeline=timeline,
    )


__all__ = ["DebtRef", "MinimumPayment", "PayoffPlan", "PlanEntry", "build_payoff_plan"]
