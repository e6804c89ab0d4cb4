"""Mortgage overpayment comparison.

Compares the mortgage paid at its minimum alone (baseline) against the full
snowball run where the Fire Extinguisher clears the other debts first and then
cascades onto the mortgage (with-FE). Both trajectories are fortnightly.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Iterable

from ..domain.money import Money
from ..domain.periods import PeriodKind, fortnight_date
from ..logging_config import get_logger
from ..models.debt import Debt
from .debts import EngineLimits, SimulationResult, simulate

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class MortgagePoint:
    """Mortgage balance after one fortnight (``period_index`` is 0-based)."""

    period_index: int
    date_iso: str
    remaining_balance: int

    def as_dict(self) -> dict[str, Any]:
        return {
            "period_index": self.period_index,
            "date_iso": self.date_iso,
            "remaining_balance": self.remaining_balance,
        }


@dataclass(frozen=True, slots=True)
class OverpaymentComparison:
    """Baseline vs with-FE mortgage trajectories and the savings between them.

    ``fe_start_period`` is the with-FE period in which the last other debt was
    cleared (0 when the mortgage is the only debt, ``None`` when the other
    debts never clear or no extra payment was given).
    """

    baseline: tuple[MortgagePoint, ...]
    with_fe: tuple[MortgagePoint, ...]
    payoff_date_baseline_iso: str | None
    payoff_date_with_fe_iso: str | None
    time_saved_in_periods: int
    interest_saved: int
    fe_start_period: int | None = None

    @classmethod
    def empty(cls) -> "OverpaymentComparison":
        return cls(
            baseline=(),
            with_fe=(),
            payoff_date_baseline_iso=None,
            payoff_date_with_fe_iso=None,
            time_saved_in_periods=0,
            interest_saved=0,
        )

    def as_dict(self) -> dict[str, Any]:
        return {
            "baseline": [point.as_dict() for point in self.baseline],
            "with_fe": [point.as_dict() for point in self.with_fe],
            "payoff_date_baseline_iso": self.payoff_date_baseline_iso,
            "payoff_date_with_fe_iso": self.payoff_date_with_fe_iso,
            "time_saved_in_periods": self.time_saved_in_periods,
            "interest_saved": self.interest_saved,
            "fe_start_period": self.fe_start_period,
        }


@dataclass(frozen=True, slots=True)
class _Trajectory:
    points: tuple[MortgagePoint, ...]
    interest_cents: int
    paid_off: bool

    @property
    def payoff_date_iso(self) -> str | None:
        if not self.paid_off or not self.points:
            return None
        return self.points[-1].date_iso


def _mortgage_trajectory(result: SimulationResult, mortgage: Debt, start_date: date) -> _Trajectory:
    """Extract one debt's balance path from a fortnightly run, up to its payoff."""

    points: list[MortgagePoint] = []
    # A cleared debt accrues nothing afterwards, so the run total is its total.
    interest = result.interest_for(mortgage.id)
    for index, snapshot in enumerate(result.timeline):
        points.append(
            MortgagePoint(
                period_index=index,
                date_iso=fortnight_date(start_date, index).isoformat(),
                remaining_balance=snapshot.remaining_balances.get(mortgage.id, 0),
            )
        )
        if any(debt.id == mortgage.id for debt in snapshot.debts_paid):
            return _Trajectory(tuple(points), interest, True)
    return _Trajectory(tuple(points), interest, False)


def _others_cleared_at(result: SimulationResult, others: list[Debt]) -> int | None:
    """Period in which every non-mortgage debt in ``others`` had been paid off."""

    outstanding = {debt.id for debt in others if not debt.is_mortgage}
    if not outstanding:
        return 0
    for snapshot in result.timeline:
        outstanding.difference_update(debt.id for debt in snapshot.debts_paid)
        if not outstanding:
            return snapshot.period
    return None


def find_mortgage(debts: Iterable[Debt]) -> Debt | None:
    """Return the first mortgage-type debt, if any."""

    return next((debt for debt in debts if debt.is_mortgage), None)


def compare_overpayment(
    *,
    debts: Iterable[Debt],
    fortnightly_extra: Money | int,
    start_date: date,
    limits: EngineLimits | None = None,
) -> OverpaymentComparison:
    """Compare minimum-only mortgage payoff with the Fire Extinguisher cascade.

    Args:
        debts: All debts; the first mortgage-type debt is the one compared
        fortnightly_extra: Fire Extinguisher amount per fortnight (Money or cents)
        start_date: Date of the first fortnightly payment (period index 0)
        limits: Iteration ceilings passed through to the engine

    Returns:
        OverpaymentComparison; empty when there is no mortgage
    """
    debts = list(debts)
    extra = Money.coerce(fortnightly_extra)
    mortgage = find_mortgage(debts)
    if mortgage is None:
        logger.debug("No mortgage among %d debts; returning empty comparison", len(debts))
        return OverpaymentComparison.empty()

    others = [debt for debt in debts if debt.id != mortgage.id]
    if sum(1 for debt in debts if debt.is_mortgage) > 1:
        logger.warning(
            "Several mortgages supplied; comparing the first",
            extra={"mortgage_id": mortgage.id},
        )

    baseline_run = simulate(
        debts=[mortgage],
        extra_payment=Money.zero(extra.currency),
        period_kind=PeriodKind.FORTNIGHT,
        limits=limits,
    )
    baseline = _mortgage_trajectory(baseline_run, mortgage, start_date)

    if extra.cents <= 0:
        # No acceleration possible: the with-FE path is the baseline itself.
        with_fe = baseline
        fe_start_period = None
    else:
        with_fe_run = simulate(
            debts=[mortgage, *others],
            extra_payment=extra,
            period_kind=PeriodKind.FORTNIGHT,
            limits=limits,
        )
        with_fe = _mortgage_trajectory(with_fe_run, mortgage, start_date)
        fe_start_period = _others_cleared_at(with_fe_run, others)

    comparison = OverpaymentComparison(
        baseline=baseline.points,
        with_fe=with_fe.points,
        payoff_date_baseline_iso=baseline.payoff_date_iso,
        payoff_date_with_fe_iso=with_fe.payoff_date_iso,
        time_saved_in_periods=max(0, len(baseline.points) - len(with_fe.points)),
        interest_saved=max(0, baseline.interest_cents - with_fe.interest_cents),
        fe_start_period=fe_start_period,
    )

    logger.info(
        "Mortgage overpayment comparison computed",
        extra={
            "mortgage_id": mortgage.id,
            "extra_cents": extra.cents,
            "baseline_fortnights": len(comparison.baseline),
            "with_fe_fortnights": len(comparison.with_fe),
            "time_saved_fortnights": comparison.time_saved_in_periods,
            "interest_saved_cents": comparison.interest_saved,
        },
    )
    return comparison


__all__ = ["MortgagePoint", "OverpaymentComparison", "compare_overpayment", "find_mortgage"]
