"""CSV export helpers for payoff plans and mortgage comparisons."""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Iterable, Mapping

from .mortgage import OverpaymentComparison
from .payoff_plan import PayoffPlan

PLAN_HEADERS = [
    "fortnight",
    "payment_date",
    "debt_being_paid",
    "payment_to_active_debt_cents",
    "remaining_balance_of_active_debt_cents",
    "total_debt_remaining_cents",
    "debts_paid_off",
    "interest_cents",
]

MORTGAGE_HEADERS = [
    "period_index",
    "date_iso",
    "baseline_remaining_cents",
    "with_fe_remaining_cents",
]


def _serialize_value(value):
    if value is None:
        return ""
    return str(value)


def _write_rows(*, headers: list[str], rows: Iterable[Mapping], output_path: Path) -> Path:
    output_path.parent.mkdir(parents=True, exist_ok=True)

    # Use newline='' for csv on Windows
    with output_path.open("w", newline="", encoding="utf-8") as fh:
        writer = csv.DictWriter(
            fh, fieldnames=headers, extrasaction="ignore", quoting=csv.QUOTE_MINIMAL
        )
        writer.writeheader()
        for row in rows:
            writer.writerow({key: _serialize_value(row.get(key)) for key in headers})

    return output_path


def export_payoff_plan_csv(*, plan: PayoffPlan, output_path: Path) -> Path:
    """Write one row per fortnight of ``plan``; returns the path written."""

    rows = (
        {
            "fortnight": entry.fortnight,
            "payment_date": entry.payment_date,
            "debt_being_paid": entry.debt_being_paid.name if entry.debt_being_paid else None,
            "payment_to_active_debt_cents": entry.payment_to_active_debt_cents,
            "remaining_balance_of_active_debt_cents": entry.remaining_balance_of_active_debt_cents,
            "total_debt_remaining_cents": entry.total_debt_remaining_cents,
            "debts_paid_off": ";".join(ref.name for ref in entry.debts_paid_off),
            "interest_cents": entry.interest_cents,
        }
        for entry in plan.timeline
    )
    return _write_rows(headers=PLAN_HEADERS, rows=rows, output_path=output_path)


def export_mortgage_comparison_csv(*, comparison: OverpaymentComparison, output_path: Path) -> Path:
    """Write baseline and with-FE balances side by side, one row per fortnight.

    The shorter trajectory has blank cells once it has been paid off.
    """

    longest = comparison.baseline if len(comparison.baseline) >= len(comparison.with_fe) else comparison.with_fe
    rows = []
    for index, point in enumerate(longest):
        baseline = comparison.baseline[index] if index < len(comparison.baseline) else None
        with_fe = comparison.with_fe[index] if index < len(comparison.with_fe) else None
        rows.append(
            {
                "period_index": point.period_index,
                "date_iso": point.date_iso,
                "baseline_remaining_cents": baseline.remaining_balance if baseline else None,
                "with_fe_remaining_cents": with_fe.remaining_balance if with_fe else None,
            }
        )
    return _write_rows(headers=MORTGAGE_HEADERS, rows=rows, output_path=output_path)


__all__ = ["export_mortgage_comparison_csv", "export_payoff_plan_csv"]
