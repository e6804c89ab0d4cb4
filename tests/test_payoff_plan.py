"""Fortnightly payoff plan tests."""

from __future__ import annotations

import json

from barefoot.domain.periods import PaymentFrequency
from barefoot.services.debts import EngineLimits
from barefoot.services.payoff_plan import build_payoff_plan


def test_empty_plan(start_date):
    plan = build_payoff_plan(debts=[], fortnightly_extra=92_000, start_date=start_date)

    assert plan.total_fortnights_to_payoff == 0
    assert plan.total_interest_cents == 0
    assert plan.fortnightly_fire_extinguisher_cents == 92_000
    assert plan.timeline == ()


def test_first_fortnight_targets_credit_card(credit_card, mortgage, start_date):
    plan = build_payoff_plan(
        debts=[mortgage, credit_card], fortnightly_extra=92_000, start_date=start_date
    )

    first = plan.timeline[0]
    assert first.fortnight == 1
    assert first.payment_date == "2026-01-05"
    assert first.debt_being_paid.id == "cc-1"
    assert first.debt_being_paid.debt_type == "credit-card"
    assert first.payment_to_active_debt_cents == 92_000
    assert [m.debt_id for m in first.minimum_payments_on_other_debts] == ["mortgage-1"]
    assert first.minimum_payments_on_other_debts[0].minimum_payment_cents == 200_000
    assert first.total_debt_remaining_cents == (
        first.remaining_balance_of_active_debt_cents
        + first.minimum_payments_on_other_debts[0].remaining_balance_cents
    )
    assert plan.timeline[1].payment_date == "2026-01-19"


def test_cascade_moves_to_mortgage(credit_card, mortgage, start_date):
    plan = build_payoff_plan(
        debts=[credit_card, mortgage], fortnightly_extra=92_000, start_date=start_date
    )

    cleared = next(e for e in plan.timeline if e.debts_paid_off)
    assert [ref.id for ref in cleared.debts_paid_off] == ["cc-1"]
    assert cleared.debt_being_paid.id == "mortgage-1"
    assert cleared.minimum_payments_on_other_debts == ()

    last = plan.timeline[-1]
    assert last.debt_being_paid is None
    assert last.total_debt_remaining_cents == 0
    assert last.payment_to_active_debt_cents == 0
    assert plan.terminated_early is False
    assert plan.total_fortnights_to_payoff == len(plan.timeline)


def test_monthly_minimums_shown_per_fortnight(debt_factory, start_date):
    card = debt_factory(id="cc", balance=100_000, minimum=5_000, priority=1)
    loan = debt_factory(
        id="loan", balance=900_000, minimum=433_334, priority=2, frequency=PaymentFrequency.MONTHLY
    )

    plan = build_payoff_plan(debts=[card, loan], fortnightly_extra=0, start_date=start_date)

    # round(433334 * 12 / 26) = 200000
    assert plan.timeline[0].minimum_payments_on_other_debts[0].minimum_payment_cents == 200_000


def test_plan_reports_unfinished_runs(debt_factory, start_date):
    debt = debt_factory(balance=1_000_000, rate=0.3, minimum=100)

    plan = build_payoff_plan(
        debts=[debt], fortnightly_extra=0, start_date=start_date, limits=EngineLimits(max_fortnights=4)
    )

    assert plan.terminated_early is True
    assert len(plan.timeline) == 4


def test_plan_as_dict_is_json_ready(credit_card, start_date):
    plan = build_payoff_plan(debts=[credit_card], fortnightly_extra=50_000, start_date=start_date)

    data = json.loads(json.dumps(plan.as_dict()))

    assert data["timeline"][0]["debt_being_paid"] == {
        "id": "cc-1",
        "name": "Visa",
        "debt_type": "credit-card",
    }
