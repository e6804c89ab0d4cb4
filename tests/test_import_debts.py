"""JSON debt ingestion tests."""

from __future__ import annotations

import json

import pytest

from barefoot.domain.periods import PaymentFrequency
from barefoot.models import DebtType
from barefoot.services.import_debts import dump_debts, load_debts, normalize_record, parse_debts


def test_parse_snake_case_list():
    debts = parse_debts(
        [
            {
                "id": "cc-1",
                "name": "Visa",
                "original_principal": 300_000,
                "current_balance": 250_000,
                "interest_rate": 0.1999,
                "minimum_payment": 10_000,
                "priority": 1,
            }
        ]
    )

    assert len(debts) == 1
    assert debts[0].current_balance == 250_000
    assert debts[0].debt_type is DebtType.CREDIT_CARD


def test_parse_camel_case_object():
    payload = {
        "debts": [
            {
                "id": 7,
                "name": "Home Loan",
                "debtType": "mortgage",
                "originalAmountCents": 50_000_000,
                "currentBalanceCents": 45_000_000,
                "interestRate": 0.055,
                "minimumPaymentCents": 433_334,
                "minPaymentFrequency": "MONTHLY",
                "priority": 5,
            }
        ]
    }

    (debt,) = parse_debts(payload)

    assert debt.id == "7"
    assert debt.is_mortgage
    assert debt.original_principal == 50_000_000
    assert debt.min_payment_frequency is PaymentFrequency.MONTHLY


def test_original_principal_defaults_to_balance():
    assert normalize_record({"current_balance": 10})["original_principal"] == 10


def test_invalid_record_names_its_index():
    payload = [
        {"id": "a", "name": "ok", "current_balance": 100},
        {"id": "b", "name": "", "current_balance": 100},
    ]

    with pytest.raises(ValueError, match="Debt #1 is invalid"):
        parse_debts(payload)


def test_duplicate_ids_rejected():
    payload = [
        {"id": "a", "name": "one", "current_balance": 100},
        {"id": "a", "name": "two", "current_balance": 200},
    ]

    with pytest.raises(ValueError, match="reuses id 'a'"):
        parse_debts(payload)


@pytest.mark.parametrize("payload", [42, {"items": []}, ["not a record"]])
def test_bad_shapes_rejected(payload):
    with pytest.raises(ValueError):
        parse_debts(payload)


def test_load_and_dump_round_trip(tmp_path, credit_card, mortgage):
    path = tmp_path / "debts.json"
    path.write_text(json.dumps(dump_debts([credit_card, mortgage])), encoding="utf-8")

    loaded = load_debts(path)

    assert [d.id for d in loaded] == ["cc-1", "mortgage-1"]
    assert loaded[1].debt_type is DebtType.MORTGAGE


def test_load_rejects_invalid_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(ValueError, match="not valid JSON"):
        load_debts(path)
