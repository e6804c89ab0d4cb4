"""JSON ingestion of debt lists."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable, Mapping

from pydantic import ValidationError as PydanticValidationError

from ..models.debt import Debt

# Field names accepted from exported app data (camelCase) mapped onto Debt fields.
KEY_ALIASES: dict[str, str] = {
    "debtType": "debt_type",
    "originalAmount": "original_principal",
    "originalAmountCents": "original_principal",
    "originalPrincipal": "original_principal",
    "originalPrincipalCents": "original_principal",
    "currentBalance": "current_balance",
    "currentBalanceCents": "current_balance",
    "interestRate": "interest_rate",
    "minimumPayment": "minimum_payment",
    "minimumPaymentCents": "minimum_payment",
    "minPaymentCents": "minimum_payment",
    "minPaymentFrequency": "min_payment_frequency",
}


def normalize_record(record: Mapping[str, Any]) -> dict[str, Any]:
    """Rename known camelCase keys; unknown keys pass through unchanged."""

    normalized: dict[str, Any] = {}
    for key, value in record.items():
        normalized[KEY_ALIASES.get(key, key)] = value
    if "id" in normalized and normalized["id"] is not None:
        normalized["id"] = str(normalized["id"])
    # A missing original principal defaults to the current balance.
    if "original_principal" not in normalized and "current_balance" in normalized:
        normalized["original_principal"] = normalized["current_balance"]
    return normalized


def parse_debts(payload: Any) -> list[Debt]:
    """Build validated Debt records from a decoded JSON payload.

    Accepts either a list of records or an object with a ``debts`` list.
    Raises ValueError naming the offending record on bad input.
    """

    if isinstance(payload, Mapping):
        payload = payload.get("debts")
    if not isinstance(payload, list):
        raise ValueError("Expected a list of debts or an object with a 'debts' list")

    debts: list[Debt] = []
    seen: set[str] = set()
    for index, record in enumerate(payload):
        if not isinstance(record, Mapping):
            raise ValueError(f"Debt #{index} is not an object")
        try:
            debt = Debt.model_validate(normalize_record(record))
        except PydanticValidationError as exc:
            raise ValueError(f"Debt #{index} is invalid: {exc}") from exc
        if debt.id in seen:
            raise ValueError(f"Debt #{index} reuses id {debt.id!r}")
        seen.add(debt.id)
        debts.append(debt)
    return debts


def load_debts(path: Path) -> list[Debt]:
    """Read and validate a JSON debt file."""

    try:
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"{path} is not valid JSON: {exc}") from exc
    return parse_debts(payload)


def dump_debts(debts: Iterable[Debt]) -> list[dict[str, Any]]:
    """Serialise debts back to JSON-ready dicts."""

    return [debt.model_dump(mode="json") for debt in debts]


__all__ = ["KEY_ALIASES", "dump_debts", "load_debts", "normalize_record", "parse_debts"]
