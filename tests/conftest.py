"""Pytest configuration and shared fixtures for the Barefoot planner tests.

Provides debt factories for the common credit card / mortgage scenarios and
keeps the package logger clean between tests.
"""

from __future__ import annotations

import logging
from datetime import date

import pytest

from barefoot.domain.periods import PaymentFrequency
from barefoot.logging_config import ROOT_LOGGER_NAME
from barefoot.models import Debt, DebtType

START_DATE = date(2026, 1, 5)


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """Drop handlers installed by setup_logging so streams do not leak across tests."""

    yield
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


@pytest.fixture
def start_date() -> date:
    return START_DATE


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def debt_factory():
    """Factory for building Debt records with sensible defaults.

    Returns:
        Callable: Function that creates Debt instances
    """

    counter = {"n": 0}

    def _create_debt(
        balance: int = 100_000,
        rate: float = 0.0,
        minimum: int = 0,
        priority: int = 1,
        debt_type: DebtType = DebtType.CREDIT_CARD,
        frequency: PaymentFrequency = PaymentFrequency.FORTNIGHTLY,
        id: str | None = None,
        name: str | None = None,
        original: int | None = None,
    ) -> Debt:
        """Create a debt; amounts are cents, ``rate`` is an annual fraction."""
        counter["n"] += 1
        debt_id = id or f"debt-{counter['n']}"
        return Debt(
            id=debt_id,
            name=name or f"Debt {counter['n']}",
            debt_type=debt_type,
            original_principal=original if original is not None else balance,
            current_balance=balance,
            interest_rate=rate,
            minimum_payment=minimum,
            min_payment_frequency=frequency,
            priority=priority,
        )

    return _create_debt


@pytest.fixture
def credit_card(debt_factory) -> Debt:
    """$3,000 Visa at 19.99% with a $100 fortnightly minimum."""
    return debt_factory(
        id="cc-1",
        name="Visa",
        balance=300_000,
        rate=0.1999,
        minimum=10_000,
        priority=1,
    )


@pytest.fixture
def mortgage(debt_factory) -> Debt:
    """$450k home loan at 5.5% with a $2,000 fortnightly minimum."""
    return debt_factory(
        id="mortgage-1",
        name="Home Loan",
        balance=45_000_000,
        original=50_000_000,
        rate=0.055,
        minimum=200_000,
        priority=5,
        debt_type=DebtType.MORTGAGE,
    )

