"""Input record exports."""

from .debt import Debt, DebtType

__all__ = ["Debt", "DebtType"]
