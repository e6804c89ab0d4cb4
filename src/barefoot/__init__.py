"""Barefoot debt payoff planner package."""

from __future__ import annotations

from .config import BaseConfig
from .services.debts import EngineLimits, simulate
from .services.mortgage import compare_overpayment

__all__ = ["BaseConfig", "EngineLimits", "compare_overpayment", "simulate"]
