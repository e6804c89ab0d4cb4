"""Service module exports."""

from . import debts, export_csv, import_debts, mortgage, payoff_plan

__all__ = [
    "debts",
    "export_csv",
    "import_debts",
    "mortgage",
    "payoff_plan",
]
