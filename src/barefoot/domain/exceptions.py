"""Domain-level exceptions."""

from __future__ import annotations


class DomainError(Exception):
    """Base class for violations of business rules and invariants."""


class ValidationError(DomainError):
    """Raised when a value object or domain constraint is violated."""


__all__ = ["DomainError", "ValidationError"]
