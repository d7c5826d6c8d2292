"""Domain errors – broken engine invariants."""

from __future__ import annotations

from mp_facets.kernel.errors.base import BaseError


class DomainError(BaseError):
    """Raised when a domain rule / invariant is violated."""

    default_code = "domain_error"


class InvariantViolationError(DomainError):
    """An engine invariant was violated (e.g. a stage ran out of order)."""

    default_code = "invariant_violation"


__all__ = ["DomainError", "InvariantViolationError"]
