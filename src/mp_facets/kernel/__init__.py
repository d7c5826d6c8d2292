"""Kernel – framework-agnostic building blocks shared by every search scope."""

from mp_facets.kernel.errors import (
    ApplicationError,
    BaseError,
    DomainError,
    InvariantViolationError,
)

__all__ = [
    "ApplicationError",
    "BaseError",
    "DomainError",
    "InvariantViolationError",
]
