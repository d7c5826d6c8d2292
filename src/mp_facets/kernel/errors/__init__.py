"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    BaseError
    ├── DomainError          (domain.py)
    │   └── InvariantViolationError
    └── ApplicationError     (application.py)
        ├── ConfigError                 (mp_facets.config.validation)
        │   ├── UnknownFacetKindError       (mp_facets.search.errors)
        │   ├── MissingCollaboratorError
        │   └── UnsupportedSearchModeError
        └── SearchCanceledError         (mp_facets.search.errors)

Store failures are not part of the hierarchy: they propagate unchanged.
"""

from mp_facets.kernel.errors.application import ApplicationError
from mp_facets.kernel.errors.base import BaseError
from mp_facets.kernel.errors.domain import DomainError, InvariantViolationError

__all__ = [
    "ApplicationError",
    "BaseError",
    "DomainError",
    "InvariantViolationError",
]
