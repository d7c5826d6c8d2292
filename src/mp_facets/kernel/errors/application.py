"""Application-layer errors – raised by use-case orchestration, not by rules."""

from __future__ import annotations

from mp_facets.kernel.errors.base import BaseError


class ApplicationError(BaseError):
    """Cross-cutting application-layer concern."""

    default_code = "application_error"


__all__ = ["ApplicationError"]
