"""Kernel security – Principal."""
from __future__ import annotations

import dataclasses
from datetime import datetime


@dataclasses.dataclass(frozen=True)
class Principal:
    """Identity a search is executed for.

    ``store_id`` and ``role_ids`` feed the restriction overlays;
    ``last_visit_utc`` anchors the "since last visit" date facet.
    """
    subject: str
    store_id: int | None = None
    role_ids: frozenset[int] = frozenset()
    last_visit_utc: datetime | None = None


ANONYMOUS = Principal(subject="anonymous")

__all__ = ["ANONYMOUS", "Principal"]
