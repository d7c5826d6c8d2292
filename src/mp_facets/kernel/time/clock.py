"""Kernel time – Clock protocol + implementations."""
from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Protocol


class Clock(Protocol):
    """Port: abstract clock so relative date facets are testable."""

    def now(self) -> datetime: ...


class SystemClock:
    """Production clock that delegates to ``datetime.now(UTC)``."""

    def now(self) -> datetime:
        return datetime.now(UTC)


class FrozenClock:
    """Test clock pinned to a fixed point in time."""

    def __init__(self, fixed: datetime) -> None:
        self._fixed = fixed

    def now(self) -> datetime:
        return self._fixed

    def advance(self, **kwargs: int | float) -> None:
        """Advance the frozen time by the given ``timedelta`` kwargs."""
        self._fixed += timedelta(**kwargs)


def utc_now() -> datetime:
    """Shorthand for ``datetime.now(UTC)``."""
    return datetime.now(UTC)


def naive_utc(moment: datetime) -> datetime:
    """Return *moment* as a naive UTC timestamp; naive input is taken as UTC."""
    if moment.tzinfo is not None:
        return moment.astimezone(UTC).replace(tzinfo=None)
    return moment


def utc_midnight(moment: datetime) -> datetime:
    """Truncate *moment* to 00:00 of its day, as a naive UTC timestamp.

    Stored timestamps are naive UTC, so anchors computed from the clock
    have to compare equal to values parsed from request tokens.
    """
    return naive_utc(moment).replace(hour=0, minute=0, second=0, microsecond=0)


__all__ = ["Clock", "FrozenClock", "SystemClock", "naive_utc", "utc_midnight", "utc_now"]
