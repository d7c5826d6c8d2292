"""Config settings – SettingsProvider (consistent snapshots, hot reload)."""
from __future__ import annotations

import threading
from typing import Callable, Generic, TypeVar

from mp_facets.config.settings.base import Settings
from mp_facets.observability.logging import get_logger

T = TypeVar("T", bound=Settings)

_log = get_logger(__name__)


class SettingsProvider(Generic[T]):
    """Hands out the current settings instance as an immutable snapshot.

    A search run calls :meth:`snapshot` exactly once and uses that
    reference for filtering and facet building alike, so a concurrent
    :meth:`reload` can never make the two disagree within one request.
    """

    def __init__(self, settings: T, *, loader: Callable[[], T] | None = None) -> None:
        self._current = settings
        self._loader = loader
        self._lock = threading.Lock()

    def snapshot(self) -> T:
        return self._current

    def replace(self, settings: T) -> T:
        """Swap in *settings* and return the previous snapshot."""
        with self._lock:
            previous, self._current = self._current, settings
        _log.info("settings_replaced", settings=type(settings).__name__)
        return previous

    def reload(self) -> T:
        """Rebuild settings from the configured loader and swap them in."""
        if self._loader is None:
            return self._current
        fresh = self._loader()
        self.replace(fresh)
        return fresh


__all__ = ["SettingsProvider"]
