"""Search errors – configuration defects and cancellation."""
from __future__ import annotations

from typing import Iterable

from mp_facets.config.validation import ConfigError
from mp_facets.kernel.errors import ApplicationError


class UnknownFacetKindError(ConfigError):
    """A facet dimension was requested that the search scope does not define."""
    default_code = "unknown_facet_kind"

    def __init__(self, kind: object, known: Iterable[object] = ()) -> None:
        known_names = sorted(str(getattr(k, "value", k)) for k in known)
        super().__init__(
            f"Unknown facet dimension {kind!r}",
            detail={"kind": str(kind), "known": known_names},
        )
        self.kind = kind


class MissingCollaboratorError(ConfigError):
    """A collaborator required by the engine was not supplied."""
    default_code = "missing_collaborator"

    def __init__(self, name: str) -> None:
        super().__init__(f"Required collaborator '{name}' is missing", detail={"collaborator": name})
        self.collaborator = name


class UnsupportedSearchModeError(ConfigError):
    """The configured match mode cannot be applied by the term filter."""
    default_code = "unsupported_search_mode"

    def __init__(self, mode: object) -> None:
        super().__init__(f"Search mode {mode!r} is not supported", detail={"mode": str(mode)})
        self.mode = mode


class SearchCanceledError(ApplicationError):
    """The caller canceled the search before results were materialized."""
    default_code = "search_canceled"


__all__ = [
    "MissingCollaboratorError",
    "SearchCanceledError",
    "UnknownFacetKindError",
    "UnsupportedSearchModeError",
]
