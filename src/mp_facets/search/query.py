"""Search query – the typed request model and tolerant token parsing.

Request tokens are public input: every parser here drops what it cannot
read instead of raising, so a garbage filter behaves exactly like an
absent one.
"""
from __future__ import annotations

import dataclasses
from datetime import UTC, date, datetime
from enum import Enum
from typing import Any, Callable, Iterable, Mapping, Sequence, TypeVar

from mp_facets.observability.logging import get_logger

T = TypeVar("T")

_log = get_logger(__name__)

RANGE_SEPARATOR = "~"

# Ids are 32-bit database keys; larger values cannot match any row.
MAX_ID = 2**31 - 1

# Tokens consumed into typed SearchQuery fields.
TERM_TOKEN = "q"
PAGE_INDEX_TOKEN = "i"
PAGE_SIZE_TOKEN = "s"
SORT_TOKEN = "o"


class SearchMode(str, Enum):
    STARTS_WITH = "startswith"
    CONTAINS = "contains"
    EXACT = "exact"  # not supported by the term filter; rejected


def _split(raw: str | Iterable[str] | None) -> list[str]:
    if raw is None:
        return []
    chunks = [raw] if isinstance(raw, str) else list(raw)
    return [part.strip() for chunk in chunks for part in chunk.split(",") if part.strip()]


def get_id_list(raw: str | Iterable[str] | None, *, token: str = "") -> tuple[int, ...]:
    """Parse comma-delimited, possibly multi-valued ids.

    Returns distinct ints in ``0..MAX_ID`` in first-seen order. Entries made
    of anything but ASCII digits, or out of range, are dropped.
    """
    ids: list[int] = []
    for part in _split(raw):
        value = int(part) if part.isascii() and part.isdigit() else -1
        if not 0 <= value <= MAX_ID:
            _log.debug("filter_token_malformed", token=token, value=part)
            continue
        if value not in ids:
            ids.append(value)
    return tuple(ids)


def parse_int(raw: str | Iterable[str] | None) -> int | None:
    """Parse the first entry as a signed 32-bit int, or ``None``."""
    parts = _split(raw)
    if not parts:
        return None
    digits = parts[0].removeprefix("-")
    if not (digits.isascii() and digits.isdigit()):
        return None
    value = int(parts[0])
    return value if -MAX_ID - 1 <= value <= MAX_ID else None


def parse_datetime(value: str) -> datetime | None:
    """Parse an ISO date or datetime; aware values are normalised to naive UTC."""
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        try:
            parsed = datetime.combine(date.fromisoformat(value), datetime.min.time())
        except ValueError:
            return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(UTC).replace(tzinfo=None)
    return parsed


def parse_range(
    raw: str | None,
    convert: Callable[[str], T | None],
) -> tuple[T | None, T | None] | None:
    """Parse ``from~to``, ``from~``, ``~to`` or a bare ``from``.

    Returns ``None`` when neither bound could be read.
    """
    if raw is None or not raw.strip():
        return None
    lower_raw, _, upper_raw = raw.strip().partition(RANGE_SEPARATOR)
    lower = convert(lower_raw.strip()) if lower_raw.strip() else None
    upper = convert(upper_raw.strip()) if upper_raw.strip() else None
    if lower is None and upper is None:
        return None
    return lower, upper


def _normalise_tokens(raw: Mapping[str, str | Sequence[str]]) -> dict[str, tuple[str, ...]]:
    tokens: dict[str, tuple[str, ...]] = {}
    for key, value in raw.items():
        values = (value,) if isinstance(value, str) else tuple(value)
        tokens[key.strip().lower()] = tokens.get(key.strip().lower(), ()) + values
    return tokens


@dataclasses.dataclass
class SearchQuery:
    """A structured search request.

    Common tokens are typed fields; dimension filters stay in ``tokens`` and
    are parsed on demand. Parsed values are memoised per instance, so each
    token is parsed at most once no matter how many consumers read it.
    """

    term: str = ""
    fields: tuple[str, ...] = ()
    mode: SearchMode = SearchMode.CONTAINS
    language_id: int | None = None
    currency_id: int | None = None
    page_index: int | None = None
    page_size: int | None = None
    sort: str | None = None
    tokens: Mapping[str, tuple[str, ...]] = dataclasses.field(default_factory=dict)
    build_facets: bool = True
    origin: str = ""
    _parsed: dict[tuple[str, str], Any] = dataclasses.field(
        default_factory=dict, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        self.tokens = _normalise_tokens(self.tokens)

    @classmethod
    def from_tokens(
        cls,
        raw: Mapping[str, str | Sequence[str]],
        *,
        fields: Sequence[str] = (),
        mode: SearchMode = SearchMode.CONTAINS,
        language_id: int | None = None,
        currency_id: int | None = None,
        origin: str = "",
        instant: bool = False,
    ) -> "SearchQuery":
        """Build a query from raw request tokens (``q``, ``i``, ``s``, ``o`` + dimensions).

        Instant (autocomplete) searches never build facets.
        """
        tokens = _normalise_tokens(raw)
        term_parts = tokens.pop(TERM_TOKEN, ())
        sort_parts = _split(tokens.pop(SORT_TOKEN, ()))
        return cls(
            term=term_parts[0].strip() if term_parts else "",
            fields=tuple(fields),
            mode=mode,
            language_id=language_id,
            currency_id=currency_id,
            page_index=parse_int(tokens.pop(PAGE_INDEX_TOKEN, ())),
            page_size=parse_int(tokens.pop(PAGE_SIZE_TOKEN, ())),
            sort=sort_parts[0].lower() if sort_parts else None,
            tokens=tokens,
            build_facets=not instant,
            origin=origin,
        )

    def raw(self, token: str) -> tuple[str, ...]:
        return self.tokens.get(token.lower(), ())

    def get_id_list(self, token: str) -> tuple[int, ...]:
        key = ("ids", token.lower())
        if key not in self._parsed:
            self._parsed[key] = get_id_list(self.raw(token), token=token)
        return self._parsed[key]  # type: ignore[no-any-return]

    def get_date_range(self, token: str) -> tuple[datetime | None, datetime | None] | None:
        """Return the ``(from, to)`` range of *token*, swapped into ascending order."""
        key = ("dates", token.lower())
        if key not in self._parsed:
            values = self.raw(token)
            parsed = parse_range(values[0] if values else None, parse_datetime)
            if values and parsed is None:
                _log.debug("filter_token_malformed", token=token, value=values[0])
            if parsed is not None:
                lower, upper = parsed
                if lower is not None and upper is not None and lower > upper:
                    parsed = (upper, lower)
            self._parsed[key] = parsed
        return self._parsed[key]  # type: ignore[no-any-return]

    @property
    def has_term(self) -> bool:
        return bool(self.term and self.term.strip())


__all__ = [
    "MAX_ID",
    "SearchMode",
    "SearchQuery",
    "get_id_list",
    "parse_datetime",
    "parse_int",
    "parse_range",
]
