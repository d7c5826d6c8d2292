"""Config settings – SettingsLoader port and EnvSettingsLoader."""
from __future__ import annotations

import abc
import dataclasses
import os
import types
import typing
from enum import Enum
from typing import Any, TypeVar

from mp_facets.config.settings.base import Settings
from mp_facets.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

T = TypeVar("T", bound=Settings)


class SettingsLoader(abc.ABC):
    """Port: load settings from an external source."""

    @abc.abstractmethod
    def load(self, settings_class: type[T]) -> T: ...


class EnvSettingsLoader(SettingsLoader):
    """Load settings from OS environment variables.

    ``<PREFIX>_<FIELD>`` is read for every dataclass field. Sequences are
    comma separated (``name,sku``), mappings are ``key=value`` pairs
    (``Search/Search=24,Catalog/Category=12``).
    """

    def __init__(self, environ: typing.Mapping[str, str] | None = None) -> None:
        self._environ = environ

    def load(self, settings_class: type[T]) -> T:
        environ = os.environ if self._environ is None else self._environ
        prefix = getattr(settings_class, "_prefix", "").upper()
        hints = typing.get_type_hints(settings_class)
        kwargs: dict[str, Any] = {}

        for field in dataclasses.fields(settings_class):  # type: ignore[arg-type]
            env_key = f"{prefix}_{field.name}".upper().lstrip("_")
            raw = environ.get(env_key)

            if raw is None:
                if (
                    field.default is dataclasses.MISSING
                    and field.default_factory is dataclasses.MISSING  # type: ignore[misc]
                ):
                    raise MissingRequiredSettingError(env_key)
                continue

            try:
                kwargs[field.name] = self._coerce(raw, hints.get(field.name, str))
            except (TypeError, ValueError) as exc:
                raise InvalidSettingValueError(env_key, raw, str(exc)) from exc

        try:
            return settings_class(**kwargs)
        except ConfigError:
            raise
        except Exception as exc:
            raise ConfigError(f"Failed to load settings: {exc}") from exc

    def _coerce(self, value: str, type_hint: Any) -> Any:  # noqa: PLR0911
        origin = typing.get_origin(type_hint)
        args = typing.get_args(type_hint)
        if origin in (typing.Union, types.UnionType):
            inner = [a for a in args if a is not type(None)]
            return self._coerce(value, inner[0]) if inner else value
        if type_hint is bool:
            return value.strip().lower() in ("1", "true", "yes", "on")
        if type_hint is int:
            return int(value)
        if type_hint is float:
            return float(value)
        if isinstance(type_hint, type) and issubclass(type_hint, Enum):
            return type_hint(value.strip())
        if origin in (list, tuple, frozenset, set):
            item_type = args[0] if args else str
            items = [self._coerce(v.strip(), item_type) for v in value.split(",") if v.strip()]
            return items if origin is list else origin(items)
        if origin is dict:
            key_type, value_type = args if args else (str, str)
            pairs: dict[Any, Any] = {}
            for chunk in value.split(","):
                if not chunk.strip():
                    continue
                key, sep, item = chunk.partition("=")
                if not sep:
                    raise ValueError(f"expected key=value, got {chunk!r}")
                pairs[self._coerce(key.strip(), key_type)] = self._coerce(item.strip(), value_type)
            return pairs
        return value


__all__ = ["EnvSettingsLoader", "SettingsLoader"]
