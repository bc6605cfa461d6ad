"""Typed settings helpers for build tooling.

The functions in this module provide a thin wrapper around
``pydantic_settings.BaseSettings`` so build modules can load strongly typed
configuration directly from environment variables. Validation errors are
surfaced as :class:`~docsite_common.errors.SettingsError` exceptions whose
context carries the individual validation errors, so callers can emit
Problem Details and fail fast when configuration is wrong.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from pathlib import Path
from typing import Final, cast

from pydantic import ValidationError
from pydantic_settings import BaseSettings

from docsite_common.errors import SettingsError
from docsite_common.logging import get_logger
from docsite_common.types import JsonValue

__all__: Final[list[str]] = [
    "load_settings",
]

logger = get_logger(__name__)


def load_settings[SettingsT: BaseSettings](
    settings_factory: Callable[[], SettingsT] | type[SettingsT],
) -> SettingsT:
    """Instantiate settings via ``settings_factory`` with structured error handling.

    Parameters
    ----------
    settings_factory : Callable[[], SettingsT] | type[SettingsT]
        Zero-argument callable (or settings class) returning a ``BaseSettings``.

    Returns
    -------
    SettingsT
        Validated settings instance.

    Raises
    ------
    SettingsError
        Raised when validation fails; ``context["errors"]`` lists each
        validation error and ``context["settings_class"]`` names the model.
    """
    try:
        return settings_factory()
    except ValidationError as exc:
        attr_name: object = getattr(settings_factory, "__name__", None)
        settings_name = (
            attr_name if isinstance(attr_name, str) else settings_factory.__class__.__name__
        )
        error_dicts = [_as_error_dict(err) for err in cast("Sequence[object]", exc.errors())]
        logger.error(
            "Settings validation failed",
            extra={"operation": "load_settings", "settings_class": settings_name},
        )
        message = f"Failed to load {settings_name}: {exc.error_count()} invalid field(s)"
        raise SettingsError(
            message,
            cause=exc,
            context={"settings_class": settings_name, "errors": error_dicts},
        ) from exc


def _as_error_dict(error: object) -> dict[str, JsonValue]:
    if isinstance(error, Mapping):
        mapping = cast("Mapping[object, object]", error)
        # ``ctx``/``url`` hold exception objects and doc links that add nothing.
        return {
            str(key): _to_jsonable(value)
            for key, value in mapping.items()
            if key not in {"ctx", "url"}
        }
    return {"detail": _to_jsonable(error)}


def _to_jsonable(value: object) -> JsonValue:
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    if isinstance(value, Mapping):
        mapping = cast("Mapping[object, object]", value)
        return {str(key): _to_jsonable(val) for key, val in mapping.items()}
    if isinstance(value, (list, tuple)):
        return [_to_jsonable(item) for item in value]
    if isinstance(value, Path):
        return value.as_posix()
    return repr(value)
