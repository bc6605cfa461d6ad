"""JSON type aliases shared by Problem Details, settings and log records."""

from __future__ import annotations

__all__ = [
    "JsonPrimitive",
    "JsonValue",
]

type JsonPrimitive = str | int | float | bool | None
type JsonValue = JsonPrimitive | dict[str, JsonValue] | list[JsonValue]
