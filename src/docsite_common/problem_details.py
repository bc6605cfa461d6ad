"""RFC 9457 Problem Details helpers with schema validation.

This module provides typed helpers for building RFC 9457 Problem Details payloads
with JSON Schema 2020-12 validation. All payloads validate against the schema
shipped at ``docsite_common/schema/problem_details.json``.

Examples
--------
>>> from docsite_common.problem_details import build_problem_details, render_problem
>>> problem = build_problem_details(
...     "https://docsite.dev/problems/metadata-unavailable",
...     "Metadata unavailable",
...     404,
...     "help-all.json missing for 2.19",
...     "urn:docsite:version:2.19",
...     extensions={"version": "2.19"},
... )
>>> "metadata-unavailable" in render_problem(problem)
True
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from functools import cache
from pathlib import Path
from typing import TYPE_CHECKING, TypedDict, cast

from jsonschema import Draft202012Validator
from jsonschema.exceptions import SchemaError, ValidationError

from docsite_common.logging import get_logger
from docsite_common.types import JsonPrimitive, JsonValue

if TYPE_CHECKING:
    from collections.abc import Mapping

__all__ = [
    "JsonPrimitive",
    "JsonValue",
    "ProblemDetails",
    "ProblemDetailsParams",
    "ProblemDetailsValidationError",
    "build_problem_details",
    "render_problem",
    "validate_problem_details",
]

logger = get_logger(__name__)

_SCHEMA_PATH = Path(__file__).parent / "schema" / "problem_details.json"


class ProblemDetails(TypedDict, total=False):
    """TypedDict for RFC 9457 Problem Details payloads."""

    type: str
    title: str
    status: int
    detail: str
    instance: str
    code: str
    extensions: dict[str, JsonValue]


@dataclass(slots=True)
class ProblemDetailsParams:
    """Parameters used to construct a Problem Details payload."""

    problem_type: str
    title: str
    status: int
    detail: str
    instance: str
    code: str | None = None
    extensions: Mapping[str, JsonValue] | None = None


class ProblemDetailsValidationError(Exception):
    """Raised when a Problem Details payload fails schema validation.

    Parameters
    ----------
    message : str
        Human-readable error message describing the validation failure.
    validation_errors : list[str] | None, optional
        Specific validation error messages from the schema validator.
    """

    def __init__(self, message: str, validation_errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.validation_errors = validation_errors or []


@cache
def _load_schema() -> dict[str, object]:
    try:
        schema: dict[str, object] = json.loads(_SCHEMA_PATH.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        msg = f"Failed to load Problem Details schema: {exc}"
        raise ProblemDetailsValidationError(msg) from exc
    try:
        Draft202012Validator.check_schema(schema)
    except SchemaError as exc:
        msg = f"Invalid Problem Details schema: {exc.message}"
        raise ProblemDetailsValidationError(msg) from exc
    return schema


def validate_problem_details(payload: Mapping[str, JsonValue]) -> None:
    """Validate ``payload`` against the Problem Details schema.

    Raises
    ------
    ProblemDetailsValidationError
        If the payload violates the schema. ``validation_errors`` lists each
        violation with its JSON path.
    """
    validator = Draft202012Validator(_load_schema())
    errors: list[str] = []
    for error in sorted(validator.iter_errors(payload), key=lambda err: list(err.path)):
        errors.append(_describe_error(error))
    if errors:
        logger.debug(
            "Problem Details payload rejected",
            extra={"operation": "problem_details", "errors": errors},
        )
        msg = f"Problem Details validation failed: {'; '.join(errors)}"
        raise ProblemDetailsValidationError(msg, validation_errors=errors)


def _describe_error(error: ValidationError) -> str:
    if error.absolute_path:
        path_str = ".".join(str(part) for part in error.absolute_path)
        return f"{error.message} (at path: {path_str})"
    return error.message


def build_problem_details(
    problem_type: str | ProblemDetailsParams,
    title: str | None = None,
    status: int | None = None,
    detail: str | None = None,
    instance: str | None = None,
    *,
    code: str | None = None,
    extensions: Mapping[str, JsonValue] | None = None,
) -> ProblemDetails:
    """Build and validate an RFC 9457 Problem Details payload.

    Accepts either a single :class:`ProblemDetailsParams` or the positional
    fields ``(problem_type, title, status, detail, instance)``.

    Returns
    -------
    ProblemDetails
        Validated payload. ``code`` and ``extensions`` are only present when
        provided.

    Raises
    ------
    TypeError
        If a required field is missing in the positional form.
    """
    if isinstance(problem_type, ProblemDetailsParams):
        params = problem_type
    else:
        if title is None or status is None or detail is None or instance is None:
            msg = "build_problem_details() requires title, status, detail and instance"
            raise TypeError(msg)
        params = ProblemDetailsParams(
            problem_type=problem_type,
            title=title,
            status=status,
            detail=detail,
            instance=instance,
            code=code,
            extensions=extensions,
        )

    payload: dict[str, JsonValue] = {
        "type": params.problem_type,
        "title": params.title,
        "status": params.status,
        "detail": params.detail,
        "instance": params.instance,
    }
    if params.code is not None:
        payload["code"] = params.code
    if params.extensions:
        payload["extensions"] = dict(params.extensions)

    validate_problem_details(payload)
    return cast("ProblemDetails", payload)


def render_problem(problem: ProblemDetails) -> str:
    """Render ``problem`` as indented JSON with stable key order."""
    return json.dumps(problem, indent=2, sort_keys=True)
