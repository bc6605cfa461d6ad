"""Typed exception hierarchy with Problem Details support.

All docsite exceptions inherit from DocsiteError, which carries a stable
error code, an HTTP-like status, a context mapping and RFC 9457 Problem
Details conversion. Every failure in a documentation build is fatal: these
exceptions propagate to the command boundary, which renders the Problem
Details payload and exits non-zero.

Examples
--------
>>> from docsite_common.errors import ErrorCode, MetadataUnavailableError
>>> try:
...     raise MetadataUnavailableError("help-all.json missing", context={"version": "2.19"})
... except MetadataUnavailableError as e:
...     assert e.code == ErrorCode.METADATA_UNAVAILABLE
...     details = e.to_problem_details()
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, ClassVar, cast

from docsite_common.errors.codes import ErrorCode, get_type_uri
from docsite_common.problem_details import build_problem_details

if TYPE_CHECKING:
    from docsite_common.problem_details import ProblemDetails
    from docsite_common.types import JsonValue

__all__ = [
    "ConfigKeyNotFoundError",
    "DocsiteError",
    "HardcodedValueNotFoundError",
    "ManifestWriteError",
    "MalformedMetadataDocumentError",
    "MalformedVersionIdentifierError",
    "MetadataUnavailableError",
    "ReleaseTrainError",
    "SettingsError",
]


class DocsiteError(Exception):
    """Base exception for all docsite errors.

    Subclasses pin ``default_code`` and ``default_status``; instances may
    override either through the constructor.

    Parameters
    ----------
    message : str
        Human-readable error message.
    code : ErrorCode | None, optional
        Error code. Defaults to the subclass' ``default_code``.
    http_status : int | None, optional
        Status used in Problem Details. Defaults to ``default_status``.
    cause : Exception | None, optional
        Underlying exception, chained as ``__cause__``. Defaults to None.
    context : Mapping[str, object] | None, optional
        Extra fields describing the failure (e.g. ``version``, ``path``).
        Defaults to None.

    Attributes
    ----------
    message : str
        Human-readable error message.
    code : ErrorCode
        Error code enum value.
    http_status : int
        Status code for Problem Details payloads.
    log_level : int
        Logging level used when the error is reported.
    context : dict[str, object]
        Additional context dictionary for error details.
    """

    default_code: ClassVar[ErrorCode] = ErrorCode.RUNTIME_ERROR
    default_status: ClassVar[int] = 500

    def __init__(
        self,
        message: str,
        *,
        code: ErrorCode | None = None,
        http_status: int | None = None,
        log_level: int = logging.ERROR,
        cause: Exception | None = None,
        context: Mapping[str, object] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code if code is not None else self.default_code
        self.http_status = http_status if http_status is not None else self.default_status
        self.log_level = log_level
        self.context: dict[str, object] = dict(context) if context else {}
        if cause is not None:
            self.__cause__ = cause

    def to_problem_details(
        self,
        instance: str | None = None,
        title: str | None = None,
    ) -> ProblemDetails:
        """Convert to RFC 9457 Problem Details JSON.

        Parameters
        ----------
        instance : str | None, optional
            URI identifying the specific occurrence. Defaults to an URN
            derived from the error code.
        title : str | None, optional
            Short summary. Defaults to the exception class name.

        Returns
        -------
        ProblemDetails
            Problem Details payload with the context under ``extensions``.
        """
        extensions = {key: _jsonable(value) for key, value in self.context.items()}
        return build_problem_details(
            get_type_uri(self.code),
            title or self.__class__.__name__,
            self.http_status,
            self.message,
            instance or f"urn:docsite:error:{self.code.value}",
            code=self.code.value,
            extensions=extensions or None,
        )

    def __str__(self) -> str:
        """Return ``Class[code]: message`` plus the cause type when chained."""
        base = f"{self.__class__.__name__}[{self.code.value}]: {self.message}"
        if self.__cause__:
            base += f" (caused by: {type(self.__cause__).__name__})"
        return base


class ReleaseTrainError(DocsiteError):
    """Raised when the persisted release train cannot be loaded or is invalid."""

    default_code = ErrorCode.RELEASE_TRAIN_INVALID
    default_status = 422


class MalformedVersionIdentifierError(DocsiteError):
    """Raised when a version identifier does not have the expected ``2.<minor>`` shape."""

    default_code = ErrorCode.MALFORMED_VERSION_IDENTIFIER
    default_status = 422


class MetadataUnavailableError(DocsiteError):
    """Raised when a version's metadata file is missing, unreadable or not JSON."""

    default_code = ErrorCode.METADATA_UNAVAILABLE
    default_status = 404


class MalformedMetadataDocumentError(DocsiteError):
    """Raised when a metadata document parses but does not have the expected shape."""

    default_code = ErrorCode.MALFORMED_METADATA_DOCUMENT
    default_status = 422


class ConfigKeyNotFoundError(DocsiteError):
    """Raised when the product-version option is absent from the root scope."""

    default_code = ErrorCode.CONFIG_KEY_NOT_FOUND
    default_status = 422


class HardcodedValueNotFoundError(DocsiteError):
    """Raised when a value history has zero or several HARDCODED entries."""

    default_code = ErrorCode.HARDCODED_VALUE_NOT_FOUND
    default_status = 422


class ManifestWriteError(DocsiteError):
    """Raised when the publish manifest cannot be written to its destination."""

    default_code = ErrorCode.MANIFEST_WRITE_FAILED
    default_status = 500


class SettingsError(DocsiteError):
    """Raised when typed build settings fail validation."""

    default_code = ErrorCode.CONFIGURATION_ERROR
    default_status = 500


def _jsonable(value: object) -> JsonValue:
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    if isinstance(value, Mapping):
        mapping = cast("Mapping[object, object]", value)
        return {str(key): _jsonable(item) for key, item in mapping.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_jsonable(item) for item in value]
    return str(value)
