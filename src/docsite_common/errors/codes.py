"""Error code registry and type URIs for Problem Details.

This module defines stable error codes and type URIs used in RFC 9457
Problem Details payloads. Codes and URIs are frozen after initial release
so downstream tooling can match on them.

Examples
--------
>>> from docsite_common.errors.codes import ErrorCode, get_type_uri
>>> get_type_uri(ErrorCode.METADATA_UNAVAILABLE)
'https://docsite.dev/problems/metadata-unavailable'
"""

from __future__ import annotations

from enum import StrEnum
from typing import Final

__all__ = [
    "BASE_TYPE_URI",
    "ErrorCode",
    "get_type_uri",
]


BASE_TYPE_URI: Final[str] = "https://docsite.dev/problems"


class ErrorCode(StrEnum):
    """Stable error codes for docsite exceptions.

    Codes are grouped by category:

    - 1xx: Release train and version identifiers
    - 2xx: Per-version metadata
    - 3xx: Publish manifest output
    - 5xx: Configuration and runtime
    """

    # 1xx - release train
    RELEASE_TRAIN_INVALID = "release-train-invalid"
    MALFORMED_VERSION_IDENTIFIER = "malformed-version-identifier"

    # 2xx - version metadata
    METADATA_UNAVAILABLE = "metadata-unavailable"
    MALFORMED_METADATA_DOCUMENT = "malformed-metadata-document"
    CONFIG_KEY_NOT_FOUND = "config-key-not-found"
    HARDCODED_VALUE_NOT_FOUND = "hardcoded-value-not-found"

    # 3xx - publish manifest
    MANIFEST_WRITE_FAILED = "manifest-write-failed"

    # 5xx - configuration & runtime
    CONFIGURATION_ERROR = "configuration-error"
    RUNTIME_ERROR = "runtime-error"


def get_type_uri(code: ErrorCode) -> str:
    """Return the Problem Details type URI for ``code``."""
    return f"{BASE_TYPE_URI}/{code.value}"
