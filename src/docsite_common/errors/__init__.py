"""Exception hierarchy and Problem Details support.

This module provides typed exceptions with RFC 9457 Problem Details
mapping and structured error handling.

Examples
--------
>>> from docsite_common.errors import DocsiteError, ErrorCode
>>> try:
...     raise DocsiteError("Operation failed", code=ErrorCode.RUNTIME_ERROR)
... except DocsiteError as e:
...     details = e.to_problem_details()
...     assert details["type"] == "https://docsite.dev/problems/runtime-error"
"""

from __future__ import annotations

from docsite_common.errors.codes import BASE_TYPE_URI, ErrorCode, get_type_uri
from docsite_common.errors.exceptions import (
    ConfigKeyNotFoundError,
    DocsiteError,
    HardcodedValueNotFoundError,
    ManifestWriteError,
    MalformedMetadataDocumentError,
    MalformedVersionIdentifierError,
    MetadataUnavailableError,
    ReleaseTrainError,
    SettingsError,
)

__all__ = [
    "BASE_TYPE_URI",
    "ConfigKeyNotFoundError",
    "DocsiteError",
    "ErrorCode",
    "HardcodedValueNotFoundError",
    "ManifestWriteError",
    "MalformedMetadataDocumentError",
    "MalformedVersionIdentifierError",
    "MetadataUnavailableError",
    "ReleaseTrainError",
    "SettingsError",
    "get_type_uri",
]
