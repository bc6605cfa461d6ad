"""Read per-version build metadata (``help-all.json``) from versioned docs.

Every released version ships a ``reference/help-all.json`` produced by the
product's own help generator. Only a thin slice of it matters here, so the
msgspec models below declare just the fields on the path to an option's
value history; everything else in the document is ignored while decoding.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Final

import msgspec

from docsite_common.errors import MalformedMetadataDocumentError, MetadataUnavailableError
from docsite_common.logging import get_logger

__all__ = [
    "DEFAULT_VERSIONED_DOCS_ROOT",
    "HelpAllDocument",
    "OptionHelpInfo",
    "RankedValue",
    "ScopeHelpInfo",
    "ValueHistory",
    "metadata_path",
    "parse_metadata",
    "read_metadata",
]

logger = get_logger(__name__)

DEFAULT_VERSIONED_DOCS_ROOT: Final[Path] = Path("versioned_docs")


class RankedValue(msgspec.Struct, frozen=True):
    """One entry of an option's value history, tagged with its provenance rank."""

    rank: str
    value: Any = None


class ValueHistory(msgspec.Struct, frozen=True):
    """Values an option took, ranked by where they came from."""

    ranked_values: list[RankedValue] = msgspec.field(default_factory=list)


class OptionHelpInfo(msgspec.Struct, frozen=True):
    """Help record for a single option within a scope."""

    config_key: str | None = None
    value_history: ValueHistory | None = None


class ScopeHelpInfo(msgspec.Struct, frozen=True):
    """Help records for one configuration scope."""

    advanced: list[OptionHelpInfo] = msgspec.field(default_factory=list)


class HelpAllDocument(msgspec.Struct, frozen=True):
    """Root of a version's ``help-all.json`` document, keyed by scope."""

    scope_to_help_info: dict[str, ScopeHelpInfo]


def metadata_path(version: str, root: Path = DEFAULT_VERSIONED_DOCS_ROOT) -> Path:
    """Return the location of ``version``'s metadata document under ``root``.

    >>> metadata_path("2.19").as_posix()
    'versioned_docs/version-2.19/reference/help-all.json'
    """
    return root / f"version-{version}" / "reference" / "help-all.json"


def parse_metadata(raw: bytes, *, version: str, source: Path | None = None) -> HelpAllDocument:
    """Decode ``raw`` bytes into a :class:`HelpAllDocument`.

    Raises
    ------
    MetadataUnavailableError
        If ``raw`` is not well-formed JSON.
    MalformedMetadataDocumentError
        If the JSON does not have the expected document shape.
    """
    context: dict[str, object] = {"version": version}
    if source is not None:
        context["path"] = source.as_posix()
    try:
        return msgspec.json.decode(raw, type=HelpAllDocument)
    except msgspec.ValidationError as exc:
        message = f"Metadata for version {version} is not a valid help document: {exc}"
        raise MalformedMetadataDocumentError(message, cause=exc, context=context) from exc
    except msgspec.DecodeError as exc:
        message = f"Metadata for version {version} is not well-formed JSON: {exc}"
        raise MetadataUnavailableError(message, cause=exc, context=context) from exc


def read_metadata(version: str, root: Path = DEFAULT_VERSIONED_DOCS_ROOT) -> HelpAllDocument:
    """Load and parse the metadata document for ``version``.

    Parameters
    ----------
    version : str
        Version identifier from the release train.
    root : Path, optional
        Directory holding the ``version-<id>`` folders.

    Returns
    -------
    HelpAllDocument
        Parsed document.

    Raises
    ------
    MetadataUnavailableError
        If the file is missing or unreadable, or is not JSON.
    MalformedMetadataDocumentError
        If the file parses but has the wrong shape.
    """
    path = metadata_path(version, root)
    try:
        raw = path.read_bytes()
    except OSError as exc:
        message = f"Metadata for version {version} is unavailable at {path}"
        raise MetadataUnavailableError(
            message,
            cause=exc,
            context={"version": version, "path": path.as_posix()},
        ) from exc
    logger.debug(
        "Read version metadata",
        extra={"operation": "read_metadata", "version": version, "bytes": len(raw)},
    )
    return parse_metadata(raw, version=version, source=path)
