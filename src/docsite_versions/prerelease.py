"""Classify released versions as prereleases from their recorded product version."""

from __future__ import annotations

import re
from typing import Final

from docsite_common.errors import (
    ConfigKeyNotFoundError,
    HardcodedValueNotFoundError,
    MalformedMetadataDocumentError,
)
from docsite_versions.metadata import HelpAllDocument, OptionHelpInfo

__all__ = [
    "DEFAULT_VERSION_CONFIG_KEY",
    "HARDCODED_RANK",
    "PRERELEASE_PATTERN",
    "ROOT_SCOPE",
    "hardcoded_version",
    "is_prerelease",
    "is_prerelease_version",
]

ROOT_SCOPE: Final[str] = ""
HARDCODED_RANK: Final[str] = "HARDCODED"
DEFAULT_VERSION_CONFIG_KEY: Final[str] = "pants_version"

# xx.yy.0.devN, xx.yy.0aN, xx.yy.0bN, xx.yy.0rcN. Prereleases of patch versions
# are deliberately not matched: those only land in versioned docs by accident.
PRERELEASE_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^(\d+\.\d+\.0)(\.dev|a|b|rc)\d+$", re.ASCII
)


def _find_option(document: HelpAllDocument, config_key: str, version: str) -> OptionHelpInfo:
    scope = document.scope_to_help_info.get(ROOT_SCOPE)
    if scope is None:
        message = f"Metadata for version {version} has no root scope to look up {config_key!r}"
        raise ConfigKeyNotFoundError(
            message, context={"version": version, "config_key": config_key}
        )
    for option in scope.advanced:
        if option.config_key == config_key:
            return option
    message = f"Metadata for version {version} has no advanced option {config_key!r}"
    raise ConfigKeyNotFoundError(message, context={"version": version, "config_key": config_key})


def hardcoded_version(
    document: HelpAllDocument,
    *,
    config_key: str = DEFAULT_VERSION_CONFIG_KEY,
    version: str = "<unknown>",
) -> str:
    """Return the build-time (HARDCODED) value of ``config_key`` in ``document``.

    Parameters
    ----------
    document : HelpAllDocument
        Parsed metadata document.
    config_key : str, optional
        Option holding the product version.
    version : str, optional
        Release the document belongs to; only used in error messages.

    Returns
    -------
    str
        The hardcoded product version string, e.g. ``"2.19.0rc1"``.

    Raises
    ------
    ConfigKeyNotFoundError
        If the root scope or the option is missing.
    HardcodedValueNotFoundError
        If the option's history does not hold exactly one HARDCODED entry.
    MalformedMetadataDocumentError
        If the option has no value history or the hardcoded value is not a string.
    """
    option = _find_option(document, config_key, version)
    context = {"version": version, "config_key": config_key}
    if option.value_history is None:
        message = f"Option {config_key!r} for version {version} has no value history"
        raise MalformedMetadataDocumentError(message, context=context)

    hardcoded = [
        entry for entry in option.value_history.ranked_values if entry.rank == HARDCODED_RANK
    ]
    if len(hardcoded) != 1:
        message = (
            f"Option {config_key!r} for version {version} has {len(hardcoded)} "
            f"{HARDCODED_RANK} values; expected exactly one"
        )
        raise HardcodedValueNotFoundError(message, context={**context, "count": len(hardcoded)})

    value = hardcoded[0].value
    if not isinstance(value, str):
        message = (
            f"{HARDCODED_RANK} value of {config_key!r} for version {version} is "
            f"{type(value).__name__}, not a string"
        )
        raise MalformedMetadataDocumentError(message, context=context)
    return value


def is_prerelease_version(value: str) -> bool:
    """Return whether ``value`` is a ``MAJOR.MINOR.0`` dev/alpha/beta/rc release.

    >>> is_prerelease_version("2.19.0rc1")
    True
    >>> is_prerelease_version("2.19.1rc1")
    False
    """
    return PRERELEASE_PATTERN.fullmatch(value) is not None


def is_prerelease(
    document: HelpAllDocument,
    *,
    config_key: str = DEFAULT_VERSION_CONFIG_KEY,
    version: str = "<unknown>",
) -> bool:
    """Return whether the release described by ``document`` is a prerelease."""
    return is_prerelease_version(
        hardcoded_version(document, config_key=config_key, version=version)
    )
