"""Derive the in-development ("current") version from the release train."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Final

from docsite_common.errors import MalformedVersionIdentifierError

if TYPE_CHECKING:
    from collections.abc import Sequence

__all__ = [
    "INITIAL_VERSION",
    "MAJOR_VERSION",
    "current_label",
    "derive_current_version",
]

MAJOR_VERSION: Final[int] = 2
INITIAL_VERSION: Final[str] = f"{MAJOR_VERSION}.0"

# ``2.<minor>`` with an optional ``.<patch>`` that may carry a prerelease suffix.
_RELEASE_SHAPE: Final[re.Pattern[str]] = re.compile(
    rf"^{MAJOR_VERSION}\.(?P<minor>\d+)(?:\.\d+(?:(?:\.dev|a|b|rc)\d+)?)?$",
    re.ASCII,
)


def derive_current_version(release_train: Sequence[str]) -> str:
    """Return the version that follows the newest release in ``release_train``.

    Only a single ongoing ``2.x`` line is supported: the minor component of
    the newest release is incremented. An empty train yields ``2.0``.

    >>> derive_current_version(["2.19", "2.18"])
    '2.20'
    >>> derive_current_version(["2.19.0rc1"])
    '2.20'

    Raises
    ------
    MalformedVersionIdentifierError
        If the newest release is not ``2.<minor>`` (optionally followed by a
        patch component and prerelease suffix).
    """
    if not release_train:
        return INITIAL_VERSION
    newest = release_train[0]
    match = _RELEASE_SHAPE.fullmatch(newest)
    if match is None:
        message = (
            f"Newest release {newest!r} does not look like "
            f"'{MAJOR_VERSION}.<minor>'; cannot derive the current version"
        )
        raise MalformedVersionIdentifierError(message, context={"version": newest})
    return f"{MAJOR_VERSION}.{int(match.group('minor')) + 1}"


def current_label(version: str) -> str:
    """Return the display label for the in-development ``version``."""
    return f"{version} (dev)"
