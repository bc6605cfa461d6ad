"""Assign labels, banners, indexability and routes to every published version.

The resolver is a pure function of the classified release train and the
derived in-development version. Each rule is its own named step so the
prerelease-at-head case is easy to follow:

1. :func:`leading_prerelease_count` - whether a prerelease occupies the newest slot.
2. :func:`active_window` - how many of the newest releases are fully supported.
3. :func:`release_policy` - the record for one release given its position.
4. :func:`default_version` - the landing version, skipping leading prereleases.
5. :func:`current_policy` - the record for the unreleased version.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Final

from docsite_versions.current_version import current_label

if TYPE_CHECKING:
    from collections.abc import Sequence

__all__ = [
    "BASE_ACTIVE_WINDOW",
    "CURRENT_KEY",
    "BannerLevel",
    "ClassifiedRelease",
    "DefaultRelease",
    "DefaultVersion",
    "NoDefaultVersion",
    "PolicyResolution",
    "VersionPolicy",
    "active_window",
    "current_policy",
    "default_version",
    "leading_prerelease_count",
    "release_policy",
    "resolve_policy",
]

CURRENT_KEY: Final[str] = "current"
BASE_ACTIVE_WINDOW: Final[int] = 2


class BannerLevel(StrEnum):
    """Banner shown above a version's pages."""

    NONE = "none"
    UNRELEASED = "unreleased"
    UNMAINTAINED = "unmaintained"


@dataclass(frozen=True, slots=True)
class ClassifiedRelease:
    """A release train entry paired with its prerelease classification."""

    version: str
    is_prerelease: bool


@dataclass(frozen=True, slots=True)
class VersionPolicy:
    """Display and publishing decisions for a single version."""

    version: str
    label: str
    banner: BannerLevel
    indexable: bool
    route_path: str


@dataclass(frozen=True, slots=True)
class DefaultRelease:
    """The released version the site lands on."""

    version: str


@dataclass(frozen=True, slots=True)
class NoDefaultVersion:
    """No released version qualifies; the generator lands on ``fallback``."""

    fallback: str = CURRENT_KEY


type DefaultVersion = DefaultRelease | NoDefaultVersion


@dataclass(frozen=True, slots=True)
class PolicyResolution:
    """Everything the resolver decided for one build."""

    current: VersionPolicy
    releases: tuple[VersionPolicy, ...]
    default: DefaultVersion
    active_window: int

    @property
    def has_default_version(self) -> bool:
        """Whether a released version was chosen as the landing version."""
        return isinstance(self.default, DefaultRelease)


def leading_prerelease_count(train: Sequence[ClassifiedRelease]) -> int:
    """Return 1 when the newest release is a prerelease, else 0.

    A prerelease can sit at the head of the train until its final release
    supersedes it; it then pushes the active window out by one.
    """
    if train and train[0].is_prerelease:
        return 1
    return 0


def active_window(train: Sequence[ClassifiedRelease]) -> int:
    """Return how many of the newest releases count as actively maintained."""
    return BASE_ACTIVE_WINDOW + leading_prerelease_count(train)


def release_policy(release: ClassifiedRelease, index: int, window: int) -> VersionPolicy:
    """Return the policy for ``release`` at ``index`` in a train with ``window``.

    Prereleases are never indexed, wherever they sit in the train.
    """
    version = release.version
    if release.is_prerelease:
        return VersionPolicy(
            version=version,
            label=f"{version} (prerelease)",
            banner=BannerLevel.UNRELEASED,
            indexable=False,
            route_path=version,
        )
    if index < window:
        return VersionPolicy(
            version=version,
            label=version,
            banner=BannerLevel.NONE,
            indexable=True,
            route_path=version,
        )
    return VersionPolicy(
        version=version,
        label=f"{version} (deprecated)",
        banner=BannerLevel.UNMAINTAINED,
        indexable=False,
        route_path=version,
    )


def default_version(train: Sequence[ClassifiedRelease]) -> DefaultVersion:
    """Return the newest non-prerelease release, or :class:`NoDefaultVersion`."""
    for release in train:
        if not release.is_prerelease:
            return DefaultRelease(release.version)
    return NoDefaultVersion()


def current_policy(version: str, *, has_default: bool) -> VersionPolicy:
    """Return the policy for the in-development ``version``.

    The current version is never indexed. It carries the unreleased banner
    unless it is itself the site's landing version.
    """
    return VersionPolicy(
        version=version,
        label=current_label(version),
        banner=BannerLevel.UNRELEASED if has_default else BannerLevel.NONE,
        indexable=False,
        route_path=version,
    )


def resolve_policy(
    train: Sequence[ClassifiedRelease],
    current_version: str,
) -> PolicyResolution:
    """Resolve publishing policy for ``current_version`` and every release in ``train``.

    Parameters
    ----------
    train : Sequence[ClassifiedRelease]
        Classified releases, newest first.
    current_version : str
        Derived in-development version, e.g. ``"2.20"``.

    Returns
    -------
    PolicyResolution
        Current record, per-release records in train order, landing version
        and the active window that was applied.
    """
    window = active_window(train)
    releases = tuple(
        release_policy(release, index, window) for index, release in enumerate(train)
    )
    landing = default_version(train)
    current = current_policy(current_version, has_default=isinstance(landing, DefaultRelease))
    return PolicyResolution(
        current=current,
        releases=releases,
        default=landing,
        active_window=window,
    )
