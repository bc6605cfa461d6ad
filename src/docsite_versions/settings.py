"""Build settings for the versioned documentation site.

Settings are read from ``DOCSITE_*`` environment variables; the variable
names used by the legacy site configuration (``NODE_ENV`` and
``PANTSBUILD_ORG_INCLUDE_*``) are accepted as aliases. The environment is
read once, here: the policy resolver and manifest emitter receive an explicit
:class:`BuildFlags` value instead.

Controls for how much to build:

- production (the default): every release plus the blog.
- development, no version list: only the in-development docs, no release history.
- development with ``DOCSITE_INCLUDE_VERSIONS=2.19,2.18``: current plus those versions.
- ``DOCSITE_INCLUDE_BLOG=1``: include the blog in development builds.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from docsite_common.logging import parse_level
from docsite_common.settings import load_settings
from docsite_versions.edit_links import DEFAULT_EDIT_URL_BASE
from docsite_versions.metadata import DEFAULT_VERSIONED_DOCS_ROOT
from docsite_versions.policy import CURRENT_KEY
from docsite_versions.prerelease import DEFAULT_VERSION_CONFIG_KEY

__all__ = [
    "BuildFlags",
    "SiteBuildSettings",
    "load_site_settings",
]

BuildMode = Literal["development", "production"]


class SiteBuildSettings(BaseSettings):
    """Typed configuration for one documentation build."""

    model_config = SettingsConfigDict(
        env_prefix="DOCSITE_",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )

    mode: BuildMode = Field(
        default="production",
        validation_alias=AliasChoices("DOCSITE_MODE", "NODE_ENV"),
        description="Build mode; development builds are partial by default",
    )
    include_versions: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "DOCSITE_INCLUDE_VERSIONS", "PANTSBUILD_ORG_INCLUDE_VERSIONS"
        ),
        description="Comma-separated releases to build alongside current in development",
    )
    include_blog: bool = Field(
        default=False,
        validation_alias=AliasChoices(
            "DOCSITE_INCLUDE_BLOG", "PANTSBUILD_ORG_INCLUDE_BLOG"
        ),
        description="Include the blog in development builds (always on in production)",
    )
    versions_file: Path = Field(
        default=Path("versions.json"),
        description="JSON array of released versions, newest first",
    )
    versioned_docs_root: Path = Field(
        default=DEFAULT_VERSIONED_DOCS_ROOT,
        description="Directory holding one version-<id> folder per release",
    )
    version_config_key: str = Field(
        default=DEFAULT_VERSION_CONFIG_KEY,
        min_length=1,
        description="Option in the metadata root scope that records the product version",
    )
    edit_url_base: str = Field(
        default=DEFAULT_EDIT_URL_BASE,
        description="Prefix for 'edit this page' links",
    )
    log_level: str = Field(default="INFO", description="Logging level for the CLI")

    @field_validator("mode", mode="before")
    @classmethod
    def _normalise_mode(cls, value: object) -> object:
        # Only an explicit "development" selects a partial build; NODE_ENV may
        # legitimately hold other values such as "test".
        if isinstance(value, str):
            return "development" if value.strip().lower() == "development" else "production"
        return value

    @field_validator("include_blog", mode="before")
    @classmethod
    def _parse_switch(cls, value: object) -> object:
        # Unset-looking values ("", "0", "no") switch the blog off instead of failing.
        if isinstance(value, str):
            return value.strip().lower() in {"1", "true", "yes", "on"}
        return value

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        parse_level(value)
        return value.strip().upper()

    def requested_versions(self) -> tuple[str, ...] | None:
        """Return the parsed version list, or ``None`` when it was not set at all.

        An empty (but set) variable yields an empty tuple.
        """
        if self.include_versions is None:
            return None
        return tuple(part.strip() for part in self.include_versions.split(",") if part.strip())


@dataclass(frozen=True, slots=True)
class BuildFlags:
    """Explicit build-time switches consumed by the manifest emitter.

    Attributes
    ----------
    include_release_history : bool
        Publish released versions in addition to current.
    include_blog : bool
        Build the blog content stream. Independent of versioning.
    only_include_versions : tuple[str, ...] | None
        Restrict a development build to these versions; ``None`` builds all.
    """

    include_release_history: bool = True
    include_blog: bool = True
    only_include_versions: tuple[str, ...] | None = None

    @classmethod
    def from_settings(cls, settings: SiteBuildSettings) -> BuildFlags:
        """Derive the flags for ``settings``."""
        is_dev = settings.mode == "development"
        requested = settings.requested_versions()
        only_include: tuple[str, ...] | None = None
        if is_dev:
            only_include = (CURRENT_KEY, *requested) if requested else (CURRENT_KEY,)
        return cls(
            include_release_history=not (is_dev and requested is None),
            include_blog=settings.include_blog or not is_dev,
            only_include_versions=only_include,
        )


def load_site_settings(**overrides: object) -> SiteBuildSettings:
    """Load :class:`SiteBuildSettings` from the environment plus ``overrides``.

    Raises
    ------
    SettingsError
        If any setting fails validation.
    """

    def _factory() -> SiteBuildSettings:
        return SiteBuildSettings(**overrides)  # type: ignore[arg-type]

    _factory.__name__ = SiteBuildSettings.__name__
    return load_settings(_factory)
