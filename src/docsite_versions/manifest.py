"""Assemble resolved version policy into the site generator's publish manifest.

The manifest mirrors the ``versions`` option of a versioned-docs plugin:
one ``{label, banner, noIndex, path}`` entry per version keyed by identifier
(``"current"`` first, then releases newest first), plus an explicit landing
version designation. No classification happens here.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final, Literal, cast

import msgspec
from msgspec import json as msgspec_json

from docsite_common.errors import ManifestWriteError
from docsite_common.logging import get_logger
from docsite_versions.policy import (
    CURRENT_KEY,
    DefaultRelease,
    NoDefaultVersion,
    PolicyResolution,
    VersionPolicy,
    current_policy,
)

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from docsite_versions.policy import DefaultVersion
    from docsite_versions.settings import BuildFlags

__all__ = [
    "MANIFEST_SCHEMA_ID",
    "NoDefaultModel",
    "PublishManifest",
    "ReleaseDefaultModel",
    "VersionEntry",
    "emit_manifest",
    "encode_manifest",
    "manifest_schema",
    "write_manifest",
]

logger = get_logger(__name__)

MANIFEST_SCHEMA_ID: Final[str] = "https://docsite.dev/schema/publish_manifest.json"

Banner = Literal["none", "unreleased", "unmaintained"]


class VersionEntry(msgspec.Struct, frozen=True, rename="camel"):
    """Plugin-facing record for one version."""

    label: str
    banner: Banner
    no_index: bool
    path: str


class ReleaseDefaultModel(msgspec.Struct, frozen=True, tag="release", tag_field="kind"):
    """The site lands on a released version."""

    version: str


class NoDefaultModel(msgspec.Struct, frozen=True, tag="none", tag_field="kind"):
    """No release is pinned; the generator lands on ``fallback``."""

    fallback: str = CURRENT_KEY


class PublishManifest(msgspec.Struct, frozen=True, rename="camel"):
    """Everything the versioned-docs plugin needs for one build."""

    current_version: str
    default_version: ReleaseDefaultModel | NoDefaultModel
    last_version: str | None
    disable_versioning: bool
    only_include_versions: list[str] | None
    include_blog: bool
    versions: dict[str, VersionEntry]


def _entry(policy: VersionPolicy) -> VersionEntry:
    return VersionEntry(
        label=policy.label,
        banner=cast("Banner", policy.banner.value),
        no_index=not policy.indexable,
        path=policy.route_path,
    )


def _default_model(default: DefaultVersion) -> ReleaseDefaultModel | NoDefaultModel:
    if isinstance(default, DefaultRelease):
        return ReleaseDefaultModel(version=default.version)
    return NoDefaultModel(fallback=default.fallback)


def emit_manifest(resolution: PolicyResolution, flags: BuildFlags) -> PublishManifest:
    """Merge the current record and release records into a :class:`PublishManifest`.

    Parameters
    ----------
    resolution : PolicyResolution
        Output of :func:`docsite_versions.policy.resolve_policy`.
    flags : BuildFlags
        Build switches. Without release history only ``"current"`` is
        published; partial builds never pin a landing release.

    Returns
    -------
    PublishManifest
        Manifest with ``versions`` ordered current first, then newest first.
    """
    default: DefaultVersion = resolution.default
    current = resolution.current
    if not flags.include_release_history or flags.only_include_versions is not None:
        default = NoDefaultVersion()
        # Without a pinned release the current version is the landing page.
        current = current_policy(current.version, has_default=False)

    versions: dict[str, VersionEntry] = {CURRENT_KEY: _entry(current)}
    if flags.include_release_history:
        for policy in resolution.releases:
            versions[policy.version] = _entry(policy)

    return PublishManifest(
        current_version=current.version,
        default_version=_default_model(default),
        last_version=default.version if isinstance(default, DefaultRelease) else None,
        disable_versioning=not flags.include_release_history,
        only_include_versions=(
            list(flags.only_include_versions)
            if flags.only_include_versions is not None
            else None
        ),
        include_blog=flags.include_blog,
        versions=versions,
    )


def encode_manifest(manifest: PublishManifest) -> bytes:
    """Return ``manifest`` as indented JSON; equal manifests encode to equal bytes."""
    return msgspec_json.format(msgspec_json.encode(manifest), indent=2) + b"\n"


def write_manifest(manifest: PublishManifest, destination: Path) -> Path:
    """Write the encoded ``manifest`` to ``destination``, creating parent directories.

    Raises
    ------
    ManifestWriteError
        If the destination or one of its parents cannot be written.
    """
    payload = encode_manifest(manifest)
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_bytes(payload)
    except OSError as exc:
        message = f"Cannot write publish manifest to {destination}"
        raise ManifestWriteError(
            message, cause=exc, context={"path": destination.as_posix()}
        ) from exc
    logger.info(
        "Wrote publish manifest",
        extra={
            "operation": "write_manifest",
            "path": destination.as_posix(),
            "bytes": len(payload),
        },
    )
    return destination


def manifest_schema() -> dict[str, object]:
    """Return a JSON Schema (draft 2020-12) describing :class:`PublishManifest`."""
    schema_fn = cast(
        "Callable[[type[msgspec.Struct]], dict[str, object]]",
        msgspec_json.schema,
    )
    schema = schema_fn(PublishManifest)
    schema.setdefault("$schema", "https://json-schema.org/draft/2020-12/schema")
    schema["$id"] = MANIFEST_SCHEMA_ID
    schema.setdefault("title", "Publish manifest")
    return schema
