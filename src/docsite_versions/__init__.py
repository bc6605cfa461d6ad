"""Version lifecycle policy for a versioned documentation site.

Classifies each released version (prerelease, maintained, deprecated),
derives the in-development version, and emits the publish manifest the site
generator consumes.
"""

from __future__ import annotations

from docsite_versions.build import build_manifest, classify_train
from docsite_versions.current_version import derive_current_version
from docsite_versions.edit_links import edit_url
from docsite_versions.manifest import (
    PublishManifest,
    emit_manifest,
    encode_manifest,
    write_manifest,
)
from docsite_versions.policy import (
    BannerLevel,
    ClassifiedRelease,
    PolicyResolution,
    VersionPolicy,
    resolve_policy,
)
from docsite_versions.prerelease import is_prerelease
from docsite_versions.settings import BuildFlags, SiteBuildSettings, load_site_settings

__all__ = [
    "BannerLevel",
    "BuildFlags",
    "ClassifiedRelease",
    "PolicyResolution",
    "PublishManifest",
    "SiteBuildSettings",
    "VersionPolicy",
    "build_manifest",
    "classify_train",
    "derive_current_version",
    "edit_url",
    "emit_manifest",
    "encode_manifest",
    "is_prerelease",
    "load_site_settings",
    "resolve_policy",
    "write_manifest",
]
