"""Build the publish manifest for one documentation build.

The orchestrator runs the pipeline once, in order: load the release train,
derive the current version, classify each release (only when release
history is published), resolve policy, and emit the manifest. Any failure
propagates; no partial manifest is produced.
"""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from docsite_common.logging import get_logger, with_fields
from docsite_versions.current_version import derive_current_version
from docsite_versions.manifest import emit_manifest
from docsite_versions.metadata import DEFAULT_VERSIONED_DOCS_ROOT, read_metadata
from docsite_versions.policy import ClassifiedRelease, resolve_policy
from docsite_versions.prerelease import DEFAULT_VERSION_CONFIG_KEY, is_prerelease
from docsite_versions.release_train import load_release_train
from docsite_versions.settings import BuildFlags

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from docsite_versions.manifest import PublishManifest
    from docsite_versions.settings import SiteBuildSettings

__all__ = [
    "build_manifest",
    "classify_release",
    "classify_train",
]

logger = get_logger(__name__)


def classify_release(
    version: str,
    root: Path = DEFAULT_VERSIONED_DOCS_ROOT,
    config_key: str = DEFAULT_VERSION_CONFIG_KEY,
) -> ClassifiedRelease:
    """Read ``version``'s metadata under ``root`` and classify it."""
    document = read_metadata(version, root)
    return ClassifiedRelease(
        version=version,
        is_prerelease=is_prerelease(document, config_key=config_key, version=version),
    )


def classify_train(
    train: Sequence[str],
    root: Path = DEFAULT_VERSIONED_DOCS_ROOT,
    config_key: str = DEFAULT_VERSION_CONFIG_KEY,
) -> list[ClassifiedRelease]:
    """Classify every release in ``train``, preserving its order."""
    return [classify_release(version, root, config_key) for version in train]


def build_manifest(settings: SiteBuildSettings) -> PublishManifest:
    """Run the full pipeline for ``settings`` and return the manifest.

    Parameters
    ----------
    settings : SiteBuildSettings
        Loaded build settings; :class:`BuildFlags` are derived from them.

    Returns
    -------
    PublishManifest
        Manifest ready for :func:`docsite_versions.manifest.write_manifest`.

    Raises
    ------
    DocsiteError
        Any release train, metadata or version identifier failure.
    """
    flags = BuildFlags.from_settings(settings)
    with with_fields(
        logger,
        operation="build_manifest",
        correlation_id=uuid.uuid4().hex,
        mode=settings.mode,
    ) as log:
        train = load_release_train(settings.versions_file)
        current = derive_current_version(train)
        log.info(
            "Derived current version",
            extra={"current_version": current, "releases": len(train)},
        )

        classified: list[ClassifiedRelease] = []
        if flags.include_release_history:
            classified = classify_train(
                train, settings.versioned_docs_root, settings.version_config_key
            )
            log.info(
                "Classified releases",
                extra={
                    "prereleases": [r.version for r in classified if r.is_prerelease],
                },
            )
        else:
            log.info("Skipping release history for development build")

        resolution = resolve_policy(classified, current)
        manifest = emit_manifest(resolution, flags)
        log.info(
            "Built publish manifest",
            extra={
                "active_window": resolution.active_window,
                "versions": list(manifest.versions),
                "last_version": manifest.last_version,
            },
        )
        return manifest
