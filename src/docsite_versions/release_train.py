"""Load the release train (``versions.json``) maintained by the release process."""

from __future__ import annotations

from typing import TYPE_CHECKING

import msgspec

from docsite_common.errors import ReleaseTrainError
from docsite_common.logging import get_logger

if TYPE_CHECKING:
    from pathlib import Path

__all__ = [
    "load_release_train",
    "parse_release_train",
]

logger = get_logger(__name__)


def parse_release_train(raw: bytes, *, source: str = "<memory>") -> tuple[str, ...]:
    """Decode a JSON array of version identifiers, newest first.

    The train is trusted to be sorted; only the shape and uniqueness are checked.

    Raises
    ------
    ReleaseTrainError
        If ``raw`` is not a JSON array of non-empty strings, or repeats an entry.
    """
    try:
        versions = msgspec.json.decode(raw, type=list[str])
    except msgspec.DecodeError as exc:
        message = f"Release train {source} is not a JSON array of version strings: {exc}"
        raise ReleaseTrainError(message, cause=exc, context={"path": source}) from exc

    seen: set[str] = set()
    for index, version in enumerate(versions):
        if not version.strip():
            message = f"Release train {source} has an empty version at index {index}"
            raise ReleaseTrainError(message, context={"path": source, "index": index})
        if version in seen:
            message = f"Release train {source} lists version {version!r} more than once"
            raise ReleaseTrainError(message, context={"path": source, "version": version})
        seen.add(version)
    return tuple(versions)


def load_release_train(path: Path) -> tuple[str, ...]:
    """Read and validate the release train stored at ``path``.

    Raises
    ------
    ReleaseTrainError
        If the file is missing or unreadable, or its content is invalid.
    """
    try:
        raw = path.read_bytes()
    except OSError as exc:
        message = f"Release train is unavailable at {path}"
        raise ReleaseTrainError(message, cause=exc, context={"path": path.as_posix()}) from exc
    versions = parse_release_train(raw, source=path.as_posix())
    logger.info(
        "Loaded release train",
        extra={
            "operation": "load_release_train",
            "path": path.as_posix(),
            "count": len(versions),
        },
    )
    return versions
