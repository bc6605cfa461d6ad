"""Shared pytest fixtures for docsite tests.

This module provides reusable fixtures for:
- Isolating tests from ``DOCSITE_*``/``NODE_ENV`` variables in the caller's shell
- Building ``help-all.json`` metadata documents
- Laying out a versioned docs tree with a release train on disk
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Callable, Iterator, Mapping
from pathlib import Path

import pytest

from docsite_common.logging import JsonFormatter

type HelpAllFactory = Callable[..., dict[str, object]]
type SiteFactory = Callable[[Mapping[str, str]], Path]

_ENV_PREFIXES = ("DOCSITE_", "PANTSBUILD_ORG_")


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in list(os.environ):
        if name.startswith(_ENV_PREFIXES) or name == "NODE_ENV":
            monkeypatch.delenv(name)


@pytest.fixture(autouse=True)
def _drop_json_handlers() -> Iterator[None]:
    """Remove root handlers installed by ``setup_logging`` during a test."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in list(root.handlers):
        if isinstance(handler.formatter, JsonFormatter):
            root.removeHandler(handler)
    root.setLevel(level)


def _help_all(
    product_version: object,
    *,
    config_key: str = "pants_version",
    hardcoded_count: int = 1,
) -> dict[str, object]:
    ranked_values: list[dict[str, object]] = [{"rank": "NONE", "value": None, "details": None}]
    ranked_values.extend(
        {"rank": "HARDCODED", "value": product_version, "details": None}
        for _ in range(hardcoded_count)
    )
    return {
        "name_to_goal_info": {},
        "scope_to_help_info": {
            "": {
                "scope": "",
                "description": "Options to control the overall behavior of the build.",
                "basic": [],
                "advanced": [
                    {
                        "config_key": "pants_workdir",
                        "display_args": ["--pants-workdir=<dir>"],
                        "value_history": {
                            "ranked_values": [{"rank": "HARDCODED", "value": ".pants.d"}]
                        },
                    },
                    {
                        "config_key": config_key,
                        "display_args": ["--pants-version=<str>"],
                        "value_history": {"ranked_values": ranked_values},
                    },
                ],
                "deprecated": [],
            },
            "test": {"scope": "test", "basic": [], "advanced": []},
        },
    }


@pytest.fixture
def help_all() -> HelpAllFactory:
    """Return a factory for ``help-all.json`` documents recording ``product_version``."""
    return _help_all


@pytest.fixture
def docs_root(tmp_path: Path) -> Path:
    return tmp_path / "versioned_docs"


@pytest.fixture
def write_metadata(docs_root: Path) -> Callable[..., Path]:
    """Write a metadata document for ``version`` under ``docs_root``."""

    def _write(version: str, product_version: object, **kwargs: object) -> Path:
        path = docs_root / f"version-{version}" / "reference" / "help-all.json"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(_help_all(product_version, **kwargs)), encoding="utf-8")  # type: ignore[arg-type]
        return path

    return _write


@pytest.fixture
def make_site(
    tmp_path: Path,
    docs_root: Path,
    write_metadata: Callable[..., Path],
    monkeypatch: pytest.MonkeyPatch,
) -> SiteFactory:
    """Lay out a release train plus per-version metadata and point settings at it.

    The mapping goes from release train entry (newest first) to the product
    version recorded in that release's metadata.
    """

    def _make(releases: Mapping[str, str]) -> Path:
        versions_file = tmp_path / "versions.json"
        versions_file.write_text(json.dumps(list(releases)), encoding="utf-8")
        docs_root.mkdir(parents=True, exist_ok=True)
        for version, product_version in releases.items():
            write_metadata(version, product_version)
        monkeypatch.setenv("DOCSITE_VERSIONS_FILE", str(versions_file))
        monkeypatch.setenv("DOCSITE_VERSIONED_DOCS_ROOT", str(docs_root))
        return tmp_path

    return _make
