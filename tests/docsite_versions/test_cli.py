"""Tests for the docsite-versions command line."""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from pathlib import Path

import pytest
from typer.testing import CliRunner

from docsite_versions.cli import app

SiteFactory = Callable[[Mapping[str, str]], Path]

RUNNER = CliRunner()
RELEASES = {"2.19": "2.19.0", "2.18": "2.18.1", "2.17": "2.17.0"}


class TestManifestCommand:
    """Tests for ``docsite-versions manifest``."""

    def test_prints_manifest(self, make_site: SiteFactory) -> None:
        """The manifest goes to stdout as JSON."""
        make_site(RELEASES)
        result = RUNNER.invoke(app, ["manifest"])
        assert result.exit_code == 0, result.stderr or result.stdout
        data = json.loads(result.stdout)
        assert list(data["versions"]) == ["current", "2.19", "2.18", "2.17"]
        assert data["currentVersion"] == "2.20"
        assert data["lastVersion"] == "2.19"

    def test_writes_output_file(self, make_site: SiteFactory, tmp_path: Path) -> None:
        """--output writes the manifest instead of printing it."""
        make_site(RELEASES)
        destination = tmp_path / "out" / "versions-manifest.json"
        result = RUNNER.invoke(app, ["manifest", "--output", str(destination)])
        assert result.exit_code == 0, result.stderr or result.stdout
        assert result.stdout == ""
        assert json.loads(destination.read_text(encoding="utf-8"))["currentVersion"] == "2.20"

    def test_failure_renders_problem_details(
        self, make_site: SiteFactory, docs_root: Path, tmp_path: Path
    ) -> None:
        """Build failures exit 1 with Problem Details on stderr and no manifest."""
        make_site(RELEASES)
        (docs_root / "version-2.18" / "reference" / "help-all.json").unlink()
        destination = tmp_path / "manifest.json"
        result = RUNNER.invoke(app, ["manifest", "--output", str(destination)])
        assert result.exit_code == 1
        assert not destination.exists()
        assert result.stdout == ""
        assert '"code": "metadata-unavailable"' in result.stderr
        assert '"instance": "urn:cli:docsite-versions:manifest"' in result.stderr
        assert '"version": "2.18"' in result.stderr

    def test_unwritable_output(self, make_site: SiteFactory, tmp_path: Path) -> None:
        """An output path that cannot be written is reported as Problem Details."""
        make_site(RELEASES)
        blocker = tmp_path / "out"
        blocker.write_text("not a directory", encoding="utf-8")
        result = RUNNER.invoke(app, ["manifest", "--output", str(blocker / "manifest.json")])
        assert result.exit_code == 1
        assert result.exception is None or isinstance(result.exception, SystemExit)
        assert '"code": "manifest-write-failed"' in result.stderr
        assert '"status": 500' in result.stderr

    def test_invalid_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Invalid settings are reported as configuration errors."""
        monkeypatch.setenv("DOCSITE_LOG_LEVEL", "chatty")
        result = RUNNER.invoke(app, ["manifest"])
        assert result.exit_code == 1
        assert '"code": "configuration-error"' in result.stderr


class TestInspectionCommands:
    """Tests for classify, current, schema and edit-url."""

    @pytest.mark.parametrize(
        ("product_version", "expected"), [("2.20.0rc2", "prerelease"), ("2.19.0", "release")]
    )
    def test_classify(
        self,
        docs_root: Path,
        write_metadata: Callable[..., Path],
        monkeypatch: pytest.MonkeyPatch,
        product_version: str,
        expected: str,
    ) -> None:
        """classify prints the release kind for one version."""
        write_metadata("2.20", product_version)
        monkeypatch.setenv("DOCSITE_VERSIONED_DOCS_ROOT", str(docs_root))
        result = RUNNER.invoke(app, ["classify", "2.20"])
        assert result.exit_code == 0, result.stderr or result.stdout
        assert result.stdout.strip() == expected

    def test_classify_missing_metadata(
        self, docs_root: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """classify fails cleanly when the metadata is missing."""
        monkeypatch.setenv("DOCSITE_VERSIONED_DOCS_ROOT", str(docs_root))
        result = RUNNER.invoke(app, ["classify", "2.5"])
        assert result.exit_code == 1
        assert '"code": "metadata-unavailable"' in result.stderr

    def test_current(self, make_site: SiteFactory) -> None:
        """current prints the development label."""
        make_site(RELEASES)
        result = RUNNER.invoke(app, ["current"])
        assert result.exit_code == 0, result.stderr or result.stdout
        assert result.stdout.strip() == "2.20 (dev)"

    def test_current_missing_train(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """current fails when the release train is missing."""
        monkeypatch.setenv("DOCSITE_VERSIONS_FILE", str(tmp_path / "missing.json"))
        result = RUNNER.invoke(app, ["current"])
        assert result.exit_code == 1
        assert '"code": "release-train-invalid"' in result.stderr

    def test_schema(self) -> None:
        """schema prints the manifest JSON Schema."""
        result = RUNNER.invoke(app, ["schema"])
        assert result.exit_code == 0
        schema = json.loads(result.stdout)
        assert schema["$schema"] == "https://json-schema.org/draft/2020-12/schema"
        assert "PublishManifest" in schema["$defs"]

    def test_edit_url(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """edit-url prints links for authored pages only."""
        monkeypatch.setenv("DOCSITE_EDIT_URL_BASE", "https://example.com/edit/")
        authored = RUNNER.invoke(app, ["edit-url", "docs/intro.mdx"])
        generated = RUNNER.invoke(app, ["edit-url", "reference/goals/test.mdx"])
        assert authored.stdout.strip() == "https://example.com/edit/docs/intro.mdx"
        assert generated.exit_code == 0
        assert generated.stdout == ""
