"""Tests for docsite_versions.metadata."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path

import pytest

from docsite_common.errors import MalformedMetadataDocumentError, MetadataUnavailableError
from docsite_versions.metadata import HelpAllDocument, metadata_path, parse_metadata, read_metadata


class TestMetadataPath:
    """Tests for metadata_path."""

    def test_layout(self, tmp_path: Path) -> None:
        """Metadata lives in version-<id>/reference/help-all.json."""
        assert metadata_path("2.19", tmp_path) == (
            tmp_path / "version-2.19" / "reference" / "help-all.json"
        )


class TestParseMetadata:
    """Tests for parse_metadata."""

    def test_ignores_unrelated_fields(self, help_all: Callable[..., dict[str, object]]) -> None:
        """Only the value-history path is decoded; the rest is ignored."""
        document = parse_metadata(json.dumps(help_all("2.19.0")).encode(), version="2.19")
        assert isinstance(document, HelpAllDocument)
        root = document.scope_to_help_info[""]
        assert [option.config_key for option in root.advanced] == [
            "pants_workdir",
            "pants_version",
        ]

    def test_not_json(self) -> None:
        """Bytes that are not JSON mean the metadata is unavailable."""
        with pytest.raises(MetadataUnavailableError) as excinfo:
            parse_metadata(b"{not json", version="2.19")
        assert excinfo.value.context["version"] == "2.19"

    def test_wrong_shape(self) -> None:
        """JSON without the expected structure is malformed."""
        with pytest.raises(MalformedMetadataDocumentError) as excinfo:
            parse_metadata(b'{"scope_to_help_info": []}', version="2.18")
        assert "2.18" in excinfo.value.message

    def test_missing_root_mapping(self) -> None:
        """A document without scope_to_help_info is malformed."""
        with pytest.raises(MalformedMetadataDocumentError):
            parse_metadata(b"{}", version="2.18")


class TestReadMetadata:
    """Tests for read_metadata."""

    def test_reads_written_document(
        self, docs_root: Path, write_metadata: Callable[..., Path]
    ) -> None:
        """A document on disk is read and parsed."""
        write_metadata("2.19", "2.19.1")
        document = read_metadata("2.19", docs_root)
        assert "" in document.scope_to_help_info

    def test_missing_file(self, docs_root: Path) -> None:
        """A missing file raises MetadataUnavailableError naming the version and path."""
        with pytest.raises(MetadataUnavailableError) as excinfo:
            read_metadata("2.17", docs_root)
        error = excinfo.value
        assert error.context["version"] == "2.17"
        assert str(error.context["path"]).endswith("version-2.17/reference/help-all.json")
        assert isinstance(error.__cause__, OSError)
