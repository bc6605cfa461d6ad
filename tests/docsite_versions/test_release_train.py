"""Tests for docsite_versions.release_train."""

from __future__ import annotations

from pathlib import Path

import pytest

from docsite_common.errors import ErrorCode, ReleaseTrainError
from docsite_versions.release_train import load_release_train, parse_release_train


class TestParseReleaseTrain:
    """Tests for parse_release_train."""

    def test_preserves_order(self) -> None:
        """Entries come back in file order, newest first."""
        assert parse_release_train(b'["2.19", "2.18", "2.17"]') == ("2.19", "2.18", "2.17")

    def test_empty_array(self) -> None:
        """An empty train is valid."""
        assert parse_release_train(b"[]") == ()

    @pytest.mark.parametrize(
        "raw",
        [b'{"versions": []}', b'["2.19", 2.18]', b"not json", b'["2.19", ""]', b'["2.19", "2.19"]'],
    )
    def test_invalid(self, raw: bytes) -> None:
        """Non-arrays, non-strings, empty and duplicate entries are rejected."""
        with pytest.raises(ReleaseTrainError) as excinfo:
            parse_release_train(raw, source="versions.json")
        assert excinfo.value.code is ErrorCode.RELEASE_TRAIN_INVALID
        assert excinfo.value.context["path"] == "versions.json"


class TestLoadReleaseTrain:
    """Tests for load_release_train."""

    def test_reads_file(self, tmp_path: Path) -> None:
        """The train is read from disk."""
        path = tmp_path / "versions.json"
        path.write_text('["2.19", "2.18"]\n', encoding="utf-8")
        assert load_release_train(path) == ("2.19", "2.18")

    def test_missing_file(self, tmp_path: Path) -> None:
        """A missing file raises ReleaseTrainError."""
        with pytest.raises(ReleaseTrainError, match="unavailable"):
            load_release_train(tmp_path / "versions.json")
