# Copyright (c) 2026 Mark Ferrell. MIT License.
"""Unit tests for version resolution from tag history.

Tests find_latest_tag(), resolve_version() and first_release_candidate()
from gitf/tags.py.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from gitf.errors import ResolutionError, ValidationError
from gitf.tags import find_latest_tag, first_release_candidate, resolve_version
from gitf.version import Version


class TestFindLatestTag:
    """Tests for find_latest_tag() function."""

    def test_no_tags_returns_none(self, mock_repo: MagicMock) -> None:
        mock_repo.list_tags.return_value = []
        assert find_latest_tag(mock_repo) is None

    def test_release_tag_beats_its_release_candidate(self, mock_repo: MagicMock) -> None:
        """Test that 1.3.0 wins over 1.3.0-rc.1 regardless of tag order."""
        mock_repo.list_tags.return_value = ["1.3.0", "1.2.0", "1.3.0-rc.1"]
        assert str(find_latest_tag(mock_repo)) == "1.3.0"

    def test_release_candidate_of_newer_line_wins(self, mock_repo: MagicMock) -> None:
        mock_repo.list_tags.return_value = ["1.2.0", "1.3.0-rc.1"]
        assert str(find_latest_tag(mock_repo)) == "1.3.0-rc.1"

    def test_highest_release_candidate_wins(self, mock_repo: MagicMock) -> None:
        mock_repo.list_tags.return_value = ["1.3.0-rc.2", "1.3.0-rc.10", "1.3.0-rc.1"]
        assert str(find_latest_tag(mock_repo)) == "1.3.0-rc.10"

    def test_filters_by_release_line(self, mock_repo: MagicMock) -> None:
        mock_repo.list_tags.return_value = ["1.2.0", "1.3.0-rc.1", "1.3.0"]
        assert str(find_latest_tag(mock_repo, "1.2")) == "1.2.0"

    def test_release_line_with_no_tags_returns_none(self, mock_repo: MagicMock) -> None:
        mock_repo.list_tags.return_value = ["1.2.0", "1.3.0"]
        assert find_latest_tag(mock_repo, "2.0") is None

    def test_ignores_non_semver_tags(self, mock_repo: MagicMock, sample_tags: list[str]) -> None:
        """Test that 'latest' and 'v2.0.0' are skipped rather than rejected."""
        mock_repo.list_tags.return_value = sample_tags
        assert str(find_latest_tag(mock_repo)) == "1.3.0"

    def test_only_invalid_tags_returns_none(self, mock_repo: MagicMock) -> None:
        mock_repo.list_tags.return_value = ["latest", "v1.0.0", "stable"]
        assert find_latest_tag(mock_repo) is None


class TestResolveVersion:
    """Tests for resolve_version() function."""

    def test_tags_take_precedence_over_manifest(self, mock_repo: MagicMock) -> None:
        mock_repo.list_tags.return_value = ["1.2.0", "1.3.0-rc.1", "1.3.0"]
        assert str(resolve_version(mock_repo, "0.1.0")) == "1.3.0"

    def test_release_line_restriction(self, mock_repo: MagicMock) -> None:
        mock_repo.list_tags.return_value = ["1.2.0", "1.3.0-rc.1", "1.3.0"]
        assert str(resolve_version(mock_repo, "0.1.0", "1.2")) == "1.2.0"

    def test_empty_tags_fall_back_to_manifest(self, mock_repo: MagicMock) -> None:
        mock_repo.list_tags.return_value = []
        assert resolve_version(mock_repo, "0.1.0") == Version(0, 1, 0)

    def test_no_matching_line_falls_back_to_manifest(self, mock_repo: MagicMock) -> None:
        mock_repo.list_tags.return_value = ["1.3.0"]
        assert str(resolve_version(mock_repo, "1.2.4", "1.2")) == "1.2.4"

    def test_no_tags_and_no_manifest_raises(self, mock_repo: MagicMock) -> None:
        mock_repo.list_tags.return_value = []
        with pytest.raises(ResolutionError, match="no manifest"):
            resolve_version(mock_repo, None)

    def test_invalid_manifest_version_raises(self, mock_repo: MagicMock) -> None:
        mock_repo.list_tags.return_value = []
        with pytest.raises(ResolutionError, match="not a valid semantic version"):
            resolve_version(mock_repo, "one")

    def test_tags_resolve_without_manifest(self, mock_repo: MagicMock) -> None:
        mock_repo.list_tags.return_value = ["2.0.0"]
        assert str(resolve_version(mock_repo, None)) == "2.0.0"

    def test_malformed_release_line_raises(self, mock_repo: MagicMock) -> None:
        with pytest.raises(ValidationError, match="not a release line"):
            resolve_version(mock_repo, "0.1.0", "1.2.3")
        mock_repo.list_tags.assert_not_called()


class TestFirstReleaseCandidate:
    """Tests for first_release_candidate() function."""

    def test_appends_rc1(self) -> None:
        assert str(first_release_candidate(Version(0, 2, 0))) == "0.2.0-rc.1"

    def test_replaces_existing_prerelease(self) -> None:
        assert str(first_release_candidate(Version.parse("1.0.0-beta.3"))) == "1.0.0-rc.1"
