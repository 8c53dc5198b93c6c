# Tests for reposync.repository paths and workflows
# Slash separated path helpers and incremental sync eligibility

import pytest

from reposync.repository import can_use_incremental_sync, safepath
from reposync.resources import folder_path_for, is_path_supported


class TestSafepath:
    """Tests for safepath helpers."""

    def test_split(self):
        assert safepath.split("a//b/c/") == ["a", "b", "c"]

    def test_is_dir(self):
        assert safepath.is_dir("a/b/")
        assert not safepath.is_dir("a/b.json")

    @pytest.mark.parametrize(
        "path,expected",
        [
            ("dashboards/team/a.json", "dashboards/team/"),
            ("dashboards/a.json", "dashboards/"),
            ("a.json", ""),
            ("a/b/", "a/"),
            ("a/", ""),
        ],
    )
    def test_dir_of(self, path, expected):
        assert safepath.dir_of(path) == expected

    def test_is_hidden(self):
        assert safepath.is_hidden(".github/ci.yml")
        assert safepath.is_hidden("a/.b/c.json")
        assert not safepath.is_hidden("a/b/c.json")

    def test_ancestors(self):
        assert safepath.ancestors("a/b/c/") == ["a/", "a/b/", "a/b/c/"]
        assert safepath.ancestors("a/b/c.json") == ["a/", "a/b/"]
        assert safepath.ancestors("c.json") == []


class TestResourcePaths:
    """Tests for is_path_supported and folder_path_for."""

    @pytest.mark.parametrize(
        "path,expected",
        [
            ("dashboards/test.json", True),
            ("alerts/alert.yaml", True),
            ("alerts/alert.YML", True),
            ("unsupported/path/file.txt", False),
            (".hidden/dash.json", False),
            ("dashboards/", False),
        ],
    )
    def test_is_path_supported(self, path, expected):
        assert is_path_supported(path) is expected

    def test_folder_path_for(self):
        assert folder_path_for("unsupported/path/file.txt") == "unsupported/path/"
        assert folder_path_for("file.txt") == ""
        assert folder_path_for(".unsupported/path/file.txt") == ""


class TestCanUseIncrementalSync:
    """Tests for can_use_incremental_sync."""

    def test_no_deletions(self):
        assert can_use_incremental_sync([]) is True

    def test_regular_deletions(self):
        assert can_use_incremental_sync(["a/x.json", "b/y.json"]) is True

    def test_keep_file_alone(self):
        assert can_use_incremental_sync(["a/.keep"]) is False

    def test_keep_file_with_sibling_deletion(self):
        assert can_use_incremental_sync(["a/.keep", "a/x.json"]) is True

    def test_keep_file_with_deletion_elsewhere(self):
        assert can_use_incremental_sync(["a/.keep", "b/x.json"]) is False

    def test_root_keep_file(self):
        assert can_use_incremental_sync([".keep", "x.json"]) is True
