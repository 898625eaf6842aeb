"""Tests for the local directory scanner."""

import os
import sys
from pathlib import Path

import pytest

from s3_put.core.exceptions import ScanError
from s3_put.core.scanner import DirectoryScanner, compile_pattern, match_path
from s3_put.testing.fakes import FakeLogger, create_file_tree


def deny_access(monkeypatch, method, target):
    """Make ``Path.<method>`` raise PermissionError for one path."""
    original = getattr(Path, method)

    def guarded(self, *args, **kwargs):
        if self == target:
            raise PermissionError(13, "Permission denied", str(self))
        return original(self, *args, **kwargs)

    monkeypatch.setattr(Path, method, guarded)


class TestMatchPath:
    """Tests for Ant style pattern matching."""

    @pytest.mark.parametrize(
        "pattern,path,expected",
        [
            ("**/*", "css/app.css", True),
            ("**/*", "index.html", True),
            ("**", "a/b/c.txt", True),
            ("*.css", "app.css", True),
            ("*.css", "css/app.css", False),
            ("**/*.css", "app.css", True),
            ("**/*.css", "a/b/app.css", True),
            ("css/*.css", "css/app.css", True),
            ("css/*.css", "css/sub/app.css", False),
            ("css/**/*.css", "css/sub/deep/app.css", True),
            ("css/", "css/sub/app.css", True),
            ("js/app.?s", "js/app.js", True),
            ("**/.git/**", ".git/config", True),
            ("**/CVS", "a/CVS", True),
            ("**/*.CSS", "app.css", False),
            ("css\\*.css", "css/app.css", True),
        ],
    )
    def test_patterns(self, pattern, path, expected):
        assert match_path(pattern, path) is expected

    def test_compile_pattern_trailing_slash(self):
        assert compile_pattern("assets/") == ("assets", "**")


class TestDirectoryScanner:
    """Tests for DirectoryScanner.expand."""

    @pytest.fixture
    def build_dir(self, tmp_path):
        return create_file_tree(
            tmp_path / "build",
            {
                "index.html": "<html></html>",
                "css/app.css": "body {}",
                "css/app.css.map": "{}",
                "js/app.js": "1",
                "js/vendor/lib.js": "2",
                ".git/config": "[core]",
                ".DS_Store": "x",
                "notes.txt~": "backup",
            },
        )

    def test_includes_everything_by_default(self, build_dir):
        files = DirectoryScanner().expand(build_dir, [], [])

        assert files == [
            "css/app.css",
            "css/app.css.map",
            "index.html",
            "js/app.js",
            "js/vendor/lib.js",
        ]

    def test_include_patterns(self, build_dir):
        files = DirectoryScanner().expand(build_dir, ["**/*.js", "*.html"], [])

        assert files == ["index.html", "js/app.js", "js/vendor/lib.js"]

    def test_exclude_patterns(self, build_dir):
        files = DirectoryScanner().expand(build_dir, ["**/*"], ["**/*.map", "js/vendor/**"])

        assert files == ["css/app.css", "index.html", "js/app.js"]

    def test_default_excludes_can_be_disabled(self, build_dir):
        files = DirectoryScanner().expand(build_dir, [], [], default_excludes=False)

        assert ".git/config" in files
        assert ".DS_Store" in files
        assert "notes.txt~" in files

    def test_directories_are_not_returned(self, build_dir):
        (build_dir / "empty").mkdir()

        files = DirectoryScanner().expand(build_dir, ["**"], [])

        assert "empty" not in files
        assert "css" not in files

    def test_missing_directory_raises_scan_error(self, tmp_path):
        with pytest.raises(ScanError, match="does not exist"):
            DirectoryScanner().expand(tmp_path / "missing", [], [])

    def test_file_as_base_dir_raises_scan_error(self, tmp_path):
        file_path = tmp_path / "file.txt"
        file_path.write_text("x")

        with pytest.raises(ScanError, match="not a directory"):
            DirectoryScanner().expand(file_path, [], [])

    @pytest.mark.skipif(
        sys.platform == "win32" or (hasattr(os, "geteuid") and os.geteuid() == 0),
        reason="permissions are not enforced",
    )
    def test_unreadable_subdirectory_is_skipped(self, build_dir):
        locked = build_dir / "locked"
        locked.mkdir()
        (locked / "secret.txt").write_text("x")
        locked.chmod(0)
        logger = FakeLogger()
        try:
            files = DirectoryScanner(logger).expand(build_dir, [], [])
        finally:
            locked.chmod(0o755)

        assert "locked/secret.txt" not in files
        assert "js/app.js" in files
        assert any("locked" in m for m in logger.messages("DEBUG"))

    def test_inaccessible_base_dir_raises_scan_error(self, monkeypatch, tmp_path):
        base = tmp_path / "locked" / "build"
        deny_access(monkeypatch, "exists", base)

        with pytest.raises(ScanError, match="Cannot read directory"):
            DirectoryScanner().expand(base, [], [])

    def test_uncheckable_base_dir_type_raises_scan_error(self, monkeypatch, build_dir):
        deny_access(monkeypatch, "is_dir", build_dir)

        with pytest.raises(ScanError, match="Cannot read directory"):
            DirectoryScanner().expand(build_dir, [], [])

    def test_untraversable_entry_is_skipped(self, monkeypatch, build_dir):
        deny_access(monkeypatch, "is_dir", build_dir / "js" / "vendor")
        logger = FakeLogger()

        files = DirectoryScanner(logger).expand(build_dir, [], [])

        assert "js/vendor/lib.js" not in files
        assert "js/app.js" in files
        assert any("vendor" in m for m in logger.messages("DEBUG"))

    def test_unreadable_file_entry_is_skipped(self, monkeypatch, build_dir):
        deny_access(monkeypatch, "is_file", build_dir / "css" / "app.css")

        files = DirectoryScanner(FakeLogger()).expand(build_dir, [], [])

        assert "css/app.css" not in files
        assert "index.html" in files

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unavailable")
    def test_symlink_loops_terminate(self, build_dir):
        try:
            os.symlink(build_dir, build_dir / "js" / "loop")
        except OSError:
            pytest.skip("cannot create symlinks")

        files = DirectoryScanner().expand(build_dir, ["**/*.html"], [])

        assert files == ["index.html"]
