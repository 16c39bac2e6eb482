"""Tests for paths: segments, normalize, parent, prefix/suffix and entry kinds."""

from __future__ import annotations

from pathlib import Path

import pytest

from pathassert.paths import (
    as_written,
    describe,
    ends_with,
    entry_kind,
    file_name,
    is_normalized,
    normalize,
    parent_of,
    split,
    starts_with,
)
from pathassert.types import EntryKind
from tests.conftest import posix_only

pytestmark = posix_only


class TestSplit:
    def test_keeps_dot_segments(self):
        assert split("target/./dir") == ("", ("target", ".", "dir"))
        assert split("./usr/lib") == ("", (".", "usr", "lib"))

    def test_absolute(self):
        assert split("/usr/lib") == ("/", ("usr", "lib"))
        assert split("/") == ("/", ())

    def test_repeated_and_trailing_separators(self):
        assert split("a//b/") == ("", ("a", "b"))
        assert as_written("a//b/") == "a/b"

    def test_accepts_pathlike(self):
        assert split(Path("/usr/lib")) == ("/", ("usr", "lib"))


class TestNormalize:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("a/b/c", "a/b/c"),
            ("target/dir/..", "target"),
            ("a/b/../../c", "c"),
            ("../d", "../d"),
            ("../../d/..", "../.."),
            ("/usr/lib/..", "/usr"),
            ("/..", "/"),
            ("lib/../lib", "lib"),
            ("a/..", "."),
            ("a/./b", "a/b"),
            ("./usr/lib", "usr/lib"),
            ("/./usr", "/usr"),
        ],
    )
    def test_collapses_dot_segments(self, raw, expected):
        assert normalize(raw) == expected

    @pytest.mark.parametrize("raw", ["/usr/lib", "a/b/c", "../d", ".", "a//b"])
    def test_is_normalized(self, raw):
        assert is_normalized(raw)

    @pytest.mark.parametrize("raw", ["a/./b", "./a", "a/b/..", "/.."])
    def test_is_not_normalized(self, raw):
        assert not is_normalized(raw)


class TestParentOf:
    def test_relative_name_has_no_parent(self):
        assert parent_of("foo") is None

    def test_root_has_no_parent(self):
        assert parent_of("/") is None

    def test_root_is_parent_of_top_level(self):
        assert parent_of("/usr") == "/"

    def test_raw_parent_keeps_dots(self):
        assert parent_of("a/b/..") == "a/b"
        assert parent_of("target/./dir") == "target/."

    def test_normalized_parent(self):
        assert parent_of("target/./dir", normalized=True) == "target"
        assert parent_of("a/../foo", normalized=True) is None


class TestFileName:
    def test_last_name_as_written(self):
        assert file_name("target/somefile.txt") == "somefile.txt"
        assert file_name("target/.") == "."
        assert file_name("/") == ""


class TestStartsEnds:
    def test_starts_with_segments(self):
        assert starts_with("/usr/lib", "/usr")
        assert not starts_with("/usr/lib", "/us")
        assert not starts_with("/usr/lib", "usr")

    def test_raw_prefix_sees_dot(self):
        assert not starts_with("./usr/lib", "usr")
        assert starts_with("./usr/lib", "./usr")
        assert starts_with("./usr/lib", "usr", normalized=True)

    def test_ends_with_segments(self):
        assert ends_with("/usr/lib", "lib")
        assert ends_with("/usr/lib", "usr/lib")
        assert not ends_with("/usr/lib", "ib")

    def test_raw_suffix_sees_dot(self):
        assert not ends_with("usr/./lib", "usr/lib")
        assert ends_with("usr/./lib", "usr/lib", normalized=True)

    def test_absolute_suffix_must_equal_path(self):
        assert ends_with("/usr/lib", "/usr/lib")
        assert not ends_with("/usr/lib", "/lib")

    def test_longer_suffix_does_not_match(self):
        assert not ends_with("lib", "usr/lib")


class TestEntryKind:
    def test_missing(self, tmp_path):
        assert entry_kind(tmp_path / "nope") is EntryKind.MISSING

    def test_missing_below_a_file(self, tmp_path):
        f = tmp_path / "f"
        f.write_text("x")
        assert entry_kind(f / "child") is EntryKind.MISSING

    def test_file_and_directory(self, tmp_path):
        f = tmp_path / "f"
        f.write_text("x")
        assert entry_kind(f) is EntryKind.REGULAR_FILE
        assert entry_kind(tmp_path) is EntryKind.DIRECTORY

    def test_links(self, links):
        assert entry_kind(links["file_link"]) is EntryKind.REGULAR_FILE
        assert entry_kind(links["file_link"], follow_links=False) is EntryKind.SYMBOLIC_LINK
        assert entry_kind(links["dangling"]) is EntryKind.MISSING
        assert entry_kind(links["dangling"], follow_links=False) is EntryKind.SYMBOLIC_LINK

    def test_link_loop_is_missing(self, tmp_path):
        loop = tmp_path / "loop"
        loop.symlink_to(loop)
        assert entry_kind(loop) is EntryKind.MISSING
        assert entry_kind(loop, follow_links=False) is EntryKind.SYMBOLIC_LINK
        assert describe(loop) == "symbolic link to a missing target"

    def test_describe(self, links):
        assert describe(links["file"]) == "regular file"
        assert describe(links["dir_link"]) == "symbolic link to a directory"
        assert describe(links["dangling"]) == "symbolic link to a missing target"
