"""Shared fixtures for pathassert tests."""

from __future__ import annotations

import os
import sys

import pytest

from pathassert import log
from pathassert.config import reset_config

QUICK_FOX = b"The quick brown fox jumps over the lazy dog"

posix_only = pytest.mark.skipif(sys.platform == "win32", reason="needs POSIX symlinks and permissions")
not_root = pytest.mark.skipif(
    hasattr(os, "geteuid") and os.geteuid() == 0,
    reason="root bypasses permission checks",
)


@pytest.fixture(autouse=True)
def clean_state():
    """Start every test from the default configuration and no log handler."""
    reset_config()
    yield
    reset_config()
    log.teardown()


@pytest.fixture()
def xfile(tmp_path):
    """Path of a file that does not exist yet."""
    return tmp_path / "xfile.txt"


@pytest.fixture()
def fox_file(tmp_path):
    """A file with well-known MD5/SHA-1/SHA-256 digests."""
    p = tmp_path / "fox.txt"
    p.write_bytes(QUICK_FOX)
    return p


@pytest.fixture()
def templates_dir(tmp_path):
    """A directory of text templates, like a test resources folder."""
    d = tmp_path / "templates"
    d.mkdir()
    (d / "my_template.txt").write_text("Hello {name}\n", encoding="utf-8")
    (d / "other_template.txt").write_text("Bye {name}\n", encoding="utf-8")
    (d / "notes.md").write_text("# notes\n", encoding="utf-8")
    return d


@pytest.fixture()
def mixed_dir(tmp_path):
    """A directory holding both .txt and .java files plus a nested folder."""
    d = tmp_path / "mixed"
    d.mkdir()
    (d / "a.txt").write_text("a", encoding="utf-8")
    (d / "b.txt").write_text("b", encoding="utf-8")
    (d / "Main.java").write_text("class Main {}", encoding="utf-8")
    nested = d / "nested"
    nested.mkdir()
    (nested / "deep.cfg").write_text("x=1", encoding="utf-8")
    return d


@pytest.fixture()
def empty_dir(tmp_path):
    d = tmp_path / "empty"
    d.mkdir()
    return d


@pytest.fixture()
def links(tmp_path):
    """A file, a directory, and symlinks to both plus a dangling one."""
    if sys.platform == "win32":
        pytest.skip("symlinks need POSIX")
    existing = tmp_path / "somefile.txt"
    existing.write_bytes(b"foo")
    file_link = tmp_path / "symlink-to-somefile.txt"
    file_link.symlink_to(existing)

    missing = tmp_path / "nonexistent"
    dangling = tmp_path / "symlinkToNonExistentPath"
    dangling.symlink_to(missing)

    directory = tmp_path / "dir"
    directory.mkdir()
    dir_link = tmp_path / "dirSymlink"
    dir_link.symlink_to(directory.resolve())

    return {
        "file": existing,
        "file_link": file_link,
        "missing": missing,
        "dangling": dangling,
        "dir": directory,
        "dir_link": dir_link,
    }
