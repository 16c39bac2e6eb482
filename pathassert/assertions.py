"""Fluent assertions over filesystem paths.

Usage::

    from pathassert import assert_that

    assert_that("target/xfile.txt").exists().is_not_empty_file() \\
        .has_content("The Truth Is Out There")

Every check runs immediately and returns the same :class:`PathAssert`, so
checks chain left to right and the first failing one stops the chain.

Two kinds of error come out of a check:

* :class:`~pathassert.types.PathAssertionError` (an ``AssertionError``) when
  the condition was evaluated and is false;
* :class:`~pathassert.types.PathAssertError` subclasses when the check could
  not be performed at all (I/O failure, unsupported digest, bad argument).
"""

from __future__ import annotations

import codecs
import logging
import os
from pathlib import Path

from pathassert import integrity, paths
from pathassert.config import get_config
from pathassert.diff import compare_bytes, compare_text, format_binary_diff, format_text_diff
from pathassert.matchers import MatcherLike, compile_matcher, describe_matcher
from pathassert.types import (
    EntryKind,
    EvaluationError,
    InvalidArgumentError,
    PathAssertionError,
)

logger = logging.getLogger(__name__)


def _as_raw(value, what: str) -> str:
    """Return *value* as the path string the caller wrote."""
    if value is None:
        raise InvalidArgumentError(f"The {what} should not be None")
    try:
        raw = os.fspath(value)
    except TypeError as exc:
        raise InvalidArgumentError(f"The {what} should be a path, got {value!r}") from exc
    if not isinstance(raw, str):
        raise InvalidArgumentError(f"The {what} should be a path, got {value!r}")
    return raw


def _as_path(value, what: str) -> Path:
    return Path(_as_raw(value, what))


def _check_charset(charset: str) -> str:
    if charset is None:
        raise InvalidArgumentError("The charset should not be None")
    try:
        codecs.lookup(charset)
    except LookupError as exc:
        raise InvalidArgumentError(f"Charset {charset!r} is not supported") from exc
    return charset


def _raise_walk_error(exc: OSError) -> None:
    raise exc


class PathAssert:
    """Assertions on a single subject path.

    Args:
        actual: The subject path (``str`` or ``os.PathLike``).
        charset: Codec for text assertions; defaults to the configured one.
    """

    def __init__(self, actual, charset: str | None = None) -> None:
        self._raw = _as_raw(actual, "path to check")
        self.actual: Path = Path(self._raw)
        self._charset = _check_charset(charset) if charset is not None else None
        self._description: str | None = None

    def __repr__(self) -> str:
        return f"PathAssert({str(self.actual)!r})"

    # -- settings --------------------------------------------------------------

    def described_as(self, description: str) -> PathAssert:
        """Prefix failure messages of the following checks with ``[description]``."""
        self._description = description
        return self

    def using_charset(self, charset: str) -> PathAssert:
        """Decode content with *charset* in the following text checks."""
        self._charset = _check_charset(charset)
        return self

    def using_default_charset(self) -> PathAssert:
        """Go back to the configured default charset."""
        self._charset = None
        return self

    @property
    def charset(self) -> str:
        """Charset the next text check will use."""
        return self._charset or get_config().charset

    # -- internal helpers ------------------------------------------------------

    def _fail(self, expected: str, actual: str | None = None) -> None:
        error = PathAssertionError(self.actual, expected, actual, self._description)
        logger.debug("Assertion failed:%s", error)
        raise error

    def _kind(self, path: Path, follow_links: bool = True) -> EntryKind:
        try:
            return paths.entry_kind(path, follow_links)
        except OSError as exc:
            raise EvaluationError(f"Cannot stat {path}: {exc}") from exc

    def _describe(self) -> str:
        try:
            return paths.describe(self.actual)
        except OSError as exc:
            raise EvaluationError(f"Cannot stat {self.actual}: {exc}") from exc

    def _assert_exists(self) -> None:
        if self._kind(self.actual) is EntryKind.MISSING:
            self._fail("to exist (symbolic links were followed)")

    def _assert_is_regular_file(self) -> None:
        self._assert_exists()
        if self._kind(self.actual) is not EntryKind.REGULAR_FILE:
            self._fail("to be a regular file", f"but it is a {self._describe()}")

    def _assert_is_readable_file(self) -> None:
        self._assert_is_regular_file()
        if not os.access(self.actual, os.R_OK):
            raise EvaluationError(f"Cannot read {self.actual}: permission denied")

    def _assert_is_directory(self) -> None:
        self._assert_exists()
        if self._kind(self.actual) is not EntryKind.DIRECTORY:
            self._fail("to be a directory", f"but it is a {self._describe()}")

    @staticmethod
    def _read_bytes(path: Path) -> bytes:
        try:
            with open(path, "rb") as fh:
                return fh.read()
        except OSError as exc:
            raise EvaluationError(f"Cannot read {path}: {exc}") from exc

    @staticmethod
    def _decode(data: bytes, charset: str, path: Path) -> str:
        try:
            return data.decode(charset)
        except UnicodeDecodeError as exc:
            raise EvaluationError(f"Cannot decode {path} with charset {charset}: {exc}") from exc

    def _other_file(self, other, what: str) -> Path:
        p = _as_path(other, what)
        if not p.exists():
            raise InvalidArgumentError(f"The {what} {p} does not exist")
        if not p.is_file():
            raise InvalidArgumentError(f"The {what} {p} is not a regular file")
        if not os.access(p, os.R_OK):
            raise InvalidArgumentError(f"The {what} {p} is not readable")
        return p

    def _entries(self) -> list[Path]:
        try:
            return sorted(self.actual.iterdir())
        except OSError as exc:
            raise EvaluationError(f"Cannot list directory {self.actual}: {exc}") from exc

    def _all_entries(self) -> list[Path]:
        found: list[Path] = []
        try:
            for root, dirs, files in os.walk(self.actual, onerror=_raise_walk_error):
                base = Path(root)
                found.extend(base / name for name in dirs)
                found.extend(base / name for name in files)
        except OSError as exc:
            raise EvaluationError(f"Cannot walk directory {self.actual}: {exc}") from exc
        return sorted(found)

    def _format_entries(self, entries: list[Path]) -> str:
        limit = get_config().max_listed_entries
        shown = [f"  {p}" for p in entries[:limit]]
        if len(entries) > limit:
            shown.append(f"  ... and {len(entries) - limit} more")
        return "\n".join(shown)

    def _compare(self, other) -> tuple[str, str]:
        return paths.as_written(self._raw), paths.as_written(_as_raw(other, "path to compare to"))

    # -- existence and entry kind ---------------------------------------------

    def exists(self) -> PathAssert:
        """The path exists, following a terminal symbolic link."""
        self._assert_exists()
        return self

    def exists_no_follow_links(self) -> PathAssert:
        """The path exists; a dangling symbolic link counts as existing."""
        if self._kind(self.actual, follow_links=False) is EntryKind.MISSING:
            self._fail("to exist (symbolic links were not followed)")
        return self

    def does_not_exist(self) -> PathAssert:
        """No entry exists at the path, not even a dangling symbolic link."""
        if self._kind(self.actual, follow_links=False) is not EntryKind.MISSING:
            self._fail("not to exist", f"but it is a {self._describe()}")
        return self

    def is_regular_file(self) -> PathAssert:
        """The path resolves to a regular file."""
        self._assert_is_regular_file()
        return self

    def is_directory(self) -> PathAssert:
        """The path resolves to a directory."""
        self._assert_is_directory()
        return self

    def is_symbolic_link(self) -> PathAssert:
        """The path itself is a symbolic link, whatever its target."""
        if self._kind(self.actual, follow_links=False) is not EntryKind.SYMBOLIC_LINK:
            self._fail("to be a symbolic link", f"but it is a {self._describe()}")
        return self

    # -- path structure --------------------------------------------------------

    def is_absolute(self) -> PathAssert:
        if not self.actual.is_absolute():
            self._fail("to be absolute")
        return self

    def is_relative(self) -> PathAssert:
        if self.actual.is_absolute():
            self._fail("to be relative")
        return self

    def is_normalized(self) -> PathAssert:
        """The path holds no ``.`` or ``..`` segment that could be collapsed."""
        if not paths.is_normalized(self._raw):
            self._fail("to be normalized",
                       f"but its normalized form is:\n  {paths.normalize(self._raw)}")
        return self

    def is_canonical(self) -> PathAssert:
        """The path equals its real path (absolute, normalized, no links)."""
        try:
            real = self.actual.resolve(strict=True)
        except (OSError, RuntimeError) as exc:
            raise EvaluationError(f"Cannot resolve {self.actual}: {exc}") from exc
        if paths.split(real) != paths.split(self._raw):
            self._fail("to be canonical", f"but its canonical form is:\n  {real}")
        return self

    def has_file_name(self, name: str) -> PathAssert:
        if name is None:
            raise InvalidArgumentError("The expected file name should not be None")
        actual = paths.file_name(self._raw)
        if actual != name:
            self._fail(f"to have file name:\n  {name!r}", f"but had:\n  {actual!r}")
        return self

    def has_extension(self, extension: str) -> PathAssert:
        """The path is a regular file whose name ends with ``.<extension>``."""
        if extension is None:
            raise InvalidArgumentError("The expected extension should not be None")
        self._assert_is_regular_file()
        name = self.actual.name
        dot = name.rfind(".")
        actual_ext = name[dot + 1:] if dot >= 0 else None
        if actual_ext != extension:
            shown = "no extension" if actual_ext is None else repr(actual_ext)
            self._fail(f"to have extension:\n  {extension!r}", f"but had {shown}")
        return self

    def has_no_extension(self) -> PathAssert:
        """The path is a regular file whose name has no dot."""
        self._assert_is_regular_file()
        name = self.actual.name
        if "." in name:
            self._fail("to have no extension", f"but had {name[name.rfind('.') + 1:]!r}")
        return self

    def _assert_parent(self, expected, normalized: bool) -> None:
        raw = _as_raw(expected, "expected parent path")
        want = paths.normalize(raw) if normalized else paths.as_written(raw)
        parent = paths.parent_of(self._raw, normalized)
        if parent is None:
            self._fail(f"to have parent:\n  {want}", "but had no parent")
        if parent != want:
            self._fail(f"to have parent:\n  {want}", f"but had:\n  {parent}")

    def has_parent(self, expected) -> PathAssert:
        """The normalized parent equals *expected* normalized."""
        self._assert_parent(expected, normalized=True)
        return self

    def has_parent_raw(self, expected) -> PathAssert:
        """The parent, as written, equals *expected* as written."""
        self._assert_parent(expected, normalized=False)
        return self

    def has_no_parent(self) -> PathAssert:
        parent = paths.parent_of(self._raw, normalized=True)
        if parent is not None:
            self._fail("to have no parent", f"but had:\n  {parent}")
        return self

    def has_no_parent_raw(self) -> PathAssert:
        parent = paths.parent_of(self._raw)
        if parent is not None:
            self._fail("to have no parent", f"but had:\n  {parent}")
        return self

    def starts_with(self, other) -> PathAssert:
        """Segment prefix check after normalizing both paths."""
        prefix = _as_raw(other, "prefix path")
        if not paths.starts_with(self._raw, prefix, normalized=True):
            self._fail(f"to start with:\n  {paths.normalize(prefix)}")
        return self

    def starts_with_raw(self, other) -> PathAssert:
        """Segment prefix check on both paths as written."""
        prefix = _as_raw(other, "prefix path")
        if not paths.starts_with(self._raw, prefix):
            self._fail(f"to start with:\n  {paths.as_written(prefix)}")
        return self

    def ends_with(self, other) -> PathAssert:
        """Segment suffix check after normalizing both paths."""
        suffix = _as_raw(other, "suffix path")
        if not paths.ends_with(self._raw, suffix, normalized=True):
            self._fail(f"to end with:\n  {paths.normalize(suffix)}")
        return self

    def ends_with_raw(self, other) -> PathAssert:
        suffix = _as_raw(other, "suffix path")
        if not paths.ends_with(self._raw, suffix):
            self._fail(f"to end with:\n  {paths.as_written(suffix)}")
        return self

    # -- ordering --------------------------------------------------------------

    def is_less_than(self, other) -> PathAssert:
        mine, theirs = self._compare(other)
        if not mine < theirs:
            self._fail(f"to be less than:\n  {theirs}")
        return self

    def is_less_than_or_equal_to(self, other) -> PathAssert:
        mine, theirs = self._compare(other)
        if not mine <= theirs:
            self._fail(f"to be less than or equal to:\n  {theirs}")
        return self

    def is_greater_than(self, other) -> PathAssert:
        mine, theirs = self._compare(other)
        if not mine > theirs:
            self._fail(f"to be greater than:\n  {theirs}")
        return self

    def is_greater_than_or_equal_to(self, other) -> PathAssert:
        mine, theirs = self._compare(other)
        if not mine >= theirs:
            self._fail(f"to be greater than or equal to:\n  {theirs}")
        return self

    # -- file content ----------------------------------------------------------

    def is_empty_file(self) -> PathAssert:
        self._assert_is_readable_file()
        size = self._size()
        if size != 0:
            self._fail("to be an empty file", f"but its size was {size} byte(s)")
        return self

    def is_not_empty_file(self) -> PathAssert:
        self._assert_is_readable_file()
        if self._size() == 0:
            self._fail("not to be an empty file")
        return self

    def has_size(self, size: int) -> PathAssert:
        """The path is a regular file of exactly *size* bytes."""
        if size is None or size < 0:
            raise InvalidArgumentError(f"The expected size should be >= 0, got {size!r}")
        self._assert_is_regular_file()
        actual = self._size()
        if actual != size:
            self._fail(f"to have size {size} byte(s)", f"but was {actual} byte(s)")
        return self

    def _size(self) -> int:
        try:
            return os.stat(self.actual).st_size
        except OSError as exc:
            raise EvaluationError(f"Cannot stat {self.actual}: {exc}") from exc

    def has_content(self, expected: str, charset: str | None = None) -> PathAssert:
        """Decoded content equals *expected* exactly, line terminators included.

        Args:
            expected: The expected text.
            charset: Codec for this check only; defaults to :attr:`charset`.
        """
        if expected is None:
            raise InvalidArgumentError("The text to compare to should not be None")
        codec = _check_charset(charset) if charset is not None else self.charset
        self._assert_is_readable_file()
        text = self._decode(self._read_bytes(self.actual), codec, self.actual)
        diff = compare_text(expected, text, context=get_config().diff_context)
        if not diff.equal:
            self._fail(
                f"to have content (charset {codec}):\n  {expected!r}",
                format_text_diff(diff),
            )
        return self

    def has_same_textual_content_as(self, other, charset: str | None = None,
                                    other_charset: str | None = None) -> PathAssert:
        """Decoded content equals the decoded content of *other*.

        Args:
            other: Path of the reference file.
            charset: Codec for the subject; defaults to :attr:`charset`.
            other_charset: Codec for *other*; defaults to the subject's codec.
        """
        expected_path = self._other_file(other, "path to compare to")
        codec = _check_charset(charset) if charset is not None else self.charset
        other_codec = _check_charset(other_charset) if other_charset is not None else codec
        self._assert_is_readable_file()
        expected = self._decode(self._read_bytes(expected_path), other_codec, expected_path)
        text = self._decode(self._read_bytes(self.actual), codec, self.actual)
        diff = compare_text(
            expected, text, context=get_config().diff_context,
            expected_label=str(expected_path), actual_label=str(self.actual),
        )
        if not diff.equal:
            self._fail(f"to have the same textual content as:\n  {expected_path}",
                       format_text_diff(diff))
        return self

    def has_same_binary_content_as(self, other) -> PathAssert:
        expected_path = self._other_file(other, "path to compare to")
        self._assert_is_readable_file()
        diff = compare_bytes(self._read_bytes(expected_path), self._read_bytes(self.actual))
        if not diff.equal:
            self._fail(f"to have the same binary content as:\n  {expected_path}",
                       format_binary_diff(diff))
        return self

    def has_binary_content(self, expected: bytes) -> PathAssert:
        if expected is None:
            raise InvalidArgumentError("The binary content to compare to should not be None")
        self._assert_is_readable_file()
        diff = compare_bytes(bytes(expected), self._read_bytes(self.actual))
        if not diff.equal:
            self._fail("to have the given binary content", format_binary_diff(diff))
        return self

    def has_digest(self, algorithm, expected) -> PathAssert:
        """The file digest equals *expected*.

        Args:
            algorithm: Digest name (``"MD5"``, ``"SHA1"``, ``"SHA-256"``...) or a
                hashlib object such as ``hashlib.md5()``.
            expected: Hex string (any case, optional ``<algorithm>:`` prefix)
                or raw digest bytes.

        Raises:
            UnsupportedAlgorithmError: If hashlib lacks the algorithm.
            EvaluationError: If the file cannot be read.
        """
        if algorithm is None or expected is None:
            raise InvalidArgumentError("The digest algorithm and expected digest should not be None")
        name = integrity.new_hash(algorithm).name
        integrity.expected_hex(expected, name)
        self._assert_is_readable_file()
        try:
            result = integrity.check_digest(self.actual, algorithm, expected)
        except OSError as exc:
            raise EvaluationError(f"Cannot read {self.actual}: {exc}") from exc
        if not result.ok:
            self._fail(
                f"to have {result.algorithm} digest:\n  {result.expected_hex}",
                f"but was:\n  {result.actual_hex}",
            )
        return self

    # -- permissions -----------------------------------------------------------

    def _assert_access(self, mode: int, label: str) -> PathAssert:
        self._assert_exists()
        if not os.access(self.actual, mode):
            self._fail(f"to be {label}")
        return self

    def is_readable(self) -> PathAssert:
        """The effective user may read the path (links followed)."""
        return self._assert_access(os.R_OK, "readable")

    def is_writable(self) -> PathAssert:
        """The effective user may write the path (links followed)."""
        return self._assert_access(os.W_OK, "writable")

    def is_executable(self) -> PathAssert:
        """The effective user may execute the path (links followed)."""
        return self._assert_access(os.X_OK, "executable")

    # -- directory content -----------------------------------------------------

    def is_directory_containing(self, matcher: MatcherLike) -> PathAssert:
        """At least one direct child matches *matcher*.

        *matcher* is ``"glob:<pattern>"``, ``"regex:<pattern>"``, a compiled
        regular expression or a callable taking the child :class:`Path`.
        Patterns are matched against the whole ``directory/name`` string.
        """
        match = compile_matcher(matcher)
        self._assert_is_directory()
        entries = self._entries()
        if not any(match(p) for p in entries):
            self._fail(
                f"to contain at least one path matching {describe_matcher(matcher)}",
                self._no_match_detail(entries),
            )
        return self

    def is_directory_recursively_containing(self, matcher: MatcherLike) -> PathAssert:
        """At least one descendant, at any depth, matches *matcher*."""
        match = compile_matcher(matcher)
        self._assert_is_directory()
        entries = self._all_entries()
        if not any(match(p) for p in entries):
            self._fail(
                f"to contain recursively at least one path matching {describe_matcher(matcher)}",
                self._no_match_detail(entries),
            )
        return self

    def is_directory_not_containing(self, matcher: MatcherLike) -> PathAssert:
        """No direct child matches *matcher*."""
        match = compile_matcher(matcher)
        self._assert_is_directory()
        matching = [p for p in self._entries() if match(p)]
        if matching:
            self._fail(
                f"not to contain any path matching {describe_matcher(matcher)}",
                f"but found these matching paths:\n{self._format_entries(matching)}",
            )
        return self

    def _no_match_detail(self, entries: list[Path]) -> str:
        if not entries:
            return "but the directory was empty"
        return f"but none of its entries matched:\n{self._format_entries(entries)}"

    def is_empty_directory(self) -> PathAssert:
        self._assert_is_directory()
        entries = self._entries()
        if entries:
            self._fail("to be an empty directory",
                       f"but it contained:\n{self._format_entries(entries)}")
        return self

    def is_not_empty_directory(self) -> PathAssert:
        self._assert_is_directory()
        if not self._entries():
            self._fail("not to be an empty directory")
        return self


def assert_that(path, charset: str | None = None) -> PathAssert:
    """Start a chain of assertions on *path*."""
    return PathAssert(path, charset=charset)
