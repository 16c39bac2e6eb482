"""Data classes and exceptions for the pathassert package."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class EntryKind(str, Enum):
    """What a path points at, as seen by ``lstat``/``stat``."""

    MISSING = "missing"
    REGULAR_FILE = "regular file"
    DIRECTORY = "directory"
    SYMBOLIC_LINK = "symbolic link"
    OTHER = "other"


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------

@dataclass
class BinaryDiff:
    """Result of comparing two byte sequences."""

    equal: bool
    first_diff_offset: int = -1  # -1 when equal
    expected_size: int = 0
    actual_size: int = 0
    expected_byte: int | None = None
    actual_byte: int | None = None


@dataclass
class TextDiff:
    """Result of comparing two texts line by line."""

    equal: bool
    first_diff_line: int = -1  # 1-based, -1 when equal
    unified: list[str] = field(default_factory=list)


@dataclass
class DigestResult:
    """Result of checking a file digest against an expected value."""

    algorithm: str
    expected_hex: str
    actual_hex: str

    @property
    def ok(self) -> bool:
        """True when both digests are equal."""
        return self.expected_hex == self.actual_hex


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class PathAssertionError(AssertionError):
    """Raised when an assertion evaluated cleanly but its condition is false."""

    def __init__(self, subject, expected: str, actual: str | None = None,
                 description: str | None = None) -> None:
        self.subject = subject
        self.expected = expected
        self.actual = actual
        self.description = description
        lines = []
        if description:
            lines.append(f"[{description}] ")
        lines.append(f"\nExpecting path:\n  {subject}\n{expected}")
        if actual is not None:
            lines.append(f"\n{actual}")
        super().__init__("".join(lines))


class PathAssertError(Exception):
    """Base exception for checks that could not be performed."""


class EvaluationError(PathAssertError):
    """Raised when the filesystem or digest operation behind a check fails."""


class UnsupportedAlgorithmError(EvaluationError, ValueError):
    """Raised when a digest algorithm is not available in hashlib."""


class InvalidArgumentError(PathAssertError, ValueError):
    """Raised when an assertion is called with an unusable argument."""


class ConfigError(PathAssertError):
    """Raised when the configuration file is invalid or missing."""
