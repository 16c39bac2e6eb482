"""Pure path-structure helpers.

``pathlib`` drops ``.`` segments as soon as a path is built, so the helpers
here work on the path as the caller wrote it, split into an anchor (drive
plus root) and its names. ``.`` and ``..`` segments survive the split and
are only collapsed by :func:`normalize`.
"""

from __future__ import annotations

import errno
import os
import re
import stat
from pathlib import Path

from pathassert.types import EntryKind

Segments = tuple[str, tuple[str, ...]]

_SEPARATORS = re.compile("[" + re.escape(os.sep + (os.altsep or "")) + "]+")


def split(path) -> Segments:
    """Split *path* into its anchor and names, keeping ``.`` and ``..``.

    Repeated and trailing separators are ignored.
    """
    drive, rest = os.path.splitdrive(os.fspath(path))
    names = tuple(name for name in _SEPARATORS.split(rest) if name)
    root = os.sep if _SEPARATORS.match(rest) else ""
    return drive + root, names


def join(segments: Segments) -> str:
    anchor, names = segments
    return anchor + os.sep.join(names)


def _collapse(anchor: str, names: tuple[str, ...]) -> tuple[str, ...]:
    out: list[str] = []
    for name in names:
        if name == ".":
            continue
        if name == "..":
            if out and out[-1] != "..":
                out.pop()
            elif not anchor:
                out.append(name)
        else:
            out.append(name)
    # a relative path that collapses away entirely still names the current directory
    if not out and not anchor and names:
        out.append(".")
    return tuple(out)


def segments(path, normalized: bool = False) -> Segments:
    """Split *path*, collapsing ``.`` and ``..`` first when *normalized*.

    Leading ``..`` segments of a relative path are kept; ``..`` directly
    under a root is dropped.
    """
    anchor, names = split(path)
    if normalized:
        names = _collapse(anchor, names)
    return anchor, names


def normalize(path) -> str:
    """Return *path* without redundant ``.`` and ``..`` segments."""
    return join(segments(path, normalized=True))


def is_normalized(path) -> bool:
    return split(path) == segments(path, normalized=True)


def as_written(path) -> str:
    """Return *path* with only its separators tidied."""
    return join(split(path))


def file_name(path) -> str:
    """Last name of *path* as written, or ``""`` for a bare root."""
    names = split(path)[1]
    return names[-1] if names else ""


def parent_of(path, normalized: bool = False) -> str | None:
    """Return the parent of *path*, or ``None`` when it has none.

    Unlike :attr:`PurePath.parent`, a single relative name such as ``foo``
    has no parent (rather than ``.``), and neither does a bare root.
    """
    anchor, names = segments(path, normalized)
    if not names or (not anchor and len(names) == 1):
        return None
    return join((anchor, names[:-1]))


def starts_with(path, prefix, normalized: bool = False) -> bool:
    """True if *prefix* names the leading segments of *path*, root included."""
    anchor, names = segments(path, normalized)
    p_anchor, p_names = segments(prefix, normalized)
    if not p_anchor and not p_names:
        return not anchor and not names
    return anchor == p_anchor and names[: len(p_names)] == p_names


def ends_with(path, suffix, normalized: bool = False) -> bool:
    """True if *suffix* names the trailing segments of *path*.

    An absolute *suffix* only matches a path equal to it.
    """
    anchor, names = segments(path, normalized)
    s_anchor, s_names = segments(suffix, normalized)
    if not s_anchor and not s_names:
        return not anchor and not names
    if s_anchor:
        return (anchor, names) == (s_anchor, s_names)
    return len(s_names) <= len(names) and names[-len(s_names):] == s_names


def entry_kind(path: Path, follow_links: bool = True) -> EntryKind:
    """Return what *path* points at, without raising for a missing entry.

    A symbolic link loop counts as missing, like a dangling link.
    """
    try:
        st = os.stat(path) if follow_links else os.lstat(path)
    except (FileNotFoundError, NotADirectoryError):
        return EntryKind.MISSING
    except OSError as exc:
        if exc.errno == errno.ELOOP:
            return EntryKind.MISSING
        raise
    mode = st.st_mode
    if stat.S_ISLNK(mode):
        return EntryKind.SYMBOLIC_LINK
    if stat.S_ISREG(mode):
        return EntryKind.REGULAR_FILE
    if stat.S_ISDIR(mode):
        return EntryKind.DIRECTORY
    return EntryKind.OTHER


def describe(path: Path) -> str:
    """Human-readable entry kind, mentioning the link target for symlinks."""
    kind = entry_kind(path, follow_links=False)
    if kind is not EntryKind.SYMBOLIC_LINK:
        return kind.value
    target = entry_kind(path)
    if target is EntryKind.MISSING:
        return "symbolic link to a missing target"
    return f"symbolic link to a {target.value}"
