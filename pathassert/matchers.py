"""Directory-entry matchers: ``glob:`` and ``regex:`` patterns or predicates."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Callable, Union

from pathassert.types import InvalidArgumentError

PathMatcher = Callable[[Path], bool]
MatcherLike = Union[str, "re.Pattern[str]", PathMatcher]

GLOB_PREFIX = "glob:"
REGEX_PREFIX = "regex:"

# backslash is an ordinary name character where it is not a separator
_SEPARATORS = re.escape(os.sep + (os.altsep or ""))


def glob_to_regex(pattern: str) -> str:
    """Translate a glob into a regular expression.

    ``*`` matches inside one path segment, ``**`` matches across segments,
    ``?`` matches one non-separator character, ``[...]`` is a character
    class (``[!...]`` negated) and ``{a,b}`` matches either alternative.

    Raises:
        InvalidArgumentError: On an unterminated class or group.
    """
    out: list[str] = []
    i, n = 0, len(pattern)
    in_group = False
    while i < n:
        c = pattern[i]
        if c == "*":
            if i + 1 < n and pattern[i + 1] == "*":
                out.append(".*")
                i += 2
                continue
            out.append(f"[^{_SEPARATORS}]*")
        elif c == "?":
            out.append(f"[^{_SEPARATORS}]")
        elif c == "[":
            end = pattern.find("]", i + 2)
            if end == -1:
                raise InvalidArgumentError(f"Unterminated character class in glob: {pattern!r}")
            body = pattern[i + 1:end]
            if body.startswith("!"):
                body = "^" + body[1:]
            elif body.startswith("^"):
                body = "\\" + body
            out.append(f"[{body.replace(chr(92), chr(92) * 2)}]")
            i = end
        elif c == "{":
            if in_group:
                raise InvalidArgumentError(f"Nested groups are not supported in glob: {pattern!r}")
            in_group = True
            out.append("(?:")
        elif c == "}" and in_group:
            in_group = False
            out.append(")")
        elif c == "," and in_group:
            out.append("|")
        elif c == "\\" and i + 1 < n:
            i += 1
            out.append(re.escape(pattern[i]))
        else:
            out.append(re.escape(c))
        i += 1
    if in_group:
        raise InvalidArgumentError(f"Unterminated group in glob: {pattern!r}")
    return "".join(out)


def _pattern_matcher(regex: "re.Pattern[str]") -> PathMatcher:
    def match(path: Path) -> bool:
        return regex.fullmatch(str(path)) is not None
    return match


def compile_matcher(matcher: MatcherLike) -> PathMatcher:
    """Turn a matcher into a predicate over paths.

    Args:
        matcher: ``"glob:<pattern>"``, ``"regex:<pattern>"``, a compiled regular
            expression, or any callable taking a :class:`Path`.

    Returns:
        A callable returning True for matching paths. Patterns are matched
        against the whole path string.

    Raises:
        InvalidArgumentError: On an unknown syntax prefix or a bad pattern.
    """
    if matcher is None:
        raise InvalidArgumentError("The path matcher should not be None")
    if isinstance(matcher, re.Pattern):
        return _pattern_matcher(matcher)
    if isinstance(matcher, str):
        if matcher.startswith(GLOB_PREFIX):
            source = glob_to_regex(matcher[len(GLOB_PREFIX):])
        elif matcher.startswith(REGEX_PREFIX):
            source = matcher[len(REGEX_PREFIX):]
        else:
            raise InvalidArgumentError(
                f"Matcher syntax must be 'glob:<pattern>' or 'regex:<pattern>', got {matcher!r}"
            )
        try:
            return _pattern_matcher(re.compile(source))
        except re.error as exc:
            raise InvalidArgumentError(f"Invalid pattern {matcher!r}: {exc}") from exc
    if callable(matcher):
        return matcher
    raise InvalidArgumentError(f"Unsupported matcher: {matcher!r}")


def describe_matcher(matcher: MatcherLike) -> str:
    """Short text naming a matcher in failure messages."""
    if isinstance(matcher, str):
        return matcher
    if isinstance(matcher, re.Pattern):
        return f"regex:{matcher.pattern}"
    return getattr(matcher, "__name__", None) or repr(matcher)
