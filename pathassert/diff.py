"""
Content comparison

Byte-level comparison reports the first differing offset; text comparison
reports the first differing line and a unified diff.
"""

import difflib
from typing import List

import numpy as np

from .types import BinaryDiff, TextDiff


def compare_bytes(expected: bytes, actual: bytes) -> BinaryDiff:
    """
    Byte-for-byte comparison

    Args:
        expected: expected content
        actual: content read from the file

    Returns:
        BinaryDiff (first_diff_offset is -1 when equal)
    """
    if expected == actual:
        return BinaryDiff(
            equal=True,
            expected_size=len(expected),
            actual_size=len(actual),
        )

    common = min(len(expected), len(actual))
    # no mismatch in the shared prefix: the shorter one ends first
    first_diff = common
    if common > 0:
        e = np.frombuffer(expected, dtype=np.uint8, count=common)
        a = np.frombuffer(actual, dtype=np.uint8, count=common)
        mismatch_mask = e != a
        if mismatch_mask.any():
            first_diff = int(np.argmax(mismatch_mask))

    return BinaryDiff(
        equal=False,
        first_diff_offset=first_diff,
        expected_size=len(expected),
        actual_size=len(actual),
        expected_byte=expected[first_diff] if first_diff < len(expected) else None,
        actual_byte=actual[first_diff] if first_diff < len(actual) else None,
    )


def compare_text(expected: str, actual: str, context: int = 3,
                 expected_label: str = "expected", actual_label: str = "actual") -> TextDiff:
    """
    Line-level comparison, line terminators included

    Args:
        expected: expected text
        actual: text decoded from the file
        context: unified diff context lines

    Returns:
        TextDiff (first_diff_line is 1-based, -1 when equal)
    """
    if expected == actual:
        return TextDiff(equal=True)

    exp_lines = expected.splitlines(keepends=True)
    act_lines = actual.splitlines(keepends=True)

    first_diff = min(len(exp_lines), len(act_lines)) + 1
    for i, (e, a) in enumerate(zip(exp_lines, act_lines)):
        if e != a:
            first_diff = i + 1
            break

    unified = [
        line.rstrip("\r\n")
        for line in difflib.unified_diff(
            exp_lines, act_lines, fromfile=expected_label, tofile=actual_label, n=context,
        )
    ]
    return TextDiff(equal=False, first_diff_line=first_diff, unified=unified)


def format_binary_diff(diff: BinaryDiff) -> str:
    """Describe where two byte sequences diverge."""
    lines: List[str] = [f"but content differed at offset {diff.first_diff_offset}:"]
    lines.append(f"  expected: {_byte_repr(diff.expected_byte)} (size {diff.expected_size})")
    lines.append(f"  actual:   {_byte_repr(diff.actual_byte)} (size {diff.actual_size})")
    return "\n".join(lines)


def format_text_diff(diff: TextDiff) -> str:
    """Describe where two texts diverge, with the unified diff."""
    lines = [f"but content differed at line {diff.first_diff_line}:"]
    lines.extend(f"  {line}" for line in diff.unified)
    return "\n".join(lines)


def _byte_repr(value) -> str:
    if value is None:
        return "<end of content>"
    return f"0x{value:02x}"
