"""Digest helpers for file content checks."""

from __future__ import annotations

import hashlib
import logging
from pathlib import Path

from pathassert.config import get_config
from pathassert.types import DigestResult, InvalidArgumentError, UnsupportedAlgorithmError

logger = logging.getLogger(__name__)


def normalize_algorithm(name: str) -> str:
    """Map a digest name such as ``SHA1``, ``SHA-256`` or ``SHA3-512`` to hashlib's.

    Raises:
        UnsupportedAlgorithmError: If hashlib does not provide the algorithm.
    """
    n = name.strip().lower()
    if n.startswith("sha3-") or n.startswith("sha3_"):
        n = "sha3_" + n[5:]
    elif n.startswith("sha-512/") or n.startswith("sha512/"):
        n = "sha512_" + n.split("/", 1)[1]
    else:
        n = n.replace("-", "")
    # shake digests need an output length
    if n not in hashlib.algorithms_available or n.startswith("shake"):
        raise UnsupportedAlgorithmError(f"Unsupported digest algorithm: {name}")
    return n


def new_hash(algorithm):
    """Return a fresh hash object for a name or an existing hashlib object."""
    if isinstance(algorithm, str):
        name = normalize_algorithm(algorithm)
    elif hasattr(algorithm, "name") and hasattr(algorithm, "update"):
        name = normalize_algorithm(algorithm.name)
    else:
        raise InvalidArgumentError(f"Expected a digest name or hashlib object, got {algorithm!r}")
    try:
        return hashlib.new(name)
    except ValueError as exc:
        raise UnsupportedAlgorithmError(f"Unsupported digest algorithm: {name}") from exc


def compute_digest(path: str | Path, algorithm="sha256", chunk_size: int | None = None) -> bytes:
    """Compute the digest of a file.

    Args:
        path: Filesystem path to the file.
        algorithm: Digest name (``"MD5"``, ``"SHA1"``...) or a hashlib object
            whose algorithm is reused.
        chunk_size: Read size; defaults to the configured ``chunk_size``.

    Returns:
        The raw digest bytes.
    """
    h = new_hash(algorithm)
    size = chunk_size or get_config().chunk_size
    with open(path, "rb") as fh:
        while chunk := fh.read(size):
            h.update(chunk)
    return h.digest()


def expected_hex(expected, algorithm_name: str) -> str:
    """Normalise an expected digest (hex string or bytes) to lowercase hex.

    A hex string may carry an ``<algorithm>:`` prefix, as in ``sha256:ab12...``.
    """
    if isinstance(expected, (bytes, bytearray, memoryview)):
        return bytes(expected).hex()
    if not isinstance(expected, str):
        raise InvalidArgumentError(f"Expected digest must be a hex string or bytes, got {expected!r}")
    text = expected.strip()
    if ":" in text:
        prefix, text = text.split(":", 1)
        try:
            prefixed = normalize_algorithm(prefix)
        except UnsupportedAlgorithmError as exc:
            raise InvalidArgumentError(
                f"Digest prefix {prefix!r} does not name a known algorithm"
            ) from exc
        if prefixed != algorithm_name:
            raise InvalidArgumentError(
                f"Digest prefix {prefix!r} does not match algorithm {algorithm_name!r}"
            )
    try:
        bytes.fromhex(text)
    except ValueError as exc:
        raise InvalidArgumentError(f"Expected digest is not a hex string: {expected!r}") from exc
    return text.lower()


def check_digest(path: str | Path, algorithm, expected) -> DigestResult:
    """Compare the digest of *path* with *expected*.

    Raises:
        UnsupportedAlgorithmError: If the algorithm is unavailable.
        OSError: If the file cannot be read.
    """
    name = new_hash(algorithm).name
    want = expected_hex(expected, name)
    actual = compute_digest(path, algorithm).hex()
    logger.debug("%s digest of %s: %s", name, path, actual)
    return DigestResult(algorithm=name, expected_hex=want, actual_hex=actual)
