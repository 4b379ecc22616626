"""Digest primitive for document checksums.

Every checksum in the system is a lowercase hex digest so that a value
computed today compares equal to one stored on a prior crawl.

Rules
-----
- Default algorithm is MD5 (128-bit).  It is only used for change
  detection, never for security.
- ``digest_bytes`` and ``digest_stream`` produce the same hex string for the
  same bytes, whether buffered or streamed.
"""

from __future__ import annotations

import hashlib
from typing import BinaryIO

DEFAULT_ALGORITHM = "md5"
DEFAULT_ENCODING = "utf-8"
DEFAULT_CHUNK_SIZE = 65536  # 64 KB reads


def new_hasher(algorithm: str = DEFAULT_ALGORITHM):
    """Return a fresh ``hashlib`` object for *algorithm*.

    Raises ``ValueError`` for unknown algorithms and for variable-length
    (shake) algorithms, which have no fixed hex length.
    """
    name = algorithm.strip().lower()
    try:
        hasher = hashlib.new(name, usedforsecurity=False)
    except (ValueError, TypeError) as exc:
        raise ValueError(f"Unsupported digest algorithm: {algorithm!r}") from exc
    if hasher.digest_size == 0 or name.startswith("shake"):
        raise ValueError(f"Digest algorithm has no fixed length: {algorithm!r}")
    return hasher


def digest_bytes(data: bytes, algorithm: str = DEFAULT_ALGORITHM) -> str:
    """Return the hex digest of an in-memory byte buffer."""
    hasher = new_hasher(algorithm)
    hasher.update(data)
    return hasher.hexdigest()


def digest_text(
    text: str,
    encoding: str = DEFAULT_ENCODING,
    algorithm: str = DEFAULT_ALGORITHM,
) -> str:
    """Encode *text* and return its hex digest."""
    return digest_bytes(text.encode(encoding), algorithm)


def digest_stream(
    stream: BinaryIO,
    algorithm: str = DEFAULT_ALGORITHM,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> str:
    """Digest *stream* incrementally until EOF.

    The stream is read in ``chunk_size`` pieces so content of any size can be
    fingerprinted without buffering it whole.  The caller owns the stream and
    is responsible for closing it.
    """
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    hasher = new_hasher(algorithm)
    while chunk := stream.read(chunk_size):
        hasher.update(chunk)
    return hasher.hexdigest()


def is_supported_algorithm(algorithm: str) -> bool:
    """Return ``True`` if *algorithm* can be used for checksums."""
    try:
        new_hasher(algorithm)
    except ValueError:
        return False
    return True
