"""Tests for checksum.hashing -- the digest primitive."""

import hashlib
import io

import pytest
from checksum.hashing import (
    digest_bytes,
    digest_stream,
    digest_text,
    is_supported_algorithm,
    new_hasher,
)

MD5_EMPTY = "d41d8cd98f00b204e9800998ecf8427e"


class TestDigestBytes:
    def test_known_md5(self):
        assert digest_bytes(b"abc") == "900150983cd24fb0d6963f7d28e17f72"

    def test_empty(self):
        assert digest_bytes(b"") == MD5_EMPTY

    def test_lowercase_hex_fixed_length(self):
        h = digest_bytes(b"Hello, crawler!")
        assert len(h) == 32
        assert h == h.lower()
        int(h, 16)

    def test_other_algorithm(self):
        assert digest_bytes(b"", algorithm="sha256") == hashlib.sha256(b"").hexdigest()

    def test_algorithm_name_normalized(self):
        assert digest_bytes(b"abc", algorithm=" MD5 ") == digest_bytes(b"abc")


class TestDigestText:
    def test_utf8_default(self):
        assert digest_text("café") == hashlib.md5("café".encode("utf-8")).hexdigest()

    def test_encoding_matters(self):
        assert digest_text("café", encoding="latin-1") != digest_text("café")


class TestDigestStream:
    def test_same_as_buffer(self):
        data = b"x" * 200_000 + b"tail"
        assert digest_stream(io.BytesIO(data)) == digest_bytes(data)

    def test_small_chunks(self):
        data = b"0123456789" * 7
        assert digest_stream(io.BytesIO(data), chunk_size=3) == digest_bytes(data)

    def test_empty_stream(self):
        assert digest_stream(io.BytesIO(b"")) == MD5_EMPTY

    def test_does_not_close(self):
        stream = io.BytesIO(b"abc")
        digest_stream(stream)
        assert not stream.closed

    def test_invalid_chunk_size(self):
        with pytest.raises(ValueError):
            digest_stream(io.BytesIO(b"abc"), chunk_size=0)


class TestAlgorithms:
    def test_unknown_algorithm(self):
        with pytest.raises(ValueError):
            new_hasher("no-such-hash")

    def test_shake_rejected(self):
        assert not is_supported_algorithm("shake_128")

    def test_supported(self):
        assert is_supported_algorithm("md5")
        assert is_supported_algorithm("sha1")
        assert is_supported_algorithm("sha256")
