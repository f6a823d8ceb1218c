"""Tests for raw deflate compression."""

from __future__ import annotations

import zlib

import pytest

from tps_uid import TpsUidCodec
from tps_uid.exceptions import CompressionUnavailableError
from tps_uid.implementation.encoding import Deflate
from tps_uid.implementation.encoding import deflate as deflate_module

DATA = "tps://31.95,35.91,800m@T:greg.m3.c1.y26.M01.d09.h14.n30.s25".encode("utf-8") * 8


def test_stream_is_raw_deflate() -> None:
    """Output carries no zlib header and inflates with a raw decoder."""
    compressed = Deflate().compress(DATA)

    assert len(compressed) < len(DATA)
    assert zlib.decompress(compressed, -15) == DATA

    with pytest.raises(zlib.error):
        zlib.decompress(compressed)


def test_round_trip_empty() -> None:
    """An empty payload compresses to a valid stream."""
    deflate = Deflate()

    assert deflate.decompress(deflate.compress(b"")) == b""


def test_rejects_truncated_stream() -> None:
    """A stream cut short is an error, not a shorter payload."""
    compressed = Deflate().compress(DATA)

    with pytest.raises(ValueError):
        Deflate().decompress(compressed[: len(compressed) // 2])


def test_rejects_garbage() -> None:
    """Bytes that are not deflate are an error."""
    with pytest.raises(ValueError):
        Deflate().decompress(b"\xff\xff\xff")


def test_missing_zlib(monkeypatch: pytest.MonkeyPatch) -> None:
    """Without zlib the compressor refuses work and the default codec has none."""
    monkeypatch.setattr(deflate_module, "zlib", None)

    assert Deflate.available() is False

    with pytest.raises(CompressionUnavailableError):
        Deflate().compress(DATA)
    with pytest.raises(CompressionUnavailableError):
        Deflate().decompress(DATA)

    codec = TpsUidCodec.default()
    assert codec._config.encoding.compressor is None

    with pytest.raises(CompressionUnavailableError):
        codec.encode("T:greg.m3.c1.y26", compress=True)
    assert codec.decode(codec.encode("T:greg.m3.c1.y26")).payload == "T:greg.m3.c1.y26"


def test_available_with_zlib() -> None:
    """A normal interpreter can compress."""
    assert Deflate.available() is True
    assert TpsUidCodec.default()._config.encoding.compressor is not None
