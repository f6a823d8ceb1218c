"""Tests for sealing and verifying TPS-UIDs."""

from __future__ import annotations

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey

from tps_uid import TpsUidCodec
from tps_uid.encoding import decode_text
from tps_uid.exceptions import (
    KeyFormatError,
    MalformedInputError,
    MissingSignatureDataError,
    NotSealedError,
    SignatureInvalidError,
    TruncationError,
    UnsupportedSealTypeError,
    UnsupportedVersionError,
)
from tps_uid.implementation.crypto import Ed25519

EXAMPLE = "tps://31.95,35.91,800m@T:greg.m3.c1.y26.M01.d09.h14.n30.s25"


def new_key() -> Ed25519:
    key = Ed25519()
    key.generate()
    return key


def payload_end(token: bytes) -> int:
    """Index one past the payload of a sealed token (seal type + 64-byte signature follow)."""
    return len(token) - 65


def test_seal_and_verify() -> None:
    """A sealed token verifies under the matching public key."""
    codec = TpsUidCodec.default()
    key = new_key()

    token = codec.seal(EXAMPLE, key, epoch_ms=1700000000000)
    decoded = codec.verify_and_decode(token, key.public())

    assert decoded.payload == EXAMPLE
    assert decoded.epoch_ms == 1700000000000
    assert decoded.sealed is True
    assert decoded.compressed is False


def test_seal_and_verify_compressed() -> None:
    """Compression and sealing combine."""
    codec = TpsUidCodec.default()
    key = new_key()

    token = codec.seal(EXAMPLE * 20, key, compress=True)
    decoded = codec.verify_and_decode(token, key)

    assert decoded.payload == EXAMPLE * 20
    assert decoded.compressed is True
    assert decoded.sealed is True


def test_sealed_layout() -> None:
    """The seal bit is set and the signature block follows the payload."""
    codec = TpsUidCodec.default()
    key = new_key()

    token = codec.seal(EXAMPLE, key)
    end = payload_end(token)

    assert token[:4] == b"TPU7"
    assert token[5] == 0x02
    assert token[16] == len(EXAMPLE.encode("utf-8"))
    assert end == 17 + len(EXAMPLE.encode("utf-8"))
    assert token[end] == 0x01

    # the signature covers the content with the seal bit already set
    key.verify(token[:end], token[end + 1 :])


def test_plain_decode_reads_sealed_token() -> None:
    """Unverified decode reads a sealed token and reports the seal flag."""
    codec = TpsUidCodec.default()
    key = new_key()

    decoded = codec.decode(codec.seal(EXAMPLE, key))

    assert decoded.payload == EXAMPLE
    assert decoded.sealed is True


def test_tampering_is_detected() -> None:
    """Flipping any time, nonce, flag or payload byte invalidates the seal."""
    codec = TpsUidCodec.default()
    key = new_key()
    public = key.public()

    token = codec.seal(EXAMPLE, key)
    end = payload_end(token)

    positions = list(range(6, 16)) + list(range(17, end))
    for i in positions:
        tampered = bytearray(token)
        tampered[i] ^= 0x01
        with pytest.raises(SignatureInvalidError):
            codec.verify_and_decode(bytes(tampered), public)


def test_compression_flag_tampering() -> None:
    """Toggling the compressed bit is caught before decompression is attempted."""
    codec = TpsUidCodec.default()
    key = new_key()

    tampered = bytearray(codec.seal(EXAMPLE, key))
    tampered[5] |= 0x01

    with pytest.raises(SignatureInvalidError):
        codec.verify_and_decode(bytes(tampered), key.public())


def test_signature_tampering() -> None:
    """Flipping a signature byte invalidates the seal."""
    codec = TpsUidCodec.default()
    key = new_key()

    tampered = bytearray(codec.seal(EXAMPLE, key))
    tampered[-1] ^= 0x80

    with pytest.raises(SignatureInvalidError):
        codec.verify_and_decode(bytes(tampered), key.public())


def test_wrong_key() -> None:
    """An unrelated key fails the same way tampering does."""
    codec = TpsUidCodec.default()

    token = codec.seal(EXAMPLE, new_key())

    with pytest.raises(SignatureInvalidError) as excinfo:
        codec.verify_and_decode(token, new_key().public())

    assert str(excinfo.value) == "signature verification failed"


def test_unusable_public_key() -> None:
    """A public key that cannot be loaded is reported as an invalid signature."""
    codec = TpsUidCodec.default()
    token = codec.seal(EXAMPLE, new_key())

    for bad in (b"short", "not hex", None, b"\x00" * 31):
        with pytest.raises(SignatureInvalidError):
            codec.verify_and_decode(token, bad)


def test_not_sealed() -> None:
    """Verifying an unsealed token is refused."""
    codec = TpsUidCodec.default()
    key = new_key()

    with pytest.raises(NotSealedError):
        codec.verify_and_decode(codec.encode(EXAMPLE), key.public())

    cleared = bytearray(codec.seal(EXAMPLE, key))
    cleared[5] &= ~0x02
    with pytest.raises(NotSealedError):
        codec.verify_and_decode(bytes(cleared), key.public())


def test_missing_signature_data() -> None:
    """A sealed token cut anywhere inside its seal block is rejected."""
    codec = TpsUidCodec.default()
    key = new_key()

    token = codec.seal(EXAMPLE, key)
    end = payload_end(token)

    for cut in range(end, len(token)):
        with pytest.raises(MissingSignatureDataError):
            codec.verify_and_decode(token[:cut], key.public())


def test_truncated_payload() -> None:
    """A sealed token cut inside its payload is a truncation."""
    codec = TpsUidCodec.default()
    key = new_key()

    token = codec.seal(EXAMPLE, key)

    with pytest.raises(TruncationError):
        codec.verify_and_decode(token[:20], key.public())


def test_structural_errors() -> None:
    """Magic, version, seal type and trailing bytes are checked structurally."""
    codec = TpsUidCodec.default()
    key = new_key()
    token = codec.seal(EXAMPLE, key)
    end = payload_end(token)

    with pytest.raises(MalformedInputError):
        codec.verify_and_decode(b"XPU7" + token[4:], key.public())

    with pytest.raises(MalformedInputError):
        codec.verify_and_decode(token[:10], key.public())

    bad_version = bytearray(token)
    bad_version[4] = 0x09
    with pytest.raises(UnsupportedVersionError):
        codec.verify_and_decode(bytes(bad_version), key.public())

    bad_type = bytearray(token)
    bad_type[end] = 0x7F
    with pytest.raises(UnsupportedSealTypeError):
        codec.verify_and_decode(bytes(bad_type), key.public())

    with pytest.raises(MalformedInputError):
        codec.verify_and_decode(token + b"\x00", key.public())


def test_key_material_forms() -> None:
    """Private and public keys are accepted in their common encodings."""
    codec = TpsUidCodec.default()
    private = Ed25519PrivateKey.generate()
    public = private.public_key()

    seed = private.private_bytes(
        serialization.Encoding.Raw,
        serialization.PrivateFormat.Raw,
        serialization.NoEncryption(),
    )
    raw_public = public.public_bytes(serialization.Encoding.Raw, serialization.PublicFormat.Raw)
    private_pem = private.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.PKCS8,
        serialization.NoEncryption(),
    )
    private_der = private.private_bytes(
        serialization.Encoding.DER,
        serialization.PrivateFormat.PKCS8,
        serialization.NoEncryption(),
    )
    public_pem = public.public_bytes(
        serialization.Encoding.PEM,
        serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    public_der = public.public_bytes(
        serialization.Encoding.DER,
        serialization.PublicFormat.SubjectPublicKeyInfo,
    )

    private_forms = [
        private,
        seed,
        seed.hex(),
        seed + raw_public,
        (seed + raw_public).hex(),
        private_pem,
        private_pem.decode("ascii"),
        private_der,
        Ed25519(private),
    ]
    public_forms = [
        public,
        raw_public,
        raw_public.hex(),
        public_pem,
        public_pem.decode("ascii"),
        public_der,
        Ed25519(private),
    ]

    for private_form in private_forms:
        token = codec.seal(EXAMPLE, private_form)
        for public_form in public_forms:
            assert codec.verify_and_decode(token, public_form).payload == EXAMPLE


def test_bad_private_key() -> None:
    """Unusable private key material is a key format error."""
    codec = TpsUidCodec.default()
    seed = new_key().seed()

    for bad in (b"short", "zz", None, 42, seed + b"\x00" * 32):
        with pytest.raises(KeyFormatError):
            codec.seal(EXAMPLE, bad)

    with pytest.raises(KeyFormatError):
        codec.seal(EXAMPLE, Ed25519())


def test_text_form() -> None:
    """Sealed tokens travel in the text transport form."""
    codec = TpsUidCodec.default()
    key = new_key()

    text = codec.seal_b64(EXAMPLE, key, compress=True)

    assert text.startswith("tpsuid7rb_")
    assert codec.verify_and_decode_b64(text, key.public()).payload == EXAMPLE
    assert codec.verify_and_decode(decode_text(text), key.public()).compressed is True
