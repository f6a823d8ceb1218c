"""Codec implementation for TPS-UIDs.

This module provides the TpsUidCodec class for minting, reading, sealing and
verifying TPS-UID tokens, along with the configuration dataclasses that bind
its capability providers.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from tps_uid.encoding import (
    DecodedToken,
    TokenFlags,
    decode_text,
    encode_text,
    locate_payload,
    pack_content,
    unpack_header,
    validate_epoch,
)
from tps_uid.exceptions import (
    CompressionFailureError,
    CompressionUnavailableError,
    KeyFormatError,
    MalformedInputError,
    MissingSignatureDataError,
    MissingTimeError,
    NotSealedError,
    SignatureInvalidError,
    UnsupportedSealTypeError,
)
from tps_uid.interfaces.crypto import IHasher, INoncer, ISigningKeyLoader, IVerifier
from tps_uid.interfaces.encoding import (
    ICompressor,
    IPayloadFormatter,
    ITimeExtractor,
    ITimestamper,
)

log = logging.getLogger(__name__)


@dataclass
class CryptoConfig:
    """Configuration for cryptographic operations.

    Attributes:
        noncer: Source of per-token nonces.
        verifier: Seal verification implementation; also fixes the seal type
            and signature length.
        key_loader: Turns caller-supplied private key material into a signer.
        hasher: Digest function for canonical token bytes.
    """

    noncer: INoncer
    verifier: IVerifier
    key_loader: ISigningKeyLoader
    hasher: IHasher


@dataclass
class EncodingConfig:
    """Configuration for encoding and time operations.

    Attributes:
        compressor: Payload compressor, or None where compression is
            unavailable.
        time_extractor: Derives an epoch from a payload when the caller gives
            none, or None to require an explicit epoch.
        payload_formatter: Builds payload strings for generate().
        timestamper: Provides the current time.
    """

    compressor: Optional[ICompressor]
    time_extractor: Optional[ITimeExtractor]
    payload_formatter: IPayloadFormatter
    timestamper: ITimestamper


@dataclass
class TpsUidCodecConfig:
    """Configuration for TpsUidCodec.

    Attributes:
        crypto: Cryptographic operation configuration.
        encoding: Encoding and time operation configuration.
    """

    crypto: CryptoConfig
    encoding: EncodingConfig


class TpsUidCodec:
    """Codec for TPS-UID tokens.

    TpsUidCodec handles:
    - Encoding a payload string and instant into a binary token
    - Decoding a binary token back to the exact payload
    - Sealing tokens with a detached signature
    - Verifying sealed tokens before trusting their contents
    - Wrapping tokens in the prefixed base64url text form
    - Minting tokens for the current moment

    The codec holds no mutable state; one instance may be shared freely.

    Attributes:
        _config: Codec configuration containing crypto and encoding providers.
    """

    def __init__(self, config: TpsUidCodecConfig) -> None:
        """Initialize the codec.

        Args:
            config: Codec configuration with all required providers.
        """
        self._config = config

    @classmethod
    def default(cls) -> TpsUidCodec:
        """Build a codec wired to the reference implementations.

        Uses secure random nonces, Ed25519 seals, Blake3 digests, raw deflate
        compression, the UTC system clock and the TPS string collaborators.
        """
        from tps_uid.implementation.crypto import (
            Ed25519KeyLoader,
            Ed25519Verifier,
            Hasher,
            Noncer,
        )
        from tps_uid.implementation.encoding import (
            Deflate,
            TpsFormatter,
            TpsTimeExtractor,
            UtcTimestamper,
        )

        return cls(
            TpsUidCodecConfig(
                crypto=CryptoConfig(
                    noncer=Noncer(),
                    verifier=Ed25519Verifier(),
                    key_loader=Ed25519KeyLoader(),
                    hasher=Hasher(),
                ),
                encoding=EncodingConfig(
                    compressor=Deflate() if Deflate.available() else None,
                    time_extractor=TpsTimeExtractor(),
                    payload_formatter=TpsFormatter(),
                    timestamper=UtcTimestamper(),
                ),
            )
        )

    # Binary form

    def encode(
        self,
        payload: str,
        *,
        compress: bool = False,
        epoch_ms: Optional[int] = None,
    ) -> bytes:
        """Encode a payload string into a binary token.

        Args:
            payload: The payload string. Carried verbatim.
            compress: Raw-deflate the payload block.
            epoch_ms: Header time in milliseconds since the Unix epoch. When
                omitted it is derived from the payload by the configured time
                extractor.

        Returns:
            The binary token.

        Raises:
            MissingTimeError: If epoch_ms is omitted and cannot be derived.
            RangeViolationError: If epoch_ms is not an int in [0, 2**48 - 1].
            CompressionUnavailableError: If compress is set and no compressor
                is available.
        """
        token = self._content(payload, compress, epoch_ms, sealed=False)
        log.debug("encoded token (%d bytes, compressed=%s)", len(token), compress)
        return token

    def decode(self, data: bytes) -> DecodedToken:
        """Decode a binary token.

        Seals are not checked here; use verify_and_decode for sealed tokens
        whose origin matters. Bytes after the payload block are ignored.

        Args:
            data: The binary token.

        Returns:
            The decoded token.

        Raises:
            MalformedInputError: If the buffer is too short, the magic is
                wrong, or the payload is not valid UTF-8.
            UnsupportedVersionError: If the version byte is unknown.
            TruncationError: If the declared length exceeds the buffer.
            VarintTooLongError: If the length varint is oversized.
            CompressionError: If a compressed payload cannot be inflated.
        """
        data = bytes(data)
        header = unpack_header(data)
        payload_start, payload_end = locate_payload(data)

        block = data[payload_start:payload_end]
        if header.flags.is_compressed():
            block = self._inflate(block)

        try:
            payload = block.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedInputError("payload is not valid UTF-8") from e

        return DecodedToken(
            version=header.version,
            epoch_ms=header.epoch_ms,
            compressed=header.flags.is_compressed(),
            sealed=header.flags.is_sealed(),
            nonce=header.nonce,
            payload=payload,
        )

    # Sealing

    def seal(
        self,
        payload: str,
        private_key: Any,
        *,
        compress: bool = False,
        epoch_ms: Optional[int] = None,
    ) -> bytes:
        """Encode and sign a payload string.

        The content is built with the seal flag already set, so the claim
        that the token is sealed is itself covered by the signature.

        Args:
            payload: The payload string.
            private_key: An ISigningKey, or private key material the
                configured key loader accepts.
            compress: Raw-deflate the payload block.
            epoch_ms: Header time; derived from the payload when omitted.

        Returns:
            content || seal type || signature.

        Raises:
            KeyFormatError: If the key material cannot be used for signing.
            MissingTimeError: If epoch_ms is omitted and cannot be derived.
            RangeViolationError: If epoch_ms is out of range.
            CompressionUnavailableError: If compress is set and no compressor
                is available.
        """
        verifier = self._config.crypto.verifier

        try:
            signing_key = self._config.crypto.key_loader.load(private_key)
        except ValueError as e:
            raise KeyFormatError("unusable private key") from e

        content = self._content(payload, compress, epoch_ms, sealed=True)

        try:
            signature = signing_key.sign(content)
        except ValueError as e:
            raise KeyFormatError("signing failed") from e

        if len(signature) != verifier.signature_length:
            raise KeyFormatError(
                f"signer produced {len(signature)} bytes, expected {verifier.signature_length}"
            )

        log.debug("sealed token (%d content bytes, compressed=%s)", len(content), compress)
        return content + bytes([verifier.seal_type]) + signature

    def verify_and_decode(self, data: bytes, public_key: Any) -> DecodedToken:
        """Verify a sealed token and decode it.

        The signature is checked over data[:payload_end] before any header
        field is trusted; only then is the content decoded.

        Args:
            data: The sealed binary token.
            public_key: An IVerificationKey, or public key material the
                configured verifier accepts.

        Returns:
            The decoded token.

        Raises:
            MalformedInputError: If the buffer is too short, the magic is
                wrong, the seal type is unknown, or bytes follow the
                signature.
            UnsupportedVersionError: If the version byte is unknown.
            NotSealedError: If the seal flag is clear.
            TruncationError: If the declared length exceeds the buffer.
            MissingSignatureDataError: If the buffer ends inside the seal.
            SignatureInvalidError: If the signature does not verify under the
                given key, for whatever reason.
        """
        data = bytes(data)
        verifier = self._config.crypto.verifier

        header = unpack_header(data)
        if not header.flags.is_sealed():
            raise NotSealedError("not a sealed token")

        _, payload_end = locate_payload(data)
        seal_end = payload_end + 1 + verifier.signature_length

        if len(data) < seal_end:
            raise MissingSignatureDataError("missing signature data")

        seal_type = data[payload_end]
        if seal_type != verifier.seal_type:
            raise UnsupportedSealTypeError(f"unsupported seal type 0x{seal_type:02x}")

        if len(data) > seal_end:
            raise MalformedInputError("unexpected bytes after signature")

        content = data[:payload_end]
        signature = data[payload_end + 1 : seal_end]

        try:
            verifier.verify(content, signature, public_key)
        except ValueError:
            log.debug("seal verification failed")
            raise SignatureInvalidError("signature verification failed") from None

        return self.decode(content)

    # Text form

    def encode_b64(
        self,
        payload: str,
        *,
        compress: bool = False,
        epoch_ms: Optional[int] = None,
    ) -> str:
        """Encode a payload string straight to the text transport form."""
        return encode_text(self.encode(payload, compress=compress, epoch_ms=epoch_ms))

    def decode_b64(self, text: str) -> DecodedToken:
        """Decode a token from the text transport form.

        Raises:
            MissingPrefixError: If the text lacks the transport prefix.
            MalformedInputError: If the body is not valid base64url.
            TpsUidError: Anything decode() raises.
        """
        return self.decode(decode_text(text))

    def seal_b64(
        self,
        payload: str,
        private_key: Any,
        *,
        compress: bool = False,
        epoch_ms: Optional[int] = None,
    ) -> str:
        """Seal a payload string and return the text transport form."""
        return encode_text(
            self.seal(payload, private_key, compress=compress, epoch_ms=epoch_ms)
        )

    def verify_and_decode_b64(self, text: str, public_key: Any) -> DecodedToken:
        """Verify and decode a sealed token in the text transport form."""
        return self.verify_and_decode(decode_text(text), public_key)

    # Convenience

    def generate(
        self,
        *,
        compress: bool = False,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
        altitude: Optional[float] = None,
    ) -> str:
        """Mint a text-form token for the current moment.

        The clock is read once. The payload describes that moment to whole
        seconds while the header carries it to the millisecond; the header
        time is never re-derived from the payload text.

        Args:
            compress: Raw-deflate the payload block.
            latitude: Optional latitude for the payload.
            longitude: Optional longitude for the payload.
            altitude: Optional altitude in metres for the payload.

        Returns:
            The token in text transport form.
        """
        timestamper = self._config.encoding.timestamper
        now = timestamper.now()

        payload = self._config.encoding.payload_formatter.format(
            now, latitude, longitude, altitude
        )

        return self.encode_b64(payload, compress=compress, epoch_ms=timestamper.epoch_ms(now))

    def digest(self, data: bytes) -> str:
        """Digest a token's canonical binary form.

        Useful as a storage key. The codec itself never deduplicates.
        """
        return self._config.crypto.hasher.sum(bytes(data))

    # Internals

    def _content(
        self,
        payload: str,
        compress: bool,
        epoch_ms: Optional[int],
        sealed: bool,
    ) -> bytes:
        epoch_ms = validate_epoch(self._resolve_epoch(payload, epoch_ms))

        try:
            block = payload.encode("utf-8")
        except UnicodeEncodeError as e:
            raise MalformedInputError("payload is not encodable as UTF-8") from e

        if compress:
            block = self._deflate(block)

        flags = TokenFlags(compressed=compress, sealed=sealed)
        nonce = self._config.crypto.noncer.generate32()

        return pack_content(flags, epoch_ms, nonce, block)

    def _resolve_epoch(self, payload: str, epoch_ms: Optional[int]) -> Any:
        if epoch_ms is not None:
            return epoch_ms

        extractor = self._config.encoding.time_extractor
        if extractor is None:
            raise MissingTimeError("epoch_ms not given and no time extractor configured")

        try:
            return extractor.epoch_ms(payload)
        except ValueError as e:
            raise MissingTimeError("could not derive epoch_ms from payload") from e

    def _deflate(self, data: bytes) -> bytes:
        compressor = self._config.encoding.compressor
        if compressor is None:
            raise CompressionUnavailableError("compression not available")

        try:
            return compressor.compress(data)
        except ValueError as e:
            raise CompressionFailureError("compression failed") from e

    def _inflate(self, data: bytes) -> bytes:
        compressor = self._config.encoding.compressor
        if compressor is None:
            raise CompressionUnavailableError("compression not available")

        try:
            return compressor.decompress(data)
        except ValueError as e:
            raise CompressionFailureError("decompression failed") from e
