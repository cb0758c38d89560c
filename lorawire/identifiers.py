"""Network identifiers, EUIs, nonces and the raw data payload."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class LoRaWANError(ValueError):
    """Raised when a LoRaWAN structure cannot be encoded or decoded."""


class JoinType(IntEnum):
    """The join-request type."""

    JOIN_REQUEST = 0xFF
    REJOIN_REQUEST_TYPE_0 = 0x00
    REJOIN_REQUEST_TYPE_1 = 0x01
    REJOIN_REQUEST_TYPE_2 = 0x02


def _parse_hex(text: str | bytes, size: int) -> bytes:
    if isinstance(text, bytes):
        text = text.decode("ascii", errors="replace")
    try:
        raw = bytes.fromhex(text)
    except ValueError as exc:
        raise LoRaWANError(f"invalid hex string: {text!r}") from exc
    if len(raw) != size:
        raise LoRaWANError(f"exactly {size} bytes are expected")
    return raw


def _from_raw(data: object, size: int) -> bytes:
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise LoRaWANError("bytes type expected")
    raw = bytes(data)
    if len(raw) != size:
        raise LoRaWANError(f"bytes must have length {size}")
    return raw


def _reversed_exact(data: bytes, size: int) -> bytes:
    raw = bytes(data)
    if len(raw) != size:
        raise LoRaWANError(f"{size} bytes of data are expected")
    return raw[::-1]


@dataclass(frozen=True)
class NetID:
    """A 3-byte network identifier, stored most significant byte first."""

    octets: bytes = bytes(3)

    def __post_init__(self) -> None:
        raw = bytes(self.octets)
        if len(raw) != 3:
            raise LoRaWANError("NetID must be exactly 3 bytes")
        object.__setattr__(self, "octets", raw)

    def type(self) -> int:
        """Return the NetID type (the three most significant bits)."""
        return self.octets[0] >> 5

    def id(self) -> bytes:
        """Return the NetID ID part, which depends on the type."""
        kind = self.type()
        if kind in (0, 1):
            bits = 6
        elif kind == 2:
            bits = 9
        else:
            bits = 21
        value = int.from_bytes(self.octets, "big") & ((1 << bits) - 1)
        length = (bits + 7) // 8
        return value.to_bytes(length, "big")

    def __str__(self) -> str:
        return self.octets.hex()

    @classmethod
    def from_hex(cls, text: str | bytes) -> NetID:
        """Parse a NetID from its hex text form."""
        return cls(_parse_hex(text, 3))

    def to_bytes(self) -> bytes:
        """Encode into wire form (little endian)."""
        return self.octets[::-1]

    @classmethod
    def from_bytes(cls, data: bytes) -> NetID:
        """Decode from wire form (little endian)."""
        return cls(_reversed_exact(data, 3))

    @classmethod
    def from_raw(cls, data: object) -> NetID:
        """Build from stored bytes in their natural (big endian) order."""
        return cls(_from_raw(data, 3))


@dataclass(frozen=True)
class EUI64:
    """An 8-byte extended unique identifier, stored most significant byte first."""

    octets: bytes = bytes(8)

    def __post_init__(self) -> None:
        raw = bytes(self.octets)
        if len(raw) != 8:
            raise LoRaWANError("EUI64 must be exactly 8 bytes")
        object.__setattr__(self, "octets", raw)

    def __str__(self) -> str:
        return self.octets.hex()

    @classmethod
    def from_hex(cls, text: str | bytes) -> EUI64:
        """Parse an EUI64 from its hex text form."""
        return cls(_parse_hex(text, 8))

    def to_bytes(self) -> bytes:
        """Encode into wire form (little endian)."""
        return self.octets[::-1]

    @classmethod
    def from_bytes(cls, data: bytes) -> EUI64:
        """Decode from wire form (little endian)."""
        return cls(_reversed_exact(data, 8))

    @classmethod
    def from_raw(cls, data: object) -> EUI64:
        """Build from stored bytes in their natural (big endian) order."""
        return cls(_from_raw(data, 8))


def encode_dev_nonce(value: int) -> bytes:
    """Encode a dev-nonce as two little-endian bytes."""
    if not 0 <= value <= 0xFFFF:
        raise LoRaWANError("DevNonce must be in the range 0 - 65535")
    return value.to_bytes(2, "little")


def decode_dev_nonce(data: bytes) -> int:
    """Decode a dev-nonce from two little-endian bytes."""
    if len(data) != 2:
        raise LoRaWANError("2 bytes are expected")
    return int.from_bytes(data, "little")


def encode_join_nonce(value: int) -> bytes:
    """Encode a join-nonce as three little-endian bytes."""
    if value < 0:
        raise LoRaWANError("JoinNonce must not be negative")
    if value >= 1 << 24:
        raise LoRaWANError("max value is 2^24 - 1 (16777215)")
    return value.to_bytes(3, "little")


def decode_join_nonce(data: bytes) -> int:
    """Decode a join-nonce from three little-endian bytes."""
    if len(data) != 3:
        raise LoRaWANError("3 bytes are expected")
    return int.from_bytes(data, "little")


@dataclass
class DataPayload:
    """An opaque run of bytes."""

    data: bytes = b""

    def to_bytes(self) -> bytes:
        return bytes(self.data)

    @classmethod
    def from_bytes(cls, data: bytes) -> DataPayload:
        return cls(bytes(data))