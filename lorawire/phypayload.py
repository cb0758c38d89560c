"""The physical payload, its MAC header, join MICs and join-accept encryption."""

from __future__ import annotations

import base64
import binascii
import hmac
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional, Protocol

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.primitives.cmac import CMAC

from lorawire.crypto import AES128Key
from lorawire.identifiers import (
    EUI64,
    DataPayload,
    JoinType,
    LoRaWANError,
    encode_dev_nonce,
)
from lorawire.join_payloads import (
    JoinAcceptPayload,
    JoinRequestPayload,
    RejoinRequestType02Payload,
    RejoinRequestType1Payload,
)


class _Payload(Protocol):
    def to_bytes(self) -> bytes: ...


class MType(IntEnum):
    """Message type."""

    JOIN_REQUEST = 0
    JOIN_ACCEPT = 1
    UNCONFIRMED_DATA_UP = 2
    UNCONFIRMED_DATA_DOWN = 3
    CONFIRMED_DATA_UP = 4
    CONFIRMED_DATA_DOWN = 5
    REJOIN_REQUEST = 6
    PROPRIETARY = 7


class Major(IntEnum):
    """Major version of the data message."""

    LORAWAN_R1 = 0


class MACVersion(IntEnum):
    """LoRaWAN MAC version."""

    LORAWAN_1_0 = 0
    LORAWAN_1_1 = 1


def _major(value: int) -> int:
    try:
        return Major(value)
    except ValueError:
        return value


def _cmac(key: AES128Key, *parts: bytes) -> bytes:
    mac = CMAC(algorithms.AES(key.octets))
    for part in parts:
        mac.update(part)
    return mac.finalize()


def _aes_ecb(key: AES128Key, data: bytes, *, decrypt: bool) -> bytes:
    cipher = Cipher(algorithms.AES(key.octets), modes.ECB())
    context = cipher.decryptor() if decrypt else cipher.encryptor()
    return context.update(data) + context.finalize()


@dataclass
class MHDR:
    """The MAC header."""

    mtype: MType = MType.JOIN_REQUEST
    major: int = Major.LORAWAN_R1

    def to_bytes(self) -> bytes:
        if not 0 <= int(self.mtype) <= 7:
            raise LoRaWANError("MType must be in the range 0 - 7")
        if not 0 <= int(self.major) <= 3:
            raise LoRaWANError("Major must be in the range 0 - 3")
        return bytes([int(self.major) | (int(self.mtype) << 5)])

    @classmethod
    def from_bytes(cls, data: bytes) -> MHDR:
        if len(data) != 1:
            raise LoRaWANError("1 byte of data is expected")
        return cls(mtype=MType((data[0] & 0xE0) >> 5), major=_major(data[0] & 0x03))


_UPLINK_TYPES = frozenset(
    {
        MType.JOIN_REQUEST,
        MType.UNCONFIRMED_DATA_UP,
        MType.CONFIRMED_DATA_UP,
        MType.REJOIN_REQUEST,
    }
)


@dataclass
class PHYPayload:
    """The physical payload: MAC header, MAC payload and 4-byte MIC.

    Join-accept payloads arrive encrypted and are held as a DataPayload until
    decrypted. Data frames and proprietary frames are kept as an opaque
    DataPayload.
    """

    mhdr: MHDR = field(default_factory=MHDR)
    mac_payload: Optional[_Payload] = None
    mic: bytes = bytes(4)

    def __post_init__(self) -> None:
        self.mic = self._checked_mic(self.mic)

    @staticmethod
    def _checked_mic(mic: bytes) -> bytes:
        raw = bytes(mic)
        if len(raw) != 4:
            raise LoRaWANError("MIC must be exactly 4 bytes")
        return raw

    def is_uplink(self) -> bool:
        """Whether the frame travels uplink; proprietary frames count as downlink."""
        return self.mhdr.mtype in _UPLINK_TYPES

    def to_bytes(self) -> bytes:
        if self.mac_payload is None:
            raise LoRaWANError("MACPayload should not be None")
        return (
            self.mhdr.to_bytes()
            + self.mac_payload.to_bytes()
            + self._checked_mic(self.mic)
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> PHYPayload:
        raw = bytes(data)
        if len(raw) < 5:
            raise LoRaWANError("at least 5 bytes needed to decode PHYPayload")
        mhdr = MHDR.from_bytes(raw[0:1])
        body = raw[1:-4]
        payload: _Payload
        if mhdr.mtype == MType.JOIN_REQUEST:
            payload = JoinRequestPayload.from_bytes(body)
        elif mhdr.mtype == MType.REJOIN_REQUEST:
            if raw[1] in (0, 2):
                payload = RejoinRequestType02Payload.from_bytes(body)
            elif raw[1] == 1:
                payload = RejoinRequestType1Payload.from_bytes(body)
            else:
                raise LoRaWANError(f"invalid RejoinType {raw[1]}")
        else:
            payload = DataPayload.from_bytes(body)
        return cls(mhdr=mhdr, mac_payload=payload, mic=raw[-4:])

    def to_text(self) -> str:
        """Encode as base64 text."""
        return base64.b64encode(self.to_bytes()).decode("ascii")

    @classmethod
    def from_text(cls, text: str | bytes) -> PHYPayload:
        """Decode from base64 text."""
        try:
            raw = base64.b64decode(text, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise LoRaWANError(f"invalid base64 text: {exc}") from exc
        return cls.from_bytes(raw)

    def _uplink_join_mic(self, key: AES128Key) -> bytes:
        if self.mac_payload is None:
            raise LoRaWANError("MACPayload must not be empty")
        return _cmac(key, self.mhdr.to_bytes(), self.mac_payload.to_bytes())[:4]

    def set_uplink_join_mic(self, key: AES128Key) -> None:
        """Compute and store the MIC of a join- or rejoin-request."""
        self.mic = self._uplink_join_mic(key)

    def validate_uplink_join_mic(self, key: AES128Key) -> bool:
        """Check the MIC of a join- or rejoin-request."""
        return hmac.compare_digest(self._uplink_join_mic(key), self.mic)

    def _downlink_join_mic(
        self, join_req_type: int, join_eui: EUI64, dev_nonce: int, key: AES128Key
    ) -> bytes:
        if self.mac_payload is None:
            raise LoRaWANError("MACPayload must not be empty")
        if not isinstance(self.mac_payload, JoinAcceptPayload):
            raise LoRaWANError("MACPayload field must be of type JoinAcceptPayload")
        prefix = b""
        if self.mac_payload.dl_settings.opt_neg:
            if not 0 <= int(join_req_type) <= 0xFF:
                raise LoRaWANError("JoinType must be in the range 0 - 255")
            prefix = (
                bytes([int(join_req_type)])
                + join_eui.to_bytes()
                + encode_dev_nonce(dev_nonce)
            )
        return _cmac(
            key, prefix, self.mhdr.to_bytes(), self.mac_payload.to_bytes()
        )[:4]

    def set_downlink_join_mic(
        self, join_req_type: int, join_eui: EUI64, dev_nonce: int, key: AES128Key
    ) -> None:
        """Compute and store the MIC of a (plaintext) join-accept."""
        self.mic = self._downlink_join_mic(join_req_type, join_eui, dev_nonce, key)

    def validate_downlink_join_mic(
        self, join_req_type: int, join_eui: EUI64, dev_nonce: int, key: AES128Key
    ) -> bool:
        """Check the MIC of a decrypted join-accept."""
        expected = self._downlink_join_mic(join_req_type, join_eui, dev_nonce, key)
        return hmac.compare_digest(expected, self.mic)

    def encrypt_join_accept_payload(self, key: AES128Key) -> None:
        """Encrypt the join-accept payload together with its MIC.

        The MIC must be set first. Use NwkKey for a join-request answer and
        JSEncKey for a rejoin-request answer.
        """
        if not isinstance(self.mac_payload, JoinAcceptPayload):
            raise LoRaWANError("MACPayload value must be of type JoinAcceptPayload")
        plaintext = self.mac_payload.to_bytes() + self.mic
        if len(plaintext) % 16:
            raise LoRaWANError("plaintext must be a multiple of 16 bytes")
        ciphertext = _aes_ecb(key, plaintext, decrypt=True)
        self.mac_payload = DataPayload(ciphertext[:-4])
        self.mic = ciphertext[-4:]

    def decrypt_join_accept_payload(self, key: AES128Key) -> None:
        """Decrypt the join-accept payload and its MIC; do this before validating."""
        if not isinstance(self.mac_payload, DataPayload):
            raise LoRaWANError("MACPayload must be of type DataPayload")
        ciphertext = bytes(self.mac_payload.data) + self.mic
        if len(ciphertext) % 16:
            raise LoRaWANError("plaintext must be a multiple of 16 bytes")
        plaintext = _aes_ecb(key, ciphertext, decrypt=False)
        self.mac_payload = JoinAcceptPayload.from_bytes(plaintext[:-4])
        self.mic = plaintext[-4:]


__all__ = [
    "MType",
    "Major",
    "MACVersion",
    "MHDR",
    "PHYPayload",
    "JoinType",
]