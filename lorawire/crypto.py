"""AES-128 keys and the FRMPayload / FOpts encryption schemes."""

from __future__ import annotations

from dataclasses import dataclass

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from lorawire.identifiers import LoRaWANError

_BLOCK = 16


def _aes_encrypt_blocks(key: bytes, data: bytes) -> bytes:
    encryptor = Cipher(algorithms.AES(key), modes.ECB()).encryptor()
    return encryptor.update(data) + encryptor.finalize()


def _wire_dev_addr(dev_addr: bytes) -> bytes:
    raw = bytes(dev_addr)
    if len(raw) != 4:
        raise LoRaWANError("DevAddr must be exactly 4 bytes")
    return raw[::-1]


def _check_f_cnt(f_cnt: int) -> None:
    if not 0 <= f_cnt <= 0xFFFFFFFF:
        raise LoRaWANError("FCnt must be in the range 0 - 2^32-1")


@dataclass(frozen=True)
class AES128Key:
    """A 128 bit AES key, stored in its natural byte order."""

    octets: bytes = bytes(16)

    def __post_init__(self) -> None:
        raw = bytes(self.octets)
        if len(raw) != 16:
            raise LoRaWANError("AES128Key must be exactly 16 bytes")
        object.__setattr__(self, "octets", raw)

    def __str__(self) -> str:
        return self.octets.hex()

    @classmethod
    def from_hex(cls, text: str | bytes) -> AES128Key:
        """Parse a key from its hex text form."""
        if isinstance(text, bytes):
            text = text.decode("ascii", errors="replace")
        try:
            raw = bytes.fromhex(text)
        except ValueError as exc:
            raise LoRaWANError(f"invalid hex string: {text!r}") from exc
        if len(raw) != 16:
            raise LoRaWANError("exactly 16 bytes are expected")
        return cls(raw)

    def to_bytes(self) -> bytes:
        """Encode into wire form (little endian)."""
        return self.octets[::-1]

    @classmethod
    def from_bytes(cls, data: bytes) -> AES128Key:
        """Decode from wire form (little endian)."""
        if len(data) != 16:
            raise LoRaWANError("16 bytes of data are expected")
        return cls(bytes(data)[::-1])

    @classmethod
    def from_raw(cls, data: object) -> AES128Key:
        """Build from stored bytes in their natural order."""
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise LoRaWANError("bytes type expected")
        raw = bytes(data)
        if len(raw) != 16:
            raise LoRaWANError("bytes must have length 16")
        return cls(raw)


def encrypt_frm_payload(
    key: AES128Key, uplink: bool, dev_addr: bytes, f_cnt: int, data: bytes
) -> bytes:
    """Encrypt (or, identically, decrypt) FRMPayload bytes.

    ``dev_addr`` holds the four address bytes most significant first.
    """
    _check_f_cnt(f_cnt)
    raw = bytes(data)
    block_count = -(-len(raw) // _BLOCK)

    header = bytearray(_BLOCK)
    header[0] = 0x01
    if not uplink:
        header[5] = 0x01
    header[6:10] = _wire_dev_addr(dev_addr)
    header[10:14] = f_cnt.to_bytes(4, "little")

    blocks = bytearray()
    for counter in range(1, block_count + 1):
        header[15] = counter & 0xFF
        blocks += header
    keystream = _aes_encrypt_blocks(key.octets, bytes(blocks)) if blocks else b""
    return bytes(a ^ b for a, b in zip(raw, keystream))


def encrypt_fopts(
    nwk_s_enc_key: AES128Key,
    a_f_cnt_down: bool,
    uplink: bool,
    dev_addr: bytes,
    f_cnt: int,
    data: bytes,
) -> bytes:
    """Encrypt (or decrypt) the FOpts MAC command bytes.

    Uplink uses FCntUp with ``a_f_cnt_down`` false; downlink without FPort or
    with FPort 0 uses NFCntDown with ``a_f_cnt_down`` false; downlink with
    FPort above 0 uses AFCntDown with ``a_f_cnt_down`` true.
    """
    raw = bytes(data)
    if len(raw) > 15:
        raise LoRaWANError("max size of FOpts is 15 bytes")
    _check_f_cnt(f_cnt)

    header = bytearray(_BLOCK)
    header[0] = 0x01
    header[4] = 0x02 if a_f_cnt_down else 0x01
    if not uplink:
        header[5] = 0x01
    header[6:10] = _wire_dev_addr(dev_addr)
    header[10:14] = f_cnt.to_bytes(4, "little")
    header[15] = 0x01

    keystream = _aes_encrypt_blocks(nwk_s_enc_key.octets, bytes(header))
    return bytes(a ^ b for a, b in zip(raw, keystream))