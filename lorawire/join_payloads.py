"""Join-request, join-accept, CFList and rejoin-request payloads."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional, Union

from lorawire.fields import ChMask, DLSettings
from lorawire.identifiers import (
    EUI64,
    JoinType,
    LoRaWANError,
    NetID,
    decode_dev_nonce,
    decode_join_nonce,
    encode_dev_nonce,
    encode_join_nonce,
)

_FREQ_LIMIT = 1 << 24


def _encode_u16(name: str, value: int) -> bytes:
    if not 0 <= value <= 0xFFFF:
        raise LoRaWANError(f"{name} must be in the range 0 - 65535")
    return value.to_bytes(2, "little")


def _join_type(value: int) -> int:
    try:
        return JoinType(value)
    except ValueError:
        return value


def _dev_addr(value: bytes) -> bytes:
    raw = bytes(value)
    if len(raw) != 4:
        raise LoRaWANError("DevAddr must be exactly 4 bytes")
    return raw


class CFListType(IntEnum):
    """The kind of content a CFList carries."""

    CHANNEL = 0
    CHANNEL_MASK = 1


@dataclass
class JoinRequestPayload:
    """The join-request message payload."""

    join_eui: EUI64 = field(default_factory=EUI64)
    dev_eui: EUI64 = field(default_factory=EUI64)
    dev_nonce: int = 0

    def to_bytes(self) -> bytes:
        return (
            self.join_eui.to_bytes()
            + self.dev_eui.to_bytes()
            + encode_dev_nonce(self.dev_nonce)
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> JoinRequestPayload:
        if len(data) != 18:
            raise LoRaWANError("18 bytes of data are expected")
        return cls(
            join_eui=EUI64.from_bytes(data[0:8]),
            dev_eui=EUI64.from_bytes(data[8:16]),
            dev_nonce=decode_dev_nonce(data[16:18]),
        )


@dataclass
class CFListChannelPayload:
    """Up to five channel frequencies in Hz, each a multiple of 100."""

    channels: tuple[int, ...] = (0, 0, 0, 0, 0)

    def __post_init__(self) -> None:
        values = tuple(int(c) for c in self.channels)
        if len(values) > 5:
            raise LoRaWANError("a CFList holds at most 5 channels")
        self.channels = values + (0,) * (5 - len(values))

    def to_bytes(self) -> bytes:
        out = bytearray()
        for freq in self.channels:
            if freq < 0:
                raise LoRaWANError("frequency must not be negative")
            if freq % 100:
                raise LoRaWANError("frequency must be a multiple of 100")
            steps = freq // 100
            if steps > _FREQ_LIMIT - 1:
                raise LoRaWANError("max value of frequency is 2^24-1")
            out += steps.to_bytes(3, "little")
        return bytes(out)

    @classmethod
    def from_bytes(cls, data: bytes) -> CFListChannelPayload:
        if len(data) > 15:
            raise LoRaWANError("max length is 15 bytes")
        if len(data) % 3:
            raise LoRaWANError("length must be a multiple of 3")
        channels = tuple(
            int.from_bytes(data[offset : offset + 3], "little") * 100
            for offset in range(0, len(data), 3)
        )
        return cls(channels)


@dataclass
class CFListChannelMaskPayload:
    """A list of channel masks (at most six)."""

    channel_masks: list[ChMask] = field(default_factory=list)

    def to_bytes(self) -> bytes:
        if len(self.channel_masks) > 6:
            raise LoRaWANError("max number of channel-masks is 6")
        return b"".join(mask.to_bytes() for mask in self.channel_masks)

    @classmethod
    def from_bytes(cls, data: bytes) -> CFListChannelMaskPayload:
        if len(data) > 15:
            raise LoRaWANError("max 15 bytes are expected")
        data = bytes(data[: len(data) - len(data) % 2])
        empty = ChMask()
        masks: list[ChMask] = []
        pending: list[ChMask] = []
        # trailing all-zero masks are dropped; zero masks between set ones are kept
        for offset in range(0, len(data), 2):
            mask = ChMask.from_bytes(data[offset : offset + 2])
            pending.append(mask)
            if mask != empty:
                masks.extend(pending)
                pending = []
        return cls(masks)


CFListPayload = Union[CFListChannelPayload, CFListChannelMaskPayload]


@dataclass
class CFList:
    """A list of channel frequencies or channel masks (16 bytes on the wire)."""

    payload: CFListPayload = field(default_factory=CFListChannelPayload)
    cf_list_type: int = CFListType.CHANNEL

    def to_bytes(self) -> bytes:
        if not 0 <= int(self.cf_list_type) <= 0xFF:
            raise LoRaWANError("CFListType must be in the range 0 - 255")
        body = self.payload.to_bytes()
        body = (body + bytes(15))[:15]
        return body + bytes([int(self.cf_list_type)])

    @classmethod
    def from_bytes(cls, data: bytes) -> CFList:
        if len(data) != 16:
            raise LoRaWANError("16 bytes of data are expected")
        try:
            kind: int = CFListType(data[15])
        except ValueError:
            kind = data[15]
        body = bytes(data[:15])
        if kind == CFListType.CHANNEL_MASK:
            payload: CFListPayload = CFListChannelMaskPayload.from_bytes(body)
        else:
            payload = CFListChannelPayload.from_bytes(body)
        return cls(payload=payload, cf_list_type=kind)


@dataclass
class JoinAcceptPayload:
    """The join-accept message payload.

    ``dev_addr`` holds the four address bytes most significant first.
    """

    join_nonce: int = 0
    home_net_id: NetID = field(default_factory=NetID)
    dev_addr: bytes = bytes(4)
    dl_settings: DLSettings = field(default_factory=DLSettings)
    rx_delay: int = 0
    cf_list: Optional[CFList] = None

    def __post_init__(self) -> None:
        self.dev_addr = _dev_addr(self.dev_addr)

    def to_bytes(self) -> bytes:
        if self.rx_delay < 0:
            raise LoRaWANError("RXDelay must not be negative")
        if self.rx_delay > 15:
            raise LoRaWANError("the max value of RXDelay is 15")
        out = (
            encode_join_nonce(self.join_nonce)
            + self.home_net_id.to_bytes()
            + _dev_addr(self.dev_addr)[::-1]
            + self.dl_settings.to_bytes()
            + bytes([self.rx_delay])
        )
        if self.cf_list is not None:
            out += self.cf_list.to_bytes()
        return out

    @classmethod
    def from_bytes(cls, data: bytes) -> JoinAcceptPayload:
        if len(data) not in (12, 28):
            raise LoRaWANError(
                "12 or 28 bytes of data are expected (28 bytes if CFList is present)"
            )
        return cls(
            join_nonce=decode_join_nonce(data[0:3]),
            home_net_id=NetID.from_bytes(data[3:6]),
            dev_addr=bytes(data[6:10])[::-1],
            dl_settings=DLSettings.from_bytes(data[10:11]),
            rx_delay=data[11],
            cf_list=CFList.from_bytes(data[12:]) if len(data) == 28 else None,
        )


@dataclass
class RejoinRequestType02Payload:
    """A rejoin-request of type 0 or 2."""

    rejoin_type: int = JoinType.REJOIN_REQUEST_TYPE_0
    net_id: NetID = field(default_factory=NetID)
    dev_eui: EUI64 = field(default_factory=EUI64)
    rj_count0: int = 0

    def to_bytes(self) -> bytes:
        if self.rejoin_type not in (0, 2):
            raise LoRaWANError("RejoinType must be 0 or 2")
        return (
            bytes([int(self.rejoin_type)])
            + self.net_id.to_bytes()
            + self.dev_eui.to_bytes()
            + _encode_u16("RJCount0", self.rj_count0)
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> RejoinRequestType02Payload:
        if len(data) != 14:
            raise LoRaWANError("14 bytes of data are expected")
        return cls(
            rejoin_type=_join_type(data[0]),
            net_id=NetID.from_bytes(data[1:4]),
            dev_eui=EUI64.from_bytes(data[4:12]),
            rj_count0=int.from_bytes(data[12:14], "little"),
        )


@dataclass
class RejoinRequestType1Payload:
    """A rejoin-request of type 1."""

    rejoin_type: int = JoinType.REJOIN_REQUEST_TYPE_1
    join_eui: EUI64 = field(default_factory=EUI64)
    dev_eui: EUI64 = field(default_factory=EUI64)
    rj_count1: int = 0

    def to_bytes(self) -> bytes:
        if self.rejoin_type != 1:
            raise LoRaWANError("RejoinType must be 1")
        return (
            bytes([int(self.rejoin_type)])
            + self.join_eui.to_bytes()
            + self.dev_eui.to_bytes()
            + _encode_u16("RJCount1", self.rj_count1)
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> RejoinRequestType1Payload:
        if len(data) != 19:
            raise LoRaWANError("19 bytes of data are expected")
        return cls(
            rejoin_type=_join_type(data[0]),
            join_eui=EUI64.from_bytes(data[1:9]),
            dev_eui=EUI64.from_bytes(data[9:17]),
            rj_count1=int.from_bytes(data[17:19], "little"),
        )