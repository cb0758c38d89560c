"""Bit-packed fields shared by MAC command and join payloads."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterator

from lorawire.identifiers import LoRaWANError


class DwellTime(IntEnum):
    """Dwell time limit."""

    NO_LIMIT = 0
    DWELL_TIME_400MS = 1


class DeviceModeClass(IntEnum):
    """Device class used in DeviceModeInd / DeviceModeConf."""

    CLASS_A = 0x00
    RFU = 0x01
    CLASS_C = 0x02


def _check_max(name: str, value: int, maximum: int) -> None:
    if value < 0:
        raise LoRaWANError(f"{name} must not be negative")
    if value > maximum:
        raise LoRaWANError(f"max value of {name} is {maximum}")


def _expect_length(data: bytes, size: int) -> None:
    if len(data) != size:
        if size == 1:
            raise LoRaWANError("1 byte of data is expected")
        raise LoRaWANError(f"{size} bytes of data are expected")


def _channel_tuple(channels) -> tuple[bool, ...]:
    values = tuple(bool(c) for c in channels)
    if len(values) > 16:
        raise LoRaWANError("a channel mask holds at most 16 channels")
    return values + (False,) * (16 - len(values))


@dataclass(frozen=True)
class ChMask:
    """Usable uplink channels: index 0 is channel 1, index 15 channel 16."""

    channels: tuple[bool, ...] = field(default=(False,) * 16)

    def __post_init__(self) -> None:
        object.__setattr__(self, "channels", _channel_tuple(self.channels))

    def __getitem__(self, index: int) -> bool:
        return self.channels[index]

    def __iter__(self) -> Iterator[bool]:
        return iter(self.channels)

    def __len__(self) -> int:
        return 16

    def to_bytes(self) -> bytes:
        value = sum(1 << i for i, enabled in enumerate(self.channels) if enabled)
        return value.to_bytes(2, "little")

    @classmethod
    def from_bytes(cls, data: bytes) -> ChMask:
        _expect_length(data, 2)
        value = int.from_bytes(data, "little")
        return cls(tuple(bool(value & (1 << i)) for i in range(16)))


@dataclass
class Redundancy:
    """The redundancy field of LinkADRReq."""

    ch_mask_cntl: int = 0
    nb_rep: int = 0

    def to_bytes(self) -> bytes:
        _check_max("NbRep", self.nb_rep, 15)
        _check_max("ChMaskCntl", self.ch_mask_cntl, 7)
        return bytes([self.nb_rep | (self.ch_mask_cntl << 4)])

    @classmethod
    def from_bytes(cls, data: bytes) -> Redundancy:
        _expect_length(data, 1)
        octet = data[0]
        return cls(ch_mask_cntl=(octet & 0x70) >> 4, nb_rep=octet & 0x0F)


@dataclass
class DLSettings:
    """Downlink settings."""

    opt_neg: bool = False
    rx2_data_rate: int = 0
    rx1_dr_offset: int = 0

    def to_bytes(self) -> bytes:
        _check_max("RX2DataRate", self.rx2_data_rate, 15)
        _check_max("RX1DROffset", self.rx1_dr_offset, 7)
        octet = self.rx2_data_rate | (self.rx1_dr_offset << 4)
        if self.opt_neg:
            octet |= 0x80
        return bytes([octet])

    @classmethod
    def from_bytes(cls, data: bytes) -> DLSettings:
        _expect_length(data, 1)
        octet = data[0]
        return cls(
            opt_neg=bool(octet & 0x80),
            rx2_data_rate=octet & 0x0F,
            rx1_dr_offset=(octet & 0x70) >> 4,
        )

    def to_hex(self) -> str:
        return self.to_bytes().hex()

    @classmethod
    def from_hex(cls, text: str | bytes) -> DLSettings:
        if isinstance(text, bytes):
            text = text.decode("ascii", errors="replace")
        try:
            raw = bytes.fromhex(text)
        except ValueError as exc:
            raise LoRaWANError(f"invalid hex string: {text!r}") from exc
        return cls.from_bytes(raw)


@dataclass
class Version:
    """A LoRaWAN minor version field."""

    minor: int = 0

    def to_bytes(self) -> bytes:
        _check_max("Minor", self.minor, 7)
        return bytes([self.minor])

    @classmethod
    def from_bytes(cls, data: bytes) -> Version:
        _expect_length(data, 1)
        return cls(minor=data[0])


@dataclass
class ADRParam:
    """ADR limit and delay exponents."""

    limit_exp: int = 0
    delay_exp: int = 0

    def to_bytes(self) -> bytes:
        _check_max("LimitExp", self.limit_exp, 15)
        _check_max("DelayExp", self.delay_exp, 15)
        return bytes([self.delay_exp | (self.limit_exp << 4)])

    @classmethod
    def from_bytes(cls, data: bytes) -> ADRParam:
        _expect_length(data, 1)
        octet = data[0]
        return cls(limit_exp=octet >> 4, delay_exp=octet & 0x0F)