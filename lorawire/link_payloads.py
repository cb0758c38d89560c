"""Payloads of the Class-A link-layer MAC commands."""

from __future__ import annotations

from dataclasses import dataclass, field

from lorawire.fields import ChMask, DLSettings, DwellTime, Redundancy
from lorawire.identifiers import LoRaWANError

_MAX_EIRP_TABLE = (8, 10, 12, 13, 14, 16, 18, 20, 21, 24, 26, 27, 29, 30, 33, 36)
_FREQ_LIMIT = 1 << 24


def _expect_length(data: bytes, size: int) -> None:
    if len(data) != size:
        if size == 1:
            raise LoRaWANError("1 byte of data is expected")
        raise LoRaWANError(f"{size} bytes of data are expected")


def _check_max(name: str, value: int, maximum: int) -> None:
    if value < 0:
        raise LoRaWANError(f"{name} must not be negative")
    if value > maximum:
        raise LoRaWANError(f"max value of {name} is {maximum}")


def _check_byte(name: str, value: int) -> None:
    if not 0 <= value <= 0xFF:
        raise LoRaWANError(f"{name} must be in the range 0 - 255")


def _encode_frequency(name: str, value: int) -> bytes:
    """Encode a frequency in Hz as three little-endian bytes of 100 Hz steps."""
    if value < 0:
        raise LoRaWANError(f"{name} must not be negative")
    if value // 100 >= _FREQ_LIMIT:
        raise LoRaWANError(f"max value of {name} is 2^24 - 1")
    if value % 100:
        raise LoRaWANError(f"{name} must be a multiple of 100")
    return (value // 100).to_bytes(3, "little")


def _decode_frequency(data: bytes) -> int:
    return int.from_bytes(data, "little") * 100


@dataclass
class LinkCheckAnsPayload:
    """LinkCheckAns: link margin and gateway count."""

    margin: int = 0
    gw_cnt: int = 0

    def to_bytes(self) -> bytes:
        _check_byte("Margin", self.margin)
        _check_byte("GwCnt", self.gw_cnt)
        return bytes([self.margin, self.gw_cnt])

    @classmethod
    def from_bytes(cls, data: bytes) -> LinkCheckAnsPayload:
        _expect_length(data, 2)
        return cls(margin=data[0], gw_cnt=data[1])


@dataclass
class LinkADRReqPayload:
    """LinkADRReq: data rate, TX power, channel mask and redundancy."""

    data_rate: int = 0
    tx_power: int = 0
    ch_mask: ChMask = field(default_factory=ChMask)
    redundancy: Redundancy = field(default_factory=Redundancy)

    def to_bytes(self) -> bytes:
        _check_max("DataRate", self.data_rate, 15)
        _check_max("TXPower", self.tx_power, 15)
        mask = self.ch_mask.to_bytes()
        redundancy = self.redundancy.to_bytes()
        return bytes([self.tx_power | (self.data_rate << 4)]) + mask + redundancy

    @classmethod
    def from_bytes(cls, data: bytes) -> LinkADRReqPayload:
        _expect_length(data, 4)
        return cls(
            data_rate=(data[0] & 0xF0) >> 4,
            tx_power=data[0] & 0x0F,
            ch_mask=ChMask.from_bytes(data[1:3]),
            redundancy=Redundancy.from_bytes(data[3:4]),
        )


@dataclass
class LinkADRAnsPayload:
    """LinkADRAns: acknowledgement bits."""

    channel_mask_ack: bool = False
    data_rate_ack: bool = False
    power_ack: bool = False

    def to_bytes(self) -> bytes:
        octet = (
            (0x01 if self.channel_mask_ack else 0)
            | (0x02 if self.data_rate_ack else 0)
            | (0x04 if self.power_ack else 0)
        )
        return bytes([octet])

    @classmethod
    def from_bytes(cls, data: bytes) -> LinkADRAnsPayload:
        _expect_length(data, 1)
        octet = data[0]
        return cls(
            channel_mask_ack=bool(octet & 0x01),
            data_rate_ack=bool(octet & 0x02),
            power_ack=bool(octet & 0x04),
        )


@dataclass
class DutyCycleReqPayload:
    """DutyCycleReq: maximum aggregated duty cycle."""

    max_d_cycle: int = 0

    def to_bytes(self) -> bytes:
        _check_byte("MaxDCycle", self.max_d_cycle)
        if 15 < self.max_d_cycle < 255:
            raise LoRaWANError("only a MaxDCycle value of 0 - 15 and 255 is allowed")
        return bytes([self.max_d_cycle])

    @classmethod
    def from_bytes(cls, data: bytes) -> DutyCycleReqPayload:
        _expect_length(data, 1)
        return cls(max_d_cycle=data[0])


@dataclass
class RXParamSetupReqPayload:
    """RXParamSetupReq: RX2 frequency and downlink settings."""

    frequency: int = 0
    dl_settings: DLSettings = field(default_factory=DLSettings)

    def to_bytes(self) -> bytes:
        freq = _encode_frequency("Frequency", self.frequency)
        return self.dl_settings.to_bytes() + freq

    @classmethod
    def from_bytes(cls, data: bytes) -> RXParamSetupReqPayload:
        _expect_length(data, 4)
        return cls(
            frequency=_decode_frequency(data[1:4]),
            dl_settings=DLSettings.from_bytes(data[0:1]),
        )


@dataclass
class RXParamSetupAnsPayload:
    """RXParamSetupAns: acknowledgement bits."""

    channel_ack: bool = False
    rx2_data_rate_ack: bool = False
    rx1_dr_offset_ack: bool = False

    def to_bytes(self) -> bytes:
        octet = (
            (0x01 if self.channel_ack else 0)
            | (0x02 if self.rx2_data_rate_ack else 0)
            | (0x04 if self.rx1_dr_offset_ack else 0)
        )
        return bytes([octet])

    @classmethod
    def from_bytes(cls, data: bytes) -> RXParamSetupAnsPayload:
        _expect_length(data, 1)
        octet = data[0]
        return cls(
            channel_ack=bool(octet & 0x01),
            rx2_data_rate_ack=bool(octet & 0x02),
            rx1_dr_offset_ack=bool(octet & 0x04),
        )


@dataclass
class DevStatusAnsPayload:
    """DevStatusAns: battery level and demodulation margin (-32 to 31)."""

    battery: int = 0
    margin: int = 0

    def to_bytes(self) -> bytes:
        _check_byte("Battery", self.battery)
        if self.margin < -32:
            raise LoRaWANError("min value of Margin is -32")
        if self.margin > 31:
            raise LoRaWANError("max value of Margin is 31")
        margin = 64 + self.margin if self.margin < 0 else self.margin
        return bytes([self.battery, margin])

    @classmethod
    def from_bytes(cls, data: bytes) -> DevStatusAnsPayload:
        _expect_length(data, 2)
        raw = data[1]
        signed = raw - 256 if raw > 127 else raw
        if raw > 31:
            # 8-bit signed arithmetic, wrapping as the field is a single octet
            signed = ((signed - 64 + 128) % 256) - 128
        return cls(battery=data[0], margin=signed)


@dataclass
class NewChannelReqPayload:
    """NewChannelReq: channel index, frequency and data-rate range."""

    ch_index: int = 0
    freq: int = 0
    max_dr: int = 0
    min_dr: int = 0

    def to_bytes(self) -> bytes:
        freq = _encode_frequency("Freq", self.freq)
        _check_max("MaxDR", self.max_dr, 15)
        _check_max("MinDR", self.min_dr, 15)
        _check_byte("ChIndex", self.ch_index)
        return bytes([self.ch_index]) + freq + bytes([self.min_dr | (self.max_dr << 4)])

    @classmethod
    def from_bytes(cls, data: bytes) -> NewChannelReqPayload:
        _expect_length(data, 5)
        return cls(
            ch_index=data[0],
            freq=_decode_frequency(data[1:4]),
            max_dr=(data[4] & 0xF0) >> 4,
            min_dr=data[4] & 0x0F,
        )


@dataclass
class NewChannelAnsPayload:
    """NewChannelAns: acknowledgement bits."""

    channel_frequency_ok: bool = False
    data_rate_range_ok: bool = False

    def to_bytes(self) -> bytes:
        octet = (0x01 if self.channel_frequency_ok else 0) | (
            0x02 if self.data_rate_range_ok else 0
        )
        return bytes([octet])

    @classmethod
    def from_bytes(cls, data: bytes) -> NewChannelAnsPayload:
        _expect_length(data, 1)
        octet = data[0]
        return cls(
            channel_frequency_ok=bool(octet & 0x01),
            data_rate_range_ok=bool(octet & 0x02),
        )


@dataclass
class RXTimingSetupReqPayload:
    """RXTimingSetupReq: RX1 delay in seconds (0 and 1 both mean 1 s)."""

    delay: int = 0

    def to_bytes(self) -> bytes:
        _check_max("Delay", self.delay, 15)
        return bytes([self.delay])

    @classmethod
    def from_bytes(cls, data: bytes) -> RXTimingSetupReqPayload:
        _expect_length(data, 1)
        return cls(delay=data[0])


@dataclass
class TXParamSetupReqPayload:
    """TXParamSetupReq: dwell times and maximum EIRP."""

    downlink_dwell_time: DwellTime = DwellTime.NO_LIMIT
    uplink_dwell_time: DwellTime = DwellTime.NO_LIMIT
    max_eirp: int = 0

    def to_bytes(self) -> bytes:
        matches = [i for i, v in enumerate(_MAX_EIRP_TABLE) if v == self.max_eirp]
        octet = matches[-1] if matches else 0
        if octet == 0:
            raise LoRaWANError("invalid MaxEIRP value")
        if self.uplink_dwell_time == DwellTime.DWELL_TIME_400MS:
            octet |= 0x10
        if self.downlink_dwell_time == DwellTime.DWELL_TIME_400MS:
            octet |= 0x20
        return bytes([octet])

    @classmethod
    def from_bytes(cls, data: bytes) -> TXParamSetupReqPayload:
        _expect_length(data, 1)
        octet = data[0]
        return cls(
            downlink_dwell_time=(
                DwellTime.DWELL_TIME_400MS if octet & 0x20 else DwellTime.NO_LIMIT
            ),
            uplink_dwell_time=(
                DwellTime.DWELL_TIME_400MS if octet & 0x10 else DwellTime.NO_LIMIT
            ),
            max_eirp=_MAX_EIRP_TABLE[octet & 0x0F],
        )


@dataclass
class DLChannelReqPayload:
    """DLChannelReq: channel index and downlink frequency."""

    ch_index: int = 0
    freq: int = 0

    def to_bytes(self) -> bytes:
        freq = _encode_frequency("Freq", self.freq)
        _check_byte("ChIndex", self.ch_index)
        return bytes([self.ch_index]) + freq

    @classmethod
    def from_bytes(cls, data: bytes) -> DLChannelReqPayload:
        _expect_length(data, 4)
        return cls(ch_index=data[0], freq=_decode_frequency(data[1:4]))


@dataclass
class DLChannelAnsPayload:
    """DLChannelAns: acknowledgement bits."""

    uplink_frequency_exists: bool = False
    channel_frequency_ok: bool = False

    def to_bytes(self) -> bytes:
        octet = (0x01 if self.channel_frequency_ok else 0) | (
            0x02 if self.uplink_frequency_exists else 0
        )
        return bytes([octet])

    @classmethod
    def from_bytes(cls, data: bytes) -> DLChannelAnsPayload:
        _expect_length(data, 1)
        octet = data[0]
        return cls(
            uplink_frequency_exists=bool(octet & 0x02),
            channel_frequency_ok=bool(octet & 0x01),
        )