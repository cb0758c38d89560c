import pytest

from lorawire.fields import (
    ADRParam,
    ChMask,
    DeviceModeClass,
    DLSettings,
    DwellTime,
    Redundancy,
    Version,
)
from lorawire.identifiers import LoRaWANError


def _mask(*indices):
    return ChMask(tuple(i in indices for i in range(16)))


def test_chmask_empty():
    assert ChMask().to_bytes() == bytes([0, 0])


def test_chmask_marshal():
    assert _mask(0, 1, 12).to_bytes() == bytes([3, 16])


def test_chmask_unmarshal_wrong_size():
    with pytest.raises(LoRaWANError):
        ChMask.from_bytes(bytes([1, 2, 3]))


def test_chmask_unmarshal():
    mask = ChMask.from_bytes(bytes([3, 16]))
    assert mask == _mask(0, 1, 12)
    assert mask[12] is True
    assert mask[2] is False


def test_chmask_short_input_is_padded():
    mask = ChMask((True,) * 8)
    assert mask.to_bytes() == bytes([255, 0])
    assert len(mask.channels) == 16


def test_redundancy_empty():
    assert Redundancy().to_bytes() == bytes([0])


def test_redundancy_limits():
    with pytest.raises(LoRaWANError, match="NbRep"):
        Redundancy(nb_rep=16).to_bytes()
    with pytest.raises(LoRaWANError, match="ChMaskCntl"):
        Redundancy(ch_mask_cntl=8).to_bytes()


def test_redundancy_round_trip():
    assert Redundancy(ch_mask_cntl=1, nb_rep=5).to_bytes() == bytes([21])
    decoded = Redundancy.from_bytes(bytes([21]))
    assert decoded.ch_mask_cntl == 1
    assert decoded.nb_rep == 5


def test_dlsettings_empty():
    assert DLSettings().to_bytes() == bytes([0])


def test_dlsettings_limits():
    with pytest.raises(LoRaWANError):
        DLSettings(rx2_data_rate=16).to_bytes()
    with pytest.raises(LoRaWANError):
        DLSettings(rx1_dr_offset=8).to_bytes()


def test_dlsettings_marshal():
    settings = DLSettings(rx2_data_rate=15, rx1_dr_offset=7, opt_neg=True)
    assert settings.to_bytes() == bytes([255])
    assert settings.to_hex() == "ff"


def test_dlsettings_unmarshal():
    expected = DLSettings(rx2_data_rate=15, rx1_dr_offset=7, opt_neg=True)
    assert DLSettings.from_hex("ff") == expected
    assert DLSettings.from_bytes(bytes([255])) == expected


def test_dlsettings_errors():
    with pytest.raises(LoRaWANError):
        DLSettings.from_bytes(bytes([1, 2]))
    with pytest.raises(LoRaWANError):
        DLSettings.from_hex("zz")


def test_version():
    assert Version(minor=1).to_bytes() == bytes([1])
    assert Version.from_bytes(bytes([1])) == Version(minor=1)
    with pytest.raises(LoRaWANError, match="max value of Minor is 7"):
        Version(minor=8).to_bytes()
    with pytest.raises(LoRaWANError):
        Version.from_bytes(bytes([1, 2]))


def test_adr_param():
    param = ADRParam(limit_exp=10, delay_exp=15)
    assert param.to_bytes() == bytes([175])
    assert ADRParam.from_bytes(bytes([175])) == param
    with pytest.raises(LoRaWANError, match="max value of LimitExp is 15"):
        ADRParam(limit_exp=16).to_bytes()
    with pytest.raises(LoRaWANError, match="max value of DelayExp is 15"):
        ADRParam(delay_exp=16).to_bytes()
    with pytest.raises(LoRaWANError):
        ADRParam.from_bytes(b"")


def test_enums():
    assert DwellTime(1) is DwellTime.DWELL_TIME_400MS
    assert DeviceModeClass(2) is DeviceModeClass.CLASS_C