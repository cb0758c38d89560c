import pytest

from lorawire.crypto import AES128Key, encrypt_fopts, encrypt_frm_payload
from lorawire.identifiers import LoRaWANError

KEY_ONES = AES128Key(bytes([1] * 16))
KEY_DESC = AES128Key(bytes(range(16, 0, -1)))
DEV_ADDR = bytes([1, 2, 3, 4])


def test_key_str_and_hex_round_trip():
    key = AES128Key(bytes([1, 2, 3, 4, 5, 6, 7, 8] * 2))
    assert str(key) == "01020304050607080102030405060708"
    assert AES128Key.from_hex("01020304050607080102030405060708") == key


def test_key_from_hex_bytes_input():
    key = AES128Key.from_hex(b"00112233445566778899aabbccddeeff")
    assert key.octets == bytes.fromhex("00112233445566778899aabbccddeeff")


def test_key_from_raw():
    raw = bytes(range(1, 17))
    assert AES128Key.from_raw(raw).octets == raw


def test_key_from_raw_rejects_other_types():
    with pytest.raises(LoRaWANError):
        AES128Key.from_raw("not bytes")


def test_key_from_raw_rejects_wrong_length():
    with pytest.raises(LoRaWANError):
        AES128Key.from_raw(bytes(15))


def test_key_binary_is_little_endian():
    key = AES128Key(bytes(range(1, 17)))
    assert key.to_bytes() == bytes(range(16, 0, -1))
    assert AES128Key.from_bytes(key.to_bytes()) == key


def test_key_from_bytes_wrong_length():
    with pytest.raises(LoRaWANError):
        AES128Key.from_bytes(bytes(3))


def test_key_from_hex_invalid():
    with pytest.raises(LoRaWANError):
        AES128Key.from_hex("zz")
    with pytest.raises(LoRaWANError):
        AES128Key.from_hex("0102")


@pytest.mark.parametrize(
    "key,uplink,f_cnt,plain,cipher",
    [
        (KEY_ONES, True, 1, b"hello", bytes([166, 148, 100, 38, 21])),
        (KEY_ONES, True, 0, bytes([2, 3, 5]), bytes([105, 54, 158])),
        (KEY_DESC, True, 0, bytes([1, 2, 3, 4]), bytes([226, 100, 212, 247])),
        (KEY_DESC, False, 0, bytes([1, 2, 3, 4]), bytes([240, 180, 104, 221])),
    ],
)
def test_encrypt_frm_payload_vectors(key, uplink, f_cnt, plain, cipher):
    assert encrypt_frm_payload(key, uplink, DEV_ADDR, f_cnt, plain) == cipher
    assert encrypt_frm_payload(key, uplink, DEV_ADDR, f_cnt, cipher) == plain


def test_encrypt_frm_payload_long_round_trip():
    plain = bytes(range(40))
    cipher = encrypt_frm_payload(KEY_ONES, True, DEV_ADDR, 7, plain)
    assert len(cipher) == 40
    assert cipher != plain
    assert encrypt_frm_payload(KEY_ONES, True, DEV_ADDR, 7, cipher) == plain


def test_encrypt_frm_payload_empty():
    assert encrypt_frm_payload(KEY_ONES, True, DEV_ADDR, 0, b"") == b""


def test_encrypt_frm_payload_bad_dev_addr():
    with pytest.raises(LoRaWANError):
        encrypt_frm_payload(KEY_ONES, True, bytes(3), 0, b"a")


def test_encrypt_fopts_nfcnt_down():
    key = AES128Key(bytes([2] * 15 + [4]))
    assert encrypt_fopts(key, False, False, DEV_ADDR, 0, bytes([2, 7, 1])) == bytes(
        [223, 180, 241]
    )


def test_encrypt_fopts_afcnt_down():
    key = AES128Key(bytes([1] * 14 + [2, 0]))
    assert encrypt_fopts(key, True, False, DEV_ADDR, 0, bytes([2, 7, 1])) == bytes(
        [34, 172, 10]
    )


def test_encrypt_fopts_round_trip():
    plain = bytes(range(15))
    cipher = encrypt_fopts(KEY_ONES, False, True, DEV_ADDR, 3, plain)
    assert encrypt_fopts(KEY_ONES, False, True, DEV_ADDR, 3, cipher) == plain


def test_encrypt_fopts_too_long():
    with pytest.raises(LoRaWANError):
        encrypt_fopts(KEY_ONES, False, True, DEV_ADDR, 0, bytes(16))