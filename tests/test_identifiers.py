import pytest

from lorawire.identifiers import (
    EUI64,
    DataPayload,
    JoinType,
    LoRaWANError,
    NetID,
    decode_dev_nonce,
    decode_join_nonce,
    encode_dev_nonce,
    encode_join_nonce,
)

NETID_CASES = [
    (bytes([0, 0, 109]), 0, bytes([45]), bytes([109, 0, 0]), "00006d"),
    (bytes([32, 0, 109]), 1, bytes([45]), bytes([109, 0, 32]), "20006d"),
    (bytes([64, 3, 109]), 2, bytes([1, 109]), bytes([109, 3, 64]), "40036d"),
    (bytes([118, 219, 109]), 3, bytes([22, 219, 109]), bytes([109, 219, 118]), "76db6d"),
    (bytes([150, 219, 109]), 4, bytes([22, 219, 109]), bytes([109, 219, 150]), "96db6d"),
    (bytes([182, 219, 109]), 5, bytes([22, 219, 109]), bytes([109, 219, 182]), "b6db6d"),
    (bytes([214, 219, 109]), 6, bytes([22, 219, 109]), bytes([109, 219, 214]), "d6db6d"),
    (bytes([246, 219, 109]), 7, bytes([22, 219, 109]), bytes([109, 219, 246]), "f6db6d"),
]


@pytest.mark.parametrize("octets,kind,ident,wire,text", NETID_CASES)
def test_netid(octets, kind, ident, wire, text):
    net_id = NetID(octets)
    assert net_id.type() == kind
    assert net_id.id() == ident
    assert net_id.to_bytes() == wire
    assert NetID.from_bytes(wire) == net_id
    assert str(net_id) == text
    assert NetID.from_hex(text) == net_id


def test_netid_errors():
    with pytest.raises(LoRaWANError):
        NetID.from_bytes(bytes(2))
    with pytest.raises(LoRaWANError):
        NetID.from_hex("0102")
    with pytest.raises(LoRaWANError):
        NetID.from_hex("zzzzzz")
    with pytest.raises(LoRaWANError):
        NetID.from_raw("010203")


def test_netid_from_raw():
    assert NetID.from_raw(bytes([1, 2, 3])) == NetID(bytes([1, 2, 3]))


def test_eui64_text():
    eui = EUI64(bytes([1, 2, 3, 4, 5, 6, 7, 8]))
    assert str(eui) == "0102030405060708"
    assert eui.octets == bytes([1, 2, 3, 4, 5, 6, 7, 8])


def test_eui64_from_hex():
    assert EUI64.from_hex("0102030405060708") == EUI64(bytes([1, 2, 3, 4, 5, 6, 7, 8]))


def test_eui64_from_raw():
    raw = bytes([1, 2, 3, 4, 5, 6, 7, 8])
    assert EUI64.from_raw(raw).octets == raw
    with pytest.raises(LoRaWANError):
        EUI64.from_raw(raw[:7])
    with pytest.raises(LoRaWANError):
        EUI64.from_raw(12345)


def test_eui64_binary_round_trip():
    eui = EUI64(bytes([1, 2, 3, 4, 5, 6, 7, 8]))
    assert eui.to_bytes() == bytes([8, 7, 6, 5, 4, 3, 2, 1])
    assert EUI64.from_bytes(eui.to_bytes()) == eui
    with pytest.raises(LoRaWANError):
        EUI64.from_bytes(bytes(7))


def test_dev_nonce():
    assert encode_dev_nonce(272) == bytes([16, 1])
    assert decode_dev_nonce(bytes([16, 1])) == 272
    with pytest.raises(LoRaWANError):
        decode_dev_nonce(bytes([1]))
    with pytest.raises(LoRaWANError):
        encode_dev_nonce(1 << 16)


def test_join_nonce():
    assert encode_join_nonce(66051) == bytes([3, 2, 1])
    assert decode_join_nonce(bytes([3, 2, 1])) == 66051
    with pytest.raises(LoRaWANError):
        encode_join_nonce(1 << 24)
    with pytest.raises(LoRaWANError):
        decode_join_nonce(bytes(4))


def test_data_payload():
    assert DataPayload().to_bytes() == b""
    assert DataPayload(bytes([1, 2, 3, 4])).to_bytes() == bytes([1, 2, 3, 4])
    source = bytearray([1, 2, 3, 4])
    payload = DataPayload.from_bytes(source)
    source[0] = 9
    assert payload.data == bytes([1, 2, 3, 4])


def test_join_type_values():
    assert JoinType(0xFF) is JoinType.JOIN_REQUEST
    assert JoinType(2) is JoinType.REJOIN_REQUEST_TYPE_2