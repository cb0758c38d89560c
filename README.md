# lorawire

Build, parse, sign and encrypt LoRaWAN frames in Python.

`lorawire` works with the LoRaWAN 1.0 and 1.1 wire formats:

- `lorawire.identifiers`: `EUI64`, `NetID`, the dev-nonce and join-nonce
  encoders, `JoinType` and the opaque `DataPayload`
- `lorawire.fields`: bit-packed fields such as `ChMask`, `Redundancy`,
  `DLSettings`, `Version` and `ADRParam`, plus the `DwellTime` and
  `DeviceModeClass` enums
- `lorawire.link_payloads`: the payloads of the Class-A link commands
  (`LinkCheckAnsPayload`, `LinkADRReqPayload`, `LinkADRAnsPayload`,
  `DutyCycleReqPayload`, `RXParamSetupReqPayload`, `RXParamSetupAnsPayload`,
  `DevStatusAnsPayload`, `NewChannelReqPayload`, `NewChannelAnsPayload`,
  `RXTimingSetupReqPayload`, `TXParamSetupReqPayload`, `DLChannelReqPayload`,
  `DLChannelAnsPayload`)
- `lorawire.join_payloads`: `JoinRequestPayload`, `JoinAcceptPayload` with an
  optional `CFList`, and the rejoin-request payloads of type 0/2 and 1
- `lorawire.crypto`: `AES128Key` and the FRMPayload / FOpts encryption
  functions `encrypt_frm_payload` and `encrypt_fopts`
- `lorawire.phypayload`: the `PHYPayload` envelope with its `MHDR`, join MIC
  calculation and validation, and join-accept encryption

Every value type has `to_bytes()` and a `from_bytes()` class method. Invalid
values or malformed input raise `lorawire.identifiers.LoRaWANError`, a
subclass of `ValueError`.

## Installation

```
pip install lorawire
```

The only runtime dependency is `cryptography`.

## Identifiers

`EUI64`, `NetID` and `AES128Key` hold their bytes most significant first; on
the wire they are little endian.

```python
from lorawire.identifiers import EUI64, NetID

eui = EUI64.from_hex("0102030405060708")
str(eui)          # "0102030405060708"
eui.to_bytes()    # b"\x08\x07\x06\x05\x04\x03\x02\x01"

net_id = NetID.from_hex("40036d")
net_id.type()     # 2
net_id.id()       # b"\x01\x6d"
```

## Payloads

```python
from lorawire.link_payloads import LinkCheckAnsPayload
from lorawire.fields import DLSettings

LinkCheckAnsPayload(margin=10, gw_cnt=15).to_bytes()   # b"\x0a\x0f"
DLSettings.from_hex("ff")   # opt_neg=True, rx2_data_rate=15, rx1_dr_offset=7
```

## Frames

```python
from lorawire.crypto import AES128Key
from lorawire.phypayload import PHYPayload

phy = PHYPayload.from_text("AAQDAgEEAwIBBQQDAgUEAwItEGqZDhI=")
app_key = AES128Key.from_raw(bytes([1] * 16))
phy.validate_uplink_join_mic(app_key)       # True
phy.to_text()                               # the same base64 string
```

`PHYPayload.from_bytes` decodes join-requests into `JoinRequestPayload` and
rejoin-requests into the matching rejoin payload. Every other message type,
including an (encrypted) join-accept, is kept as a `DataPayload`.

To build a join-accept, put a `JoinAcceptPayload` in the frame, call
`set_downlink_join_mic` first and then `encrypt_join_accept_payload`; the MIC
is part of the encrypted data. On the receiving side, call
`decrypt_join_accept_payload` before `validate_downlink_join_mic`.

```python
from lorawire.identifiers import EUI64, JoinType, NetID
from lorawire.join_payloads import JoinAcceptPayload
from lorawire.phypayload import MHDR, MType, PHYPayload

phy = PHYPayload(
    mhdr=MHDR(mtype=MType.JOIN_ACCEPT),
    mac_payload=JoinAcceptPayload(
        join_nonce=65793,
        home_net_id=NetID(bytes([2, 2, 2])),
        dev_addr=bytes([1, 2, 3, 4]),
    ),
)
phy.set_downlink_join_mic(JoinType.JOIN_REQUEST, EUI64(), 0, app_key)
phy.encrypt_join_accept_payload(app_key)
wire = phy.to_bytes()
```

## What it does not do

- It has no MAC command container, no CID registry and no decoding of a
  byte run into a list of MAC commands; the Class-B, Class-C and 1.1
  command payloads (ping slots, beacons, device time, reset, rekey,
  rejoin parameters, device mode) are not provided.
- It does not decode the frame header of data frames (DevAddr, FCtrl, FCnt,
  FOpts, FPort). Data frames stay opaque `DataPayload`s, and there are no
  data-frame MIC functions. `encrypt_frm_payload` and `encrypt_fopts` work on
  bytes that you pass in yourself.
- It has no command-line tool and no storage.

## Running the tests

```
pip install -e ".[test]"
pytest
```