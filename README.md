# blehost

Building blocks for the host side of a Bluetooth Low Energy stack, in plain
Python with no dependencies beyond the standard library.

## Modules

- `blehost.uuid`: `Uuid`, a 16-bit or 128-bit Bluetooth UUID held in
  little-endian wire order. Build one with `Uuid.new_short(0x180F)`,
  `Uuid.new_long(raw16)`, `Uuid.from_bytes(data)` or
  `Uuid.from_string("180f")` / `Uuid.from_string("0000180f-0000-1000-8000-00805f9b34fb")`.
  `as_raw()` gives the wire bytes, `is_short()` tells the two forms apart, and
  `str()` prints the usual hexadecimal form. Bad input raises `ValueError`.
- `blehost.codec`: `ReadCursor` (`read_u8`, `read_u16`, `slice`, `remaining`,
  `available`) and `WriteCursor` (`write_u8`, `write_u16`, `append`,
  `available`, `getvalue`) for little-endian data. A `WriteCursor` has a fixed
  capacity; overruns and out-of-range values raise `CodecError`.
- `blehost.props`: `CharacteristicProp` bits and the one-byte
  `CharacteristicProps` set (`from_props`, `any`, `as_gatt`, `from_gatt`), and
  the Client Characteristic Configuration value `CCCD` with its `CCCDFlag`
  bits (`from_flags`, `raw`, `disable`, `any`, `set_notify`, `should_notify`).
- `blehost.advertise`: advertising parameters (`AdvertisementParameters`,
  `TxPower`, `PhyKind`), advertisement kinds (`Advertisement`,
  `AdvertisementKind`) mapped to event properties and payloads with
  `Advertisement.to_raw()`, controller set descriptions with
  `AdvertisementSet.handles()`, and the AD structures used in advertising data
  (`Flags`, `ServiceUuids16`, `ServiceUuids128`, `ServiceData16`,
  `CompleteLocalName`, `ShortenedLocalName`, `ManufacturerSpecificData`,
  `UnknownAdStructure`) with `encode_ad_structures` and `decode_ad_structures`.
- `blehost.config`: `resolve_config(crate_name, environ)` resolves queue and
  pool sizes from `<NAME>_<SETTING>` environment variables and
  `CARGO_FEATURE_<SETTING>_<n>` feature names (environment variables win);
  `render_config(values)` renders the result as `NAME = value` lines. Unknown
  variables, malformed numbers and conflicting features raise `ConfigError`.

## Installation

```
pip install blehost
```

## Examples

UUIDs:

```python
from blehost.uuid import Uuid

battery = Uuid.from_string("180f")
assert battery.as_raw() == bytes([0x0F, 0x18])
assert str(battery) == "180f"
```

Advertising data:

```python
from blehost.advertise import (
    BR_EDR_NOT_SUPPORTED, LE_GENERAL_DISCOVERABLE,
    CompleteLocalName, Flags, ServiceUuids16,
    decode_ad_structures, encode_ad_structures,
)

data = encode_ad_structures(
    [
        Flags(LE_GENERAL_DISCOVERABLE | BR_EDR_NOT_SUPPORTED),
        ServiceUuids16([bytes([0x0F, 0x18])]),
        CompleteLocalName(b"sensor"),
    ],
    31,
)
structures = list(decode_ad_structures(data))
```

Data that does not fit in the given capacity (31 bytes by default) raises
`CodecError`. `ServiceUuids16` and `ServiceUuids128` are written with AD types
0x02 and 0x07; when decoding, types 0x03 and 0x07 become UUID lists and any
type not recognised comes back as `UnknownAdStructure`.

Characteristic properties:

```python
from blehost.props import CharacteristicProp, CharacteristicProps

props = CharacteristicProps.from_props([CharacteristicProp.READ, CharacteristicProp.NOTIFY])
assert props.as_gatt() == bytes([0x12])
assert props.any([CharacteristicProp.NOTIFY, CharacteristicProp.INDICATE])
```

Configuration:

```python
from blehost.config import render_config, resolve_config

values = resolve_config("my-host", {"MY_HOST_L2CAP_RX_QUEUE_SIZE": "16"})
print(render_config(values))
```

## What it does not do

The package has no Attribute Protocol PDU encoder or decoder, no GATT
attribute table or server, and no radio or controller transport: it provides
the data types and encodings above, and nothing that talks to a device.

## Running the tests

```
pip install -e ".[test]"
pytest
```