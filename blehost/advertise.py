"""Advertising parameters, advertisement kinds and AD structure encoding."""

from __future__ import annotations

import enum
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Optional, Union

from .codec import CodecError, ReadCursor, WriteCursor
from .uuid import Uuid

AD_FLAG_LE_LIMITED_DISCOVERABLE = 0b00000001
"""LE limited discoverable mode."""
LE_GENERAL_DISCOVERABLE = 0b00000010
"""LE general discoverable mode."""
BR_EDR_NOT_SUPPORTED = 0b00000100
"""BR/EDR not supported."""
SIMUL_LE_BR_CONTROLLER = 0b00001000
"""Simultaneous LE and BR/EDR to the same device capable (controller)."""
SIMUL_LE_BR_HOST = 0b00010000
"""Simultaneous LE and BR/EDR to the same device capable (host)."""

LEGACY_ADVERTISEMENT_SIZE = 31


class TxPower(enum.IntEnum):
    """Transmit power levels in dBm."""

    MINUS_40_DBM = -40
    MINUS_20_DBM = -20
    MINUS_16_DBM = -16
    MINUS_12_DBM = -12
    MINUS_8_DBM = -8
    MINUS_4_DBM = -4
    ZERO_DBM = 0
    PLUS_2_DBM = 2
    PLUS_3_DBM = 3
    PLUS_4_DBM = 4
    PLUS_5_DBM = 5
    PLUS_6_DBM = 6
    PLUS_7_DBM = 7
    PLUS_8_DBM = 8
    PLUS_10_DBM = 10
    PLUS_12_DBM = 12
    PLUS_14_DBM = 14
    PLUS_16_DBM = 16
    PLUS_18_DBM = 18
    PLUS_20_DBM = 20


class PhyKind(enum.IntEnum):
    """Physical layer used for advertising."""

    LE_1M = 1
    LE_2M = 2
    LE_CODED = 3
    LE_CODED_S2 = 4


@dataclass(frozen=True)
class AdvSet:
    """Controller-facing description of one advertising set."""

    adv_handle: int
    duration: timedelta = timedelta(0)
    max_ext_adv_events: int = 0


@dataclass(frozen=True)
class AdvertisementParameters:
    """Parameters for an advertisement."""

    primary_phy: PhyKind = PhyKind.LE_1M
    secondary_phy: PhyKind = PhyKind.LE_1M
    tx_power: TxPower = TxPower.ZERO_DBM
    timeout: Optional[timedelta] = None
    max_events: Optional[int] = None
    interval_min: timedelta = timedelta(milliseconds=160)
    interval_max: timedelta = timedelta(milliseconds=160)
    channel_map: Optional[int] = None
    filter_policy: int = 0
    fragment: bool = False


class AdEventPropsMixin:
    pass


class AdvEventProps(enum.IntFlag):
    """Advertising event property bits."""

    CONNECTABLE = 0x01
    SCANNABLE = 0x02
    DIRECTED = 0x04
    HIGH_DUTY_CYCLE_DIRECTED_CONNECTABLE = 0x08
    LEGACY = 0x10
    ANONYMOUS = 0x20
    INCLUDE_TX_POWER = 0x40


_NO_PROPS = AdvEventProps(0)


@dataclass(frozen=True)
class RawAdvertisement:
    """Event properties and payloads as handed to the controller."""

    props: AdvEventProps = AdvEventProps.CONNECTABLE | AdvEventProps.SCANNABLE | AdvEventProps.LEGACY
    adv_data: bytes = b""
    scan_data: bytes = b""
    peer: Any = None


class AdvertisementKind(enum.Enum):
    """The kinds of advertisement that can be requested."""

    CONNECTABLE_SCANNABLE_UNDIRECTED = enum.auto()
    CONNECTABLE_NONSCANNABLE_DIRECTED = enum.auto()
    CONNECTABLE_NONSCANNABLE_DIRECTED_HIGH_DUTY = enum.auto()
    NONCONNECTABLE_SCANNABLE_UNDIRECTED = enum.auto()
    NONCONNECTABLE_NONSCANNABLE_UNDIRECTED = enum.auto()
    EXT_CONNECTABLE_NONSCANNABLE_UNDIRECTED = enum.auto()
    EXT_CONNECTABLE_NONSCANNABLE_DIRECTED = enum.auto()
    EXT_NONCONNECTABLE_SCANNABLE_UNDIRECTED = enum.auto()
    EXT_NONCONNECTABLE_SCANNABLE_DIRECTED = enum.auto()
    EXT_NONCONNECTABLE_NONSCANNABLE_UNDIRECTED = enum.auto()
    EXT_NONCONNECTABLE_NONSCANNABLE_DIRECTED = enum.auto()


_K = AdvertisementKind
_P = AdvEventProps

# kind -> (event properties, uses adv data, uses scan data, directed)
_KIND_LAYOUT: dict[AdvertisementKind, tuple[AdvEventProps, bool, bool, bool]] = {
    _K.CONNECTABLE_SCANNABLE_UNDIRECTED: (_P.CONNECTABLE | _P.SCANNABLE | _P.LEGACY, True, True, False),
    _K.CONNECTABLE_NONSCANNABLE_DIRECTED: (_P.CONNECTABLE | _P.DIRECTED | _P.LEGACY, False, False, True),
    _K.CONNECTABLE_NONSCANNABLE_DIRECTED_HIGH_DUTY: (
        _P.CONNECTABLE | _P.HIGH_DUTY_CYCLE_DIRECTED_CONNECTABLE | _P.LEGACY,
        False,
        False,
        True,
    ),
    _K.NONCONNECTABLE_SCANNABLE_UNDIRECTED: (_P.SCANNABLE | _P.LEGACY, True, True, False),
    _K.NONCONNECTABLE_NONSCANNABLE_UNDIRECTED: (_P.LEGACY, True, False, False),
    _K.EXT_CONNECTABLE_NONSCANNABLE_UNDIRECTED: (_P.CONNECTABLE, True, False, False),
    _K.EXT_CONNECTABLE_NONSCANNABLE_DIRECTED: (_P.CONNECTABLE, True, False, True),
    _K.EXT_NONCONNECTABLE_SCANNABLE_UNDIRECTED: (_P.SCANNABLE, False, True, False),
    _K.EXT_NONCONNECTABLE_SCANNABLE_DIRECTED: (_P.SCANNABLE | _P.DIRECTED, False, True, True),
    _K.EXT_NONCONNECTABLE_NONSCANNABLE_UNDIRECTED: (_NO_PROPS, True, False, False),
    _K.EXT_NONCONNECTABLE_NONSCANNABLE_DIRECTED: (_P.DIRECTED, True, False, True),
}

_ANONYMOUS_KINDS = frozenset(
    {_K.EXT_NONCONNECTABLE_NONSCANNABLE_UNDIRECTED, _K.EXT_NONCONNECTABLE_NONSCANNABLE_DIRECTED}
)


@dataclass(frozen=True)
class Advertisement:
    """An advertisement payload of a given kind."""

    kind: AdvertisementKind
    adv_data: bytes = b""
    scan_data: bytes = b""
    peer: Any = None
    anonymous: bool = False

    def __post_init__(self) -> None:
        _, _, _, directed = _KIND_LAYOUT[self.kind]
        if directed and self.peer is None:
            raise ValueError(f"{self.kind.name} advertisements need a peer address")

    def to_raw(self) -> RawAdvertisement:
        """Map this advertisement onto event properties and payloads."""
        props, uses_adv, uses_scan, directed = _KIND_LAYOUT[self.kind]
        if self.kind in _ANONYMOUS_KINDS and self.anonymous:
            props |= AdvEventProps.ANONYMOUS
        return RawAdvertisement(
            props=props,
            adv_data=bytes(self.adv_data) if uses_adv else b"",
            scan_data=bytes(self.scan_data) if uses_scan else b"",
            peer=self.peer if directed else None,
        )


@dataclass(frozen=True)
class AdvertisementSet:
    """Configuration for a single advertisement set."""

    params: AdvertisementParameters
    data: Advertisement

    @staticmethod
    def handles(sets: Sequence[AdvertisementSet]) -> list[AdvSet]:
        """Controller descriptions for the given sets, numbered in order."""
        return [
            AdvSet(
                adv_handle=index,
                duration=s.params.timeout if s.params.timeout is not None else timedelta(0),
                max_ext_adv_events=s.params.max_events if s.params.max_events is not None else 0,
            )
            for index, s in enumerate(sets)
        ]


def _header(writer: WriteCursor, length: int, ad_type: int) -> None:
    writer.append(bytes((length & 0xFF, ad_type)))


@dataclass(frozen=True)
class Flags:
    """Device flags and baseband capabilities."""

    flags: int

    def encode(self, writer: WriteCursor) -> None:
        """Append this structure to ``writer``."""
        writer.append(bytes((0x02, 0x01)))
        writer.write_u8(self.flags)


def _check_uuids(uuids: Sequence[bytes], width: int) -> tuple[bytes, ...]:
    result = tuple(bytes(u) for u in uuids)
    for u in result:
        if len(u) != width:
            raise ValueError(f"expected {width}-byte UUIDs, got {len(u)} bytes")
    return result


@dataclass(frozen=True)
class ServiceUuids16:
    """List of 16-bit service UUIDs, each two little-endian bytes."""

    uuids: tuple[bytes, ...] = field(default=())

    def __post_init__(self) -> None:
        object.__setattr__(self, "uuids", _check_uuids(self.uuids, 2))

    def encode(self, writer: WriteCursor) -> None:
        """Append this structure to ``writer``."""
        _header(writer, len(self.uuids) * 2 + 1, 0x02)
        for uuid in self.uuids:
            writer.append(Uuid.from_bytes(uuid).as_raw())


@dataclass(frozen=True)
class ServiceUuids128:
    """List of 128-bit service UUIDs, each sixteen little-endian bytes."""

    uuids: tuple[bytes, ...] = field(default=())

    def __post_init__(self) -> None:
        object.__setattr__(self, "uuids", _check_uuids(self.uuids, 16))

    def encode(self, writer: WriteCursor) -> None:
        """Append this structure to ``writer``."""
        _header(writer, len(self.uuids) * 16 + 1, 0x07)
        for uuid in self.uuids:
            writer.append(Uuid.from_bytes(uuid).as_raw())


@dataclass(frozen=True)
class ServiceData16:
    """Service data tagged with a 16-bit service UUID."""

    uuid: bytes
    data: bytes = b""

    def __post_init__(self) -> None:
        object.__setattr__(self, "uuid", _check_uuids((self.uuid,), 2)[0])
        object.__setattr__(self, "data", bytes(self.data))

    def encode(self, writer: WriteCursor) -> None:
        """Append this structure to ``writer``."""
        _header(writer, len(self.data) + 3, 0x16)
        writer.append(self.uuid)
        writer.append(self.data)


@dataclass(frozen=True)
class CompleteLocalName:
    """The full device name."""

    name: bytes

    def encode(self, writer: WriteCursor) -> None:
        """Append this structure to ``writer``."""
        _header(writer, len(self.name) + 1, 0x09)
        writer.append(self.name)


@dataclass(frozen=True)
class ShortenedLocalName:
    """The shortened device name."""

    name: bytes

    def encode(self, writer: WriteCursor) -> None:
        """Append this structure to ``writer``."""
        _header(writer, len(self.name) + 1, 0x08)
        writer.append(self.name)


@dataclass(frozen=True)
class ManufacturerSpecificData:
    """Manufacturer specific data."""

    company_identifier: int
    payload: bytes = b""

    def encode(self, writer: WriteCursor) -> None:
        """Append this structure to ``writer``."""
        _header(writer, len(self.payload) + 3, 0xFF)
        writer.write_u16(self.company_identifier)
        writer.append(self.payload)


@dataclass(frozen=True)
class UnknownAdStructure:
    """An AD structure kept as its type byte and raw data."""

    ty: int
    data: bytes = b""

    def encode(self, writer: WriteCursor) -> None:
        """Append this structure to ``writer``."""
        _header(writer, len(self.data) + 1, self.ty)
        writer.append(self.data)


AdStructure = Union[
    Flags,
    ServiceUuids16,
    ServiceUuids128,
    ServiceData16,
    CompleteLocalName,
    ShortenedLocalName,
    ManufacturerSpecificData,
    UnknownAdStructure,
]


def encode_ad_structures(
    structures: Iterable[AdStructure], capacity: int = LEGACY_ADVERTISEMENT_SIZE
) -> bytes:
    """Encode structures into at most ``capacity`` bytes; CodecError if they do not fit."""
    writer = WriteCursor(capacity)
    for structure in structures:
        structure.encode(writer)
    return writer.getvalue()


def _chunks(data: bytes, width: int) -> tuple[bytes, ...]:
    if len(data) % width:
        raise CodecError(CodecError.INVALID_VALUE, f"{len(data)} bytes is not a list of {width}-byte UUIDs")
    return tuple(data[i:i + width] for i in range(0, len(data), width))


def _decode_one(r: ReadCursor) -> AdStructure:
    length = r.read_u8()
    if length < 2:
        raise CodecError(CodecError.INVALID_VALUE, f"AD structure length {length}")
    code = r.read_u8()
    data = r.slice(length - 1)
    if code == 0x01:
        return Flags(data[0])
    if code == 0x03:
        return ServiceUuids16(_chunks(data, 2))
    if code == 0x07:
        return ServiceUuids128(_chunks(data, 16))
    if code == 0x08:
        return ShortenedLocalName(data)
    if code == 0x09:
        return CompleteLocalName(data)
    if code == 0x16:
        if len(data) < 2:
            raise CodecError(CodecError.INVALID_VALUE, "service data shorter than its UUID")
        return ServiceData16(data[:2], data[2:])
    if code == 0xFF and len(data) >= 2:
        return ManufacturerSpecificData(int.from_bytes(data[:2], "little"), data[2:])
    return UnknownAdStructure(code, data)


def decode_ad_structures(data: bytes) -> Iterator[AdStructure]:
    """Yield the AD structures in ``data``; raise CodecError on a malformed one."""
    r = ReadCursor(data)
    while r.available():
        yield _decode_one(r)