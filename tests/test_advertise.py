from datetime import timedelta

import pytest

from blehost.advertise import (
    BR_EDR_NOT_SUPPORTED,
    LE_GENERAL_DISCOVERABLE,
    AdvertisementKind,
    Advertisement,
    AdvertisementParameters,
    AdvertisementSet,
    AdvEventProps,
    AdvSet,
    CompleteLocalName,
    Flags,
    ManufacturerSpecificData,
    PhyKind,
    RawAdvertisement,
    ServiceData16,
    ServiceUuids16,
    ServiceUuids128,
    ShortenedLocalName,
    TxPower,
    UnknownAdStructure,
    decode_ad_structures,
    encode_ad_structures,
)
from blehost.codec import CodecError, WriteCursor

PEER = b"\x01\x02\x03\x04\x05\x06"


def test_adv_name_truncate():
    with pytest.raises(CodecError):
        encode_ad_structures(
            [
                Flags(LE_GENERAL_DISCOVERABLE | BR_EDR_NOT_SUPPORTED),
                ServiceUuids16([b"\x0f\x18"]),
                CompleteLocalName(b"12345678901234567890123"),
            ],
            31,
        )


def test_encode_fits_exactly():
    data = encode_ad_structures(
        [
            Flags(LE_GENERAL_DISCOVERABLE | BR_EDR_NOT_SUPPORTED),
            ServiceUuids16([b"\x0f\x18"]),
            CompleteLocalName(b"1234567890123456789012"),
        ]
    )
    assert len(data) == 31
    assert data[:7] == bytes([0x02, 0x01, 0x06, 0x03, 0x02, 0x0F, 0x18])
    assert data[7:9] == bytes([23, 0x09])


def test_individual_encodings():
    assert encode_ad_structures([ShortenedLocalName(b"ab")]) == b"\x03\x08ab"
    assert encode_ad_structures([ServiceData16(b"\x0f\x18", b"\x55")]) == b"\x04\x16\x0f\x18\x55"
    assert (
        encode_ad_structures([ManufacturerSpecificData(0x1234, b"\x99")])
        == b"\x04\xff\x34\x12\x99"
    )
    assert encode_ad_structures([UnknownAdStructure(0x19, b"\x01\x02")]) == b"\x03\x19\x01\x02"
    raw = bytes(range(16))
    assert encode_ad_structures([ServiceUuids128([raw])]) == b"\x11\x07" + raw


def test_encode_into_writer():
    writer = WriteCursor(10)
    Flags(0x06).encode(writer)
    assert writer.getvalue() == b"\x02\x01\x06"
    assert writer.available() == 7


def test_decode_round_trip():
    structures = [
        Flags(0x06),
        ServiceUuids128([bytes(range(16))]),
        CompleteLocalName(b"dev"),
        ShortenedLocalName(b"d"),
        ServiceData16(b"\x0f\x18", b"\x64"),
        ManufacturerSpecificData(0xFFFF, b"\x01\x02"),
        UnknownAdStructure(0x19, b"\x40\x00"),
    ]
    data = encode_ad_structures(structures, 100)
    assert list(decode_ad_structures(data)) == structures


def test_decode_complete_16bit_list():
    decoded = list(decode_ad_structures(b"\x05\x03\x0f\x18\x0a\x18"))
    assert decoded == [ServiceUuids16([b"\x0f\x18", b"\x0a\x18"])]


def test_short_manufacturer_data_is_unknown():
    assert list(decode_ad_structures(b"\x02\xff\x01")) == [UnknownAdStructure(0xFF, b"\x01")]


@pytest.mark.parametrize(
    "data",
    [
        b"\x01\x09",
        b"\x04\x03\x0f\x18\x0a",
        b"\x02\x16\x0f",
        b"\x05\x09ab",
        b"\x03\x07\x00\x01",
    ],
)
def test_decode_errors(data):
    with pytest.raises(CodecError):
        list(decode_ad_structures(data))


def test_decode_empty():
    assert list(decode_ad_structures(b"")) == []


def test_uuid_width_checked():
    with pytest.raises(ValueError):
        ServiceUuids16([b"\x01\x02\x03"])


def test_default_parameters():
    params = AdvertisementParameters()
    assert params.primary_phy is PhyKind.LE_1M
    assert params.tx_power is TxPower.ZERO_DBM
    assert params.interval_min == timedelta(milliseconds=160)
    assert params.timeout is None and params.fragment is False


def test_default_raw_advertisement():
    raw = RawAdvertisement()
    assert raw.props == AdvEventProps.CONNECTABLE | AdvEventProps.SCANNABLE | AdvEventProps.LEGACY
    assert raw.adv_data == b"" and raw.peer is None


def test_connectable_scannable_to_raw():
    raw = Advertisement(
        AdvertisementKind.CONNECTABLE_SCANNABLE_UNDIRECTED, adv_data=b"a", scan_data=b"s"
    ).to_raw()
    assert raw == RawAdvertisement(
        AdvEventProps.CONNECTABLE | AdvEventProps.SCANNABLE | AdvEventProps.LEGACY, b"a", b"s", None
    )


def test_directed_high_duty_to_raw():
    raw = Advertisement(
        AdvertisementKind.CONNECTABLE_NONSCANNABLE_DIRECTED_HIGH_DUTY, peer=PEER
    ).to_raw()
    assert raw.props == (
        AdvEventProps.CONNECTABLE
        | AdvEventProps.HIGH_DUTY_CYCLE_DIRECTED_CONNECTABLE
        | AdvEventProps.LEGACY
    )
    assert raw.peer == PEER


def test_extended_anonymous_to_raw():
    raw = Advertisement(
        AdvertisementKind.EXT_NONCONNECTABLE_NONSCANNABLE_DIRECTED,
        adv_data=b"x",
        peer=PEER,
        anonymous=True,
    ).to_raw()
    assert raw.props == AdvEventProps.ANONYMOUS | AdvEventProps.DIRECTED
    assert raw.adv_data == b"x" and raw.scan_data == b""


def test_unused_payload_dropped():
    raw = Advertisement(
        AdvertisementKind.EXT_NONCONNECTABLE_SCANNABLE_UNDIRECTED, adv_data=b"a", scan_data=b"s"
    ).to_raw()
    assert raw.adv_data == b"" and raw.scan_data == b"s"
    assert raw.props == AdvEventProps.SCANNABLE


def test_directed_needs_peer():
    with pytest.raises(ValueError):
        Advertisement(AdvertisementKind.CONNECTABLE_NONSCANNABLE_DIRECTED)


def test_handles():
    ad = Advertisement(AdvertisementKind.NONCONNECTABLE_NONSCANNABLE_UNDIRECTED, adv_data=b"x")
    sets = [
        AdvertisementSet(AdvertisementParameters(), ad),
        AdvertisementSet(
            AdvertisementParameters(timeout=timedelta(seconds=2), max_events=5), ad
        ),
    ]
    assert AdvertisementSet.handles(sets) == [
        AdvSet(0, timedelta(0), 0),
        AdvSet(1, timedelta(seconds=2), 5),
    ]