"""Characteristic property bits and client characteristic configuration flags."""

from __future__ import annotations

import enum
from collections.abc import Iterable
from dataclasses import dataclass


class CharacteristicProp(enum.IntFlag):
    """A single characteristic property bit."""

    BROADCAST = 0x01
    READ = 0x02
    WRITE_WITHOUT_RESPONSE = 0x04
    WRITE = 0x08
    NOTIFY = 0x10
    INDICATE = 0x20
    AUTHENTICATED_WRITE = 0x40
    EXTENDED = 0x80


@dataclass(frozen=True)
class CharacteristicProps:
    """The one-byte property set of a characteristic."""

    value: int = 0

    SIZE = 1

    def __post_init__(self) -> None:
        if not 0 <= self.value <= 0xFF:
            raise ValueError(f"characteristic properties {self.value} do not fit in a byte")

    @classmethod
    def from_props(cls, props: Iterable[CharacteristicProp]) -> CharacteristicProps:
        """Combine individual property bits into one set."""
        value = 0
        for prop in props:
            value |= int(prop)
        return cls(value)

    def any(self, props: Iterable[CharacteristicProp]) -> bool:
        """True if any of ``props`` is set."""
        return any(int(prop) & self.value for prop in props)

    def __contains__(self, prop: CharacteristicProp) -> bool:
        return bool(int(prop) & self.value)

    def as_gatt(self) -> bytes:
        """The single wire byte."""
        return bytes((self.value,))

    @classmethod
    def from_gatt(cls, data: bytes) -> CharacteristicProps:
        """Decode from exactly one byte."""
        if len(data) != cls.SIZE:
            raise ValueError(
                f"invalid length: characteristic properties are {cls.SIZE} byte, got {len(data)}"
            )
        return cls(data[0])


class CCCDFlag(enum.IntFlag):
    """A client characteristic configuration bit."""

    NOTIFY = 0x1
    INDICATE = 0x2


@dataclass
class CCCD:
    """A client characteristic configuration value."""

    value: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.value <= 0xFFFF:
            raise ValueError(f"CCCD value {self.value} does not fit in 16 bits")

    @classmethod
    def from_flags(cls, flags: Iterable[CCCDFlag]) -> CCCD:
        """Combine flags into a configuration value."""
        value = 0
        for flag in flags:
            value |= int(flag)
        return cls(value)

    def raw(self) -> int:
        """The raw 16-bit value."""
        return self.value

    def disable(self) -> None:
        """Clear every flag."""
        self.value = 0

    def any(self, flags: Iterable[CCCDFlag]) -> bool:
        """True if any of ``flags`` is set."""
        return any(int(flag) & self.value for flag in flags)

    def set_notify(self, is_enabled: bool) -> None:
        """Enable or disable notifications."""
        mask = int(CCCDFlag.NOTIFY)
        self.value = self.value | mask if is_enabled else self.value & ~mask & 0xFFFF

    def should_notify(self) -> bool:
        """True if notifications are enabled."""
        return bool(self.value & CCCDFlag.NOTIFY)