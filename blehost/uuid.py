"""Bluetooth UUIDs in their 16-bit and 128-bit forms."""

from __future__ import annotations

import string
from dataclasses import dataclass

_HEX_DIGITS = frozenset(string.hexdigits)
_HYPHEN_POSITIONS = (8, 13, 18, 23)


def _is_hex(text: str) -> bool:
    return bool(text) and set(text) <= _HEX_DIGITS


def _parse_long(text: str) -> bytes | None:
    """Parse a 128-bit UUID string into big-endian bytes, or return None."""
    if len(text) == 32:
        return bytes.fromhex(text) if _is_hex(text) else None

    if text.startswith("urn:uuid:"):
        text = text[len("urn:uuid:"):]
    elif text.startswith("{") and text.endswith("}"):
        text = text[1:-1]

    if len(text) != 36 or any(text[pos] != "-" for pos in _HYPHEN_POSITIONS):
        return None
    digits = text.replace("-", "")
    if len(digits) != 32 or not _is_hex(digits):
        return None
    return bytes.fromhex(digits)


def _parse_short(text: str) -> int | None:
    """Parse a four-character hexadecimal 16-bit UUID, or return None."""
    if len(text) != 4:
        return None
    digits = text[1:] if text.startswith("+") else text
    if not _is_hex(digits):
        return None
    return int(digits, 16)


@dataclass(frozen=True)
class Uuid:
    """A 16-bit or 128-bit UUID, stored little-endian as it travels on the wire."""

    raw: bytes

    def __post_init__(self) -> None:
        raw = bytes(self.raw)
        if len(raw) not in (2, 16):
            raise ValueError(f"a UUID is 2 or 16 bytes long, not {len(raw)}")
        object.__setattr__(self, "raw", raw)

    @classmethod
    def new_short(cls, value: int) -> Uuid:
        """Build a 16-bit UUID from its integer value."""
        if not 0 <= value <= 0xFFFF:
            raise ValueError(f"16-bit UUID out of range: {value}")
        return cls(value.to_bytes(2, "little"))

    @classmethod
    def new_long(cls, raw: bytes) -> Uuid:
        """Build a 128-bit UUID from its 16 little-endian bytes."""
        raw = bytes(raw)
        if len(raw) != 16:
            raise ValueError(f"a 128-bit UUID is 16 bytes long, not {len(raw)}")
        return cls(raw)

    @classmethod
    def from_string(cls, value: str) -> Uuid:
        """Parse "180f" or "0000180f-0000-1000-8000-00805f9b34fb"."""
        long_form = _parse_long(value)
        if long_form is not None:
            return cls(long_form[::-1])
        short_form = _parse_short(value)
        if short_form is not None:
            return cls.new_short(short_form)
        raise ValueError("Invalid UUID (must be a 16-bit or 128-bit UUID)")

    @classmethod
    def from_bytes(cls, data: bytes) -> Uuid:
        """Build a UUID from 2 or 16 little-endian bytes."""
        return cls(bytes(data))

    def as_raw(self) -> bytes:
        """The little-endian wire bytes."""
        return self.raw

    def is_short(self) -> bool:
        """True for a 16-bit UUID."""
        return len(self.raw) == 2

    def __str__(self) -> str:
        if self.is_short():
            return f"{int.from_bytes(self.raw, 'little'):04x}"
        text = self.raw[::-1].hex()
        return f"{text[:8]}-{text[8:12]}-{text[12:16]}-{text[16:20]}-{text[20:]}"