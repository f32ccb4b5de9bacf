"""Byte cursors for reading and writing little-endian protocol data."""

from __future__ import annotations


class CodecError(Exception):
    """Encoding or decoding failed."""

    INSUFFICIENT_SPACE = "insufficient space"
    INVALID_VALUE = "invalid value"

    def __init__(self, kind: str, detail: str | None = None) -> None:
        self.kind = kind
        self.detail = detail
        super().__init__(kind if detail is None else f"{kind}: {detail}")


class ReadCursor:
    """Consumes bytes from the front of a buffer."""

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._pos = 0

    def available(self) -> int:
        """Number of unread bytes."""
        return len(self._data) - self._pos

    def slice(self, length: int) -> bytes:
        """Take the next ``length`` bytes."""
        if length < 0:
            raise CodecError(CodecError.INVALID_VALUE, f"negative length {length}")
        if length > self.available():
            raise CodecError(
                CodecError.INSUFFICIENT_SPACE,
                f"need {length} bytes, {self.available()} left",
            )
        chunk = self._data[self._pos:self._pos + length]
        self._pos += length
        return chunk

    def read_u8(self) -> int:
        """Read one byte."""
        return self.slice(1)[0]

    def read_u16(self) -> int:
        """Read a little-endian 16-bit integer."""
        return int.from_bytes(self.slice(2), "little")

    def remaining(self) -> bytes:
        """Take every unread byte."""
        return self.slice(self.available())


class WriteCursor:
    """Appends bytes to a buffer of fixed capacity."""

    def __init__(self, capacity: int) -> None:
        if capacity < 0:
            raise CodecError(CodecError.INVALID_VALUE, f"negative capacity {capacity}")
        self.capacity = capacity
        self._buffer = bytearray()

    def __len__(self) -> int:
        return len(self._buffer)

    def available(self) -> int:
        """Number of bytes that may still be written."""
        return self.capacity - len(self._buffer)

    def append(self, data: bytes) -> None:
        """Write raw bytes."""
        if len(data) > self.available():
            raise CodecError(
                CodecError.INSUFFICIENT_SPACE,
                f"need {len(data)} bytes, {self.available()} left",
            )
        self._buffer.extend(data)

    def write_u8(self, value: int) -> None:
        """Write one byte."""
        if not 0 <= value <= 0xFF:
            raise CodecError(CodecError.INVALID_VALUE, f"{value} does not fit in a byte")
        self.append(bytes((value,)))

    def write_u16(self, value: int) -> None:
        """Write a little-endian 16-bit integer."""
        if not 0 <= value <= 0xFFFF:
            raise CodecError(CodecError.INVALID_VALUE, f"{value} does not fit in 16 bits")
        self.append(value.to_bytes(2, "little"))

    def getvalue(self) -> bytes:
        """The bytes written so far."""
        return bytes(self._buffer)