"""Little-endian binary I/O helpers for the CSF codec."""

import struct
from typing import BinaryIO

from .errors import MalformedBinaryFileError, UnexpectedEofError


_INT32 = struct.Struct("<i")


class IoBuffer:
    """Reader/writer over a seekable byte stream. All integers are little-endian int32."""

    def __init__(self, stream: BinaryIO):
        self.stream = stream

    @property
    def position(self) -> int:
        """Current position in stream."""
        return self.stream.tell()

    def bytes_remaining(self) -> int:
        """Number of bytes between the current position and the end of the stream."""
        current = self.stream.tell()
        end = self.stream.seek(0, 2)
        self.stream.seek(current)
        return end - current

    def read_bytes(self, count: int) -> bytes:
        """
        Read exactly `count` bytes.

        Length fields come straight from the file, so `count` is checked
        against what is left in the stream before anything is read.

        Raises:
            UnexpectedEofError: If fewer than `count` bytes remain
        """
        start = self.position
        remaining = self.bytes_remaining()
        if count > remaining:
            raise UnexpectedEofError(
                f"Unexpected end of file: wanted {count} bytes, {remaining} left.", offset=start
            )
        data = self.stream.read(count)
        if len(data) != count:
            raise UnexpectedEofError(
                f"Unexpected end of file: wanted {count} bytes, got {len(data)}.", offset=start
            )
        return data

    def read_tag(self) -> bytes:
        """Read a 4-byte ASCII tag."""
        return self.read_bytes(4)

    def read_int32(self) -> int:
        return _INT32.unpack(self.read_bytes(4))[0]

    def read_length(self, what: str) -> int:
        """Read an int32 length field and reject negative values."""
        start = self.position
        length = self.read_int32()
        if length < 0:
            raise MalformedBinaryFileError(f"Negative {what} ({length}).", offset=start)
        return length

    def write_bytes(self, data: bytes):
        self.stream.write(data)

    def write_int32(self, value: int):
        self.stream.write(_INT32.pack(value))


__all__ = ["IoBuffer"]
