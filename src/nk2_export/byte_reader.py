"""
Forward-only little-endian cursor over an in-memory byte buffer.
"""

import struct

from nk2_export.errors import BufferUnderflowError


class ByteReader:
    """
    Sequential reader for little-endian binary data.

    Every read either returns the full number of requested bytes and advances
    the position, or raises BufferUnderflowError and leaves the position
    untouched.

    Attributes:
        data: Raw binary data being read
        pos: Current read position
    """

    def __init__(self, data: bytes):
        self.data = bytes(data)
        self.pos = 0

    @property
    def remaining(self) -> int:
        """Number of unread bytes."""
        return len(self.data) - self.pos

    def read_bytes(self, n: int) -> bytes:
        """
        Read N raw bytes from the current position and advance.

        :param n: Number of bytes to read
        :return: Raw bytes
        :raises BufferUnderflowError: If fewer than N bytes remain
        """
        if n < 0 or n > self.remaining:
            raise BufferUnderflowError(n, self.pos, self.remaining)
        result = self.data[self.pos:self.pos + n]
        self.pos += n
        return result

    def skip(self, n: int) -> None:
        self.read_bytes(n)

    def read_u16(self) -> int:
        return struct.unpack('<H', self.read_bytes(2))[0]

    def read_u32(self) -> int:
        return struct.unpack('<I', self.read_bytes(4))[0]

    def read_i32(self) -> int:
        return struct.unpack('<i', self.read_bytes(4))[0]

    def is_at_end(self) -> bool:
        return self.pos >= len(self.data)
