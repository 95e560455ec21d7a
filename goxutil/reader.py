"""Byte cursor used by the .gox decoders."""

from typing import Optional

from goxutil.errors import Truncated


class ByteReader:
    """Cursor over an in-memory byte buffer.

    A reader only ever moves forward. `window` hands out a child reader over
    the next n bytes, which lets a chunk body be decoded inside its declared
    size.
    """

    def __init__(self, data: bytes, offset: int = 0, end: Optional[int] = None):
        """ByteReader constructor."""
        self.data = memoryview(data)
        self.offset = offset
        self.end = len(data) if end is None else end

    @property
    def remaining(self) -> int:
        """Number of unread bytes."""
        return self.end - self.offset

    def __bool__(self) -> bool:
        return self.remaining > 0

    def tell(self) -> int:
        """Absolute position of the cursor in the underlying buffer."""
        return self.offset

    def read_bytes(self, n: int) -> bytes:
        """Read n bytes."""
        if n > self.remaining:
            raise Truncated(self.offset, n, self.remaining)
        start = self.offset
        self.offset += n
        return bytes(self.data[start : self.offset])

    def read_uint32(self) -> int:
        """Read a little-endian unsigned 32-bit integer."""
        return int.from_bytes(self.read_bytes(4), "little")

    def read_int32(self) -> int:
        """Read a little-endian signed 32-bit integer."""
        return int.from_bytes(self.read_bytes(4), "little", signed=True)

    def read_length_prefixed(self) -> bytes:
        """Read a u32 length followed by that many bytes."""
        length = self.read_uint32()
        return self.read_bytes(length)

    def peek_bytes(self, n: int) -> Optional[bytes]:
        """Return the next n bytes without consuming them, or None if short."""
        if n > self.remaining:
            return None
        return bytes(self.data[self.offset : self.offset + n])

    def peek_uint32(self) -> Optional[int]:
        """Return the next u32 without consuming it, or None if short."""
        raw = self.peek_bytes(4)
        if raw is None:
            return None
        return int.from_bytes(raw, "little")

    def window(self, size: int) -> "ByteReader":
        """Split off a reader over the next `size` bytes and skip past them."""
        if size > self.remaining:
            raise Truncated(self.offset, size, self.remaining)
        child = ByteReader(self.data, self.offset, self.offset + size)
        self.offset += size
        return child

    def rest(self) -> bytes:
        """Return every unread byte without consuming them."""
        return bytes(self.data[self.offset : self.end])
