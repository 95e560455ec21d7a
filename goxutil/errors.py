"""Errors raised while decoding .gox files.

Every error is a ValueError so callers that only care about "this is not a
readable .gox file" can catch that alone.
"""


class ParseError(ValueError):
    """Base class for .gox decoding errors."""

    def __init__(self, message: str, offset: int):
        """ParseError constructor."""
        super().__init__(f"{message} (at offset {offset:#x})")
        self.offset = offset


class BadMagic(ParseError):
    """The input does not start with the "GOX " magic."""

    def __init__(self, magic: bytes, offset: int = 0):
        super().__init__(f"Invalid .gox file header: {magic!r}", offset)
        self.magic = magic


class UnrecognizedChunkTag(ParseError):
    """Bytes at a chunk boundary match none of the known chunk tags."""

    def __init__(self, tag: bytes, offset: int):
        super().__init__(f"Unrecognized chunk tag: {tag!r}", offset)
        self.tag = tag


class Truncated(ParseError):
    """A read asked for more bytes than remain."""

    def __init__(self, offset: int, needed: int, available: int):
        super().__init__(
            f"Unexpected end of data: needed {needed} bytes, {available} available",
            offset,
        )
        self.needed = needed
        self.available = available


class EmptyDictionary(ParseError):
    """A dictionary was expected but held no entries."""

    def __init__(self, offset: int):
        super().__init__("Dictionary has no entries", offset)


class InvalidBlockCount(ParseError):
    """A layer declares more blocks than the remaining bytes can hold."""

    def __init__(self, count: int, offset: int, available: int):
        super().__init__(
            f"Invalid block count {count}: only {available} bytes remain", offset
        )
        self.count = count
        self.available = available


class SizeMismatch(ParseError):
    """A chunk body did not consume exactly its declared size."""

    def __init__(self, tag: bytes, declared: int, leftover: int, offset: int):
        super().__init__(
            f"Chunk {tag!r} declares {declared} bytes but left {leftover} unread",
            offset,
        )
        self.tag = tag
        self.declared = declared
        self.leftover = leftover


class ChecksumMismatch(ParseError):
    """A chunk's stored checksum does not match its body."""

    def __init__(self, tag: bytes, stored: int, computed: int, offset: int):
        super().__init__(
            f"Chunk {tag!r} checksum {stored:#010x} != computed {computed:#010x}",
            offset,
        )
        self.tag = tag
        self.stored = stored
        self.computed = computed
