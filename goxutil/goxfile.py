"""GoxFile structure and related functions.

The goal of this module is to provide an interface for reading Goxel .gox
files. A .gox file is a "GOX " magic, an int32 version and a flat run of
chunks, each framed as:

    -------------------------------------------------------------------------------
    # Bytes  | Type       | Value
    -------------------------------------------------------------------------------
    4        | char[4]    | chunk tag
    4        | int        | body size (informational only)
    N        |            | body
    4        | int        | checksum (informational only)
    -------------------------------------------------------------------------------

Chunk payloads (image bytes, voxel blocks, dictionary values) are kept as raw
bytes; nothing here interprets them.
"""

import logging
import zlib
from dataclasses import dataclass, field
from typing import Callable, ClassVar, Optional, Union

from goxutil.errors import (
    BadMagic,
    ChecksumMismatch,
    EmptyDictionary,
    InvalidBlockCount,
    SizeMismatch,
    UnrecognizedChunkTag,
)
from goxutil.options import DecodeOptions
from goxutil.reader import ByteReader

logger = logging.getLogger(__name__)

MAGIC = b"GOX "


class Dict:
    """Representative of .gox file dictionaries.

    DICT is a run of entries ended by a zero key length:

    int32	: key length (non-zero)
    bytes	: key, utf-8
    int32	: value length
    bytes	: value
    """

    @staticmethod
    def read_entry(reader: ByteReader) -> Optional[tuple[str, bytes]]:
        """Read one entry, or return None at the end of the dictionary.

        A zero key length, or an entry that does not fit in the remaining
        bytes, ends the dictionary. Either way nothing is consumed.
        """
        key_length = reader.peek_uint32()
        if not key_length:
            return None
        header = reader.peek_bytes(4 + key_length + 4)
        if header is None:
            return None
        value_length = int.from_bytes(header[-4:], "little")
        if len(header) + value_length > reader.remaining:
            return None

        reader.read_uint32()
        key = reader.read_bytes(key_length).decode("utf-8", errors="replace")
        value = reader.read_length_prefixed()
        return key, value

    @staticmethod
    def read(
        reader: ByteReader, consume_terminator: bool = False
    ) -> dict[str, bytes]:
        """Read a dictionary holding at least one entry."""
        start = reader.tell()
        dict_: dict[str, bytes] = {}
        while True:
            entry = Dict.read_entry(reader)
            if entry is None:
                break
            key, value = entry
            dict_[key] = value

        if not dict_:
            raise EmptyDictionary(start)

        if consume_terminator and reader.peek_uint32() == 0:
            reader.read_uint32()

        return dict_


@dataclass(frozen=True)
class Block:
    """A voxel-block-palette entry placed on the layer grid.

    -------------------------------------------------------------------------------
    # Bytes  | Type       | Value
    -------------------------------------------------------------------------------
    4        | int        | index into the BL16 chunks
    4 x 3    | int        | x, y, z
    4        | int        | reserved, ignored
    -------------------------------------------------------------------------------
    """

    SIZE: ClassVar[int] = 20

    index: int
    x: int
    y: int
    z: int

    @staticmethod
    def read(reader: ByteReader) -> "Block":
        """Read a block record."""
        index = reader.read_int32()
        x = reader.read_int32()
        y = reader.read_int32()
        z = reader.read_int32()
        reader.read_int32()  # reserved
        return Block(index, x, y, z)


def _read_sized(
    reader: ByteReader,
    tag: bytes,
    options: DecodeOptions,
    read_content: Callable[[ByteReader, bool], object],
):
    """Read a size field, then the content it describes.

    In lenient mode the size is skipped and the content grammar alone decides
    how much is read. In strict mode the content is read inside a window of
    exactly `size` bytes.
    """
    size = reader.read_uint32()
    if not options.strict_size:
        return read_content(reader, False)

    body = reader.window(size)
    content = read_content(body, True)
    if body:
        raise SizeMismatch(tag, size, body.remaining, body.tell())
    return content


def _read_dict_body(reader: ByteReader, strict: bool) -> dict[str, bytes]:
    return Dict.read(reader, consume_terminator=strict)


@dataclass(frozen=True)
class ImageChunk:
    """Image chunk class.

    int32	: size
    DICT	: image attributes
        (box, cam, ...)
    """

    id: ClassVar[bytes] = b"IMG "

    dict: dict[str, bytes]

    @classmethod
    def read_body(cls, reader: ByteReader, options: DecodeOptions) -> "ImageChunk":
        return cls(_read_sized(reader, cls.id, options, _read_dict_body))


@dataclass(frozen=True)
class PreviewChunk:
    """Preview chunk class.

    int32	: size (N)
    bytes	: PNG image data, N bytes
    """

    id: ClassVar[bytes] = b"PREV"

    data: bytes

    @classmethod
    def read_body(cls, reader: ByteReader, options: DecodeOptions) -> "PreviewChunk":
        return cls(reader.read_length_prefixed())


@dataclass(frozen=True)
class BlockPaletteChunk:
    """Voxel block chunk class.

    int32	: size (N)
    bytes	: 16x16x16 block data, N bytes
    """

    id: ClassVar[bytes] = b"BL16"

    data: bytes

    @classmethod
    def read_body(
        cls, reader: ByteReader, options: DecodeOptions
    ) -> "BlockPaletteChunk":
        return cls(reader.read_length_prefixed())


@dataclass(frozen=True)
class LayerChunk:
    """Layer chunk class.

    int32	: size
    int32	: num of blocks (N)

    // for each block
    {
    BLOCK	: index, x, y, z, reserved
    }xN

    DICT	: layer attributes
        (name : string)
        (mat : float[16])
        ...
    """

    id: ClassVar[bytes] = b"LAYR"

    blocks: list[Block]
    dict: dict[str, bytes]

    @classmethod
    def read_body(cls, reader: ByteReader, options: DecodeOptions) -> "LayerChunk":
        def read_content(body: ByteReader, strict: bool) -> "LayerChunk":
            count_offset = body.tell()
            num_blocks = body.read_uint32()
            if num_blocks * Block.SIZE > body.remaining:
                raise InvalidBlockCount(num_blocks, count_offset, body.remaining)

            blocks = [Block.read(body) for _ in range(num_blocks)]
            return cls(blocks, Dict.read(body, consume_terminator=strict))

        return _read_sized(reader, cls.id, options, read_content)


@dataclass(frozen=True)
class CameraChunk:
    """Camera chunk class.

    int32	: size
    DICT	: camera attributes
        (name, active, dist, rot, ofs, ortho, ...)
    """

    id: ClassVar[bytes] = b"CAMR"

    dict: dict[str, bytes]

    @classmethod
    def read_body(cls, reader: ByteReader, options: DecodeOptions) -> "CameraChunk":
        return cls(_read_sized(reader, cls.id, options, _read_dict_body))


@dataclass(frozen=True)
class LightChunk:
    """Light chunk class.

    int32	: size
    DICT	: light attributes
        (pitch, yaw, intensity, fixed, ambient, shadow)
    """

    id: ClassVar[bytes] = b"LIGH"

    dict: dict[str, bytes]

    @classmethod
    def read_body(cls, reader: ByteReader, options: DecodeOptions) -> "LightChunk":
        return cls(_read_sized(reader, cls.id, options, _read_dict_body))


Chunk = Union[
    ImageChunk, PreviewChunk, BlockPaletteChunk, LayerChunk, CameraChunk, LightChunk
]

# tried in order, first matching tag wins
CHUNK_DECODERS: tuple[
    tuple[bytes, Callable[[ByteReader, DecodeOptions], Chunk]], ...
] = tuple(
    (chunk_type.id, chunk_type.read_body)
    for chunk_type in (
        ImageChunk,
        PreviewChunk,
        BlockPaletteChunk,
        LayerChunk,
        CameraChunk,
        LightChunk,
    )
)


def read_chunk(reader: ByteReader, options: DecodeOptions) -> Optional[Chunk]:
    """Read one chunk, or return None if no known tag is at the cursor.

    Nothing is consumed when None is returned. Once a tag has matched, any
    failure in the body is raised.
    """
    tag = reader.peek_bytes(4)
    for chunk_id, read_body in CHUNK_DECODERS:
        if tag == chunk_id:
            break
    else:
        return None

    chunk_offset = reader.tell()
    reader.read_bytes(4)

    body_start = reader.tell()
    chunk = read_body(reader, options)
    body_end = reader.tell()

    checksum = reader.read_uint32()
    if options.verify_checksum:
        computed = zlib.crc32(reader.data[body_start:body_end])
        if computed != checksum:
            raise ChecksumMismatch(chunk_id, checksum, computed, body_end)

    logger.debug(
        "read %r chunk at %#x (%d bytes)", chunk_id, chunk_offset, body_end - body_start
    )
    return chunk


@dataclass(frozen=True)
class GoxFile:
    """GoxFile class.

    `remaining` holds whatever followed the last recognized chunk. It is
    normally empty and only kept for diagnostics.
    """

    version: int
    chunks: list[Chunk] = field(default_factory=list)
    remaining: bytes = b""

    @staticmethod
    def decode(data: bytes, options: Optional[DecodeOptions] = None) -> "GoxFile":
        """Decode a .gox file held in memory."""
        if options is None:
            options = DecodeOptions()

        reader = ByteReader(data)

        header = reader.peek_bytes(4)
        if header != MAGIC:
            raise BadMagic(bytes(data[:4]))
        reader.read_bytes(4)

        version = reader.read_int32()

        chunks: list[Chunk] = []
        while reader:
            chunk = read_chunk(reader, options)
            if chunk is None:
                break
            chunks.append(chunk)

        remaining = reader.rest()
        if remaining:
            if options.reject_trailing_data:
                raise UnrecognizedChunkTag(remaining[:4], reader.tell())
            logger.debug(
                "ignoring %d trailing bytes at %#x", len(remaining), reader.tell()
            )

        return GoxFile(version, chunks, remaining)

    @staticmethod
    def read(path: str, options: Optional[DecodeOptions] = None) -> "GoxFile":
        """Read a .gox file from the given path."""
        with open(path, "rb") as f:
            return GoxFile.decode(f.read(), options)


def decode(data: bytes, options: Optional[DecodeOptions] = None) -> GoxFile:
    """Decode a .gox file held in memory."""
    return GoxFile.decode(data, options)
