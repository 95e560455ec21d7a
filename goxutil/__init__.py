"""Reader for Goxel .gox voxel scene files."""

from goxutil.errors import (
    BadMagic,
    ChecksumMismatch,
    EmptyDictionary,
    InvalidBlockCount,
    ParseError,
    SizeMismatch,
    Truncated,
    UnrecognizedChunkTag,
)
from goxutil.goxfile import (
    Block,
    BlockPaletteChunk,
    CameraChunk,
    Chunk,
    GoxFile,
    ImageChunk,
    LayerChunk,
    LightChunk,
    PreviewChunk,
    decode,
)
from goxutil.options import DecodeOptions

__version__ = "0.1.0"

__all__ = [
    "BadMagic",
    "Block",
    "BlockPaletteChunk",
    "CameraChunk",
    "ChecksumMismatch",
    "Chunk",
    "DecodeOptions",
    "EmptyDictionary",
    "GoxFile",
    "ImageChunk",
    "InvalidBlockCount",
    "LayerChunk",
    "LightChunk",
    "ParseError",
    "PreviewChunk",
    "SizeMismatch",
    "Truncated",
    "UnrecognizedChunkTag",
    "decode",
]
