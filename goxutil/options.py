"""Decode options for .gox files."""

from dataclasses import dataclass


@dataclass(frozen=True)
class DecodeOptions:
    """Switches that tighten decoding.

    The defaults decode exactly what the reference Goxel reader accepts:
    declared chunk sizes and checksums are read but never checked, and bytes
    after the last recognized chunk are left in `GoxFile.remaining`.
    """

    # decode dictionary chunk bodies inside their declared size
    strict_size: bool = False
    # compare each chunk's trailing field against crc32 of its body
    verify_checksum: bool = False
    # raise UnrecognizedChunkTag instead of stopping at unknown bytes
    reject_trailing_data: bool = False


STRICT = DecodeOptions(
    strict_size=True, verify_checksum=True, reject_trailing_data=True
)
