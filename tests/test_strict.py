import struct
import zlib

import pytest
import goxutil
from goxutil.options import STRICT, DecodeOptions


def u32(n: int) -> bytes:
    return struct.pack("<I", n)


def entry(key: bytes, value: bytes) -> bytes:
    return u32(len(key)) + key + u32(len(value)) + value


HEADER = b"GOX \x02\x00\x00\x00"


def goxel_chunk(tag: bytes, content: bytes, crc=None) -> bytes:
    """Frame a chunk the way the Goxel writer does: size covers the content."""
    body = u32(len(content)) + content
    if crc is None:
        crc = zlib.crc32(body)
    return tag + body + u32(crc)


def goxel_dict(*entries: bytes) -> bytes:
    return b"".join(entries) + u32(0)


def test_strict_size_reads_goxel_layout():
    data = (
        HEADER
        + goxel_chunk(b"IMG ", goxel_dict(entry(b"box", b"\x01" * 8)))
        + goxel_chunk(b"PREV", b"\x89PNG")
        + goxel_chunk(
            b"LAYR",
            u32(1)
            + struct.pack("<5i", 0, 16, 0, -16, 0)
            + goxel_dict(entry(b"name", b"layer"), entry(b"id", b"\x01\x00\x00\x00")),
        )
        + goxel_chunk(b"CAMR", goxel_dict(entry(b"name", b"cam")))
        + goxel_chunk(b"LIGH", goxel_dict(entry(b"yaw", b"\x00\x00\x00\x00")))
    )

    gox_file = goxutil.decode(data, STRICT)

    assert gox_file.chunks == [
        goxutil.ImageChunk({"box": b"\x01" * 8}),
        goxutil.PreviewChunk(b"\x89PNG"),
        goxutil.LayerChunk(
            [goxutil.Block(0, 16, 0, -16)],
            {"name": b"layer", "id": b"\x01\x00\x00\x00"},
        ),
        goxutil.CameraChunk({"name": b"cam"}),
        goxutil.LightChunk({"yaw": b"\x00\x00\x00\x00"}),
    ]
    assert gox_file.remaining == b""


def test_lenient_stops_after_goxel_dict_terminator():
    first = goxel_chunk(b"CAMR", goxel_dict(entry(b"name", b"a")))
    second = goxel_chunk(b"CAMR", goxel_dict(entry(b"name", b"b")))

    gox_file = goxutil.decode(HEADER + first + second)

    # the terminator is taken as the checksum, the real checksum then ends the loop
    assert gox_file.chunks == [goxutil.CameraChunk({"name": b"a"})]
    assert gox_file.remaining == first[-4:] + second


def test_strict_size_leftover_bytes():
    content = goxel_dict(entry(b"name", b"a")) + b"\xff\xff"
    data = HEADER + goxel_chunk(b"LIGH", content)

    with pytest.raises(goxutil.SizeMismatch) as excinfo:
        goxutil.decode(data, DecodeOptions(strict_size=True))

    assert excinfo.value.tag == b"LIGH"
    assert excinfo.value.declared == len(content)
    assert excinfo.value.leftover == 2


def test_strict_size_without_terminator():
    data = HEADER + goxel_chunk(b"IMG ", entry(b"A", b""))

    gox_file = goxutil.decode(data, DecodeOptions(strict_size=True))

    assert gox_file.chunks == [goxutil.ImageChunk({"A": b""})]


def test_strict_size_larger_than_data():
    data = HEADER + b"CAMR" + u32(100) + goxel_dict(entry(b"a", b"b")) + u32(0)

    with pytest.raises(goxutil.Truncated):
        goxutil.decode(data, DecodeOptions(strict_size=True))


def test_strict_size_truncated_entry():
    content = goxel_dict(entry(b"a", b"1")) + entry(b"b", b"22")[:-1]

    with pytest.raises(goxutil.SizeMismatch):
        goxutil.decode(
            HEADER + goxel_chunk(b"CAMR", content), DecodeOptions(strict_size=True)
        )


def test_strict_size_layer_block_count():
    content = u32(2) + struct.pack("<5i", 0, 0, 0, 0, 0) + goxel_dict(entry(b"a", b""))

    with pytest.raises(goxutil.InvalidBlockCount):
        goxutil.decode(
            HEADER + goxel_chunk(b"LAYR", content), DecodeOptions(strict_size=True)
        )


def test_verify_checksum():
    chunk = goxel_chunk(b"BL16", b"\x00" * 16)

    gox_file = goxutil.decode(HEADER + chunk, DecodeOptions(verify_checksum=True))

    assert gox_file.chunks == [goxutil.BlockPaletteChunk(b"\x00" * 16)]


def test_verify_checksum_lenient_layout():
    body = u32(9) + entry(b"A", b"")
    data = HEADER + b"IMG " + body + u32(zlib.crc32(body))

    gox_file = goxutil.decode(data, DecodeOptions(verify_checksum=True))

    assert gox_file.chunks == [goxutil.ImageChunk({"A": b""})]


def test_verify_checksum_mismatch():
    content = b"\x89PNG"
    chunk = goxel_chunk(b"PREV", content, crc=0)

    with pytest.raises(goxutil.ChecksumMismatch) as excinfo:
        goxutil.decode(HEADER + chunk, DecodeOptions(verify_checksum=True))

    assert excinfo.value.stored == 0
    assert excinfo.value.computed == zlib.crc32(u32(len(content)) + content)

    # unchecked by default
    assert goxutil.decode(HEADER + chunk).chunks == [goxutil.PreviewChunk(content)]


def test_reject_trailing_data():
    data = HEADER + goxel_chunk(b"PREV", b"") + b"MATE"

    with pytest.raises(goxutil.UnrecognizedChunkTag) as excinfo:
        goxutil.decode(data, DecodeOptions(reject_trailing_data=True))

    assert excinfo.value.tag == b"MATE"
    assert excinfo.value.offset == len(HEADER) + 12


def test_reject_trailing_data_clean_file():
    gox_file = goxutil.decode(HEADER, DecodeOptions(reject_trailing_data=True))

    assert gox_file.chunks == []
