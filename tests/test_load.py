import pytest
import os
import goxutil

MODEL_DIR = os.path.join(os.path.dirname(__file__), "models")

# find all models
MODEL_PATHS = []
for root, dirs, files in os.walk(MODEL_DIR):
    for file in files:
        if file.endswith(".gox"):
            MODEL_PATHS.append(os.path.join(root, file))


@pytest.mark.parametrize("model_path", MODEL_PATHS)
def test_read(model_path):
    gox_file = goxutil.GoxFile.read(model_path)

    # every model is fully consumed
    assert gox_file.remaining == b""


def test_read_empty():
    gox_file = goxutil.GoxFile.read(os.path.join(MODEL_DIR, "empty.gox"))

    assert gox_file.version == 2
    assert gox_file.chunks == []


def test_read_image_only():
    gox_file = goxutil.GoxFile.read(os.path.join(MODEL_DIR, "image_only.gox"))

    assert gox_file.chunks == [goxutil.ImageChunk({"A": b""})]


def test_read_scene():
    gox_file = goxutil.GoxFile.read(os.path.join(MODEL_DIR, "scene.gox"))

    assert gox_file.version == 2
    assert [type(chunk) for chunk in gox_file.chunks] == [
        goxutil.PreviewChunk,
        goxutil.BlockPaletteChunk,
        goxutil.LayerChunk,
        goxutil.CameraChunk,
        goxutil.LightChunk,
    ]

    preview, palette, layer, camera, light = gox_file.chunks
    assert preview.data == b"PNG"
    assert palette.data == b"\xaa\xbb"
    assert layer.blocks == [goxutil.Block(0, 1, 2, -3)]
    assert layer.dict == {"name": b"L1"}
    assert camera.dict == {"dist": b"\x00\x00\x80\x3f"}
    assert light.dict == {"intensity": b"\x05"}


def test_read_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        goxutil.GoxFile.read(str(tmp_path / "missing.gox"))
