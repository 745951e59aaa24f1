import pytest
from PIL import Image

from webpconverter.codec import PixelBuffer, clamp_quality, decode_rgba, encode_webp
from webpconverter.errors import DecodeError

from conftest import make_image


@pytest.mark.parametrize(
    "value, expected",
    [(150.0, 100.0), (-10.0, 0.0), (87.0, 87.0), (0, 0.0), (100, 100.0)],
)
def test_clamp_quality(value, expected):
    assert clamp_quality(value) == expected


def test_pixel_buffer_rejects_wrong_length():
    with pytest.raises(ValueError):
        PixelBuffer(2, 2, b"\x00" * 15)


@pytest.mark.parametrize("name, mode", [("a.png", "RGB"), ("b.gif", "P"), ("c.bmp", "RGB"), ("d.tiff", "RGBA")])
def test_decode_always_rgba8(tmp_path, name, mode):
    path = make_image(tmp_path / name, size=(5, 3), mode=mode, color=3 if mode == "P" else (1, 2, 3))
    buf = decode_rgba(path)
    assert (buf.width, buf.height) == (5, 3)
    assert len(buf.pixels) == 5 * 3 * 4


def test_decode_corrupt_file(tmp_path):
    bad = tmp_path / "bad.png"
    bad.write_bytes(b"definitely not a png")
    with pytest.raises(DecodeError) as exc:
        decode_rgba(bad)
    assert exc.value.path == bad
    assert "bad.png" in str(exc.value)


def test_decode_missing_file(tmp_path):
    with pytest.raises(DecodeError):
        decode_rgba(tmp_path / "missing.png")


def test_encode_produces_webp_container():
    buf = PixelBuffer(2, 1, bytes([255, 0, 0, 255, 0, 255, 0, 255]))
    data = encode_webp(buf, 87.0, False)
    assert data[:4] == b"RIFF"
    assert data[8:12] == b"WEBP"


def test_encode_lossless_is_exact(tmp_path):
    pixels = bytes([10, 20, 30, 0, 200, 100, 50, 255, 1, 2, 3, 4, 9, 9, 9, 128])
    data = encode_webp(PixelBuffer(2, 2, pixels), 5.0, True)
    out = tmp_path / "x.webp"
    out.write_bytes(data)
    with Image.open(out) as img:
        assert img.convert("RGBA").tobytes() == pixels


def test_encode_clamps_quality():
    buf = PixelBuffer(3, 2, bytes(range(24)))
    assert encode_webp(buf, 150.0, False) == encode_webp(buf, 100.0, False)
    assert encode_webp(buf, -10.0, False) == encode_webp(buf, 0.0, False)
