import random
from pathlib import Path

import pytest
from PIL import Image


def make_image(path: Path, size=(16, 12), mode="RGB", color=(200, 40, 90)) -> Path:
    fmt = {".jpg": "JPEG", ".jpeg": "JPEG", ".gif": "GIF", ".bmp": "BMP",
           ".tiff": "TIFF", ".webp": "WEBP"}.get(path.suffix.lower(), "PNG")
    if mode == "RGBA" and len(color) == 3:
        color = (*color, 128)
    with Image.new(mode, size, color) as img:
        img.save(path, format=fmt)
    return path


def make_noise_rgba(path: Path, size=(24, 18), seed=7) -> Path:
    rng = random.Random(seed)
    data = bytes(rng.randrange(256) for _ in range(size[0] * size[1] * 4))
    with Image.frombytes("RGBA", size, data) as img:
        img.save(path, format="PNG")
    return path


@pytest.fixture
def input_dir(tmp_path):
    d = tmp_path / "input"
    d.mkdir()
    return d


@pytest.fixture
def output_dir(tmp_path):
    return tmp_path / "output"
