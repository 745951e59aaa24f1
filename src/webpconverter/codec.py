"""Pillow 编解码封装：任意栅格图 → RGBA8 像素，RGBA8 像素 → WebP 字节"""

from dataclasses import dataclass
from io import BytesIO
from pathlib import Path

from PIL import Image

from .errors import DecodeError, EncodeError

MIN_QUALITY = 0.0
MAX_QUALITY = 100.0


@dataclass(frozen=True)
class PixelBuffer:
    """解码后的图像，像素按 RGBA8 排列"""

    width: int
    height: int
    pixels: bytes

    def __post_init__(self):
        expected = self.width * self.height * 4
        if len(self.pixels) != expected:
            raise ValueError(
                f"像素长度不匹配：{len(self.pixels)} != {self.width}x{self.height}x4"
            )


def clamp_quality(quality: float) -> float:
    """把质量限制在 [0, 100]"""
    return max(MIN_QUALITY, min(MAX_QUALITY, float(quality)))


def decode_rgba(path: Path) -> PixelBuffer:
    """
    解码图片为 RGBA8 像素缓冲

    Args:
        path: 输入文件路径

    Returns:
        PixelBuffer（动图只取第一帧）
    """
    try:
        with Image.open(path) as img:
            img.seek(0)
            rgba = img.convert("RGBA")
        with rgba:
            return PixelBuffer(rgba.width, rgba.height, rgba.tobytes())
    except (OSError, ValueError, Image.DecompressionBombError) as e:
        raise DecodeError(f"Failed to decode {path}: {e}", path) from e


def encode_webp(buffer: PixelBuffer, quality: float, lossless: bool) -> bytes:
    """
    RGBA8 像素编码为 WebP

    Args:
        buffer: 像素缓冲
        quality: 有损质量 (0-100)，无损模式下忽略
        lossless: 是否无损

    Returns:
        WebP 容器字节
    """
    if lossless:
        save_kw = {"format": "WEBP", "lossless": True, "exact": True}
    else:
        save_kw = {"format": "WEBP", "quality": clamp_quality(quality)}

    try:
        img = Image.frombytes("RGBA", (buffer.width, buffer.height), buffer.pixels)
        out = BytesIO()
        with img:
            img.save(out, **save_kw)
        return out.getvalue()
    except (OSError, ValueError) as e:
        raise EncodeError(f"Failed to encode WebP: {e}") from e
