"""核心转换功能模块"""

import logging
import os
import tempfile
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .codec import decode_rgba, encode_webp
from .errors import ConversionIOError, InvalidArgumentError

logger = logging.getLogger(__name__)

INPUT_EXTENSIONS = {".png", ".jpg", ".jpeg", ".bmp", ".tiff", ".gif"}
OUTPUT_EXT = ".webp"


class ConversionOutcome(str, Enum):
    SUCCESS = "success"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class ConversionRequest:
    """单个文件的转换请求"""

    input_path: Path
    output_path: Path
    quality: float = 87.0
    lossless: bool = False

    def run(self) -> ConversionOutcome:
        return convert_to_webp(self.input_path, self.output_path, self.quality, self.lossless)


@dataclass(frozen=True)
class ConversionResult:
    """批处理中单个候选文件的结果"""

    path: Path
    outcome: ConversionOutcome
    reason: str = ""

    @property
    def ok(self) -> bool:
        return self.outcome is not ConversionOutcome.FAILED


def is_candidate(path: Path) -> bool:
    """扩展名（不区分大小写）是否属于支持的输入格式"""
    return path.suffix.lower() in INPUT_EXTENSIONS


def _is_regular_file(path: Path) -> bool:
    try:
        return path.is_file()
    except PermissionError:
        logger.debug("无权限访问，跳过：%s", path)
        return False


def find_files(directory: Path) -> list[Path]:
    """
    查找目录下（不递归）可转换的图片文件

    Args:
        directory: 搜索目录

    Returns:
        文件路径列表
    """
    directory = Path(directory)
    try:
        entries = list(directory.iterdir())
    except OSError as e:
        logger.warning("无法读取目录 %s：%s", directory, e)
        return []

    return sorted(f for f in entries if is_candidate(f) and _is_regular_file(f))


def get_output_path(input_file: Path, output_dir: Path) -> Path:
    """输出路径为 {output_dir}/{stem}.webp，原扩展名丢弃"""
    return Path(output_dir) / f"{Path(input_file).stem}{OUTPUT_EXT}"


def _write_atomic(data: bytes, out: Path) -> None:
    """先写临时文件再替换，目标文件要么完整要么不存在"""
    tmp = None
    try:
        # 每个写入者使用独立的临时文件，同名输出互不干扰
        fd, name = tempfile.mkstemp(dir=out.parent, prefix=f".{out.name}.", suffix=".part")
        tmp = Path(name)
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.chmod(tmp, 0o644)
        os.replace(tmp, out)
    except OSError as e:
        if tmp is not None:
            tmp.unlink(missing_ok=True)
        raise ConversionIOError(f"Failed to create file: {out}: {e}", out) from e


def convert_to_webp(
    inp: Path | str, out: Path | str, quality: float, lossless: bool
) -> ConversionOutcome:
    """
    单个图片转 WebP

    Args:
        inp: 输入文件路径
        out: 输出文件路径
        quality: 质量 (0-100)，超出范围会被截断
        lossless: 是否无损编码（忽略 quality）

    Returns:
        SUCCESS，或输出已存在时返回 SKIPPED

    Raises:
        InvalidArgumentError: 输入输出相同，或输入已是 WebP
        DecodeError / EncodeError / ConversionIOError
    """
    inp = Path(inp)
    out = Path(out)

    if os.path.normpath(inp) == os.path.normpath(out):
        raise InvalidArgumentError("Input and output paths must differ.", inp)

    # 输出已存在视为已完成，不校验内容
    if out.exists():
        logger.debug("输出已存在，跳过：%s", out)
        return ConversionOutcome.SKIPPED

    if inp.suffix.lower() == OUTPUT_EXT:
        raise InvalidArgumentError("Input is already a WebP image.", inp)

    pixels = decode_rgba(inp)
    data = encode_webp(pixels, quality, lossless)
    _write_atomic(data, out)
    logger.debug("已转换：%s -> %s (%d 字节)", inp, out, len(data))
    return ConversionOutcome.SUCCESS


convert_single = convert_to_webp
