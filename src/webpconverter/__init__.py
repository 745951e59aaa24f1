"""
WebP 批量转换器 - PNG/JPEG/BMP/TIFF/GIF → WebP

示例用法:
    from webpconverter import convert_single, convert_directory

    # 单个文件转换
    convert_single("input.png", "output.webp", quality=87, lossless=False)

    # 批量转换，日志逐行回调
    summary = convert_directory("/path/to/photos", "/path/to/out", 87, False, print)

    # 后台运行，调用方不阻塞
    from webpconverter import BatchProcessor, LogBuffer

    log = LogBuffer()
    future = BatchProcessor().submit("/path/to/photos", "/path/to/out", 87, False, log)
    summary = future.result()
    print(log.text(errors_only=True))
"""

__version__ = "1.0.0"

from .codec import PixelBuffer, clamp_quality, decode_rgba, encode_webp
from .converter import (
    INPUT_EXTENSIONS,
    ConversionOutcome,
    ConversionRequest,
    ConversionResult,
    convert_single,
    convert_to_webp,
    find_files,
    get_output_path,
    is_candidate,
)
from .errors import (
    ConversionError,
    ConversionIOError,
    DecodeError,
    EncodeError,
    InvalidArgumentError,
)
from .logsink import LogBuffer, LogSink
from .progress import BatchProcessor, BatchSummary, convert_directory

__all__ = [
    "__version__",
    "INPUT_EXTENSIONS",
    "BatchProcessor",
    "BatchSummary",
    "ConversionError",
    "ConversionIOError",
    "ConversionOutcome",
    "ConversionRequest",
    "ConversionResult",
    "DecodeError",
    "EncodeError",
    "InvalidArgumentError",
    "LogBuffer",
    "LogSink",
    "PixelBuffer",
    "clamp_quality",
    "convert_directory",
    "convert_single",
    "convert_to_webp",
    "decode_rgba",
    "encode_webp",
    "find_files",
    "get_output_path",
    "is_candidate",
]
