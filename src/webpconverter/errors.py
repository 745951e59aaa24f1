"""转换错误类型"""

from pathlib import Path


class ConversionError(Exception):
    """所有转换错误的基类，可附带出错的文件路径"""

    def __init__(self, message: str, path: Path | str | None = None):
        super().__init__(message)
        self.path = Path(path) if path is not None else None


class InvalidArgumentError(ConversionError):
    """参数非法：输入输出相同、目录为空、输入已是 WebP"""


class DecodeError(ConversionError):
    """源图片无法解码（损坏或不支持的格式）"""


class EncodeError(ConversionError):
    """WebP 编码失败"""


class ConversionIOError(ConversionError):
    """无法创建/写入目标文件或输出目录"""
