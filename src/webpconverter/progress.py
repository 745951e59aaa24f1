"""批量转换执行模块"""

import logging
import os
import time
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import List

from . import converter
from .converter import ConversionOutcome, ConversionResult
from .errors import ConversionError, ConversionIOError, InvalidArgumentError
from .logsink import LogObserver, LogSink

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BatchSummary:
    """批处理汇总"""

    success_count: int = 0
    error_count: int = 0
    total: int = 0

    @classmethod
    def from_results(cls, results: List[ConversionResult]) -> "BatchSummary":
        ok = sum(1 for r in results if r.ok)
        return cls(success_count=ok, error_count=len(results) - ok, total=len(results))

    def report(self) -> str:
        return (
            "\nFinished processing all files\n"
            f"Success: {self.success_count}\n"
            f"Errors: {self.error_count}\n"
            f"Total: {self.total}"
        )


class BatchProcessor:
    """批量处理器（多线程）"""

    def __init__(self, max_workers: int | None = None):
        """
        Args:
            max_workers: 最大工作线程数，默认为 CPU 数
        """
        self.max_workers = max_workers or os.cpu_count() or 1

    def process(
        self,
        input_dir: Path | str,
        output_dir: Path | str,
        quality: float,
        lossless: bool,
        log_observer: LogObserver | None = None,
    ) -> BatchSummary:
        """
        转换目录下所有图片

        单个文件失败只记录日志并计数，不会中断批处理。

        Raises:
            InvalidArgumentError: 输入或输出目录为空
            ConversionIOError: 无法创建输出目录
        """
        with LogSink(log_observer) as sink:
            return self._run(input_dir, output_dir, quality, lossless, sink)

    def _run(self, input_dir, output_dir, quality, lossless, sink: LogSink) -> BatchSummary:
        if input_dir is None or not str(input_dir):
            raise InvalidArgumentError("Input path is empty.")
        if output_dir is None or not str(output_dir):
            raise InvalidArgumentError("Output path is empty.")

        input_dir = Path(input_dir)
        output_dir = Path(output_dir)

        sink.append(f"Starting conversion from: {input_dir}")
        try:
            output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ConversionIOError(f"Failed to create output directory: {output_dir}: {e}", output_dir) from e

        files = converter.find_files(input_dir)
        sink.append(f"Found {len(files)} files to convert\n")

        tasks = [(f, converter.get_output_path(f, output_dir)) for f in files]
        start_time = time.time()

        # with 块退出时等待全部任务完成
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = [
                executor.submit(self._convert_file, inp, out, quality, lossless, sink)
                for inp, out in tasks
            ]
        results = [f.result() for f in futures]

        summary = BatchSummary.from_results(results)
        sink.append(summary.report())
        logger.info(
            "批处理完成：%s 成功 %d，失败 %d，耗时 %.1f 秒",
            input_dir, summary.success_count, summary.error_count, time.time() - start_time,
        )
        return summary

    @staticmethod
    def _convert_file(
        inp: Path, out: Path, quality: float, lossless: bool, sink: LogSink
    ) -> ConversionResult:
        """转换单个文件，任何异常都转为失败结果"""
        try:
            outcome = converter.convert_to_webp(inp, out, quality, lossless)
        except ConversionError as e:
            sink.append(f"Error: {e}")
            return ConversionResult(inp, ConversionOutcome.FAILED, str(e))
        except Exception as e:
            logger.exception("转换 %s 时出现意外错误", inp)
            sink.append(f"Error: {e}")
            return ConversionResult(inp, ConversionOutcome.FAILED, str(e))

        sink.append(f"Converted: {inp}")
        return ConversionResult(inp, outcome)

    def submit(
        self,
        input_dir: Path | str,
        output_dir: Path | str,
        quality: float,
        lossless: bool,
        log_observer: LogObserver | None = None,
    ) -> "Future[BatchSummary]":
        """
        在后台线程运行整个批处理，调用方不阻塞

        致命错误会先以 "Fatal error: ..." 写入日志，再设置到 Future 上。
        """
        runner = ThreadPoolExecutor(max_workers=1, thread_name_prefix="batch")

        def job() -> BatchSummary:
            with LogSink(log_observer) as sink:
                try:
                    return self._run(input_dir, output_dir, quality, lossless, sink)
                except ConversionError as e:
                    sink.append(f"Fatal error: {e}")
                    raise

        future = runner.submit(job)
        runner.shutdown(wait=False)
        return future


def convert_directory(
    input_dir: Path | str,
    output_dir: Path | str,
    quality: float,
    lossless: bool,
    log_observer: LogObserver | None = None,
) -> BatchSummary:
    """用默认线程数转换整个目录"""
    return BatchProcessor().process(input_dir, output_dir, quality, lossless, log_observer)
