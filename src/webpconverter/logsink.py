"""进度日志：多线程追加，单一消费者按顺序投递给观察者"""

import logging
import queue
import threading
from typing import Callable

logger = logging.getLogger(__name__)

LogObserver = Callable[[str], None]

_SENTINEL = object()


class LogSink:
    """
    线程安全的只追加日志流

    append() 只是入队；由一个消费线程独占观察者并按入队顺序调用，
    close() 返回时所有已追加的行都已投递。
    """

    def __init__(self, observer: LogObserver | None = None):
        self.observer = observer
        self._queue: queue.Queue = queue.Queue()
        self._closed = False
        self._lock = threading.Lock()
        self._consumer = threading.Thread(target=self._drain, name="logsink", daemon=True)
        self._consumer.start()

    def append(self, line: str) -> None:
        with self._lock:
            if self._closed:
                raise RuntimeError("LogSink 已关闭")
            self._queue.put(line)

    def _drain(self) -> None:
        while True:
            line = self._queue.get()
            if line is _SENTINEL:
                return
            if self.observer is None:
                continue
            try:
                self.observer(line)
            except Exception:
                logger.exception("日志观察者处理失败：%r", line)

    def close(self) -> None:
        """停止接收并等待所有行投递完毕"""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._queue.put(_SENTINEL)
        self._consumer.join()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


class LogBuffer:
    """把日志行镜像到内存，供界面显示"""

    def __init__(self):
        self._lines: list[str] = []
        self._lock = threading.Lock()

    def __call__(self, line: str) -> None:
        with self._lock:
            self._lines.append(line)

    def lines(self) -> list[str]:
        with self._lock:
            return list(self._lines)

    def clear(self) -> None:
        with self._lock:
            self._lines.clear()

    def text(self, errors_only: bool = False) -> str:
        """
        拼接为文本

        Args:
            errors_only: 只保留非 "Converted" 开头的行
        """
        lines = "\n".join(self.lines()).splitlines()
        if errors_only:
            lines = [line for line in lines if not line.startswith("Converted")]
        return "\n".join(lines)
