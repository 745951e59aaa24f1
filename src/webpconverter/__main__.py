#!/usr/bin/env python3
"""
WebP 批量转换器 - 配置文件版本
用法：uv run python -m webpconverter -c config.json
"""

import argparse
import logging
import os
import sys
from pathlib import Path

from .config_data import AppConfig, TaskConfig
from .errors import ConversionError
from .progress import BatchProcessor, BatchSummary


def _print_line(line: str) -> None:
    print(line, flush=True)


def _print_errors_only(line: str) -> None:
    if not line.startswith("Converted"):
        print(line, flush=True)


def run_task(task: TaskConfig, processor: BatchProcessor, errors_only: bool = False) -> BatchSummary | None:
    """执行单个任务，致命错误时返回 None"""
    output_dir = task.resolve_output_path() if task.input_path else ""
    separator = "=" * 60
    print(f"\n{separator}", flush=True)
    print(f"📋 任务：{task.name}", flush=True)
    print(f"   输入：{task.input_path}", flush=True)
    print(f"   输出：{output_dir}", flush=True)
    print(f"   模式：{task.mode_description}", flush=True)
    print(f"{separator}", flush=True)

    observer = _print_errors_only if errors_only else _print_line
    try:
        return processor.process(task.input_path, output_dir, task.quality, task.lossless, observer)
    except ConversionError as e:
        print(f"Fatal error: {e}", flush=True)
        return None


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="WebP 批量转换器")
    p.add_argument("-c", "--config", type=Path, required=True, help="配置文件")
    p.add_argument("--errors-only", action="store_true", help="只显示错误日志")
    p.add_argument("-j", "--workers", type=int, default=None, help="线程数，默认 CPU 数")
    args = p.parse_args(argv)

    level = os.getenv("WEBPCONVERTER_LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    if not args.config.exists():
        print(f"❌ 配置不存在：{args.config}", flush=True)
        return 1

    try:
        cfg = AppConfig.from_file(args.config)
    except (OSError, ValueError) as e:
        print(f"❌ 配置无法解析：{args.config} - {e}", flush=True)
        return 1

    tasks = cfg.get_enabled_tasks()
    if not tasks:
        print("⚠️  无任务", flush=True)
        return 0

    print("=" * 60, flush=True)
    print("🚀 WebP 批量转换器", flush=True)
    print("=" * 60, flush=True)
    print(f"📁 配置：{args.config}", flush=True)
    print(f"📝 任务：{len(tasks)}", flush=True)

    processor = BatchProcessor(max_workers=args.workers)
    ok = fail = 0
    for t in tasks:
        summary = run_task(t, processor, args.errors_only)
        if summary is None:
            fail += 1
            continue
        ok += summary.success_count
        fail += summary.error_count

    print("\n" + "=" * 60, flush=True)
    print(f"📊 总计：成功{ok}, 失败{fail}", flush=True)
    print("=" * 60, flush=True)
    return 0 if fail == 0 else 1


if __name__ == "__main__":
    sys.exit(main())
