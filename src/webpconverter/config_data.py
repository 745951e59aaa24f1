"""配置处理模块"""

import json
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_QUALITY = 87.0


@dataclass
class TaskConfig:
    """任务配置"""

    name: str = "未命名"
    input_path: str = ""
    output_path: str | None = None
    quality: float = DEFAULT_QUALITY
    lossless: bool = False
    enabled: bool = True

    @classmethod
    def from_dict(cls, data: dict) -> "TaskConfig":
        """从字典创建配置"""
        return cls(
            name=data.get("name", "未命名"),
            input_path=data.get("input_path", ""),
            output_path=data.get("output_path"),
            quality=float(data.get("quality", DEFAULT_QUALITY)),
            lossless=bool(data.get("lossless", False)),
            enabled=data.get("enabled", True),
        )

    def resolve_output_path(self) -> Path:
        """解析输出路径，如果未指定则放到输入目录下的 converted_webp"""
        if self.output_path:
            return Path(self.output_path)
        return Path(self.input_path) / "converted_webp"

    @property
    def mode_description(self) -> str:
        if self.lossless:
            return "无损"
        return f"有损 (质量 {self.quality:g})"


@dataclass
class AppConfig:
    """应用配置"""

    tasks: list[TaskConfig] = field(default_factory=list)

    @classmethod
    def from_file(cls, path: Path) -> "AppConfig":
        """从文件加载配置"""
        with open(path, encoding="utf-8") as f:
            return cls.from_json(f.read())

    @classmethod
    def from_json(cls, json_str: str) -> "AppConfig":
        """从 JSON 字符串加载配置"""
        data = json.loads(json_str)
        tasks_data = data.get("tasks", [])
        return cls(tasks=[TaskConfig.from_dict(t) for t in tasks_data])

    def get_enabled_tasks(self) -> list[TaskConfig]:
        """获取所有启用的任务"""
        return [t for t in self.tasks if t.enabled]
