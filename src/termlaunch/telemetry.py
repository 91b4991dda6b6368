"""Telemetry - 统一日志和指标入口

提供统一的日志工厂和指标 facade，便于观测性追踪。

日志格式: [Component] msg
指标示例: command.ok, command.failed, command.seconds, hook.failed
"""

import logging
import time
from collections.abc import Iterator
from contextlib import contextmanager

from . import config


def get_logger(name: str) -> logging.Logger:
    """获取带模块前缀的 logger

    Args:
        name: 模块名（通常使用 __name__）

    Returns:
        配置好的 Logger 实例
    """
    return logging.getLogger(name)


def configure_logging(level: str | int | None = None) -> None:
    """安装 Rich 日志 handler（CLI 启动时调用一次）

    Args:
        level: 日志级别，默认取 config.LOG_LEVEL
    """
    from rich.logging import RichHandler

    logging.basicConfig(
        level=level if level is not None else config.LOG_LEVEL,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(show_path=False, rich_tracebacks=False)],
        force=True,
    )


def truncate_command(tokens: list[str] | tuple[str, ...], max_len: int = config.LOG_MAX_CMD_LEN) -> str:
    """格式化命令用于日志输出，超长截断"""
    line = " ".join(tokens)
    if len(line) <= max_len:
        return line
    return line[: max_len - 3] + "..."


class Metrics:
    """进程内指标：计数器 + 耗时统计

    一次启动只有几十条 tmux 命令，直接保存在内存里，CLI 退出即丢弃。
    key 形如 "command.ok{kind=send_keys}"。
    """

    def __init__(self):
        self._counters: dict[str, int] = {}
        self._durations: dict[str, list[float]] = {}

    @staticmethod
    def _key(name: str, labels: dict[str, str] | None) -> str:
        if not labels:
            return name
        return name + "{" + ",".join(f"{k}={labels[k]}" for k in sorted(labels)) + "}"

    def inc(self, name: str, labels: dict[str, str] | None = None, value: int = 1) -> None:
        """计数器 +value"""
        key = self._key(name, labels)
        self._counters[key] = self._counters.get(key, 0) + value

    def observe(self, name: str, seconds: float, labels: dict[str, str] | None = None) -> None:
        """记录一次耗时（如 tmux 命令往返时间）"""
        self._durations.setdefault(self._key(name, labels), []).append(seconds)

    @contextmanager
    def timed(self, name: str, labels: dict[str, str] | None = None) -> Iterator[None]:
        """统计 with 块耗时，异常时同样记录"""
        start = time.monotonic()
        try:
            yield
        finally:
            self.observe(name, time.monotonic() - start, labels)

    def get_counter(self, name: str, labels: dict[str, str] | None = None) -> int:
        return self._counters.get(self._key(name, labels), 0)

    def get_durations(self, name: str, labels: dict[str, str] | None = None) -> list[float]:
        return list(self._durations.get(self._key(name, labels), []))

    def get_all_counters(self) -> dict[str, int]:
        return dict(self._counters)

    def summary(self) -> dict[str, tuple[int, float]]:
        """耗时汇总：key -> (次数, 总秒数)"""
        return {key: (len(values), sum(values)) for key, values in self._durations.items()}

    def reset(self) -> None:
        """清空（测试用）"""
        self._counters.clear()
        self._durations.clear()


metrics = Metrics()
