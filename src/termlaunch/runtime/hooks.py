"""Pre hooks - 创建会话前在本机执行的命令

只在会话将被创建时执行；附加到已存在的会话时不执行。
"""

import asyncio
import logging
import os

from termlaunch import config
from termlaunch.errors import ExecutionError
from termlaunch.telemetry import metrics

logger = logging.getLogger(__name__)


async def run_pre_hooks(lines: tuple[str, ...] | list[str], cwd: str | None = None) -> None:
    """依次执行 pre 命令

    Args:
        lines: shell 命令行
        cwd: 工作目录（会话 root），不存在时使用当前目录

    Raises:
        ExecutionError: 任一命令非零退出或超时
    """
    if cwd and not os.path.isdir(cwd):
        logger.warning(f"[Hooks] root {cwd!r} does not exist, running pre hooks in current directory")
        cwd = None

    for line in lines:
        logger.info(f"[Hooks] pre: {line}")
        try:
            proc = await asyncio.create_subprocess_shell(
                line,
                cwd=cwd,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            metrics.inc("hook.failed")
            raise ExecutionError(line, str(e)) from e

        try:
            _, stderr = await asyncio.wait_for(proc.communicate(), timeout=config.HOOK_TIMEOUT_SECONDS)
        except asyncio.TimeoutError:
            proc.kill()
            await proc.wait()
            metrics.inc("hook.failed")
            raise ExecutionError(line, f"timed out after {config.HOOK_TIMEOUT_SECONDS}s") from None

        if proc.returncode != 0:
            metrics.inc("hook.failed")
            message = stderr.decode(errors="replace") or f"exit code {proc.returncode}"
            raise ExecutionError(line, message)
        metrics.inc("hook.ok")
