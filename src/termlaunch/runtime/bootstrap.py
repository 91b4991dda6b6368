"""Bootstrap - 集中构造系统组件

职责：
- 创建 TmuxClient（socket、超时）
- 创建 VersionProbe, SessionStateProbe, CommandExecutor 并共享同一个 client
- 返回 RuntimeComponents 供 Launcher 使用

不负责：
- 加载项目文件（由 spec.loader 负责）
- 执行计划（由 Launcher 负责）
"""

from dataclasses import dataclass

from ..adapters.tmux.client import TmuxClient
from ..plan.executor import CommandExecutor
from ..probe.state import SessionStateProbe
from ..probe.version import VersionProbe
from ..telemetry import get_logger

logger = get_logger(__name__)


@dataclass
class RuntimeComponents:
    """Bootstrap 返回的运行时组件集合"""

    client: TmuxClient
    version_probe: VersionProbe
    state_probe: SessionStateProbe
    executor: CommandExecutor


def bootstrap(
    socket_name: str | None = None,
    socket_path: str | None = None,
    tmux_bin: str | None = None,
    timeout: float | None = None,
) -> RuntimeComponents:
    """构造运行时组件

    每次调用都创建新的组件：一次调用对应一次启动，执行器的 ID 表不跨调用复用。

    Args:
        socket_name: tmux -L socket 名称
        socket_path: tmux -S socket 路径（优先于 socket_name）
        tmux_bin: tmux 可执行文件
        timeout: 单条命令超时（秒）

    Returns:
        RuntimeComponents 包含所有构造好的组件
    """
    client = TmuxClient(
        socket_path=socket_path,
        socket_name=socket_name,
        tmux_bin=tmux_bin,
        timeout=timeout,
    )
    components = RuntimeComponents(
        client=client,
        version_probe=VersionProbe(client),
        state_probe=SessionStateProbe(client),
        executor=CommandExecutor(client),
    )
    logger.debug("[Bootstrap] Components created")
    return components
