"""Launcher - 从 SessionSpec 到运行中的 tmux 会话

流程：
1. VersionProbe + SessionStateProbe 获取外部事实
2. resolve + compile 生成 CommandPlan
3. 新会话：执行 pre hooks，再执行计划
4. 附加（除非 detached）

失败时不回滚：已创建的部分保留，重复执行会走 attach 分支。
"""

from dataclasses import dataclass

from ..plan.capabilities import CapabilityProfile
from ..plan.compiler import attach_plan, compile_plan
from ..plan.resolver import ResolvedSpec, resolve
from ..plan.types import CommandPlan
from ..spec.models import SessionSpec
from ..telemetry import get_logger, metrics
from .bootstrap import RuntimeComponents
from .hooks import run_pre_hooks

logger = get_logger(__name__)


@dataclass
class LaunchResult:
    """一次启动的结果

    Attributes:
        session: 会话名
        plan: 编译出的计划
        profile: tmux capability profile
        created: 是否创建了新会话
        attached: 是否已附加到会话
        downgraded: 布局被降级的窗口索引
    """

    session: str
    plan: CommandPlan
    profile: CapabilityProfile
    created: bool = False
    attached: bool = False
    downgraded: tuple[int, ...] = ()


class Launcher:
    """Orchestrates one launch: probe, plan, execute, attach."""

    def __init__(self, components: RuntimeComponents):
        self._components = components

    async def plan(self, spec: SessionSpec) -> tuple[ResolvedSpec, CommandPlan]:
        """Probe tmux and compile the plan for a spec without running it.

        Raises:
            ProbeError: tmux unreachable or version unparsable.
            CapabilityError: A required feature is unsupported.
        """
        profile = await self._components.version_probe.probe()
        live = await self._components.state_probe.snapshot(spec.name)
        resolved = resolve(spec, profile)
        return resolved, compile_plan(resolved, live)

    async def launch(self, spec: SessionSpec, attach: bool = True, dry_run: bool = False) -> LaunchResult:
        """Create or attach to the session described by spec.

        Args:
            spec: Session to launch.
            attach: Attach the terminal once the session exists.
            dry_run: Only compile; nothing is sent to tmux.

        Returns:
            LaunchResult describing what happened.

        Raises:
            ProbeError, CapabilityError, ExecutionError
        """
        resolved, plan = await self.plan(spec)
        result = LaunchResult(
            session=spec.name,
            plan=plan,
            profile=resolved.profile,
            downgraded=resolved.downgraded,
        )
        if dry_run:
            return result

        executor = self._components.executor
        if plan.is_attach_only:
            if attach:
                await executor.execute(plan)
                result.attached = True
            else:
                logger.info(f"[Launcher] session {spec.name!r} is already running")
            return result

        if spec.pre:
            await run_pre_hooks(spec.pre, cwd=spec.root)
        await executor.execute(plan)
        result.created = True
        logger.info(f"[Launcher] session {spec.name!r} created")
        logger.debug(f"[Launcher] tmux timings (count, seconds): {metrics.summary()}")

        if attach:
            await executor.execute(attach_plan(spec.name, resolved.profile))
            result.attached = True
        return result
