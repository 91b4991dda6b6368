"""Command executor.

Runs a CommandPlan against tmux one command at a time. Create commands print
the ids tmux assigned (-P -F); those are recorded in an IdentifierTable and
substituted into every later command that refers to the same logical target.

The first rejected command stops the run with ExecutionError. Nothing that
was already created is torn down.
"""

import logging

from termlaunch import config
from termlaunch.adapters.tmux.client import TmuxClient, TmuxError
from termlaunch.errors import ExecutionError
from termlaunch.telemetry import metrics, truncate_command

from .types import CommandKind, CommandPlan, CompiledCommand, Placeholder, Token

logger = logging.getLogger(__name__)


class IdentifierTable:
    """Logical plan id -> real tmux id ("w1.p0" -> "%7")."""

    def __init__(self):
        self._ids: dict[str, str] = {}

    def bind(self, logical_id: str, real_id: str) -> None:
        self._ids[logical_id] = real_id

    def get(self, logical_id: str) -> str | None:
        return self._ids.get(logical_id)

    def __contains__(self, logical_id: str) -> bool:
        return logical_id in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def resolve(self, token: Token) -> str:
        """Turn a token into a literal argument.

        Raises:
            KeyError: If a placeholder's logical id has not been bound.
        """
        if isinstance(token, Placeholder):
            return token.render(self._ids[token.logical_id])
        return token

    def as_dict(self) -> dict[str, str]:
        return dict(self._ids)


class CommandExecutor:
    """Executes plans sequentially against one tmux server."""

    def __init__(self, client: TmuxClient):
        self._client = client
        self._table = IdentifierTable()

    @property
    def identifiers(self) -> IdentifierTable:
        """Ids resolved so far (kept after a failure for diagnostics)."""
        return self._table

    async def execute(self, plan: CommandPlan) -> None:
        """Run every command of a plan in order.

        Args:
            plan: Plan from CommandCompiler.

        Raises:
            ExecutionError: On the first command tmux rejects.
        """
        logger.info(f"[Executor] session {plan.session!r}: running {len(plan)} commands")
        for position, command in enumerate(plan):
            argv = self._resolve_args(command)
            if command.kind == CommandKind.ATTACH:
                await self._attach(command, argv)
            else:
                await self._run(position, command, argv)
            metrics.inc("command.ok", {"kind": command.kind.value})

    def _resolve_args(self, command: CompiledCommand) -> list[str]:
        try:
            return [self._table.resolve(tok) for tok in command.args]
        except KeyError as e:
            metrics.inc("command.failed", {"kind": command.kind.value})
            raise ExecutionError(command.display(), f"target {e.args[0]!r} was never created") from None

    async def _run(self, position: int, command: CompiledCommand, argv: list[str]) -> None:
        line = truncate_command(argv)
        logger.debug(f"[Executor] #{position} {command.kind.value}: {line}")

        try:
            with metrics.timed("command.seconds", {"kind": command.kind.value}):
                result = await self._client.run(*argv)
        except TmuxError as e:
            metrics.inc("command.failed", {"kind": command.kind.value})
            raise ExecutionError(line, str(e)) from e

        if not result.ok:
            metrics.inc("command.failed", {"kind": command.kind.value})
            logger.warning(f"[Executor] tmux rejected #{position}: {line}: {result.stderr.strip()}")
            raise ExecutionError(line, result.stderr or f"exit code {result.returncode}")

        if command.binds:
            self._bind(command, line, result.stdout)

    def _bind(self, command: CompiledCommand, line: str, stdout: str) -> None:
        fields = stdout.strip().split(config.FIELD_SEP)
        if len(fields) != len(command.binds) or not all(fields):
            metrics.inc("command.failed", {"kind": command.kind.value})
            raise ExecutionError(line, f"unexpected tmux response {stdout.strip()!r}")
        for logical_id, real_id in zip(command.binds, fields):
            self._table.bind(logical_id, real_id)
            logger.debug(f"[Executor] {logical_id} -> {real_id}")

    async def _attach(self, command: CompiledCommand, argv: list[str]) -> None:
        line = truncate_command(argv)
        logger.debug(f"[Executor] attach: {line}")
        try:
            code = await self._client.attach(*argv)
        except TmuxError as e:
            metrics.inc("command.failed", {"kind": command.kind.value})
            raise ExecutionError(line, str(e)) from e
        if code != 0:
            metrics.inc("command.failed", {"kind": command.kind.value})
            raise ExecutionError(line, f"exit code {code}")
