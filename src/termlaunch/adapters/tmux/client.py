"""Tmux client for subprocess-based tmux interaction."""

import asyncio
import logging
import os
from dataclasses import dataclass

from termlaunch import config

logger = logging.getLogger(__name__)

_FIELD_SEP = config.FIELD_SEP


class TmuxError(Exception):
    """Raised when the tmux binary cannot be run or does not answer in time."""

    pass


@dataclass(frozen=True)
class TmuxResult:
    """Outcome of one tmux invocation."""

    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


def session_target(name: str) -> str:
    """Exact-match target for a session name ("dev" must not match "devops")."""
    return f"={name}"


class TmuxClient:
    """Client for interacting with tmux via subprocess commands.

    Provides async methods for:
    - Running arbitrary control commands with a bounded wait
    - Querying the version string
    - Listing sessions, windows and panes of one session
    - Attaching (or switching) the current terminal to a session
    """

    def __init__(
        self,
        socket_path: str | None = None,
        socket_name: str | None = None,
        tmux_bin: str | None = None,
        timeout: float | None = None,
    ):
        """Initialize TmuxClient.

        Args:
            socket_path: Optional tmux socket path (-S). If None, uses default socket.
            socket_name: Optional tmux socket name (-L). Ignored when socket_path is set.
            tmux_bin: tmux executable, default from config.
            timeout: Seconds to wait for each command, default from config.
        """
        self._socket_path = socket_path
        self._socket_name = socket_name
        self._tmux_bin = tmux_bin or config.TMUX_BIN
        self._timeout = timeout if timeout is not None else config.COMMAND_TIMEOUT_SECONDS

    def command(self, *args: str) -> list[str]:
        """Build the full argv for a tmux command."""
        cmd = [self._tmux_bin]
        if self._socket_path:
            cmd.extend(["-S", self._socket_path])
        elif self._socket_name:
            cmd.extend(["-L", self._socket_name])
        cmd.extend(args)
        return cmd

    async def run(self, *args: str) -> TmuxResult:
        """Execute a tmux command.

        Args:
            *args: Command arguments (e.g., "list-windows", "-t", "=dev", "-F", "...")

        Returns:
            TmuxResult with exit code and decoded output.

        Raises:
            TmuxError: If tmux cannot be started or exceeds the timeout.
        """
        cmd = self.command(*args)

        try:
            proc = await asyncio.create_subprocess_exec(
                *cmd,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise TmuxError(f"cannot run {self._tmux_bin}: {e}") from e

        try:
            stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=self._timeout)
        except asyncio.TimeoutError:
            proc.kill()
            await proc.wait()
            raise TmuxError(f"tmux timed out after {self._timeout}s: {' '.join(cmd)}") from None

        result = TmuxResult(
            returncode=proc.returncode if proc.returncode is not None else -1,
            stdout=stdout.decode(errors="replace"),
            stderr=stderr.decode(errors="replace"),
        )
        if not result.ok:
            logger.debug(f"tmux command failed: {' '.join(cmd)}: {result.stderr.strip()}")
        return result

    async def version(self) -> str:
        """Get the raw version string (e.g., "tmux 3.0a").

        Raises:
            TmuxError: If tmux cannot be run or rejects -V.
        """
        result = await self.run("-V")
        if not result.ok:
            raise TmuxError(f"tmux -V failed: {result.stderr.strip()}")
        return result.stdout.strip()

    async def list_sessions(self) -> TmuxResult:
        """List session names, one per line.

        Returned raw so callers can tell "no server running" apart from
        other failures.
        """
        return await self.run("list-sessions", "-F", "#{session_name}")

    async def list_windows(self, session: str) -> list[dict]:
        """List the windows of one session.

        Args:
            session: Session name (matched exactly).

        Returns:
            List of window dicts with keys:
            - window_id: str (e.g., "@3")
            - window_index: int
            - window_name: str
            - active: bool
        """
        fmt = _FIELD_SEP.join(["#{window_id}", "#{window_index}", "#{window_name}", "#{window_active}"])
        result = await self.run("list-windows", "-t", session_target(session), "-F", fmt)

        if not result.ok or not result.stdout.strip():
            return []

        windows = []
        for line in result.stdout.strip().split("\n"):
            if not line:
                continue
            parts = line.split(_FIELD_SEP)
            if len(parts) >= 4:
                try:
                    windows.append(
                        {
                            "window_id": parts[0],
                            "window_index": int(parts[1]),
                            "window_name": parts[2],
                            "active": parts[3] == "1",
                        }
                    )
                except (ValueError, IndexError) as e:
                    logger.warning(f"Failed to parse window line: {line!r}: {e}")

        return windows

    async def list_panes(self, session: str) -> list[dict]:
        """List all panes of one session.

        Args:
            session: Session name (matched exactly).

        Returns:
            List of pane dicts with keys:
            - pane_id: str (e.g., "%0")
            - window_id: str
            - pane_index: int
            - active: bool
            - path: str
        """
        fmt = _FIELD_SEP.join(
            ["#{pane_id}", "#{window_id}", "#{pane_index}", "#{pane_active}", "#{pane_current_path}"]
        )
        result = await self.run("list-panes", "-s", "-t", session_target(session), "-F", fmt)

        if not result.ok or not result.stdout.strip():
            return []

        panes = []
        for line in result.stdout.strip().split("\n"):
            if not line:
                continue
            parts = line.split(_FIELD_SEP)
            if len(parts) >= 5:
                try:
                    panes.append(
                        {
                            "pane_id": parts[0],
                            "window_id": parts[1],
                            "pane_index": int(parts[2]),
                            "active": parts[3] == "1",
                            "path": parts[4],
                        }
                    )
                except (ValueError, IndexError) as e:
                    logger.warning(f"Failed to parse pane line: {line!r}: {e}")

        return panes

    async def attach(self, *args: str) -> int:
        """Hand the current terminal to tmux.

        Runs without pipes so tmux owns stdin/stdout. Inside tmux ($TMUX set)
        an attach-session is turned into switch-client, tmux refuses nested
        attaches.

        Args:
            *args: attach-session arguments (e.g., "attach-session", "-t", "=dev")

        Returns:
            tmux exit code.
        """
        argv = list(args)
        if os.environ.get("TMUX") and argv and argv[0] in ("attach-session", "attach"):
            argv[0] = "switch-client"
        cmd = self.command(*argv)

        try:
            proc = await asyncio.create_subprocess_exec(*cmd)
        except OSError as e:
            raise TmuxError(f"cannot run {self._tmux_bin}: {e}") from e
        return await proc.wait()
