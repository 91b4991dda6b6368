"""SessionStateProbe - 查询 tmux 中已存在的会话

快照只读、每次调用重新查询，不跨调用缓存。
"""

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from termlaunch.adapters.tmux.client import TmuxClient, TmuxError
from termlaunch.errors import ProbeError

logger = logging.getLogger(__name__)

# stderr fragments meaning "server not started yet", which is not a failure
_NO_SERVER_MARKERS = (
    "no server running",
    "no such file or directory",
)


@dataclass(frozen=True)
class LiveSessionSnapshot:
    """Live state of one session.

    Attributes:
        name: Session name that was queried.
        exists: Whether tmux knows the session.
        windows: Window ids in index order (e.g., "@1").
        panes: Pane ids per window id, in pane index order.
    """

    name: str
    exists: bool = False
    windows: tuple[str, ...] = ()
    panes: Mapping[str, tuple[str, ...]] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "windows", tuple(self.windows))
        object.__setattr__(self, "panes", MappingProxyType({k: tuple(v) for k, v in self.panes.items()}))

    @classmethod
    def empty(cls, name: str) -> "LiveSessionSnapshot":
        return cls(name=name)

    @property
    def pane_count(self) -> int:
        return sum(len(p) for p in self.panes.values())


def _is_no_server(stderr: str) -> bool:
    text = stderr.lower()
    return any(marker in text for marker in _NO_SERVER_MARKERS)


class SessionStateProbe:
    """Reads what already exists in tmux for a session name."""

    def __init__(self, client: TmuxClient):
        self._client = client

    async def snapshot(self, name: str) -> LiveSessionSnapshot:
        """Query the live state of a session.

        Args:
            name: Session name (matched exactly).

        Returns:
            Snapshot; empty when the session or the server does not exist.

        Raises:
            ProbeError: If the control channel cannot be reached at all.
        """
        try:
            result = await self._client.list_sessions()
        except TmuxError as e:
            raise ProbeError(f"cannot reach tmux: {e}") from e

        if not result.ok:
            if _is_no_server(result.stderr):
                logger.debug(f"[StateProbe] no tmux server running, {name!r} does not exist")
                return LiveSessionSnapshot.empty(name)
            raise ProbeError(f"cannot reach tmux: {result.stderr.strip()}")

        sessions = [line for line in result.stdout.split("\n") if line]
        if name not in sessions:
            return LiveSessionSnapshot.empty(name)

        try:
            windows = await self._client.list_windows(name)
            panes = await self._client.list_panes(name)
        except TmuxError as e:
            raise ProbeError(f"cannot reach tmux: {e}") from e

        window_ids = [w["window_id"] for w in sorted(windows, key=lambda w: w["window_index"])]
        panes_by_window: dict[str, list[str]] = {wid: [] for wid in window_ids}
        for pane in sorted(panes, key=lambda p: p["pane_index"]):
            panes_by_window.setdefault(pane["window_id"], []).append(pane["pane_id"])

        snapshot = LiveSessionSnapshot(name=name, exists=True, windows=tuple(window_ids), panes=panes_by_window)
        logger.debug(
            f"[StateProbe] {name!r}: {len(snapshot.windows)} windows, {snapshot.pane_count} panes"
        )
        return snapshot
