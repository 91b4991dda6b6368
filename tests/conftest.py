"""Pytest 配置"""

import pytest

from termlaunch.adapters.tmux.client import TmuxResult
from termlaunch.plan.capabilities import profile_for_version
from termlaunch.plan.executor import CommandExecutor
from termlaunch.probe.state import SessionStateProbe
from termlaunch.probe.version import VersionProbe
from termlaunch.runtime.bootstrap import RuntimeComponents
from termlaunch.telemetry import metrics


class FakeTmux:
    """In-memory stand-in for TmuxClient.

    Keeps sessions/windows/panes like a tmux server would, hands out
    $N/@N/%N ids and answers -P -F formats. Commands chained with ";" run in
    order. Every argv is recorded in calls; send-keys -l text goes to sent,
    plain key presses to pressed.
    """

    def __init__(self, version: str = "tmux 3.3a"):
        self.version_string = version
        self.sessions: dict[str, dict] = {}
        self.calls: list[list[str]] = []
        self.sent: list[tuple[str, str]] = []
        self.pressed: list[tuple[str, str]] = []
        self.attached: list[list[str]] = []
        self.fail_on: str | None = None
        self._counter = 0

    def _new_id(self, prefix: str) -> str:
        self._counter += 1
        return f"{prefix}{self._counter}"

    @staticmethod
    def _opt(args: tuple[str, ...], flag: str) -> str | None:
        if flag in args:
            return args[args.index(flag) + 1]
        return None

    @staticmethod
    def _format(fmt: str | None, **ids: str) -> str:
        if fmt is None:
            return ""
        for key, value in ids.items():
            fmt = fmt.replace(f"#{{{key}}}", value)
        return fmt + "\n"

    def _find_pane(self, pane_id: str) -> tuple[dict, dict] | None:
        for session in self.sessions.values():
            for window in session["windows"]:
                if pane_id in window["panes"]:
                    return session, window
        return None

    def _find_window(self, window_id: str) -> dict | None:
        for session in self.sessions.values():
            for window in session["windows"]:
                if window["id"] == window_id:
                    return window
        return None

    @property
    def window_count(self) -> int:
        return sum(len(s["windows"]) for s in self.sessions.values())

    @property
    def pane_count(self) -> int:
        return sum(len(w["panes"]) for s in self.sessions.values() for w in s["windows"])

    async def run(self, *args: str) -> TmuxResult:
        self.calls.append(list(args))
        segments: list[list[str]] = [[]]
        for arg in args:
            if arg == ";":
                segments.append([])
            else:
                segments[-1].append(arg)

        result = TmuxResult(0, "", "")
        for segment in segments:
            cmd = segment[0]
            if cmd == self.fail_on:
                return TmuxResult(1, "", f"{cmd}: rejected by test\n")
            handler = getattr(self, "_cmd_" + cmd.replace("-", "_"), None)
            if handler is None:
                return TmuxResult(1, "", f"unknown command: {cmd}\n")
            result = handler(tuple(segment))
            if not result.ok:
                return result
        return result

    def _cmd_new_session(self, args):
        name = self._opt(args, "-s")
        if name in self.sessions:
            return TmuxResult(1, "", f"duplicate session: {name}\n")
        sid, wid, pid = self._new_id("$"), self._new_id("@"), self._new_id("%")
        self.sessions[name] = {
            "id": sid,
            "windows": [{"id": wid, "name": self._opt(args, "-n") or "bash", "panes": [pid]}],
        }
        out = self._format(self._opt(args, "-F"), session_id=sid, window_id=wid, pane_id=pid)
        return TmuxResult(0, out, "")

    def _cmd_new_window(self, args):
        target = self._opt(args, "-t")
        session = next((s for s in self.sessions.values() if f"{s['id']}:" == target), None)
        if session is None:
            return TmuxResult(1, "", f"can't find session: {target}\n")
        wid, pid = self._new_id("@"), self._new_id("%")
        session["windows"].append({"id": wid, "name": self._opt(args, "-n") or "bash", "panes": [pid]})
        return TmuxResult(0, self._format(self._opt(args, "-F"), window_id=wid, pane_id=pid), "")

    def _cmd_split_window(self, args):
        target = self._opt(args, "-t")
        found = self._find_pane(target)
        if found is None:
            return TmuxResult(1, "", f"can't find pane: {target}\n")
        _, window = found
        pid = self._new_id("%")
        window["panes"].insert(window["panes"].index(target) + 1, pid)
        return TmuxResult(0, self._format(self._opt(args, "-F"), window_id=window["id"], pane_id=pid), "")

    def _cmd_send_keys(self, args):
        target = self._opt(args, "-t")
        if self._find_pane(target) is None:
            return TmuxResult(1, "", f"can't find pane: {target}\n")
        if "-l" in args:
            self.sent.append((target, self._opt(args, "-l")))
        else:
            self.pressed.append((target, args[-1]))
        return TmuxResult(0, "", "")

    def _cmd_select_layout(self, args):
        target = self._opt(args, "-t")
        if self._find_window(target) is None:
            return TmuxResult(1, "", f"can't find window: {target}\n")
        return TmuxResult(0, "", "")

    _cmd_select_window = _cmd_select_layout

    def _cmd_select_pane(self, args):
        target = self._opt(args, "-t")
        if self._find_pane(target) is None:
            return TmuxResult(1, "", f"can't find pane: {target}\n")
        return TmuxResult(0, "", "")

    async def version(self) -> str:
        return self.version_string

    async def list_sessions(self) -> TmuxResult:
        if not self.sessions:
            return TmuxResult(1, "", "no server running on /tmp/tmux-1000/default\n")
        return TmuxResult(0, "".join(f"{name}\n" for name in self.sessions), "")

    async def list_windows(self, session: str) -> list[dict]:
        return [
            {"window_id": w["id"], "window_index": i, "window_name": w["name"], "active": i == 0}
            for i, w in enumerate(self.sessions.get(session, {"windows": []})["windows"])
        ]

    async def list_panes(self, session: str) -> list[dict]:
        panes = []
        for w in self.sessions.get(session, {"windows": []})["windows"]:
            for i, pid in enumerate(w["panes"]):
                panes.append({"pane_id": pid, "window_id": w["id"], "pane_index": i, "active": i == 0, "path": "/"})
        return panes

    async def attach(self, *args: str) -> int:
        self.attached.append(list(args))
        return 0


@pytest.fixture
def fake_tmux():
    """内存中的 tmux 服务器"""
    return FakeTmux()


@pytest.fixture
def components(fake_tmux):
    """使用 FakeTmux 构造的运行时组件"""
    return RuntimeComponents(
        client=fake_tmux,
        version_probe=VersionProbe(fake_tmux),
        state_probe=SessionStateProbe(fake_tmux),
        executor=CommandExecutor(fake_tmux),
    )


@pytest.fixture
def profile():
    """tmux 3.3a 的 capability profile"""
    return profile_for_version("3.3a")


@pytest.fixture(autouse=True)
def reset_metrics():
    """每次测试前重置指标"""
    metrics.reset()
    yield
    metrics.reset()
