"""Command compiler.

Walks a ResolvedSpec and emits the ordered CommandPlan that builds the
session. Window and pane ids are assigned by tmux at creation time, so later
commands refer to them through Placeholders; every create command asks tmux to
print the new ids (-P -F) and lists the logical ids it binds.

Order for a new session:

    create-session       seeds window 0 and its first pane
    send-keys ...        pre_window lines and the pane command, per pane
    create-pane ...      remaining panes of window 0, each followed by its sends
    select-layout        if the window has a layout
    create-window ...    windows 1..n, same pattern
    select-window w0
    select-pane w0.p0

An existing session compiles to a single attach command.
"""

import logging

from termlaunch import config
from termlaunch.adapters.tmux.client import session_target
from termlaunch.probe.state import LiveSessionSnapshot
from termlaunch.spec.models import PaneSpec, WindowSpec

from .capabilities import CapabilityProfile, Feature
from .resolver import ResolvedSpec
from .types import SESSION, CommandKind, CommandPlan, CompiledCommand, Placeholder, Token, pane_ref, window_ref

logger = logging.getLogger(__name__)

_SEP = config.FIELD_SEP
SESSION_FORMAT = _SEP.join(["#{session_id}", "#{window_id}", "#{pane_id}"])
WINDOW_FORMAT = _SEP.join(["#{window_id}", "#{pane_id}"])
PANE_FORMAT = "#{pane_id}"


class CommandCompiler:
    """Compiles a ResolvedSpec into a CommandPlan."""

    def __init__(self, resolved: ResolvedSpec):
        self._resolved = resolved
        self._spec = resolved.spec
        self._profile = resolved.profile
        self._commands: list[CompiledCommand] = []

    def compile(self, live: LiveSessionSnapshot) -> CommandPlan:
        """Build the plan for the current state of tmux.

        Args:
            live: Snapshot of the target session.

        Returns:
            Attach-only plan if the session is running, otherwise the full
            creation plan (without attach).
        """
        if live.exists and live.name == self._spec.name:
            logger.info(f"[Compiler] session {self._spec.name!r} already running, attach only")
            return attach_plan(self._spec.name, self._profile)

        self._commands = []
        for index, window in enumerate(self._spec.windows):
            self._emit_window(index, window)
        self._emit_focus()

        plan = CommandPlan(session=self._spec.name, commands=tuple(self._commands))
        plan.check_order()
        logger.debug(f"[Compiler] session {self._spec.name!r}: {len(plan)} commands")
        return plan

    def _emit(self, kind: CommandKind, args: list[Token], target: str | None, binds: tuple[str, ...] = ()) -> None:
        self._commands.append(CompiledCommand(kind=kind, args=tuple(args), target=target, binds=binds))

    def _directory_args(self, path: str | None) -> list[Token]:
        if not path:
            return []
        return self._profile.render("start_directory", path=path)

    def _name_args(self, index: int, window: WindowSpec) -> list[Token]:
        if not self._profile.supports(Feature.NAMED_WINDOWS):
            return []
        return self._profile.render("window_name", name=window.label(index))

    def _emit_window(self, index: int, window: WindowSpec) -> None:
        render = self._profile.render
        first_root = window.pane_root(window.panes[0], self._spec.root)

        if index == 0:
            args = render("new_session", session=self._spec.name)
            args += self._name_args(index, window)
            args += self._directory_args(first_root)
            for key, value in self._spec.environment.items():
                args += render("environment", assignment=f"{key}={value}")
            args += render("print_format", format=SESSION_FORMAT)
            self._emit(CommandKind.CREATE_SESSION, args, SESSION, (SESSION, window_ref(0), pane_ref(0, 0)))
        else:
            args = render("new_window", target=Placeholder(SESSION, "{}:"))
            args += self._name_args(index, window)
            args += self._directory_args(first_root)
            args += render("print_format", format=WINDOW_FORMAT)
            self._emit(CommandKind.CREATE_WINDOW, args, window_ref(index), (window_ref(index), pane_ref(index, 0)))

        self._emit_sends(index, 0, window.panes[0])

        for pane_index, pane in enumerate(window.panes[1:], start=1):
            args = render("split_window", target=Placeholder(pane_ref(index, pane_index - 1)))
            args += self._directory_args(window.pane_root(pane, self._spec.root))
            if pane.size is not None:
                args += render("pane_size", percent=pane.size)
            args += render("print_format", format=PANE_FORMAT)
            self._emit(CommandKind.CREATE_PANE, args, pane_ref(index, pane_index), (pane_ref(index, pane_index),))
            self._emit_sends(index, pane_index, pane)

        layout = self._resolved.layouts[index]
        if layout is not None:
            args = render("select_layout", target=Placeholder(window_ref(index)), layout=layout)
            self._emit(CommandKind.SELECT, args, window_ref(index))

    def _emit_sends(self, window: int, pane_index: int, pane: PaneSpec) -> None:
        ref = pane_ref(window, pane_index)
        lines = list(self._spec.pre_window)
        if pane.command:
            lines.append(pane.command)
        for line in lines:
            args = self._profile.render("send_keys", target=Placeholder(ref), keys=line)
            self._emit(CommandKind.SEND_KEYS, args, ref)

    def _emit_focus(self) -> None:
        render = self._profile.render
        self._emit(CommandKind.SELECT, render("select_window", target=Placeholder(window_ref(0))), window_ref(0))
        self._emit(CommandKind.SELECT, render("select_pane", target=Placeholder(pane_ref(0, 0))), pane_ref(0, 0))


def attach_plan(session: str, profile: CapabilityProfile) -> CommandPlan:
    """Single-command plan attaching to an existing session."""
    args = profile.render("attach", target=session_target(session))
    return CommandPlan(
        session=session,
        commands=(CompiledCommand(kind=CommandKind.ATTACH, args=tuple(args), target=SESSION),),
    )


def compile_plan(resolved: ResolvedSpec, live: LiveSessionSnapshot) -> CommandPlan:
    """Compile a resolved spec against a live snapshot."""
    return CommandCompiler(resolved).compile(live)
