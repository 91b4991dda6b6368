"""Command plan 数据类型定义

包含：
- CommandKind: 命令分类
- Placeholder: 逻辑目标占位符（执行时替换为 tmux 真实 ID）
- CompiledCommand: 单条编译后的命令
- CommandPlan: 有序命令序列

逻辑 ID 约定：
- "session"      会话
- "w<i>"         第 i 个窗口
- "w<i>.p<j>"    第 i 个窗口的第 j 个 pane
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum

from termlaunch.errors import PlanOrderError

SESSION = "session"


def window_ref(window: int) -> str:
    """窗口逻辑 ID"""
    return f"w{window}"


def pane_ref(window: int, pane: int) -> str:
    """pane 逻辑 ID"""
    return f"w{window}.p{pane}"


class CommandKind(Enum):
    """命令分类"""

    CREATE_SESSION = "create_session"
    CREATE_WINDOW = "create_window"
    CREATE_PANE = "create_pane"
    SEND_KEYS = "send_keys"
    SELECT = "select"
    ATTACH = "attach"

    @property
    def creates(self) -> bool:
        """是否创建新的 tmux 实体"""
        return self in {
            CommandKind.CREATE_SESSION,
            CommandKind.CREATE_WINDOW,
            CommandKind.CREATE_PANE,
        }


@dataclass(frozen=True)
class Placeholder:
    """逻辑目标占位符

    Attributes:
        logical_id: 逻辑 ID（如 "w1.p0"）
        template: 替换模板，"{}" 处填入真实 ID（如 "{}:" 表示会话下一个窗口）
    """

    logical_id: str
    template: str = "{}"

    def render(self, real_id: str) -> str:
        return self.template.format(real_id)

    def __str__(self) -> str:
        return self.template.format(f"<{self.logical_id}>")


Token = str | Placeholder


@dataclass(frozen=True)
class CompiledCommand:
    """编译后的 tmux 命令

    Attributes:
        kind: 命令分类
        args: tmux 参数（字面量或占位符）
        target: 命令作用的逻辑 ID
        binds: 命令输出（-P -F，tab 分隔）依次绑定的逻辑 ID
    """

    kind: CommandKind
    args: tuple[Token, ...]
    target: str | None = None
    binds: tuple[str, ...] = ()

    @property
    def references(self) -> list[str]:
        """args 中引用的逻辑 ID（按出现顺序）"""
        return [tok.logical_id for tok in self.args if isinstance(tok, Placeholder)]

    def display(self) -> str:
        """可读形式，占位符显示为 <id>"""
        return " ".join(str(tok) for tok in self.args)


@dataclass(frozen=True)
class CommandPlan:
    """有序命令计划

    Attributes:
        session: 目标会话名
        commands: 按执行顺序排列的命令
    """

    session: str
    commands: tuple[CompiledCommand, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "commands", tuple(self.commands))

    def __len__(self) -> int:
        return len(self.commands)

    def __iter__(self) -> Iterator[CompiledCommand]:
        return iter(self.commands)

    def __getitem__(self, index: int) -> CompiledCommand:
        return self.commands[index]

    @property
    def is_attach_only(self) -> bool:
        return len(self.commands) == 1 and self.commands[0].kind == CommandKind.ATTACH

    def of_kind(self, kind: CommandKind) -> list[CompiledCommand]:
        return [c for c in self.commands if c.kind == kind]

    def check_order(self) -> None:
        """校验创建顺序：任何命令引用的逻辑 ID 必须已被之前的命令绑定

        Raises:
            PlanOrderError: 存在先引用后创建的命令
        """
        bound: set[str] = set()
        for position, command in enumerate(self.commands):
            for ref in command.references:
                if ref not in bound:
                    raise PlanOrderError(
                        f"command #{position} ({command.display()}) references "
                        f"{ref!r} before it is created"
                    )
            for ref in command.binds:
                if ref in bound:
                    raise PlanOrderError(f"command #{position} creates {ref!r} twice")
                bound.add(ref)
