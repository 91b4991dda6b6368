"""Planning: capability resolution, command compilation and execution.

模块加载顺序有依赖：capabilities 必须先于 compiler（compiler -> probe -> capabilities）。
"""

from .types import (
    SESSION,
    CommandKind,
    CommandPlan,
    CompiledCommand,
    Placeholder,
    pane_ref,
    window_ref,
)
from .capabilities import (
    CapabilityProfile,
    Feature,
    newest_profile,
    profile_for_version,
)
from .resolver import ResolvedSpec, resolve
from .compiler import CommandCompiler, attach_plan, compile_plan
from .executor import CommandExecutor, IdentifierTable

__all__ = [
    # Plan types
    "SESSION",
    "CommandKind",
    "CommandPlan",
    "CompiledCommand",
    "Placeholder",
    "pane_ref",
    "window_ref",
    # Capabilities
    "CapabilityProfile",
    "Feature",
    "newest_profile",
    "profile_for_version",
    # Pipeline
    "ResolvedSpec",
    "resolve",
    "CommandCompiler",
    "attach_plan",
    "compile_plan",
    "CommandExecutor",
    "IdentifierTable",
]
