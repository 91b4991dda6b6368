"""Runtime module - Bootstrap and launch orchestration"""

from .bootstrap import (
    RuntimeComponents,
    bootstrap,
)
from .hooks import run_pre_hooks
from .launcher import LaunchResult, Launcher

__all__ = [
    "bootstrap",
    "RuntimeComponents",
    "Launcher",
    "LaunchResult",
    "run_pre_hooks",
]
