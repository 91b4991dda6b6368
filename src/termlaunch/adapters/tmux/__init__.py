"""Tmux adapter for termlaunch."""

from .client import TmuxClient, TmuxError, TmuxResult, session_target
from .layout import PRESET_LAYOUTS, is_custom_layout, layout_checksum

__all__ = [
    "TmuxClient",
    "TmuxError",
    "TmuxResult",
    "session_target",
    "PRESET_LAYOUTS",
    "is_custom_layout",
    "layout_checksum",
]
