"""Probes for external tmux facts: installed version and live session state."""

from .state import LiveSessionSnapshot, SessionStateProbe
from .version import VersionProbe

__all__ = [
    "LiveSessionSnapshot",
    "SessionStateProbe",
    "VersionProbe",
]
