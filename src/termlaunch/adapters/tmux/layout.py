"""Tmux layout names and layout strings.

tmux accepts either a preset name for select-layout or a layout string as
printed by `#{window_layout}`, e.g. "bb62,159x48,0,0{79x48,0,0,79x48,80,0}".
The leading four hex digits are a checksum of the rest of the string.
"""

import re

# Presets known to tmux, oldest first. The mirrored variants arrived in 3.5.
PRESET_LAYOUTS = (
    "even-horizontal",
    "even-vertical",
    "main-horizontal",
    "main-vertical",
    "tiled",
    "main-horizontal-mirrored",
    "main-vertical-mirrored",
)

MIRRORED_LAYOUTS = frozenset({"main-horizontal-mirrored", "main-vertical-mirrored"})

_CUSTOM_LAYOUT_RE = re.compile(r"^([0-9a-f]{4}),(\d+x\d+,\d+,\d+.*)$")


def layout_checksum(body: str) -> str:
    """Compute tmux's 16-bit layout checksum for a layout body."""
    csum = 0
    for ch in body:
        csum = (csum >> 1) + ((csum & 1) << 15)
        csum = (csum + ord(ch)) & 0xFFFF
    return f"{csum:04x}"


def is_custom_layout(layout: str) -> bool:
    """Check whether a string is a well-formed tmux layout string.

    Args:
        layout: Candidate layout.

    Returns:
        True if the string has the checksum,body shape and the checksum matches.
    """
    match = _CUSTOM_LAYOUT_RE.match(layout)
    if not match:
        return False
    return layout_checksum(match.group(2)) == match.group(1)
