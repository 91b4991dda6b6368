"""Capability profiles for tmux versions.

Version differences are kept in one lookup table instead of version checks
spread through the compiler. Each generation lists the features it adds and
the command syntax it changes; a profile for a concrete version is the sum of
every generation at or below it.

Generations:
    legacy   < 1.8   no -P/-F, created ids cannot be captured
    1.8      named windows, -P -F, presets, custom layouts, split -p
    1.9      -c start directory
    3.1      split -l N%
    3.2      -e environment on new-session/new-window/split-window
    3.5      mirrored main-* presets
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from .types import Placeholder, Token


class Feature(Enum):
    """Features a session may need from tmux."""

    NAMED_WINDOWS = "named-windows"
    PRINT_FORMAT = "print-format"
    START_DIRECTORY = "start-directory"
    LAYOUT_PRESETS = "layout-presets"
    CUSTOM_LAYOUT = "custom-layout"
    MIRRORED_LAYOUTS = "mirrored-layouts"
    ENVIRONMENT = "environment"


# Logical operation -> token template. "{name}" tokens are filled by render().
BASE_SYNTAX: dict[str, tuple[str, ...]] = {
    "new_session": ("new-session", "-d", "-s", "{session}"),
    "new_window": ("new-window", "-t", "{target}"),
    "split_window": ("split-window", "-t", "{target}"),
    "window_name": ("-n", "{name}"),
    "start_directory": ("-c", "{path}"),
    "print_format": ("-P", "-F", "{format}"),
    "environment": ("-e", "{assignment}"),
    "pane_size": ("-p", "{percent}"),
    # -l types the text ("Escape" is typed, not pressed); ";" chains the Enter key press
    "send_keys": ("send-keys", "-t", "{target}", "-l", "{keys}", ";", "send-keys", "-t", "{target}", "Enter"),
    "select_layout": ("select-layout", "-t", "{target}", "{layout}"),
    "select_window": ("select-window", "-t", "{target}"),
    "select_pane": ("select-pane", "-t", "{target}"),
    "attach": ("attach-session", "-t", "{target}"),
}


@dataclass(frozen=True)
class Generation:
    """One row of the capability table."""

    label: str
    min_version: tuple[int, int]
    adds: frozenset[Feature] = frozenset()
    syntax: Mapping[str, tuple[str, ...]] = field(default_factory=dict)


GENERATIONS: tuple[Generation, ...] = (
    Generation(
        "legacy",
        (0, 0),
        frozenset({Feature.NAMED_WINDOWS, Feature.LAYOUT_PRESETS, Feature.CUSTOM_LAYOUT}),
    ),
    Generation("1.8", (1, 8), frozenset({Feature.PRINT_FORMAT})),
    Generation("1.9", (1, 9), frozenset({Feature.START_DIRECTORY})),
    Generation("3.1", (3, 1), syntax={"pane_size": ("-l", "{percent}%")}),
    Generation("3.2", (3, 2), frozenset({Feature.ENVIRONMENT})),
    Generation("3.5", (3, 5), frozenset({Feature.MIRRORED_LAYOUTS})),
)

DEVELOPMENT_GENERATION = "development"

_STABLE_RE = re.compile(r"^(\d+)\.(\d+)[a-z]?$")
_DEVELOPMENT_RE = re.compile(r"^(master|next-.+|openbsd-.+|\d+\.\d+[a-z]?-rc\d*)$")


@dataclass(frozen=True)
class CapabilityProfile:
    """What the installed tmux supports and how to spell it.

    Attributes:
        version: Version as reported by tmux (without the "tmux " prefix).
        generation: Label of the newest matching generation.
        features: Supported features.
        syntax: Logical operation -> token template.
        development: True for unstable builds mapped to the newest profile.
    """

    version: str
    generation: str
    features: frozenset[Feature]
    syntax: Mapping[str, tuple[str, ...]]
    development: bool = False

    def supports(self, feature: Feature) -> bool:
        return feature in self.features

    @property
    def unsupported(self) -> frozenset[Feature]:
        return frozenset(Feature) - self.features

    def render(self, op: str, **values: Token) -> list[Token]:
        """Fill the template of a logical operation.

        A token that is exactly "{key}" takes the value as is, so a
        Placeholder survives until the executor resolves it.

        Raises:
            KeyError: If the operation is not in the syntax table.
        """
        tokens: list[Token] = []
        for template in self.syntax[op]:
            match = re.fullmatch(r"\{(\w+)\}", template)
            if match and isinstance(values.get(match.group(1)), Placeholder):
                tokens.append(values[match.group(1)])
            else:
                tokens.append(template.format(**{k: str(v) for k, v in values.items()}))
        return tokens


def _build_profile(version: str, upto: tuple[int, int] | None, development: bool = False) -> CapabilityProfile:
    features: set[Feature] = set()
    syntax = dict(BASE_SYNTAX)
    label = GENERATIONS[0].label
    for gen in GENERATIONS:
        if upto is not None and gen.min_version > upto:
            break
        features |= gen.adds
        syntax.update(gen.syntax)
        label = gen.label
    return CapabilityProfile(
        version=version,
        generation=DEVELOPMENT_GENERATION if development else label,
        features=frozenset(features),
        syntax=MappingProxyType(syntax),
        development=development,
    )


def is_development_version(version: str) -> bool:
    return bool(_DEVELOPMENT_RE.match(version))


def profile_for_version(version: str) -> CapabilityProfile | None:
    """Map a version string to its capability profile.

    Args:
        version: "3.0a", "2.8", "master", "next-3.6", "tmux 3.3a", ...

    Returns:
        The profile, or None if the string is not a recognised version.
    """
    version = version.strip()
    if version.startswith("tmux "):
        version = version[len("tmux "):].strip()

    match = _STABLE_RE.match(version)
    if match:
        return _build_profile(version, (int(match.group(1)), int(match.group(2))))
    if is_development_version(version):
        return newest_profile(version)
    return None


def newest_profile(version: str = DEVELOPMENT_GENERATION) -> CapabilityProfile:
    """Most permissive profile (every generation applied)."""
    return _build_profile(version, None, development=True)
