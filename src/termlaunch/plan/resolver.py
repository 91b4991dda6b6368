"""Capability resolution.

Checks a SessionSpec against a CapabilityProfile before anything is
compiled. Required features fail with CapabilityError; preset layouts the
profile cannot draw are replaced with config.DEFAULT_LAYOUT so the session is
still created.
"""

import logging
from dataclasses import dataclass

from termlaunch import config
from termlaunch.adapters.tmux.layout import MIRRORED_LAYOUTS
from termlaunch.errors import CapabilityError
from termlaunch.spec.models import SessionSpec

from .capabilities import CapabilityProfile, Feature

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedSpec:
    """A SessionSpec paired with the profile it will be compiled for.

    Attributes:
        spec: The session specification (unchanged).
        profile: Capability profile of the installed tmux.
        layouts: Effective layout per window, None where no layout is set.
        downgraded: Indices of windows whose layout hint was replaced.
    """

    spec: SessionSpec
    profile: CapabilityProfile
    layouts: tuple[str | None, ...]
    downgraded: tuple[int, ...] = ()


def required_features(spec: SessionSpec) -> list[Feature]:
    """Features the spec cannot do without, in check order."""
    features = [Feature.PRINT_FORMAT]
    if spec.uses_named_windows():
        features.append(Feature.NAMED_WINDOWS)
    if spec.uses_start_directory():
        features.append(Feature.START_DIRECTORY)
    if any(w.has_custom_layout for w in spec.windows):
        features.append(Feature.CUSTOM_LAYOUT)
    if spec.environment:
        features.append(Feature.ENVIRONMENT)
    return features


def _layout_feature(layout: str) -> Feature:
    if layout in MIRRORED_LAYOUTS:
        return Feature.MIRRORED_LAYOUTS
    return Feature.LAYOUT_PRESETS


def resolve(spec: SessionSpec, profile: CapabilityProfile) -> ResolvedSpec:
    """Reconcile a spec with a capability profile.

    Args:
        spec: Session to create.
        profile: Profile from VersionProbe.

    Returns:
        ResolvedSpec with effective layouts.

    Raises:
        CapabilityError: If a required feature is unsupported.
    """
    for feature in required_features(spec):
        if not profile.supports(feature):
            raise CapabilityError(feature.value, profile.version)

    layouts: list[str | None] = []
    downgraded: list[int] = []
    for index, window in enumerate(spec.windows):
        layout = window.layout
        if layout is not None and not window.has_custom_layout and not profile.supports(_layout_feature(layout)):
            # No presets at all: leave tmux's own arrangement
            fallback = config.DEFAULT_LAYOUT if profile.supports(Feature.LAYOUT_PRESETS) else None
            logger.debug(
                f"[Resolver] window {window.label(index)!r}: layout {layout!r} unsupported by "
                f"tmux {profile.version}, using {fallback!r}"
            )
            layout = fallback
            downgraded.append(index)
        layouts.append(layout)

    return ResolvedSpec(spec=spec, profile=profile, layouts=tuple(layouts), downgraded=tuple(downgraded))
