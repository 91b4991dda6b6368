"""VersionProbe - 查询 tmux 版本并映射为 capability profile"""

import logging

from termlaunch.adapters.tmux.client import TmuxClient, TmuxError
from termlaunch.errors import ProbeError
from termlaunch.plan.capabilities import CapabilityProfile, profile_for_version

logger = logging.getLogger(__name__)


class VersionProbe:
    """Maps the installed tmux to a CapabilityProfile.

    Unstable builds ("master", "next-3.6", "3.4-rc", ...) get the newest
    profile and a warning instead of an error.
    """

    def __init__(self, client: TmuxClient):
        self._client = client

    async def probe(self) -> CapabilityProfile:
        """Query `tmux -V`.

        Returns:
            CapabilityProfile for the reported version.

        Raises:
            ProbeError: If tmux is missing or the version cannot be parsed.
        """
        try:
            raw = await self._client.version()
        except TmuxError as e:
            raise ProbeError(f"tmux is not available: {e}") from e

        profile = profile_for_version(raw)
        if profile is None:
            raise ProbeError(f"cannot parse tmux version {raw!r}")

        if profile.development:
            logger.warning(
                f"[VersionProbe] tmux {profile.version} is a development build, "
                f"assuming the newest feature set"
            )
        else:
            logger.debug(f"[VersionProbe] tmux {profile.version} -> generation {profile.generation}")
        return profile
