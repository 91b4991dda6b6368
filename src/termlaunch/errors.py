"""Launcher exceptions.

PUBLIC API:
  - TermLaunchError: Base exception, the CLI turns it into exit code 1
  - ProjectError: Project file missing, unreadable or invalid
  - ProbeError: tmux unreachable or its version unparsable
  - CapabilityError: Session needs a feature the installed tmux lacks
  - ExecutionError: tmux rejected a command while running a plan
  - PlanOrderError: A plan references a target before creating it
"""


class TermLaunchError(Exception):
    """Base exception for all launcher failures."""

    pass


class ProjectError(TermLaunchError):
    """Raised when a project file cannot be found, parsed or validated."""

    pass


class ProbeError(TermLaunchError):
    """Raised when tmux cannot be queried at all."""

    pass


class CapabilityError(TermLaunchError):
    """Raised when a required feature is unsupported by the tmux profile.

    Attributes:
        feature: Name of the offending feature (e.g. "start-directory").
        version: Version string of the profile that lacks it.
    """

    def __init__(self, feature: str, version: str = ""):
        self.feature = feature
        self.version = version
        suffix = f" by tmux {version}" if version else ""
        super().__init__(f"Unsupported feature '{feature}'{suffix}")


class ExecutionError(TermLaunchError):
    """Raised on the first command tmux rejects (no rollback is attempted).

    Attributes:
        command: The failing command line.
        message: tmux's own error text.
    """

    def __init__(self, command: str, message: str):
        self.command = command
        self.message = message.strip()
        super().__init__(f"Command failed: {command}: {self.message}")


class PlanOrderError(ValueError):
    """Raised when a command targets a window/pane before its creation."""

    pass
