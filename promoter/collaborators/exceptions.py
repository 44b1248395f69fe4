"""
Errors reported by the external tools a promotion run drives.

Collaborators return these wrapped in ``returns.result.Failure`` rather than
raising them; the sequencer turns the first one into a failed outcome.
"""

from typing import Optional, Sequence

from promoter.exceptions import PromotionError


class StageError(PromotionError):
    """Base class for failures of an external build, publish, deploy or commit."""

    def __init__(
        self,
        message: str,
        command: Optional[Sequence[str]] = None,
        stderr: str = "",
    ):
        self.message = message
        self.command = list(command) if command else None
        self.stderr = stderr.strip() if stderr else ""
        super().__init__(message)

    def __str__(self) -> str:
        if self.stderr:
            return f"{self.message}\n{self.stderr}"
        return self.message


class BuildError(StageError):
    """The artifact or container image could not be built."""

    pass


class AuthError(StageError):
    """The registry or the git remote rejected our credentials."""

    pass


class NetworkError(StageError):
    """The registry or the git remote could not be reached."""

    pass


class ApplyError(StageError):
    """A manifest could not be rendered or applied to the cluster."""

    pass


class ConflictError(StageError):
    """The version commit was rejected by the repository."""

    pass
