"""Protocol interfaces for the external tools of a promotion run.

Each method reports success or failure through a ``returns`` Result so the
sequencer can be exercised with in-memory substitutes.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, NamedTuple, Optional, Protocol

from returns.result import Result

from promoter.versioning import Version

from .exceptions import ApplyError, BuildError, StageError


@dataclass(frozen=True)
class Credentials:
    """A username/password pair injected by the orchestrator for one stage."""

    username: str
    password: str = field(repr=False)


class Author(NamedTuple):
    """Commit author identity."""

    name: str
    email: str

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>"


class ArtifactBuilder(Protocol):
    """Builds the application artifact (e.g. a runnable jar)."""

    def build(self, version: Version) -> Result[Path, BuildError]:
        """Build the artifact and return its path."""
        ...


class ImagePublisher(Protocol):
    """Builds and pushes the container image."""

    def build_image(self, artifact: Path, tag: str) -> Result[str, BuildError]:
        """Build an image for ``artifact`` tagged ``tag``; return the image ref."""
        ...

    def push(
        self, image_ref: str, credentials: Optional[Credentials]
    ) -> Result[str, StageError]:
        """Push ``image_ref``; failures are AuthError or NetworkError."""
        ...


class ClusterDeployer(Protocol):
    """Applies manifest templates to the cluster."""

    def apply(
        self, template: Path, variables: Mapping[str, str]
    ) -> Result[str, ApplyError]:
        """Render ``template`` with ``variables`` and apply it."""
        ...


class SourceControlCommitter(Protocol):
    """Records the version change in source control."""

    def commit(self, message: str, author: Author) -> Result[str, StageError]:
        """Commit and push; failures are ConflictError, AuthError or NetworkError."""
        ...
