"""External tools driven by a promotion run.

Each stage of the pipeline talks to exactly one collaborator through a narrow
Protocol (see interfaces.py). The implementations here shell out to the real
tools; tests substitute in-memory fakes.

    ArtifactBuilder         -> MavenArtifactBuilder   (mvn)
    ImagePublisher          -> DockerImagePublisher   (docker build/login/push)
    ClusterDeployer         -> KubectlDeployer        (envsubst + kubectl apply)
    SourceControlCommitter  -> GitCommitter           (GitPython)
"""

from promoter.collaborators.exceptions import (
    StageError,
    BuildError,
    AuthError,
    NetworkError,
    ApplyError,
    ConflictError,
)
from promoter.collaborators.interfaces import (
    ArtifactBuilder,
    ImagePublisher,
    ClusterDeployer,
    SourceControlCommitter,
    Credentials,
    Author,
)
from promoter.collaborators.shell import CommandRunner
from promoter.collaborators.maven import MavenArtifactBuilder
from promoter.collaborators.docker import DockerImagePublisher
from promoter.collaborators.kubectl import KubectlDeployer, render_manifest
from promoter.collaborators.git import GitCommitter

__all__ = [
    # Interfaces
    "ArtifactBuilder",
    "ImagePublisher",
    "ClusterDeployer",
    "SourceControlCommitter",
    "Credentials",
    "Author",
    # Implementations
    "CommandRunner",
    "MavenArtifactBuilder",
    "DockerImagePublisher",
    "KubectlDeployer",
    "render_manifest",
    "GitCommitter",
    # Exceptions
    "StageError",
    "BuildError",
    "AuthError",
    "NetworkError",
    "ApplyError",
    "ConflictError",
]
