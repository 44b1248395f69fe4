"""Image publisher driving the docker CLI."""

import logging
import re
from pathlib import Path
from typing import Optional

from returns.result import Failure, Result, Success

from .exceptions import AuthError, BuildError, NetworkError, StageError
from .interfaces import Credentials
from .shell import CommandRunner, redact

logger = logging.getLogger(__name__)

_AUTH_FAILURE = re.compile(
    r"denied|unauthorized|authentication required|incorrect username or password",
    re.IGNORECASE,
)

_UNREACHABLE = re.compile(
    r"no such host|connection refused|i/o timeout|timed out|network is unreachable",
    re.IGNORECASE,
)


def registry_host(repository: str) -> Optional[str]:
    """
    Return the registry host of an image repository, or None for Docker Hub.

    Follows docker's rule: the first path component is a registry only if it
    contains a dot or a port, or is ``localhost``.
    """
    if "/" not in repository:
        return None
    first = repository.split("/", 1)[0]
    if "." in first or ":" in first or first == "localhost":
        return first
    return None


class DockerImagePublisher:
    """
    Builds ``<repository>:<tag>`` from a build context and pushes it.

    Args:
        repository: Image repository, e.g. ``registry.example.com/team/app``
        context: Docker build context (directory holding the Dockerfile)
        runner: Command runner
        executable: docker binary
    """

    def __init__(
        self,
        repository: str,
        context: Path,
        runner: Optional[CommandRunner] = None,
        executable: str = "docker",
    ):
        self.repository = repository
        self.context = Path(context)
        self.runner = runner or CommandRunner()
        self.executable = executable

    def build_image(self, artifact: Path, tag: str) -> Result[str, BuildError]:
        image_ref = f"{self.repository}:{tag}"
        logger.info(f"Building image {image_ref} with artifact {artifact}")

        command = [self.executable, "build", "-t", image_ref, str(self.context)]
        result = self.runner.run(command)
        if result.returncode != 0:
            return Failure(
                BuildError(
                    f"docker build of {image_ref} failed "
                    f"with exit status {result.returncode}",
                    command=command,
                    stderr=result.stderr,
                )
            )
        return Success(image_ref)

    def push(
        self, image_ref: str, credentials: Optional[Credentials]
    ) -> Result[str, StageError]:
        if credentials is not None:
            login = self._login(credentials)
            if isinstance(login, Failure):
                return login

        command = [self.executable, "push", image_ref]
        result = self.runner.run(command)
        if result.returncode != 0:
            if _AUTH_FAILURE.search(result.stderr or ""):
                error_cls = AuthError
            else:
                error_cls = NetworkError
            return Failure(
                error_cls(
                    f"docker push of {image_ref} failed "
                    f"with exit status {result.returncode}",
                    command=command,
                    stderr=result.stderr,
                )
            )

        logger.info(f"Pushed {image_ref}")
        return Success(image_ref)

    def _login(self, credentials: Credentials) -> Result[str, StageError]:
        command = [
            self.executable,
            "login",
            "-u",
            credentials.username,
            "--password-stdin",
        ]
        host = registry_host(self.repository)
        if host:
            command.append(host)

        result = self.runner.run(
            command,
            input=credentials.password,
            secrets=[credentials.password],
        )
        if result.returncode != 0:
            stderr = result.stderr or ""
            if _UNREACHABLE.search(stderr):
                error_cls = NetworkError
            else:
                error_cls = AuthError
            return Failure(
                error_cls(
                    f"docker login to {host or 'Docker Hub'} failed "
                    f"for user {credentials.username}",
                    command=command,
                    stderr=redact(stderr, [credentials.password]),
                )
            )
        return Success(host or "docker.io")
