"""Artifact builder driving Maven."""

import logging
from pathlib import Path
from typing import Optional, Sequence

from returns.result import Failure, Result, Success

from promoter.versioning import Version

from .exceptions import BuildError
from .shell import CommandRunner

logger = logging.getLogger(__name__)

DEFAULT_GOALS = ("clean", "package")


class MavenArtifactBuilder:
    """
    Builds the application jar with ``mvn -B <goals>``.

    The project version is taken from the pom itself, which the version stage
    has already updated, so ``version`` is only used to pick the jar.
    """

    def __init__(
        self,
        project_dir: Path,
        runner: Optional[CommandRunner] = None,
        goals: Sequence[str] = DEFAULT_GOALS,
        executable: str = "mvn",
    ):
        self.project_dir = Path(project_dir)
        self.runner = runner or CommandRunner(cwd=self.project_dir)
        self.goals = list(goals)
        self.executable = executable

    def build(self, version: Version) -> Result[Path, BuildError]:
        command = [self.executable, "-B", *self.goals]
        result = self.runner.run(command)
        if result.returncode != 0:
            return Failure(
                BuildError(
                    f"Maven build failed with exit status {result.returncode}",
                    command=command,
                    stderr=result.stderr or result.stdout,
                )
            )

        artifact = self._find_artifact(version)
        if artifact is None:
            if self.runner.dry_run:
                return Success(self.project_dir / "target")
            target = self.project_dir / "target"
            return Failure(
                BuildError(
                    f"Maven succeeded but no jar was found in {target}",
                    command=command,
                )
            )

        logger.info(f"Built artifact {artifact}")
        return Success(artifact)

    def _find_artifact(self, version: Version) -> Optional[Path]:
        """Newest jar in target/, preferring one named after ``version``."""
        target = self.project_dir / "target"
        if not target.is_dir():
            return None

        # maven-shade leaves the unshaded jar behind as original-*.jar
        jars = [
            p
            for p in target.glob("*.jar")
            if p.is_file() and not p.name.startswith("original-")
        ]
        if not jars:
            return None

        versioned = [p for p in jars if f"-{version}" in p.stem]
        candidates = versioned or jars
        return max(candidates, key=lambda p: p.stat().st_mtime)
