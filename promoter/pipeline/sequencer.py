"""
Promotion sequencer.

Runs the stages of one promotion strictly in order:

    version bump -> artifact build -> [image build/push -> deploy -> commit]

The bracketed stages change things outside the pipeline (registry, cluster,
repository) and only run when the branch gate passes. The first failing stage
ends the run; nothing is retried and completed external stages are not undone.

The version bump is written to the descriptor immediately, because the
artifact build reads it, but it stays provisional: if the run does not reach
Done the descriptor is restored to its content before the run.
"""

import logging
from pathlib import Path
from typing import Optional, Sequence, TypeVar

from returns.result import Failure, Result

from promoter.collaborators.interfaces import (
    ArtifactBuilder,
    Author,
    ClusterDeployer,
    ImagePublisher,
    SourceControlCommitter,
)
from promoter.constants import APP_NAME_VAR, GATED_STAGES, IMAGE_NAME_VAR, Stage
from promoter.exceptions import PromotionError
from promoter.model.pipeline import CredentialsRef
from promoter.versioning import (
    Version,
    VersioningError,
    VersionManager,
    build_identifier,
    normalize_run_counter,
)

from .context import ExecutionContext
from .gate import branch_gate
from .outcome import PipelineOutcome, RunStatus

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _unwrap(result: Result[T, Exception]) -> T:
    """Return the success value or raise the failure it carries."""
    if isinstance(result, Failure):
        raise result.failure()
    return result.unwrap()


class PromotionSequencer:
    """
    Drives one promotion run through its collaborators.

    Args:
        version_manager: Owner of the version descriptor
        builder: Artifact builder (Maven)
        publisher: Image publisher (docker)
        deployer: Cluster deployer (kubectl)
        committer: Source control committer (git)
        app_name: Value of APP_NAME in manifest templates
        target_branch: The only branch allowed to promote
        manifests: Manifest templates, applied in order
        commit_message: Message of the version commit
        author: Author of the version commit
        image_credentials: Registry credential, resolved when the image stage
            runs; never resolved in a dry run
        dry_run: Compute the next version without writing it
    """

    def __init__(
        self,
        version_manager: VersionManager,
        builder: ArtifactBuilder,
        publisher: ImagePublisher,
        deployer: ClusterDeployer,
        committer: SourceControlCommitter,
        app_name: str,
        target_branch: str,
        manifests: Sequence[Path],
        commit_message: str,
        author: Author,
        image_credentials: Optional[CredentialsRef] = None,
        dry_run: bool = False,
    ):
        self.version_manager = version_manager
        self.builder = builder
        self.publisher = publisher
        self.deployer = deployer
        self.committer = committer
        self.app_name = app_name
        self.target_branch = target_branch
        self.manifests = [Path(m) for m in manifests]
        self.commit_message = commit_message
        self.author = author
        self.image_credentials = image_credentials
        self.dry_run = dry_run

    def run(self, context: ExecutionContext) -> PipelineOutcome:
        """
        Execute one run.

        Stage failures are reported in the returned outcome, never raised.
        Any other exception propagates after the descriptor is restored.
        """
        outcome = PipelineOutcome()
        outcome.start()

        promote = branch_gate(context.branch, self.target_branch)
        outcome.promoted = promote
        if promote:
            logger.info(f"Branch '{context.branch}' is the target branch: promoting")
        else:
            logger.info(
                f"Branch '{context.branch}' is not '{self.target_branch}': "
                "image, deploy and commit stages are skipped"
            )

        snapshot: Optional[bytes] = None
        stage = Stage.VERSION
        try:
            counter = normalize_run_counter(context.run_counter)
            if self.dry_run:
                version = self.version_manager.next_version()
            else:
                snapshot = self.version_manager.snapshot()
                version = self.version_manager.bump()
            identifier = build_identifier(version, counter)
            outcome.version = str(version)
            outcome.build_identifier = identifier
            logger.info(f"Build identifier: {identifier}")
            outcome.advance(stage)

            stage = Stage.ARTIFACT
            artifact = self._build_artifact(version)
            outcome.advance(stage)

            if promote:
                steps = {
                    Stage.IMAGE: lambda: self._publish_image(
                        artifact, identifier, context
                    ),
                    Stage.DEPLOY: lambda: self._deploy(identifier),
                    Stage.COMMIT: self._commit,
                }
                for stage in GATED_STAGES:
                    steps[stage]()
                    outcome.advance(stage)

            outcome.finish()
            logger.info(f"Run {identifier} done")
        except PromotionError as e:
            outcome.fail(stage, e)
            logger.error(f"Stage '{stage.value}' failed: {e}")
        finally:
            if outcome.status is not RunStatus.SUCCEEDED and snapshot is not None:
                self._restore(snapshot)

        return outcome

    def _restore(self, snapshot: bytes) -> None:
        try:
            self.version_manager.restore(snapshot)
        except VersioningError as e:
            logger.error(f"Could not restore the version descriptor: {e}")

    def _build_artifact(self, version: Version) -> Path:
        logger.info(f"Building artifact for version {version}")
        return _unwrap(self.builder.build(version))

    def _publish_image(
        self, artifact: Path, identifier: str, context: ExecutionContext
    ) -> str:
        image_ref = _unwrap(self.publisher.build_image(artifact, identifier))
        credentials = None
        if self.image_credentials is not None and not self.dry_run:
            credentials = self.image_credentials.resolve(context.environ)
        return _unwrap(self.publisher.push(image_ref, credentials))

    def _deploy(self, identifier: str) -> None:
        variables = {APP_NAME_VAR: self.app_name, IMAGE_NAME_VAR: identifier}
        for manifest in self.manifests:
            logger.info(f"Applying {manifest}")
            _unwrap(self.deployer.apply(manifest, variables))

    def _commit(self) -> str:
        return _unwrap(self.committer.commit(self.commit_message, self.author))
