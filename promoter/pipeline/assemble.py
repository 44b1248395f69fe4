"""Wire a PromotionSequencer from a pipeline definition."""

import os
from functools import partial
from pathlib import Path
from typing import Optional

from promoter.collaborators import (
    CommandRunner,
    DockerImagePublisher,
    GitCommitter,
    KubectlDeployer,
    MavenArtifactBuilder,
)
from promoter.model.pipeline import PipelineDefinition
from promoter.versioning import VersionManager

from .context import ExecutionContext
from .sequencer import PromotionSequencer


def assemble_sequencer(
    definition: PipelineDefinition,
    context: ExecutionContext,
    dry_run: bool = False,
    lock_dir: Optional[Path] = None,
) -> PromotionSequencer:
    """
    Build a sequencer whose collaborators shell out to the real tools.

    Commands run from the definition's directory, which is also taken as the
    root of the git checkout.
    """
    base_dir = definition.base_dir
    runner = CommandRunner(cwd=base_dir, dry_run=dry_run)

    builder = MavenArtifactBuilder(
        project_dir=definition.version_path.parent,
        runner=CommandRunner(cwd=definition.version_path.parent, dry_run=dry_run),
        goals=definition.artifact.goals,
        executable=definition.artifact.executable,
    )
    publisher = DockerImagePublisher(
        repository=definition.image.repository,
        context=definition.resolve_path(definition.image.context),
        runner=runner,
        executable=definition.image.executable,
    )

    kube_env = {}
    if definition.deploy.kubeconfig:
        kubeconfig = definition.resolve_path(definition.deploy.kubeconfig)
        kube_env["KUBECONFIG"] = str(kubeconfig)
    deployer = KubectlDeployer(
        runner=runner, executable=definition.deploy.executable, env=kube_env
    )

    commit_credentials = None
    if definition.commit.credentials is not None:
        commit_credentials = partial(
            definition.commit.credentials.resolve, context.environ
        )
    committer = GitCommitter(
        repo_path=base_dir,
        paths=[os.path.relpath(definition.version_path, base_dir)],
        remote=definition.commit.remote,
        push_ref=definition.push_ref,
        credentials=commit_credentials,
        dry_run=dry_run,
    )

    return PromotionSequencer(
        version_manager=VersionManager(definition.version_path, lock_dir=lock_dir),
        builder=builder,
        publisher=publisher,
        deployer=deployer,
        committer=committer,
        app_name=definition.app_name,
        target_branch=definition.target_branch,
        manifests=definition.manifest_paths,
        commit_message=definition.commit.message,
        author=definition.commit.author,
        image_credentials=definition.image.credentials,
        dry_run=dry_run,
    )
