"""Execution context supplied by the hosting orchestrator."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Mapping, Optional, Union

from git import Repo
from git.exc import InvalidGitRepositoryError, NoSuchPathError

from promoter.constants import (
    BRANCH_ENV_VARS,
    REMOTE_BRANCH_ENV,
    RUN_COUNTER_ENV,
)

logger = logging.getLogger(__name__)

_BRANCH_PREFIXES = ("refs/heads/", "refs/remotes/origin/", "origin/")


def _clean(name: Optional[str]) -> Optional[str]:
    if name is None:
        return None
    return name.strip() or None


def normalize_branch(name: Optional[str]) -> Optional[str]:
    """
    Strip the remote/ref prefixes Jenkins puts in ``GIT_BRANCH``.

    Only ``GIT_BRANCH`` goes through this; an explicit branch and
    ``BRANCH_NAME`` are taken literally.
    """
    name = _clean(name)
    if name is None:
        return None
    for prefix in _BRANCH_PREFIXES:
        if name.startswith(prefix):
            return name[len(prefix) :]
    return name or None


def current_git_branch(repo_path: Path) -> Optional[str]:
    """Active branch of a local checkout, or None if detached or not a repo."""
    try:
        repo = Repo(repo_path, search_parent_directories=True)
    except (InvalidGitRepositoryError, NoSuchPathError):
        return None
    if repo.head.is_detached:
        return None
    return repo.active_branch.name


@dataclass(frozen=True)
class ExecutionContext:
    """
    Read-only inputs of one run: branch, run counter and environment.

    ``environ`` is where stage credentials are looked up; it defaults to the
    process environment.
    """

    branch: Optional[str]
    run_counter: Union[int, str, None]
    environ: Mapping[str, str] = field(default_factory=lambda: dict(os.environ))

    @classmethod
    def from_environment(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        branch: Optional[str] = None,
        run_counter: Union[int, str, None] = None,
        repo_path: Optional[Path] = None,
    ) -> "ExecutionContext":
        """
        Build a context from explicit values, falling back to the environment.

        The branch comes from ``branch``, then ``BRANCH_NAME``, then
        ``GIT_BRANCH`` (ref prefixes removed), then the active branch of the
        checkout at ``repo_path``.
        The run counter comes from ``run_counter``, then ``BUILD_NUMBER``.
        """
        env: Dict[str, str] = dict(os.environ if environ is None else environ)

        branch = _clean(branch)
        if branch is None:
            for name in BRANCH_ENV_VARS:
                value = _clean(env.get(name))
                if value is None:
                    continue
                if name == REMOTE_BRANCH_ENV:
                    value = normalize_branch(value)
                branch = value
                logger.debug(f"Branch taken from {name}")
                break
        if branch is None and repo_path is not None:
            branch = current_git_branch(repo_path)

        if run_counter is None:
            run_counter = env.get(RUN_COUNTER_ENV)

        return cls(branch=branch, run_counter=run_counter, environ=env)
