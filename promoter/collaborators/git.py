"""
Source control committer built on GitPython.

Stages the version descriptor, commits it as the CI identity and pushes
``HEAD:<push_ref>``. A commit whose push fails is undone again, so the
checkout never keeps a version commit the remote does not have. The scoped
credential is embedded in the push URL for that single push only; the remote
configuration of the checkout is never changed.
"""

import logging
import re
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Union
from urllib.parse import quote, urlsplit, urlunsplit

from git import Actor, Commit, Repo
from git.exc import GitCommandError, InvalidGitRepositoryError, NoSuchPathError
from returns.result import Failure, Result, Success

from .exceptions import AuthError, ConflictError, NetworkError, StageError
from .interfaces import Author, Credentials
from .shell import redact

logger = logging.getLogger(__name__)

_REJECTED = re.compile(
    r"rejected\]|non-fast-forward|fetch first|failed to push some refs",
    re.IGNORECASE,
)
_AUTH_FAILURE = re.compile(
    r"authentication failed|could not read username|permission denied"
    r"|access denied|\b40[13]\b",
    re.IGNORECASE,
)


def url_with_credentials(url: str, credentials: Optional[Credentials]) -> str:
    """Embed ``credentials`` into an http(s) remote URL."""
    if credentials is None:
        return url
    parts = urlsplit(url)
    if parts.scheme not in ("http", "https"):
        return url
    host = parts.hostname or ""
    if parts.port:
        host = f"{host}:{parts.port}"
    username = quote(credentials.username, safe="")
    password = quote(credentials.password, safe="")
    userinfo = f"{username}:{password}"
    return urlunsplit(
        (parts.scheme, f"{userinfo}@{host}", parts.path, parts.query, parts.fragment)
    )


class GitCommitter:
    """
    Commits the version descriptor and pushes it back to the remote.

    Args:
        repo_path: Root of the git checkout
        paths: Files to stage, relative to ``repo_path``
        remote: Name of the remote to push to
        push_ref: Remote branch receiving ``HEAD``
        credentials: Scoped push credential, or a callable returning it when the
            push happens (None uses ambient git auth)
        dry_run: Log the commit and push without performing them
    """

    def __init__(
        self,
        repo_path: Path,
        paths: Sequence[str],
        remote: str = "origin",
        push_ref: str = "master",
        credentials: Union[Credentials, Callable[[], Credentials], None] = None,
        dry_run: bool = False,
    ):
        self.repo_path = Path(repo_path)
        self.paths = [str(p) for p in paths]
        self.remote = remote
        self.push_ref = push_ref
        self.credentials = credentials
        self.dry_run = dry_run

    def _resolve_credentials(self) -> Optional[Credentials]:
        if callable(self.credentials):
            return self.credentials()
        return self.credentials

    def commit(self, message: str, author: Author) -> Result[str, StageError]:
        if self.dry_run:
            logger.info(
                f"[dry-run] git commit {self.paths} as {author}: {message!r}, "
                f"push HEAD:{self.push_ref} to {self.remote}"
            )
            return Success("dry-run")

        try:
            repo = Repo(self.repo_path)
        except (InvalidGitRepositoryError, NoSuchPathError) as e:
            return Failure(
                ConflictError(f"{self.repo_path} is not a git repository: {e}")
            )

        try:
            credentials = self._resolve_credentials()
        except AuthError as e:
            return Failure(e)

        try:
            remote_url = repo.remote(self.remote).url
        except ValueError as e:
            return Failure(ConflictError(f"Unknown remote '{self.remote}': {e}"))

        previous = repo.head.commit if repo.head.is_valid() else None
        try:
            repo.index.add(self.paths)
            if previous is not None and not repo.index.diff("HEAD"):
                return Failure(
                    ConflictError(f"Nothing to commit: {self.paths} are unchanged")
                )
            actor = Actor(author.name, author.email)
            commit = repo.index.commit(message, author=actor, committer=actor)
        except GitCommandError as e:
            return Failure(
                ConflictError(
                    "git commit failed",
                    command=["git", "commit"],
                    stderr=str(e.stderr or e),
                )
            )

        logger.info(f"Committed {commit.hexsha[:8]}: {message}")

        push_url = url_with_credentials(remote_url, credentials)
        try:
            repo.git.push(push_url, f"HEAD:{self.push_ref}")
        except GitCommandError as e:
            self._undo_commit(repo, previous)
            return Failure(self._classify_push_error(e, credentials))

        logger.info(f"Pushed {commit.hexsha[:8]} to {self.remote}/{self.push_ref}")
        return Success(commit.hexsha)

    def _undo_commit(self, repo: Repo, previous: Optional[Commit]) -> None:
        """Move HEAD back to ``previous``, leaving the working tree as it is."""
        if previous is None:
            repo.git.update_ref("-d", "HEAD")
            logger.info("Push failed: removed the unpushed root commit")
            return
        repo.head.reset(previous, index=True, working_tree=False)
        logger.info(f"Push failed: HEAD reset to {previous.hexsha[:8]}")

    def _classify_push_error(
        self, error: GitCommandError, credentials: Optional[Credentials]
    ) -> StageError:
        secrets: List[str] = []
        if credentials is not None:
            secrets = [credentials.password, quote(credentials.password, safe="")]
        stderr = redact(str(error.stderr or ""), secrets)
        command = ["git", "push", self.remote, f"HEAD:{self.push_ref}"]
        message = f"git push to {self.remote}/{self.push_ref} failed"

        if _AUTH_FAILURE.search(stderr):
            return AuthError(message, command=command, stderr=stderr)
        if _REJECTED.search(stderr):
            return ConflictError(message, command=command, stderr=stderr)
        return NetworkError(message, command=command, stderr=stderr)
