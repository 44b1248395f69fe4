"""
Blocking invocation of external command-line tools.

Every stage of a promotion run ends up here: the runner waits for the tool to
exit and hands back the CompletedProcess, leaving interpretation of the exit
status to the collaborator.
"""

import logging
import os
import shlex
import subprocess
from pathlib import Path
from typing import Mapping, Optional, Sequence

logger = logging.getLogger(__name__)

MASK = "****"


def redact(text: str, secrets: Sequence[str]) -> str:
    """Replace every occurrence of each secret in ``text`` with a mask."""
    for secret in secrets:
        if secret:
            text = text.replace(secret, MASK)
    return text


def format_command(args: Sequence[str], secrets: Sequence[str] = ()) -> str:
    return redact(shlex.join([str(a) for a in args]), secrets)


class CommandRunner:
    """
    Runs external commands, or only logs them in dry-run mode.

    Args:
        cwd: Working directory for every command (defaults to the current one)
        env: Extra environment variables layered over ``os.environ``
        dry_run: Log commands instead of executing them
    """

    def __init__(
        self,
        cwd: Optional[Path] = None,
        env: Optional[Mapping[str, str]] = None,
        dry_run: bool = False,
    ):
        self.cwd = Path(cwd) if cwd is not None else None
        self.env = dict(env or {})
        self.dry_run = dry_run

    def run(
        self,
        args: Sequence[str],
        input: Optional[str] = None,
        env: Optional[Mapping[str, str]] = None,
        secrets: Sequence[str] = (),
    ) -> subprocess.CompletedProcess:
        """
        Run ``args`` to completion.

        A tool that cannot be started yields returncode 127 with the OS error
        in stderr, as a shell would report it.

        Args:
            args: Program and arguments (no shell involved)
            input: Text passed on stdin
            env: Extra environment for this command only
            secrets: Values masked wherever the command is logged
        """
        command = [str(a) for a in args]
        display = format_command(command, secrets)

        if self.dry_run:
            logger.info(f"[dry-run] {display}")
            return subprocess.CompletedProcess(command, 0, stdout="", stderr="")

        logger.debug(f"Running: {display}")

        full_env = dict(os.environ)
        full_env.update(self.env)
        if env:
            full_env.update(env)

        try:
            result = subprocess.run(
                command,
                input=input,
                text=True,
                capture_output=True,
                check=False,
                cwd=self.cwd,
                env=full_env,
            )
        except OSError as e:
            logger.debug(f"Could not start {command[0]}: {e}")
            return subprocess.CompletedProcess(command, 127, stdout="", stderr=str(e))

        if result.returncode != 0:
            logger.debug(
                f"{command[0]} exited with status {result.returncode}: "
                f"{redact(result.stderr or '', secrets).strip()}"
            )
        return result
