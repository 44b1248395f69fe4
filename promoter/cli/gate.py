"""cli command evaluating the branch gate"""

import sys

import click

from promoter.cli.utils.logging import logger
from promoter.config import get_default_target_branch
from promoter.pipeline import ExecutionContext, branch_gate


@click.command(name="gate")
@click.option(
    "-b",
    "--branch",
    type=str,
    default=None,
    help="Branch to check. Default: BRANCH_NAME, GIT_BRANCH or the checkout.",
)
@click.option(
    "-t",
    "--target",
    type=str,
    default=None,
    help="Branch allowed to promote. Default: master, or the configured default.",
)
def gate(branch, target):
    """Exit with status 0 if BRANCH may promote, 1 otherwise."""
    target = target or get_default_target_branch()
    if branch is None:
        branch = ExecutionContext.from_environment(repo_path=".").branch

    if branch_gate(branch, target):
        logger.info(f"'{branch}' may promote")
        sys.exit(0)

    logger.info(f"'{branch}' may not promote (target is '{target}')")
    sys.exit(1)
