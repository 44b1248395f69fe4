"""cli command printing the build identifier of a run"""

import sys
from pathlib import Path

import click

from promoter.cli.utils.logging import logger
from promoter.config import get_lock_dir
from promoter.constants import DEFAULT_VERSION_FILE, RUN_COUNTER_ENV
from promoter.versioning import VersioningError, VersionManager, build_identifier


@click.command(name="tag")
@click.option(
    "-n",
    "--run-counter",
    type=str,
    envvar=RUN_COUNTER_ENV,
    required=True,
    help=f"Orchestrator run number. Default: ${RUN_COUNTER_ENV}.",
)
@click.option(
    "-f",
    "--file",
    "version_file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_VERSION_FILE,
    show_default=True,
    help="Version descriptor.",
)
@click.option(
    "--next",
    "use_next",
    is_flag=True,
    default=False,
    help="Use the version the next bump would produce.",
)
def tag(run_counter, version_file, use_next):
    """Print the image tag for the current version and a run counter."""
    try:
        manager = VersionManager(version_file, lock_dir=get_lock_dir())
        version = manager.next_version() if use_next else manager.current()
        identifier = build_identifier(version, run_counter)
    except VersioningError as e:
        logger.error(str(e))
        sys.exit(1)
    click.echo(identifier)
