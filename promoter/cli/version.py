"""cli commands reading and bumping the project version"""

import sys
from pathlib import Path

import click

from promoter.cli.utils.logging import logger
from promoter.config import get_lock_dir
from promoter.constants import DEFAULT_VERSION_FILE
from promoter.versioning import VersioningError, VersionManager

version_file_option = click.option(
    "-f",
    "--file",
    "version_file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_VERSION_FILE,
    show_default=True,
    help="Version descriptor (pom.xml or a YAML file with a version key).",
)


@click.group(name="version")
@click.pass_context
def version(ctx):
    """Read or bump the project version."""
    ctx.ensure_object(dict)


@version.command("show")
@version_file_option
def show(version_file):
    """Print the current version."""
    try:
        current = VersionManager(version_file, lock_dir=get_lock_dir()).current()
    except VersioningError as e:
        logger.error(str(e))
        sys.exit(1)
    click.echo(str(current))


@version.command("bump")
@version_file_option
def bump(version_file):
    """Increment the patch version and write it back."""
    try:
        new_version = VersionManager(version_file, lock_dir=get_lock_dir()).bump()
    except VersioningError as e:
        logger.error(str(e))
        sys.exit(1)
    click.echo(str(new_version))
