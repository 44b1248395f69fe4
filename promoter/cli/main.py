"""promoter CLI"""

import click

from promoter import __version__
from promoter.cli.gate import gate
from promoter.cli.run import run
from promoter.cli.tag import tag
from promoter.cli.version import version

from .debug import add_debug_option


@click.group()
@click.version_option(__version__, prog_name="promoter")
@click.pass_context
def cli(ctx):
    """
    Version, tag and branch-gated promotion of a Maven application.
    """
    ctx.ensure_object(dict)


cli.add_command(add_debug_option(run))
cli.add_command(add_debug_option(version))
cli.add_command(add_debug_option(tag))
cli.add_command(add_debug_option(gate))

add_debug_option(cli)


def main():
    cli(obj={})


if __name__ == "__main__":
    main()
