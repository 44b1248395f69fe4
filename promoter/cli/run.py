"""cli command executing a full promotion run"""

import sys
from pathlib import Path

import click

from promoter.cli.display import RunDisplay
from promoter.cli.error_formatting import format_stage_failure
from promoter.cli.utils.logging import logger
from promoter.config import get_default_definition, get_lock_dir
from promoter.model import PipelineDefinition, PipelineDefinitionError
from promoter.pipeline import ExecutionContext, assemble_sequencer


@click.command(name="run")
@click.option(
    "-f",
    "--definition",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Pipeline definition file. Default: promote.yaml",
)
@click.option(
    "-b",
    "--branch",
    type=str,
    default=None,
    help="Branch of this run. Default: BRANCH_NAME, GIT_BRANCH or the checkout.",
)
@click.option(
    "-n",
    "--run-counter",
    type=str,
    default=None,
    help="Orchestrator run number. Default: BUILD_NUMBER.",
)
@click.option(
    "-d",
    "--dry",
    is_flag=True,
    default=False,
    help="Log external commands instead of running them; leave the version file as is.",
)
@click.pass_context
def run(ctx, definition, branch, run_counter, dry):
    """Bump the version, build, and promote from the target branch."""
    ctx.ensure_object(dict)
    display = RunDisplay()

    definition_path = definition or get_default_definition()
    try:
        pipeline = PipelineDefinition.from_yaml(definition_path)
    except PipelineDefinitionError as e:
        logger.error(str(e))
        sys.exit(1)

    context = ExecutionContext.from_environment(
        branch=branch, run_counter=run_counter, repo_path=pipeline.base_dir
    )
    sequencer = assemble_sequencer(
        pipeline, context, dry_run=dry, lock_dir=get_lock_dir()
    )

    display.section(f"Promoting {pipeline.app_name}")
    display.summary(
        {
            "Branch": context.branch or "<unknown>",
            "Target branch": pipeline.target_branch,
            "Run": context.run_counter or "<unset>",
            "Dry run": dry,
        }
    )

    if dry:
        display.status("Dry run: external commands are logged, not executed")

    outcome = sequencer.run(context)

    display.section("Result")
    display.summary(
        {
            "Version": outcome.version or "-",
            "Build identifier": outcome.build_identifier or "-",
            "Promoted": outcome.promoted,
            "Stages": ", ".join(s.value for s in outcome.completed) or "-",
            "State": outcome.state.value,
        }
    )

    if outcome.failed:
        display.error(format_stage_failure(outcome))
        sys.exit(1)

    display.success(f"Run {outcome.build_identifier} finished: {outcome.describe()}")
