"""Error formatting for CLI output."""

from promoter.collaborators.exceptions import StageError
from promoter.collaborators.shell import format_command
from promoter.pipeline.outcome import PipelineOutcome


def format_stage_failure(outcome: PipelineOutcome) -> str:
    """Format the failing stage of a run for the operator.

    Example output:
        Stage 'image' failed: NetworkError
          docker push of registry.example.com/app:1.0.1-123 failed with exit status 1
          Command: docker push registry.example.com/app:1.0.1-123
          Output:
            Get "https://registry.example.com/v2/": dial tcp: i/o timeout
    """
    if not outcome.failed:
        return ""

    cause = outcome.cause
    lines = [f"Stage '{outcome.failed_stage.value}' failed: {type(cause).__name__}"]

    if isinstance(cause, StageError):
        lines.append(f"  {cause.message}")
        if cause.command:
            lines.append(f"  Command: {format_command(cause.command)}")
        if cause.stderr:
            lines.append("  Output:")
            lines.extend(f"    {line}" for line in cause.stderr.splitlines())
    else:
        lines.append(f"  {cause}")

    return "\n".join(lines)
