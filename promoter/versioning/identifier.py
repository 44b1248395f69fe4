"""Build identifiers tying a release version to one orchestrator run."""

from typing import Optional, Union

from .exceptions import InvalidInputError
from .version import Version


def normalize_run_counter(run_counter: Union[int, str, None]) -> int:
    """
    Coerce an orchestrator run counter into a positive int.

    Jenkins exposes BUILD_NUMBER as a string, so decimal strings are accepted.

    Raises:
        InvalidInputError: If the counter is missing, not an integer or not positive
    """
    if run_counter is None or isinstance(run_counter, bool):
        raise InvalidInputError(
            f"Run counter must be a positive integer, got {run_counter!r}"
        )

    if isinstance(run_counter, str):
        text = run_counter.strip()
        if not (text.isascii() and text.isdigit()):
            raise InvalidInputError(
                f"Run counter must be a positive integer, got {run_counter!r}"
            )
        run_counter = int(text)

    if not isinstance(run_counter, int) or run_counter <= 0:
        raise InvalidInputError(
            f"Run counter must be a positive integer, got {run_counter!r}"
        )

    return run_counter


def build_identifier(version: Optional[Version], run_counter: Union[int, str]) -> str:
    """
    Compose the image tag for a run: ``{major}.{minor}.{patch}-{run_counter}``.

    The result only depends on its inputs, so every stage of a run can refer
    to the same image without recomputing anything.

    Raises:
        InvalidInputError: If version is unset or run_counter is not positive
    """
    if version is None:
        raise InvalidInputError("Version is not set")
    if not isinstance(version, Version):
        raise InvalidInputError(f"Expected a Version, got {type(version).__name__}")

    counter = normalize_run_counter(run_counter)
    return f"{version.major}.{version.minor}.{version.patch}-{counter}"
