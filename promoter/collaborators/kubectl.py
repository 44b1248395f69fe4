"""Cluster deployer: envsubst-style rendering piped into ``kubectl apply``."""

import logging
import re
from pathlib import Path
from typing import Mapping, Optional

from returns.result import Failure, Result, Success

from .exceptions import ApplyError
from .shell import CommandRunner

logger = logging.getLogger(__name__)

_PLACEHOLDER = re.compile(
    r"\$(?:\{(?P<braced>[A-Za-z_][A-Za-z0-9_]*)\}|(?P<bare>[A-Za-z_][A-Za-z0-9_]*))"
)


def render_manifest(text: str, variables: Mapping[str, str]) -> str:
    """
    Substitute ``$NAME`` and ``${NAME}`` for the given variables only.

    Behaves like ``envsubst '$APP_NAME $IMAGE_NAME'``: placeholders for names
    not in ``variables`` are left as they are.
    """

    def substitute(match: re.Match) -> str:
        name = match.group("braced") or match.group("bare")
        if name in variables:
            return str(variables[name])
        return match.group(0)

    return _PLACEHOLDER.sub(substitute, text)


class KubectlDeployer:
    """
    Applies rendered manifests with ``kubectl apply -f -``.

    Args:
        runner: Command runner
        executable: kubectl binary
        env: Extra environment for kubectl (cloud credentials, KUBECONFIG)
    """

    def __init__(
        self,
        runner: Optional[CommandRunner] = None,
        executable: str = "kubectl",
        env: Optional[Mapping[str, str]] = None,
    ):
        self.runner = runner or CommandRunner()
        self.executable = executable
        self.env = dict(env or {})

    def apply(
        self, template: Path, variables: Mapping[str, str]
    ) -> Result[str, ApplyError]:
        template = Path(template)
        try:
            text = template.read_text(encoding="utf-8")
        except OSError as e:
            return Failure(
                ApplyError(f"Cannot read manifest template {template}: {e}")
            )

        rendered = render_manifest(text, variables)
        command = [self.executable, "apply", "-f", "-"]
        logger.debug(f"Applying {template} with {dict(variables)}")

        result = self.runner.run(command, input=rendered, env=self.env)
        if result.returncode != 0:
            return Failure(
                ApplyError(
                    f"kubectl apply of {template} failed "
                    f"with exit status {result.returncode}",
                    command=command,
                    stderr=result.stderr,
                )
            )

        output = (result.stdout or "").strip()
        logger.info(output or f"Applied {template}")
        return Success(output)
