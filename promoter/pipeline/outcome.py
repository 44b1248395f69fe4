"""Run status, sequencer states and the outcome of a promotion run."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from promoter.constants import Stage


class RunStatus(str, Enum):
    NOT_STARTED = "NotStarted"
    RUNNING = "Running"
    SUCCEEDED = "Succeeded"
    FAILED = "Failed"


class SequencerState(str, Enum):
    """States of the promotion state machine.

    Init -> VersionBumped -> ArtifactBuilt -> [ImageBuilt -> Deployed ->
    Committed] -> Done. The bracketed part only runs when the branch gate
    passes; any stage failure moves to Failed.
    """

    INIT = "Init"
    VERSION_BUMPED = "VersionBumped"
    ARTIFACT_BUILT = "ArtifactBuilt"
    IMAGE_BUILT = "ImageBuilt"
    DEPLOYED = "Deployed"
    COMMITTED = "Committed"
    DONE = "Done"
    FAILED = "Failed"


# State reached when each stage completes.
STAGE_STATES = {
    Stage.VERSION: SequencerState.VERSION_BUMPED,
    Stage.ARTIFACT: SequencerState.ARTIFACT_BUILT,
    Stage.IMAGE: SequencerState.IMAGE_BUILT,
    Stage.DEPLOY: SequencerState.DEPLOYED,
    Stage.COMMIT: SequencerState.COMMITTED,
}


@dataclass
class PipelineOutcome:
    """Status of one run, with the failing stage and cause once it fails."""

    status: RunStatus = RunStatus.NOT_STARTED
    state: SequencerState = SequencerState.INIT
    completed: List[Stage] = field(default_factory=list)
    failed_stage: Optional[Stage] = None
    cause: Optional[Exception] = None
    version: Optional[str] = None
    build_identifier: Optional[str] = None
    promoted: bool = False

    @property
    def succeeded(self) -> bool:
        return self.status is RunStatus.SUCCEEDED

    @property
    def failed(self) -> bool:
        return self.status is RunStatus.FAILED

    def start(self) -> None:
        if self.status is not RunStatus.NOT_STARTED:
            raise RuntimeError(f"Run already {self.status.value}")
        self.status = RunStatus.RUNNING

    def advance(self, stage: Stage) -> None:
        """Record that ``stage`` completed."""
        if self.status is not RunStatus.RUNNING:
            raise RuntimeError(f"Cannot advance a run that is {self.status.value}")
        self.completed.append(stage)
        self.state = STAGE_STATES[stage]

    def fail(self, stage: Stage, cause: Exception) -> None:
        self.status = RunStatus.FAILED
        self.state = SequencerState.FAILED
        self.failed_stage = stage
        self.cause = cause

    def finish(self) -> None:
        if self.status is not RunStatus.RUNNING:
            raise RuntimeError(f"Cannot finish a run that is {self.status.value}")
        self.status = RunStatus.SUCCEEDED
        self.state = SequencerState.DONE

    def describe(self) -> str:
        if self.failed:
            return f"Failed({self.failed_stage.value}, {self.cause})"
        return self.status.value
