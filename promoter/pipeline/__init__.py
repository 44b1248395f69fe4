"""Branch gate, execution context and the promotion sequencer."""

from promoter.pipeline.gate import branch_gate
from promoter.pipeline.context import ExecutionContext, normalize_branch
from promoter.pipeline.outcome import PipelineOutcome, RunStatus, SequencerState
from promoter.pipeline.sequencer import PromotionSequencer
from promoter.pipeline.assemble import assemble_sequencer

__all__ = [
    "branch_gate",
    "ExecutionContext",
    "normalize_branch",
    "PipelineOutcome",
    "RunStatus",
    "SequencerState",
    "PromotionSequencer",
    "assemble_sequencer",
]
