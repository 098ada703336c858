from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from app.status.models import ProcessingStatus


class PipelineState(str, Enum):
    INIT = "init"
    EXTRACTING = "extracting"
    CLASSIFYING = "classifying"
    SUMMARIZING = "summarizing"
    DONE = "done"
    ABORTED = "aborted"

    @property
    def is_final(self) -> bool:
        return self in (PipelineState.DONE, PipelineState.ABORTED)


class PipelineEvent(str, Enum):
    START = "start"
    EXTRACTION_SUCCEEDED = "extraction_succeeded"
    EXTRACTION_FAILED = "extraction_failed"
    CLASSIFICATION_DONE = "classification_done"
    SUMMARIZATION_DONE = "summarization_done"


@dataclass(frozen=True)
class Transition:
    target: PipelineState
    status: ProcessingStatus


# The only edges the coordinator may take; each one is exactly one store update.
TRANSITIONS: dict[tuple[PipelineState, PipelineEvent], Transition] = {
    (PipelineState.INIT, PipelineEvent.START): Transition(
        PipelineState.EXTRACTING, ProcessingStatus.PROCESSING
    ),
    (PipelineState.EXTRACTING, PipelineEvent.EXTRACTION_SUCCEEDED): Transition(
        PipelineState.CLASSIFYING, ProcessingStatus.OCR_COMPLETE
    ),
    (PipelineState.EXTRACTING, PipelineEvent.EXTRACTION_FAILED): Transition(
        PipelineState.ABORTED, ProcessingStatus.FAILED
    ),
    (PipelineState.CLASSIFYING, PipelineEvent.CLASSIFICATION_DONE): Transition(
        PipelineState.SUMMARIZING, ProcessingStatus.CLASSIFICATION_COMPLETE
    ),
    (PipelineState.SUMMARIZING, PipelineEvent.SUMMARIZATION_DONE): Transition(
        PipelineState.DONE, ProcessingStatus.COMPLETED
    ),
}


@dataclass(slots=True)
class PipelineContext:
    """Per-run state carried between stages of one document."""

    document_id: str
    file_name: str
    file_type: str
    status: ProcessingStatus = ProcessingStatus.UPLOADED
    extraction_output: dict[str, Any] | None = None
    classification: str | None = None
    summary: str | None = None
    history: list[PipelineState] = field(default_factory=lambda: [PipelineState.INIT])
