from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from app.status.exceptions import InvalidTransitionError


class ProcessingStatus(str, Enum):
    """Lifecycle of a document record. Declaration order is progress order."""

    UPLOADED = "UPLOADED"
    PROCESSING = "PROCESSING"
    OCR_COMPLETE = "OCR_COMPLETE"
    CLASSIFICATION_COMPLETE = "CLASSIFICATION_COMPLETE"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATUSES


TERMINAL_STATUSES = frozenset({ProcessingStatus.COMPLETED, ProcessingStatus.FAILED})

_FORWARD_ORDER: tuple[ProcessingStatus, ...] = (
    ProcessingStatus.UPLOADED,
    ProcessingStatus.PROCESSING,
    ProcessingStatus.OCR_COMPLETE,
    ProcessingStatus.CLASSIFICATION_COMPLETE,
    ProcessingStatus.COMPLETED,
)

UNKNOWN_FILE_ATTRIBUTE = "unknown"


@dataclass(frozen=True)
class DocumentRecord:
    """Per-document status record, the single source of truth for progress."""

    document_id: str
    file_name: str
    file_type: str
    upload_timestamp: int
    status: ProcessingStatus = ProcessingStatus.UPLOADED
    extraction_output: dict[str, Any] | None = None
    classification: str | None = None
    summary: str | None = None
    error_messages: list[str] = field(default_factory=list)
    degraded_stages: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class RecordUpdate:
    """Field set applied by one conditional status store update.

    ``error_messages`` and ``degraded_stages`` are appended, never replaced.
    """

    status: ProcessingStatus
    extraction_output: dict[str, Any] | None = None
    classification: str | None = None
    summary: str | None = None
    error_messages: list[str] = field(default_factory=list)
    degraded_stages: list[str] = field(default_factory=list)


def check_transition(current: ProcessingStatus, target: ProcessingStatus) -> None:
    """Allow one step forward, or FAILED from any non-terminal status.

    Raises:
        InvalidTransitionError: for regressions, skips and terminal records.
    """
    if current.is_terminal:
        raise InvalidTransitionError(
            f"Record is terminal ({current.value}); cannot move to {target.value}"
        )
    if target is ProcessingStatus.FAILED:
        return
    next_index = _FORWARD_ORDER.index(current) + 1
    if next_index >= len(_FORWARD_ORDER) or _FORWARD_ORDER[next_index] is not target:
        raise InvalidTransitionError(
            f"Transition {current.value} -> {target.value} is not allowed"
        )


def check_write_once(record: DocumentRecord, update: RecordUpdate) -> None:
    """Reject overwriting a stage output that is already populated."""
    for name in ("extraction_output", "classification", "summary"):
        if getattr(update, name) is not None and getattr(record, name) is not None:
            raise InvalidTransitionError(
                f"Field '{name}' of document {record.document_id} is already set"
            )
