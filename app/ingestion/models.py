from dataclasses import dataclass
from enum import Enum
from pathlib import Path


@dataclass(frozen=True)
class DocumentStoredEvent:
    """Notification that the bytes for a document are in blob storage."""

    document_id: str


@dataclass(frozen=True)
class UploadTicket:
    """Issued to the uploader: where to write the bytes, and the ID to poll with."""

    document_id: str
    upload_path: Path


class TriggerOutcome(str, Enum):
    STARTED = "started"
    DUPLICATE = "duplicate"
    UNKNOWN_DOCUMENT = "unknown_document"
