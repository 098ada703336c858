from dataclasses import dataclass
from datetime import datetime


@dataclass
class EventRecord:
    """Represents a row from the document_events table.

    One row is written per document-stored notification; duplicates for the
    same document are allowed and resolved by the ingestion trigger.
    """

    id: int
    document_id: str
    status: str
    attempts: int
    error_message: str | None = None
    locked_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
