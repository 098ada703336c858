from dataclasses import dataclass, field
from typing import Any

from app.status.models import DocumentRecord, ProcessingStatus


@dataclass(frozen=True)
class DocumentResult:
    """Client-facing projection of a document record.

    Fields a stage has not produced yet are None rather than an error.
    """

    document_id: str
    status: ProcessingStatus
    file_name: str
    file_type: str
    upload_timestamp: int
    extraction_output: dict[str, Any] | None = None
    classification: str | None = None
    summary: str | None = None
    error_messages: list[str] = field(default_factory=list)
    degraded_stages: list[str] = field(default_factory=list)

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal

    @classmethod
    def from_record(cls, record: DocumentRecord) -> "DocumentResult":
        return cls(
            document_id=record.document_id,
            status=record.status,
            file_name=record.file_name,
            file_type=record.file_type,
            upload_timestamp=record.upload_timestamp,
            extraction_output=record.extraction_output,
            classification=record.classification,
            summary=record.summary,
            error_messages=list(record.error_messages),
            degraded_stages=list(record.degraded_stages),
        )

    def to_dict(self) -> dict[str, Any]:
        """Render the polling protocol payload."""
        return {
            "documentId": self.document_id,
            "status": self.status.value,
            "fileName": self.file_name,
            "fileType": self.file_type,
            "extractionOutput": self.extraction_output,
            "classification": self.classification,
            "summary": self.summary,
            "uploadTimestamp": self.upload_timestamp,
            "errorMessages": list(self.error_messages),
            "degradedStages": list(self.degraded_stages),
        }

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "DocumentResult":
        """Parse a polling protocol payload; optional keys may be missing."""
        return cls(
            document_id=payload["documentId"],
            status=ProcessingStatus(payload["status"]),
            file_name=payload["fileName"],
            file_type=payload["fileType"],
            upload_timestamp=int(payload["uploadTimestamp"]),
            extraction_output=payload.get("extractionOutput"),
            classification=payload.get("classification"),
            summary=payload.get("summary"),
            error_messages=list(payload.get("errorMessages") or []),
            degraded_stages=list(payload.get("degradedStages") or []),
        )
