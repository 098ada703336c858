from typing import Any

from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from app.database.connection import get_connection
from app.status.base import BaseStatusStore
from app.status.exceptions import (
    ConflictingStatusError,
    InvalidTransitionError,
    RecordAlreadyExistsError,
    RecordNotFoundError,
)
from app.status.models import DocumentRecord, ProcessingStatus, RecordUpdate, check_transition

_COLUMNS = """
    document_id, file_name, file_type, upload_timestamp, status,
    extraction_output, classification, summary, error_messages, degraded_stages
"""


class PostgresStatusStore(BaseStatusStore):
    """Status store backed by the document_processing table."""

    def create(
        self,
        document_id: str,
        file_name: str,
        file_type: str,
        upload_timestamp: int,
    ) -> DocumentRecord:
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    INSERT INTO document_processing
                        (document_id, file_name, file_type, upload_timestamp, status)
                    VALUES (%s, %s, %s, %s, %s)
                    ON CONFLICT (document_id) DO NOTHING
                    RETURNING {_COLUMNS}
                    """,
                    (
                        document_id,
                        file_name,
                        file_type,
                        upload_timestamp,
                        ProcessingStatus.UPLOADED.value,
                    ),
                )
                row = cur.fetchone()
            conn.commit()

        if row is None:
            raise RecordAlreadyExistsError(f"Document {document_id} already exists")
        return _row_to_record(row)

    def update(
        self,
        document_id: str,
        update: RecordUpdate,
        expected_status: ProcessingStatus,
    ) -> DocumentRecord:
        check_transition(expected_status, update.status)
        params = {
            "document_id": document_id,
            "expected": expected_status.value,
            "status": update.status.value,
            "extraction_output": (
                Jsonb(update.extraction_output)
                if update.extraction_output is not None
                else None
            ),
            "classification": update.classification,
            "summary": update.summary,
            "error_messages": Jsonb(list(update.error_messages)),
            "degraded_stages": Jsonb(list(update.degraded_stages)),
        }
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    UPDATE document_processing
                    SET status = %(status)s,
                        extraction_output = COALESCE(%(extraction_output)s::jsonb, extraction_output),
                        classification = COALESCE(%(classification)s::text, classification),
                        summary = COALESCE(%(summary)s::text, summary),
                        error_messages = error_messages || %(error_messages)s::jsonb,
                        degraded_stages = degraded_stages || %(degraded_stages)s::jsonb,
                        updated_at = NOW()
                    WHERE document_id = %(document_id)s
                      AND status = %(expected)s
                      AND (%(extraction_output)s::jsonb IS NULL OR extraction_output IS NULL)
                      AND (%(classification)s::text IS NULL OR classification IS NULL)
                      AND (%(summary)s::text IS NULL OR summary IS NULL)
                    RETURNING {_COLUMNS}
                    """,
                    params,
                )
                row = cur.fetchone()
            conn.commit()

        if row is not None:
            return _row_to_record(row)

        current = self.get(document_id)
        if current.status is not expected_status:
            raise ConflictingStatusError(
                document_id, expected_status.value, current.status.value
            )
        raise InvalidTransitionError(
            f"Update for document {document_id} would overwrite a stage output"
        )

    def get(self, document_id: str) -> DocumentRecord:
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    SELECT {_COLUMNS}
                    FROM document_processing
                    WHERE document_id = %s
                    """,
                    (document_id,),
                )
                row = cur.fetchone()

        if row is None:
            raise RecordNotFoundError(f"Document {document_id} not found")
        return _row_to_record(row)


def _row_to_record(row: dict[str, Any]) -> DocumentRecord:
    return DocumentRecord(
        document_id=str(row["document_id"]),
        file_name=row["file_name"],
        file_type=row["file_type"],
        upload_timestamp=int(row["upload_timestamp"]),
        status=ProcessingStatus(row["status"]),
        extraction_output=row["extraction_output"],
        classification=row["classification"],
        summary=row["summary"],
        error_messages=list(row["error_messages"] or []),
        degraded_stages=list(row["degraded_stages"] or []),
    )
