"""In-process status store.

No database. Useful for local development and tests; records live only as
long as the process.
"""

import copy
import threading
from dataclasses import replace
from typing import TypeVar

from app.status.base import BaseStatusStore
from app.status.exceptions import (
    ConflictingStatusError,
    RecordAlreadyExistsError,
    RecordNotFoundError,
)
from app.status.models import (
    DocumentRecord,
    ProcessingStatus,
    RecordUpdate,
    check_transition,
    check_write_once,
)

_T = TypeVar("_T")


class InMemoryStatusStore(BaseStatusStore):
    """Dict-backed status store with the same compare-and-set semantics as PostgreSQL."""

    def __init__(self) -> None:
        self._records: dict[str, DocumentRecord] = {}
        self._lock = threading.Lock()

    def create(
        self,
        document_id: str,
        file_name: str,
        file_type: str,
        upload_timestamp: int,
    ) -> DocumentRecord:
        record = DocumentRecord(
            document_id=document_id,
            file_name=file_name,
            file_type=file_type,
            upload_timestamp=upload_timestamp,
        )
        with self._lock:
            if document_id in self._records:
                raise RecordAlreadyExistsError(f"Document {document_id} already exists")
            self._records[document_id] = record
        return copy.deepcopy(record)

    def update(
        self,
        document_id: str,
        update: RecordUpdate,
        expected_status: ProcessingStatus,
    ) -> DocumentRecord:
        with self._lock:
            current = self._records.get(document_id)
            if current is None:
                raise RecordNotFoundError(f"Document {document_id} not found")
            if current.status is not expected_status:
                raise ConflictingStatusError(
                    document_id, expected_status.value, current.status.value
                )
            check_transition(current.status, update.status)
            check_write_once(current, update)

            updated = replace(
                current,
                status=update.status,
                extraction_output=_first_set(
                    current.extraction_output, copy.deepcopy(update.extraction_output)
                ),
                classification=_first_set(current.classification, update.classification),
                summary=_first_set(current.summary, update.summary),
                error_messages=[*current.error_messages, *update.error_messages],
                degraded_stages=[*current.degraded_stages, *update.degraded_stages],
            )
            self._records[document_id] = updated
        return copy.deepcopy(updated)

    def get(self, document_id: str) -> DocumentRecord:
        with self._lock:
            record = self._records.get(document_id)
        if record is None:
            raise RecordNotFoundError(f"Document {document_id} not found")
        return copy.deepcopy(record)


def _first_set(existing: _T | None, new: _T | None) -> _T | None:
    return existing if existing is not None else new
