from abc import ABC, abstractmethod

from app.status.models import DocumentRecord, ProcessingStatus, RecordUpdate


class BaseStatusStore(ABC):
    """Contract for all status store adapters."""

    @abstractmethod
    def create(
        self,
        document_id: str,
        file_name: str,
        file_type: str,
        upload_timestamp: int,
    ) -> DocumentRecord:
        """Create a new record in UPLOADED status.

        Raises:
            RecordAlreadyExistsError: if a record for document_id exists.
        """

    @abstractmethod
    def update(
        self,
        document_id: str,
        update: RecordUpdate,
        expected_status: ProcessingStatus,
    ) -> DocumentRecord:
        """Apply update only if the record currently has expected_status.

        Returns:
            The record as stored after the update.

        Raises:
            RecordNotFoundError: if no record exists for document_id.
            ConflictingStatusError: if the current status differs from expected_status.
            InvalidTransitionError: if the update breaks the status order or
                overwrites a stage output.
        """

    @abstractmethod
    def get(self, document_id: str) -> DocumentRecord:
        """Return the current record.

        Raises:
            RecordNotFoundError: if no record exists for document_id.
        """
