class StatusStoreError(Exception):
    """Base exception for all status store errors."""


class RecordAlreadyExistsError(StatusStoreError):
    """Raised when creating a record whose document ID is already taken."""


class RecordNotFoundError(StatusStoreError):
    """Raised when no record exists for a document ID."""


class ConflictingStatusError(StatusStoreError):
    """Raised when a conditional update finds a status other than the expected one."""

    def __init__(self, document_id: str, expected: str, actual: str) -> None:
        super().__init__(
            f"Document {document_id}: expected status {expected}, found {actual}"
        )
        self.document_id = document_id
        self.expected = expected
        self.actual = actual


class InvalidTransitionError(StatusStoreError):
    """Raised when an update would regress, skip, or touch a terminal record."""
