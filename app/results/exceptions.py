class ResultError(Exception):
    """Base exception for result retrieval errors."""


class ResultNotFoundError(ResultError):
    """Raised when no record exists for the requested document ID (HTTP 404)."""


class PollTimeoutError(ResultError):
    """Raised when polling gives up before the document reaches a terminal status.

    Distinct from a FAILED pipeline: the document may still complete later.
    """

    def __init__(self, document_id: str, attempts: int, last_status: str | None) -> None:
        super().__init__(
            f"Document {document_id} not finished after {attempts} polls "
            f"(last status: {last_status})"
        )
        self.document_id = document_id
        self.attempts = attempts
        self.last_status = last_status
