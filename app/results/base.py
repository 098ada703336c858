from abc import ABC, abstractmethod

from app.results.models import DocumentResult


class BaseResultSource(ABC):
    """Contract for anything the poll loop can read results from."""

    @abstractmethod
    def get_result(self, document_id: str) -> DocumentResult:
        """Return the current projection for a document.

        Raises:
            ResultNotFoundError: if the document ID is unknown.
        """
