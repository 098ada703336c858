from app.results.base import BaseResultSource
from app.results.exceptions import ResultNotFoundError
from app.results.models import DocumentResult
from app.status.base import BaseStatusStore
from app.status.exceptions import RecordNotFoundError


class ResultQueryService(BaseResultSource):
    """Read-only projection over the status store."""

    def __init__(self, store: BaseStatusStore) -> None:
        self._store = store

    def get_result(self, document_id: str) -> DocumentResult:
        try:
            record = self._store.get(document_id)
        except RecordNotFoundError as exc:
            raise ResultNotFoundError(f"Document {document_id} not found") from exc
        return DocumentResult.from_record(record)
