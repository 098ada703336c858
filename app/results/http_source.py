import httpx

from app.results.base import BaseResultSource
from app.results.exceptions import ResultNotFoundError
from app.results.models import DocumentResult


class HttpResultSource(BaseResultSource):
    """Reads results from the HTTP front-end: GET {base_url}/results/{document_id}."""

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 10.0,
        client: httpx.Client | None = None,
    ) -> None:
        self._client = client or httpx.Client(base_url=base_url, timeout=timeout_seconds)

    def get_result(self, document_id: str) -> DocumentResult:
        response = self._client.get(f"/results/{document_id}")
        if response.status_code == httpx.codes.NOT_FOUND:
            raise ResultNotFoundError(f"Document {document_id} not found")
        response.raise_for_status()
        return DocumentResult.from_dict(response.json())

    def close(self) -> None:
        self._client.close()
