import pytest

from app.results.exceptions import ResultNotFoundError
from app.results.models import DocumentResult
from app.results.query_service import ResultQueryService
from app.status.memory_store import InMemoryStatusStore
from app.status.models import ProcessingStatus, RecordUpdate


class TestGetResult:
    def test_unknown_document_raises_not_found(self, store: InMemoryStatusStore) -> None:
        service = ResultQueryService(store)

        with pytest.raises(ResultNotFoundError, match="ghost"):
            service.get_result("ghost")

    def test_fresh_upload_has_null_outputs(self, store: InMemoryStatusStore) -> None:
        store.create("doc-1", "a.pdf", "application/pdf", 1_700_000_000_000)

        result = ResultQueryService(store).get_result("doc-1")

        assert result.status is ProcessingStatus.UPLOADED
        assert result.extraction_output is None
        assert result.classification is None
        assert result.summary is None
        assert not result.is_terminal

    def test_failed_record_is_terminal(self, store: InMemoryStatusStore) -> None:
        store.create("doc-1", "a.pdf", "application/pdf", 1)
        store.update(
            "doc-1",
            RecordUpdate(status=ProcessingStatus.FAILED, error_messages=["boom"]),
            ProcessingStatus.UPLOADED,
        )

        result = ResultQueryService(store).get_result("doc-1")

        assert result.is_terminal
        assert result.error_messages == ["boom"]


class TestPayload:
    def test_to_dict_uses_protocol_keys(self) -> None:
        result = DocumentResult(
            document_id="doc-1",
            status=ProcessingStatus.COMPLETED,
            file_name="license.jpg",
            file_type="image/jpeg",
            upload_timestamp=1_700_000_000_000,
            extraction_output={"name": "Jane"},
            classification="Driver License",
            summary="A license.",
        )

        payload = result.to_dict()

        assert payload == {
            "documentId": "doc-1",
            "status": "COMPLETED",
            "fileName": "license.jpg",
            "fileType": "image/jpeg",
            "extractionOutput": {"name": "Jane"},
            "classification": "Driver License",
            "summary": "A license.",
            "uploadTimestamp": 1_700_000_000_000,
            "errorMessages": [],
            "degradedStages": [],
        }

    def test_from_dict_tolerates_missing_optional_keys(self) -> None:
        result = DocumentResult.from_dict(
            {
                "documentId": "doc-1",
                "status": "PROCESSING",
                "fileName": "a.pdf",
                "fileType": "application/pdf",
                "uploadTimestamp": "1700000000000",
            }
        )

        assert result.status is ProcessingStatus.PROCESSING
        assert result.upload_timestamp == 1_700_000_000_000
        assert result.summary is None
        assert result.error_messages == []
