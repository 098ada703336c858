import time
import uuid
from collections.abc import Callable

from app.ingestion.models import DocumentStoredEvent, TriggerOutcome, UploadTicket
from app.logging.logger import Log
from app.pipeline.coordinator import PipelineCoordinator
from app.pipeline.exceptions import PipelineAlreadyStartedError
from app.status.base import BaseStatusStore
from app.status.exceptions import RecordNotFoundError
from app.status.models import UNKNOWN_FILE_ATTRIBUTE, ProcessingStatus
from app.storage.file_loader import FileLoader


def _epoch_millis() -> int:
    return int(time.time() * 1000)


class IngestionTrigger:
    """Entry point of the pipeline: registers uploads and reacts to stored events.

    Events may be delivered more than once. Only a record still in UPLOADED
    starts a run; every other delivery is a no-op.
    """

    def __init__(
        self,
        store: BaseStatusStore,
        coordinator: PipelineCoordinator,
        file_loader: FileLoader,
        clock: Callable[[], int] = _epoch_millis,
        id_factory: Callable[[], str] = lambda: str(uuid.uuid4()),
    ) -> None:
        self._store = store
        self._coordinator = coordinator
        self._file_loader = file_loader
        self._clock = clock
        self._id_factory = id_factory

    def register_upload(
        self,
        file_name: str | None,
        file_type: str | None,
    ) -> UploadTicket:
        """Create the UPLOADED record and tell the uploader where to put the bytes."""
        document_id = self._id_factory()
        self._store.create(
            document_id,
            file_name or UNKNOWN_FILE_ATTRIBUTE,
            file_type or UNKNOWN_FILE_ATTRIBUTE,
            self._clock(),
        )
        Log.info(f"Registered upload {file_name!r} ({file_type})", document_id=document_id)
        return UploadTicket(
            document_id=document_id,
            upload_path=self._file_loader.path_for(document_id),
        )

    def handle(self, event: DocumentStoredEvent) -> TriggerOutcome:
        """Start the pipeline for a stored document at most once."""
        try:
            record = self._store.get(event.document_id)
        except RecordNotFoundError:
            Log.warning("Stored event for unknown document ignored", document_id=event.document_id)
            return TriggerOutcome.UNKNOWN_DOCUMENT

        if record.status is not ProcessingStatus.UPLOADED:
            Log.info(
                f"Duplicate stored event ignored (status {record.status.value})",
                document_id=event.document_id,
            )
            return TriggerOutcome.DUPLICATE

        try:
            self._coordinator.run(record)
        except PipelineAlreadyStartedError as exc:
            Log.info(f"Lost start race, ignoring event: {exc}", document_id=event.document_id)
            return TriggerOutcome.DUPLICATE
        return TriggerOutcome.STARTED
