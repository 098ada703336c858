from app.config.settings import Settings
from app.database.models import EventRecord
from app.database.repositories.event_repository import EventRepository
from app.ingestion.models import DocumentStoredEvent, TriggerOutcome
from app.ingestion.trigger import IngestionTrigger
from app.logging.logger import Log


class EventRunner:
    """Run one stored event through the trigger, catch exceptions, and apply retry logic."""

    def __init__(
        self,
        trigger: IngestionTrigger,
        event_repo: EventRepository,
        settings: Settings,
    ) -> None:
        self._trigger = trigger
        self._event_repo = event_repo
        self._settings = settings

    def run(self, event: EventRecord) -> TriggerOutcome | None:
        """Handle a single event with error handling."""
        Log.info(
            f"Running event {event.id} (attempt {event.attempts + 1})",
            document_id=event.document_id,
        )
        try:
            outcome = self._trigger.handle(DocumentStoredEvent(event.document_id))
            self._event_repo.mark_done(event.id)
        except Exception as exc:
            self._handle_failure(event, exc)
            return None
        Log.info(f"Event {event.id} done: {outcome.value}", document_id=event.document_id)
        return outcome

    def _handle_failure(self, event: EventRecord, exc: Exception) -> None:
        """Increment attempts; mark failed if at max, otherwise back to pending."""
        Log.exception(f"Event {event.id} failed: {exc}", document_id=event.document_id)
        if event.attempts + 1 >= self._settings.max_event_attempts:
            self._event_repo.mark_failed(event.id, str(exc))
            Log.error(
                f"Event {event.id} permanently failed after {event.attempts + 1} attempts",
                document_id=event.document_id,
            )
        else:
            self._event_repo.increment_attempts(event.id, str(exc))
            Log.warning(
                f"Event {event.id} will be retried (attempt {event.attempts + 1})",
                document_id=event.document_id,
            )
