import time
from concurrent.futures import Future, ThreadPoolExecutor
from functools import partial

from app.config.settings import Settings
from app.database.connection import get_connection
from app.database.models import EventRecord
from app.database.repositories.event_repository import EventRepository
from app.logging.logger import Log
from app.worker.event_runner import EventRunner


class Worker:
    """Poll loop: claim -> dispatch to a pipeline thread -> sleep when idle.

    Each claimed event runs on its own pool thread, so documents progress in
    parallel while every document's stages stay sequential.
    """

    def __init__(
        self,
        event_repo: EventRepository,
        event_runner: EventRunner,
        settings: Settings,
    ) -> None:
        self._event_repo = event_repo
        self._event_runner = event_runner
        self._settings = settings
        self._in_flight: set[Future[object]] = set()

    def run(self, max_events: int | None = None) -> None:
        """Main poll loop. Runs forever until interrupted.

        If max_events is set, stop after dispatching that many events (for testing).
        """
        Log.info(
            f"Worker started with {self._settings.worker_concurrency} pipeline threads"
        )
        events_dispatched = 0
        with ThreadPoolExecutor(
            max_workers=self._settings.worker_concurrency,
            thread_name_prefix="pipeline",
        ) as pool:
            try:
                while max_events is None or events_dispatched < max_events:
                    if not self._has_capacity():
                        time.sleep(0.1)
                        continue
                    event = self._try_claim_event()
                    if event:
                        future = pool.submit(self._event_runner.run, event)
                        self._in_flight.add(future)
                        future.add_done_callback(partial(self._on_event_finished, event))
                        events_dispatched += 1
                    else:
                        Log.debug("No events available, sleeping")
                        time.sleep(self._settings.event_poll_interval_seconds)
            except KeyboardInterrupt:
                Log.info("Worker shutting down, waiting for in-flight pipelines")
        Log.info("Worker stopped")

    def _on_event_finished(self, event: EventRecord, future: Future[object]) -> None:
        """Release the slot and surface errors the event runner could not record."""
        self._in_flight.discard(future)
        try:
            future.result()
        except Exception:
            Log.exception(
                f"Event {event.id} crashed outside retry handling and stays in processing",
                document_id=event.document_id,
            )

    def _has_capacity(self) -> bool:
        return len(self._in_flight) < self._settings.worker_concurrency

    def _try_claim_event(self) -> EventRecord | None:
        """Attempt to claim the next pending event. Gracefully handle DB errors."""
        try:
            with get_connection() as conn:
                return self._event_repo.claim_next_event(conn)
        except Exception as exc:
            Log.warning(f"Database error, will retry: {exc}")
            return None
