import time
from collections.abc import Callable

from app.config.settings import Settings
from app.logging.logger import Log
from app.results.base import BaseResultSource
from app.results.exceptions import PollTimeoutError
from app.results.models import DocumentResult


class ResultPoller:
    """Client poll loop: fixed interval, fixed attempt ceiling."""

    def __init__(
        self,
        source: BaseResultSource,
        interval_seconds: float = 5,
        max_attempts: int = 60,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._source = source
        self._interval_seconds = interval_seconds
        self._max_attempts = max_attempts
        self._sleep = sleep

    @classmethod
    def from_settings(cls, source: BaseResultSource, settings: Settings) -> "ResultPoller":
        return cls(
            source,
            interval_seconds=settings.result_poll_interval_seconds,
            max_attempts=settings.result_poll_max_attempts,
        )

    def wait_for_result(self, document_id: str) -> DocumentResult:
        """Poll until COMPLETED or FAILED and return that result.

        Raises:
            ResultNotFoundError: if the document ID is unknown.
            PollTimeoutError: if attempts run out before a terminal status.
        """
        last_status: str | None = None
        for attempt in range(1, self._max_attempts + 1):
            result = self._source.get_result(document_id)
            if result.is_terminal:
                Log.info(
                    f"Result ready with status {result.status.value} after {attempt} polls",
                    document_id=document_id,
                )
                return result
            last_status = result.status.value
            Log.debug(f"Poll {attempt}: status {last_status}", document_id=document_id)
            if attempt < self._max_attempts:
                self._sleep(self._interval_seconds)
        raise PollTimeoutError(document_id, self._max_attempts, last_status)
