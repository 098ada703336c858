from typing import Any

import psycopg
from psycopg.rows import dict_row

from app.database.connection import get_connection
from app.database.models import EventRecord

_EVENT_COLUMNS = """
    id, document_id, status, attempts, error_message, locked_at, created_at, updated_at
"""


class EventRepository:
    """Queue of document-stored notifications kept in the document_events table.

    Event lifecycle: pending -> processing -> done | failed. A retried event
    goes back to pending with its attempt count raised.
    """

    def __init__(self, max_attempts: int) -> None:
        self._max_attempts = max_attempts

    def enqueue(self, document_id: str) -> EventRecord:
        """Record a document-stored notification for the worker to pick up."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    INSERT INTO document_events (document_id)
                    VALUES (%s)
                    RETURNING {_EVENT_COLUMNS}
                    """,
                    (document_id,),
                )
                row = cur.fetchone()
            conn.commit()

        if row is None:
            raise RuntimeError(f"Failed to enqueue event for document {document_id}")
        return _row_to_event(row)

    def claim_next_event(self, conn: psycopg.Connection[Any]) -> EventRecord | None:
        """Move the oldest claimable pending event to processing in one statement.

        Rows locked by another worker's claim are skipped, so concurrent
        workers never receive the same event.
        """
        with conn.cursor(row_factory=dict_row) as cur:
            cur.execute(
                f"""
                UPDATE document_events
                SET status = 'processing', locked_at = NOW(), updated_at = NOW()
                WHERE id = (
                    SELECT id
                    FROM document_events
                    WHERE status = 'pending' AND attempts < %s
                    ORDER BY created_at, id
                    LIMIT 1
                    FOR UPDATE SKIP LOCKED
                )
                RETURNING {_EVENT_COLUMNS}
                """,
                (self._max_attempts,),
            )
            row = cur.fetchone()
        conn.commit()
        return _row_to_event(row) if row is not None else None

    def mark_done(self, event_id: int) -> None:
        self._settle(event_id, "done", error=None)

    def mark_failed(self, event_id: int, error: str) -> None:
        """Park an event for good once it has used all its attempts."""
        self._settle(event_id, "failed", error=error)

    def increment_attempts(self, event_id: int, error: str) -> None:
        """Count a failed attempt and release the event for redelivery."""
        with get_connection() as conn:
            conn.execute(
                """
                UPDATE document_events
                SET status = 'pending',
                    attempts = attempts + 1,
                    error_message = %(error)s,
                    locked_at = NULL,
                    updated_at = NOW()
                WHERE id = %(id)s
                """,
                {"id": event_id, "error": error},
            )
            conn.commit()

    def find_by_id(self, event_id: int) -> EventRecord | None:
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"SELECT {_EVENT_COLUMNS} FROM document_events WHERE id = %s",
                    (event_id,),
                )
                row = cur.fetchone()
        return _row_to_event(row) if row is not None else None

    @staticmethod
    def _settle(event_id: int, status: str, error: str | None) -> None:
        with get_connection() as conn:
            conn.execute(
                """
                UPDATE document_events
                SET status = %(status)s,
                    error_message = COALESCE(%(error)s, error_message),
                    updated_at = NOW()
                WHERE id = %(id)s
                """,
                {"id": event_id, "status": status, "error": error},
            )
            conn.commit()


def _row_to_event(row: dict[str, Any]) -> EventRecord:
    return EventRecord(
        id=row["id"],
        document_id=row["document_id"],
        status=row["status"],
        attempts=row["attempts"],
        error_message=row["error_message"],
        locked_at=row["locked_at"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )
