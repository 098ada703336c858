import pytest

from app.database.models import EventRecord
from app.database.repositories.event_repository import EventRepository


def _drain_other_events(db_conn) -> None:
    """Park unrelated pending events so claims below see only seeded rows."""
    db_conn.execute(
        "UPDATE document_events SET status = 'done' WHERE status = 'pending'"
    )
    db_conn.commit()


@pytest.mark.integration
class TestEventRepositoryEnqueue:
    def test_enqueue_inserts_pending_event(self, seed_event: EventRecord, db_conn) -> None:
        assert seed_event.status == "pending"
        assert seed_event.attempts == 0
        with db_conn.cursor() as cur:
            cur.execute("SELECT document_id FROM document_events WHERE id = %s", (seed_event.id,))
            row = cur.fetchone()
        assert row is not None
        assert row[0] == seed_event.document_id


@pytest.mark.integration
class TestEventRepositoryClaimNextEvent:
    def test_claim_returns_and_locks_event(self, seed_record: str, db_conn) -> None:
        _drain_other_events(db_conn)
        repo = EventRepository(max_attempts=3)
        seeded = repo.enqueue(seed_record)

        event = repo.claim_next_event(db_conn)

        assert event is not None
        assert event.id == seeded.id
        assert event.status == "processing"
        found = repo.find_by_id(seeded.id)
        assert found is not None
        assert found.locked_at is not None

    def test_claim_returns_none_when_no_pending_events(self, integration_pool, db_conn) -> None:
        _drain_other_events(db_conn)
        repo = EventRepository(max_attempts=3)

        assert repo.claim_next_event(db_conn) is None

    def test_claim_skips_event_with_attempts_at_max(self, seed_record: str, db_conn) -> None:
        _drain_other_events(db_conn)
        repo = EventRepository(max_attempts=3)
        seeded = repo.enqueue(seed_record)
        db_conn.execute("UPDATE document_events SET attempts = 3 WHERE id = %s", (seeded.id,))
        db_conn.commit()

        assert repo.claim_next_event(db_conn) is None


@pytest.mark.integration
class TestEventRepositoryOutcomes:
    def test_mark_done(self, seed_event: EventRecord) -> None:
        repo = EventRepository(max_attempts=3)

        repo.mark_done(seed_event.id)

        found = repo.find_by_id(seed_event.id)
        assert found is not None
        assert found.status == "done"

    def test_mark_failed_records_error(self, seed_event: EventRecord) -> None:
        repo = EventRepository(max_attempts=3)

        repo.mark_failed(seed_event.id, "boom")

        found = repo.find_by_id(seed_event.id)
        assert found is not None
        assert found.status == "failed"
        assert found.error_message == "boom"

    def test_increment_attempts_returns_to_pending(self, seed_event: EventRecord) -> None:
        repo = EventRepository(max_attempts=3)

        repo.increment_attempts(seed_event.id, "transient")

        found = repo.find_by_id(seed_event.id)
        assert found is not None
        assert found.status == "pending"
        assert found.attempts == 1
        assert found.locked_at is None

    def test_find_by_id_unknown_returns_none(self, integration_pool) -> None:
        assert EventRepository(max_attempts=3).find_by_id(-1) is None
