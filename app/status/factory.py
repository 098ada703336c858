from app.config.settings import Settings
from app.status.base import BaseStatusStore
from app.status.postgres_store import PostgresStatusStore


class StatusStoreFactory:
    """Creates the status store backend selected in settings.

    Only durable backends are listed: the worker process never registers
    uploads itself, so a process-local store would see no records.
    """

    BACKENDS: dict[str, type[BaseStatusStore]] = {
        "postgres": PostgresStatusStore,
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseStatusStore:
        backend = settings.status_store_backend.lower()
        store_cls = cls.BACKENDS.get(backend)
        if store_cls is None:
            raise ValueError(
                f"Unknown status store backend '{backend}'. Choose from: {list(cls.BACKENDS)}"
            )
        return store_cls()
