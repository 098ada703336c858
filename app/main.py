from pathlib import Path

from app.config.settings import Settings
from app.database.connection import close_pool, init_pool
from app.database.repositories.event_repository import EventRepository
from app.ingestion.trigger import IngestionTrigger
from app.logging.logger import Log
from app.oracle.factory import OracleClientFactory
from app.pipeline.coordinator import PipelineCoordinator
from app.stages.executor import StageExecutor
from app.stages.policies import build_policies
from app.status.base import BaseStatusStore
from app.status.factory import StatusStoreFactory
from app.storage.file_loader import FileLoader
from app.worker.event_runner import EventRunner
from app.worker.worker import Worker


def build_trigger(
    settings: Settings,
    store: BaseStatusStore,
    files_root: Path | None = None,
) -> IngestionTrigger:
    """Build an IngestionTrigger with its coordinator and all required adapters."""
    file_loader = FileLoader(files_root=files_root or Path(settings.files_root))
    executor = StageExecutor(
        client=OracleClientFactory.create(settings),
        model=OracleClientFactory.model_name(settings),
    )
    coordinator = PipelineCoordinator(
        store=store,
        executor=executor,
        policies=build_policies(settings),
        file_loader=file_loader,
    )
    return IngestionTrigger(store=store, coordinator=coordinator, file_loader=file_loader)


def main() -> None:
    """Entry point: initialize pool -> build dependencies -> start worker loop."""
    settings = Settings()
    Log.configure(settings.log_level)
    init_pool(settings)

    try:
        store = StatusStoreFactory.create(settings)
        trigger = build_trigger(settings, store)
        event_repo = EventRepository(settings.max_event_attempts)
        event_runner = EventRunner(trigger, event_repo, settings)
        worker = Worker(event_repo, event_runner, settings)
        worker.run()
    finally:
        close_pool()


if __name__ == "__main__":
    main()
