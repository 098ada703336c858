import io
from pathlib import Path

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from app.config.settings import Settings
from app.ingestion.trigger import IngestionTrigger
from app.pipeline.coordinator import PipelineCoordinator
from app.stages.executor import StageExecutor
from app.stages.policies import build_policies
from app.status.memory_store import InMemoryStatusStore
from app.storage.file_loader import FileLoader
from tests.fakes import ScriptedOracleClient


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Invoice 42 - Kitchen Supplies")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        oracle_provider="example",
        _env_file=None,  # type: ignore[call-arg]
    )


@pytest.fixture()
def store() -> InMemoryStatusStore:
    return InMemoryStatusStore()


@pytest.fixture()
def oracle() -> ScriptedOracleClient:
    return ScriptedOracleClient()


@pytest.fixture()
def file_loader(tmp_path: Path) -> FileLoader:
    return FileLoader(files_root=tmp_path)


@pytest.fixture()
def coordinator(
    settings: Settings,
    store: InMemoryStatusStore,
    oracle: ScriptedOracleClient,
    file_loader: FileLoader,
) -> PipelineCoordinator:
    return PipelineCoordinator(
        store=store,
        executor=StageExecutor(client=oracle, model="test-model"),
        policies=build_policies(settings),
        file_loader=file_loader,
    )


@pytest.fixture()
def trigger(
    store: InMemoryStatusStore,
    coordinator: PipelineCoordinator,
    file_loader: FileLoader,
) -> IngestionTrigger:
    return IngestionTrigger(
        store=store,
        coordinator=coordinator,
        file_loader=file_loader,
        clock=lambda: 1_700_000_000_000,
    )
