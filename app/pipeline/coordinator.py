import json

from app.logging.logger import Log
from app.oracle.models import DocumentContent, TextContent, media_type_for
from app.pipeline.exceptions import PipelineAlreadyStartedError, PipelineStateError
from app.pipeline.state import TRANSITIONS, PipelineContext, PipelineEvent, PipelineState
from app.stages.exceptions import StageFailedError
from app.stages.executor import StageExecutor
from app.stages.models import StageKind, StageOutcome, StagePolicy
from app.status.base import BaseStatusStore
from app.status.exceptions import ConflictingStatusError, StatusStoreError
from app.status.models import DocumentRecord, RecordUpdate
from app.storage.exceptions import BlobStorageError
from app.storage.file_loader import FileLoader


class PipelineCoordinator:
    """Drives one document through extraction -> classification -> summarization.

    Every run starts from INIT. Each stage is executed and then committed with
    exactly one conditional status store update; the next stage starts only
    after that write is acknowledged. Only extraction can abort the run.
    """

    def __init__(
        self,
        store: BaseStatusStore,
        executor: StageExecutor,
        policies: dict[StageKind, StagePolicy],
        file_loader: FileLoader,
    ) -> None:
        self._store = store
        self._executor = executor
        self._policies = policies
        self._file_loader = file_loader

    def run(self, record: DocumentRecord) -> PipelineContext:
        """Run the pipeline for a document that is still UPLOADED.

        Raises:
            PipelineAlreadyStartedError: if another run already moved the record on.
            StatusStoreError: if a later update is rejected; the run is abandoned.
        """
        context = PipelineContext(
            document_id=record.document_id,
            file_name=record.file_name,
            file_type=record.file_type,
        )
        state = PipelineState.INIT
        while not state.is_final:
            state = self._step(state, context)
            context.history.append(state)
        Log.info(
            f"Pipeline finished in state {state.value} with status {context.status.value}",
            document_id=context.document_id,
        )
        return context

    def _step(self, state: PipelineState, context: PipelineContext) -> PipelineState:
        if state is PipelineState.INIT:
            return self._start(context)
        if state is PipelineState.EXTRACTING:
            return self._extract(context)
        if state is PipelineState.CLASSIFYING:
            return self._classify(context)
        if state is PipelineState.SUMMARIZING:
            return self._summarize(context)
        raise PipelineStateError(f"No step defined for state {state.value}")

    def _start(self, context: PipelineContext) -> PipelineState:
        try:
            return self._commit(PipelineState.INIT, PipelineEvent.START, context)
        except ConflictingStatusError as exc:
            raise PipelineAlreadyStartedError(str(exc)) from exc

    def _extract(self, context: PipelineContext) -> PipelineState:
        try:
            raw_bytes = self._file_loader.load(context.document_id)
            Log.info(f"Loaded {len(raw_bytes)} bytes", document_id=context.document_id)
            content = DocumentContent(raw_bytes, media_type_for(context.file_type))
            outcome = self._executor.execute(
                self._policies[StageKind.EXTRACTION], content, context.document_id
            )
        except BlobStorageError as exc:
            return self._abort(context, StageFailedError(StageKind.EXTRACTION.value, str(exc)))
        except StageFailedError as exc:
            return self._abort(context, exc)

        context.extraction_output = outcome.value
        return self._commit(
            PipelineState.EXTRACTING,
            PipelineEvent.EXTRACTION_SUCCEEDED,
            context,
            extraction_output=outcome.value,
        )

    def _classify(self, context: PipelineContext) -> PipelineState:
        outcome = self._executor.execute(
            self._policies[StageKind.CLASSIFICATION],
            self._extraction_text(context),
            context.document_id,
        )
        context.classification = outcome.value
        return self._commit(
            PipelineState.CLASSIFYING,
            PipelineEvent.CLASSIFICATION_DONE,
            context,
            classification=outcome.value,
            **_degradation_fields(outcome),
        )

    def _summarize(self, context: PipelineContext) -> PipelineState:
        outcome = self._executor.execute(
            self._policies[StageKind.SUMMARIZATION],
            self._extraction_text(context),
            context.document_id,
        )
        context.summary = outcome.value
        return self._commit(
            PipelineState.SUMMARIZING,
            PipelineEvent.SUMMARIZATION_DONE,
            context,
            summary=outcome.value,
            **_degradation_fields(outcome),
        )

    def _abort(self, context: PipelineContext, error: StageFailedError) -> PipelineState:
        Log.error(f"Aborting pipeline: {error}", document_id=context.document_id)
        return self._commit(
            PipelineState.EXTRACTING,
            PipelineEvent.EXTRACTION_FAILED,
            context,
            error_messages=[str(error)],
        )

    def _commit(
        self,
        state: PipelineState,
        event: PipelineEvent,
        context: PipelineContext,
        **fields: object,
    ) -> PipelineState:
        transition = TRANSITIONS.get((state, event))
        if transition is None:
            raise PipelineStateError(f"No transition from {state.value} on {event.value}")

        update = RecordUpdate(status=transition.status, **fields)  # type: ignore[arg-type]
        try:
            self._store.update(context.document_id, update, expected_status=context.status)
        except StatusStoreError as exc:
            Log.error(
                f"Dropping {event.value} update: {exc}",
                document_id=context.document_id,
            )
            raise

        Log.info(
            f"{state.value} -> {transition.target.value} "
            f"(status {context.status.value} -> {transition.status.value})",
            document_id=context.document_id,
        )
        context.status = transition.status
        return transition.target

    @staticmethod
    def _extraction_text(context: PipelineContext) -> TextContent:
        if context.extraction_output is None:
            raise PipelineStateError(
                f"Document {context.document_id} has no extraction output"
            )
        return TextContent(json.dumps(context.extraction_output, ensure_ascii=False))


def _degradation_fields(outcome: StageOutcome) -> dict[str, list[str]]:
    if not outcome.degraded:
        return {}
    return {
        "error_messages": [outcome.message or f"{outcome.kind.value} degraded"],
        "degraded_stages": [outcome.kind.value],
    }
