import time
from collections.abc import Callable

from app.logging.logger import Log
from app.oracle.client_base import BaseOracleClient
from app.oracle.exceptions import OracleTimeoutError
from app.oracle.models import OracleContent
from app.stages.exceptions import StageFailedError
from app.stages.models import StageOutcome, StagePolicy


class StageExecutor:
    """Runs one stage: call the oracle, then validate or coerce its answer.

    The executor is shared by all stages; the policy decides instruction,
    budgets, parsing, and whether a failure is fatal or degrades to a
    fallback value.
    """

    def __init__(
        self,
        client: BaseOracleClient,
        model: str,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._client = client
        self._model = model
        self._clock = clock

    def execute(
        self,
        policy: StagePolicy,
        content: OracleContent,
        document_id: str,
    ) -> StageOutcome:
        """Run the stage for one document.

        Raises:
            StageFailedError: if a fatal stage cannot produce output.
        """
        stage = policy.kind.value
        try:
            raw = self._call_oracle(policy, content)
            Log.debug(f"{stage} raw response:\n{raw}", document_id=document_id)
            parsed = policy.parse(raw)
        except Exception as exc:  # noqa: BLE001
            return self._handle_failure(policy, exc, document_id)

        if parsed.note is not None:
            Log.warning(f"Stage {stage} degraded: {parsed.note}", document_id=document_id)
            return StageOutcome(
                kind=policy.kind, value=parsed.value, degraded=True, message=parsed.note
            )
        Log.info(f"Stage {stage} succeeded", document_id=document_id)
        return StageOutcome(kind=policy.kind, value=parsed.value)

    def _call_oracle(self, policy: StagePolicy, content: OracleContent) -> str:
        started = self._clock()
        raw = self._client.create_completion(
            model=self._model,
            instruction=policy.instruction_for(content),
            content=content,
            max_tokens=policy.max_tokens,
            timeout_seconds=policy.timeout_seconds,
        )
        elapsed = self._clock() - started
        if elapsed > policy.timeout_seconds:
            raise OracleTimeoutError(
                f"{policy.kind.value} exceeded its {policy.timeout_seconds}s budget "
                f"({elapsed:.1f}s)"
            )
        return raw

    def _handle_failure(
        self,
        policy: StagePolicy,
        exc: Exception,
        document_id: str,
    ) -> StageOutcome:
        stage = policy.kind.value
        if policy.is_fatal:
            Log.error(f"Stage {stage} failed: {exc}", document_id=document_id)
            raise StageFailedError(stage, str(exc) or type(exc).__name__) from exc
        message = f"{stage} fell back to {policy.fallback!r}: {exc}"
        Log.warning(f"Stage {stage} degraded: {message}", document_id=document_id)
        return StageOutcome(
            kind=policy.kind, value=policy.fallback, degraded=True, message=message
        )
