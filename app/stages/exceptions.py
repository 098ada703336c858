class StageError(Exception):
    """Base exception for stage execution errors."""


class StageFailedError(StageError):
    """Raised when a fatal stage cannot produce output; aborts the pipeline."""

    def __init__(self, stage: str, reason: str) -> None:
        super().__init__(f"{stage} failed: {reason}")
        self.stage = stage
        self.reason = reason
