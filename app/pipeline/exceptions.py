class PipelineError(Exception):
    """Base exception for pipeline coordination errors."""


class PipelineAlreadyStartedError(PipelineError):
    """Raised when the start transition finds the record already past UPLOADED."""


class PipelineStateError(PipelineError):
    """Raised when the coordinator is asked to take an edge its table does not define."""
