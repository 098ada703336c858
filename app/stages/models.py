from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from app.oracle.models import DocumentContent, OracleContent


class StageKind(str, Enum):
    EXTRACTION = "extraction"
    CLASSIFICATION = "classification"
    SUMMARIZATION = "summarization"


@dataclass(frozen=True)
class ParsedOutput:
    """Validated oracle output; ``note`` is set when the value was coerced."""

    value: Any
    note: str | None = None


@dataclass(frozen=True)
class StagePolicy:
    """Everything that distinguishes one stage from another.

    A policy without a fallback is fatal: its failures abort the pipeline.
    """

    kind: StageKind
    prompt_template: str
    max_tokens: int
    timeout_seconds: float
    parse: Callable[[str], ParsedOutput]
    fallback: Any = None

    @property
    def is_fatal(self) -> bool:
        return self.fallback is None

    def instruction_for(self, content: OracleContent) -> str:
        if isinstance(content, DocumentContent):
            subject = "document" if content.is_pdf else "image"
            return self.prompt_template.format(subject=subject)
        return self.prompt_template


@dataclass(frozen=True)
class StageOutcome:
    """Result of one stage invocation as handed to the coordinator."""

    kind: StageKind
    value: Any
    degraded: bool = False
    message: str | None = None
