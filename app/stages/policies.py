from pathlib import Path

from app.config.settings import Settings
from app.stages.models import StageKind, StagePolicy
from app.stages.parsers import (
    CATEGORIES,
    OTHER_CATEGORY,
    SUMMARY_FALLBACK,
    coerce_classification,
    coerce_summary,
    parse_extraction,
)
from app.stages.prompt_loader import load_prompt_template


def build_policies(
    settings: Settings,
    prompt_dir: Path | None = None,
) -> dict[StageKind, StagePolicy]:
    """Build the three stage policies from settings and bundled prompts."""
    classification_template = load_prompt_template(
        "classification", prompt_dir
    ).format(categories=", ".join(CATEGORIES))

    return {
        StageKind.EXTRACTION: StagePolicy(
            kind=StageKind.EXTRACTION,
            prompt_template=load_prompt_template("extraction", prompt_dir),
            max_tokens=settings.extraction_max_tokens,
            timeout_seconds=settings.extraction_timeout_seconds,
            parse=parse_extraction,
        ),
        StageKind.CLASSIFICATION: StagePolicy(
            kind=StageKind.CLASSIFICATION,
            prompt_template=classification_template,
            max_tokens=settings.classification_max_tokens,
            timeout_seconds=settings.classification_timeout_seconds,
            parse=coerce_classification,
            fallback=OTHER_CATEGORY,
        ),
        StageKind.SUMMARIZATION: StagePolicy(
            kind=StageKind.SUMMARIZATION,
            prompt_template=load_prompt_template("summarization", prompt_dir),
            max_tokens=settings.summarization_max_tokens,
            timeout_seconds=settings.summarization_timeout_seconds,
            parse=coerce_summary,
            fallback=SUMMARY_FALLBACK,
        ),
    }
