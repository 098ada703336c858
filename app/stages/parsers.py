"""Validation and coercion of untrusted oracle responses."""

import json
import re

from app.stages.models import ParsedOutput

EXTRACTED_TEXT_KEY = "extracted_text"

OTHER_CATEGORY = "Other"
CATEGORIES: tuple[str, ...] = (
    "Dietary Supplement",
    "Stationery",
    "Kitchen Supplies",
    "Medicine",
    "Driver License",
    "Invoice",
    "W2",
    OTHER_CATEGORY,
)

SUMMARY_FALLBACK = "Summary generation failed"

_FENCED_JSON = re.compile(r"```(?:json)?\s*(\{.*\})\s*```", re.DOTALL)


def strip_code_fence(raw: str) -> str:
    """Return the JSON object inside a ```json fence, or the input unchanged."""
    match = _FENCED_JSON.search(raw)
    if match:
        return match.group(1)
    return raw


def parse_extraction(raw: str) -> ParsedOutput:
    """Parse extraction output into a key-value map.

    Never raises for malformed JSON: anything that is not a JSON object is
    kept verbatim under EXTRACTED_TEXT_KEY.
    """
    text = strip_code_fence(raw)
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError:
        return ParsedOutput({EXTRACTED_TEXT_KEY: text})
    if not isinstance(parsed, dict):
        return ParsedOutput({EXTRACTED_TEXT_KEY: text})
    return ParsedOutput(parsed)


def coerce_classification(raw: str) -> ParsedOutput:
    label = raw.strip()
    if label in CATEGORIES:
        return ParsedOutput(label)
    return ParsedOutput(
        OTHER_CATEGORY,
        note=f"classification coerced to {OTHER_CATEGORY}: unknown label {label[:80]!r}",
    )


def coerce_summary(raw: str) -> ParsedOutput:
    summary = raw.strip()
    if summary:
        return ParsedOutput(summary)
    return ParsedOutput(SUMMARY_FALLBACK, note="summarization returned empty text")
