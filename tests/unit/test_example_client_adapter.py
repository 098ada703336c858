"""Tests for ExampleOracleAdapter (template/reference adapter)."""

import json

from app.oracle.example_client_adapter import ExampleOracleAdapter
from app.oracle.models import DocumentContent, TextContent
from app.stages.parsers import CATEGORIES


def _complete(instruction: str, content) -> str:
    return ExampleOracleAdapter().create_completion(
        model="any",
        instruction=instruction,
        content=content,
        max_tokens=10,
        timeout_seconds=1,
    )


class TestExampleOracleAdapter:
    def test_extraction_returns_json_object(self) -> None:
        result = _complete("Extract all text", DocumentContent(b"x", "image/png"))
        assert isinstance(json.loads(result), dict)

    def test_classification_returns_known_category(self) -> None:
        result = _complete("Classify the document", TextContent("{}"))
        assert result in CATEGORIES

    def test_summary_is_non_empty(self) -> None:
        result = _complete("Provide a concise summary", TextContent("{}"))
        assert result.strip()

    def test_ignores_model_and_budget(self) -> None:
        adapter = ExampleOracleAdapter()
        r1 = adapter.create_completion(
            model="a", instruction="s", content=TextContent("x"), max_tokens=1, timeout_seconds=1
        )
        r2 = adapter.create_completion(
            model="b", instruction="s", content=TextContent("y"), max_tokens=99, timeout_seconds=9
        )
        assert r1 == r2
