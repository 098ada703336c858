"""Example oracle client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseOracleClient and register the provider in OracleClientFactory.
"""

import json
from typing import ClassVar

from app.oracle.client_base import BaseOracleClient
from app.oracle.models import DocumentContent, OracleContent


class ExampleOracleAdapter(BaseOracleClient):
    """Example adapter that answers every stage with fixed, valid output.

    No network calls. Useful for local development and as a template for
    building real provider adapters.
    """

    EXTRACTION_RESPONSE: ClassVar[dict[str, object]] = {"document_type": "example"}
    CLASSIFICATION_RESPONSE: ClassVar[str] = "Other"
    SUMMARY_RESPONSE: ClassVar[str] = "Example document processed without a live model."

    def create_completion(
        self,
        *,
        model: str,
        instruction: str,
        content: OracleContent,
        max_tokens: int,
        timeout_seconds: float,
    ) -> str:
        _ = model, max_tokens, timeout_seconds
        if isinstance(content, DocumentContent):
            return json.dumps(self.EXTRACTION_RESPONSE)
        if instruction.lstrip().lower().startswith("classify"):
            return self.CLASSIFICATION_RESPONSE
        return self.SUMMARY_RESPONSE
