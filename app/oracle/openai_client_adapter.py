import base64

import httpx
import openai

from app.oracle.client_base import BaseOracleClient
from app.oracle.exceptions import OracleError, OracleNetworkError, OracleTimeoutError
from app.oracle.models import DocumentContent, OracleContent, TextContent


class OpenAIOracleAdapter(BaseOracleClient):
    """Oracle client built on the OpenAI-compatible chat completions API."""

    def __init__(
        self,
        *,
        api_key: str,
        base_url: str | None = None,
    ) -> None:
        # Retries belong to the event queue; one call per stage invocation.
        self._client = openai.OpenAI(
            api_key=api_key,
            base_url=base_url,
            max_retries=0,
        )

    def create_completion(
        self,
        *,
        model: str,
        instruction: str,
        content: OracleContent,
        max_tokens: int,
        timeout_seconds: float,
    ) -> str:
        try:
            response = self._client.chat.completions.create(
                model=model,
                max_tokens=max_tokens,
                messages=self._build_messages(instruction, content),
                timeout=timeout_seconds,
            )
        except (openai.APITimeoutError, httpx.TimeoutException) as exc:
            raise OracleTimeoutError(
                f"AI provider timed out after {timeout_seconds}s: {exc}"
            ) from exc
        except (openai.APIConnectionError, httpx.ConnectError) as exc:
            raise OracleNetworkError(f"AI provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise OracleNetworkError(f"AI provider API error: {exc}") from exc

        if not response.choices:
            raise OracleError("AI returned no choices")
        text = response.choices[0].message.content
        if text is None:
            raise OracleError("AI returned empty response")
        return text

    @staticmethod
    def _build_messages(
        instruction: str, content: OracleContent
    ) -> list[dict[str, object]]:
        if isinstance(content, TextContent):
            return [
                {"role": "system", "content": instruction},
                {"role": "user", "content": content.text},
            ]
        return [
            {
                "role": "user",
                "content": [
                    _document_part(content),
                    {"type": "text", "text": instruction},
                ],
            }
        ]


def _document_part(content: DocumentContent) -> dict[str, object]:
    encoded = base64.b64encode(content.data).decode("ascii")
    data_url = f"data:{content.media_type};base64,{encoded}"
    if content.is_pdf:
        return {
            "type": "file",
            "file": {"filename": "document.pdf", "file_data": data_url},
        }
    return {"type": "image_url", "image_url": {"url": data_url}}
