from typing import ClassVar

from app.config.settings import Settings
from app.oracle.client_base import BaseOracleClient
from app.oracle.example_client_adapter import ExampleOracleAdapter
from app.oracle.openai_client_adapter import OpenAIOracleAdapter


class OracleClientFactory:
    """Creates the configured inference oracle client."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "openrouter": "https://openrouter.ai/api/v1",
        "groq": "https://api.groq.com/openai/v1",
        "together": "https://api.together.xyz/v1",
        "deepseek": "https://api.deepseek.com/v1",
        "ollama": "http://localhost:11434/v1",
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseOracleClient:
        """Create a configured oracle client from application settings."""
        provider = settings.oracle_provider.lower()
        if provider == "example":
            return ExampleOracleAdapter()
        return OpenAIOracleAdapter(
            api_key=settings.oracle_api_key,
            base_url=cls._resolve_base_url(provider, settings),
        )

    @classmethod
    def model_name(cls, settings: Settings) -> str:
        """Model identifier passed on every oracle call."""
        if settings.oracle_provider.lower() == "example":
            return "example"
        return settings.oracle_model_name

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        override = settings.oracle_base_url.strip()
        if provider == "openai":
            return override or None
        if provider == "openai_compatible":
            if not override:
                raise ValueError(
                    "oracle_base_url is required for oracle_provider=openai_compatible"
                )
            return override
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return override or default_base_url
        supported = [
            "example",
            "openai",
            "openai_compatible",
            *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS),
        ]
        raise ValueError(f"Unknown oracle provider '{provider}'. Choose from: {supported}")
