from abc import ABC, abstractmethod

from app.oracle.models import OracleContent


class BaseOracleClient(ABC):
    """Contract for provider-specific inference oracle clients."""

    @abstractmethod
    def create_completion(
        self,
        *,
        model: str,
        instruction: str,
        content: OracleContent,
        max_tokens: int,
        timeout_seconds: float,
    ) -> str:
        """Return the provider response as plain text.

        Raises:
            OracleTimeoutError: if the call exceeds timeout_seconds.
            OracleNetworkError: on connection or provider API failures.
            OracleError: if the provider returns no usable text.
        """
