class OracleError(Exception):
    """Raised when the inference oracle returns an unusable response."""


class OracleNetworkError(OracleError):
    """Raised when the oracle call fails due to network/infrastructure issues."""


class OracleTimeoutError(OracleNetworkError):
    """Raised when the oracle call exceeds its per-stage wall-clock budget."""
