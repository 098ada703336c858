from app.oracle.client_base import BaseOracleClient
from app.oracle.factory import OracleClientFactory
from app.oracle.models import DocumentContent, OracleContent, TextContent

__all__ = [
    "BaseOracleClient",
    "DocumentContent",
    "OracleClientFactory",
    "OracleContent",
    "TextContent",
]
