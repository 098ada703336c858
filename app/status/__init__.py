from app.status.base import BaseStatusStore
from app.status.factory import StatusStoreFactory
from app.status.models import DocumentRecord, ProcessingStatus, RecordUpdate

__all__ = [
    "BaseStatusStore",
    "DocumentRecord",
    "ProcessingStatus",
    "RecordUpdate",
    "StatusStoreFactory",
]
