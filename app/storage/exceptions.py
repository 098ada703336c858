class BlobStorageError(Exception):
    """Raised when document bytes cannot be read from blob storage."""


class DocumentBlobNotFoundError(BlobStorageError):
    """Raised when no stored bytes exist for a document ID."""
