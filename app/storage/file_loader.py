from pathlib import Path

from app.storage.exceptions import BlobStorageError, DocumentBlobNotFoundError


def document_file_path(files_root: Path, document_id: str) -> Path:
    """Build path to the stored document: {files_root}/{document_id}"""
    return files_root / document_id


class FileLoader:
    """Resolves the blob path for a document and reads its bytes."""

    FILES_ROOT = Path("/app/files")

    def __init__(self, files_root: Path | None = None) -> None:
        self._files_root = files_root if files_root is not None else self.FILES_ROOT

    @property
    def files_root(self) -> Path:
        return self._files_root

    def path_for(self, document_id: str) -> Path:
        """Location the upload flow must write the document bytes to."""
        if not document_id or "/" in document_id or document_id in {".", ".."}:
            raise BlobStorageError(f"Invalid document id for blob storage: {document_id!r}")
        return document_file_path(self._files_root, document_id)

    def load(self, document_id: str) -> bytes:
        """Read document bytes from disk.

        Raises:
            DocumentBlobNotFoundError: if no file exists for the document.
            BlobStorageError: if the file exists but cannot be read.
        """
        path = self.path_for(document_id)
        if not path.is_file():
            raise DocumentBlobNotFoundError(f"File not found: {path}")
        try:
            return path.read_bytes()
        except OSError as exc:
            raise BlobStorageError(f"Failed to read {path}: {exc}") from exc
