from pathlib import Path

import pytest

from app.storage.exceptions import BlobStorageError, DocumentBlobNotFoundError
from app.storage.file_loader import FileLoader, document_file_path


class TestLoadReturnsBytes:
    def test_returns_bytes_for_stored_document(self, tmp_path: Path) -> None:
        loader = FileLoader(files_root=tmp_path)
        (tmp_path / "abc-123").write_bytes(b"%PDF test content")

        result = loader.load("abc-123")

        assert result == b"%PDF test content"

    def test_reads_correct_file_by_document_id(self, tmp_path: Path) -> None:
        loader = FileLoader(files_root=tmp_path)
        (tmp_path / "abc-123").write_bytes(b"first")
        (tmp_path / "def-456").write_bytes(b"second")

        assert loader.load("def-456") == b"second"


class TestPaths:
    def test_path_is_keyed_by_document_id(self) -> None:
        assert document_file_path(Path("/files"), "abc") == Path("/files/abc")

    def test_default_root(self) -> None:
        assert FileLoader().files_root == Path("/app/files")

    @pytest.mark.parametrize("document_id", ["", ".", "..", "a/b"])
    def test_rejects_unsafe_ids(self, document_id: str) -> None:
        with pytest.raises(BlobStorageError, match="Invalid document id"):
            FileLoader(files_root=Path("/files")).path_for(document_id)


class TestLoadErrors:
    def test_missing_blob_raises_not_found(self, tmp_path: Path) -> None:
        loader = FileLoader(files_root=tmp_path)

        with pytest.raises(DocumentBlobNotFoundError, match="File not found"):
            loader.load("missing")

    def test_not_found_is_a_storage_error(self) -> None:
        assert issubclass(DocumentBlobNotFoundError, BlobStorageError)
