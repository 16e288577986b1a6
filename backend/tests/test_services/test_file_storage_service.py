"""Tests for FileStorageService."""

import io

import pytest

from models.config import settings
from models.exceptions import UploadedFileNotFoundException, ValidationException
from services.file_storage_service import FileStorageService


class TestSave:
    """Storing proof files."""

    def test_save_returns_metadata(self, upload_dir):
        meta = FileStorageService.save(
            io.BytesIO(b"%PDF-1.4 receipt"), "Receipt.PDF", "application/pdf"
        )

        assert meta.name == "Receipt.PDF"
        assert meta.content_type == "application/pdf"
        assert meta.size == len(b"%PDF-1.4 receipt")
        assert meta.path.endswith(".pdf")
        assert meta.path != "Receipt.PDF"
        assert (upload_dir / meta.path).read_bytes() == b"%PDF-1.4 receipt"

    def test_client_directories_dropped(self, upload_dir):
        meta = FileStorageService.save(io.BytesIO(b"data"), "../../etc/notes.txt", "text/plain")

        assert meta.name == "notes.txt"
        assert (upload_dir / meta.path).exists()

    def test_disallowed_type(self, upload_dir):
        with pytest.raises(ValidationException) as exc_info:
            FileStorageService.save(io.BytesIO(b"MZ"), "tool.exe", "application/x-msdownload")

        assert exc_info.value.fields == ["proofFile"]

    def test_too_large(self, upload_dir, monkeypatch):
        monkeypatch.setattr(settings, "MAX_UPLOAD_SIZE_MB", 1)

        with pytest.raises(ValidationException):
            FileStorageService.save(
                io.BytesIO(b"x" * (1024 * 1024 + 1)), "big.txt", "text/plain"
            )

        assert not any(upload_dir.glob("*"))

    def test_empty_file(self, upload_dir):
        with pytest.raises(ValidationException):
            FileStorageService.save(io.BytesIO(b""), "empty.txt", "text/plain")

    def test_odd_extension_dropped(self, upload_dir):
        meta = FileStorageService.save(io.BytesIO(b"data"), "notes.t$t", "text/plain")

        assert "." not in meta.path


class TestResolveAndDelete:
    """Serving and removing stored files."""

    def test_resolve_existing(self, upload_dir):
        meta = FileStorageService.save(io.BytesIO(b"data"), "a.txt", "text/plain")

        assert FileStorageService.resolve(meta.path).read_bytes() == b"data"

    @pytest.mark.parametrize("name", ["missing.txt", "../secret.txt", "sub/../../x"])
    def test_resolve_rejects_unknown_and_traversal(self, upload_dir, name):
        (upload_dir.parent / "secret.txt").write_text("secret")

        with pytest.raises(UploadedFileNotFoundException):
            FileStorageService.resolve(name)

    def test_delete(self, upload_dir):
        meta = FileStorageService.save(io.BytesIO(b"data"), "a.txt", "text/plain")

        FileStorageService.delete(meta.path)
        FileStorageService.delete(meta.path)

        assert not (upload_dir / meta.path).exists()
