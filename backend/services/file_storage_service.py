"""
Local storage for proof documents attached to scam reports.

Files are written under UPLOAD_DIR with a random name; the report only
keeps the resulting metadata.
"""

import secrets
from pathlib import Path
from typing import BinaryIO, Optional

from loguru import logger

from models.config import settings
from models.exceptions import UploadedFileNotFoundException, ValidationException
from models.schemas import ProofFileMetadata

MAX_EXTENSION_LENGTH = 10


class FileStorageService:
    """Service for storing and serving proof files."""

    @staticmethod
    def upload_dir() -> Path:
        path = Path(settings.UPLOAD_DIR)
        path.mkdir(parents=True, exist_ok=True)
        return path

    @staticmethod
    def _stored_name(original_name: str) -> str:
        suffix = Path(original_name).suffix.lower()
        if len(suffix) > MAX_EXTENSION_LENGTH or not suffix[1:].isalnum():
            suffix = ""
        return f"{secrets.token_hex(16)}{suffix}"

    @staticmethod
    def save(
        stream: BinaryIO, original_name: Optional[str], content_type: Optional[str]
    ) -> ProofFileMetadata:
        """
        Store an uploaded proof file.

        Args:
            stream: File-like object positioned at the start of the upload
            original_name: Client-side file name
            content_type: Declared MIME type

        Returns:
            Metadata to attach to the report

        Raises:
            ValidationException: If the type is not allowed or the file is too large
        """
        content_type = (content_type or "").lower()
        if content_type not in settings.ALLOWED_UPLOAD_TYPES:
            raise ValidationException(
                f"File type '{content_type or 'unknown'}' is not allowed", ["proofFile"]
            )

        max_bytes = settings.MAX_UPLOAD_SIZE_MB * 1024 * 1024
        data = stream.read(max_bytes + 1)
        if len(data) > max_bytes:
            raise ValidationException(
                f"File exceeds the {settings.MAX_UPLOAD_SIZE_MB}MB limit", ["proofFile"]
            )
        if not data:
            raise ValidationException("Uploaded file is empty", ["proofFile"])

        name = Path(original_name or "proof").name
        stored_name = FileStorageService._stored_name(name)
        (FileStorageService.upload_dir() / stored_name).write_bytes(data)
        logger.info(f"Stored proof file {stored_name} ({len(data)} bytes)")

        return ProofFileMetadata(
            path=stored_name,
            name=name,
            content_type=content_type,
            size=len(data),
        )

    @staticmethod
    def delete(stored_name: str) -> None:
        """Remove a stored file, ignoring files that are already gone."""
        try:
            FileStorageService.resolve(stored_name).unlink()
        except UploadedFileNotFoundException:
            return

    @staticmethod
    def resolve(stored_name: str) -> Path:
        """
        Map a stored file name to its path on disk.

        Raises:
            UploadedFileNotFoundException: If the name escapes UPLOAD_DIR or the file is missing
        """
        base = FileStorageService.upload_dir().resolve()
        candidate = (base / stored_name).resolve()
        if candidate.parent != base or not candidate.is_file():
            raise UploadedFileNotFoundException("File not found")
        return candidate
