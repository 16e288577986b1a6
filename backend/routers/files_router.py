from fastapi import APIRouter
from fastapi.responses import FileResponse

from services import FileStorageService

router = APIRouter(prefix="/files", tags=["files"])


@router.get("/{filename}")
def get_file(filename: str) -> FileResponse:
    """Serve a stored proof file. Names outside the upload directory are 404."""
    return FileResponse(FileStorageService.resolve(filename))
