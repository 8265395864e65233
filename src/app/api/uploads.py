"""Download route for task attachments, at the URL stored with each attachment."""

from uuid import UUID

from fastapi import APIRouter
from fastapi.responses import FileResponse

from src.app.api.dependencies import TaskServiceDep

router = APIRouter(prefix="/uploads", tags=["tasks"])


@router.get("/{task_id}/{stored_name}", response_class=FileResponse)
async def download_attachment(
    task_id: UUID, stored_name: str, service: TaskServiceDep
) -> FileResponse:
    """Serve an uploaded file. The random prefix in ``stored_name`` makes the URL unguessable."""
    path, mime_type = await service.attachment_file(task_id, stored_name)
    return FileResponse(path, media_type=mime_type, filename=stored_name.split("_", 1)[-1])
