"""File proxy and multi-image upload forwarding."""
import logging
from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response
from starlette.datastructures import UploadFile

from historymap.core.dependencies import ServiceContainer, get_backend_client, get_service_container
from historymap.core.exceptions import BackendError
from historymap.services.backend_client import BackendClient

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["files"])


@router.get("/files/{file_path:path}")
async def get_file(
    file_path: str,
    backend: BackendClient = Depends(get_backend_client),
    container: ServiceContainer = Depends(get_service_container),
):
    """Serve a stored image through the service with a long-lived cache directive."""
    try:
        content, content_type = await backend.fetch_file(file_path)
    except BackendError as e:
        raise BackendError(e.status_code, f"File not found: {e.status_code}") from e

    return Response(
        content=content,
        media_type=content_type,
        headers={"Cache-Control": container.settings.map.file_cache_control},
    )


@router.post("/images/upload-multiple")
async def upload_images(request: Request, backend: BackendClient = Depends(get_backend_client)):
    """Forward a multipart form (point id fields plus image files) unchanged."""
    form = await request.form()
    fields = {}
    files = []
    for key, value in form.multi_items():
        if isinstance(value, UploadFile):
            content = await value.read()
            files.append((key, (value.filename or "upload", content, value.content_type or "application/octet-stream")))
        else:
            fields[key] = value

    logger.info(f"Forwarding {len(files)} image(s) to backend")
    return await backend.upload_images(files, fields=fields)
