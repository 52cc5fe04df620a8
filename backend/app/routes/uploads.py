"""
Floreria Backend — Uploaded Image Route
=========================================

What:  Serves stored ramo images at /uploads/{filename} (the imagen_url
       returned with each ramo).
Security:
    Only names the image store itself generates are looked up, so a request
    cannot reach outside the storage directory.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse

from app.exceptions import NotFoundError, ValidationError
from app.routes.dependencies import get_image_service
from app.services.image_service import UPLOADS_URL_PATH, ImageService

router = APIRouter(tags=["Uploads"])

MEDIA_TYPES = {
    ".png": "image/png",
    ".gif": "image/gif",
    ".jpg": "image/jpeg",
}


@router.get(UPLOADS_URL_PATH + "/{filename}", summary="Serve a stored ramo image")
async def serve_image(
    filename: str,
    images: ImageService = Depends(get_image_service),
) -> FileResponse:
    path = images.path_for(filename)
    if path is None:
        raise ValidationError(message="Nombre de archivo inválido", fields=["filename"])
    if not path.is_file():
        raise NotFoundError(resource="Archivo", resource_id=filename)

    return FileResponse(
        path=str(path),
        media_type=MEDIA_TYPES.get(path.suffix, "application/octet-stream"),
        headers={"Cache-Control": "public, max-age=86400"},
    )
