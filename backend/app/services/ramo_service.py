"""
Floreria Backend — Ramo Service
=================================

What:  CRUD for catalogo_ramos plus the lifecycle of each ramo's image.
Who:   Called by the /ramos route handlers.

Image ordering:
    create  store image → INSERT → (INSERT failed) remove the new image
    update  store new image → UPDATE → remove previous image
            (UPDATE failed) remove the new image instead
            (new image could not be stored) UPDATE keeps the previous image
    delete  DELETE → remove the image

The imagen column is rewritten on every update, with either the new file
name or the current one, so a ramo never points at a file that was not
written.
"""

import logging
from typing import Any, Dict, Mapping, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import ImageWriteError
from app.models.ramo import Ramo
from app.schemas.ramo import (
    RAMO_NON_EMPTY_FIELDS,
    RAMO_REQUIRED_FIELDS,
    RamoCreate,
    RamoOut,
    RamoUpdate,
)
from app.services.image_service import ImageService, is_data_uri
from app.services.record_service import RecordService

logger = logging.getLogger(__name__)


class RamoService(RecordService[Ramo]):
    model = Ramo
    resource = "Ramo"
    create_schema = RamoCreate
    update_schema = RamoUpdate
    required_fields = RAMO_REQUIRED_FIELDS
    non_empty_fields = RAMO_NON_EMPTY_FIELDS

    def __init__(self, db: AsyncSession, images: ImageService):
        super().__init__(db)
        self.images = images

    def to_payload(self, row: Ramo, origin: str) -> Dict[str, Any]:
        """Serialize a row; imagen_url is added only when the ramo has an image."""
        data = RamoOut.model_validate(row).model_dump()
        url = self.images.resolve_url(row.imagen, origin)
        if url:
            data["imagen_url"] = url
        return data

    async def create(self, payload: Mapping[str, Any]) -> int:
        """
        Insert a ramo, writing its image first.

        Raises:
            ValidationError: missing/invalid fields (nothing written)
            ImageWriteError: imagen was sent but could not be stored
            DatabaseError: INSERT failed (the new image is removed)
        """
        values = self.parse_create(payload)
        image_payload: Optional[str] = values.pop("imagen", None)

        file_ref = None
        if image_payload:
            file_ref = await self.images.store(image_payload)
            if file_ref is None:
                raise ImageWriteError(context={"ramo": values.get("titulo")})
        values["imagen"] = file_ref

        try:
            return await self.insert(values)
        except Exception:
            if file_ref and is_data_uri(image_payload):
                await self.images.remove(file_ref)
            raise

    async def update(self, record_id: int, payload: Mapping[str, Any]) -> None:
        """
        Update the fields present in `payload`; a new imagen replaces the old
        file once the row update has committed.
        """
        values = self.parse_update(payload)
        image_payload: Optional[str] = values.pop("imagen", None)

        current = await self.get(record_id)
        previous_ref = current.imagen
        new_ref = previous_ref
        written_ref = None

        if image_payload:
            stored = await self.images.store(image_payload)
            if stored is None:
                logger.warning(
                    "Ramo %s: new image could not be stored, keeping %r",
                    record_id,
                    previous_ref,
                )
            else:
                new_ref = stored
                if is_data_uri(image_payload):
                    written_ref = stored

        values["imagen"] = new_ref

        try:
            await self.apply_update(record_id, values)
        except Exception:
            if written_ref:
                await self.images.remove(written_ref)
            raise

        if previous_ref and previous_ref != new_ref:
            await self.images.remove(previous_ref)

    async def delete(self, record_id: int) -> None:
        """Delete the row, then its image file."""
        current = await self.get(record_id)
        await self.apply_delete(record_id)
        await self.images.remove(current.imagen)
