"""
Floreria Backend — Ramos Route Handlers
=========================================

What:  CRUD endpoints for the bouquet catalog.

    GET    /ramos         list, newest first (rows with an image get imagen_url)
    POST   /ramos         create  {titulo, valor, categoria, description?, imagen?}
    GET    /ramos/{id}    one ramo
    PUT    /ramos/{id}    partial update
    DELETE /ramos/{id}    delete row and image

{id} only matches an unsigned integer literal; /ramos/abc falls through to
the "Ruta no encontrada" handler, as do /ramos/ (no slash redirects) and
HEAD, which only the health probe answers.
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request

from app.routes.dependencies import get_ramo_service, read_json_body, request_origin
from app.schemas.envelope import Envelope, MessagePayload, RecordCreated
from app.services.ramo_service import RamoService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Ramos"])


@router.get("/ramos", response_model=Envelope, summary="List ramos")
async def list_ramos(
    request: Request,
    service: RamoService = Depends(get_ramo_service),
) -> Envelope:
    origin = request_origin(request)
    rows = await service.list()
    return Envelope.success([service.to_payload(row, origin) for row in rows])


@router.post("/ramos", response_model=Envelope, summary="Create a ramo")
async def create_ramo(
    body: Dict[str, Any] = Depends(read_json_body),
    service: RamoService = Depends(get_ramo_service),
) -> Envelope:
    new_id = await service.create(body)
    return Envelope.success(
        RecordCreated(id=new_id, message=service.message("creado")).model_dump()
    )


@router.get("/ramos/{ramo_id:int}", response_model=Envelope, summary="Get one ramo")
async def get_ramo(
    ramo_id: int,
    request: Request,
    service: RamoService = Depends(get_ramo_service),
) -> Envelope:
    row = await service.get(ramo_id)
    return Envelope.success(service.to_payload(row, request_origin(request)))


@router.put("/ramos/{ramo_id:int}", response_model=Envelope, summary="Update a ramo")
async def update_ramo(
    ramo_id: int,
    body: Dict[str, Any] = Depends(read_json_body),
    service: RamoService = Depends(get_ramo_service),
) -> Envelope:
    await service.update(ramo_id, body)
    return Envelope.success(MessagePayload(message=service.message("actualizado")).model_dump())


@router.delete("/ramos/{ramo_id:int}", response_model=Envelope, summary="Delete a ramo")
async def delete_ramo(
    ramo_id: int,
    service: RamoService = Depends(get_ramo_service),
) -> Envelope:
    await service.delete(ramo_id)
    return Envelope.success(MessagePayload(message=service.message("eliminado")).model_dump())
