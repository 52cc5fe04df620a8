"""
Floreria Backend — Route Dependencies
=======================================

What:  FastAPI dependencies shared by the route modules.
How:   The image service and the session factory live on app.state
       (created once by create_app); services are built per request.
"""

from typing import Any, Dict

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.services.image_service import ImageService
from app.services.pedido_service import PedidoService
from app.services.ramo_service import RamoService


async def read_json_body(request: Request) -> Dict[str, Any]:
    """
    The request body as a dict.

    An empty body, malformed JSON or a JSON value that is not an object all
    read as {}, so validation reports the missing fields instead of a
    parser error.
    """
    if not await request.body():
        return {}
    try:
        data = await request.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


def request_origin(request: Request) -> str:
    """scheme://host[:port] the client used, for building image URLs."""
    return str(request.base_url).rstrip("/")


def get_image_service(request: Request) -> ImageService:
    return request.app.state.image_service


def get_ramo_service(
    db: AsyncSession = Depends(get_db_session),
    images: ImageService = Depends(get_image_service),
) -> RamoService:
    return RamoService(db, images)


def get_pedido_service(db: AsyncSession = Depends(get_db_session)) -> PedidoService:
    return PedidoService(db)
