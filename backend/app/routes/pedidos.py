"""
Floreria Backend — Pedidos Route Handlers
===========================================

What:  CRUD endpoints for customer orders; same shape as ramos.py without
       the image handling.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends

from app.routes.dependencies import get_pedido_service, read_json_body
from app.schemas.envelope import Envelope, MessagePayload, RecordCreated
from app.services.pedido_service import PedidoService

router = APIRouter(tags=["Pedidos"])


@router.get("/pedidos", response_model=Envelope, summary="List pedidos")
async def list_pedidos(service: PedidoService = Depends(get_pedido_service)) -> Envelope:
    rows = await service.list()
    return Envelope.success([service.to_payload(row) for row in rows])


@router.post("/pedidos", response_model=Envelope, summary="Create a pedido")
async def create_pedido(
    body: Dict[str, Any] = Depends(read_json_body),
    service: PedidoService = Depends(get_pedido_service),
) -> Envelope:
    new_id = await service.create(body)
    return Envelope.success(
        RecordCreated(id=new_id, message=service.message("creado")).model_dump()
    )


@router.get("/pedidos/{pedido_id:int}", response_model=Envelope, summary="Get one pedido")
async def get_pedido(
    pedido_id: int,
    service: PedidoService = Depends(get_pedido_service),
) -> Envelope:
    return Envelope.success(service.to_payload(await service.get(pedido_id)))


@router.put("/pedidos/{pedido_id:int}", response_model=Envelope, summary="Update a pedido")
async def update_pedido(
    pedido_id: int,
    body: Dict[str, Any] = Depends(read_json_body),
    service: PedidoService = Depends(get_pedido_service),
) -> Envelope:
    await service.update(pedido_id, body)
    return Envelope.success(MessagePayload(message=service.message("actualizado")).model_dump())


@router.delete("/pedidos/{pedido_id:int}", response_model=Envelope, summary="Delete a pedido")
async def delete_pedido(
    pedido_id: int,
    service: PedidoService = Depends(get_pedido_service),
) -> Envelope:
    await service.delete(pedido_id)
    return Envelope.success(MessagePayload(message=service.message("eliminado")).model_dump())
