"""
Floreria Backend — Pedido Service
===================================

What:  CRUD for the pedido table. All behaviour comes from RecordService;
       this module only binds the model, schemas and field rules.
"""

from typing import Any, Dict

from app.models.pedido import Pedido
from app.schemas.pedido import (
    PEDIDO_NON_EMPTY_FIELDS,
    PEDIDO_REQUIRED_FIELDS,
    PedidoCreate,
    PedidoOut,
    PedidoUpdate,
)
from app.services.record_service import RecordService


class PedidoService(RecordService[Pedido]):
    model = Pedido
    resource = "Pedido"
    create_schema = PedidoCreate
    update_schema = PedidoUpdate
    required_fields = PEDIDO_REQUIRED_FIELDS
    non_empty_fields = PEDIDO_NON_EMPTY_FIELDS

    def to_payload(self, row: Pedido) -> Dict[str, Any]:
        return PedidoOut.model_validate(row).model_dump()
