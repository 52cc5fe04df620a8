"""
Floreria Backend — Pedido Schemas
===================================

What:  Input and output shapes for /pedidos, mirroring app/schemas/ramo.py.
"""

from typing import Any, Optional

from pydantic import BaseModel, field_validator

from app.models.pedido import DEFAULT_ESTADO
from app.validation import clean_text, coerce_number

PEDIDO_REQUIRED_FIELDS = ("nombre_cliente", "direccion", "fecha_entrega", "valor_ramo")

PEDIDO_NON_EMPTY_FIELDS = ("nombre_cliente", "direccion", "fecha_entrega")

_TEXT_FIELDS = (
    "nombre_cliente",
    "direccion",
    "fecha_entrega",
    "nombre_ramo",
    "celular",
    "descripcion",
    "estado",
)
_AMOUNT_FIELDS = ("valor_ramo", "cantidad_pagada")


class _PedidoFields(BaseModel):

    @field_validator(*_TEXT_FIELDS, mode="before", check_fields=False)
    @classmethod
    def trim_text(cls, v: Any) -> Any:
        return clean_text(v)

    @field_validator(*_AMOUNT_FIELDS, mode="before", check_fields=False)
    @classmethod
    def parse_amount(cls, v: Any) -> Any:
        return coerce_number(v)

    @field_validator(*_AMOUNT_FIELDS, check_fields=False)
    @classmethod
    def amount_not_negative(cls, v: Optional[float], info) -> Optional[float]:
        if v is not None and v < 0:
            raise ValueError(f"El campo {info.field_name} no puede ser negativo")
        return v


class PedidoCreate(_PedidoFields):
    nombre_cliente: str
    direccion: str
    fecha_entrega: str
    valor_ramo: float
    nombre_ramo: str = ""
    celular: str = ""
    descripcion: str = ""
    estado: str = DEFAULT_ESTADO
    cantidad_pagada: float = 0.0


class PedidoUpdate(_PedidoFields):
    nombre_cliente: Optional[str] = None
    direccion: Optional[str] = None
    fecha_entrega: Optional[str] = None
    valor_ramo: Optional[float] = None
    nombre_ramo: Optional[str] = None
    celular: Optional[str] = None
    descripcion: Optional[str] = None
    estado: Optional[str] = None
    cantidad_pagada: Optional[float] = None


class PedidoOut(BaseModel):
    """A pedido row as returned by GET."""

    id: int
    nombre_cliente: str
    direccion: str
    fecha_entrega: str
    valor_ramo: float
    nombre_ramo: str
    celular: str
    descripcion: str
    estado: str
    cantidad_pagada: float

    model_config = {"from_attributes": True}
