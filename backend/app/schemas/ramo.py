"""
Floreria Backend — Ramo Schemas
=================================

What:  Input and output shapes for /ramos.
How:   RamoCreate / RamoUpdate are the allow list of writable columns: keys
       not declared here never reach an INSERT or UPDATE. "before" validators
       trim text and coerce valor permissively (see app/validation.py).

imagen on input is either a data URI ("data:image/png;base64,...") or the
name of an already stored file; RamoService hands it to the image store.
"""

from typing import Any, Optional

from pydantic import BaseModel, field_validator

from app.validation import clean_text, coerce_number

RAMO_REQUIRED_FIELDS = ("titulo", "valor", "categoria")

# Fields that may be omitted but never blanked out once set
RAMO_NON_EMPTY_FIELDS = ("titulo", "categoria")


class _RamoFields(BaseModel):
    """Shared coercion for create and update."""

    @field_validator("titulo", "categoria", "description", "imagen", mode="before", check_fields=False)
    @classmethod
    def trim_text(cls, v: Any) -> Any:
        return clean_text(v)

    @field_validator("valor", mode="before", check_fields=False)
    @classmethod
    def parse_valor(cls, v: Any) -> Any:
        return coerce_number(v)

    @field_validator("valor", check_fields=False)
    @classmethod
    def valor_not_negative(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and v < 0:
            raise ValueError("El campo valor no puede ser negativo")
        return v


class RamoCreate(_RamoFields):
    titulo: str
    valor: float
    categoria: str
    description: str = ""
    imagen: Optional[str] = None


class RamoUpdate(_RamoFields):
    titulo: Optional[str] = None
    valor: Optional[float] = None
    categoria: Optional[str] = None
    description: Optional[str] = None
    imagen: Optional[str] = None


class RamoOut(BaseModel):
    """A catalogo_ramos row as returned by GET."""

    id: int
    titulo: str
    valor: float
    categoria: str
    description: str
    imagen: Optional[str] = None

    model_config = {"from_attributes": True}
