"""
Floreria Backend — Pedido SQLAlchemy Model
============================================

What:  ORM model for the `pedido` table (customer orders).

nombre_ramo is a display copy of the ordered ramo's title, not a foreign key.
fecha_entrega is kept as the string the client sent.
"""

from sqlalchemy import Integer, Numeric, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base

DEFAULT_ESTADO = "En proceso"


class Pedido(Base):
    """A customer order."""

    __tablename__ = "pedido"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    nombre_cliente: Mapped[str] = mapped_column(String(255), nullable=False)
    direccion: Mapped[str] = mapped_column(String(255), nullable=False)
    fecha_entrega: Mapped[str] = mapped_column(String(50), nullable=False)

    valor_ramo: Mapped[float] = mapped_column(
        Numeric(10, 2, asdecimal=False),
        nullable=False,
        default=0,
    )

    nombre_ramo: Mapped[str] = mapped_column(
        String(255), nullable=False, default="", server_default=text("''")
    )
    celular: Mapped[str] = mapped_column(
        String(50), nullable=False, default="", server_default=text("''")
    )
    descripcion: Mapped[str] = mapped_column(
        Text, nullable=False, default="", server_default=text("''")
    )

    # Order status: 'En proceso' until the shop changes it
    estado: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        default=DEFAULT_ESTADO,
        server_default=text(f"'{DEFAULT_ESTADO}'"),
    )

    cantidad_pagada: Mapped[float] = mapped_column(
        Numeric(10, 2, asdecimal=False),
        nullable=False,
        default=0,
        server_default=text("0"),
    )

    def __repr__(self) -> str:
        return (
            f"<Pedido(id={self.id}, nombre_cliente='{self.nombre_cliente}', "
            f"estado='{self.estado}')>"
        )
