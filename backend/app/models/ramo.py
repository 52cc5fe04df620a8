"""
Floreria Backend — Ramo SQLAlchemy Model
==========================================

What:  ORM model for the `catalogo_ramos` table (catalog of bouquets).
Who:   RamoService for CRUD; Alembic for schema management.

Column notes:
    - valor is NUMERIC(10, 2) read back as float so responses carry a JSON number
    - imagen holds the stored file name only (e.g. 20250101120000_ab12cd34.jpg),
      never a URL; the public URL is derived at read time
"""

from typing import Optional

from sqlalchemy import Integer, Numeric, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Ramo(Base):
    """
    A catalog entry.

    Lifecycle:
        1. Created by POST /ramos (image written before the insert)
        2. Updated in place by PUT /ramos/{id} (only the fields sent)
        3. Removed by DELETE /ramos/{id} together with its image file
    """

    __tablename__ = "catalogo_ramos"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    titulo: Mapped[str] = mapped_column(String(255), nullable=False)

    valor: Mapped[float] = mapped_column(
        Numeric(10, 2, asdecimal=False),
        nullable=False,
        default=0,
    )

    categoria: Mapped[str] = mapped_column(String(100), nullable=False)

    description: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
        server_default=text("''"),
    )

    # Stored file name; NULL when the ramo has no picture
    imagen: Mapped[Optional[str]] = mapped_column(String(255), nullable=True, default=None)

    def __repr__(self) -> str:
        return f"<Ramo(id={self.id}, titulo='{self.titulo}', imagen={self.imagen!r})>"
