"""
Floreria Backend — ORM Models
===============================

What:  SQLAlchemy models for the two tables the API manages.
How:   Importing this package registers every model on Base.metadata,
       which is what Alembic and the test suite create tables from.

Model Inventory:
    - Ramo:   catalogo_ramos (flower bouquet catalog)
    - Pedido: pedido (customer orders)
"""

from app.models.pedido import Pedido
from app.models.ramo import Ramo

__all__ = ["Pedido", "Ramo"]
