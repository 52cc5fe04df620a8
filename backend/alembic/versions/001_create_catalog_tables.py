"""Create catalogo_ramos and pedido tables

Revision ID: 001
Revises: None
Create Date: 2025-01-15 00:00:00.000000+00:00

What:  Creates the bouquet catalog and the customer order tables.
How:   Plain integer identity keys and NUMERIC(10, 2) amounts, portable across
       PostgreSQL and MySQL.

Rollback: downgrade() drops both tables (all catalog and order data is lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "catalogo_ramos",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("titulo", sa.String(255), nullable=False),
        sa.Column("valor", sa.Numeric(10, 2), nullable=False),
        sa.Column("categoria", sa.String(100), nullable=False),
        sa.Column(
            "description",
            sa.Text(),
            nullable=False,
            server_default=sa.text("''"),
        ),
        # Stored file name under STORAGE_ROOT, NULL when there is no picture
        sa.Column(
            "imagen",
            sa.String(255),
            nullable=True,
            comment="File name in the image store, never a URL",
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "pedido",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("nombre_cliente", sa.String(255), nullable=False),
        sa.Column("direccion", sa.String(255), nullable=False),
        sa.Column("fecha_entrega", sa.String(50), nullable=False),
        sa.Column("valor_ramo", sa.Numeric(10, 2), nullable=False),
        sa.Column("nombre_ramo", sa.String(255), nullable=False, server_default=sa.text("''")),
        sa.Column("celular", sa.String(50), nullable=False, server_default=sa.text("''")),
        sa.Column("descripcion", sa.Text(), nullable=False, server_default=sa.text("''")),
        sa.Column(
            "estado",
            sa.String(50),
            nullable=False,
            server_default=sa.text("'En proceso'"),
        ),
        sa.Column(
            "cantidad_pagada",
            sa.Numeric(10, 2),
            nullable=False,
            server_default=sa.text("0"),
        ),
        sa.PrimaryKeyConstraint("id"),
    )


def downgrade() -> None:
    op.drop_table("pedido")
    op.drop_table("catalogo_ramos")
