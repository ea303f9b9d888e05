"""initial schema: products, purchase_orders, order_lines; seed demo data

Revision ID: 0001
Revises:
Create Date: 2025-10-03
"""
from datetime import datetime, timezone
from decimal import Decimal

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "products",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("name_key", sa.String(length=100), nullable=False),
        sa.Column("price", sa.Numeric(18, 2), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_products")),
        sa.UniqueConstraint("name_key", name=op.f("uq_products_name_key")),
    )
    op.create_index("ix_products_id", "products", ["id"], unique=False)
    op.create_index("ix_products_name", "products", ["name"], unique=False)

    op.create_table(
        "purchase_orders",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("customer_name", sa.String(length=100), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("total", sa.Numeric(18, 2), nullable=False, server_default="0"),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_purchase_orders")),
        sqlite_autoincrement=True,
    )
    op.create_index("ix_purchase_orders_id", "purchase_orders", ["id"], unique=False)

    op.create_table(
        "order_lines",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("order_id", sa.Integer(), nullable=False),
        sa.Column("product_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(
            ["order_id"], ["purchase_orders.id"],
            name=op.f("fk_order_lines_order_id_purchase_orders"), ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["product_id"], ["products.id"],
            name=op.f("fk_order_lines_product_id_products"), ondelete="RESTRICT",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_order_lines")),
        sqlite_autoincrement=True,
    )
    op.create_index("ix_order_lines_id", "order_lines", ["id"], unique=False)
    op.create_index("ix_order_lines_order_id", "order_lines", ["order_id"], unique=False)
    op.create_index("ix_order_lines_product_id", "order_lines", ["product_id"], unique=False)

    # seed demo catalog and orders; totals follow the tiered discount rule
    products_table = sa.table(
        "products",
        sa.column("id", sa.Integer),
        sa.column("name", sa.String),
        sa.column("name_key", sa.String),
        sa.column("price", sa.Numeric(18, 2)),
    )
    orders_table = sa.table(
        "purchase_orders",
        sa.column("id", sa.Integer),
        sa.column("customer_name", sa.String),
        sa.column("created_at", sa.DateTime(timezone=True)),
        sa.column("total", sa.Numeric(18, 2)),
    )
    lines_table = sa.table(
        "order_lines",
        sa.column("id", sa.Integer),
        sa.column("order_id", sa.Integer),
        sa.column("product_id", sa.Integer),
    )
    op.bulk_insert(
        products_table,
        [
            {"id": 1, "name": "Laptop HP Pavilion", "name_key": "laptop hp pavilion", "price": Decimal("15000.00")},
            {"id": 2, "name": "Mouse Logitech", "name_key": "mouse logitech", "price": Decimal("500.00")},
            {"id": 3, "name": "Teclado Mecánico", "name_key": "teclado mecánico", "price": Decimal("1200.00")},
            {"id": 4, "name": "Monitor 24 pulgadas", "name_key": "monitor 24 pulgadas", "price": Decimal("4500.00")},
            {"id": 5, "name": "Impresora Multifuncional", "name_key": "impresora multifuncional", "price": Decimal("8000.00")},
            {"id": 6, "name": "Silla Ergonómica", "name_key": "silla ergonómica", "price": Decimal("3500.00")},
        ],
    )
    op.bulk_insert(
        orders_table,
        [
            # 16700.00 - 10%
            {"id": 1, "customer_name": "TechSolutions S.A.",
             "created_at": datetime(2025, 10, 1, 10, 30, tzinfo=timezone.utc), "total": Decimal("15030.00")},
            # 16000.00 - 10%
            {"id": 2, "customer_name": "Oficinas Corporativas Voultech",
             "created_at": datetime(2025, 10, 2, 14, 15, tzinfo=timezone.utc), "total": Decimal("14400.00")},
        ],
    )
    op.bulk_insert(
        lines_table,
        [
            {"id": 1, "order_id": 1, "product_id": 1},
            {"id": 2, "order_id": 1, "product_id": 2},
            {"id": 3, "order_id": 1, "product_id": 3},
            {"id": 4, "order_id": 2, "product_id": 4},
            {"id": 5, "order_id": 2, "product_id": 5},
            {"id": 6, "order_id": 2, "product_id": 6},
        ],
    )

    # explicit IDs above do not advance PostgreSQL sequences
    if op.get_bind().dialect.name == "postgresql":
        for table in ("products", "purchase_orders", "order_lines"):
            op.execute(f"SELECT setval(pg_get_serial_sequence('{table}', 'id'), (SELECT MAX(id) FROM {table}))")


def downgrade():
    op.drop_index("ix_order_lines_product_id", table_name="order_lines")
    op.drop_index("ix_order_lines_order_id", table_name="order_lines")
    op.drop_index("ix_order_lines_id", table_name="order_lines")
    op.drop_table("order_lines")
    op.drop_index("ix_purchase_orders_id", table_name="purchase_orders")
    op.drop_table("purchase_orders")
    op.drop_index("ix_products_name", table_name="products")
    op.drop_index("ix_products_id", table_name="products")
    op.drop_table("products")
