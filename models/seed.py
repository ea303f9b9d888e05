import logging
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from apps.orders.pricing import compute_total, subtotal_of
from models.order_line import OrderLine
from models.product import Product, product_name_key
from models.purchase_order import PurchaseOrder

logger = logging.getLogger(__name__)

DEMO_PRODUCTS = [
    ("Laptop HP Pavilion", Decimal("15000.00")),
    ("Mouse Logitech", Decimal("500.00")),
    ("Teclado Mecánico", Decimal("1200.00")),
    ("Monitor 24 pulgadas", Decimal("4500.00")),
    ("Impresora Multifuncional", Decimal("8000.00")),
    ("Silla Ergonómica", Decimal("3500.00")),
]

# (customer, created_at, indexes into DEMO_PRODUCTS)
DEMO_ORDERS = [
    ("TechSolutions S.A.", datetime(2025, 10, 1, 10, 30, tzinfo=timezone.utc), (0, 1, 2)),
    ("Oficinas Corporativas Voultech", datetime(2025, 10, 2, 14, 15, tzinfo=timezone.utc), (3, 4, 5)),
]


async def seed_demo_data(db: AsyncSession) -> bool:
    """
    Insert the demo catalog and two sample orders when the catalog is empty.
    Returns True when data was inserted.
    """
    async with db.begin():
        count_res = await db.execute(select(func.count(Product.id)))
        if int(count_res.scalar_one() or 0) > 0:
            return False

        products = [
            Product(name=name, name_key=product_name_key(name), price=price) for name, price in DEMO_PRODUCTS
        ]
        db.add_all(products)
        await db.flush()

        for customer, created_at, picks in DEMO_ORDERS:
            chosen = [products[i] for i in picks]
            order = PurchaseOrder(
                customer_name=customer,
                created_at=created_at,
                total=compute_total(subtotal_of(p.price for p in chosen), len(chosen)),
            )
            db.add(order)
            await db.flush()
            db.add_all([OrderLine(order_id=order.id, product_id=p.id) for p in chosen])

    logger.info("Seeded %d demo products and %d demo orders", len(DEMO_PRODUCTS), len(DEMO_ORDERS))
    return True
