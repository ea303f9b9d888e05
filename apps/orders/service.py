import logging
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Sequence, Set

from sqlalchemy import delete, insert, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload, selectinload

from apps.orders.pricing import ZERO, compute_total, subtotal_of
from apps.orders.reconciler import LineDelta, reconcile
from apps.orders.schemas import OrderCreate, OrderUpdate
from apps.orders.validation import validate_customer_name, validate_line_request, validate_products_exist
from common.exceptions import NotFoundError
from models.order_line import OrderLine
from models.product import Product
from models.purchase_order import PurchaseOrder

logger = logging.getLogger(__name__)


class OrderService:
    """
    Purchase order use cases. Every mutation runs inside a single transaction:
    any error (validation included) rolls back the order row, its lines and its total together.
    """

    @staticmethod
    async def _load_order(db: AsyncSession, order_id: int, refresh: bool = False) -> Optional[PurchaseOrder]:
        """
        Load an order with its lines and their products.
        `refresh` overwrites objects already in the session with the current rows.
        """
        stmt = (
            select(PurchaseOrder)
            .options(selectinload(PurchaseOrder.lines).joinedload(OrderLine.product))
            .where(PurchaseOrder.id == order_id)
        )
        if refresh:
            stmt = stmt.execution_options(populate_existing=True)
        res = await db.execute(stmt)
        return res.scalar_one_or_none()

    @staticmethod
    async def _existing_product_ids(db: AsyncSession, product_ids: Iterable[int]) -> Set[int]:
        res = await db.execute(select(Product.id).where(Product.id.in_(set(product_ids))))
        return set(res.scalars().all())

    @staticmethod
    async def _check_products_exist(db: AsyncSession, product_ids: Sequence[int]) -> None:
        existing = await OrderService._existing_product_ids(db, product_ids)
        validate_products_exist(product_ids, existing).raise_for_error()

    @staticmethod
    async def _apply_delta(db: AsyncSession, order_id: int, delta: LineDelta) -> None:
        if delta.to_remove:
            await db.execute(
                delete(OrderLine)
                .where(OrderLine.order_id == order_id, OrderLine.product_id.in_(delta.sorted_removals()))
                .execution_options(synchronize_session=False)
            )
        if delta.to_add:
            await db.execute(
                insert(OrderLine),
                [{"order_id": order_id, "product_id": pid} for pid in delta.sorted_additions()],
            )

    @staticmethod
    async def _refresh_total(db: AsyncSession, order_id: int) -> PurchaseOrder:
        """
        Reload the order with its current lines and store the discounted total.
        """
        await db.flush()
        order = await OrderService._load_order(db, order_id, refresh=True)
        subtotal = subtotal_of(line.product.price for line in order.lines)
        order.total = compute_total(subtotal, len(order.lines))
        await db.flush()
        return order

    @staticmethod
    async def list_orders(db: AsyncSession) -> List[PurchaseOrder]:
        stmt = (
            select(PurchaseOrder)
            .options(selectinload(PurchaseOrder.lines).joinedload(OrderLine.product))
            .order_by(PurchaseOrder.id)
        )
        res = await db.execute(stmt)
        return list(res.scalars().all())

    @staticmethod
    async def get_order(db: AsyncSession, order_id: int) -> PurchaseOrder:
        order = await OrderService._load_order(db, order_id)
        if not order:
            raise NotFoundError(f"Purchase order with ID {order_id} not found.")
        return order

    @staticmethod
    async def create_order(db: AsyncSession, payload: OrderCreate) -> PurchaseOrder:
        product_ids = [line.product_id for line in payload.lines]
        validate_customer_name(payload.customer_name).raise_for_error()
        validate_line_request(product_ids).raise_for_error()

        async with db.begin():
            await OrderService._check_products_exist(db, product_ids)

            order = PurchaseOrder(
                customer_name=payload.customer_name.strip(),
                created_at=datetime.now(timezone.utc),
                total=ZERO,
            )
            db.add(order)
            await db.flush()

            await OrderService._apply_delta(db, order.id, reconcile(set(), set(product_ids)))
            order = await OrderService._refresh_total(db, order.id)

        logger.info("Created purchase order %s with %d line(s), total %s", order.id, len(order.lines), order.total)
        return order

    @staticmethod
    async def update_order(db: AsyncSession, order_id: int, payload: OrderUpdate) -> PurchaseOrder:
        validate_customer_name(payload.customer_name).raise_for_error()
        product_ids = None
        if payload.lines is not None:
            product_ids = [line.product_id for line in payload.lines]
            validate_line_request(product_ids).raise_for_error()

        async with db.begin():
            order = await OrderService.get_order(db, order_id)
            order.customer_name = payload.customer_name.strip()

            if product_ids is not None:
                await OrderService._check_products_exist(db, product_ids)
                delta = reconcile({line.product_id for line in order.lines}, set(product_ids))
                if not delta.is_empty:
                    await OrderService._apply_delta(db, order.id, delta)
                    logger.info(
                        "Order %s lines: +%s -%s", order.id, delta.sorted_additions(), delta.sorted_removals()
                    )

            order = await OrderService._refresh_total(db, order.id)

        logger.info("Updated purchase order %s, total %s", order.id, order.total)
        return order

    @staticmethod
    async def delete_order(db: AsyncSession, order_id: int) -> None:
        async with db.begin():
            res = await db.execute(select(PurchaseOrder.id).where(PurchaseOrder.id == order_id))
            if res.scalar_one_or_none() is None:
                raise NotFoundError(f"Purchase order with ID {order_id} not found.")

            # Lines first, then the order row; the FK cascade would do the same
            await db.execute(
                delete(OrderLine)
                .where(OrderLine.order_id == order_id)
                .execution_options(synchronize_session=False)
            )
            await db.execute(
                delete(PurchaseOrder)
                .where(PurchaseOrder.id == order_id)
                .execution_options(synchronize_session=False)
            )

        logger.info("Deleted purchase order %s", order_id)
