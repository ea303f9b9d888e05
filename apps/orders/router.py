import logging
from decimal import Decimal

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from apps.orders.pricing import discount_rate, subtotal_of
from apps.orders.schemas import OrderCreate, OrderLineResponse, OrderResponse, OrderUpdate
from apps.orders.service import OrderService
from common.responses import success_response
from constants.discounts import MONEY_QUANTUM
from constants.limits import ID_MAX, ID_MIN
from models.base import get_db
from models.purchase_order import PurchaseOrder

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/ordenes", tags=["Purchase Orders"])


def _to_payload(order: PurchaseOrder) -> dict:
    lines = [
        OrderLineResponse(
            id=line.id,
            productId=line.product_id,
            productName=line.product.name if line.product else "",
            price=line.product.price if line.product else Decimal("0.00"),
        )
        for line in order.lines
    ]
    subtotal = subtotal_of(line.price for line in lines)
    return OrderResponse(
        id=order.id,
        customerName=order.customer_name,
        createdAt=order.created_at,
        subtotal=subtotal,
        discountRate=discount_rate(subtotal, len(lines)).quantize(MONEY_QUANTUM),
        total=order.total,
        lines=lines,
    ).model_dump(by_alias=True, mode="json")


@router.get("")
async def list_orders(db: AsyncSession = Depends(get_db)):
    logger.info("Listing purchase orders")
    orders = await OrderService.list_orders(db)
    return success_response([_to_payload(o) for o in orders], "Orders retrieved successfully")


@router.get("/{order_id}")
async def get_order(order_id: int = Path(..., ge=ID_MIN, le=ID_MAX), db: AsyncSession = Depends(get_db)):
    logger.info("Fetching purchase order %s", order_id)
    order = await OrderService.get_order(db, order_id)
    return success_response(_to_payload(order), "Order retrieved successfully")


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_order(payload: OrderCreate, db: AsyncSession = Depends(get_db)):
    logger.info("Creating purchase order for customer: %s", payload.customer_name)
    order = await OrderService.create_order(db, payload)
    return success_response(_to_payload(order), "Purchase order created successfully")


@router.put("/{order_id}")
async def update_order(payload: OrderUpdate, order_id: int = Path(..., ge=ID_MIN, le=ID_MAX), db: AsyncSession = Depends(get_db)):
    logger.info("Updating purchase order %s", order_id)
    order = await OrderService.update_order(db, order_id, payload)
    return success_response(_to_payload(order), "Purchase order updated successfully")


@router.delete("/{order_id}")
async def delete_order(order_id: int = Path(..., ge=ID_MIN, le=ID_MAX), db: AsyncSession = Depends(get_db)):
    logger.info("Deleting purchase order %s", order_id)
    await OrderService.delete_order(db, order_id)
    return success_response(message="Purchase order deleted successfully")
