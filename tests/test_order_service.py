"""Order use cases against a real (SQLite) database session."""

from decimal import Decimal

import pytest
from sqlalchemy import func, select

from apps.orders.schemas import OrderCreate, OrderUpdate
from apps.orders.service import OrderService
from common.exceptions import NotFoundError, ValidationError
from models.base import SessionLocal
from models.order_line import OrderLine
from models.purchase_order import PurchaseOrder


def _create(customer, product_ids):
    return OrderCreate.model_validate(
        {"customerName": customer, "lines": [{"productId": pid} for pid in product_ids]}
    )


def _update(customer, product_ids=None):
    body = {"customerName": customer}
    if product_ids is not None:
        body["lines"] = [{"productId": pid} for pid in product_ids]
    return OrderUpdate.model_validate(body)


async def _count(model) -> int:
    async with SessionLocal() as db:
        res = await db.execute(select(func.count(model.id)))
        return int(res.scalar_one())


async def _snapshot(order_id):
    async with SessionLocal() as db:
        order = await OrderService.get_order(db, order_id)
        return order.customer_name, [(l.id, l.product_id) for l in order.lines], order.total


@pytest.mark.asyncio
async def test_seeded_totals_follow_discount_rule(seeded):
    async with SessionLocal() as db:
        orders = await OrderService.list_orders(db)
    assert [o.total for o in orders] == [Decimal("15030.00"), Decimal("14400.00")]


@pytest.mark.asyncio
async def test_create_then_replace_all_lines(seeded):
    async with SessionLocal() as db:
        order = await OrderService.create_order(db, _create("Acme Corp", [1, 2, 3]))
    # 15000 + 500 + 1200 = 16700, above 500 -> 10% off
    assert order.total == Decimal("15030.00")
    assert order.customer_name == "Acme Corp"
    old_line_ids = {line.id for line in order.lines}
    assert {line.product_id for line in order.lines} == {1, 2, 3}

    async with SessionLocal() as db:
        order = await OrderService.update_order(db, order.id, _update("Acme Corp", [4, 5, 6]))
    # 4500 + 8000 + 3500 = 16000 -> 14400
    assert order.total == Decimal("14400.00")
    assert {line.product_id for line in order.lines} == {4, 5, 6}
    assert not old_line_ids & {line.id for line in order.lines}

    async with SessionLocal() as db:
        res = await db.execute(select(OrderLine.id).where(OrderLine.id.in_(old_line_ids)))
        assert res.first() is None


@pytest.mark.asyncio
async def test_six_products_stack_both_discounts(seeded):
    async with SessionLocal() as db:
        order = await OrderService.create_order(db, _create("Big Buyer", [1, 2, 3, 4, 5, 6]))
    # 32700 * 0.85
    assert order.total == Decimal("27795.00")
    assert len(order.lines) == 6


@pytest.mark.asyncio
async def test_create_trims_customer_name(seeded):
    async with SessionLocal() as db:
        order = await OrderService.create_order(db, _create("  Mouse Shop  ", [2]))
    assert order.customer_name == "Mouse Shop"
    # 500 is not above the threshold
    assert order.total == Decimal("500.00")


@pytest.mark.asyncio
async def test_update_keeps_lines_of_retained_products(seeded):
    before = await _snapshot(1)
    kept = {pid: lid for lid, pid in before[1] if pid in (2, 3)}

    async with SessionLocal() as db:
        order = await OrderService.update_order(db, 1, _update("TechSolutions S.A.", [2, 3, 4]))

    after = {line.product_id: line.id for line in order.lines}
    assert set(after) == {2, 3, 4}
    assert after[2] == kept[2]
    assert after[3] == kept[3]
    # 500 + 1200 + 4500 = 6200 -> 5580
    assert order.total == Decimal("5580.00")


@pytest.mark.asyncio
async def test_update_without_lines_only_renames(seeded):
    _, lines_before, total_before = await _snapshot(1)

    async with SessionLocal() as db:
        await OrderService.update_order(db, 1, _update("Renamed Customer"))

    name, lines_after, total_after = await _snapshot(1)
    assert name == "Renamed Customer"
    assert lines_after == lines_before
    assert total_after == total_before


@pytest.mark.asyncio
async def test_create_with_duplicate_products_persists_nothing(seeded):
    async with SessionLocal() as db:
        with pytest.raises(ValidationError) as exc_info:
            await OrderService.create_order(db, _create("Dup Inc", [1, 2, 1]))
    assert exc_info.value.details["productIds"] == [1]
    assert await _count(PurchaseOrder) == 2
    assert await _count(OrderLine) == 6


@pytest.mark.asyncio
async def test_create_with_missing_product_persists_nothing(seeded):
    async with SessionLocal() as db:
        with pytest.raises(ValidationError) as exc_info:
            await OrderService.create_order(db, _create("Ghost Ltd", [1, 42]))
    assert exc_info.value.details["productIds"] == [42]
    assert await _count(PurchaseOrder) == 2
    assert await _count(OrderLine) == 6


@pytest.mark.asyncio
async def test_create_with_no_products_is_rejected(seeded):
    async with SessionLocal() as db:
        with pytest.raises(ValidationError):
            await OrderService.create_order(db, _create("Empty Co", []))
    assert await _count(PurchaseOrder) == 2


@pytest.mark.asyncio
async def test_failed_update_leaves_order_unchanged(seeded):
    before = await _snapshot(1)

    async with SessionLocal() as db:
        with pytest.raises(ValidationError):
            await OrderService.update_order(db, 1, _update("Changed Name", [4, 999]))

    assert await _snapshot(1) == before


@pytest.mark.asyncio
async def test_update_to_empty_line_set_is_rejected(seeded):
    before = await _snapshot(2)

    async with SessionLocal() as db:
        with pytest.raises(ValidationError):
            await OrderService.update_order(db, 2, _update("Oficinas", []))

    assert await _snapshot(2) == before


@pytest.mark.asyncio
async def test_update_unknown_order(seeded):
    async with SessionLocal() as db:
        with pytest.raises(NotFoundError):
            await OrderService.update_order(db, 404, _update("Nobody", [1]))


@pytest.mark.asyncio
async def test_delete_removes_order_and_lines(seeded):
    async with SessionLocal() as db:
        await OrderService.delete_order(db, 1)

    async with SessionLocal() as db:
        with pytest.raises(NotFoundError):
            await OrderService.get_order(db, 1)
        res = await db.execute(select(func.count(OrderLine.id)).where(OrderLine.order_id == 1))
        assert res.scalar_one() == 0
    assert await _count(OrderLine) == 3


@pytest.mark.asyncio
async def test_delete_unknown_order_has_no_side_effects(seeded):
    async with SessionLocal() as db:
        with pytest.raises(NotFoundError):
            await OrderService.delete_order(db, 12345)
    assert await _count(PurchaseOrder) == 2
    assert await _count(OrderLine) == 6


@pytest.mark.asyncio
async def test_update_with_same_products_leaves_lines_untouched(seeded, monkeypatch):
    _, lines_before, total_before = await _snapshot(2)

    async def fail_apply(db, order_id, delta):
        raise AssertionError("no line changes expected")

    monkeypatch.setattr(OrderService, "_apply_delta", staticmethod(fail_apply))
    async with SessionLocal() as db:
        order = await OrderService.update_order(db, 2, _update("Voultech", [6, 5, 4]))

    assert order.customer_name == "Voultech"
    assert [(l.id, l.product_id) for l in order.lines] == lines_before
    assert order.total == total_before
