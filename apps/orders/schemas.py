from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field as PydanticField

from constants.limits import ID_MAX, ID_MIN


class OrderLineRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    product_id: int = PydanticField(alias="productId", ge=ID_MIN, le=ID_MAX)


class OrderCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    customer_name: str = PydanticField(alias="customerName")
    lines: List[OrderLineRequest]


class OrderUpdate(BaseModel):
    """
    `lines` replaces the whole line set when given; leave it out to keep the current lines.
    """
    model_config = ConfigDict(populate_by_name=True)

    customer_name: str = PydanticField(alias="customerName")
    lines: Optional[List[OrderLineRequest]] = None


class OrderLineResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    product_id: int = PydanticField(alias="productId")
    product_name: str = PydanticField(alias="productName")
    price: Decimal


class OrderResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    customer_name: str = PydanticField(alias="customerName")
    created_at: datetime = PydanticField(alias="createdAt")
    subtotal: Decimal
    discount_rate: Decimal = PydanticField(alias="discountRate")
    total: Decimal
    lines: List[OrderLineResponse]
