import logging
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from apps.products.schemas import ProductCreate
from common.exceptions import NotFoundError
from common.validation import ValidationResult, first_error, validate_decimal_range, validate_text_length
from constants.limits import NAME_MAX_LENGTH, NAME_MIN_LENGTH, PRICE_MAX, PRICE_MIN
from constants.discounts import MONEY_QUANTUM
from models.product import Product, product_name_key

logger = logging.getLogger(__name__)


def validate_product_name(name: str) -> ValidationResult:
    return validate_text_length(name, "Product name", NAME_MIN_LENGTH, NAME_MAX_LENGTH)


def validate_product_price(price: Decimal) -> ValidationResult:
    result = validate_decimal_range(price, "Price", PRICE_MIN, PRICE_MAX)
    if result.is_valid and price != price.quantize(MONEY_QUANTUM):
        return ValidationResult.error("range", "Price cannot have more than 2 decimal places.")
    return result


class ProductService:
    @staticmethod
    async def find_product(db: AsyncSession, product_id: int) -> Optional[Product]:
        return await db.get(Product, product_id)

    @staticmethod
    async def get_product(db: AsyncSession, product_id: int) -> Product:
        product = await ProductService.find_product(db, product_id)
        if not product:
            raise NotFoundError(f"Product with ID {product_id} not found.")
        return product

    @staticmethod
    async def list_products(db: AsyncSession) -> List[Product]:
        res = await db.execute(select(Product).order_by(Product.id))
        return list(res.scalars().all())

    @staticmethod
    async def create_product(db: AsyncSession, payload: ProductCreate) -> Product:
        first_error(validate_product_name(payload.name), validate_product_price(payload.price)).raise_for_error()
        name = payload.name.strip()
        name_key = product_name_key(name)
        conflict = ValidationResult.error("conflict", f"A product named '{name}' already exists.")

        try:
            async with db.begin():
                existing_res = await db.execute(select(Product.id).where(Product.name_key == name_key))
                if existing_res.first() is not None:
                    conflict.raise_for_error()

                product = Product(name=name, name_key=name_key, price=payload.price.quantize(MONEY_QUANTUM))
                db.add(product)
                await db.flush()
        except IntegrityError as exc:
            # Another request inserted the same name between the lookup and the flush
            logger.warning("Product name conflict on insert: %s", name)
            raise conflict.as_error() from exc

        logger.info("Created product %s (%s)", product.id, product.name)
        return product
