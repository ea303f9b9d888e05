import logging

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from apps.products.schemas import ProductCreate, ProductResponse
from apps.products.service import ProductService
from common.responses import success_response
from constants.limits import ID_MAX, ID_MIN
from models.base import get_db
from models.product import Product

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/productos", tags=["Products"])


def _to_payload(product: Product) -> dict:
    return ProductResponse.model_validate(product).model_dump(mode="json")


@router.get("")
async def list_products(db: AsyncSession = Depends(get_db)):
    logger.info("Listing products")
    products = await ProductService.list_products(db)
    return success_response([_to_payload(p) for p in products], "Products retrieved successfully")


@router.get("/{product_id}")
async def get_product(product_id: int = Path(..., ge=ID_MIN, le=ID_MAX), db: AsyncSession = Depends(get_db)):
    product = await ProductService.get_product(db, product_id)
    return success_response(_to_payload(product), "Product retrieved successfully")


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_product(payload: ProductCreate, db: AsyncSession = Depends(get_db)):
    logger.info("Creating product: %s", payload.name)
    product = await ProductService.create_product(db, payload)
    return success_response(_to_payload(product), "Product created successfully")
