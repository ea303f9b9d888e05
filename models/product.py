from sqlalchemy import Column, Integer, Numeric, String

from models.base import Base


def product_name_key(name: str) -> str:
    """Normalized form of a product name used for uniqueness (Unicode-aware case folding)."""
    return name.strip().casefold()


class Product(Base):
    """
    Catalog product.
    - name: display name as entered, trimmed
    - name_key: `product_name_key(name)`, unique; makes names unique ignoring case
    - price: unit price, two decimal places
    Products are created once and never updated or removed through the API.
    """
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, autoincrement=True, index=True)
    name = Column(String(100), nullable=False, index=True)
    name_key = Column(String(100), nullable=False, unique=True)
    price = Column(Numeric(18, 2), nullable=False)
