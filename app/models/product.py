from typing import List, Optional

from sqlalchemy import CheckConstraint
from sqlmodel import Field, Relationship

from app.models.base import TimestampedBase


class Product(TimestampedBase, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    slug: str = Field(index=True, unique=True)
    sku: Optional[str] = Field(default=None, unique=True)
    description: Optional[str] = None

    price: float
    discounted_price: Optional[float] = None

    variants: List["ProductVariant"] = Relationship(back_populates="product")


class ProductVariant(TimestampedBase, table=True):
    __tablename__ = "product_variant"
    __table_args__ = (CheckConstraint("stock >= 0", name="ck_product_variant_stock_non_negative"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    product_id: int = Field(foreign_key="product.id", index=True)
    sku: Optional[str] = Field(default=None, unique=True)
    size: Optional[str] = None
    color: Optional[str] = None

    price: float
    discounted_price: Optional[float] = None
    stock: int = Field(default=0, ge=0)

    product: Optional[Product] = Relationship(back_populates="variants")

    @property
    def unit_price(self) -> float:
        """Price charged per unit right now: the discounted price wins when set."""
        if self.discounted_price is not None:
            return self.discounted_price
        return self.price

    @property
    def label(self) -> str:
        return self.size or self.color or "variant"
