from sqlmodel import SQLModel, Field , Relationship
from typing import Optional , TYPE_CHECKING
from datetime import datetime

from app.models.product import Product, ProductVariant

if TYPE_CHECKING:
    from app.models.order import Order

class OrderItem(SQLModel, table=True):
    __tablename__ = "order_item"

    id: Optional[int] = Field(default=None, primary_key=True)
    order_id: int = Field(foreign_key="order.id", index=True)
    product_id: int = Field(foreign_key="product.id")
    variant_id: int = Field(foreign_key="product_variant.id")

    quantity: int = Field(gt=0)
    # unit price snapshot taken at checkout; never recomputed
    price: float

    created_at: datetime = Field(default_factory=datetime.utcnow)

    order: Optional["Order"] = Relationship(back_populates="items")
    product: Optional[Product] = Relationship()
    variant: Optional[ProductVariant] = Relationship()

    @property
    def line_total(self) -> float:
        return self.price * self.quantity
