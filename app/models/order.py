from sqlmodel import Field, Relationship
from typing import List, Optional, TYPE_CHECKING
from datetime import datetime

from app.constants.order_status import OrderStatus
from app.models.base import SoftDeleteBase
from app.models.address import Address
from app.models.discount import Discount
from app.models.user import User

if TYPE_CHECKING:
    from app.models.order_item import OrderItem
    from app.models.order_status_history import OrderStatusHistory

class Order(SoftDeleteBase, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", index=True)
    address_id: int = Field(foreign_key="address.id")

    # contact details captured at checkout, independent of the user profile
    email: str
    phone: str

    total_amount: float = Field(ge=0)
    status: OrderStatus = Field(default=OrderStatus.PENDING, index=True)

    # set once at checkout, never changed afterwards
    discount_id: Optional[int] = Field(default=None, foreign_key="discount.id")

    created_at: datetime = Field(default_factory=datetime.utcnow, index=True)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    # relationships
    user: Optional[User] = Relationship()
    address: Optional[Address] = Relationship()
    discount: Optional[Discount] = Relationship()
    items: List["OrderItem"] = Relationship(back_populates="order")
    status_history: List["OrderStatusHistory"] = Relationship(
        back_populates="order",
        sa_relationship_kwargs={"order_by": "OrderStatusHistory.id.desc()"},
    )
