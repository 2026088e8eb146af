from datetime import datetime
from typing import Optional, TYPE_CHECKING

from sqlmodel import SQLModel, Field, Relationship

from app.constants.order_status import OrderStatus

if TYPE_CHECKING:
    from app.models.order import Order


class OrderStatusHistory(SQLModel, table=True):
    """Append-only: one row per status transition, never updated or deleted."""

    __tablename__ = "order_status_history"
    id: Optional[int] = Field(default=None, primary_key=True)

    order_id: int = Field(foreign_key="order.id", index=True)
    status: OrderStatus
    note: Optional[str] = None

    created_at: datetime = Field(default_factory=datetime.utcnow)

    order: Optional["Order"] = Relationship(back_populates="status_history")
