# app/services/order_history_service.py

from datetime import datetime
from typing import Optional
from sqlmodel import Session

from app.constants.order_status import OrderStatus
from app.models.order_status_history import OrderStatusHistory


def log_status_change(
    session: Session,
    order_id: int,
    status: OrderStatus,
    note: Optional[str] = None,
) -> OrderStatusHistory:
    """
    Append-only status history for the order timeline
    """

    entry = OrderStatusHistory(
        order_id=order_id,
        status=status,
        note=note,
        created_at=datetime.utcnow(),
    )

    session.add(entry)
    return entry
