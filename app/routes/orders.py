from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from app.constants.order_status import OrderStatus
from app.database import get_session
from app.dependencies.admin import require_admin
from app.exceptions import OrderNotFound
from app.models.user import User
from app.schemas.order_schemas import (
    OrderCreate,
    OrderDetail,
    OrderRead,
    OrderSort,
    OrderStatusUpdate,
    PageMeta,
)
from app.services import order_service
from app.utils.token import get_current_user

router = APIRouter()


def _page(result: dict, message: str) -> dict:
    return {
        "message": message,
        "data": [OrderRead.model_validate(o) for o in result["data"]],
        "meta": PageMeta(**result["meta"]),
    }


@router.post("", status_code=status.HTTP_201_CREATED)
def create_order(
    data: OrderCreate,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user)
):
    order = order_service.create_order(session, current_user.id, data)

    return {
        "message": "Order created successfully",
        "data": OrderDetail.model_validate(order),
    }


@router.get("/my")
def list_my_orders(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    sort: OrderSort = OrderSort.created_at_desc,
    status: Optional[OrderStatus] = None,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user)
):
    result = order_service.list_user_orders(
        session, current_user.id, page=page, limit=limit, sort=sort, status=status
    )
    return _page(result, "Orders retrieved successfully")


@router.get("")
def list_all_orders(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    sort: OrderSort = OrderSort.created_at_desc,
    status: Optional[OrderStatus] = None,
    user_id: Optional[int] = Query(None, gt=0),
    session: Session = Depends(get_session),
    _: User = Depends(require_admin)
):
    result = order_service.list_all_orders(
        session, page=page, limit=limit, sort=sort, status=status, user_id=user_id
    )
    return _page(result, "Orders retrieved successfully")


@router.get("/{order_id}")
def get_order(
    order_id: int,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user)
):
    order = order_service.get_order(session, order_id, current_user)

    # someone else's order looks exactly like a missing one
    if not order:
        raise OrderNotFound(order_id)

    return {
        "message": "Order retrieved successfully",
        "data": OrderDetail.model_validate(order),
    }


@router.put("/{order_id}/status")
def update_order_status(
    order_id: int,
    data: OrderStatusUpdate,
    session: Session = Depends(get_session),
    _: User = Depends(require_admin)
):
    order = order_service.update_order_status(session, order_id, data.status, data.note)

    return {
        "message": "Order status updated successfully",
        "data": OrderDetail.model_validate(order),
    }


@router.put("/{order_id}/cancel")
def cancel_order(
    order_id: int,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user)
):
    order = order_service.cancel_order(session, order_id, current_user)

    return {
        "message": "Order cancelled successfully",
        "data": OrderDetail.model_validate(order),
    }


@router.delete("/{order_id}")
def delete_order(
    order_id: int,
    session: Session = Depends(get_session),
    _: User = Depends(require_admin)
):
    order_service.delete_order(session, order_id)

    return {"message": "Order deleted successfully", "data": None}
