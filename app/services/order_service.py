# app/services/order_service.py
"""
Order workflow: checkout, listing, status changes, cancellation and soft delete.

Every function takes the SQLModel session it works in. Writes happen in one
transaction per call: the function commits on success and rolls back on any
error, so a failed checkout never leaves a partial stock decrement behind.
"""
from datetime import datetime
from typing import Optional
import logging

from sqlalchemy import update
from sqlalchemy.orm import selectinload
from sqlmodel import Session, col, select

from app.config import settings
from app.constants.order_status import (
    ALLOWED_TRANSITIONS,
    NON_CANCELLABLE_STATUSES,
    OrderStatus,
)
from app.exceptions import (
    AddressNotFound,
    AlreadyCancelled,
    CannotCancelCompleted,
    EmptyOrder,
    InvalidQuantity,
    InvalidStatusTransition,
    OrderNotFound,
    OrderServiceError,
    ProductNotFound,
    VariantNotFound,
)
from app.models import Address, Order, OrderItem, Product, ProductVariant, User
from app.schemas.order_schemas import OrderCreate, OrderSort
from app.services.discount_service import (
    calculate_discount_amount,
    consume_discount,
    get_valid_discount,
)
from app.services.inventory_service import reserve_stock, restore_stock
from app.services.order_history_service import log_status_change
from app.utils.pagination import paginate
from app.utils.soft_delete import mark_deleted, not_deleted

logger = logging.getLogger(__name__)

SORT_COLUMNS = {
    "created_at": Order.created_at,
    "total_amount": Order.total_amount,
    "status": Order.status,
}

# eager loads for list and detail responses
ORDER_LOAD_OPTIONS = (
    selectinload(Order.items).selectinload(OrderItem.product),
    selectinload(Order.items).selectinload(OrderItem.variant),
    selectinload(Order.address),
    selectinload(Order.discount),
    selectinload(Order.user),
)


def _is_admin(caller: User) -> bool:
    return caller.is_admin


def _order_query(order_id: int, caller: Optional[User] = None):
    query = select(Order).where(Order.id == order_id, not_deleted(Order))
    # non-admins only ever see their own orders
    if caller is not None and not _is_admin(caller):
        query = query.where(Order.user_id == caller.id)
    return query


def _apply_sort(query, sort: OrderSort | str):
    field, _, direction = OrderSort(sort).value.partition(":")
    column = SORT_COLUMNS[field]
    return query.order_by(column.asc() if direction == "asc" else column.desc(), Order.id.desc())


def _load_order(session: Session, order_id: int) -> Order:
    return session.exec(
        select(Order)
        .where(Order.id == order_id)
        .options(*ORDER_LOAD_OPTIONS, selectinload(Order.status_history))
        .execution_options(populate_existing=True)
    ).one()


# ---------- checkout ----------

def create_order(session: Session, user_id: int, data: OrderCreate) -> Order:
    if not data.items:
        raise EmptyOrder()

    for item in data.items:
        if item.quantity <= 0:
            raise InvalidQuantity(item.variant_id, item.quantity)

    address = session.exec(
        select(Address).where(
            Address.id == data.address_id,
            Address.user_id == user_id,
            not_deleted(Address),
        )
    ).first()

    if not address:
        raise AddressNotFound(data.address_id)

    discount = None
    if data.discount_id:
        discount = get_valid_discount(session, data.discount_id)

    try:
        subtotal = 0.0
        order_items = []

        # check-then-decrement per item, in request order
        for item in data.items:
            product = session.exec(
                select(Product).where(Product.id == item.product_id, not_deleted(Product))
            ).first()
            if not product:
                raise ProductNotFound(item.product_id)

            variant = session.exec(
                select(ProductVariant).where(
                    ProductVariant.id == item.variant_id,
                    ProductVariant.product_id == item.product_id,
                    not_deleted(ProductVariant),
                )
            ).first()
            if not variant:
                raise VariantNotFound(item.variant_id)

            unit_price = variant.unit_price
            reserve_stock(session, product, variant, item.quantity)

            subtotal += unit_price * item.quantity
            order_items.append(
                OrderItem(
                    product_id=item.product_id,
                    variant_id=item.variant_id,
                    quantity=item.quantity,
                    price=unit_price,
                )
            )

        discount_amount = 0.0
        if discount:
            discount_amount = calculate_discount_amount(discount, subtotal)
            consume_discount(session, discount)

        total_amount = round(max(0.0, subtotal - discount_amount), 2)

        order = Order(
            user_id=user_id,
            address_id=address.id,
            email=data.email,
            phone=data.phone,
            total_amount=total_amount,
            status=OrderStatus.PENDING,
            discount_id=discount.id if discount else None,
            items=order_items,
        )
        session.add(order)
        session.flush()  # assign id

        log_status_change(session, order.id, OrderStatus.PENDING, "Order created")

        session.commit()
    except OrderServiceError:
        session.rollback()
        logger.warning(f"Checkout refused for user {user_id}, transaction rolled back")
        raise
    except Exception:
        session.rollback()
        logger.error(f"Checkout failed for user {user_id}, transaction rolled back")
        raise

    logger.info(
        f"Order {order.id} created for user {user_id}: "
        f"subtotal {subtotal}, discount {discount_amount}, total {total_amount}"
    )
    return _load_order(session, order.id)


# ---------- reads ----------

def list_user_orders(
    session: Session,
    user_id: int,
    page: int = 1,
    limit: Optional[int] = None,
    sort: OrderSort | str = OrderSort.created_at_desc,
    status: Optional[OrderStatus] = None,
):
    query = select(Order).where(Order.user_id == user_id, not_deleted(Order))

    if status:
        query = query.where(Order.status == status)

    query = _apply_sort(query, sort)
    return paginate(
        session=session, query=query, page=page, limit=limit, options=ORDER_LOAD_OPTIONS
    )


def list_all_orders(
    session: Session,
    page: int = 1,
    limit: Optional[int] = None,
    sort: OrderSort | str = OrderSort.created_at_desc,
    status: Optional[OrderStatus] = None,
    user_id: Optional[int] = None,
):
    query = select(Order).where(not_deleted(Order))

    if status:
        query = query.where(Order.status == status)

    if user_id:
        query = query.where(Order.user_id == user_id)

    query = _apply_sort(query, sort)
    return paginate(
        session=session, query=query, page=page, limit=limit, options=ORDER_LOAD_OPTIONS
    )


def get_order(session: Session, order_id: int, caller: User) -> Optional[Order]:
    """Order detail, or None when it is missing, deleted or not the caller's."""
    return session.exec(
        _order_query(order_id, caller).options(
            *ORDER_LOAD_OPTIONS, selectinload(Order.status_history)
        )
    ).first()


# ---------- transitions ----------

def _swap_status(session: Session, order_id: int, guard, status: OrderStatus) -> bool:
    """Set the status only while ``guard`` still holds; False when another request got there first."""
    result = session.execute(
        update(Order)
        .where(Order.id == order_id)
        .where(guard)
        .values(status=status, updated_at=datetime.utcnow())
    )
    return result.rowcount == 1


def update_order_status(
    session: Session,
    order_id: int,
    status: OrderStatus,
    note: Optional[str] = None,
) -> Order:
    """
    Admin status change. Any transition is allowed unless
    ``settings.enforce_status_transitions`` is on.

    Every order that is not CANCELLED holds its items' stock, so moving into
    CANCELLED restocks the items and moving out of it reserves them again.
    """
    order = session.exec(
        _order_query(order_id)
        .options(
            selectinload(Order.items).selectinload(OrderItem.product),
            selectinload(Order.items).selectinload(OrderItem.variant),
        )
        .execution_options(populate_existing=True)
    ).first()
    if not order:
        raise OrderNotFound(order_id)

    status = OrderStatus(status)
    previous = order.status

    if settings.enforce_status_transitions and status != previous:
        if status not in ALLOWED_TRANSITIONS[previous]:
            logger.warning(f"Refused status change on order {order_id}: {previous.value} -> {status.value}")
            raise InvalidStatusTransition(previous.value, status.value)

    try:
        if status == OrderStatus.CANCELLED and previous != OrderStatus.CANCELLED:
            if not _swap_status(session, order_id, col(Order.status) != OrderStatus.CANCELLED, status):
                raise AlreadyCancelled()
            restore_stock(session, order.items)

        elif previous == OrderStatus.CANCELLED and status != OrderStatus.CANCELLED:
            if not _swap_status(session, order_id, col(Order.status) == OrderStatus.CANCELLED, status):
                raise InvalidStatusTransition(previous.value, status.value)
            for item in order.items:
                reserve_stock(session, item.product, item.variant, item.quantity)

        else:
            order.status = status
            order.updated_at = datetime.utcnow()
            session.add(order)

        log_status_change(session, order.id, status, note or f"Status changed to {status.value}")

        session.commit()
    except OrderServiceError:
        session.rollback()
        logger.warning(f"Status change on order {order_id} refused, transaction rolled back")
        raise
    except Exception:
        session.rollback()
        logger.error(f"Status update failed for order {order_id}, transaction rolled back")
        raise

    logger.info(f"Order {order_id} status {previous.value} -> {status.value}")
    return _load_order(session, order_id)


def cancel_order(session: Session, order_id: int, caller: User) -> Order:
    order = session.exec(
        _order_query(order_id, caller).options(selectinload(Order.items))
    ).first()

    if not order:
        raise OrderNotFound(order_id)

    if order.status == OrderStatus.COMPLETED:
        raise CannotCancelCompleted()

    if order.status == OrderStatus.CANCELLED:
        raise AlreadyCancelled()

    items = list(order.items)

    try:
        # flipping the status first guards the restock: only one caller can win
        swapped = _swap_status(
            session,
            order_id,
            col(Order.status).notin_(NON_CANCELLABLE_STATUSES),
            OrderStatus.CANCELLED,
        )

        if not swapped:
            session.rollback()
            current = session.exec(select(Order.status).where(Order.id == order_id)).one()
            logger.warning(f"Order {order_id} changed to {current.value} before it could be cancelled")
            if current == OrderStatus.COMPLETED:
                raise CannotCancelCompleted()
            raise AlreadyCancelled()

        restored = restore_stock(session, items)
        log_status_change(session, order_id, OrderStatus.CANCELLED, "Order cancelled")

        session.commit()
    except OrderServiceError:
        raise
    except Exception:
        session.rollback()
        logger.error(f"Cancellation failed for order {order_id}, transaction rolled back")
        raise

    logger.info(f"Order {order_id} cancelled by user {caller.id}, {restored} units restocked")
    return _load_order(session, order_id)


def delete_order(session: Session, order_id: int) -> None:
    order = session.exec(_order_query(order_id)).first()
    if not order:
        raise OrderNotFound(order_id)

    mark_deleted(session, order)
    session.commit()

    logger.info(f"Order {order_id} soft deleted")
