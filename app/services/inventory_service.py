# app/services/inventory_service.py
from sqlalchemy import update
from sqlmodel import Session
import logging

from app.exceptions import InsufficientStock
from app.models.order_item import OrderItem
from app.models.product import Product, ProductVariant

logger = logging.getLogger(__name__)


def reserve_stock(session: Session, product: Product, variant: ProductVariant, quantity: int):
    """
    Take ``quantity`` units off the variant inside the caller's transaction.

    The read of ``variant.stock`` only produces a friendly error early; the
    conditional UPDATE is what keeps stock from going negative when two
    checkouts race for the same variant.
    """
    if variant.stock < quantity:
        logger.warning(
            f"Stock check failed for variant {variant.id}: "
            f"available {variant.stock}, requested {quantity}"
        )
        raise InsufficientStock(product.name, variant.label, product.id, variant.id)

    result = session.execute(
        update(ProductVariant)
        .where(ProductVariant.id == variant.id)
        .where(ProductVariant.stock >= quantity)
        .values(stock=ProductVariant.stock - quantity)
    )

    if result.rowcount != 1:
        logger.warning(f"Concurrent stock change on variant {variant.id}, refusing {quantity} units")
        raise InsufficientStock(product.name, variant.label, product.id, variant.id)

    logger.info(f"Reserved {quantity} units of variant {variant.id}")


def restore_stock(session: Session, items: list[OrderItem]) -> int:
    """
    Put every item's quantity back on its variant.

    Targets the variant id recorded on the item, whatever the variant's
    current catalog state (edited or soft deleted).
    """
    restored = 0
    for item in items:
        session.execute(
            update(ProductVariant)
            .where(ProductVariant.id == item.variant_id)
            .values(stock=ProductVariant.stock + item.quantity)
        )
        restored += item.quantity
        logger.info(f"Restocked {item.quantity} units of variant {item.variant_id}")

    return restored
