from datetime import datetime
from typing import Optional
import logging

from sqlalchemy import func, or_, update
from sqlmodel import Session, col, select

from app.exceptions import (
    DiscountExpired,
    DiscountInvalid,
    DiscountMinimumNotMet,
    DiscountNotYetValid,
    DiscountUsageLimitReached,
)
from app.models.discount import Discount, DiscountType
from app.utils.soft_delete import not_deleted

logger = logging.getLogger(__name__)


def _check_window(discount: Discount, now: datetime) -> None:
    if discount.valid_from and now < discount.valid_from:
        raise DiscountNotYetValid()
    if discount.valid_to and now > discount.valid_to:
        raise DiscountExpired()


def _check_usage(discount: Discount) -> None:
    if discount.usage_limit is not None and discount.used_count >= discount.usage_limit:
        raise DiscountUsageLimitReached()


def get_valid_discount(session: Session, discount_id: int, now: Optional[datetime] = None) -> Discount:
    """Load a discount for checkout, raising when it cannot be applied right now."""
    discount = session.exec(
        select(Discount).where(
            Discount.id == discount_id,
            col(Discount.is_active).is_(True),
            not_deleted(Discount),
        )
    ).first()

    if not discount:
        raise DiscountInvalid()

    _check_window(discount, now or datetime.utcnow())
    _check_usage(discount)
    return discount


def validate_discount_code(session: Session, code: str, now: Optional[datetime] = None) -> Discount:
    discount = session.exec(
        select(Discount).where(
            func.upper(Discount.code) == code.upper(),
            col(Discount.is_active).is_(True),
            not_deleted(Discount),
        )
    ).first()

    if not discount:
        raise DiscountInvalid("Invalid discount code")

    _check_window(discount, now or datetime.utcnow())
    _check_usage(discount)
    return discount


def calculate_discount_amount(discount: Discount, subtotal: float) -> float:
    """
    PERCENTAGE takes value% of the subtotal, FIXED takes value but never more
    than the subtotal; either is then capped by max_discount_amount.
    """
    if discount.min_order_amount is not None and subtotal < discount.min_order_amount:
        raise DiscountMinimumNotMet(discount.min_order_amount)

    if discount.type == DiscountType.PERCENTAGE:
        amount = subtotal * discount.value / 100
    else:
        amount = min(discount.value, subtotal)

    if discount.max_discount_amount is not None and amount > discount.max_discount_amount:
        amount = discount.max_discount_amount

    return round(amount, 2)


def consume_discount(session: Session, discount: Discount) -> None:
    """Count one use of the discount, refusing atomically once the limit is hit."""
    result = session.execute(
        update(Discount)
        .where(Discount.id == discount.id)
        .where(
            or_(
                Discount.usage_limit.is_(None),
                Discount.used_count < Discount.usage_limit,
            )
        )
        .values(used_count=Discount.used_count + 1)
    )

    if result.rowcount != 1:
        logger.warning(f"Discount {discount.id} hit its usage limit during checkout")
        raise DiscountUsageLimitReached()
