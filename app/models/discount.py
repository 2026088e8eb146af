from datetime import datetime
from enum import Enum
from typing import Optional

from sqlmodel import Field

from app.models.base import TimestampedBase


class DiscountType(str, Enum):
    PERCENTAGE = "PERCENTAGE"
    FIXED = "FIXED"


class Discount(TimestampedBase, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    code: str = Field(index=True, unique=True)
    description: Optional[str] = None

    type: DiscountType
    value: float
    min_order_amount: Optional[float] = None
    max_discount_amount: Optional[float] = None

    valid_from: Optional[datetime] = None
    valid_to: Optional[datetime] = None

    usage_limit: Optional[int] = None
    used_count: int = Field(default=0)

    is_active: bool = Field(default=True)
