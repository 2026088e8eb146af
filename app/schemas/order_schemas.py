from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from app.constants.order_status import OrderStatus
from app.models.discount import DiscountType


class OrderSort(str, Enum):
    created_at_asc = "created_at:asc"
    created_at_desc = "created_at:desc"
    total_amount_asc = "total_amount:asc"
    total_amount_desc = "total_amount:desc"
    status_asc = "status:asc"
    status_desc = "status:desc"


# ---------- requests ----------

class OrderItemCreate(BaseModel):
    product_id: int = Field(gt=0)
    variant_id: int = Field(gt=0)
    quantity: int


class OrderCreate(BaseModel):
    items: List[OrderItemCreate]
    address_id: int = Field(gt=0)
    email: EmailStr
    phone: str = Field(min_length=1)
    discount_id: Optional[int] = Field(default=None, gt=0)


class OrderStatusUpdate(BaseModel):
    status: OrderStatus
    note: Optional[str] = None


# ---------- responses ----------

class ReadModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class ProductSummary(ReadModel):
    id: int
    name: str
    slug: str


class VariantSummary(ReadModel):
    id: int
    sku: Optional[str] = None
    size: Optional[str] = None
    color: Optional[str] = None


class OrderItemRead(ReadModel):
    id: int
    product_id: int
    variant_id: int
    quantity: int
    price: float
    line_total: float
    product: Optional[ProductSummary] = None
    variant: Optional[VariantSummary] = None


class AddressRead(ReadModel):
    id: int
    name: str
    phone: str
    address: str
    city: str
    state: str
    country: str
    zip_code: str


class DiscountRead(ReadModel):
    id: int
    code: str
    type: DiscountType
    value: float
    min_order_amount: Optional[float] = None
    max_discount_amount: Optional[float] = None
    valid_from: Optional[datetime] = None
    valid_to: Optional[datetime] = None


class UserSummary(ReadModel):
    id: int
    name: Optional[str] = None
    email: str


class OrderStatusHistoryRead(ReadModel):
    id: int
    status: OrderStatus
    note: Optional[str] = None
    created_at: datetime


class OrderRead(ReadModel):
    id: int
    user_id: int
    total_amount: float
    address_id: int
    email: str
    phone: str
    status: OrderStatus
    discount_id: Optional[int] = None
    created_at: datetime
    updated_at: datetime
    items: List[OrderItemRead] = []
    address: Optional[AddressRead] = None
    discount: Optional[DiscountRead] = None
    user: Optional[UserSummary] = None


class OrderDetail(OrderRead):
    status_history: List[OrderStatusHistoryRead] = []


class PageMeta(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int
