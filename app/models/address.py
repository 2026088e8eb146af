from typing import Optional

from sqlmodel import Field

from app.models.base import TimestampedBase


class Address(TimestampedBase, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", index=True)
    name: str
    phone: str
    address: str
    city: str
    state: str
    country: str
    zip_code: str
    is_default: bool = Field(default=False)
