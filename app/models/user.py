from enum import Enum
from typing import Optional

from sqlmodel import Field

from app.models.base import TimestampedBase


class Role(str, Enum):
    USER = "USER"
    ADMIN = "ADMIN"


class User(TimestampedBase, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: Optional[str] = None
    email: str = Field(index=True, unique=True)
    password: str
    role: Role = Field(default=Role.USER)

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
