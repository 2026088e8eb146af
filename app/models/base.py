# app/models/base.py
from datetime import datetime
from typing import Optional

from sqlmodel import SQLModel, Field


class SoftDeleteBase(SQLModel):
    """Common columns for tables that are soft deleted instead of removed."""

    is_deleted: bool = Field(default=False, index=True)
    deleted_at: Optional[datetime] = Field(default=None)


class TimestampedBase(SoftDeleteBase):
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
