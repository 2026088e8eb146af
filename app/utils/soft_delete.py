from datetime import datetime

from sqlmodel import Session, col


def not_deleted(model):
    """WHERE clause fragment that hides soft-deleted rows of ``model``."""
    return col(model.is_deleted).is_(False)


def mark_deleted(session: Session, obj) -> None:
    obj.is_deleted = True
    obj.deleted_at = datetime.utcnow()
    if hasattr(obj, "updated_at"):
        obj.updated_at = obj.deleted_at
    session.add(obj)
