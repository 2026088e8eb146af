from sqlalchemy import func
from sqlmodel import select

from app.config import settings


def clamp_page(page: int | None) -> int:
    if page is None or page < 1:
        return 1
    return page


def clamp_limit(limit: int | None) -> int:
    if limit is None:
        return settings.default_page_limit
    return min(settings.max_page_limit, max(1, limit))


def paginate(
    *,
    session,
    query,
    page: int = 1,
    limit: int = 20,
    options=(),
):
    page = clamp_page(page)
    limit = clamp_limit(limit)

    offset = (page - 1) * limit

    total = session.exec(
        select(func.count()).select_from(query.order_by(None).subquery())
    ).one()

    results = session.exec(
        query.options(*options).offset(offset).limit(limit)
    ).all()

    return {
        "data": results,
        "meta": {
            "page": page,
            "limit": limit,
            "total": total,
            "total_pages": (total + limit - 1) // limit,
        },
    }
