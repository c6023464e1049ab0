import math

from sqlalchemy.orm import Session

from credit_pricing import config
from credit_pricing.services.row_repository import count_rows, find_rows


def _clamp(value: int | None, default: int, upper: int | None = None) -> int:
    if value is None:
        value = default
    value = max(1, int(value))
    if upper is not None:
        value = min(value, upper)
    return value


def get_page(
    db: Session,
    page: int | None = 1,
    limit: int | None = 10,
    max_limit: int | None = None,
) -> dict:
    """
    Return one page of rows in insertion order.

    Count and slice are separate reads, so an upload landing in between can
    make totalPages and data disagree.
    """
    page = _clamp(page, 1)
    limit = _clamp(limit, 10, max_limit or config.MAX_PAGE_LIMIT)

    total = count_rows(db)
    skip = (page - 1) * limit
    # past the end; also keeps huge offsets away from the driver
    rows = find_rows(db, skip=skip, limit=limit) if skip < total else []

    return {
        "data": [row.to_dict() for row in rows],
        "totalPages": math.ceil(total / limit),
        "page": page,
        "limit": limit,
        "total": total,
    }
