from __future__ import annotations

from typing import Any, Iterable

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from kennel.common.exceptions import ApiException
from kennel.common.params import PageParams


def paginate(
    db: Session,
    model: Any,
    params: PageParams,
    *,
    sortable: Iterable[str],
    filters: Iterable[Any] = (),
) -> tuple[list[Any], int]:
    """Return one page of `model` rows plus the unpaged total."""
    if params.sort not in set(sortable):
        raise ApiException(
            status_code=400,
            code="INVALID_SORT",
            message=f"無效的排序欄位: {params.sort}",
        )

    clauses = list(filters)
    total_stmt = select(func.count()).select_from(model)
    stmt = select(model)
    for clause in clauses:
        total_stmt = total_stmt.where(clause)
        stmt = stmt.where(clause)

    column = getattr(model, params.sort)
    stmt = stmt.order_by(column.asc() if params.order == "asc" else column.desc())
    stmt = stmt.offset(params.offset).limit(params.limit)

    total = int(db.execute(total_stmt).scalar_one() or 0)
    items = list(db.execute(stmt).scalars().all())
    return items, total
