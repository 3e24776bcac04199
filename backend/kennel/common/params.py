from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from fastapi import Query

MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class PageParams:
    page: int
    limit: int
    sort: str
    order: Literal["asc", "desc"]

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def pagination(self, total: int) -> dict:
        return {
            "page": self.page,
            "limit": self.limit,
            "total": total,
            "totalPages": (total + self.limit - 1) // self.limit,
        }


def page_params(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1),
    sort: str = Query(default="created_at"),
    order: Literal["asc", "desc"] = Query(default="desc"),
) -> PageParams:
    # Oversized pages are clamped rather than rejected.
    return PageParams(page=page, limit=min(limit, MAX_PAGE_SIZE), sort=sort, order=order)


def parse_bool(value: str | None) -> bool | None:
    if value is None:
        return None
    raw = value.strip().lower()
    if raw in {"true", "1", "yes"}:
        return True
    if raw in {"false", "0", "no"}:
        return False
    return None
