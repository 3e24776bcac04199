from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterator, Literal, Protocol, Sequence

from sqlalchemy import func, select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from kennel.auth.dependencies import Caller
from kennel.common.exceptions import DataAccessError
from kennel.datastore.registry import resolve_collection

logger = logging.getLogger(__name__)

FilterOp = Literal["eq", "gte", "lt"]


@dataclass(frozen=True)
class Filter:
    column: str
    op: FilterOp
    value: Any


def eq(column: str, value: Any) -> Filter:
    return Filter(column, "eq", value)


def gte(column: str, value: Any) -> Filter:
    return Filter(column, "gte", value)


def lt(column: str, value: Any) -> Filter:
    return Filter(column, "lt", value)


@dataclass(frozen=True)
class RecentRow:
    id: Any
    label: str | None
    created_at: Any


class DataStore(Protocol):
    def count(self, collection: str, filters: Sequence[Filter] = ()) -> int:
        ...

    def recent(self, collection: str, label_column: str, limit: int) -> list[RecentRow]:
        ...


class SqlDataStore:
    """Read access to the kennel collections, scoped to one caller.

    Every call opens its own short-lived session, so a single store can be
    shared by worker threads issuing counts concurrently.
    """

    def __init__(self, session_factory: sessionmaker, caller: Caller | None = None):
        self.session_factory = session_factory
        self.caller = caller

    def count(self, collection: str, filters: Sequence[Filter] = ()) -> int:
        model = resolve_collection(collection)
        stmt = select(func.count()).select_from(model)
        for item in filters:
            stmt = stmt.where(self._clause(model, item))

        try:
            with self._session() as session:
                return int(session.execute(stmt).scalar_one() or 0)
        except SQLAlchemyError as exc:
            logger.error("count_failed collection=%s filters=%s error=%s", collection, list(filters), exc)
            raise DataAccessError(f"count failed for collection {collection}") from exc

    def recent(self, collection: str, label_column: str, limit: int) -> list[RecentRow]:
        model = resolve_collection(collection)
        label = self._column(model, label_column)
        stmt = (
            select(model.id, label, model.created_at)
            .order_by(model.created_at.desc())
            .limit(limit)
        )
        try:
            with self._session() as session:
                rows = session.execute(stmt).all()
        except SQLAlchemyError as exc:
            logger.error("recent_failed collection=%s error=%s", collection, exc)
            raise DataAccessError(f"recent query failed for collection {collection}") from exc
        return [RecentRow(id=row[0], label=row[1], created_at=row[2]) for row in rows]

    @contextmanager
    def _session(self) -> Iterator[Session]:
        session = self.session_factory()
        try:
            self._apply_caller_scope(session)
            yield session
        finally:
            session.close()

    def _apply_caller_scope(self, session: Session) -> None:
        """Forward the caller's identity so row-level policies see the same user."""
        if self.caller is None:
            return
        if session.get_bind().dialect.name != "postgresql":
            return
        session.execute(
            text(
                "SELECT set_config('request.jwt.claim.sub', :sub, true), "
                "set_config('request.jwt.claim.role', :role, true)"
            ),
            {"sub": self.caller.id, "role": self.caller.user.role or "authenticated"},
        )

    @staticmethod
    def _column(model: Any, name: str) -> Any:
        column = getattr(model, name, None)
        if column is None or not hasattr(column, "property"):
            raise ValueError(f"Unknown column {name!r} on {model.__tablename__}")
        return column

    def _clause(self, model: Any, item: Filter) -> Any:
        column = self._column(model, item.column)
        if item.op == "eq":
            return column == item.value
        if item.op == "gte":
            return column >= item.value
        if item.op == "lt":
            return column < item.value
        raise ValueError(f"Unsupported filter operator: {item.op}")
