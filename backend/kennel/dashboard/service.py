from __future__ import annotations

import logging
from concurrent.futures import FIRST_EXCEPTION, Future, ThreadPoolExecutor, wait
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Sequence, TypeVar

from kennel.auth.dependencies import Caller
from kennel.common.exceptions import DataAccessError
from kennel.common.time import ensure_aware, utcnow
from kennel.dashboard.schemas import Activity, ResourceCount, StatsSnapshot
from kennel.datastore.registry import COLLECTIONS
from kennel.datastore.store import DataStore, Filter, RecentRow, gte, lt

logger = logging.getLogger(__name__)

T = TypeVar("T")

RECENCY_WINDOW = timedelta(days=7)

# Facilities change rarely, so `environments` only reports a total.
RECENCY_TRACKED = ("posts", "puppies", "members")

StoreFactory = Callable[[Caller], DataStore]


def format_change(recent: int, previous: int) -> str:
    """Week-over-week delta, e.g. ``+50.0%`` or ``-12.5%``."""
    if previous == 0:
        return "+100%" if recent > 0 else "0%"
    pct = (recent - previous) / previous * 100
    if pct >= 0:
        return f"+{pct:.1f}%"
    return f"{pct:.1f}%"


def _join(futures: dict[str, Future[T]]) -> dict[str, T]:
    """Wait for every future; the first failure cancels what has not started yet."""
    done, pending = wait(futures.values(), return_when=FIRST_EXCEPTION)
    for future in pending:
        future.cancel()

    for key, future in futures.items():
        if future not in done:
            continue
        exc = future.exception()
        if exc is None:
            continue
        if isinstance(exc, DataAccessError):
            raise exc
        raise DataAccessError(f"query {key} failed") from exc

    return {key: future.result() for key, future in futures.items()}


class StatsAggregator:
    """Counts the four kennel collections for the admin dashboard.

    All count queries are independent, so they are submitted together and
    joined before assembling the snapshot. Any failure aborts the whole
    computation; no partial snapshot is ever returned.
    """

    def __init__(
        self,
        store_factory: StoreFactory,
        *,
        max_workers: int = 8,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.store_factory = store_factory
        self.max_workers = max(1, max_workers)
        self.clock = clock

    def compute_stats(self, caller: Caller) -> StatsSnapshot:
        store = self.store_factory(caller)
        now = self.clock()
        one_week_ago = now - RECENCY_WINDOW
        two_weeks_ago = now - 2 * RECENCY_WINDOW

        queries: dict[str, tuple[str, Sequence[Filter]]] = {}
        for name in COLLECTIONS:
            queries[f"total:{name}"] = (name, ())
        for name in RECENCY_TRACKED:
            queries[f"recent:{name}"] = (name, (gte("created_at", one_week_ago),))
            queries[f"previous:{name}"] = (
                name,
                (gte("created_at", two_weeks_ago), lt("created_at", one_week_ago)),
            )

        with ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="stats") as pool:
            futures = {
                key: pool.submit(store.count, collection, filters)
                for key, (collection, filters) in queries.items()
            }
            counts = _join(futures)

        entries: dict[str, ResourceCount] = {}
        for name in COLLECTIONS:
            total = counts[f"total:{name}"]
            if name in RECENCY_TRACKED:
                recent = counts[f"recent:{name}"]
                previous = counts[f"previous:{name}"]
                entries[name] = ResourceCount(total=total, recent=recent, change=format_change(recent, previous))
            else:
                entries[name] = ResourceCount(total=total, recent=0, change="0%")

        logger.info(
            "stats_computed caller=%s totals=%s",
            caller.id,
            {name: entry.total for name, entry in entries.items()},
        )
        return StatsSnapshot(**entries)


@dataclass(frozen=True)
class ActivitySource:
    collection: str
    type: str
    label_column: str
    action: str
    placeholder: str
    avatar: str


ACTIVITY_SOURCES = (
    ActivitySource("posts", "post", "title", "新增了日誌文章", "未命名文章", "📝"),
    ActivitySource("members", "member", "name", "新增了犬隻", "未命名犬隻", "👤"),
    ActivitySource("puppies", "puppy", "name", "登記了幼犬", "未命名幼犬", "🐕"),
    ActivitySource("environments", "environment", "name", "更新了環境設施", "未命名設施", "🏠"),
)


def format_relative_time(created_at: datetime, now: datetime) -> str:
    elapsed = now - ensure_aware(created_at)
    minutes = max(0, int(elapsed.total_seconds() // 60))
    if minutes < 60:
        return f"{minutes} 分鐘前"
    hours = minutes // 60
    if hours < 24:
        return f"{hours} 小時前"
    return f"{hours // 24} 天前"


class ActivityFeed:
    """Most recent additions across all collections, newest first."""

    def __init__(
        self,
        store_factory: StoreFactory,
        *,
        limit: int = 10,
        max_workers: int = 4,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.store_factory = store_factory
        self.limit = limit
        self.max_workers = max(1, max_workers)
        self.clock = clock

    def recent_activities(self, caller: Caller) -> list[Activity]:
        store = self.store_factory(caller)
        with ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="activity") as pool:
            futures = {
                source.collection: pool.submit(store.recent, source.collection, source.label_column, self.limit)
                for source in ACTIVITY_SOURCES
            }
            rows_by_collection: dict[str, list[RecentRow]] = _join(futures)

        now = self.clock()
        timeline: list[tuple[datetime, Activity]] = []
        for source in ACTIVITY_SOURCES:
            for row in rows_by_collection[source.collection]:
                created_at = ensure_aware(row.created_at)
                activity = Activity(
                    id=f"{source.type}-{row.id}",
                    type=source.type,
                    action=source.action,
                    target=row.label or source.placeholder,
                    time=format_relative_time(created_at, now),
                    avatar=source.avatar,
                )
                timeline.append((created_at, activity))

        # Sort on the real timestamp; the relative label is lossy.
        timeline.sort(key=lambda item: item[0], reverse=True)
        return [activity for _, activity in timeline[: self.limit]]
