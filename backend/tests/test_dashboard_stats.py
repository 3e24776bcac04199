from __future__ import annotations

import threading
import unittest
from datetime import datetime, timedelta, timezone

from tests._auth import make_caller
from tests._bootstrap import bootstrap_backend_imports, reset_caches
from tests._db import make_session_factory


bootstrap_backend_imports()
reset_caches()

from kennel.common.exceptions import DataAccessError  # noqa: E402
from kennel.dashboard.service import StatsAggregator, format_change  # noqa: E402
from kennel.datastore.store import SqlDataStore  # noqa: E402

NOW = datetime(2026, 3, 15, 12, 0, tzinfo=timezone.utc)


class FakeStore:
    """Answers totals, recent and previous counts by the number of filters."""

    def __init__(self, totals=None, recent=None, previous=None, fail_on=None):
        self.totals = totals or {}
        self.recent_counts = recent or {}
        self.previous = previous or {}
        self.fail_on = fail_on
        self.calls: list[tuple[str, tuple]] = []
        self._lock = threading.Lock()

    def count(self, collection, filters=()):
        with self._lock:
            self.calls.append((collection, tuple(filters)))
        if self.fail_on == (collection, len(filters)):
            raise DataAccessError(f"count failed for collection {collection}")
        if not filters:
            return self.totals.get(collection, 0)
        if len(filters) == 1:
            return self.recent_counts.get(collection, 0)
        return self.previous.get(collection, 0)

    def recent(self, collection, label_column, limit):  # noqa: ARG002
        return []


class FormatChangeTests(unittest.TestCase):
    def test_no_activity_in_either_week(self) -> None:
        self.assertEqual(format_change(0, 0), "0%")

    def test_growth_from_empty_week(self) -> None:
        self.assertEqual(format_change(5, 0), "+100%")

    def test_positive_change_has_one_decimal(self) -> None:
        self.assertEqual(format_change(15, 10), "+50.0%")
        self.assertEqual(format_change(4, 3), "+33.3%")

    def test_negative_change(self) -> None:
        self.assertEqual(format_change(5, 10), "-50.0%")
        self.assertEqual(format_change(0, 4), "-100.0%")

    def test_unchanged_week_is_signed(self) -> None:
        self.assertEqual(format_change(7, 7), "+0.0%")


class StatsAggregatorTests(unittest.TestCase):
    def _aggregate(self, store: FakeStore):
        aggregator = StatsAggregator(lambda caller: store, max_workers=4, clock=lambda: NOW)
        return aggregator.compute_stats(make_caller())

    def test_assembles_all_four_entries(self) -> None:
        store = FakeStore(
            totals={"posts": 12, "members": 8, "puppies": 20, "environments": 5},
            recent={"posts": 3, "members": 0, "puppies": 6},
            previous={"posts": 2, "members": 0, "puppies": 12},
        )
        snapshot = self._aggregate(store)

        self.assertEqual(snapshot.posts.model_dump(), {"total": 12, "recent": 3, "change": "+50.0%"})
        self.assertEqual(snapshot.members.model_dump(), {"total": 8, "recent": 0, "change": "0%"})
        self.assertEqual(snapshot.puppies.model_dump(), {"total": 20, "recent": 6, "change": "-50.0%"})
        self.assertEqual(snapshot.environments.model_dump(), {"total": 5, "recent": 0, "change": "0%"})

    def test_environments_never_query_recency(self) -> None:
        store = FakeStore(totals={"environments": 3}, recent={"environments": 99})
        snapshot = self._aggregate(store)

        env_calls = [filters for collection, filters in store.calls if collection == "environments"]
        self.assertEqual(env_calls, [()])
        self.assertEqual(snapshot.environments.recent, 0)
        self.assertEqual(snapshot.environments.change, "0%")

    def test_issues_ten_counts_with_week_boundaries(self) -> None:
        store = FakeStore()
        self._aggregate(store)

        self.assertEqual(len(store.calls), 10)
        one_week_ago = NOW - timedelta(days=7)
        two_weeks_ago = NOW - timedelta(days=14)
        post_filters = sorted(
            (filters for collection, filters in store.calls if collection == "posts"),
            key=len,
        )
        self.assertEqual(post_filters[0], ())
        (recent,) = post_filters[1]
        self.assertEqual((recent.column, recent.op, recent.value), ("created_at", "gte", one_week_ago))
        lower, upper = post_filters[2]
        self.assertEqual((lower.op, lower.value), ("gte", two_weeks_ago))
        self.assertEqual((upper.op, upper.value), ("lt", one_week_ago))

    def test_empty_store_reports_zeros(self) -> None:
        snapshot = self._aggregate(FakeStore())
        for name in ("posts", "members", "puppies", "environments"):
            entry = getattr(snapshot, name)
            self.assertEqual((entry.total, entry.recent, entry.change), (0, 0, "0%"))

    def test_any_failed_count_aborts(self) -> None:
        store = FakeStore(totals={"posts": 1}, fail_on=("members", 0))
        with self.assertRaises(DataAccessError):
            self._aggregate(store)

    def test_unexpected_errors_are_wrapped(self) -> None:
        class BrokenStore(FakeStore):
            def count(self, collection, filters=()):
                raise RuntimeError("connection reset")

        with self.assertRaises(DataAccessError) as ctx:
            self._aggregate(BrokenStore())
        self.assertIsInstance(ctx.exception.__cause__, RuntimeError)

    def test_store_is_built_for_the_caller(self) -> None:
        seen = []
        store = FakeStore()

        def factory(caller):
            seen.append(caller.id)
            return store

        StatsAggregator(factory, clock=lambda: NOW).compute_stats(make_caller("owner-7"))
        self.assertEqual(seen, ["owner-7"])


class StatsAggregatorDbTests(unittest.TestCase):
    def setUp(self) -> None:
        self.factory = make_session_factory()

    def _add_posts(self, *ages: timedelta) -> None:
        from kennel.post.models import Post

        with self.factory() as db:
            for age in ages:
                db.add(Post(title="t", content="c", author_id="user-1", created_at=NOW - age, updated_at=NOW - age))
            db.commit()

    def test_counts_rows_by_week(self) -> None:
        self._add_posts(
            timedelta(days=1),
            timedelta(days=6, hours=23),
            timedelta(days=8),
            timedelta(days=20),
        )
        aggregator = StatsAggregator(
            lambda caller: SqlDataStore(self.factory, caller),
            max_workers=1,
            clock=lambda: NOW,
        )
        snapshot = aggregator.compute_stats(make_caller())

        self.assertEqual(snapshot.posts.total, 4)
        self.assertEqual(snapshot.posts.recent, 2)
        self.assertEqual(snapshot.posts.change, "+100.0%")
        self.assertLessEqual(snapshot.posts.recent, snapshot.posts.total)
        self.assertEqual(snapshot.members.total, 0)
