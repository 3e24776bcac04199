from __future__ import annotations

import unittest
from datetime import timedelta
from uuid import UUID

from tests._auth import make_caller
from tests._bootstrap import bootstrap_backend_imports, reset_caches
from tests._db import make_session


bootstrap_backend_imports()
reset_caches()

from kennel.common.exceptions import ApiException  # noqa: E402
from kennel.common.params import PageParams  # noqa: E402
from kennel.common.time import utcnow  # noqa: E402
from kennel.post.schemas import PostCreate, PostUpdate  # noqa: E402
from kennel.post.service import PostService  # noqa: E402


def _page(**overrides) -> PageParams:
    values = {"page": 1, "limit": 10, "sort": "created_at", "order": "desc", **overrides}
    return PageParams(**values)


class PostServiceTests(unittest.TestCase):
    def setUp(self) -> None:
        self.db = make_session()
        self.svc = PostService(self.db)
        self.author = make_caller("author-1")

    def tearDown(self) -> None:
        self.db.close()

    def test_create_sets_author(self) -> None:
        post = self.svc.create(PostCreate(title="  Litter news ", content="body"), self.author)
        self.assertEqual(post.title, "Litter news")
        self.assertEqual(post.author_id, "author-1")
        self.assertFalse(post.published)
        self.assertIsNotNone(post.created_at)

    def test_find_by_id_404(self) -> None:
        with self.assertRaises(ApiException) as ctx:
            self.svc.find_by_id(UUID("00000000-0000-0000-0000-000000000001"))
        self.assertEqual(ctx.exception.status_code, 404)
        self.assertEqual(ctx.exception.code, "POST_NOT_FOUND")

    def test_find_page_filters_and_paginates(self) -> None:
        now = utcnow()
        for i in range(5):
            post = self.svc.create(PostCreate(title=f"p{i}", content="c", published=i % 2 == 0), self.author)
            post.created_at = now - timedelta(hours=i)
        self.svc.create(PostCreate(title="other", content="c", published=True), make_caller("author-2"))
        self.db.commit()

        posts, total = self.svc.find_page(_page(limit=2), published=True, author_id="author-1")
        self.assertEqual(total, 3)
        self.assertEqual([p.title for p in posts], ["p0", "p2"])

        posts, total = self.svc.find_page(_page(limit=2, page=2, sort="title", order="asc"))
        self.assertEqual(total, 6)
        self.assertEqual([p.title for p in posts], ["p1", "p2"])

    def test_find_page_rejects_unknown_sort(self) -> None:
        with self.assertRaises(ApiException) as ctx:
            self.svc.find_page(_page(sort="author_id; drop table posts"))
        self.assertEqual(ctx.exception.code, "INVALID_SORT")

    def test_update_is_partial(self) -> None:
        post = self.svc.create(PostCreate(title="Draft", content="body", excerpt="short"), self.author)
        updated = self.svc.update(post.id, PostUpdate(published=True), self.author)
        self.assertTrue(updated.published)
        self.assertEqual(updated.title, "Draft")
        self.assertEqual(updated.excerpt, "short")

        updated = self.svc.update(post.id, PostUpdate(excerpt=None, title=None), self.author)
        self.assertIsNone(updated.excerpt)
        self.assertEqual(updated.title, "Draft")

    def test_only_author_may_update_or_delete(self) -> None:
        post = self.svc.create(PostCreate(title="Mine", content="body"), self.author)
        stranger = make_caller("someone-else")

        with self.assertRaises(ApiException) as ctx:
            self.svc.update(post.id, PostUpdate(title="Hijacked"), stranger)
        self.assertEqual((ctx.exception.status_code, ctx.exception.code), (403, "FORBIDDEN"))

        with self.assertRaises(ApiException) as ctx:
            self.svc.delete(post.id, stranger)
        self.assertEqual(ctx.exception.status_code, 403)

        self.svc.delete(post.id, self.author)
        with self.assertRaises(ApiException):
            self.svc.find_by_id(post.id)
