from __future__ import annotations

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from kennel.auth.dependencies import Caller
from kennel.common.exceptions import ApiException, not_found
from kennel.common.params import PageParams
from kennel.common.query import paginate
from kennel.post.models import Post
from kennel.post.schemas import PostCreate, PostUpdate

logger = logging.getLogger(__name__)

SORTABLE_COLUMNS = ("created_at", "updated_at", "title", "published")


class PostService:
    def __init__(self, db: Session):
        self.db = db

    def find_page(
        self,
        params: PageParams,
        *,
        published: Optional[bool] = None,
        author_id: Optional[str] = None,
    ) -> tuple[List[Post], int]:
        filters = []
        if published is not None:
            filters.append(Post.published == published)
        if author_id:
            filters.append(Post.author_id == author_id)
        return paginate(self.db, Post, params, sortable=SORTABLE_COLUMNS, filters=filters)

    def find_by_id(self, id: UUID) -> Post:
        post = self.db.query(Post).filter(Post.id == id).first()
        if not post:
            raise not_found("POST_NOT_FOUND", "文章不存在")
        return post

    def create(self, request: PostCreate, caller: Caller) -> Post:
        post = Post(
            title=request.title,
            content=request.content,
            excerpt=request.excerpt,
            cover_image=request.cover_image,
            published=request.published,
            author_id=caller.id,
        )
        self.db.add(post)
        self.db.commit()
        self.db.refresh(post)
        logger.info("post_created id=%s author=%s", post.id, caller.id)
        return post

    def update(self, id: UUID, request: PostUpdate, caller: Caller) -> Post:
        post = self.find_by_id(id)
        if post.author_id != caller.id:
            raise ApiException(status_code=403, code="FORBIDDEN", message="您沒有權限修改此文章")

        for field, value in request.model_dump(exclude_unset=True).items():
            # Required columns cannot be cleared through a partial update.
            if value is None and field in ("title", "content", "published"):
                continue
            setattr(post, field, value)

        self.db.commit()
        self.db.refresh(post)
        return post

    def delete(self, id: UUID, caller: Caller) -> None:
        post = self.find_by_id(id)
        if post.author_id != caller.id:
            raise ApiException(status_code=403, code="FORBIDDEN", message="您沒有權限刪除此文章")
        self.db.delete(post)
        self.db.commit()
        logger.info("post_deleted id=%s author=%s", id, caller.id)
