from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from kennel.auth.dependencies import Caller, require_caller
from kennel.common.params import PageParams, page_params, parse_bool
from kennel.common.responses import ApiResponse
from kennel.database import get_db
from kennel.post.schemas import PostCreate, PostResponse, PostUpdate
from kennel.post.service import PostService

router = APIRouter(prefix="/api/posts", tags=["posts"])


@router.get("", response_model=ApiResponse)
def list_posts(
    params: PageParams = Depends(page_params),
    published: str | None = Query(default=None),
    author_id: str | None = Query(default=None),
    db: Session = Depends(get_db),
) -> ApiResponse:
    service = PostService(db)
    posts, total = service.find_page(params, published=parse_bool(published), author_id=author_id)
    return ApiResponse.ok({
        "posts": [PostResponse.model_validate(post).model_dump(mode="json") for post in posts],
        "pagination": params.pagination(total),
    })


@router.get("/{id}", response_model=ApiResponse)
def get_post(id: UUID, db: Session = Depends(get_db)) -> ApiResponse:
    service = PostService(db)
    post = service.find_by_id(id)
    return ApiResponse.ok(PostResponse.model_validate(post).model_dump(mode="json"))


@router.post("", response_model=ApiResponse)
def create_post(
    request: PostCreate,
    caller: Caller = Depends(require_caller),
    db: Session = Depends(get_db),
) -> ApiResponse:
    service = PostService(db)
    post = service.create(request, caller)
    return ApiResponse.ok(PostResponse.model_validate(post).model_dump(mode="json"), "文章創建成功")


@router.put("/{id}", response_model=ApiResponse)
def update_post(
    id: UUID,
    request: PostUpdate,
    caller: Caller = Depends(require_caller),
    db: Session = Depends(get_db),
) -> ApiResponse:
    service = PostService(db)
    post = service.update(id, request, caller)
    return ApiResponse.ok(PostResponse.model_validate(post).model_dump(mode="json"), "文章更新成功")


@router.delete("/{id}", response_model=ApiResponse)
def delete_post(
    id: UUID,
    caller: Caller = Depends(require_caller),
    db: Session = Depends(get_db),
) -> ApiResponse:
    service = PostService(db)
    service.delete(id, caller)
    return ApiResponse.ok({"deleted": True}, "文章刪除成功")
