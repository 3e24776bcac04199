from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field

from kennel.common.schemas import ApiModel, OrmModel


class PostCreate(ApiModel):
    title: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1)
    excerpt: Optional[str] = Field(None, max_length=512)
    cover_image: Optional[str] = Field(None, max_length=1024)
    published: bool = False


class PostUpdate(ApiModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    content: Optional[str] = Field(None, min_length=1)
    excerpt: Optional[str] = Field(None, max_length=512)
    cover_image: Optional[str] = Field(None, max_length=1024)
    published: Optional[bool] = None


class PostResponse(OrmModel):
    id: UUID
    title: str
    content: str
    excerpt: Optional[str] = None
    cover_image: Optional[str] = None
    published: bool
    author_id: str
    created_at: datetime
    updated_at: datetime
