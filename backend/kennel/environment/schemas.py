from __future__ import annotations

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import Field

from kennel.common.schemas import ApiModel, OrmModel


class EnvironmentCreate(ApiModel):
    name: str = Field(..., min_length=1, max_length=100)
    type: str = Field(..., min_length=1)
    description: Optional[str] = None
    cover_image: Optional[str] = Field(None, max_length=1024)
    images: List[str] = Field(default_factory=list)
    features: List[str] = Field(default_factory=list)


class EnvironmentUpdate(ApiModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    type: Optional[str] = None
    description: Optional[str] = None
    cover_image: Optional[str] = Field(None, max_length=1024)
    images: Optional[List[str]] = None
    features: Optional[List[str]] = None


class EnvironmentResponse(OrmModel):
    id: UUID
    name: str
    type: str
    description: Optional[str] = None
    cover_image: Optional[str] = None
    images: List[str] = Field(default_factory=list)
    equipment_images: List[str] = Field(default_factory=list)
    detail_images: List[str] = Field(default_factory=list)
    features: List[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime
