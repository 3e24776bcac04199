from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import Field

from kennel.common.schemas import ApiModel, OrmModel
from kennel.member.models import Gender, MemberRole, MemberStatus


class MemberBase(ApiModel):
    breed: Optional[str] = Field(None, max_length=100)
    birth_date: Optional[date] = None
    gender: Optional[Gender] = None
    color: Optional[str] = Field(None, max_length=64)
    description: Optional[str] = None
    personality_traits: Optional[str] = None


class MemberCreate(MemberBase):
    name: str = Field(..., min_length=1, max_length=100)
    role: MemberRole
    status: MemberStatus = MemberStatus.ACTIVE
    pedigree_info: Dict[str, Any] = Field(default_factory=dict)
    health_records: Dict[str, Any] = Field(default_factory=dict)
    achievements: List[Any] = Field(default_factory=list)
    avatar_url: Optional[str] = Field(None, max_length=1024)


class MemberUpdate(MemberBase):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    role: Optional[MemberRole] = None
    status: Optional[MemberStatus] = None
    pedigree_info: Optional[Dict[str, Any]] = None
    health_records: Optional[Dict[str, Any]] = None
    achievements: Optional[List[Any]] = None
    avatar_url: Optional[str] = Field(None, max_length=1024)


class MemberResponse(OrmModel):
    id: UUID
    name: str
    breed: Optional[str] = None
    birth_date: Optional[date] = None
    gender: Optional[str] = None
    color: Optional[str] = None
    role: str
    status: str
    description: Optional[str] = None
    personality_traits: Optional[str] = None
    pedigree_info: Dict[str, Any] = Field(default_factory=dict)
    health_records: Dict[str, Any] = Field(default_factory=dict)
    achievements: List[Any] = Field(default_factory=list)
    avatar_url: Optional[str] = None
    album_urls: List[str] = Field(default_factory=list)
    pedigree_urls: List[str] = Field(default_factory=list)
    health_check_urls: List[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime
