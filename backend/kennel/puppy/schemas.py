from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import Field

from kennel.common.schemas import ApiModel, OrmModel


# Enumerations and ranges are checked by `kennel.puppy.validation` so every
# violation is reported with its own message.
class PuppyFields(ApiModel):
    name: Optional[str] = None
    breed: Optional[str] = None
    birth_date: Optional[date] = None
    gender: Optional[str] = None
    color: Optional[str] = None
    description: Optional[str] = None
    personality_traits: Optional[str] = None
    status: Optional[str] = None
    price: Optional[float] = None
    currency: Optional[str] = Field(None, max_length=8)
    microchip_id: Optional[str] = None
    birth_weight: Optional[float] = None
    current_weight: Optional[float] = None
    expected_adult_weight: Optional[float] = None
    pedigree_info: Optional[Dict[str, Any]] = None
    health_checks: Optional[List[Any]] = None
    vaccination_records: Optional[List[Any]] = None
    cover_image: Optional[str] = Field(None, max_length=1024)
    images: Optional[List[str]] = None


class PuppyCreate(PuppyFields):
    pass


class PuppyUpdate(PuppyFields):
    pass


class PuppyResponse(OrmModel):
    id: UUID
    name: str
    breed: str
    birth_date: date
    gender: str
    color: str
    description: Optional[str] = None
    personality_traits: Optional[str] = None
    status: str
    price: Optional[int] = None
    currency: str
    microchip_id: Optional[str] = None
    birth_weight: Optional[float] = None
    current_weight: Optional[float] = None
    expected_adult_weight: Optional[float] = None
    pedigree_info: Dict[str, Any] = Field(default_factory=dict)
    health_checks: List[Any] = Field(default_factory=list)
    vaccination_records: List[Any] = Field(default_factory=list)
    cover_image: Optional[str] = None
    images: List[str] = Field(default_factory=list)
    pedigree_documents: List[str] = Field(default_factory=list)
    health_certificates: List[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime
