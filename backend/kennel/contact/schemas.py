from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from kennel.common.schemas import ApiModel


class ContactRequest(ApiModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=1, max_length=254)
    message: str = Field(..., min_length=1, max_length=5000)
    phone: Optional[str] = Field(None, max_length=32)
    subject: Optional[str] = Field(None, max_length=200)


class ContactSubmission(BaseModel):
    id: str
    name: str
    email: str
    phone: Optional[str] = None
    subject: str
    message: str
    submitted_at: datetime
