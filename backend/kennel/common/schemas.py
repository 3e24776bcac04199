from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class ApiModel(BaseModel):
    """Request payloads; unknown keys are ignored like the admin UI expects."""

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)


class OrmModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)
