from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class ResourceCount(BaseModel):
    total: int = Field(ge=0)
    recent: int = Field(ge=0)
    change: str


class StatsSnapshot(BaseModel):
    posts: ResourceCount
    members: ResourceCount
    puppies: ResourceCount
    environments: ResourceCount


ActivityType = Literal["post", "member", "puppy", "environment"]


class Activity(BaseModel):
    id: str
    type: ActivityType
    action: str
    target: str
    time: str
    avatar: str
