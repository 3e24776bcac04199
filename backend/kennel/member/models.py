from __future__ import annotations

import enum

from sqlalchemy import JSON, Column, Date, String, Text

from kennel.common.models import KennelRecord
from kennel.database import Base


class Gender(str, enum.Enum):
    MALE = "male"
    FEMALE = "female"


class MemberRole(str, enum.Enum):
    BREEDING_MALE = "breeding_male"
    BREEDING_FEMALE = "breeding_female"
    RETIRED = "retired"
    TRAINING = "training"
    CHAMPION = "champion"
    PUPPY_PARENT = "puppy_parent"
    COMPANION = "companion"


class MemberStatus(str, enum.Enum):
    ACTIVE = "active"
    RETIRED = "retired"
    DECEASED = "deceased"
    ON_LOAN = "on_loan"
    TEMPORARY = "temporary"


class Member(KennelRecord, Base):
    __tablename__ = "members"

    name = Column(String(100), nullable=False)
    breed = Column(String(100), nullable=True)
    birth_date = Column(Date, nullable=True)
    gender = Column(String(16), nullable=True)
    color = Column(String(64), nullable=True)
    role = Column(String(32), nullable=False)
    status = Column(String(32), nullable=False, default=MemberStatus.ACTIVE.value)
    description = Column(Text, nullable=True)
    personality_traits = Column(Text, nullable=True)

    pedigree_info = Column(JSON, nullable=False, default=dict)
    health_records = Column(JSON, nullable=False, default=dict)
    achievements = Column(JSON, nullable=False, default=list)

    avatar_url = Column(String(1024), nullable=True)
    album_urls = Column(JSON, nullable=False, default=list)
    pedigree_urls = Column(JSON, nullable=False, default=list)
    health_check_urls = Column(JSON, nullable=False, default=list)
