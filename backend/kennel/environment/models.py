from __future__ import annotations

import enum

from sqlalchemy import JSON, Column, String, Text

from kennel.common.models import KennelRecord
from kennel.database import Base


class EnvironmentType(str, enum.Enum):
    ACCOMMODATION = "accommodation"
    CLASSROOM = "classroom"
    PLAYGROUND = "playground"
    TRANSPORT = "transport"
    OTHER = "other"


class Environment(KennelRecord, Base):
    __tablename__ = "environments"

    name = Column(String(100), nullable=False)
    type = Column(String(32), nullable=False, index=True)
    description = Column(Text, nullable=True)

    cover_image = Column(String(1024), nullable=True)
    images = Column(JSON, nullable=False, default=list)
    equipment_images = Column(JSON, nullable=False, default=list)
    detail_images = Column(JSON, nullable=False, default=list)

    features = Column(JSON, nullable=False, default=list)
