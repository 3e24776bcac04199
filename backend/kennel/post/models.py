from __future__ import annotations

from sqlalchemy import Boolean, Column, String, Text

from kennel.common.models import KennelRecord
from kennel.database import Base


class Post(KennelRecord, Base):
    __tablename__ = "posts"

    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    excerpt = Column(String(512), nullable=True)
    cover_image = Column(String(1024), nullable=True)
    published = Column(Boolean, nullable=False, default=False, index=True)
    author_id = Column(String(64), nullable=False, index=True)
