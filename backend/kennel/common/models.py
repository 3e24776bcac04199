"""Columns every kennel table shares."""
from __future__ import annotations

import uuid

from sqlalchemy import Column, DateTime, Uuid

from kennel.common.time import utcnow


class KennelRecord:
    """UUID key plus the timestamps the dashboard counts and orders by.

    `created_at` is indexed because weekly stats and the activity feed filter
    and sort on it for every table.
    """

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self.id}>"
