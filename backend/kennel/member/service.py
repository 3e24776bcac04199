from __future__ import annotations

import logging
from enum import Enum
from typing import List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from kennel.common.exceptions import not_found
from kennel.common.params import PageParams
from kennel.common.query import paginate
from kennel.member.models import Member
from kennel.member.schemas import MemberCreate, MemberUpdate

logger = logging.getLogger(__name__)

SORTABLE_COLUMNS = ("created_at", "updated_at", "name", "birth_date", "role", "status")

# Columns that must keep a value once set.
_REQUIRED_FIELDS = ("name", "role", "status", "pedigree_info", "health_records", "achievements")


def _column_value(value):
    return value.value if isinstance(value, Enum) else value


class MemberService:
    def __init__(self, db: Session):
        self.db = db

    def find_page(
        self,
        params: PageParams,
        *,
        role: Optional[str] = None,
        status: Optional[str] = None,
        gender: Optional[str] = None,
    ) -> tuple[List[Member], int]:
        filters = []
        if role:
            filters.append(Member.role == role)
        if status:
            filters.append(Member.status == status)
        if gender:
            filters.append(Member.gender == gender)
        return paginate(self.db, Member, params, sortable=SORTABLE_COLUMNS, filters=filters)

    def find_by_id(self, id: UUID) -> Member:
        member = self.db.query(Member).filter(Member.id == id).first()
        if not member:
            raise not_found("MEMBER_NOT_FOUND", "成員不存在")
        return member

    def create(self, request: MemberCreate) -> Member:
        values = {field: _column_value(value) for field, value in request.model_dump().items()}
        member = Member(**values)
        self.db.add(member)
        self.db.commit()
        self.db.refresh(member)
        logger.info("member_created id=%s role=%s", member.id, member.role)
        return member

    def update(self, id: UUID, request: MemberUpdate) -> Member:
        member = self.find_by_id(id)
        for field, value in request.model_dump(exclude_unset=True).items():
            if value is None and field in _REQUIRED_FIELDS:
                continue
            setattr(member, field, _column_value(value))

        self.db.commit()
        self.db.refresh(member)
        return member

    def delete(self, id: UUID) -> None:
        member = self.find_by_id(id)
        self.db.delete(member)
        self.db.commit()
        logger.info("member_deleted id=%s", id)
