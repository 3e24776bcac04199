from __future__ import annotations

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from kennel.common.exceptions import ApiException, not_found
from kennel.common.params import PageParams
from kennel.common.query import paginate
from kennel.environment.models import Environment, EnvironmentType
from kennel.environment.schemas import EnvironmentCreate, EnvironmentUpdate

logger = logging.getLogger(__name__)

SORTABLE_COLUMNS = ("created_at", "updated_at", "name", "type")

VALID_TYPES = tuple(item.value for item in EnvironmentType)

_REQUIRED_FIELDS = ("name", "type", "images", "features")


class EnvironmentService:
    def __init__(self, db: Session):
        self.db = db

    def find_page(self, params: PageParams, *, type: Optional[str] = None) -> tuple[List[Environment], int]:
        filters = []
        if type:
            filters.append(Environment.type == type)
        return paginate(self.db, Environment, params, sortable=SORTABLE_COLUMNS, filters=filters)

    def find_by_id(self, id: UUID) -> Environment:
        environment = self.db.query(Environment).filter(Environment.id == id).first()
        if not environment:
            raise not_found("ENVIRONMENT_NOT_FOUND", "環境設施不存在")
        return environment

    def create(self, request: EnvironmentCreate) -> Environment:
        if request.type not in VALID_TYPES:
            raise ApiException(
                status_code=400,
                code="INVALID_TYPE",
                message=f"環境類型必須為: {', '.join(VALID_TYPES)}",
            )

        environment = Environment(**request.model_dump())
        self.db.add(environment)
        self.db.commit()
        self.db.refresh(environment)
        logger.info("environment_created id=%s type=%s", environment.id, environment.type)
        return environment

    def update(self, id: UUID, request: EnvironmentUpdate) -> Environment:
        environment = self.find_by_id(id)
        changes = {
            field: value
            for field, value in request.model_dump(exclude_unset=True).items()
            if not (value is None and field in _REQUIRED_FIELDS)
        }
        if not changes:
            raise ApiException(status_code=400, code="NO_UPDATE_DATA", message="沒有提供要更新的資料")
        if "type" in changes and changes["type"] not in VALID_TYPES:
            raise ApiException(status_code=400, code="INVALID_TYPE", message="無效的環境類型")

        for field, value in changes.items():
            setattr(environment, field, value)

        self.db.commit()
        self.db.refresh(environment)
        return environment

    def delete(self, id: UUID) -> None:
        environment = self.find_by_id(id)
        self.db.delete(environment)
        self.db.commit()
        logger.info("environment_deleted id=%s", id)
