from __future__ import annotations

import logging
from datetime import date
from typing import Any, Callable, List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from kennel.common.exceptions import not_found, validation_error
from kennel.common.params import PageParams
from kennel.common.query import paginate
from kennel.common.time import utcnow
from kennel.puppy.models import Puppy, PuppyStatus
from kennel.puppy.schemas import PuppyCreate, PuppyUpdate
from kennel.puppy.validation import validate_business_rules, validate_fields

logger = logging.getLogger(__name__)

SORTABLE_COLUMNS = ("created_at", "updated_at", "name", "birth_date", "price", "status", "breed")

# Columns that must keep a value once set.
_REQUIRED_FIELDS = (
    "name",
    "breed",
    "birth_date",
    "gender",
    "color",
    "status",
    "currency",
    "pedigree_info",
    "health_checks",
    "vaccination_records",
    "images",
)


def _today() -> date:
    return utcnow().date()


def _normalize(values: dict[str, Any]) -> dict[str, Any]:
    if values.get("microchip_id") == "":
        values["microchip_id"] = None
    if values.get("price") is not None:
        values["price"] = int(values["price"])
    return values


class PuppyService:
    def __init__(self, db: Session, today: Callable[[], date] = _today):
        self.db = db
        self.today = today

    def find_page(
        self,
        params: PageParams,
        *,
        status: Optional[str] = None,
        breed: Optional[str] = None,
        gender: Optional[str] = None,
    ) -> tuple[List[Puppy], int]:
        filters = []
        if status:
            filters.append(Puppy.status == status)
        if breed:
            filters.append(Puppy.breed == breed)
        if gender:
            filters.append(Puppy.gender == gender)
        return paginate(self.db, Puppy, params, sortable=SORTABLE_COLUMNS, filters=filters)

    def find_by_id(self, id: UUID) -> Puppy:
        puppy = self.db.query(Puppy).filter(Puppy.id == id).first()
        if not puppy:
            raise not_found("PUPPY_NOT_FOUND", "幼犬不存在")
        return puppy

    def create(self, request: PuppyCreate) -> Puppy:
        values = request.model_dump(exclude_none=True)
        values.setdefault("status", PuppyStatus.AVAILABLE.value)

        errors = validate_fields(values, partial=False, today=self.today())
        errors += validate_business_rules(values)
        if errors:
            raise validation_error(errors)

        puppy = Puppy(**_normalize(values))
        self.db.add(puppy)
        self.db.commit()
        self.db.refresh(puppy)
        logger.info("puppy_created id=%s breed=%s", puppy.id, puppy.breed)
        return puppy

    def update(self, id: UUID, request: PuppyUpdate) -> Puppy:
        puppy = self.find_by_id(id)
        changes = {
            field: value
            for field, value in request.model_dump(exclude_unset=True).items()
            if not (value is None and field in _REQUIRED_FIELDS)
        }

        errors = validate_fields(changes, partial=True, today=self.today())
        # A sale needs a price whether it arrives now or is already stored.
        merged = {"status": puppy.status, "price": puppy.price, **changes}
        errors += validate_business_rules(merged)
        if errors:
            raise validation_error(errors)

        for field, value in _normalize(changes).items():
            setattr(puppy, field, value)

        self.db.commit()
        self.db.refresh(puppy)
        return puppy

    def delete(self, id: UUID) -> None:
        puppy = self.find_by_id(id)
        self.db.delete(puppy)
        self.db.commit()
        logger.info("puppy_deleted id=%s", id)
