from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from kennel.auth.dependencies import Caller, require_caller
from kennel.common.params import PageParams, page_params
from kennel.common.responses import ApiResponse
from kennel.database import get_db
from kennel.puppy.schemas import PuppyCreate, PuppyResponse, PuppyUpdate
from kennel.puppy.service import PuppyService

router = APIRouter(prefix="/api/puppies", tags=["puppies"])


def _dump(puppy) -> dict:
    return PuppyResponse.model_validate(puppy).model_dump(mode="json")


@router.get("", response_model=ApiResponse)
def list_puppies(
    params: PageParams = Depends(page_params),
    status: str | None = Query(default=None),
    breed: str | None = Query(default=None),
    gender: str | None = Query(default=None),
    db: Session = Depends(get_db),
) -> ApiResponse:
    service = PuppyService(db)
    puppies, total = service.find_page(params, status=status, breed=breed, gender=gender)
    return ApiResponse.ok({
        "puppies": [_dump(puppy) for puppy in puppies],
        "pagination": params.pagination(total),
    })


@router.get("/{id}", response_model=ApiResponse)
def get_puppy(id: UUID, db: Session = Depends(get_db)) -> ApiResponse:
    service = PuppyService(db)
    return ApiResponse.ok(_dump(service.find_by_id(id)))


@router.post("", response_model=ApiResponse)
def create_puppy(
    request: PuppyCreate,
    caller: Caller = Depends(require_caller),
    db: Session = Depends(get_db),
) -> ApiResponse:
    service = PuppyService(db)
    puppy = service.create(request)
    return ApiResponse.ok(_dump(puppy), "幼犬資料創建成功")


@router.put("/{id}", response_model=ApiResponse)
def update_puppy(
    id: UUID,
    request: PuppyUpdate,
    caller: Caller = Depends(require_caller),
    db: Session = Depends(get_db),
) -> ApiResponse:
    service = PuppyService(db)
    puppy = service.update(id, request)
    return ApiResponse.ok(_dump(puppy), "幼犬資料更新成功")


@router.delete("/{id}", response_model=ApiResponse)
def delete_puppy(
    id: UUID,
    caller: Caller = Depends(require_caller),
    db: Session = Depends(get_db),
) -> ApiResponse:
    service = PuppyService(db)
    data = _dump(service.find_by_id(id))
    service.delete(id)
    return ApiResponse.ok(data, "幼犬資料刪除成功")
