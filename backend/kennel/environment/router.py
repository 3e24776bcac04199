from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from kennel.auth.dependencies import Caller, require_caller
from kennel.common.params import PageParams, page_params
from kennel.common.responses import ApiResponse
from kennel.database import get_db
from kennel.environment.schemas import EnvironmentCreate, EnvironmentResponse, EnvironmentUpdate
from kennel.environment.service import EnvironmentService

router = APIRouter(prefix="/api/environments", tags=["environments"])


def _dump(environment) -> dict:
    return EnvironmentResponse.model_validate(environment).model_dump(mode="json")


@router.get("", response_model=ApiResponse)
def list_environments(
    params: PageParams = Depends(page_params),
    type: str | None = Query(default=None),
    db: Session = Depends(get_db),
) -> ApiResponse:
    service = EnvironmentService(db)
    environments, total = service.find_page(params, type=type)
    return ApiResponse.ok({
        "environments": [_dump(environment) for environment in environments],
        "pagination": params.pagination(total),
    })


@router.get("/{id}", response_model=ApiResponse)
def get_environment(id: UUID, db: Session = Depends(get_db)) -> ApiResponse:
    service = EnvironmentService(db)
    return ApiResponse.ok(_dump(service.find_by_id(id)))


@router.post("", response_model=ApiResponse)
def create_environment(
    request: EnvironmentCreate,
    caller: Caller = Depends(require_caller),
    db: Session = Depends(get_db),
) -> ApiResponse:
    service = EnvironmentService(db)
    environment = service.create(request)
    return ApiResponse.ok(_dump(environment), "環境資料創建成功")


@router.put("/{id}", response_model=ApiResponse)
def update_environment(
    id: UUID,
    request: EnvironmentUpdate,
    caller: Caller = Depends(require_caller),
    db: Session = Depends(get_db),
) -> ApiResponse:
    service = EnvironmentService(db)
    environment = service.update(id, request)
    return ApiResponse.ok(_dump(environment), "環境設施更新成功")


@router.delete("/{id}", response_model=ApiResponse)
def delete_environment(
    id: UUID,
    caller: Caller = Depends(require_caller),
    db: Session = Depends(get_db),
) -> ApiResponse:
    service = EnvironmentService(db)
    service.delete(id)
    return ApiResponse.ok(None, "環境設施刪除成功")
