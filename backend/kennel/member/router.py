from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from kennel.auth.dependencies import Caller, require_caller
from kennel.common.params import PageParams, page_params
from kennel.common.responses import ApiResponse
from kennel.database import get_db
from kennel.member.models import Gender, MemberRole, MemberStatus
from kennel.member.schemas import MemberCreate, MemberResponse, MemberUpdate
from kennel.member.service import MemberService

router = APIRouter(prefix="/api/members", tags=["members"])


def _dump(member) -> dict:
    return MemberResponse.model_validate(member).model_dump(mode="json")


@router.get("", response_model=ApiResponse)
def list_members(
    params: PageParams = Depends(page_params),
    role: MemberRole | None = Query(default=None),
    status: MemberStatus | None = Query(default=None),
    gender: Gender | None = Query(default=None),
    db: Session = Depends(get_db),
) -> ApiResponse:
    service = MemberService(db)
    members, total = service.find_page(
        params,
        role=role.value if role else None,
        status=status.value if status else None,
        gender=gender.value if gender else None,
    )
    return ApiResponse.ok({
        "members": [_dump(member) for member in members],
        "pagination": params.pagination(total),
    })


@router.get("/{id}", response_model=ApiResponse)
def get_member(id: UUID, db: Session = Depends(get_db)) -> ApiResponse:
    service = MemberService(db)
    return ApiResponse.ok(_dump(service.find_by_id(id)))


@router.post("", response_model=ApiResponse)
def create_member(
    request: MemberCreate,
    caller: Caller = Depends(require_caller),
    db: Session = Depends(get_db),
) -> ApiResponse:
    service = MemberService(db)
    member = service.create(request)
    return ApiResponse.ok(_dump(member), "成員創建成功")


@router.put("/{id}", response_model=ApiResponse)
def update_member(
    id: UUID,
    request: MemberUpdate,
    caller: Caller = Depends(require_caller),
    db: Session = Depends(get_db),
) -> ApiResponse:
    service = MemberService(db)
    member = service.update(id, request)
    return ApiResponse.ok(_dump(member), "成員更新成功")


@router.delete("/{id}", response_model=ApiResponse)
def delete_member(
    id: UUID,
    caller: Caller = Depends(require_caller),
    db: Session = Depends(get_db),
) -> ApiResponse:
    service = MemberService(db)
    data = _dump(service.find_by_id(id))
    service.delete(id)
    return ApiResponse.ok(data, "成員刪除成功")
