from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from sqlalchemy.orm import Session

from kennel.auth.dependencies import Caller, require_caller
from kennel.common.responses import ApiResponse
from kennel.database import get_db
from kennel.photo.service import ENVIRONMENT_PHOTOS, MEMBER_PHOTOS, PUPPY_PHOTOS, PhotoService, PhotoTarget


def build_photo_router(target: PhotoTarget) -> APIRouter:
    router = APIRouter(prefix=f"/api/{target.resource}", tags=[f"{target.resource}-photos"])

    @router.post("/{id}/photos", response_model=ApiResponse)
    def upload_photo(
        id: UUID,
        file: UploadFile | None = File(default=None),
        type: str | None = Form(default=None),
        caller: Caller = Depends(require_caller),
        db: Session = Depends(get_db),
    ) -> ApiResponse:
        service = PhotoService(db, target)
        return ApiResponse.ok(service.upload(id, file, type), "照片上傳成功")

    @router.delete("/{id}/photos", response_model=ApiResponse)
    def delete_photo(
        id: UUID,
        url: str | None = Query(default=None),
        type: str | None = Query(default=None),
        caller: Caller = Depends(require_caller),
        db: Session = Depends(get_db),
    ) -> ApiResponse:
        service = PhotoService(db, target)
        return ApiResponse.ok(service.delete(id, url, type), "照片刪除成功")

    return router


member_photos_router = build_photo_router(MEMBER_PHOTOS)
puppy_photos_router = build_photo_router(PUPPY_PHOTOS)
environment_photos_router = build_photo_router(ENVIRONMENT_PHOTOS)
