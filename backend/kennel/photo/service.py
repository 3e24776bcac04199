from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import Any, Optional
from uuid import UUID

from fastapi import UploadFile
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from kennel.common.exceptions import ApiException, not_found
from kennel.common.storage import (
    StorageError,
    get_minio_client,
    object_key_from_url,
    remove_object_safe,
    upload_object,
)
from kennel.config import Settings, get_settings
from kennel.environment.models import Environment
from kennel.environment.schemas import EnvironmentResponse
from kennel.member.models import Member
from kennel.member.schemas import MemberResponse
from kennel.puppy.models import Puppy
from kennel.puppy.schemas import PuppyResponse

logger = logging.getLogger(__name__)

ALLOWED_CONTENT_TYPES = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
    "image/gif": "gif",
}
DEFAULT_EXTENSION = "jpg"


@dataclass(frozen=True)
class PhotoSlot:
    field: str
    multiple: bool


@dataclass(frozen=True)
class PhotoTarget:
    """A resource whose records carry photo URLs."""

    resource: str
    record_key: str
    model: Any
    response: type[BaseModel]
    not_found_code: str
    not_found_message: str
    slots: dict[str, PhotoSlot]


MEMBER_PHOTOS = PhotoTarget(
    resource="members",
    record_key="member",
    model=Member,
    response=MemberResponse,
    not_found_code="MEMBER_NOT_FOUND",
    not_found_message="成員不存在",
    slots={
        "avatar": PhotoSlot("avatar_url", multiple=False),
        "album": PhotoSlot("album_urls", multiple=True),
        "pedigree": PhotoSlot("pedigree_urls", multiple=True),
        "health_check": PhotoSlot("health_check_urls", multiple=True),
    },
)

PUPPY_PHOTOS = PhotoTarget(
    resource="puppies",
    record_key="puppy",
    model=Puppy,
    response=PuppyResponse,
    not_found_code="PUPPY_NOT_FOUND",
    not_found_message="幼犬不存在",
    slots={
        "cover": PhotoSlot("cover_image", multiple=False),
        "album": PhotoSlot("images", multiple=True),
        "pedigree": PhotoSlot("pedigree_documents", multiple=True),
        "health_check": PhotoSlot("health_certificates", multiple=True),
    },
)

ENVIRONMENT_PHOTOS = PhotoTarget(
    resource="environments",
    record_key="environment",
    model=Environment,
    response=EnvironmentResponse,
    not_found_code="ENVIRONMENT_NOT_FOUND",
    not_found_message="環境設施不存在",
    slots={
        "cover": PhotoSlot("cover_image", multiple=False),
        "album": PhotoSlot("images", multiple=True),
        "equipment": PhotoSlot("equipment_images", multiple=True),
        "details": PhotoSlot("detail_images", multiple=True),
    },
)


def file_extension(filename: Optional[str], content_type: str) -> str:
    """Extension for the stored object.

    Compressed uploads often arrive as ``blob`` or without a usable suffix, so
    the MIME type wins whenever the filename does not carry a short extension.
    """
    ext = ""
    if filename and "." in filename:
        ext = filename.rsplit(".", 1)[-1].lower()
    if not ext or ext == "blob" or len(ext) > 4:
        return ALLOWED_CONTENT_TYPES.get(content_type, DEFAULT_EXTENSION)
    return ext


def _file_size(file: UploadFile) -> int:
    file.file.seek(0, 2)
    size = file.file.tell()
    file.file.seek(0)
    return size


class PhotoService:
    def __init__(self, db: Session, target: PhotoTarget, settings: Settings | None = None):
        self.db = db
        self.target = target
        self.settings = settings or get_settings()

    def find_record(self, id: UUID) -> Any:
        model = self.target.model
        record = self.db.query(model).filter(model.id == id).first()
        if not record:
            raise not_found(self.target.not_found_code, self.target.not_found_message)
        return record

    def slot(self, photo_type: Optional[str]) -> PhotoSlot:
        slot = self.target.slots.get(photo_type or "")
        if slot is None:
            raise ApiException(status_code=400, code="INVALID_PHOTO_TYPE", message="無效的照片類型")
        return slot

    def dump(self, record: Any) -> dict:
        return self.target.response.model_validate(record).model_dump(mode="json")

    def upload(self, id: UUID, file: Optional[UploadFile], photo_type: Optional[str]) -> dict:
        record = self.find_record(id)
        if file is None:
            raise ApiException(status_code=400, code="FILE_REQUIRED", message="沒有提供檔案")
        slot = self.slot(photo_type)

        content_type = (file.content_type or "").lower()
        if content_type not in ALLOWED_CONTENT_TYPES:
            raise ApiException(status_code=400, code="INVALID_FILE_TYPE", message="不支援的檔案格式")

        max_size_mb = self.settings.photo_max_size_mb
        size = _file_size(file)
        if size > max_size_mb * 1024 * 1024:
            raise ApiException(
                status_code=400,
                code="FILE_TOO_LARGE",
                message=f"檔案過大 (最大 {max_size_mb}MB)",
            )

        ext = file_extension(file.filename, content_type)
        object_key = f"{self.target.resource}/{id}/{photo_type}/{uuid.uuid4()}.{ext}"

        try:
            client, bucket = get_minio_client()
        except StorageError as exc:
            logger.error("storage_unavailable resource=%s error=%s", self.target.resource, exc)
            raise ApiException(status_code=500, code="STORAGE_UNAVAILABLE", message="儲存服務無法使用") from exc

        try:
            upload_object(client, bucket, object_key, file.file, size, content_type)
        except StorageError as exc:
            logger.error("photo_upload_failed key=%s error=%s", object_key, exc)
            raise ApiException(status_code=500, code="UPLOAD_ERROR", message=f"檔案上傳失敗: {exc}") from exc

        url = self.settings.photo_public_url(object_key)
        if slot.multiple:
            setattr(record, slot.field, [*(getattr(record, slot.field) or []), url])
        else:
            setattr(record, slot.field, url)

        try:
            self.db.commit()
            self.db.refresh(record)
        except SQLAlchemyError:
            self.db.rollback()
            remove_object_safe(client, bucket, object_key)
            raise

        logger.info(
            "photo_uploaded resource=%s id=%s type=%s key=%s size=%s",
            self.target.resource,
            id,
            photo_type,
            object_key,
            size,
        )
        return {"url": url, "type": photo_type, self.target.record_key: self.dump(record)}

    def delete(self, id: UUID, url: Optional[str], photo_type: Optional[str]) -> dict:
        if not url:
            raise ApiException(status_code=400, code="URL_REQUIRED", message="沒有提供照片URL")
        slot = self.slot(photo_type)
        record = self.find_record(id)

        object_key = object_key_from_url(url, self.settings.minio_bucket)
        if not object_key or not object_key.startswith(f"{self.target.resource}/{id}/"):
            raise ApiException(status_code=400, code="INVALID_URL", message="無效的照片URL")

        try:
            client, bucket = get_minio_client()
        except StorageError as exc:
            logger.warning("photo_remove_skipped key=%s error=%s", object_key, exc)
        else:
            # The record is updated even if the object is already gone.
            if not remove_object_safe(client, bucket, object_key):
                logger.warning("photo_remove_failed key=%s", object_key)

        if slot.multiple:
            setattr(record, slot.field, [item for item in (getattr(record, slot.field) or []) if item != url])
        else:
            setattr(record, slot.field, None)

        self.db.commit()
        self.db.refresh(record)
        logger.info("photo_deleted resource=%s id=%s type=%s key=%s", self.target.resource, id, photo_type, object_key)
        return {"deletedUrl": url, "type": photo_type, self.target.record_key: self.dump(record)}
