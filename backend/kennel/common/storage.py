"""Photo object storage on MinIO.

Objects live under ``{resource}/{record id}/{photo type}/`` in one bucket; the
public URL of an object is ``{PHOTO_PUBLIC_BASE_URL}/{bucket}/{key}``.
"""
from __future__ import annotations

from functools import lru_cache
from typing import BinaryIO
from urllib.parse import urlparse

from minio import Minio
from minio.error import S3Error

from kennel.config import Settings, get_settings

MISSING_OBJECT_CODES = ("NoSuchKey", "NoSuchObject")


class StorageError(Exception):
    """Photo storage is unconfigured, unreachable or refused an operation."""


def _endpoint(settings: Settings) -> tuple[str, bool]:
    """Host:port for the client; a URL scheme on the endpoint overrides MINIO_SECURE."""
    endpoint = (settings.minio_endpoint or "").strip()
    if not endpoint:
        raise StorageError("MinIO endpoint is not configured")
    if "://" not in endpoint:
        return endpoint, settings.minio_secure
    parsed = urlparse(endpoint)
    return (parsed.netloc or parsed.path).rstrip("/"), parsed.scheme == "https"


def _ensure_bucket(client: Minio, bucket: str) -> None:
    try:
        if not client.bucket_exists(bucket):
            client.make_bucket(bucket)
    except S3Error as exc:
        raise StorageError(f"Failed to prepare photo bucket {bucket}: {exc.code}") from exc
    except Exception as exc:
        # Connection refused and timeouts surface as urllib3 errors, not S3Error.
        raise StorageError(f"Failed to prepare photo bucket {bucket}: {exc}") from exc


@lru_cache(maxsize=1)
def get_minio_client() -> tuple[Minio, str]:
    """Client and bucket for photo uploads, created once per process.

    Raises:
        StorageError: when the endpoint, credentials or bucket are missing or
            the bucket cannot be reached.
    """
    settings = get_settings()
    endpoint, secure = _endpoint(settings)

    access_key = (settings.minio_access_key or "").strip()
    secret_key = (settings.minio_secret_key or "").strip()
    bucket = (settings.minio_bucket or "").strip()
    if not access_key or not secret_key or not bucket:
        raise StorageError("MinIO credentials/bucket are not configured")

    client = Minio(endpoint, access_key=access_key, secret_key=secret_key, secure=secure)
    _ensure_bucket(client, bucket)
    return client, bucket


def upload_object(
    client: Minio,
    bucket: str,
    object_key: str,
    data: BinaryIO,
    length: int,
    content_type: str,
) -> None:
    try:
        client.put_object(
            bucket_name=bucket,
            object_name=object_key,
            data=data,
            length=length,
            content_type=content_type,
        )
    except Exception as exc:
        raise StorageError(str(exc)) from exc


def remove_object_safe(client: Minio, bucket: str, object_key: str) -> bool:
    """Delete a photo object; an already missing object counts as deleted.

    Returns False on any other failure so callers can log and carry on.
    """
    try:
        client.remove_object(bucket, object_key)
    except S3Error as exc:
        return getattr(exc, "code", "") in MISSING_OBJECT_CODES
    except Exception:
        return False
    return True


def object_key_from_url(url: str, bucket: str) -> str | None:
    """Return the object key of a public photo URL, or None if it is not in `bucket`."""
    path = urlparse(url).path if "://" in url else url
    parts = [part for part in path.split("/") if part]
    if bucket not in parts:
        return None
    key_parts = parts[parts.index(bucket) + 1:]
    if not key_parts:
        return None
    return "/".join(key_parts)
