from __future__ import annotations

import io
import os
import unittest
from unittest.mock import patch

from tests._bootstrap import bootstrap_backend_imports, reset_caches


bootstrap_backend_imports()


class StorageTests(unittest.TestCase):
    def setUp(self) -> None:
        self._saved = {key: os.environ.get(key) for key in self._keys()}
        reset_caches()

    def tearDown(self) -> None:
        for key, value in self._saved.items():
            if value is None:
                os.environ.pop(key, None)
            else:
                os.environ[key] = value
        reset_caches()

    @staticmethod
    def _keys() -> tuple[str, ...]:
        return ("MINIO_ENDPOINT", "MINIO_ACCESS_KEY", "MINIO_SECRET_KEY", "MINIO_BUCKET", "MINIO_SECURE")

    def _configure(self, **values: str) -> None:
        for key, value in values.items():
            os.environ[key] = value
        reset_caches()

    def test_get_minio_client_missing_credentials(self) -> None:
        self._configure(MINIO_ENDPOINT="localhost:9000", MINIO_ACCESS_KEY="", MINIO_SECRET_KEY="", MINIO_BUCKET="kennel-photos")

        from kennel.common.storage import StorageError, get_minio_client  # noqa: E402

        with self.assertRaises(StorageError):
            get_minio_client()

    def test_get_minio_client_missing_endpoint(self) -> None:
        self._configure(MINIO_ENDPOINT="", MINIO_ACCESS_KEY="ak", MINIO_SECRET_KEY="sk", MINIO_BUCKET="b")

        from kennel.common.storage import StorageError, get_minio_client  # noqa: E402

        with self.assertRaises(StorageError):
            get_minio_client()

    def test_get_minio_client_parses_scheme_and_secure(self) -> None:
        self._configure(
            MINIO_ENDPOINT="https://photos.example.com:9000",
            MINIO_ACCESS_KEY="ak",
            MINIO_SECRET_KEY="sk",
            MINIO_BUCKET="b",
            MINIO_SECURE="false",
        )

        captured: dict[str, object] = {}

        class FakeMinio:
            def __init__(self, endpoint: str, access_key: str, secret_key: str, secure: bool):
                captured["endpoint"] = endpoint
                captured["secure"] = secure

            def bucket_exists(self, bucket: str) -> bool:  # noqa: ARG002
                return True

        with patch("kennel.common.storage.Minio", FakeMinio):
            from kennel.common.storage import get_minio_client  # noqa: E402

            client, bucket = get_minio_client()

        self.assertEqual(bucket, "b")
        self.assertIsNotNone(client)
        self.assertEqual(captured, {"endpoint": "photos.example.com:9000", "secure": True})

    def test_get_minio_client_creates_bucket(self) -> None:
        self._configure(MINIO_ENDPOINT="localhost:9000", MINIO_ACCESS_KEY="ak", MINIO_SECRET_KEY="sk", MINIO_BUCKET="b")

        calls: list[str] = []

        class FakeMinio:
            def __init__(self, *_args, **_kwargs):
                pass

            def bucket_exists(self, bucket: str) -> bool:
                calls.append(f"exists:{bucket}")
                return False

            def make_bucket(self, bucket: str) -> None:
                calls.append(f"make:{bucket}")

        with patch("kennel.common.storage.Minio", FakeMinio):
            from kennel.common.storage import get_minio_client  # noqa: E402

            get_minio_client()

        self.assertEqual(calls, ["exists:b", "make:b"])

    def test_get_minio_client_connection_failure(self) -> None:
        self._configure(MINIO_ENDPOINT="localhost:9000", MINIO_ACCESS_KEY="ak", MINIO_SECRET_KEY="sk", MINIO_BUCKET="b")

        class FakeMinio:
            def __init__(self, *_args, **_kwargs):
                pass

            def bucket_exists(self, bucket: str) -> bool:  # noqa: ARG002
                raise ConnectionError("refused")

        with patch("kennel.common.storage.Minio", FakeMinio):
            from kennel.common.storage import StorageError, get_minio_client  # noqa: E402

            with self.assertRaises(StorageError):
                get_minio_client()

    def test_remove_object_safe(self) -> None:
        from kennel.common.storage import remove_object_safe  # noqa: E402

        class FakeS3Error(Exception):
            def __init__(self, code: str):
                super().__init__(code)
                self.code = code

        class FakeClient:
            def __init__(self, code: str | None):
                self.code = code

            def remove_object(self, _bucket: str, _object_key: str) -> None:
                if self.code:
                    raise FakeS3Error(self.code)

        with patch("kennel.common.storage.S3Error", FakeS3Error):
            self.assertTrue(remove_object_safe(FakeClient(None), "b", "k"))
            self.assertTrue(remove_object_safe(FakeClient("NoSuchKey"), "b", "k"))
            self.assertFalse(remove_object_safe(FakeClient("AccessDenied"), "b", "k"))


class ObjectKeyFromUrlTests(unittest.TestCase):
    def test_extracts_key_after_bucket(self) -> None:
        from kennel.common.storage import object_key_from_url  # noqa: E402

        url = "http://cdn.test/kennel-photos/puppies/abc/cover/x.jpg"
        self.assertEqual(object_key_from_url(url, "kennel-photos"), "puppies/abc/cover/x.jpg")

    def test_foreign_urls(self) -> None:
        from kennel.common.storage import object_key_from_url  # noqa: E402

        self.assertIsNone(object_key_from_url("http://elsewhere.test/img/x.jpg", "kennel-photos"))
        self.assertIsNone(object_key_from_url("http://cdn.test/kennel-photos/", "kennel-photos"))


class UploadObjectTests(unittest.TestCase):
    def test_passes_stream_through(self) -> None:
        from kennel.common.storage import upload_object  # noqa: E402

        calls: list[dict] = []

        class FakeClient:
            def put_object(self, **kwargs) -> None:
                calls.append(kwargs)

        upload_object(FakeClient(), "b", "puppies/1/cover/x.png", io.BytesIO(b"png"), 3, "image/png")
        self.assertEqual(calls[0]["bucket_name"], "b")
        self.assertEqual(calls[0]["object_name"], "puppies/1/cover/x.png")
        self.assertEqual(calls[0]["length"], 3)

    def test_failures_become_storage_errors(self) -> None:
        from kennel.common.storage import StorageError, upload_object  # noqa: E402

        class FakeClient:
            def put_object(self, **_kwargs) -> None:
                raise ConnectionError("reset by peer")

        with self.assertRaises(StorageError) as ctx:
            upload_object(FakeClient(), "b", "k", io.BytesIO(b""), 0, "image/png")
        self.assertIn("reset by peer", str(ctx.exception))
