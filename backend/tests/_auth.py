from __future__ import annotations

from datetime import timedelta

from jose import jwt

from tests._bootstrap import bootstrap_backend_imports


bootstrap_backend_imports()

from kennel.auth.dependencies import Caller  # noqa: E402
from kennel.auth.service import AuthUser  # noqa: E402
from kennel.common.time import utcnow  # noqa: E402

TEST_SECRET = "test-secret"
TEST_AUDIENCE = "authenticated"


def make_caller(user_id: str = "user-1", role: str | None = "admin") -> Caller:
    return Caller(user=AuthUser(id=user_id, email=f"{user_id}@example.com", role=role), token="token")


def make_token(
    sub: str | None = "user-1",
    *,
    secret: str = TEST_SECRET,
    audience: str = TEST_AUDIENCE,
    expires_in: timedelta = timedelta(hours=1),
    **claims,
) -> str:
    payload = {"aud": audience, "exp": utcnow() + expires_in, **claims}
    if sub is not None:
        payload["sub"] = sub
    return jwt.encode(payload, secret, algorithm="HS256")
