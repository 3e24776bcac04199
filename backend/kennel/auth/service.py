from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from jose import JWTError, jwt
from starlette.requests import Request

from kennel.config import Settings, get_settings

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "

MISSING_TOKEN_MESSAGE = "未提供驗證 token"
INVALID_TOKEN_MESSAGE = "無效的驗證 token"
AUTH_FAILED_MESSAGE = "驗證失敗"


@dataclass(frozen=True)
class AuthUser:
    id: str
    email: Optional[str] = None
    role: Optional[str] = None


@dataclass(frozen=True)
class AuthResult:
    user: Optional[AuthUser] = None
    token: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.user is not None and self.token is not None and self.error is None


class Authenticator:
    """Verifies bearer tokens issued by the managed auth service.

    The raw token is handed back alongside the caller so downstream store
    access can be scoped to the same session.
    """

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()

    def extract_token(self, authorization: str | None) -> str | None:
        if not authorization or not authorization.startswith(BEARER_PREFIX):
            return None
        token = authorization[len(BEARER_PREFIX):].strip()
        return token or None

    def decode(self, token: str) -> dict[str, Any]:
        secret = self.settings.auth_jwt_secret
        if not secret:
            raise JWTError("AUTH_JWT_SECRET is not configured")
        return jwt.decode(
            token,
            secret,
            algorithms=[self.settings.auth_jwt_algorithm],
            audience=self.settings.auth_jwt_audience or None,
        )

    def validate_token(self, token: str) -> AuthResult:
        try:
            claims = self.decode(token)
        except JWTError as exc:
            logger.info("auth_token_rejected reason=%s", exc)
            return AuthResult(error=INVALID_TOKEN_MESSAGE)

        subject = claims.get("sub")
        if not subject:
            return AuthResult(error=INVALID_TOKEN_MESSAGE)

        app_metadata = claims.get("app_metadata") or {}
        user_metadata = claims.get("user_metadata") or {}
        role = app_metadata.get("role") or user_metadata.get("role") or claims.get("role")
        user = AuthUser(id=str(subject), email=claims.get("email"), role=role)
        return AuthResult(user=user, token=token)

    def validate_auth(self, request: Request) -> AuthResult:
        token = self.extract_token(request.headers.get("authorization"))
        if token is None:
            return AuthResult(error=MISSING_TOKEN_MESSAGE)
        try:
            return self.validate_token(token)
        except Exception:
            logger.exception("auth_validation_failed")
            return AuthResult(error=AUTH_FAILED_MESSAGE)
