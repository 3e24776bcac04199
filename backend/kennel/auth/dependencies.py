from __future__ import annotations

from dataclasses import dataclass

from fastapi import Depends
from starlette.requests import Request

from kennel.auth.service import AuthUser, Authenticator
from kennel.common.exceptions import AuthorizationError


@dataclass(frozen=True)
class Caller:
    """An authenticated caller plus the token to forward to the store."""

    user: AuthUser
    token: str

    @property
    def id(self) -> str:
        return self.user.id


def get_authenticator() -> Authenticator:
    return Authenticator()


def require_caller(
    request: Request,
    authenticator: Authenticator = Depends(get_authenticator),
) -> Caller:
    result = authenticator.validate_auth(request)
    if not result.ok:
        raise AuthorizationError(result.error or "需要登入")
    return Caller(user=result.user, token=result.token)


def optional_caller(
    request: Request,
    authenticator: Authenticator = Depends(get_authenticator),
) -> Caller | None:
    result = authenticator.validate_auth(request)
    if not result.ok:
        return None
    return Caller(user=result.user, token=result.token)
