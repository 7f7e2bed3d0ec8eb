"""Common authentication dependencies for FastAPI routers."""

from __future__ import annotations

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .auth_service import (
    AuthService,
    InsufficientRoleError,
    InvalidTokenError,
    TokenExpiredError,
)

security = HTTPBearer(auto_error=False)


def get_auth_service(request: Request) -> AuthService:
    try:
        return request.app.state.auth_service  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover - defensive path
        raise RuntimeError("AuthService is not configured") from exc


def _unauthorized(reason: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail={"status": "error", "failure_reason": reason},
    )


def require_admin_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    service: AuthService = Depends(get_auth_service),
) -> dict:
    if credentials is None:
        raise _unauthorized("missing_token")

    try:
        return service.validate_token(credentials.credentials)
    except TokenExpiredError as exc:
        raise _unauthorized("token_expired") from exc
    except InvalidTokenError as exc:
        raise _unauthorized("invalid_token") from exc
    except InsufficientRoleError as exc:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={"status": "error", "failure_reason": "insufficient_role"},
        ) from exc


__all__ = ["get_auth_service", "require_admin_user"]
