"""Admin login against a JSON credentials file, and bearer token checks."""

from __future__ import annotations

import hashlib
import json
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

import jwt
import structlog
from jwt import ExpiredSignatureError
from jwt import InvalidTokenError as PyJWTInvalidTokenError

logger = structlog.get_logger(__name__)

ADMIN_ROLES = ("admin", "super_admin")
TOKEN_ALGORITHM = "HS256"


def _utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


def hash_password(value: str) -> str:
    """Return hex sha256 hash for the provided password."""
    return hashlib.sha256(value.encode("utf-8")).hexdigest()


class AuthError(Exception):
    """Base class for auth failures."""


class InvalidCredentialsError(AuthError):
    """Unknown user, wrong password or disabled account."""


class LoginThrottledError(AuthError):
    """Too many failed attempts for this username."""


class InvalidTokenError(AuthError):
    """Token is malformed, forged or misses required claims."""


class TokenExpiredError(AuthError):
    pass


class InsufficientRoleError(AuthError):
    """Token role is not allowed for the route."""


@dataclass(slots=True)
class AdminAccount:
    username: str
    password_hash: str
    role: str = "admin"
    disabled: bool = False

    def verify(self, password: str) -> bool:
        return not self.disabled and self.password_hash == hash_password(password)


def load_admin_accounts(path: Path) -> dict[str, AdminAccount]:
    """Read ``{"admins": [{"username", "password_hash", "role"?, "disabled"?}]}``."""
    if not path.is_file():
        raise FileNotFoundError(f"Admin credentials file not found: {path}")
    document = json.loads(path.read_text(encoding="utf-8"))
    entries = document.get("admins") if isinstance(document, dict) else None
    if not isinstance(entries, list) or not entries:
        raise ValueError(f"{path}: expected a non-empty 'admins' array")

    accounts: dict[str, AdminAccount] = {}
    for position, entry in enumerate(entries):
        try:
            account = AdminAccount(
                username=entry["username"],
                password_hash=entry["password_hash"],
                role=entry.get("role", "admin"),
                disabled=bool(entry.get("disabled", False)),
            )
        except (KeyError, TypeError, AttributeError) as exc:
            raise ValueError(f"{path}: admins[{position}] needs username and password_hash") from exc
        accounts[account.username] = account
    return accounts


@dataclass(slots=True)
class LoginThrottle:
    """Blocks a username for ``block_duration`` after ``max_failures`` misses in a row."""

    max_failures: int = 5
    block_duration: timedelta = timedelta(minutes=15)
    failures: dict[str, int] = field(default_factory=dict)
    blocked_until: dict[str, datetime] = field(default_factory=dict)

    def is_blocked(self, username: str, now: datetime) -> bool:
        until = self.blocked_until.get(username)
        if until is None:
            return False
        if now >= until:
            del self.blocked_until[username]
            return False
        return True

    def record_failure(self, username: str, now: datetime) -> None:
        count = self.failures.get(username, 0) + 1
        if count < self.max_failures:
            self.failures[username] = count
            return
        self.failures.pop(username, None)
        self.blocked_until[username] = now + self.block_duration

    def clear(self, username: str) -> None:
        self.failures.pop(username, None)
        self.blocked_until.pop(username, None)


@dataclass(slots=True)
class AuthService:
    accounts: dict[str, AdminAccount]
    signing_key: str
    token_ttl: timedelta
    throttle: LoginThrottle = field(default_factory=LoginThrottle)

    @classmethod
    def from_file(cls, path: Path, signing_key: str, token_ttl_hours: int) -> "AuthService":
        if not signing_key:
            raise RuntimeError("JWT_SIGNING_KEY is not configured")
        return cls(
            accounts=load_admin_accounts(path),
            signing_key=signing_key,
            token_ttl=timedelta(hours=token_ttl_hours),
        )

    def authenticate(
        self, username: str, password: str, client_ip: str | None = None
    ) -> tuple[str, int]:
        """Return ``(token, expires_in_seconds)`` for valid credentials."""
        now = _utcnow()
        log = logger.bind(username=username, client_ip=client_ip)
        if self.throttle.is_blocked(username, now):
            log.warning("auth.login.throttled")
            raise LoginThrottledError("Too many attempts, try later")

        account = self.accounts.get(username)
        if account is None or not account.verify(password):
            self.throttle.record_failure(username, now)
            log.warning("auth.login.rejected")
            raise InvalidCredentialsError("Invalid username or password")

        self.throttle.clear(username)
        claims: dict[str, Any] = {
            "sub": account.username,
            "role": account.role,
            "iat": int(now.timestamp()),
            "exp": int((now + self.token_ttl).timestamp()),
        }
        expires_in = int(self.token_ttl.total_seconds())
        log.info("auth.login.success", role=account.role, expires_in=expires_in)
        return jwt.encode(claims, self.signing_key, algorithm=TOKEN_ALGORITHM), expires_in

    def validate_token(
        self, token: str, allowed_roles: tuple[str, ...] = ADMIN_ROLES
    ) -> dict[str, Any]:
        """Decode the bearer token and check its ``role`` claim."""
        try:
            claims: dict[str, Any] = jwt.decode(
                token,
                self.signing_key,
                algorithms=[TOKEN_ALGORITHM],
                options={"require": ["exp", "iat", "sub", "role"]},
            )
        except ExpiredSignatureError as exc:
            raise TokenExpiredError("Token expired") from exc
        except PyJWTInvalidTokenError as exc:
            raise InvalidTokenError("Invalid token") from exc

        if claims["role"] not in allowed_roles:
            raise InsufficientRoleError(f"role {claims['role']!r} is not allowed")
        return claims


__all__ = [
    "ADMIN_ROLES",
    "AdminAccount",
    "AuthError",
    "AuthService",
    "InsufficientRoleError",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "LoginThrottle",
    "LoginThrottledError",
    "TokenExpiredError",
    "hash_password",
    "load_admin_accounts",
]
