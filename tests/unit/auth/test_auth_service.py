import json
from datetime import datetime, timedelta, timezone
from pathlib import Path

import jwt
import pytest

from src.sitecms.auth.auth_service import (
    AdminAccount,
    AuthService,
    InsufficientRoleError,
    InvalidCredentialsError,
    InvalidTokenError,
    LoginThrottledError,
    TokenExpiredError,
    hash_password,
    load_admin_accounts,
)

pytestmark = pytest.mark.unit


def build_service() -> AuthService:
    accounts = {
        "kim": AdminAccount(username="kim", password_hash=hash_password("secret")),
        "lee": AdminAccount(username="lee", password_hash=hash_password("secret"), role="editor"),
        "park": AdminAccount(username="park", password_hash=hash_password("secret"), disabled=True),
    }
    return AuthService(accounts=accounts, signing_key="test-key", token_ttl=timedelta(hours=1))


def test_authenticate_returns_token_for_valid_credentials() -> None:
    service = build_service()

    token, expires_in = service.authenticate("kim", "secret")

    assert expires_in == 3600
    payload = jwt.decode(token, "test-key", algorithms=["HS256"])
    assert payload["sub"] == "kim"
    assert payload["role"] == "admin"


def test_authenticate_raises_for_invalid_password_and_disabled_account() -> None:
    service = build_service()

    with pytest.raises(InvalidCredentialsError):
        service.authenticate("kim", "wrong")
    with pytest.raises(InvalidCredentialsError):
        service.authenticate("park", "secret")
    with pytest.raises(InvalidCredentialsError):
        service.authenticate("nobody", "secret")


def test_authenticate_blocks_after_too_many_failures() -> None:
    service = build_service()

    for _ in range(service.throttle.max_failures):
        with pytest.raises(InvalidCredentialsError):
            service.authenticate("kim", "wrong")

    with pytest.raises(LoginThrottledError):
        service.authenticate("kim", "secret")

    # simulate block expiry
    service.throttle.blocked_until["kim"] = datetime.now(timezone.utc) - timedelta(seconds=1)

    token, _ = service.authenticate("kim", "secret")
    assert token


def test_validate_token_accepts_admin_roles() -> None:
    service = build_service()
    token, _ = service.authenticate("kim", "secret")

    claims = service.validate_token(token)

    assert claims["sub"] == "kim"


def test_validate_token_rejects_other_roles() -> None:
    service = build_service()
    token, _ = service.authenticate("lee", "secret")

    with pytest.raises(InsufficientRoleError):
        service.validate_token(token)


def test_validate_token_rejects_expired_and_forged_tokens() -> None:
    service = build_service()
    past = datetime.now(timezone.utc) - timedelta(hours=2)
    expired = jwt.encode(
        {
            "sub": "kim",
            "role": "admin",
            "iat": int(past.timestamp()),
            "exp": int((past + timedelta(minutes=5)).timestamp()),
        },
        "test-key",
        algorithm="HS256",
    )
    forged = jwt.encode(
        {"sub": "kim", "role": "admin", "iat": 0, "exp": 4102444800},
        "other-key",
        algorithm="HS256",
    )

    with pytest.raises(TokenExpiredError):
        service.validate_token(expired)
    with pytest.raises(InvalidTokenError):
        service.validate_token(forged)


def test_from_file_loads_accounts(tmp_path: Path) -> None:
    path = tmp_path / "admins.json"
    path.write_text(
        json.dumps({"admins": [{"username": "kim", "password_hash": hash_password("pw")}]}),
        encoding="utf-8",
    )

    service = AuthService.from_file(path, signing_key="k", token_ttl_hours=2)

    assert set(service.accounts) == {"kim"}
    assert service.token_ttl == timedelta(hours=2)


def test_from_file_requires_signing_key_and_existing_file(tmp_path: Path) -> None:
    with pytest.raises(RuntimeError):
        AuthService.from_file(tmp_path / "admins.json", signing_key="", token_ttl_hours=1)
    with pytest.raises(FileNotFoundError):
        AuthService.from_file(tmp_path / "missing.json", signing_key="k", token_ttl_hours=1)


def test_successful_login_resets_failure_count() -> None:
    service = build_service()
    for _ in range(service.throttle.max_failures - 1):
        with pytest.raises(InvalidCredentialsError):
            service.authenticate("kim", "wrong")

    service.authenticate("kim", "secret")

    with pytest.raises(InvalidCredentialsError):
        service.authenticate("kim", "wrong")
    assert service.throttle.failures["kim"] == 1
    assert "kim" not in service.throttle.blocked_until


@pytest.mark.parametrize(
    "document",
    [
        {"admins": []},
        {"users": [{"username": "kim", "password_hash": "x"}]},
        {"admins": [{"username": "kim"}]},
        ["kim"],
    ],
)
def test_load_admin_accounts_rejects_bad_documents(tmp_path: Path, document) -> None:
    path = tmp_path / "admins.json"
    path.write_text(json.dumps(document), encoding="utf-8")

    with pytest.raises(ValueError):
        load_admin_accounts(path)
