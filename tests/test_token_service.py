from datetime import datetime, timedelta, timezone

import jwt
import pytest

from fittrack.services.token_service import (
    InvalidTokenError,
    TokenService,
    get_token_from_header,
)


@pytest.fixture
def token_service():
    return TokenService(secret="unit-secret")


def _tamper(token: str) -> str:
    header, payload, signature = token.split(".")
    i = len(signature) // 2
    replacement = "A" if signature[i] != "A" else "B"
    return ".".join([header, payload, signature[:i] + replacement + signature[i + 1:]])


def test_issue_and_verify_round_trip(token_service):
    token = token_service.issue(42, "x@example.org")
    payload = token_service.verify(token)
    assert payload.user_id == 42
    assert payload.email == "x@example.org"


def test_token_expires_after_seven_days(token_service):
    token = token_service.issue(1, "a@x.com")
    data = jwt.decode(token, "unit-secret", algorithms=["HS256"])
    assert data["exp"] - data["iat"] == 7 * 24 * 60 * 60


def test_tampered_signature_fails(token_service):
    token = token_service.issue(7, "a@x.com")
    with pytest.raises(InvalidTokenError):
        token_service.verify(_tamper(token))


def test_expired_token_fails(token_service):
    issued = datetime.now(timezone.utc) - timedelta(days=8)
    token = token_service.issue(7, "a@x.com", now=issued)
    with pytest.raises(InvalidTokenError):
        token_service.verify(token)


def test_token_signed_with_other_secret_fails(token_service):
    other = TokenService(secret="another-secret")
    with pytest.raises(InvalidTokenError):
        token_service.verify(other.issue(7, "a@x.com"))


def test_token_without_identity_claims_fails(token_service):
    now = datetime.now(timezone.utc)
    token = jwt.encode({"iat": now, "exp": now + timedelta(hours=1)}, "unit-secret", algorithm="HS256")
    with pytest.raises(InvalidTokenError):
        token_service.verify(token)


def test_garbage_token_fails(token_service):
    with pytest.raises(InvalidTokenError):
        token_service.verify("not-a-token")


def test_empty_secret_rejected():
    with pytest.raises(ValueError):
        TokenService(secret="")


@pytest.mark.parametrize(
    "header, expected",
    [
        (None, None),
        ("", None),
        ("Basic abc", None),
        ("Bearer ", None),
        ("Bearer abc.def.ghi", "abc.def.ghi"),
    ],
)
def test_get_token_from_header(header, expected):
    assert get_token_from_header(header) == expected
