from datetime import datetime, timedelta, timezone

import pytest

from handbook.core.errors import ExpiredToken, InvalidToken
from handbook.core.security import (
    create_access_token,
    create_refresh_token,
    hash_password,
    verify_password,
    verify_token,
)

from tests.conftest import USERNAME


def _long_ago() -> datetime:
    return datetime.now(timezone.utc) - timedelta(days=30)


def test_access_token_resolves_username():
    token = create_access_token(USERNAME)
    assert verify_token(token, "access") == USERNAME


def test_refresh_token_resolves_username():
    token = create_refresh_token(USERNAME)
    assert verify_token(token, "refresh") == USERNAME


def test_expired_access_token_reports_access_kind():
    token = create_access_token(USERNAME, now=_long_ago())
    with pytest.raises(ExpiredToken) as exc:
        verify_token(token, "access")
    assert exc.value.kind == "access"
    assert exc.value.message == "Access token expired"


def test_expired_refresh_token_reports_refresh_kind():
    token = create_refresh_token(USERNAME, now=_long_ago())
    with pytest.raises(ExpiredToken) as exc:
        verify_token(token, "refresh")
    assert exc.value.kind == "refresh"
    assert exc.value.message == "Refresh token expired"


def test_access_token_lives_minutes_refresh_token_days():
    issued = datetime.now(timezone.utc) - timedelta(hours=1)
    with pytest.raises(ExpiredToken):
        verify_token(create_access_token(USERNAME, now=issued), "access")
    assert verify_token(create_refresh_token(USERNAME, now=issued), "refresh") == USERNAME


def test_token_signed_with_other_secret_is_invalid(monkeypatch):
    token = create_access_token(USERNAME)
    monkeypatch.setenv("SECRET_KEY", "another-secret")
    with pytest.raises(InvalidToken):
        verify_token(token, "access")


@pytest.mark.parametrize("token", ["", "not-a-jwt", "a.b.c"])
def test_malformed_token_is_invalid(token):
    with pytest.raises(InvalidToken):
        verify_token(token, "access")


def test_token_kinds_are_not_interchangeable():
    with pytest.raises(InvalidToken):
        verify_token(create_access_token(USERNAME), "refresh")
    with pytest.raises(InvalidToken):
        verify_token(create_refresh_token(USERNAME), "access")


def test_expired_token_of_other_kind_is_invalid_not_expired():
    # a stale refresh token must not look like "access expired, go refresh"
    with pytest.raises(InvalidToken) as exc:
        verify_token(create_refresh_token(USERNAME, now=_long_ago()), "access")
    assert not isinstance(exc.value, ExpiredToken)
    with pytest.raises(InvalidToken) as exc:
        verify_token(create_access_token(USERNAME, now=_long_ago()), "refresh")
    assert not isinstance(exc.value, ExpiredToken)


def test_tokens_issued_at_same_instant_differ():
    now = datetime.now(timezone.utc)
    assert create_refresh_token(USERNAME, now=now) != create_refresh_token(USERNAME, now=now)


def test_password_hash_verifies_and_is_not_plaintext():
    hashed = hash_password("Passw0rdX")
    assert hashed != "Passw0rdX"
    assert verify_password("Passw0rdX", hashed)
    assert not verify_password("passw0rdx", hashed)
