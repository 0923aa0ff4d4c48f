from datetime import datetime, timedelta

import jwt
import pytest

from services.auth_service import AuthService, AuthenticationError

SECRET = "unit-secret"


def test_round_trip(session, factory):
    user = factory.user()
    token = AuthService.create_access_token(user.id, secret_key=SECRET)

    assert AuthService.verify_token(token, session, secret_key=SECRET).id == user.id


def test_expired_token(session, factory):
    user = factory.user()
    token = AuthService.create_access_token(user.id, secret_key=SECRET, expires_minutes=-1)

    with pytest.raises(AuthenticationError, match="expired"):
        AuthService.verify_token(token, session, secret_key=SECRET)


def test_wrong_secret(session, factory):
    user = factory.user()
    token = AuthService.create_access_token(user.id, secret_key="other")

    with pytest.raises(AuthenticationError):
        AuthService.verify_token(token, session, secret_key=SECRET)


def test_refresh_token_is_not_accepted(session, factory):
    user = factory.user()
    token = jwt.encode(
        {"sub": str(user.id), "type": "refresh", "exp": datetime.utcnow() + timedelta(minutes=5)},
        SECRET,
        algorithm="HS256",
    )

    with pytest.raises(AuthenticationError, match="type"):
        AuthService.verify_token(token, session, secret_key=SECRET)


def test_non_numeric_subject(session):
    token = jwt.encode(
        {"sub": "abc", "type": "access", "exp": datetime.utcnow() + timedelta(minutes=5)},
        SECRET,
        algorithm="HS256",
    )

    with pytest.raises(AuthenticationError):
        AuthService.verify_token(token, session, secret_key=SECRET)


def test_empty_token(session):
    with pytest.raises(AuthenticationError):
        AuthService.verify_token("", session, secret_key=SECRET)


def test_module_exposes_only_static_helpers():
    import services.auth_service as auth_module

    assert not hasattr(auth_module, "auth_service")
