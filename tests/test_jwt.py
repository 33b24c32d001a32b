# tests/test_jwt.py

import os
from datetime import timedelta

import jwt
import pytest

from models import User, utcnow
from utils.jwt import ALGORITHM, JWTManager

SECRET = os.environ["JWT_SECRET_KEY"]
ISSUER = "TaskManagementAPI"



def _user() -> User:
    return User(id=7, username="alice", email="alice@example.com", password_hash="x")


def test_token_round_trip(jwt_manager: JWTManager) -> None:
    token, expires = jwt_manager.create_token(_user())

    payload = jwt_manager.verify_jwt(token)
    assert payload is not None
    assert payload["sub"] == "7"
    assert payload["name"] == "alice"
    assert payload["email"] == "alice@example.com"
    assert payload["iss"] == ISSUER
    assert payload["aud"] == ISSUER
    assert payload["exp"] == int(expires.timestamp())
    assert jwt_manager.get_user_id_from_token(token) == 7


def test_expiry_is_24_hours(jwt_manager: JWTManager) -> None:
    before = utcnow()
    _, expires = jwt_manager.create_token(_user())

    delta = expires - before
    assert timedelta(hours=23, minutes=59) < delta <= timedelta(hours=24, seconds=1)


def test_tampered_signature_is_rejected(jwt_manager: JWTManager) -> None:
    token, _ = jwt_manager.create_token(_user())
    header, payload, signature = token.split(".")
    flipped = ("A" if signature[0] != "A" else "B") + signature[1:]

    assert jwt_manager.verify_jwt(f"{header}.{payload}.{flipped}") is None
    assert jwt_manager.get_user_id_from_token(f"{header}.{payload}.{flipped}") is None


def test_other_key_is_rejected(jwt_manager: JWTManager) -> None:
    other = JWTManager("another-secret-key-with-32-characters!", ISSUER, ISSUER)
    token, _ = other.create_token(_user())
    assert jwt_manager.verify_jwt(token) is None


@pytest.mark.parametrize("issuer,audience", [("Someone", ISSUER), (ISSUER, "Someone")])
def test_wrong_issuer_or_audience_is_rejected(jwt_manager: JWTManager, issuer: str, audience: str) -> None:
    token, _ = JWTManager(SECRET, issuer, audience).create_token(_user())
    assert jwt_manager.verify_jwt(token) is None


def test_expired_token_is_rejected(jwt_manager: JWTManager) -> None:
    now = utcnow()
    token = jwt.encode(
        {
            "sub": "7",
            "iss": ISSUER,
            "aud": ISSUER,
            "iat": now - timedelta(hours=25),
            "exp": now - timedelta(seconds=1),
        },
        SECRET,
        algorithm=ALGORITHM,
    )
    assert jwt_manager.verify_jwt(token) is None


def test_missing_subject_is_rejected(jwt_manager: JWTManager) -> None:
    now = utcnow()
    token = jwt.encode(
        {"iss": ISSUER, "aud": ISSUER, "iat": now, "exp": now + timedelta(hours=1)},
        SECRET,
        algorithm=ALGORITHM,
    )
    assert jwt_manager.verify_jwt(token) is None


def test_garbage_is_rejected(jwt_manager: JWTManager) -> None:
    assert jwt_manager.verify_jwt("not.a.token") is None
    assert jwt_manager.verify_jwt("") is None


def test_empty_secret_fails_loudly() -> None:
    with pytest.raises(ValueError):
        JWTManager("", ISSUER, ISSUER)
