"""
Tests for password hashing, password strength and identity tokens.
"""
from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from src.config import settings
from src.auth.models import UserRole
from src.auth.exceptions import InvalidTokenException, NOT_AUTHORIZED
from src.core.security import (
    hash_password,
    verify_password,
    is_strong_password,
    create_access_token,
    decode_access_token
)


def test_hash_is_salted_and_verifies():
    first = hash_password("Passw0rd!")
    second = hash_password("Passw0rd!")

    assert first != "Passw0rd!"
    assert first != second
    assert verify_password("Passw0rd!", first)
    assert verify_password("Passw0rd!", second)
    assert not verify_password("Passw0rd?", first)


def test_verify_against_malformed_hash_is_false():
    assert verify_password("Passw0rd!", "not-a-bcrypt-hash") is False


@pytest.mark.parametrize("password, expected", [
    ("Passw0rd!", True),
    ("Str0ng Pass", True),
    ("password", False),
    ("Passw0rd", False),
    ("passw0rd!", False),
    ("PASSW0RD!", False),
    ("Password!", False),
    ("Pa0!", False),
    ("ÄÖÜäöü1!", False),
    ("Pässw٣rd!", False),
    ("Pässw0rd!", True),
])
def test_password_strength(password, expected):
    assert is_strong_password(password) is expected


def test_doctor_token_roundtrip():
    token = create_access_token(7, UserRole.DOCTOR)
    payload = decode_access_token(token)

    assert payload.user_id == 7
    assert payload.is_doctor is True
    assert payload.is_patient is False


def test_patient_token_roundtrip():
    payload = decode_access_token(create_access_token(3, UserRole.PATIENT))

    assert payload.user_id == 3
    assert payload.is_doctor is False
    assert payload.is_patient is True


def test_token_lifetime_is_three_days():
    before = datetime.now(timezone.utc).timestamp()
    claims = jwt.get_unverified_claims(create_access_token(1, UserRole.PATIENT))

    lifetime = claims["exp"] - before
    assert 3 * 24 * 3600 - 60 < lifetime <= 3 * 24 * 3600 + 5


def test_expired_token_is_rejected():
    token = create_access_token(1, UserRole.DOCTOR, expires_delta=timedelta(seconds=-10))

    with pytest.raises(InvalidTokenException) as exc_info:
        decode_access_token(token)
    assert exc_info.value.status_code == 401
    assert exc_info.value.detail == NOT_AUTHORIZED


def test_tampered_token_is_rejected():
    patient_token = create_access_token(1, UserRole.PATIENT)
    doctor_token = create_access_token(1, UserRole.DOCTOR)
    header, _, signature = patient_token.split(".")
    swapped = ".".join([header, doctor_token.split(".")[1], signature])
    forged = jwt.encode(
        {"userId": 1, "isDoctor": True, "isPatient": False},
        "some-other-secret",
        algorithm="HS256"
    )

    with pytest.raises(InvalidTokenException):
        decode_access_token(swapped)
    with pytest.raises(InvalidTokenException):
        decode_access_token(forged)


def test_token_without_expected_claims_is_rejected():
    token = jwt.encode({"sub": "someone"}, settings.secret_key, algorithm=settings.algorithm)

    with pytest.raises(InvalidTokenException):
        decode_access_token(token)


def test_garbage_token_is_rejected():
    with pytest.raises(InvalidTokenException):
        decode_access_token("not.a.token")
