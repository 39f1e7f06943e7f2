"""
Tests for the bearer-token guards on protected routes.
"""
from datetime import timedelta

import pytest
from jose import jwt

from src.config import settings
from src.auth.models import UserRole
from src.core.security import create_access_token

NOT_AUTHORIZED = {"error": "Not Authorized."}


def test_missing_header_is_rejected(client):
    response = client.get("/api/users/doctors")

    assert response.status_code == 401
    assert response.json() == NOT_AUTHORIZED


def test_non_bearer_header_is_rejected(client, signup_patient):
    token = signup_patient()["token"]

    response = client.get("/api/users/doctors", headers={"Authorization": f"Token {token}"})

    assert response.status_code == 401
    assert response.json() == NOT_AUTHORIZED


def test_garbage_token_is_rejected(client, auth_header):
    response = client.get("/api/users/doctors", headers=auth_header("garbage"))

    assert response.status_code == 401
    assert response.json() == NOT_AUTHORIZED


def test_expired_token_is_rejected(client, signup_doctor, auth_header):
    doctor = signup_doctor()
    token = create_access_token(doctor["userId"], UserRole.DOCTOR, expires_delta=timedelta(seconds=-5))

    response = client.get("/api/users/mypatients", headers=auth_header(token))

    assert response.status_code == 401
    assert response.json() == NOT_AUTHORIZED


def test_token_for_deleted_identity_is_rejected(client, auth_header):
    token = create_access_token(999, UserRole.PATIENT)

    response = client.get("/api/users/yourdoctors", headers=auth_header(token))

    assert response.status_code == 401
    assert response.json() == NOT_AUTHORIZED


def test_token_without_role_is_rejected_by_user_guard(client, signup_patient, auth_header):
    patient = signup_patient()
    token = jwt.encode(
        {"userId": patient["userId"], "isDoctor": False, "isPatient": False},
        settings.secret_key,
        algorithm=settings.algorithm
    )

    response = client.get("/api/users/doctors", headers=auth_header(token))

    assert response.status_code == 401
    assert response.json() == NOT_AUTHORIZED


def test_both_guards_accept_their_own_role(client, signup_doctor, signup_patient, auth_header):
    doctor = signup_doctor()
    patient = signup_patient()

    assert client.get("/api/users/mypatients", headers=auth_header(doctor["token"])).status_code == 200
    assert client.get("/api/users/yourdoctors", headers=auth_header(patient["token"])).status_code == 200


@pytest.mark.parametrize("method, path", [
    ("get", "/api/users/mypatients"),
    ("post", "/api/users/note"),
    ("patch", "/api/users/note/edit/1"),
    ("delete", "/api/users/note/delete/1"),
])
def test_patient_token_on_doctor_routes(client, signup_patient, auth_header, method, path):
    token = signup_patient()["token"]

    kwargs = {"headers": auth_header(token)}
    if method in ("post", "patch"):
        kwargs["json"] = {"title": "t", "description": "d", "patientId": 1}
    response = getattr(client, method)(path, **kwargs)

    assert response.status_code == 401
    assert response.json() == NOT_AUTHORIZED


@pytest.mark.parametrize("method, path", [
    ("get", "/api/users/yourdoctors"),
    ("patch", "/api/users/subscribe/1"),
    ("patch", "/api/users/unsubscribe/1"),
])
def test_doctor_token_on_patient_routes(client, signup_doctor, auth_header, method, path):
    token = signup_doctor()["token"]

    response = getattr(client, method)(path, headers=auth_header(token))

    assert response.status_code == 401
    assert response.json() == NOT_AUTHORIZED


def test_token_with_both_flags_is_rejected_by_role_guards(client, signup_doctor, signup_patient, auth_header):
    doctor = signup_doctor()
    signup_patient()
    token = jwt.encode(
        {"userId": doctor["userId"], "isDoctor": True, "isPatient": True},
        settings.secret_key,
        algorithm=settings.algorithm
    )

    assert client.get("/api/users/mypatients", headers=auth_header(token)).status_code == 401
    assert client.get("/api/users/yourdoctors", headers=auth_header(token)).status_code == 401


def test_token_from_another_secret_is_rejected(client, signup_doctor, auth_header):
    doctor = signup_doctor()
    token = jwt.encode(
        {"userId": doctor["userId"], "isDoctor": True, "isPatient": False},
        "not-the-server-secret",
        algorithm="HS256"
    )

    response = client.get("/api/users/mypatients", headers=auth_header(token))

    assert response.status_code == 401
