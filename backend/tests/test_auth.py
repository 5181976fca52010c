"""
Test Suite for Authentication

Covers registration, the phone + OTP + PIN login flow, token handling
and phone normalization.

Run with: pytest tests/test_auth.py -v
"""

from datetime import timedelta

import pytest

from app.core.auth import create_access_token
from app.core.config import settings
from app.modules.users.models import UserRole
from app.modules.users.services import deactivate_user, hash_pin, normalize_phone, verify_pin

TEST_PIN = "1234"


# =============================================================================
# TEST FIXTURES - Known scenarios with expected outcomes
# =============================================================================

PHONE_NORMALIZATION_SCENARIOS = [
    # (name, raw, expected)
    ("10 digits", "9876543210", "+919876543210"),
    ("Spaced 10 digits", "98765 43210", "+919876543210"),
    ("Country code without plus", "919876543210", "+919876543210"),
    ("Already international", "+91 98765-43210", "+919876543210"),
    ("Foreign number kept", "+1 (415) 555-0100", "+14155550100"),
]

REGISTRATION = {
    "name": "Rajesh Kumar",
    "phone": "98765 43210",
    "email": "Rajesh.Kumar@Example.com",
    "pin": "4321",
}


# =============================================================================
# TESTS - Phone normalization and PIN hashing
# =============================================================================

class TestPhoneNormalization:

    @pytest.mark.parametrize("name,raw,expected", PHONE_NORMALIZATION_SCENARIOS)
    def test_normalize_phone(self, name, raw, expected):
        assert normalize_phone(raw) == expected, name


class TestPinHashing:

    def test_hash_is_not_the_pin(self):
        assert hash_pin("1234") != "1234"
        assert len(hash_pin("1234")) == 64

    def test_verify_pin(self):
        stored = hash_pin("1234")
        assert verify_pin("1234", stored)
        assert not verify_pin("4321", stored)


# =============================================================================
# TESTS - Registration
# =============================================================================

class TestRegister:

    def test_register_returns_token_and_user(self, client):
        response = client.post("/api/auth/register", json=REGISTRATION)

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["token"]
        assert body["tokenType"] == "bearer"
        assert body["user"]["phone"] == "+919876543210"
        assert body["user"]["email"] == "rajesh.kumar@example.com"
        assert body["user"]["role"] == "owner"
        assert "pin" not in body["user"]
        assert "pinHash" not in body["user"]

    def test_token_from_register_works(self, client):
        token = client.post("/api/auth/register", json=REGISTRATION).json()["token"]

        response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200
        assert response.json()["name"] == "Rajesh Kumar"

    def test_duplicate_phone_conflicts(self, client):
        client.post("/api/auth/register", json=REGISTRATION)

        # Same number written differently
        response = client.post("/api/auth/register", json={
            **REGISTRATION, "phone": "+91 9876543210", "email": "other@example.com",
        })

        assert response.status_code == 409
        assert response.json()["error"] == "conflict"

    def test_duplicate_email_conflicts(self, client):
        client.post("/api/auth/register", json=REGISTRATION)

        response = client.post("/api/auth/register", json={**REGISTRATION, "phone": "9123456780"})

        assert response.status_code == 409

    @pytest.mark.parametrize("field,value", [
        ("pin", "12345"),
        ("pin", "abcd"),
        ("email", "not-an-email"),
        ("phone", "12345"),
        ("phone", "98765abc10"),
        ("phone", "+91 (0) 98765-43210-98765-43210"),
        ("name", "R"),
    ])
    def test_invalid_fields_rejected(self, client, field, value):
        response = client.post("/api/auth/register", json={**REGISTRATION, field: value})

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "validation_error"
        assert field in [e["field"] for e in body["errors"]]

    def test_cannot_self_register_as_admin(self, client):
        response = client.post("/api/auth/register", json={**REGISTRATION, "role": "admin"})

        assert response.status_code == 400

    def test_register_as_nominee(self, client):
        response = client.post("/api/auth/register", json={**REGISTRATION, "role": "nominee"})

        assert response.status_code == 201
        assert response.json()["user"]["role"] == "nominee"


# =============================================================================
# TESTS - OTP / PIN login
# =============================================================================

class TestLogin:

    def test_send_otp(self, client, owner):
        response = client.post("/api/auth/send-otp", json={"phone": owner.phone})

        assert response.status_code == 200
        assert response.json()["userId"] == owner.id

    def test_send_otp_unknown_phone(self, client):
        response = client.post("/api/auth/send-otp", json={"phone": "9000000000"})

        assert response.status_code == 404

    def test_verify_otp(self, client, owner):
        response = client.post("/api/auth/verify-otp", json={"phone": owner.phone, "otp": settings.DEMO_OTP})

        assert response.status_code == 200
        assert response.json()["userId"] == owner.id

    def test_wrong_otp_unauthorized(self, client, owner):
        response = client.post("/api/auth/verify-otp", json={"phone": owner.phone, "otp": "000000"})

        assert response.status_code == 401
        assert response.json()["error"] == "unauthorized"

    def test_login_with_otp(self, client, owner):
        response = client.post("/api/auth/login", json={"phone": owner.phone, "otp": settings.DEMO_OTP})

        assert response.status_code == 200
        assert response.json()["user"]["id"] == owner.id
        assert response.json()["token"]

    def test_verify_pin(self, client, owner):
        response = client.post("/api/auth/verify-pin", json={"userId": owner.id, "pin": TEST_PIN})

        assert response.status_code == 200
        assert response.json()["user"]["id"] == owner.id

    def test_wrong_pin_unauthorized(self, client, owner):
        response = client.post("/api/auth/verify-pin", json={"userId": owner.id, "pin": "9999"})

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid PIN"

    def test_logout(self, client):
        response = client.post("/api/auth/logout")

        assert response.status_code == 200
        assert response.json()["success"] is True


# =============================================================================
# TESTS - Token handling
# =============================================================================

class TestTokens:

    def test_me_requires_token(self, client):
        response = client.get("/api/auth/me")

        assert response.status_code == 401
        assert response.json()["success"] is False

    def test_garbage_token_rejected(self, client):
        response = client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-jwt"})

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid token"

    def test_expired_token_rejected(self, client, owner):
        token = create_access_token(owner, expires_delta=timedelta(minutes=-5))

        response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert response.json()["message"] == "Token has expired"

    def test_deactivated_user_token_rejected(self, client, db_session, owner, super_admin, headers_for):
        headers = headers_for(owner)
        deactivate_user(db_session, owner.id, acting_user=super_admin)

        response = client.get("/api/auth/me", headers=headers)

        assert response.status_code == 401

    def test_me_returns_role(self, client, make_user, headers_for):
        admin = make_user(UserRole.SUPER_ADMIN)

        response = client.get("/api/auth/me", headers=headers_for(admin))

        assert response.json()["role"] == "super-admin"
