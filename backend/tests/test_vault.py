"""
Test Suite for the Vault Request Workflow

pending -> under_review -> verified | rejected, admin-only transitions,
and who can see which requests.

Run with: pytest tests/test_vault.py -v
"""

import pytest

from app.core.errors import ForbiddenError, ValidationError
from app.modules.vault import services
from app.modules.vault.models import VaultRequest, VaultRequestStatus


CLAIM = {
    "nomineeName": "Priya Kumar",
    "relationToDeceased": "Spouse",
    "phoneNumber": "+91 98765 00001",
    "email": "priya@example.com",
    "deathCertificateUrl": "/files/7/1700000000000-certificate.pdf",
}


def submit(client, headers=None, **overrides):
    return client.post("/api/vault/requests", json={**CLAIM, **overrides}, headers=headers or {})


# =============================================================================
# TESTS - Submission
# =============================================================================

class TestSubmit:

    def test_anonymous_submission_is_pending(self, client):
        response = submit(client)

        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "pending"
        assert body["nomineeId"] is None
        assert body["reviewedAt"] is None
        assert body["vaultOpenedAt"] is None
        assert body["deathCertificateUrl"] == CLAIM["deathCertificateUrl"]

    def test_death_certificate_alias(self, client):
        payload = {k: v for k, v in CLAIM.items() if k != "deathCertificateUrl"}
        payload["deathCertificate"] = "/files/7/cert.png"

        response = client.post("/api/vault/requests", json=payload)

        assert response.json()["deathCertificateUrl"] == "/files/7/cert.png"

    def test_logged_in_nominee_is_recorded(self, client, nominee_user, nominee_headers, owner):
        # A nominee can't submit on someone else's behalf
        response = submit(client, nominee_headers, nomineeId=owner.id)

        assert response.status_code == 201
        assert response.json()["nomineeId"] == nominee_user.id

    def test_unknown_nominee_id_rejected(self, client):
        response = submit(client, nomineeId=999)

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "nomineeId"

    @pytest.mark.parametrize("role_user", ["owner", "admin", "super_admin"])
    def test_nominee_id_must_be_a_nominee(self, client, db_session, request, role_user):
        user = request.getfixturevalue(role_user)

        response = submit(client, nomineeId=user.id)

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "nomineeId"
        assert db_session.query(VaultRequest).count() == 0

    def test_anonymous_submission_for_nominee(self, client, nominee_user):
        response = submit(client, nomineeId=nominee_user.id)

        assert response.status_code == 201
        assert response.json()["nomineeId"] == nominee_user.id

    @pytest.mark.parametrize("field,value", [
        ("email", "not-an-email"),
        ("phoneNumber", "12345"),
        ("phoneNumber", "+91 (0) 98765-43210-98765-43210"),
        ("nomineeName", ""),
        ("relationToDeceased", "   "),
    ])
    def test_invalid_submission_persists_nothing(self, client, db_session, field, value):
        response = submit(client, **{field: value})

        assert response.status_code == 400
        assert field in [e["field"] for e in response.json()["errors"]]
        assert db_session.query(VaultRequest).count() == 0

    def test_service_rejects_invalid_dict(self, db_session):
        with pytest.raises(ValidationError) as exc:
            services.submit_request(db_session, {**CLAIM, "email": "bad"})

        assert exc.value.fields == ["email"]
        assert db_session.query(VaultRequest).count() == 0


# =============================================================================
# TESTS - Review transitions
# =============================================================================

class TestReview:

    def test_submit_then_approve(self, client, admin, admin_headers):
        request_id = submit(client).json()["id"]

        response = client.put(f"/api/vault/requests/{request_id}",
                              json={"status": "verified", "adminNotes": "Certificate checked"},
                              headers=admin_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "verified"
        assert body["reviewedBy"] == admin.id
        assert body["reviewedAt"].endswith("Z")
        assert body["vaultOpenedAt"] == body["reviewedAt"]
        assert body["adminNotes"] == "Certificate checked"

    def test_under_review_then_reject(self, client, admin_headers):
        request_id = submit(client).json()["id"]

        response = client.put(f"/api/vault/requests/{request_id}", json={"status": "under_review"},
                              headers=admin_headers)
        assert response.json()["status"] == "under_review"
        assert response.json()["reviewedAt"] is None

        response = client.put(f"/api/vault/requests/{request_id}",
                              json={"status": "rejected", "adminNotes": "Certificate illegible"},
                              headers=admin_headers)
        assert response.json()["status"] == "rejected"
        assert response.json()["vaultOpenedAt"] is None

    def test_reject_requires_notes(self, client, admin_headers):
        request_id = submit(client).json()["id"]

        response = client.put(f"/api/vault/requests/{request_id}", json={"status": "rejected"},
                              headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "adminNotes"

    def test_cannot_move_back_to_pending(self, client, admin_headers):
        request_id = submit(client).json()["id"]

        response = client.put(f"/api/vault/requests/{request_id}", json={"status": "pending"},
                              headers=admin_headers)

        assert response.status_code == 400

    def test_finished_request_cannot_reenter_review(self, client, admin_headers):
        request_id = submit(client).json()["id"]
        client.put(f"/api/vault/requests/{request_id}", json={"status": "verified"}, headers=admin_headers)

        response = client.put(f"/api/vault/requests/{request_id}", json={"status": "under_review"},
                              headers=admin_headers)

        assert response.status_code == 400

    def test_super_admin_can_review(self, client, super_admin_headers):
        request_id = submit(client).json()["id"]

        response = client.put(f"/api/vault/requests/{request_id}", json={"status": "verified"},
                              headers=super_admin_headers)

        assert response.status_code == 200

    @pytest.mark.parametrize("role_headers", ["owner_headers", "nominee_headers"])
    def test_non_admin_forbidden(self, client, request, role_headers):
        headers = request.getfixturevalue(role_headers)
        request_id = submit(client).json()["id"]

        response = client.put(f"/api/vault/requests/{request_id}", json={"status": "verified"}, headers=headers)

        assert response.status_code == 403
        assert response.json()["error"] == "forbidden"

    def test_forbidden_before_not_found(self, db_session, owner):
        with pytest.raises(ForbiddenError):
            services.approve_request(db_session, 999, owner)

    def test_missing_request(self, client, admin_headers):
        response = client.put("/api/vault/requests/999", json={"status": "verified"}, headers=admin_headers)

        assert response.status_code == 404

    def test_approve_overwrites_rejection(self, db_session, admin):
        vault_request = services.submit_request(db_session, CLAIM)
        services.reject_request(db_session, vault_request.id, admin, "Blurry scan")

        approved = services.approve_request(db_session, vault_request.id, admin)

        assert approved.status == VaultRequestStatus.VERIFIED
        assert approved.admin_notes is None
        assert approved.vault_opened_at is not None


# =============================================================================
# TESTS - Visibility
# =============================================================================

class TestVisibility:

    def test_admin_sees_all(self, client, admin_headers, nominee_headers):
        submit(client)
        submit(client, nominee_headers)

        response = client.get("/api/vault/requests", headers=admin_headers)

        assert len(response.json()) == 2

    def test_nominee_sees_only_own(self, client, nominee_user, nominee_headers):
        submit(client)
        own = submit(client, nominee_headers).json()

        response = client.get("/api/vault/requests", headers=nominee_headers)

        assert [r["id"] for r in response.json()] == [own["id"]]
        assert client.get(f"/api/vault/requests/{own['id']}", headers=nominee_headers).status_code == 200

    def test_nominee_cannot_read_others(self, client, nominee_headers):
        other = submit(client).json()

        response = client.get(f"/api/vault/requests/{other['id']}", headers=nominee_headers)

        assert response.status_code == 404

    def test_owner_cannot_list(self, client, owner_headers):
        response = client.get("/api/vault/requests", headers=owner_headers)

        assert response.status_code == 403

    def test_list_requires_authentication(self, client):
        assert client.get("/api/vault/requests").status_code == 401
