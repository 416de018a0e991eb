"""
Identity verification and the role gate.
"""
from datetime import timedelta

from proshift.core.auth.dependencies import check_role, ensure_owner
from proshift.core.auth.schemas import VerifiedIdentity
from proshift.core.auth.service import IdentityVerifier

import pytest
from fastapi import HTTPException

from tests.conftest import auth_headers, make_token


class TestIdentityVerification:

    def test_missing_header_is_unauthorized(self, client):
        response = client.get("/api/v1/auth/me")
        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"

    def test_garbage_token_is_forbidden(self, client):
        response = client.get("/api/v1/auth/me", headers={"Authorization": "Bearer not-a-token"})
        assert response.status_code == 403

    def test_token_signed_with_other_key_is_forbidden(self, client):
        token = make_token("someone@proshift.com", key="another-key")
        response = client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 403

    def test_expired_token_is_forbidden(self, client):
        token = make_token("someone@proshift.com", expires_in=timedelta(minutes=-5))
        response = client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 403

    def test_token_without_email_is_forbidden(self, client):
        token = make_token(None, uid="abc123")
        response = client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 403

    def test_verifier_returns_identity_with_claims(self):
        identity = IdentityVerifier().verify(make_token("rider@proshift.com", name="Karim"))
        assert identity.email == "rider@proshift.com"
        assert identity.claims["name"] == "Karim"

    def test_me_for_unregistered_identity(self, client):
        response = client.get("/api/v1/auth/me", headers=auth_headers("new@proshift.com"))
        assert response.status_code == 200
        assert response.json() == {
            "email": "new@proshift.com", "name": None, "photo": None, "role": None, "registered": False
        }

    def test_me_returns_stored_role(self, client, seed_user):
        seed_user("admin@proshift.com", role="admin")
        response = client.get("/api/v1/auth/me", headers=auth_headers("admin@proshift.com"))
        assert response.json()["role"] == "admin"
        assert response.json()["registered"] is True


class TestRoleGate:

    def test_check_role_granted(self, db, seed_user):
        seed_user("admin@proshift.com", role="admin")
        result = check_role(db, VerifiedIdentity(email="admin@proshift.com"), "admin")
        assert result.granted
        assert result.role == "admin"

    def test_check_role_mismatch(self, db, seed_user):
        seed_user("user@proshift.com")
        result = check_role(db, VerifiedIdentity(email="user@proshift.com"), "admin")
        assert not result.granted
        assert result.role == "user"

    def test_unknown_user_is_treated_as_mismatch(self, db):
        result = check_role(db, VerifiedIdentity(email="ghost@proshift.com"), "rider")
        assert not result.granted
        assert result.role is None

    def test_admin_route_rejects_plain_user(self, client, seed_user):
        seed_user("user@proshift.com")
        response = client.get("/api/v1/riders/pending", headers=auth_headers("user@proshift.com"))
        assert response.status_code == 403

    def test_rider_route_rejects_admin(self, client, seed_user):
        seed_user("admin@proshift.com", role="admin")
        response = client.get("/api/v1/deliveries/assigned", headers=auth_headers("admin@proshift.com"))
        assert response.status_code == 403

    def test_admin_route_rejects_unknown_user_with_403(self, client):
        response = client.get("/api/v1/riders/pending", headers=auth_headers("ghost@proshift.com"))
        assert response.status_code == 403

    def test_ensure_owner_is_case_insensitive(self):
        ensure_owner(VerifiedIdentity(email="Nadia@ProShift.com"), "nadia@proshift.com")

    def test_ensure_owner_rejects_other_email(self):
        with pytest.raises(HTTPException) as exc:
            ensure_owner(VerifiedIdentity(email="nadia@proshift.com"), "rafi@proshift.com")
        assert exc.value.status_code == 403

    def test_check_permissions_for_rider(self, client, seed_user):
        seed_user("rider@proshift.com", role="rider")
        response = client.get("/api/v1/auth/check-permissions", headers=auth_headers("rider@proshift.com"))
        body = response.json()
        assert body["can_access"]["rider_panel"] is True
        assert body["can_access"]["admin_panel"] is False
        assert "cashout" in body["permissions"]
