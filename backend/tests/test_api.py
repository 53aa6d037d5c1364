"""Tests for the tenant context HTTP API."""

import pytest
from fastapi.testclient import TestClient

from tenantscope.api import create_app
from tenantscope.auth import JWTService
from tenantscope.config import AppSettings
from tenantscope.store.config import DatabaseConfig

SECRET = "test-secret-key-for-tenantscope-api-tests"

SCOPE_HEADERS = {
    "X-User-Id": "u1",
    "X-User-Name": "Dr. Test",
    "X-Tenant-Id": "t1",
    "X-Company-Id": "c1",
    "X-Branch-Id": "b1",
    "X-User-Roles": "Doctor, Nurse",
}


def _settings(tmp_path, baseline_dir, disable_auth=True):
    return AppSettings(
        base_path=tmp_path,
        baseline_path=baseline_dir,
        database=DatabaseConfig(url=f"sqlite:///{tmp_path / 'test.db'}"),
        secret_key=SECRET,
        disable_auth=disable_auth,
    )


@pytest.fixture
def client(tmp_path, baseline_dir, store):
    """Header-trusting client over the seeded test database."""
    with TestClient(create_app(_settings(tmp_path, baseline_dir))) as client:
        yield client


@pytest.fixture
def jwt_client(tmp_path, baseline_dir, store):
    with TestClient(create_app(_settings(tmp_path, baseline_dir, disable_auth=False))) as client:
        yield client


class TestGetContext:
    def test_returns_merged_context(self, client):
        response = client.get("/api/tenant/context", headers=SCOPE_HEADERS)
        assert response.status_code == 200
        data = response.json()
        assert data["tenantName"] == "Acme Health"
        assert data["branchName"] == "Jumeirah"
        assert data["userName"] == "Dr. Test"
        assert data["userRoles"] == ["Doctor", "Nurse"]
        assert data["userPermissions"] == ["lab.order", "patients.view"]
        assert [item["id"] for item in data["navigation"]] == ["dashboard", "lab"]
        assert data["baselineVersion"] == "test-1"

    def test_reflects_stored_overrides(self, client, store):
        store.put_override("company", "c1", "settings", {"currency": "USD"})
        data = client.get("/api/tenant/context", headers=SCOPE_HEADERS).json()
        assert data["settings"]["currency"] == "USD"

    def test_anonymous_is_401(self, client):
        response = client.get("/api/tenant/context")
        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_missing_branch_is_400(self, client):
        headers = {k: v for k, v in SCOPE_HEADERS.items() if k != "X-Branch-Id"}
        assert client.get("/api/tenant/context", headers=headers).status_code == 400

    def test_foreign_branch_is_404(self, client):
        response = client.get("/api/tenant/context", headers={**SCOPE_HEADERS, "X-Branch-Id": "b2"})
        assert response.status_code == 404
        assert response.json() == {"message": "Branch 'b2' not found for company 'c1'"}

    def test_uninitialized_service_is_500_message(self, client):
        client.app.state.resolver = None
        response = client.get("/api/tenant/context", headers=SCOPE_HEADERS)
        assert response.status_code == 500
        assert response.json() == {"message": "An unexpected error occurred"}


class TestIntegrity:
    def test_requires_admin_role(self, client):
        assert client.get("/api/tenant/context/integrity", headers=SCOPE_HEADERS).status_code == 403

    def test_baseline_report(self, client):
        headers = {**SCOPE_HEADERS, "X-User-Roles": "ClinicAdmin"}
        data = client.get("/api/tenant/context/integrity", headers=headers).json()
        assert data == {"baselineVersion": "test-1", "errorCount": 0, "warningCount": 0, "issues": []}

    def test_resolved_report_sees_overrides(self, client, store):
        store.put_override("company", "c1", "formLayouts", {
            "patient": {"sections": [{"id": "main", "fields": ["name", "nickname"]}]},
        })
        headers = {**SCOPE_HEADERS, "X-User-Roles": "ClinicAdmin"}
        data = client.get("/api/tenant/context/integrity?resolved=true", headers=headers).json()
        assert data["errorCount"] == 1
        assert data["issues"][0]["message"] == "unknown field 'nickname'"


class TestBearerTokens:
    def test_valid_token(self, jwt_client):
        token = JWTService(SECRET).issue_access_token("u1", "t2", "c3", "b3", roles=["Doctor"])
        response = jwt_client.get("/api/tenant/context", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 200
        assert response.json()["clinicType"] == "AUDIOLOGY"

    def test_headers_ignored_when_auth_enabled(self, jwt_client):
        assert jwt_client.get("/api/tenant/context", headers=SCOPE_HEADERS).status_code == 401

    def test_expired_token(self, jwt_client):
        token = JWTService(SECRET).issue_access_token("u1", "t1", "c1", "b1", ttl=-60)
        response = jwt_client.get("/api/tenant/context", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401

    def test_token_signed_with_other_key(self, jwt_client):
        token = JWTService("another-secret-key-that-is-long-enough").issue_access_token("u1", "t1", "c1", "b1")
        response = jwt_client.get("/api/tenant/context", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401
