"""Tests for the mock admin API and the editor running against it end to end."""

import httpx
import pytest
from fastapi.testclient import TestClient

import mock_api
from profile_editor.controllers.submission import SubmissionController, SubmissionState
from profile_editor.exceptions import ProfileApiError, ProfileNotFoundError
from profile_editor.forms.edit_model import CompositeEditModel
from profile_editor.schemas.profile import ProfileUpdateRequest
from profile_editor.services.admin_client import AdminApiClient

ADMIN_HEADERS = {"Authorization": f"Bearer {mock_api.MOCK_ADMIN_TOKEN}"}
USER_HEADERS = {"Authorization": f"Bearer {mock_api.MOCK_USER_TOKEN}"}


@pytest.fixture(autouse=True)
def fresh_store():
    mock_api.reset_store()
    yield
    mock_api.reset_store()


@pytest.fixture
def client():
    return TestClient(mock_api.app)


def api_client(token=mock_api.MOCK_ADMIN_TOKEN):
    return AdminApiClient(
        "http://testserver",
        token=token,
        transport=httpx.ASGITransport(app=mock_api.app),
    )


# ─────────────────────────────────────────────────────────────────
# HTTP surface
# ─────────────────────────────────────────────────────────────────


class TestMockEndpoints:

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_get_user_requires_auth(self, client):
        response = client.get("/api/admin/users/usr_mock123")

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "UNAUTHORIZED"

    def test_get_user_requires_admin(self, client):
        response = client.get("/api/admin/users/usr_mock123", headers=USER_HEADERS)
        assert response.status_code == 403

    def test_get_user(self, client):
        response = client.get("/api/admin/users/usr_mock123", headers=ADMIN_HEADERS)

        body = response.json()
        assert response.status_code == 200
        assert body["success"] is True
        assert body["data"]["email"] == "john.doe@example.com"

    def test_get_unknown_user(self, client):
        response = client.get("/api/admin/users/usr_missing", headers=ADMIN_HEADERS)

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "USER_NOT_FOUND"

    def test_update_validation_errors(self, client):
        response = client.put(
            "/api/admin/users/usr_mock123",
            json={"firstName": "", "phoneNumber": "invalid phone"},
            headers=ADMIN_HEADERS,
        )

        body = response.json()
        assert response.status_code == 422
        assert body["success"] is False
        assert body["error"]["code"] == "VALIDATION_ERROR"
        assert set(body["validationErrors"]) == {"firstName", "phoneNumber"}
        assert mock_api.users["usr_mock123"]["firstName"] == "John"

    def test_update_without_fields(self, client):
        response = client.put(
            "/api/admin/users/usr_mock123",
            json={"nickname": "JD"},
            headers=ADMIN_HEADERS,
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "NO_UPDATES"

    def test_address_change_reports_impact(self, client):
        response = client.put(
            "/api/admin/users/usr_mock123",
            json={"homeAddress": {
                "street": "Marktgasse 5",
                "city": "Bern",
                "postalCode": "3011",
                "country": "Switzerland",
            }},
            headers=ADMIN_HEADERS,
        )

        data = response.json()["data"]
        assert data["success"] is True
        assert data["profile"]["homeAddress"]["city"] == "Bern"
        assert data["addressChangeImpact"]["affectedRequests"] == 0

    def test_self_update_rejects_restricted_change(self, client):
        response = client.put(
            "/api/user/profile",
            json={"firstName": "Johnny", "role": "administrator"},
            headers=USER_HEADERS,
        )

        assert response.status_code == 403
        assert response.json()["error"]["details"] == {"fields": ["role"]}
        assert mock_api.users["usr_mock123"]["role"] == "employee"

    def test_self_update_accepts_unchanged_restricted(self, client):
        response = client.put(
            "/api/user/profile",
            json={"firstName": "Johnny", "role": "employee", "email": "john.doe@example.com"},
            headers=USER_HEADERS,
        )

        assert response.status_code == 200
        assert response.json()["data"]["firstName"] == "Johnny"


# ─────────────────────────────────────────────────────────────────
# End to end through AdminApiClient
# ─────────────────────────────────────────────────────────────────


class TestEndToEnd:

    @pytest.mark.asyncio
    async def test_admin_edit_round_trip(self):
        api = api_client()
        user = await api.get_user_details("usr_mock123")

        model = CompositeEditModel(user, is_privileged_edit=True)
        model.set_value("lastName", "Smith")
        model.set_value("weeklyDigest", True)
        controller = SubmissionController(model, user.id, api.update_user_profile)

        outcome = await controller.submit()

        assert controller.state == SubmissionState.SUCCESS
        assert outcome.profile.lastName == "Smith"
        assert outcome.addressChangeImpact is None

        fresh = await api.get_user_details("usr_mock123")
        assert fresh.lastName == "Smith"
        assert fresh.notificationPreferences.weeklyDigest is True
        assert fresh.privacySettings.dataRetentionConsent is True

    @pytest.mark.asyncio
    async def test_server_rejection_lands_on_field(self):
        api = api_client()
        user = await api.get_user_details("usr_mock123")

        model = CompositeEditModel(user, is_privileged_edit=True)
        model.set_value("email", "admin@example.com")
        controller = SubmissionController(model, user.id, api.update_user_profile)

        assert await controller.submit() is None

        email = model.identity.field("email")
        assert controller.state == SubmissionState.FAILED
        assert email.error_message == "Email address is already in use"
        assert model.is_valid() is False

    @pytest.mark.asyncio
    async def test_self_edit_round_trip(self):
        admin_api = api_client()
        user = await admin_api.get_user_details("usr_mock123")

        model = CompositeEditModel(user, is_privileged_edit=False)
        model.set_value("phoneNumber", "")
        model.set_value("city", "Winterthur")
        controller = SubmissionController(
            model,
            user.id,
            lambda user_id, request: api_client(mock_api.MOCK_USER_TOKEN).update_own_profile(request),
        )

        outcome = await controller.submit()

        assert outcome.success is True
        assert outcome.profile.homeAddress.city == "Winterthur"
        # Blank phone is left out, so the stored value stays
        assert outcome.profile.phoneNumber == "+41 79 123 45 67"

    @pytest.mark.asyncio
    async def test_unknown_user(self):
        with pytest.raises(ProfileNotFoundError):
            await api_client().get_user_details("usr_missing")

    @pytest.mark.asyncio
    async def test_non_admin_update_forbidden(self):
        with pytest.raises(ProfileApiError) as exc_info:
            await api_client(mock_api.MOCK_USER_TOKEN).update_user_profile(
                "usr_admin456",
                ProfileUpdateRequest(firstName="Mallory"),
            )

        assert exc_info.value.status_code == 403
        assert exc_info.value.code == "FORBIDDEN"
