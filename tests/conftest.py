"""Shared test fixtures for the profile editor tests."""

import pytest
from unittest.mock import AsyncMock, MagicMock

from profile_editor.forms.edit_model import CompositeEditModel
from profile_editor.schemas.profile import ProfileSnapshot, ProfileUpdateResponse


@pytest.fixture
def sample_user_data():
    return {
        "id": "123",
        "email": "test@example.com",
        "firstName": "John",
        "lastName": "Doe",
        "employeeNumber": "EMP-001",
        "phoneNumber": "+41 79 123 45 67",
        "role": "employee",
        "status": "active",
        "isVerified": True,
        "homeAddress": {
            "street": "123 Main St",
            "city": "Zurich",
            "postalCode": "8001",
            "country": "Switzerland",
        },
        "homeCoordinates": {
            "latitude": 47.3769,
            "longitude": 8.5417,
        },
        "managerId": "456",
        "managerName": "Manager Name",
    }


@pytest.fixture
def snapshot(sample_user_data):
    return ProfileSnapshot.model_validate(sample_user_data)


@pytest.fixture
def admin_model(snapshot):
    return CompositeEditModel(snapshot, is_privileged_edit=True)


@pytest.fixture
def self_model(snapshot):
    return CompositeEditModel(snapshot, is_privileged_edit=False)


@pytest.fixture
def success_outcome(snapshot):
    return ProfileUpdateResponse(success=True, profile=snapshot)


@pytest.fixture
def mock_admin_client(snapshot, success_outcome):
    client = MagicMock()
    client.get_user_details = AsyncMock(return_value=snapshot)
    client.update_user_profile = AsyncMock(return_value=success_outcome)
    client.update_own_profile = AsyncMock(return_value=success_outcome)
    return client
