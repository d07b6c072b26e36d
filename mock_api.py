"""
Admin User API Mock Server

A FastAPI mock server that simulates the user profile endpoints used by the
profile editor, for local development and testing without the real backend.

Run with: uvicorn mock_api:app --port 5002 --reload
"""

import copy
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import Body, Depends, FastAPI, Header, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from common.utils import (
    APIException,
    BadRequestException,
    ForbiddenException,
    NotFoundException,
    ValidationException,
    error_response,
    success_response,
)
from profile_editor.config import settings
from profile_editor.forms.edit_model import ADDRESS_RULES, IDENTITY_RULES
from profile_editor.forms.rules import describe_error, validate_value
from profile_editor.schemas.profile import PROFILE_VISIBILITIES

logging.basicConfig(
    level=settings.get_log_level(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


# =============================================================================
# APP SETUP
# =============================================================================

app = FastAPI(
    title="Admin User API Mock",
    description="Mock API server for profile editor development",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://localhost:4200"],
    allow_credentials=True,
    allow_methods=["GET", "PUT", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "Accept"],
)


@app.exception_handler(APIException)
async def api_exception_handler(request: Request, exc: APIException):
    return JSONResponse(
        status_code=exc.status_code,
        content=error_response(
            exc.message,
            code=exc.code,
            details=exc.details,
            validation_errors=getattr(exc, "validation_errors", None),
        ),
    )


# =============================================================================
# MOCK DATA
# =============================================================================

MOCK_ADMIN_TOKEN = "mock_admin_token"
MOCK_USER_TOKEN = "mock_user_token"

SEED_USERS: Dict[str, dict] = {
    "usr_mock123": {
        "id": "usr_mock123",
        "email": "john.doe@example.com",
        "firstName": "John",
        "lastName": "Doe",
        "phoneNumber": "+41 79 123 45 67",
        "employeeNumber": "EMP-001",
        "role": "employee",
        "status": "active",
        "isVerified": True,
        "homeAddress": {
            "street": "Bahnhofstrasse 1",
            "city": "Zurich",
            "postalCode": "8001",
            "country": "Switzerland",
        },
        "homeCoordinates": {"latitude": 47.3769, "longitude": 8.5417},
        "managerId": "usr_admin456",
        "managerName": "Admin User",
        "registrationDate": "2024-01-15T09:00:00Z",
    },
    "usr_admin456": {
        "id": "usr_admin456",
        "email": "admin@example.com",
        "firstName": "Admin",
        "lastName": "User",
        "employeeNumber": "EMP-000",
        "role": "administrator",
        "status": "active",
        "isVerified": True,
        "homeAddress": {
            "street": "Paradeplatz 8",
            "city": "Zurich",
            "postalCode": "8001",
            "country": "Switzerland",
        },
        "registrationDate": "2023-06-01T09:00:00Z",
    },
}

MOCK_TOKENS = {
    MOCK_ADMIN_TOKEN: "usr_admin456",
    MOCK_USER_TOKEN: "usr_mock123",
}

users: Dict[str, dict] = copy.deepcopy(SEED_USERS)

RESTRICTED_FIELDS = ("email", "employeeNumber", "role", "status")
UPDATABLE_FIELDS = (
    "firstName",
    "lastName",
    "phoneNumber",
    "homeAddress",
    "notificationPreferences",
    "privacySettings",
) + RESTRICTED_FIELDS


def reset_store() -> None:
    """Restore the seed users."""
    users.clear()
    users.update(copy.deepcopy(SEED_USERS))


# =============================================================================
# AUTH
# =============================================================================

def require_auth(authorization: Optional[str] = Header(None)) -> dict:
    token = (authorization or "").replace("Bearer ", "")
    user_id = MOCK_TOKENS.get(token)
    if not user_id or user_id not in users:
        raise APIException(401, "Unauthorized", code="UNAUTHORIZED")
    return users[user_id]


def require_admin(user: dict = Depends(require_auth)) -> dict:
    if user.get("role") != "administrator":
        raise ForbiddenException(
            "Only administrators can update other user profiles",
        )
    return user


# =============================================================================
# VALIDATION
# =============================================================================

def validate_update(user_id: str, payload: Dict[str, Any]) -> Dict[str, str]:
    """Field name -> message for every rejected field in the payload."""
    errors: Dict[str, str] = {}

    for field, rule in IDENTITY_RULES.items():
        if field not in payload:
            continue
        field_errors = validate_value(payload[field], rule)
        if field_errors:
            kind = next(iter(field_errors))
            errors[field] = describe_error(field, kind, field_errors[kind], rule)

    address = payload.get("homeAddress")
    if address is not None:
        if not isinstance(address, dict):
            errors["homeAddress"] = "homeAddress must be an object"
        else:
            for field, rule in ADDRESS_RULES.items():
                field_errors = validate_value(address.get(field), rule)
                if field_errors:
                    kind = next(iter(field_errors))
                    errors[field] = describe_error(field, kind, field_errors[kind], rule)

    privacy = payload.get("privacySettings")
    if isinstance(privacy, dict) and privacy.get("profileVisibility") not in PROFILE_VISIBILITIES:
        errors["profileVisibility"] = "profileVisibility must be one of: " + ", ".join(PROFILE_VISIBILITIES)

    email = payload.get("email")
    if email and "email" not in errors:
        for other in users.values():
            if other["id"] != user_id and other["email"].lower() == str(email).lower():
                errors["email"] = "Email address is already in use"
                break

    return errors


def apply_update(user_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
    """Validate and store an update; returns the update response body."""
    user = users.get(user_id)
    if user is None:
        raise NotFoundException("User profile not found", code="USER_NOT_FOUND")

    updates = {key: value for key, value in payload.items() if key in UPDATABLE_FIELDS}
    if not updates:
        raise BadRequestException("No fields to update", code="NO_UPDATES")

    errors = validate_update(user_id, updates)
    if errors:
        logger.info(f"Rejected profile update for {user_id}: {sorted(errors)}")
        raise ValidationException(
            "Profile validation failed",
            code="VALIDATION_ERROR",
            validation_errors=errors,
        )

    address_changed = (
        "homeAddress" in updates and updates["homeAddress"] != user.get("homeAddress")
    )

    user.update(updates)
    user["profileUpdatedAt"] = datetime.now(timezone.utc).isoformat()
    logger.info(f"Profile updated for user {user_id}: {sorted(updates)}")

    response: Dict[str, Any] = {"success": True, "profile": user}
    if address_changed:
        response["addressChangeImpact"] = {
            "affectedRequests": 0,
            "distanceChanges": [],
            "totalAllowanceImpact": 0.0,
            "requiresManagerNotification": False,
        }
    return response


# =============================================================================
# HEALTH CHECK
# =============================================================================

@app.get("/health")
async def health_check():
    return {
        "status": "ok",
        "service": "admin-user-mock-api",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


# =============================================================================
# ADMIN USER ENDPOINTS
# =============================================================================

@app.get("/api/admin/users/{user_id}")
async def get_user_details(user_id: str, admin: dict = Depends(require_admin)):
    user = users.get(user_id)
    if user is None:
        raise NotFoundException("User not found", code="USER_NOT_FOUND")
    return success_response(user)


@app.put("/api/admin/users/{user_id}")
async def update_user_profile(
    user_id: str,
    payload: Dict[str, Any] = Body(...),
    admin: dict = Depends(require_admin),
):
    return success_response(apply_update(user_id, payload))


# =============================================================================
# SELF-SERVICE PROFILE ENDPOINT
# =============================================================================

@app.put("/api/user/profile")
async def update_own_profile(
    payload: Dict[str, Any] = Body(...),
    user: dict = Depends(require_auth),
):
    # Restricted fields come back unchanged from a self-service form
    changed = [
        field for field in RESTRICTED_FIELDS
        if field in payload and payload[field] != user.get(field)
    ]
    if changed:
        raise ForbiddenException(
            "Cannot update restricted fields. Contact administrator for changes.",
            details={"fields": changed},
        )

    updates = {key: value for key, value in payload.items() if key not in RESTRICTED_FIELDS}
    return success_response(apply_update(user["id"], updates)["profile"])


# =============================================================================
# MAIN
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=5002)
