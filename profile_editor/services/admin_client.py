"""
HTTP client for the admin user API.

Implements the read (fetch profile) and write (update profile) collaborators
used by the profile editor.
"""

import logging
from typing import Any, Dict, Optional

import httpx

from profile_editor.exceptions import ProfileApiError, ProfileNotFoundError
from profile_editor.schemas.profile import (
    ProfileSnapshot,
    ProfileUpdateRequest,
    ProfileUpdateResponse,
)

logger = logging.getLogger(__name__)


def extract_validation_errors(body: Any) -> Optional[Dict[str, str]]:
    """
    Find a field -> message mapping in an error envelope.

    Looked up at the top level first, then under ``error`` and
    ``error.details``.
    """
    if not isinstance(body, dict):
        return None

    error = body.get("error") if isinstance(body.get("error"), dict) else {}
    details = error.get("details") if isinstance(error.get("details"), dict) else {}

    for candidate in (body, error, details):
        mapping = candidate.get("validationErrors")
        if isinstance(mapping, dict) and mapping:
            return {str(field): str(message) for field, message in mapping.items()}

    return None


class AdminApiClient:
    """
    Async client for /api/admin/users and /api/user/profile.

    A fresh httpx.AsyncClient is opened per call.
    """

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout: float = 10.0,
        admin_users_path: str = "/api/admin/users",
        self_profile_path: str = "/api/user/profile",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: API root, e.g. http://localhost:5002
            token: Bearer token sent with every request
            timeout: Request timeout in seconds
            admin_users_path: Path of the admin users collection
            self_profile_path: Path of the caller's own profile
            transport: Custom httpx transport (used by tests)
        """
        self._base_url = base_url.rstrip("/")
        self._token = token
        self._timeout = timeout
        self._admin_users_path = admin_users_path.rstrip("/")
        self._self_profile_path = self_profile_path
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        headers = {"Accept": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"

        return httpx.AsyncClient(
            base_url=self._base_url,
            headers=headers,
            timeout=self._timeout,
            transport=self._transport,
        )

    # ─────────────────────────────────────────────────────────────────
    # Read
    # ─────────────────────────────────────────────────────────────────

    async def get_user_details(self, user_id: str) -> ProfileSnapshot:
        """
        Fetch one user's profile.

        Raises:
            ProfileNotFoundError: No such user
            ProfileApiError: Any other non-2xx response
            httpx.HTTPError: Transport failure
        """
        async with self._client() as client:
            response = await client.get(f"{self._admin_users_path}/{user_id}")

        body = self._json(response)
        if response.is_error:
            self._raise_for_error(response, body, user_id)

        return ProfileSnapshot.model_validate(self._unwrap(body))

    # ─────────────────────────────────────────────────────────────────
    # Write
    # ─────────────────────────────────────────────────────────────────

    async def update_user_profile(
        self,
        user_id: str,
        request: ProfileUpdateRequest,
    ) -> ProfileUpdateResponse:
        """
        Admin update of any user's profile (PUT /api/admin/users/{id}).

        Raises:
            ProfileApiError: Non-2xx response, with validation_errors when
                the server rejected individual fields
            httpx.HTTPError: Transport failure
        """
        path = f"{self._admin_users_path}/{user_id}"
        return await self._put_profile(path, request, user_id)

    async def update_own_profile(self, request: ProfileUpdateRequest) -> ProfileUpdateResponse:
        """Self-service update of the caller's profile (PUT /api/user/profile)."""
        return await self._put_profile(self._self_profile_path, request, None)

    async def _put_profile(
        self,
        path: str,
        request: ProfileUpdateRequest,
        user_id: Optional[str],
    ) -> ProfileUpdateResponse:
        payload = request.to_payload()
        logger.debug(f"PUT {path} fields={sorted(payload.keys())}")

        async with self._client() as client:
            response = await client.put(path, json=payload)

        body = self._json(response)
        if response.is_error:
            self._raise_for_error(response, body, user_id)

        data = self._unwrap(body)
        if isinstance(data, dict) and "profile" in data:
            return ProfileUpdateResponse.model_validate(data)

        # Self-service endpoint answers with the bare profile
        return ProfileUpdateResponse(
            success=True,
            profile=ProfileSnapshot.model_validate(data),
        )

    # ─────────────────────────────────────────────────────────────────
    # Helpers
    # ─────────────────────────────────────────────────────────────────

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return {}

    @staticmethod
    def _unwrap(body: Any) -> Any:
        if isinstance(body, dict) and "data" in body:
            return body["data"]
        return body

    @staticmethod
    def _raise_for_error(
        response: httpx.Response,
        body: Any,
        user_id: Optional[str],
    ) -> None:
        error = body.get("error", {}) if isinstance(body, dict) else {}
        if not isinstance(error, dict):
            error = {"message": str(error)}

        message = error.get("message") or f"Request failed with status {response.status_code}"
        code = error.get("code") or f"HTTP_{response.status_code}"

        logger.error(f"Admin API error {response.status_code} {code}: {message}")

        if response.status_code == 404 and user_id is not None:
            raise ProfileNotFoundError(user_id, message=message)

        raise ProfileApiError(
            status_code=response.status_code,
            message=message,
            code=code,
            details=error.get("details"),
            validation_errors=extract_validation_errors(body),
        )
