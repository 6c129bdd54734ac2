"""Auth service client: the identity resolver."""

import logging

import httpx
from pydantic import ValidationError

from app.clients.base import ServiceClient
from app.schemas.identity import UserIdentity
from app.services.errors import IdentityUnavailable, Unauthenticated

logger = logging.getLogger(__name__)


class AuthServiceClient(ServiceClient):
    service_name = "auth-service"

    async def get_current_user(self, token: str) -> UserIdentity:
        """Resolve a bearer credential into (user id, role).

        Raises:
            Unauthenticated: the auth service rejected the credential (401/403)
            IdentityUnavailable: the auth service failed or answered nonsense
        """
        try:
            response = await self._send("/api/users/me", token)
        except httpx.HTTPError as e:
            logger.error("Auth service unreachable: %r", e)
            raise IdentityUnavailable("Identity service unavailable") from e

        if response.status_code in (401, 403):
            raise Unauthenticated("Invalid or expired credential")
        if response.is_error:
            logger.error("Auth service returned HTTP %d", response.status_code)
            raise IdentityUnavailable(f"Identity service returned HTTP {response.status_code}")

        try:
            return UserIdentity.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            logger.error("Auth service returned an unusable user payload: %s", e)
            raise IdentityUnavailable("Identity service returned an invalid user") from e
