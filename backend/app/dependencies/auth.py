"""Authentication dependencies for FastAPI routes."""

from fastapi import Depends, Header, HTTPException

from app.clients.auth import AuthServiceClient
from app.config import get_settings
from app.schemas.identity import UserIdentity


def get_auth_client() -> AuthServiceClient:
    settings = get_settings()
    return AuthServiceClient(settings.auth_service_url, settings.upstream_timeout)


def require_credential(authorization: str | None = Header(None)) -> str:
    """Return the raw Authorization header or raise 401."""
    if not authorization or not authorization.strip():
        raise HTTPException(status_code=401, detail="Authorization header required")
    return authorization


async def require_identity(
    credential: str = Depends(require_credential),
    auth_client: AuthServiceClient = Depends(get_auth_client),
) -> UserIdentity:
    """Resolve the caller through the auth service.

    Unauthenticated / IdentityUnavailable propagate to the app's
    DashboardError handler.
    """
    return await auth_client.get_current_user(credential)
