"""Pydantic schema for the identity returned by the auth service."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict


class UserIdentity(BaseModel):
    """Resolved caller identity. Trusted as-is by the aggregator."""

    model_config = ConfigDict(extra="ignore")

    id: UUID
    role: str
    email: str | None = None
