"""Startup service client: profile completion and milestones."""

from app.clients.base import ServiceClient


class StartupServiceClient(ServiceClient):
    service_name = "startup-service"

    async def get_my_startup(self, token: str) -> dict:
        return await self.get_object("/api/startups/me", token)
