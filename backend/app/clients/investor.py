"""Investor service client: matching and connections."""

from app.clients.base import ServiceClient


class InvestorServiceClient(ServiceClient):
    service_name = "investor-service"

    async def get_my_matches(self, token: str) -> list:
        return await self.get_list("/api/matching/for-me", token)

    async def get_active_connections(self, token: str) -> list:
        return await self.get_list("/api/connections/active", token)
