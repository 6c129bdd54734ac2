"""Pitch service client: generated pitch decks."""

from app.clients.base import ServiceClient


class PitchServiceClient(ServiceClient):
    service_name = "pitch-service"

    async def get_my_pitches(self, token: str) -> list:
        return await self.get_list("/api/pitchs/me", token)
