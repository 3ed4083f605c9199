"""Edamam food database API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx


class EdamamClient(Protocol):
    """Interface for the Edamam food-database parser."""

    async def parse(self, ingredient: str) -> dict[str, object]:
        """Run the parser for an ingredient and return raw API data."""


@dataclass
class HttpxEdamamClient(EdamamClient):
    """HTTPX-backed Edamam client."""

    app_id: str
    app_key: str
    base_url: str
    http_client: httpx.AsyncClient
    category: str = "generic-foods"
    timeout_seconds: float = 15

    @classmethod
    def create(
        cls, app_id: str, app_key: str, base_url: str, category: str = "generic-foods"
    ) -> "HttpxEdamamClient":
        """Create an Edamam client with a managed httpx session."""
        return cls(
            app_id=app_id,
            app_key=app_key,
            base_url=base_url,
            http_client=httpx.AsyncClient(),
            category=category,
        )

    async def parse(self, ingredient: str) -> dict[str, object]:
        """Search the parser endpoint for an ingredient."""
        url = f"{self.base_url}/parser"
        response = await self.http_client.get(
            url,
            params={
                "app_id": self.app_id,
                "app_key": self.app_key,
                "ingr": ingredient,
                "category": self.category,
            },
            timeout=self.timeout_seconds,
        )
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
