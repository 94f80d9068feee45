"""Open Pet Food Facts product API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx

DEFAULT_BASE_URL = "https://world.openpetfoodfacts.org/api/v2/product"
DEFAULT_USER_AGENT = "GuaranteedAnalysis/1.0"


class ProductDatabaseClient(Protocol):
    """Interface for product database lookups."""

    async def fetch_product(self, barcode: str) -> dict[str, object] | None:
        """Return the raw product payload, or None if the barcode is unknown."""


@dataclass
class HttpxOpenPetFoodFactsClient(ProductDatabaseClient):
    """HTTPX-backed Open Pet Food Facts client."""

    base_url: str
    user_agent: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(
        cls, base_url: str = DEFAULT_BASE_URL, user_agent: str = DEFAULT_USER_AGENT
    ) -> "HttpxOpenPetFoodFactsClient":
        """Create a client with a managed httpx session."""
        return cls(
            base_url=base_url.rstrip("/"),
            user_agent=user_agent,
            http_client=httpx.AsyncClient(),
        )

    async def fetch_product(self, barcode: str) -> dict[str, object] | None:
        """Fetch a product by barcode."""
        response = await self.http_client.get(
            f"{self.base_url}/{barcode}.json",
            headers={"User-Agent": self.user_agent},
            timeout=15,
        )
        if response.status_code == httpx.codes.NOT_FOUND:
            return None
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
