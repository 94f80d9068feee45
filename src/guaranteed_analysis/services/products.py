"""Product database lookups used as the external baseline."""

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from guaranteed_analysis.adapters.openpetfoodfacts_client import ProductDatabaseClient
from guaranteed_analysis.domain.nutrients import Nutrient, NutritionProfile
from guaranteed_analysis.domain.products import ExternalProduct, ProductResponse
from guaranteed_analysis.domain.validation import NutrientBounds
from guaranteed_analysis.services.cache import MISSING, Cache

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

_logger = logging.getLogger(__name__)

UNKNOWN_PRODUCT_NAME = "Unknown Product"
UNKNOWN_BRAND = "Unknown Brand"

# database values outside these ranges are usually unit or entry mistakes
_INTAKE_BOUNDS = {
    Nutrient.PROTEIN: NutrientBounds(minimum=5.0, maximum=70.0),
    Nutrient.FAT: NutrientBounds(minimum=1.0, maximum=35.0),
}


@dataclass
class ProductLookupService:
    """Fetches products from the external database with caching."""

    client: ProductDatabaseClient
    cache: Cache
    ttl_seconds: float = 3600
    debug: bool = False
    retry_attempts: int = 1
    retry_delay_seconds: float = 0.3

    async def lookup(self, barcode: str) -> ExternalProduct | None:
        """Return the product for a barcode, or None if it is unknown."""
        cache_key = f"product:{barcode}"
        cached = self.cache.get(cache_key)
        if cached is not MISSING:
            return cached

        payload = await self._call_with_retry(
            lambda: self.client.fetch_product(barcode),
            action=f"fetch_product:{barcode}",
        )
        product = parse_product(barcode, payload) if payload is not None else None
        self.cache.set(cache_key, product, ttl_seconds=self.ttl_seconds)
        if self.debug:
            _logger.info("Product lookup: barcode=%s found=%s", barcode, product is not None)
        return product

    async def _call_with_retry(
        self,
        func: "Callable[[], Awaitable[dict[str, object] | None]]",
        *,
        action: str,
    ) -> dict[str, object] | None:
        """Call an async function with a short retry."""
        attempt = 0
        while True:
            try:
                return await func()
            except Exception as exc:
                attempt += 1
                _logger.warning(
                    "Product %s failed (attempt %s/%s, status=%s): %s",
                    action,
                    attempt,
                    self.retry_attempts + 1,
                    _status_code_from_exception(exc),
                    exc,
                )
                if attempt > self.retry_attempts:
                    raise
                await asyncio.sleep(self.retry_delay_seconds)


def parse_product(barcode: str, payload: dict[str, object]) -> ExternalProduct | None:
    """Convert a raw database payload into an external product.

    Protein and fat outside their intake ranges are dropped; fiber, moisture
    and ash are kept as reported so a scan can correct them later.
    """
    response = ProductResponse.model_validate(payload)
    if response.status != 1 or response.product is None:
        return None

    product = response.product
    name = (product.product_name or "").strip() or UNKNOWN_PRODUCT_NAME
    brand = _first_brand(product.brands)
    tags = tuple(product.categories_tags or ())

    nutriments = product.nutriments
    if nutriments is None:
        nutrients = NutritionProfile()
    else:
        nutrients = NutritionProfile(
            protein=_screen(Nutrient.PROTEIN, nutriments.proteins_100g),
            fat=_screen(Nutrient.FAT, nutriments.fat_100g),
            fiber=nutriments.fiber_100g,
            moisture=nutriments.moisture_100g,
            ash=nutriments.ash_100g,
        )

    return ExternalProduct(
        barcode=barcode,
        product_name=name,
        brand=brand,
        nutrients=nutrients,
        categories_tags=tags,
    )


def _first_brand(brands: str | None) -> str:
    if not brands:
        return UNKNOWN_BRAND
    first = brands.split(",")[0].strip()
    return first or UNKNOWN_BRAND


def _screen(nutrient: Nutrient, value: float | None) -> float | None:
    if value is None:
        return None
    bounds = _INTAKE_BOUNDS[nutrient]
    if bounds.minimum <= value <= bounds.maximum:
        return value
    _logger.warning(
        "Dropping database %s %.1f%%: outside %.0f-%.0f%%",
        nutrient.value,
        value,
        bounds.minimum,
        bounds.maximum,
    )
    return None


def _status_code_from_exception(exc: Exception) -> str:
    """Extract HTTP status code from an exception, if available."""
    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    if isinstance(status_code, int):
        return str(status_code)
    return "n/a"
