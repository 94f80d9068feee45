"""Dependency container wiring."""

from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass

from guaranteed_analysis.adapters.openpetfoodfacts_client import (
    HttpxOpenPetFoodFactsClient,
)
from guaranteed_analysis.app_logging import configure_logging
from guaranteed_analysis.config import Settings, load_validation_ranges
from guaranteed_analysis.services.cache import InMemoryCache
from guaranteed_analysis.services.consensus import ConsensusResolver
from guaranteed_analysis.services.extraction import LabelTextExtractor
from guaranteed_analysis.services.products import ProductLookupService
from guaranteed_analysis.services.records import NutritionRecordBuilder
from guaranteed_analysis.services.scanning import ScanSession
from guaranteed_analysis.services.validation import NutrientValidator


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    extractor: LabelTextExtractor
    validator: NutrientValidator
    resolver: ConsensusResolver
    record_builder: NutritionRecordBuilder
    product_lookup_service: ProductLookupService
    close_resources: Callable[[], Awaitable[None]]

    def start_scan_session(
        self, category_tags: Iterable[str] | None = None, product_text: str = ""
    ) -> ScanSession:
        """Create a fresh accumulator for one scanning session."""
        return ScanSession(
            extractor=self.extractor,
            validator=self.validator,
            resolver=self.resolver,
            record_builder=self.record_builder,
            category_tags=tuple(category_tags or ()),
            product_text=product_text,
        )


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    configure_logging()

    validator = NutrientValidator(
        ranges=load_validation_ranges(resolved_settings.validation_ranges_path)
    )
    product_client = HttpxOpenPetFoodFactsClient.create(
        base_url=resolved_settings.openpetfoodfacts_base_url,
        user_agent=resolved_settings.openpetfoodfacts_user_agent,
    )
    product_lookup_service = ProductLookupService(
        client=product_client,
        cache=InMemoryCache(),
        ttl_seconds=resolved_settings.product_cache_ttl_seconds,
        debug=resolved_settings.debug,
    )

    async def close_resources() -> None:
        await product_client.close()

    return AppContainer(
        settings=resolved_settings,
        extractor=LabelTextExtractor(),
        validator=validator,
        resolver=ConsensusResolver(),
        record_builder=NutritionRecordBuilder(validator=validator),
        product_lookup_service=product_lookup_service,
        close_resources=close_resources,
    )
