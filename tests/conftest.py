"""Shared test fixtures."""

from dataclasses import dataclass, field

import pytest

from guaranteed_analysis.adapters.openpetfoodfacts_client import ProductDatabaseClient
from guaranteed_analysis.config import Settings
from guaranteed_analysis.services.cache import InMemoryCache
from guaranteed_analysis.services.consensus import ConsensusResolver
from guaranteed_analysis.services.extraction import LabelTextExtractor
from guaranteed_analysis.services.products import ProductLookupService
from guaranteed_analysis.services.records import NutritionRecordBuilder
from guaranteed_analysis.services.validation import NutrientValidator

WET_LABEL = [
    "GUARANTEED ANALYSIS",
    "Crude Protein (min) 11.5%",
    "Crude Fat (min) 6.5%",
    "Crude Fiber (max) 0.5%",
    "Moisture (max) 79.0%",
    "Ash (max) 1.8%",
]

DRY_LABEL = [
    "Analytische Bestandteile:",
    "Rohprotein 40,0 %",
    "Fettgehalt 18,0 %",
    "Rohfaser 3,0 %",
    "Feuchtigkeit 10,0 %",
    "Rohasche 8,0 %",
]


@dataclass
class FakeClock:
    """Manually advanced clock for cache tests."""

    now: float = 1000.0

    def __call__(self) -> float:
        return self.now


@dataclass
class FakeProductDatabaseClient(ProductDatabaseClient):
    """Fake product database returning canned payloads."""

    payloads: dict[str, dict[str, object] | None] = field(
        default_factory=lambda: {
            "4017721837194": {
                "status": 1,
                "product": {
                    "product_name": "Carny Adult Rind+Huhn",
                    "brands": "Animonda,Carny",
                    "categories_tags": ["en:pet-food", "en:wet-cat-food"],
                    "nutriments": {
                        "proteins_100g": 11.0,
                        "fat_100g": 6.5,
                        "fiber_100g": 0.5,
                        "moisture_100g": 79.0,
                        "ash_100g": 0.21,
                    },
                },
            }
        }
    )
    failures: list[Exception] = field(default_factory=list)
    calls: list[str] = field(default_factory=list)

    async def fetch_product(self, barcode: str) -> dict[str, object] | None:
        self.calls.append(barcode)
        if self.failures:
            raise self.failures.pop(0)
        return self.payloads.get(barcode)


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
def extractor() -> LabelTextExtractor:
    return LabelTextExtractor()


@pytest.fixture
def validator() -> NutrientValidator:
    return NutrientValidator()


@pytest.fixture
def resolver() -> ConsensusResolver:
    return ConsensusResolver()


@pytest.fixture
def record_builder(validator: NutrientValidator) -> NutritionRecordBuilder:
    return NutritionRecordBuilder(validator=validator)


@pytest.fixture
def product_client() -> FakeProductDatabaseClient:
    return FakeProductDatabaseClient()


@pytest.fixture
def product_lookup_service(
    product_client: FakeProductDatabaseClient,
) -> ProductLookupService:
    return ProductLookupService(
        client=product_client,
        cache=InMemoryCache(),
        retry_delay_seconds=0,
    )
