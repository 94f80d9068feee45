"""Models for product database responses."""

from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict

from guaranteed_analysis.domain.nutrients import NutritionProfile


class Nutriments(BaseModel):
    """Per-100g nutrient values reported by the product database."""

    model_config = ConfigDict(extra="ignore")

    proteins_100g: float | None = None
    fat_100g: float | None = None
    fiber_100g: float | None = None
    moisture_100g: float | None = None
    ash_100g: float | None = None


class ProductPayload(BaseModel):
    """Product section of a product database response."""

    model_config = ConfigDict(extra="ignore")

    product_name: str | None = None
    brands: str | None = None
    nutriments: Nutriments | None = None
    categories_tags: list[str] | None = None


class ProductResponse(BaseModel):
    """Top-level product database response."""

    model_config = ConfigDict(extra="ignore")

    status: int
    product: ProductPayload | None = None


@dataclass(frozen=True)
class ExternalProduct:
    """A product as supplied by the external database."""

    barcode: str
    product_name: str
    brand: str
    nutrients: NutritionProfile
    categories_tags: tuple[str, ...] = field(default_factory=tuple)

    @property
    def product_text(self) -> str:
        """Name and brand, used for wet/dry keyword matching."""
        return f"{self.product_name} {self.brand}"
