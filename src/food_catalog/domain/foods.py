"""Domain models for food search and the local catalog."""

from dataclasses import dataclass
from enum import StrEnum
from uuid import UUID


class SearchMode(StrEnum):
    """Which sources a search fans out to."""

    LOCAL_ONLY = "local_only"
    COMBINED = "combined"


class ImportPolicy(StrEnum):
    """How imports treat an external food already present in the catalog."""

    ALLOW_DUPLICATES = "allow_duplicates"
    STRICT = "strict"


@dataclass(frozen=True)
class RawNutrient:
    """A nutrient value as reported by the external database (per 100 units)."""

    code: str
    amount_per_100: float


@dataclass(frozen=True)
class FoodRecord:
    """A search result from either source.

    ``nutrients`` is only set for external hits that have not been imported
    yet; ``None`` means the record already lives in the local catalog.
    """

    id: int
    name: str
    serving_size: float | None = None
    serving_size_unit: str | None = None
    serving_text: str | None = None
    nutrients: tuple[RawNutrient, ...] | None = None

    @property
    def is_imported(self) -> bool:
        return self.nutrients is None


@dataclass(frozen=True)
class NormalizedFoodItem:
    """Canonical food record with nutrients expressed per one unit of serving."""

    name: str
    serving_size: float | None = None
    serving_size_unit: str | None = None
    serving_text: str | None = None
    calories: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    protein: float = 0.0
    fiber: float = 0.0
    calcium: float = 0.0
    iron: float = 0.0
    sodium: float = 0.0
    vitamin_a: float = 0.0
    vitamin_c: float = 0.0
    vitamin_d: float = 0.0
    cholesterol: float = 0.0
    trans_fat: float = 0.0
    saturated_fat: float = 0.0
    polyunsaturated_fat: float = 0.0
    monounsaturated_fat: float = 0.0
    potassium: float = 0.0
    total_sugars: float = 0.0
    added_sugars: float = 0.0


@dataclass(frozen=True)
class CatalogFood:
    """A persisted catalog entry."""

    id: int
    owner_id: UUID | None
    item: NormalizedFoodItem
    original_serving_size: float | None = None

    @property
    def name(self) -> str:
        return self.item.name

    def to_record(self) -> FoodRecord:
        """Return the search-result view of this entry."""
        return FoodRecord(
            id=self.id,
            name=self.item.name,
            serving_size=self.item.serving_size,
            serving_size_unit=self.item.serving_size_unit,
            serving_text=self.item.serving_text,
        )
