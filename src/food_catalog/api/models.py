"""Pydantic models for the food catalog HTTP API."""

from dataclasses import asdict
from uuid import UUID

from pydantic import BaseModel, Field

from food_catalog.domain.foods import (
    CatalogFood,
    FoodRecord,
    NormalizedFoodItem,
    RawNutrient,
)


class RawNutrientModel(BaseModel):
    """Nutrient value as reported by FoodData Central."""

    code: str
    amount_per_100: float


class FoodRecordModel(BaseModel):
    """Search result payload."""

    id: int
    name: str
    serving_size: float | None = None
    serving_size_unit: str | None = None
    serving_text: str | None = None
    nutrients: list[RawNutrientModel] | None = None

    @classmethod
    def from_domain(cls, record: FoodRecord) -> "FoodRecordModel":
        return cls(
            id=record.id,
            name=record.name,
            serving_size=record.serving_size,
            serving_size_unit=record.serving_size_unit,
            serving_text=record.serving_text,
            nutrients=(
                None
                if record.nutrients is None
                else [
                    RawNutrientModel(code=n.code, amount_per_100=n.amount_per_100)
                    for n in record.nutrients
                ]
            ),
        )

    def to_domain(self) -> FoodRecord:
        return FoodRecord(
            id=self.id,
            name=self.name,
            serving_size=self.serving_size,
            serving_size_unit=self.serving_size_unit,
            serving_text=self.serving_text,
            nutrients=(
                None
                if self.nutrients is None
                else tuple(
                    RawNutrient(code=n.code, amount_per_100=n.amount_per_100)
                    for n in self.nutrients
                )
            ),
        )


class ImportFoodRequest(BaseModel):
    """Request to resolve a search result to a local catalog id."""

    food: FoodRecordModel
    owner_id: UUID | None = None


class FoodItemModel(BaseModel):
    """Per-gram nutrient record for a catalog entry."""

    name: str
    serving_size: float | None = None
    serving_size_unit: str | None = None
    serving_text: str | None = None
    calories: float = Field(default=0.0, ge=0)
    carbs: float = Field(default=0.0, ge=0)
    fat: float = Field(default=0.0, ge=0)
    protein: float = Field(default=0.0, ge=0)
    fiber: float = Field(default=0.0, ge=0)
    calcium: float = Field(default=0.0, ge=0)
    iron: float = Field(default=0.0, ge=0)
    sodium: float = Field(default=0.0, ge=0)
    vitamin_a: float = Field(default=0.0, ge=0)
    vitamin_c: float = Field(default=0.0, ge=0)
    vitamin_d: float = Field(default=0.0, ge=0)
    cholesterol: float = Field(default=0.0, ge=0)
    trans_fat: float = Field(default=0.0, ge=0)
    saturated_fat: float = Field(default=0.0, ge=0)
    polyunsaturated_fat: float = Field(default=0.0, ge=0)
    monounsaturated_fat: float = Field(default=0.0, ge=0)
    potassium: float = Field(default=0.0, ge=0)
    total_sugars: float = Field(default=0.0, ge=0)
    added_sugars: float = Field(default=0.0, ge=0)

    def to_domain(self) -> NormalizedFoodItem:
        return NormalizedFoodItem(**self.model_dump())


class CatalogFoodModel(FoodItemModel):
    """Catalog entry payload."""

    id: int
    owner_id: UUID | None = None
    original_serving_size: float | None = None

    @classmethod
    def from_domain(cls, food: CatalogFood) -> "CatalogFoodModel":
        return cls(
            id=food.id,
            owner_id=food.owner_id,
            original_serving_size=food.original_serving_size,
            **asdict(food.item),
        )
