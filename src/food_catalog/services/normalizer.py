"""Conversion of external per-100 nutrient lists into per-gram catalog records."""

import math

from food_catalog.domain.foods import FoodRecord, NormalizedFoodItem
from food_catalog.domain.nutrients import FIELD_TO_CODE, NUTRIENT_CODE_TABLE

# External values are reported per 100 units; the catalog stores per 1 unit.
PER_GRAM_DIVISOR = 100.0


def normalize(record: FoodRecord) -> NormalizedFoodItem:
    """Build the canonical per-gram record for a not-yet-imported search hit."""
    if record.nutrients is None:
        raise ValueError(f"Food {record.id} is already imported; nothing to normalize")

    per_gram: dict[str, float] = {}
    for nutrient in record.nutrients:
        if nutrient.code not in NUTRIENT_CODE_TABLE:
            continue
        per_gram[nutrient.code] = _per_gram(nutrient.amount_per_100)

    values = {field: per_gram.get(code, 0.0) for field, code in FIELD_TO_CODE.items()}
    return NormalizedFoodItem(
        name=record.name,
        serving_size=record.serving_size,
        serving_size_unit=record.serving_size_unit,
        serving_text=record.serving_text,
        **values,
    )


def _per_gram(amount_per_100: float) -> float:
    # NaN and infinities count as unparseable.
    if not math.isfinite(amount_per_100):
        return 0.0
    return max(amount_per_100 / PER_GRAM_DIVISOR, 0.0)
