"""FoodData Central nutrient numbers mapped to canonical nutrient fields."""

from types import MappingProxyType

# Field names match NormalizedFoodItem attributes.
NUTRIENT_CODE_TABLE = MappingProxyType(
    {
        "208": "calories",
        "205": "carbs",
        "204": "fat",
        "203": "protein",
        "291": "fiber",
        "301": "calcium",
        "303": "iron",
        "307": "sodium",
        "318": "vitamin_a",
        "401": "vitamin_c",
        "328": "vitamin_d",
        "601": "cholesterol",
        "605": "trans_fat",
        "606": "saturated_fat",
        "646": "polyunsaturated_fat",
        "645": "monounsaturated_fat",
        "306": "potassium",
        "269": "total_sugars",
        "539": "added_sugars",
    }
)

NUTRIENT_FIELDS: tuple[str, ...] = tuple(NUTRIENT_CODE_TABLE.values())

FIELD_TO_CODE = MappingProxyType(
    {field: code for code, field in NUTRIENT_CODE_TABLE.items()}
)
