"""Supabase implementation for the local food catalog."""

from dataclasses import asdict, dataclass
from uuid import UUID

from supabase import Client

from food_catalog.domain.errors import PersistenceFailure
from food_catalog.domain.foods import CatalogFood, NormalizedFoodItem
from food_catalog.domain.nutrients import NUTRIENT_FIELDS
from food_catalog.services.catalog import CatalogRepository
from food_catalog.services.search import matches_query, query_tokens

_FOODS_TABLE = "food_items"
_LOGS_TABLE = "food_logs"


@dataclass
class SupabaseCatalogRepository(CatalogRepository):
    """Supabase-backed repository for catalog foods."""

    client: Client

    def list_recent(self, owner_id: UUID, limit: int) -> list[CatalogFood]:
        """Return the owner's newest foods first."""
        response = (
            self.client.table(_FOODS_TABLE)
            .select("*")
            .eq("user_id", str(owner_id))
            .order("id", desc=True)
            .limit(limit)
            .execute()
        )
        return [_parse_food(row) for row in response.data or []]

    def list_by_owner(self, owner_id: UUID) -> list[CatalogFood]:
        """Return every food the owner has created."""
        response = (
            self.client.table(_FOODS_TABLE)
            .select("*")
            .eq("user_id", str(owner_id))
            .order("id")
            .execute()
        )
        return [_parse_food(row) for row in response.data or []]

    def search_by_name(self, query: str) -> list[CatalogFood]:
        """Return foods whose name contains every query token."""
        tokens = query_tokens(query)
        if not tokens:
            return []
        # Narrow server-side on the first token; the rest are checked here.
        response = (
            self.client.table(_FOODS_TABLE)
            .select("*")
            .ilike("name", f"%{tokens[0]}%")
            .order("id")
            .execute()
        )
        foods = [_parse_food(row) for row in response.data or []]
        return [food for food in foods if matches_query(food.name, tokens)]

    def find_by_name(self, name: str, owner_id: UUID | None) -> CatalogFood | None:
        """Return a food with exactly this name for the owner, if present."""
        query = self.client.table(_FOODS_TABLE).select("*").eq("name", name)
        if owner_id is None:
            query = query.is_("user_id", "null")
        else:
            query = query.eq("user_id", str(owner_id))
        response = query.limit(1).execute()
        if not response.data:
            return None
        return _parse_food(response.data[0])

    def create_food(
        self, owner_id: UUID | None, item: NormalizedFoodItem
    ) -> CatalogFood:
        """Insert a food entry and return it."""
        payload = _food_payload(item)
        payload["original_serving_size"] = item.serving_size
        payload["user_id"] = str(owner_id) if owner_id is not None else None
        response = self.client.table(_FOODS_TABLE).insert(payload).execute()
        if not response.data:
            raise PersistenceFailure("Failed to create food entry")
        return _parse_food(response.data[0])

    def get_food(self, food_id: int) -> CatalogFood | None:
        """Return a food entry by id, if present."""
        response = (
            self.client.table(_FOODS_TABLE)
            .select("*")
            .eq("id", food_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_food(response.data[0])

    def update_food(self, food_id: int, item: NormalizedFoodItem) -> CatalogFood | None:
        """Replace a food entry's content."""
        response = (
            self.client.table(_FOODS_TABLE)
            .update(_food_payload(item))
            .eq("id", food_id)
            .execute()
        )
        if not response.data:
            return None
        return _parse_food(response.data[0])

    def delete_food(self, food_id: int) -> bool:
        """Delete a food entry after removing the log rows that reference it."""
        self.client.table(_LOGS_TABLE).delete().eq("food_item_id", food_id).execute()
        response = self.client.table(_FOODS_TABLE).delete().eq("id", food_id).execute()
        return bool(response.data)


def _food_payload(item: NormalizedFoodItem) -> dict[str, object]:
    return asdict(item)


def _parse_food(row: dict[str, object]) -> CatalogFood:
    """Parse a catalog row into a domain model."""
    owner_raw = row.get("user_id")
    nutrients = {field: float(row.get(field) or 0.0) for field in NUTRIENT_FIELDS}
    return CatalogFood(
        id=int(row["id"]),
        owner_id=UUID(str(owner_raw)) if owner_raw else None,
        item=NormalizedFoodItem(
            name=str(row.get("name", "")),
            serving_size=_optional_float(row.get("serving_size")),
            serving_size_unit=row.get("serving_size_unit"),
            serving_text=row.get("serving_text"),
            **nutrients,
        ),
        original_serving_size=_optional_float(row.get("original_serving_size")),
    )


def _optional_float(value: object) -> float | None:
    if isinstance(value, (int, float, str)):
        return float(value)
    return None
