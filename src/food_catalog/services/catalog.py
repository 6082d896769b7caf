"""Catalog persistence gateway for imported and maintained foods."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol, TypeVar
from uuid import UUID

from food_catalog.domain.errors import FoodNotFound, PersistenceFailure
from food_catalog.domain.foods import (
    CatalogFood,
    FoodRecord,
    ImportPolicy,
    NormalizedFoodItem,
)
from food_catalog.services.normalizer import normalize

_logger = logging.getLogger(__name__)

_T = TypeVar("_T")


class CatalogRepository(Protocol):
    """Persistence interface for the local food catalog."""

    def list_recent(self, owner_id: UUID, limit: int) -> list[CatalogFood]:
        """Return the owner's most recently added foods."""

    def list_by_owner(self, owner_id: UUID) -> list[CatalogFood]:
        """Return every food the owner has created."""

    def search_by_name(self, query: str) -> list[CatalogFood]:
        """Return catalog foods whose name contains every query token."""

    def find_by_name(self, name: str, owner_id: UUID | None) -> CatalogFood | None:
        """Return a food with exactly this name for the owner, if present."""

    def create_food(
        self, owner_id: UUID | None, item: NormalizedFoodItem
    ) -> CatalogFood:
        """Create a food entry and return it."""

    def get_food(self, food_id: int) -> CatalogFood | None:
        """Return a food entry by id, if present."""

    def update_food(self, food_id: int, item: NormalizedFoodItem) -> CatalogFood | None:
        """Replace a food entry's content; ``None`` when it does not exist."""

    def delete_food(self, food_id: int) -> bool:
        """Delete a food entry and its log rows; ``False`` when it did not exist."""


@dataclass
class CatalogGateway:
    """Single write path into the local catalog."""

    repository: CatalogRepository
    import_policy: ImportPolicy = ImportPolicy.ALLOW_DUPLICATES
    debug: bool = False

    def import_if_needed(self, record: FoodRecord, owner_id: UUID | None = None) -> int:
        """Return the local id for a search result, importing it first if needed."""
        if record.is_imported:
            return record.id

        item = normalize(record)
        if self.import_policy is ImportPolicy.STRICT:
            existing = self._call(
                lambda: self.repository.find_by_name(item.name, owner_id),
                action="find_by_name",
            )
            if existing is not None:
                if self.debug:
                    _logger.info(
                        "Import reused catalog food: name=%s id=%s",
                        item.name,
                        existing.id,
                    )
                return existing.id

        created = self._call(
            lambda: self.repository.create_food(owner_id, item), action="create"
        )
        if self.debug:
            _logger.info(
                "Imported external food: source_id=%s local_id=%s",
                record.id,
                created.id,
            )
        return created.id

    def get_food(self, food_id: int) -> CatalogFood:
        """Return a catalog entry or raise ``FoodNotFound``."""
        food = self._call(lambda: self.repository.get_food(food_id), action="get")
        if food is None:
            raise FoodNotFound(food_id)
        return food

    def update_food(self, food_id: int, item: NormalizedFoodItem) -> CatalogFood:
        """Replace the nutrient and serving fields of an existing entry."""
        updated = self._call(
            lambda: self.repository.update_food(food_id, item), action="update"
        )
        if updated is None:
            raise FoodNotFound(food_id)
        return updated

    def delete_food(self, food_id: int) -> None:
        """Delete an entry together with the log rows that reference it."""
        deleted = self._call(
            lambda: self.repository.delete_food(food_id), action="delete"
        )
        if not deleted:
            raise FoodNotFound(food_id)

    @staticmethod
    def _call(func: Callable[[], _T], *, action: str) -> _T:
        """Run a repository call, converting store errors to PersistenceFailure."""
        try:
            return func()
        except PersistenceFailure:
            raise
        except Exception as exc:
            _logger.exception("Catalog %s failed", action)
            raise PersistenceFailure(f"Catalog {action} failed: {exc}") from exc
