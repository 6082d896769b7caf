"""Tests for the catalog persistence gateway."""

from dataclasses import asdict
from uuid import uuid4

import pytest

from food_catalog.domain.errors import FoodNotFound, PersistenceFailure
from food_catalog.domain.foods import (
    FoodRecord,
    ImportPolicy,
    NormalizedFoodItem,
    RawNutrient,
)
from food_catalog.domain.nutrients import NUTRIENT_FIELDS
from food_catalog.services.catalog import CatalogGateway
from tests.conftest import InMemoryCatalogRepository


def _external(name: str = "Greek Yogurt (Brand X)") -> FoodRecord:
    return FoodRecord(
        id=2001,
        name=name,
        serving_size=170,
        serving_size_unit="g",
        serving_text="1 container",
        nutrients=(RawNutrient(code="203", amount_per_100=10),),
    )


def test_imported_record_returns_id_without_write() -> None:
    repository = InMemoryCatalogRepository()
    gateway = CatalogGateway(repository)

    food_id = gateway.import_if_needed(FoodRecord(id=42, name="Oats"))

    assert food_id == 42
    assert repository.created == []


def test_external_record_is_normalized_and_persisted() -> None:
    repository = InMemoryCatalogRepository(next_id=500)
    gateway = CatalogGateway(repository)

    food_id = gateway.import_if_needed(_external())

    assert food_id == 500
    assert food_id != 2001
    stored = repository.foods[food_id]
    assert stored.item.protein == pytest.approx(0.1)
    values = asdict(stored.item)
    assert all(values[field] == 0 for field in NUTRIENT_FIELDS if field != "protein")
    assert stored.item.serving_text == "1 container"
    assert stored.original_serving_size == 170


def test_import_records_owner() -> None:
    repository = InMemoryCatalogRepository()
    gateway = CatalogGateway(repository)
    owner_id = uuid4()

    food_id = gateway.import_if_needed(_external(), owner_id=owner_id)

    assert repository.foods[food_id].owner_id == owner_id


def test_allow_duplicates_imports_twice() -> None:
    repository = InMemoryCatalogRepository()
    gateway = CatalogGateway(repository)

    first = gateway.import_if_needed(_external())
    second = gateway.import_if_needed(_external())

    assert first != second
    assert len(repository.created) == 2


def test_strict_policy_reuses_existing_entry() -> None:
    repository = InMemoryCatalogRepository()
    gateway = CatalogGateway(repository, import_policy=ImportPolicy.STRICT)

    first = gateway.import_if_needed(_external())
    second = gateway.import_if_needed(_external())

    assert first == second
    assert len(repository.created) == 1


def test_write_failure_raises_persistence_failure() -> None:
    repository = InMemoryCatalogRepository(fail_writes=True)
    gateway = CatalogGateway(repository)

    with pytest.raises(PersistenceFailure):
        gateway.import_if_needed(_external())

    assert repository.foods == {}


def test_get_food_missing_raises() -> None:
    gateway = CatalogGateway(InMemoryCatalogRepository())

    with pytest.raises(FoodNotFound):
        gateway.get_food(9)


def test_get_food_store_error_raises_persistence_failure() -> None:
    repository = InMemoryCatalogRepository(fail_reads=True)
    food = repository.add("Oats")
    gateway = CatalogGateway(repository)

    with pytest.raises(PersistenceFailure):
        gateway.get_food(food.id)


def test_update_food_replaces_fields() -> None:
    repository = InMemoryCatalogRepository()
    food = repository.add("Oats", calories=3.8)
    gateway = CatalogGateway(repository)

    updated = gateway.update_food(
        food.id, NormalizedFoodItem(name="Rolled Oats", calories=3.7, fiber=0.1)
    )

    assert updated.name == "Rolled Oats"
    assert updated.item.calories == 3.7
    assert gateway.get_food(food.id).item.fiber == 0.1


def test_update_missing_food_raises() -> None:
    gateway = CatalogGateway(InMemoryCatalogRepository())

    with pytest.raises(FoodNotFound):
        gateway.update_food(3, NormalizedFoodItem(name="Oats"))


def test_update_store_error_raises_persistence_failure() -> None:
    repository = InMemoryCatalogRepository()
    food = repository.add("Oats")
    repository.fail_writes = True
    gateway = CatalogGateway(repository)

    with pytest.raises(PersistenceFailure):
        gateway.update_food(food.id, NormalizedFoodItem(name="Oats"))


def test_delete_food_removes_log_rows() -> None:
    repository = InMemoryCatalogRepository()
    food = repository.add("Oats")
    other = repository.add("Rice")
    repository.logs = {1: food.id, 2: other.id}
    gateway = CatalogGateway(repository)

    gateway.delete_food(food.id)

    assert food.id not in repository.foods
    assert repository.logs == {2: other.id}

    with pytest.raises(FoodNotFound):
        gateway.delete_food(food.id)
