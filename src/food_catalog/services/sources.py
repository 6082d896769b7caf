"""Search sources: the local food catalog and FoodData Central."""

import asyncio
import logging
import math
from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar
from uuid import UUID

from food_catalog.adapters.fdc_client import FdcClient
from food_catalog.domain.errors import SourceUnavailable, ValidationError
from food_catalog.domain.foods import CatalogFood, FoodRecord, RawNutrient
from food_catalog.services.cache import Cache
from food_catalog.services.catalog import CatalogRepository

_logger = logging.getLogger(__name__)

LOCAL_SOURCE = "local_catalog"
EXTERNAL_SOURCE = "fdc"

_T = TypeVar("_T")


@dataclass
class LocalCatalogSource:
    """Read-only view of the local catalog for search.

    Repository calls are synchronous, so they run in a worker thread to let
    the external search proceed concurrently.
    """

    repository: CatalogRepository
    first_n_limit: int = 20

    async def first_n(self, owner_id: UUID, n: int | None = None) -> list[FoodRecord]:
        """Return the owner's most recently added entries."""
        limit = self.first_n_limit if n is None else n
        if limit < 0:
            raise ValidationError("n must not be negative")
        foods = await self._run(self.repository.list_recent, owner_id, limit)
        return _to_records(foods)

    async def by_name(self, owner_id: UUID) -> list[FoodRecord]:
        """Return all of the owner's entries; name filtering happens later."""
        foods = await self._run(self.repository.list_by_owner, owner_id)
        return _to_records(foods)

    async def search_all(self, term: str) -> list[FoodRecord]:
        """Return catalog-wide entries matching every token of ``term``."""
        foods = await self._run(self.repository.search_by_name, term)
        return _to_records(foods)

    @staticmethod
    async def _run(func: Callable[..., _T], *args: object) -> _T:
        try:
            return await asyncio.to_thread(func, *args)
        except Exception as exc:
            raise SourceUnavailable(LOCAL_SOURCE, str(exc)) from exc


@dataclass
class ExternalDatabaseSource:
    """FoodData Central search mapped into food records."""

    client: FdcClient
    cache: Cache
    page_size: int = 50
    cache_ttl_seconds: int = 3600
    debug: bool = False

    async def search(self, term: str, page_size: int | None = None) -> list[FoodRecord]:
        """Search FDC, raising ``SourceUnavailable`` on any transport or payload error."""
        size = self.page_size if page_size is None else page_size
        if size <= 0:
            raise ValidationError("page_size must be positive")
        cache_key = f"fdc:search:{term.lower()}:{size}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, list):
            return cached

        try:
            payload = await self.client.search_foods(term, page_size=size)
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            raise SourceUnavailable(
                EXTERNAL_SOURCE,
                f"{type(exc).__name__} (status={_status_code_from_exception(exc)})",
            ) from exc

        records = _parse_search_payload(payload)
        self.cache.set(cache_key, records, ttl_seconds=self.cache_ttl_seconds)
        if self.debug:
            _logger.info("FDC search: query=%s results=%s", term, len(records))
        return records


def _to_records(foods: list[CatalogFood]) -> list[FoodRecord]:
    return [food.to_record() for food in foods]


def display_name(description: str, brand_name: str | None) -> str:
    """Name shown for an FDC hit, with the brand appended when present."""
    if brand_name:
        return f"{description} ({brand_name})"
    return description


def _parse_search_payload(payload: object) -> list[FoodRecord]:
    """Map an FDC search payload into food records."""
    if not isinstance(payload, dict):
        raise SourceUnavailable(EXTERNAL_SOURCE, "response is not an object")
    hits = payload.get("foods", [])
    if not isinstance(hits, list):
        raise SourceUnavailable(EXTERNAL_SOURCE, "'foods' is not a list")
    try:
        return [_parse_hit(hit) for hit in hits]
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise SourceUnavailable(EXTERNAL_SOURCE, f"malformed hit: {exc!r}") from exc


def _parse_hit(hit: dict[str, object]) -> FoodRecord:
    description = str(hit.get("description") or "")
    return FoodRecord(
        id=int(hit["fdcId"]),
        name=display_name(description, hit.get("brandName") or None),
        serving_size=_optional_float(hit.get("servingSize")),
        serving_size_unit=hit.get("servingSizeUnit"),
        serving_text=hit.get("householdServingFullText"),
        nutrients=tuple(
            RawNutrient(
                code=str(nutrient.get("nutrientNumber", "")),
                amount_per_100=_parse_amount(nutrient.get("value")),
            )
            for nutrient in hit.get("foodNutrients") or []
        ),
    )


def _parse_amount(value: object) -> float:
    """Parse a reported nutrient value; unusable values count as zero."""
    if not isinstance(value, (int, float, str)):
        return 0.0
    try:
        amount = float(value)
    except ValueError:
        return 0.0
    if not math.isfinite(amount):
        return 0.0
    return amount


def _optional_float(value: object) -> float | None:
    if not isinstance(value, (int, float, str)):
        return None
    try:
        return float(value)
    except ValueError:
        return None


def _status_code_from_exception(exc: Exception) -> str:
    """Extract HTTP status code from an exception, if available."""
    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    if isinstance(status_code, int):
        return str(status_code)
    return "n/a"
