"""Food search across the local catalog and FoodData Central."""

import asyncio
import logging
from collections.abc import Awaitable
from dataclasses import dataclass
from uuid import UUID

from food_catalog.domain.errors import SourceUnavailable
from food_catalog.domain.foods import FoodRecord, SearchMode
from food_catalog.services.sources import ExternalDatabaseSource, LocalCatalogSource

_logger = logging.getLogger(__name__)


def query_tokens(term: str | None) -> list[str]:
    """Split a query into lower-cased whitespace-separated tokens."""
    if not term:
        return []
    return term.lower().split()


def matches_query(name: str, tokens: list[str]) -> bool:
    """True when every token is a substring of the lower-cased name."""
    lowered = name.lower()
    return all(token in lowered for token in tokens)


def names_match(local_name: str, external_name: str) -> bool:
    """Duplicate test between a local entry and an external hit.

    Exact comparison keeps results compatible with existing catalogs; swap in a
    case-folded or trimmed key here without touching the merge.
    """
    return local_name == external_name


def merge_results(
    local: list[FoodRecord], external: list[FoodRecord]
) -> list[FoodRecord]:
    """Local records first, then external hits not already named locally."""
    merged = list(local)
    for record in external:
        if any(names_match(existing.name, record.name) for existing in local):
            continue
        merged.append(record)
    return merged


@dataclass
class FoodSearchService:
    """Fans a query out to the active sources and merges the answers."""

    local_source: LocalCatalogSource
    external_source: ExternalDatabaseSource
    debug: bool = False

    async def search(
        self, term: str | None, owner_id: UUID, mode: SearchMode
    ) -> list[FoodRecord]:
        """Return deduplicated, filtered results for ``term``."""
        tokens = query_tokens(term)
        if not tokens:
            if mode is SearchMode.LOCAL_ONLY:
                return await self._degrade(self.local_source.first_n(owner_id))
            return []

        if mode is SearchMode.LOCAL_ONLY:
            results = await self._degrade(self.local_source.by_name(owner_id))
        else:
            local, external = await asyncio.gather(
                self._degrade(self.local_source.search_all(term)),
                self._degrade(self.external_source.search(term)),
            )
            results = merge_results(local, external)

        filtered = [record for record in results if matches_query(record.name, tokens)]
        if self.debug:
            _logger.info(
                "Food search: term=%s mode=%s results=%s",
                term,
                mode.value,
                len(filtered),
            )
        return filtered

    @staticmethod
    async def _degrade(call: Awaitable[list[FoodRecord]]) -> list[FoodRecord]:
        """Await a source call, treating an unavailable source as zero results."""
        try:
            return await call
        except SourceUnavailable as exc:
            _logger.warning("Search source degraded: %s", exc)
            return []
