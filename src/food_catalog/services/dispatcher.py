"""Issuance-ordered delivery of search results."""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from uuid import UUID

from food_catalog.domain.foods import FoodRecord, SearchMode
from food_catalog.services.search import FoodSearchService

_logger = logging.getLogger(__name__)


@dataclass
class SearchDispatcher:
    """Keeps the visible results in step with the most recently issued search.

    Every search gets a sequence number when it is issued. A completion is
    published only if its number is higher than the last one published, so a
    slow response for an older query can never replace a newer one. Issuing a
    new search cancels the one still in flight.
    """

    search_service: FoodSearchService
    on_results: Callable[[int, list[FoodRecord]], None] | None = None
    results: list[FoodRecord] = field(default_factory=list)
    _issued: int = 0
    _accepted: int = 0
    _in_flight: "asyncio.Task[list[FoodRecord]] | None" = None

    @property
    def accepted_sequence(self) -> int:
        return self._accepted

    def issue(self) -> int:
        """Reserve the next sequence number."""
        self._issued += 1
        return self._issued

    def accept(self, sequence: int, results: list[FoodRecord]) -> bool:
        """Publish ``results`` unless a later search was already published."""
        if sequence <= self._accepted:
            _logger.debug(
                "Discarding stale search results: seq=%s accepted=%s",
                sequence,
                self._accepted,
            )
            return False
        self._accepted = sequence
        self.results = results
        if self.on_results is not None:
            self.on_results(sequence, results)
        return True

    async def submit(
        self, term: str | None, owner_id: UUID, mode: SearchMode
    ) -> list[FoodRecord] | None:
        """Run a search, returning its results or ``None`` if it was superseded."""
        sequence = self.issue()
        self.cancel()
        task = asyncio.create_task(self.search_service.search(term, owner_id, mode))
        self._in_flight = task
        try:
            results = await task
        except asyncio.CancelledError:
            current = asyncio.current_task()
            if task.cancelled() and current is not None and not current.cancelling():
                # Superseded or cancelled through cancel(); nothing to publish.
                return None
            raise
        finally:
            if self._in_flight is task:
                self._in_flight = None
        if not self.accept(sequence, results):
            return None
        return results

    def cancel(self) -> None:
        """Cancel the in-flight search, if any."""
        if self._in_flight is not None and not self._in_flight.done():
            self._in_flight.cancel()
