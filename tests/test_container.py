"""Tests for container wiring."""

import asyncio
from uuid import uuid4

from food_catalog.containers import build_container
from food_catalog.domain.foods import ImportPolicy


def test_build_container_creates_services(settings) -> None:
    settings.import_policy = "strict"
    container = build_container(settings)

    assert container.search_service is not None
    assert container.search_dispatchers == {}
    assert container.catalog_gateway.import_policy is ImportPolicy.STRICT
    asyncio.run(container.close_resources())


def test_dispatcher_for_is_per_owner(container) -> None:
    owner_id = uuid4()

    first = container.dispatcher_for(owner_id)

    assert container.dispatcher_for(owner_id) is first
    assert container.dispatcher_for(uuid4()) is not first
    assert first.search_service is container.search_service
