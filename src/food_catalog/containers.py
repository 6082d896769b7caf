"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from uuid import UUID

from supabase import create_client

from food_catalog.adapters.fdc_client import HttpxFdcClient
from food_catalog.adapters.supabase_catalog_repository import SupabaseCatalogRepository
from food_catalog.config import Settings, parse_import_policy
from food_catalog.services.cache import InMemoryCache
from food_catalog.services.catalog import CatalogGateway
from food_catalog.services.dispatcher import SearchDispatcher
from food_catalog.services.search import FoodSearchService
from food_catalog.services.sources import ExternalDatabaseSource, LocalCatalogSource


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    search_service: FoodSearchService
    catalog_gateway: CatalogGateway
    close_resources: Callable[[], Awaitable[None]]
    search_dispatchers: dict[UUID, SearchDispatcher] = field(default_factory=dict)

    def dispatcher_for(self, owner_id: UUID) -> SearchDispatcher:
        """Return the owner's search dispatcher, creating it on first use."""
        dispatcher = self.search_dispatchers.get(owner_id)
        if dispatcher is None:
            dispatcher = SearchDispatcher(self.search_service)
            self.search_dispatchers[owner_id] = dispatcher
        return dispatcher


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    catalog_repository = SupabaseCatalogRepository(supabase_client)
    fdc_client = HttpxFdcClient.create(
        api_key=resolved_settings.fdc_api_key,
        base_url=resolved_settings.fdc_base_url,
        timeout_seconds=resolved_settings.fdc_timeout_seconds,
    )
    search_service = FoodSearchService(
        local_source=LocalCatalogSource(
            catalog_repository, first_n_limit=resolved_settings.local_first_n
        ),
        external_source=ExternalDatabaseSource(
            client=fdc_client,
            cache=InMemoryCache(),
            page_size=resolved_settings.fdc_page_size,
            cache_ttl_seconds=resolved_settings.search_cache_ttl_seconds,
            debug=resolved_settings.debug,
        ),
        debug=resolved_settings.debug,
    )
    catalog_gateway = CatalogGateway(
        repository=catalog_repository,
        import_policy=parse_import_policy(resolved_settings.import_policy),
        debug=resolved_settings.debug,
    )

    async def close_resources() -> None:
        await fdc_client.close()

    return AppContainer(
        settings=resolved_settings,
        search_service=search_service,
        catalog_gateway=catalog_gateway,
        close_resources=close_resources,
    )
