"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from uuid import UUID

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse

from food_catalog.api.models import (
    CatalogFoodModel,
    FoodItemModel,
    FoodRecordModel,
    ImportFoodRequest,
)
from food_catalog.app_logging import configure_logging
from food_catalog.containers import AppContainer
from food_catalog.domain.errors import FoodNotFound, PersistenceFailure, ValidationError
from food_catalog.domain.foods import SearchMode


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(debug=container.settings.debug)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(FoodNotFound)
    async def food_not_found(_: Request, exc: FoodNotFound) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)}
        )

    @app.exception_handler(PersistenceFailure)
    async def persistence_failure(_: Request, exc: PersistenceFailure) -> JSONResponse:
        logger.error("Catalog store request failed: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={"detail": "Catalog store request failed"},
        )

    @app.exception_handler(ValidationError)
    async def validation_error(_: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={"detail": str(exc)},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/foods/search")
    async def search_foods(
        request: Request,
        owner_id: UUID,
        term: str = "",
        mode: SearchMode = SearchMode.COMBINED,
    ) -> dict[str, list[FoodRecordModel]]:
        """Search the owner's catalog and, in combined mode, FoodData Central."""
        state_container: AppContainer = request.app.state.container
        dispatcher = state_container.dispatcher_for(owner_id)
        results = await dispatcher.submit(term, owner_id, mode)
        if results is None:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Superseded by a newer search",
            )
        return {"results": [FoodRecordModel.from_domain(record) for record in results]}

    @app.post("/foods/import")
    async def import_food(
        payload: ImportFoodRequest, request: Request
    ) -> dict[str, int]:
        """Resolve a search result to a local catalog id, importing it if needed."""
        state_container: AppContainer = request.app.state.container
        food_id = state_container.catalog_gateway.import_if_needed(
            payload.food.to_domain(), owner_id=payload.owner_id
        )
        return {"id": food_id}

    @app.get("/foods/{food_id}")
    async def get_food(food_id: int, request: Request) -> CatalogFoodModel:
        """Return a catalog entry."""
        state_container: AppContainer = request.app.state.container
        food = state_container.catalog_gateway.get_food(food_id)
        return CatalogFoodModel.from_domain(food)

    @app.put("/foods/{food_id}")
    async def update_food(
        food_id: int, payload: FoodItemModel, request: Request
    ) -> CatalogFoodModel:
        """Replace a catalog entry's nutrient and serving fields."""
        state_container: AppContainer = request.app.state.container
        food = state_container.catalog_gateway.update_food(
            food_id, payload.to_domain()
        )
        return CatalogFoodModel.from_domain(food)

    @app.delete("/foods/{food_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def delete_food(food_id: int, request: Request) -> None:
        """Delete a catalog entry and its log rows."""
        state_container: AppContainer = request.app.state.container
        state_container.catalog_gateway.delete_food(food_id)

    return app
