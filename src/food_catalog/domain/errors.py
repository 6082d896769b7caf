"""Error taxonomy for food search and catalog imports."""


class FoodCatalogError(Exception):
    """Base class for food catalog errors."""


class SourceUnavailable(FoodCatalogError):
    """A search source failed to answer (network, store, or payload error)."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"{source} unavailable: {reason}")


class ValidationError(FoodCatalogError):
    """Input rejected before reaching a source or the catalog."""


class PersistenceFailure(FoodCatalogError):
    """A catalog write did not complete; nothing was stored."""


class FoodNotFound(FoodCatalogError):
    """No catalog entry exists for the requested id."""

    def __init__(self, food_id: int) -> None:
        self.food_id = food_id
        super().__init__(f"Food {food_id} not found")
