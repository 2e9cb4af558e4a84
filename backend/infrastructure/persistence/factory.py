"""Repository Factory for Persistence Layer.

Environment-based repository selection with graceful fallback to in-memory.
Strategy:
- .env (runtime): REPOSITORY_BACKEND=mongodb (production persistence)
- .env.test (pytest): REPOSITORY_BACKEND=inmemory (fast, isolated tests)
- Default: inmemory (safe fallback if env vars not set)

No module-level instances are cached: every call builds a fresh set, and
the composition root owns their lifetime.

Usage:
    from infrastructure.persistence.factory import create_repositories

    repositories = create_repositories()
    menu_item = await repositories.menu_items.find_by_id("burger")
"""

from dataclasses import dataclass
from typing import Optional
import logging

from motor.motor_asyncio import AsyncIOMotorClient

from domain.inventory.core.ports import IIngredientRepository, IMenuItemRepository
from domain.ordering.core.ports import IOrderRepository
from infrastructure.config import get_mongodb_uri, get_repository_backend
from infrastructure.persistence.in_memory import (
    InMemoryIngredientRepository,
    InMemoryMenuItemRepository,
    InMemoryOrderRepository,
)
from infrastructure.persistence.mongodb import (
    MongoIngredientRepository,
    MongoMenuItemRepository,
    MongoOrderRepository,
    create_mongo_client,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Repositories:
    """Repositories built together (and, for MongoDB, sharing one client)."""

    menu_items: IMenuItemRepository
    ingredients: IIngredientRepository
    orders: IOrderRepository
    client: Optional[AsyncIOMotorClient] = None

    async def close(self) -> None:
        """Close the shared MongoDB client, if any."""
        if self.client is not None:
            self.client.close()


def create_repositories(client: Optional[AsyncIOMotorClient] = None) -> Repositories:
    """Create all repositories based on REPOSITORY_BACKEND env var.

    Environment variable: REPOSITORY_BACKEND
    Values:
        - "inmemory": In-memory repositories (default, fast, transient)
        - "mongodb": MongoDB repositories (persistent, requires MONGODB_URI)
        - anything else: logged, falls back to inmemory

    Args:
        client: Motor client to reuse (mongodb only)

    Returns:
        Repositories: menu item, ingredient and order repositories

    Raises:
        ValueError: If mongodb selected but MONGODB_URI not set

    Example:
        # In .env (production):
        REPOSITORY_BACKEND=mongodb
        MONGODB_URI=mongodb://localhost:27017/?replicaSet=rs0

        # In .env.test (testing):
        REPOSITORY_BACKEND=inmemory
    """
    mode = get_repository_backend()

    if mode == "mongodb":
        if client is None:
            if not get_mongodb_uri():
                raise ValueError(
                    "REPOSITORY_BACKEND=mongodb but MONGODB_URI not set. "
                    "Set MONGODB_URI in .env or use REPOSITORY_BACKEND=inmemory"
                )
            client = create_mongo_client()

        menu_items = MongoMenuItemRepository(client)
        return Repositories(
            menu_items=menu_items,
            ingredients=MongoIngredientRepository(menu_items, client),
            orders=MongoOrderRepository(client),
            client=client,
        )

    if mode != "inmemory":
        logger.warning(
            "Unknown repository backend, using inmemory",
            extra={"repository_backend": mode},
        )

    in_memory_menu_items = InMemoryMenuItemRepository()
    return Repositories(
        menu_items=in_memory_menu_items,
        ingredients=InMemoryIngredientRepository(in_memory_menu_items),
        orders=InMemoryOrderRepository(),
    )
