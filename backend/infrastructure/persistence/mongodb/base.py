"""Shared motor plumbing for the inventory collections.

Every helper accepts an optional session so the ingredient repository can
run several conditional updates inside one transaction. Driver failures
are logged and surface as ``PersistenceError``.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Dict, Generic, List, Optional, TypeVar
import logging

from motor.motor_asyncio import (
    AsyncIOMotorClient,
    AsyncIOMotorClientSession,
    AsyncIOMotorCollection,
)

from domain.shared.errors import PersistenceError
from infrastructure.config import get_mongodb_database, get_mongodb_uri

TEntity = TypeVar("TEntity")

logger = logging.getLogger(__name__)


def create_mongo_client() -> AsyncIOMotorClient:
    """
    Create a motor client from MONGODB_URI.

    Raises:
        ValueError: If MONGODB_URI is not configured
    """
    uri = get_mongodb_uri()
    if not uri:
        raise ValueError(
            "MONGODB_URI not configured. "
            "Set MONGODB_URI, MONGODB_USER, "
            "and MONGODB_PASSWORD environment variables."
        )
    return AsyncIOMotorClient(uri)


class MongoBaseRepository(ABC, Generic[TEntity]):
    """
    One collection of the inventory database.

    Subclasses name the collection and map entities to documents; ids are
    stored as ``_id`` strings.
    """

    def __init__(self, client: Optional[AsyncIOMotorClient] = None):
        """
        Args:
            client: Shared motor client; built from MONGODB_URI when omitted.
                Repositories taking part in one transaction must share it.
        """
        self._client: AsyncIOMotorClient = client if client is not None else create_mongo_client()
        self._collection = self._client[get_mongodb_database()][self.collection_name]
        logger.debug("Repository bound", extra={"collection": self.collection_name})

    @property
    @abstractmethod
    def collection_name(self) -> str:
        ...

    @abstractmethod
    def to_document(self, entity: TEntity) -> Dict[str, Any]:
        ...

    @abstractmethod
    def from_document(self, doc: Dict[str, Any]) -> TEntity:
        """Raises PersistenceError for malformed documents."""

    @property
    def collection(self) -> AsyncIOMotorCollection:
        return self._collection

    @staticmethod
    def now_iso() -> str:
        """Current UTC time as ISO 8601 string."""
        return datetime.now(timezone.utc).isoformat()

    def _failure(self, operation: str, error: Exception, filter_dict: Any = None) -> PersistenceError:
        logger.error(
            "MongoDB operation failed",
            extra={
                "operation": operation,
                "collection": self.collection_name,
                "filter": filter_dict,
                "error": str(error),
            },
        )
        return PersistenceError(f"MongoDB {operation} failed on {self.collection_name}: {error}")

    async def _find_one(
        self,
        filter_dict: Dict[str, Any],
        session: Optional[AsyncIOMotorClientSession] = None,
    ) -> Optional[Dict[str, Any]]:
        try:
            return await self._collection.find_one(filter_dict, session=session)
        except Exception as e:
            raise self._failure("find_one", e, filter_dict) from e

    async def _find_many(
        self,
        filter_dict: Dict[str, Any],
        session: Optional[AsyncIOMotorClientSession] = None,
    ) -> List[Dict[str, Any]]:
        try:
            return await self._collection.find(filter_dict, session=session).to_list(length=None)
        except Exception as e:
            raise self._failure("find_many", e, filter_dict) from e

    async def _replace_one(self, document: Dict[str, Any]) -> None:
        """Upsert by ``_id``."""
        key = {"_id": document["_id"]}
        try:
            await self._collection.replace_one(key, document, upsert=True)
        except Exception as e:
            raise self._failure("replace_one", e, key) from e

    async def _insert_one(self, document: Dict[str, Any]) -> None:
        try:
            await self._collection.insert_one(document)
        except Exception as e:
            raise self._failure("insert_one", e) from e

    async def _update_one(
        self,
        filter_dict: Dict[str, Any],
        update_dict: Dict[str, Any],
        session: Optional[AsyncIOMotorClientSession] = None,
    ) -> int:
        """
        Returns:
            Matched count; 0 when the filter (version included) matched nothing
        """
        try:
            result = await self._collection.update_one(filter_dict, update_dict, session=session)
        except Exception as e:
            raise self._failure("update_one", e, filter_dict) from e
        return result.matched_count
