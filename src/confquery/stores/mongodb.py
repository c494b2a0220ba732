"""MongoDB-backed configuration store.

Configurations are stored one document per name in a single collection
(``QUERY_CONFIG_COLLECTION``). Documents use the wire shape produced by
`QueryConfig.to_document`, so the stored form is the same JSON a user would
write by hand.

Key Features:
    - Lazy client/collection initialization from settings
    - Whole-document upsert by name
    - Tag filtering with ``$in``
    - Driver errors wrapped in `ConfigStoreError`
"""

from typing import Any, Dict, List, Optional, Sequence

from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from confquery.abc import ConfigStoreAdapter
from confquery.exceptions import ConfigStoreError, MissingConfigError
from confquery.schema import StoredQueryConfig, validate_config
from confquery.settings import settings as api_settings


class MongoConfigStore(ConfigStoreAdapter):
    """Configuration store on a MongoDB collection.

    Either pass a ready `collection` (tests, shared clients) or let the store
    connect lazily using ``MONGODB_URI`` / ``MONGODB_DATABASE``.

    Attributes:
        collection_name: Name of the backing collection
        database_name: Name of the database holding it
    """

    def __init__(
        self,
        collection: Optional[Collection] = None,
        uri: Optional[str] = None,
        database_name: Optional[str] = None,
        collection_name: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self._client: Optional[MongoClient] = None
        self._collection: Optional[Collection] = collection
        self.uri = uri or api_settings.MONGODB_URI
        self.database_name = database_name or api_settings.MONGODB_DATABASE
        self.collection_name = collection_name or api_settings.QUERY_CONFIG_COLLECTION

    @property
    def client(self) -> MongoClient:
        """Lazily initialize and return the MongoClient.

        Raises:
            MissingConfigError: If MONGODB_URI is not configured
        """
        if self._client is None:
            if not self.uri:
                raise MissingConfigError(
                    "MONGODB_URI is not set. Please configure it in your .env file.",
                    config_key="MONGODB_URI",
                    env_file=".env",
                )
            self._client = MongoClient(self.uri, serverSelectionTimeoutMS=api_settings.MONGODB_TIMEOUT_MS)
            self.logger.message("MongoDB client initialized.")
        return self._client

    @property
    def collection(self) -> Collection:
        if self._collection is None:
            self._collection = self.client[self.database_name][self.collection_name]
            self.logger.message(
                "Using MongoDB collection %s.%s for query configurations.", self.database_name, self.collection_name
            )
        return self._collection

    def close(self) -> None:
        """Close the owned client, if any. Injected collections are left alone."""
        if self._client is not None:
            self._client.close()
            self._client = None
            self._collection = None

    # ------------------------------------------------------------------
    # ConfigStoreAdapter
    # ------------------------------------------------------------------

    def save(self, config: StoredQueryConfig) -> None:
        doc = config.to_document()
        try:
            self.collection.replace_one({"name": config.name}, doc, upsert=True)
        except PyMongoError as e:
            raise ConfigStoreError("Failed to save query configuration", config_name=config.name, error=str(e)) from e
        self.logger.debug("Saved configuration %s", config.name)

    def get(self, name: str) -> Optional[StoredQueryConfig]:
        try:
            doc = self.collection.find_one({"name": name}, {"_id": False})
        except PyMongoError as e:
            raise ConfigStoreError("Failed to load query configuration", config_name=name, error=str(e)) from e
        if doc is None:
            return None
        return self._from_document(doc)

    def list(self, tags: Optional[Sequence[str]] = None) -> List[StoredQueryConfig]:
        query: Dict[str, Any] = {}
        if tags:
            query["tags"] = {"$in": list(tags)}
        try:
            docs = list(self.collection.find(query, {"_id": False}))
        except PyMongoError as e:
            raise ConfigStoreError("Failed to list query configurations", tags=tags, error=str(e)) from e
        return [self._from_document(doc) for doc in docs]

    def delete(self, name: str) -> bool:
        try:
            result = self.collection.delete_one({"name": name})
        except PyMongoError as e:
            raise ConfigStoreError("Failed to delete query configuration", config_name=name, error=str(e)) from e
        return result.deleted_count > 0

    @staticmethod
    def _from_document(doc: Dict[str, Any]) -> StoredQueryConfig:
        return validate_config(doc, StoredQueryConfig)
