import contextlib
import logging
from typing import Any, Callable, Mapping, Optional
from bson.errors import BSONError
from pymongo import AsyncMongoClient
from pymongo.errors import PyMongoError
from db_model import MongoDbConfig, UserRecord
from document_store import Db
from errors import StorageError, storage_error

logger = logging.getLogger(__name__)

# bson rejects unencodable documents (bad keys, ints over 8 bytes) before
# anything reaches the server, outside the PyMongoError hierarchy
DRIVER_ERRORS = (PyMongoError, BSONError, OverflowError)

class MongoDb(Db):
    """
    User-data store backed by a MongoDB collection.

    Holds a single AsyncMongoClient from install() to uninstall(); the
    driver does the pooling. Every driver failure surfaces as StorageError.
    """
    identifier = "MongoDb"

    def __init__(
        self,
        config: Optional[Mapping[str, Any]] = None,
        client_factory: Callable[[str], Any] = AsyncMongoClient,
    ):
        self.config = MongoDbConfig.merged(config)
        self._client_factory = client_factory
        self.client = None

    async def install(self, app):
        self.config.validate()

        if self.client is not None:
            logger.warning("MongoDb already installed, reusing the open connection")
        else:
            self.client = await self.get_connected_client(self.config.connection_uri)

        self._claim_default(app)

    async def uninstall(self, app):
        self._release_default(app)
        client, self.client = self.client, None
        if client is None:
            return
        await client.close()
        logger.info("Disconnected from MongoDB")

    async def get_connected_client(self, uri: str):
        logger.info("Connecting to MongoDB database=%s", self.config.database_name)
        client = None
        try:
            client = self._client_factory(uri)
            # The client connects lazily; ping so a bad uri fails install
            await client.admin.command("ping")
        except DRIVER_ERRORS as e:
            if client is not None:
                await client.close()
            raise storage_error(e) from e
        logger.info("MongoDB connection successful")
        return client

    def _collection(self):
        if self.client is None:
            raise StorageError("MongoDb is not connected. Call install() first.")
        return self.client[self.config.database_name][self.config.collection_name]

    def _filter(self, primary_key: str):
        return {self.config.primary_key_field: primary_key}

    @contextlib.contextmanager
    def _translate(self):
        try:
            yield
        except DRIVER_ERRORS as e:
            raise storage_error(e) from e

    async def load(self, primary_key: str) -> Optional[UserRecord]:
        collection = self._collection()
        logger.debug("load %s=%s", self.config.primary_key_field, primary_key)
        with self._translate():
            return await collection.find_one(self._filter(primary_key), projection={"_id": False})

    async def save(self, primary_key: str, key: str, data: Any):
        self.config.validate()

        collection = self._collection()
        # Primary key goes last so it wins if key names the same field
        item = {
            "$set": {
                key: data,
                self.config.primary_key_field: primary_key,
            }
        }
        logger.debug("save %s=%s field=%s", self.config.primary_key_field, primary_key, key)
        with self._translate():
            await collection.update_one(self._filter(primary_key), item, upsert=True)

    async def delete(self, primary_key: str):
        collection = self._collection()
        logger.debug("delete %s=%s", self.config.primary_key_field, primary_key)
        with self._translate():
            await collection.delete_one(self._filter(primary_key))
