import copy
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
from db_model import DEFAULT_PRIMARY_KEY_FIELD, UserRecord

logger = logging.getLogger(__name__)

class Db(ABC):
    """
    Key-addressed user-data store plugged into the host app.

    The host calls install() once at startup, then load/save/delete per
    request, and uninstall() at shutdown.
    """
    identifier: str = "Db"

    def _claim_default(self, app) -> bool:
        """
        Becomes the app's active store unless the app names a different default.
        """
        default = app.config_get("db.default")
        if default and default != self.identifier:
            logger.info("%s installed but not active (db.default=%s)", self.identifier, default)
            return False
        app.db = self
        logger.info("%s is the active store", self.identifier)
        return True

    def _release_default(self, app):
        if getattr(app, "db", None) is self:
            app.db = None

    @abstractmethod
    async def install(self, app):
        pass

    @abstractmethod
    async def uninstall(self, app):
        pass

    @abstractmethod
    async def load(self, primary_key: str) -> Optional[UserRecord]:
        """Returns the record for primary_key, or None if there is none."""
        pass

    @abstractmethod
    async def save(self, primary_key: str, key: str, data: Any):
        """Sets one field on the record, creating the record if needed."""
        pass

    @abstractmethod
    async def delete(self, primary_key: str):
        pass

class InMemoryDb(Db):
    identifier = "InMemoryDb"

    def __init__(self, primary_key_field: str = DEFAULT_PRIMARY_KEY_FIELD):
        self.primary_key_field = primary_key_field
        self._records: Dict[str, UserRecord] = {}

    async def install(self, app):
        self._claim_default(app)

    async def uninstall(self, app):
        self._release_default(app)

    async def load(self, primary_key: str) -> Optional[UserRecord]:
        record = self._records.get(primary_key)
        # Hand out copies so callers can't mutate stored state
        return copy.deepcopy(record) if record is not None else None

    async def save(self, primary_key: str, key: str, data: Any):
        record = self._records.setdefault(primary_key, {})
        record[key] = copy.deepcopy(data)
        # The key field always holds the key the record is stored under
        record[self.primary_key_field] = primary_key

    async def delete(self, primary_key: str):
        self._records.pop(primary_key, None)

def get_user_store(store_type: str = "memory", **kwargs) -> Db:
    if store_type == "memory":
        return InMemoryDb(**kwargs)
    elif store_type == "mongodb":
        from mongo_store import MongoDb
        return MongoDb(config=kwargs)
    else:
        raise ValueError(f"Unknown store type: {store_type}")
