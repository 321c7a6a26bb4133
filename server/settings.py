import os
from dataclasses import dataclass
from typing import Optional

@dataclass(frozen=True)
class Settings:
    # "memory" or "mongodb"
    user_store: str
    mongodb_uri: Optional[str]
    mongodb_database: Optional[str]
    mongodb_collection: str
    mongodb_primary_key: str
    # Name of the store that should become active, if several are installed
    default_db: Optional[str]
    log_level: str

def get_settings() -> Settings:
    return Settings(
        user_store=os.getenv("USER_STORE", "memory").strip().lower(),
        mongodb_uri=os.getenv("MONGODB_URI") or None,
        mongodb_database=os.getenv("MONGODB_DATABASE") or None,
        mongodb_collection=os.getenv("MONGODB_COLLECTION", "UserData"),
        mongodb_primary_key=os.getenv("MONGODB_PRIMARY_KEY", "userId"),
        default_db=os.getenv("DEFAULT_DB") or None,
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
