from dataclasses import dataclass, fields, replace
from typing import Dict, Any, Mapping, Optional
from errors import ConfigurationError

# A user record as it lives in the store: field name -> value
UserRecord = Dict[str, Any]

DEFAULT_COLLECTION_NAME = "UserData"
DEFAULT_PRIMARY_KEY_FIELD = "userId"

@dataclass(frozen=True)
class MongoDbConfig:
    connection_uri: Optional[str] = None
    database_name: Optional[str] = None
    collection_name: Optional[str] = DEFAULT_COLLECTION_NAME
    primary_key_field: Optional[str] = DEFAULT_PRIMARY_KEY_FIELD

    @classmethod
    def merged(cls, overrides: Optional[Mapping[str, Any]] = None) -> "MongoDbConfig":
        """
        Shallow overlay of caller-supplied options over the defaults.
        Unknown option names are rejected.
        """
        config = cls()
        if not overrides:
            return config

        known = {f.name for f in fields(cls)}
        for name in overrides:
            if name not in known:
                raise ConfigurationError(name, f"{name} is not a known option.")
        return replace(config, **dict(overrides))

    def validate(self):
        # Checked in this order; the first missing option wins.
        for name in ("connection_uri", "primary_key_field", "database_name", "collection_name"):
            if not getattr(self, name):
                raise ConfigurationError(name)
