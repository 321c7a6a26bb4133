from enum import Enum
from typing import Any, Optional

MODULE_NAME = "jovo-db-mongodb"
DOCS_LINK = "https://www.jovo.tech/docs/databases/mongodb"
CONFIG_HINT = "Make sure the configuration you provided is valid."


class ErrorCode(str, Enum):
    ERR_PLUGIN = "ERR_PLUGIN"


class PluginError(Exception):
    """
    Base error raised by store plugins.
    Carries enough context for the host to tell the user what to fix.
    """
    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.ERR_PLUGIN,
        module: str = MODULE_NAME,
        details: Optional[Any] = None,
        hint: Optional[str] = None,
        see_link: Optional[str] = DOCS_LINK,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.module = module
        self.details = details
        self.hint = hint
        self.see_link = see_link

    def to_dict(self):
        return {
            "error": self.message,
            "code": self.code.value,
            "module": self.module,
            "hint": self.hint,
            "see": self.see_link,
        }


class ConfigurationError(PluginError):
    def __init__(self, field: str, message: Optional[str] = None, **kwargs):
        super().__init__(message or f"{field} has to be set.", **kwargs)
        self.field = field


class StorageError(PluginError):
    pass


def storage_error(exc: Exception, hint: Optional[str] = CONFIG_HINT) -> StorageError:
    """Wraps a driver failure, keeping its message. Raise it `from exc`."""
    return StorageError(str(exc), details=type(exc).__name__, hint=hint)
