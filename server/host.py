import logging
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

class App:
    """
    Minimal host runtime: a config tree, the active `db` slot and the
    plugins installed into it.
    """
    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config: Dict[str, Any] = config or {}
        self.db = None
        self.plugins: List[Any] = []

    def config_get(self, path: str, default: Any = None) -> Any:
        node: Any = self.config
        for part in path.split("."):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    async def use(self, *plugins):
        for plugin in plugins:
            await plugin.install(self)
            self.plugins.append(plugin)
            logger.debug("Installed plugin %s", type(plugin).__name__)
        return self

    async def shutdown(self):
        while self.plugins:
            plugin = self.plugins.pop()
            await plugin.uninstall(self)
            logger.debug("Uninstalled plugin %s", type(plugin).__name__)
