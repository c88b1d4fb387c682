"""Tool registry for managing available tools."""

import logging
from typing import Any

from nimdetect.tools.base import Tool

logger = logging.getLogger(__name__)


def _normalize(name: str) -> str:
    return name.strip().lower()


class ToolRegistry:
    """Registry for tool instances.

    Tools are looked up by name or by any of their similes,
    case-insensitively.
    """

    def __init__(self) -> None:
        """Initialize empty registry."""
        self._tools: dict[str, Tool] = {}
        self._aliases: dict[str, str] = {}

    def register(self, tool: Tool) -> None:
        key = _normalize(tool.name)
        if key in self._tools or key in self._aliases:
            raise ValueError(f"Tool '{tool.name}' already registered")
        for simile in tool.similes:
            alias = _normalize(simile)
            if alias in self._tools or self._aliases.get(alias, key) != key:
                raise ValueError(f"Tool alias '{simile}' already registered")
        self._tools[key] = tool
        for simile in tool.similes:
            self._aliases[_normalize(simile)] = key
        logger.debug(f"Registered tool: {tool.name}")

    def unregister(self, name: str) -> None:
        key = self._resolve(name)
        if key is None:
            return
        self._tools.pop(key, None)
        self._aliases = {
            alias: target for alias, target in self._aliases.items() if target != key
        }

    def _resolve(self, name: str) -> str | None:
        key = _normalize(name)
        if key in self._tools:
            return key
        return self._aliases.get(key)

    def get(self, name: str) -> Tool:
        key = self._resolve(name)
        if key is None:
            raise KeyError(f"Tool '{name}' not found")
        return self._tools[key]

    def has(self, name: str) -> bool:
        return self._resolve(name) is not None

    @property
    def names(self) -> list[str]:
        return [tool.name for tool in self._tools.values()]

    def get_definitions(self) -> list[dict[str, Any]]:
        return [tool.to_definition() for tool in self._tools.values()]

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: str) -> bool:
        return self.has(name)

    def __iter__(self):
        return iter(self._tools.values())
