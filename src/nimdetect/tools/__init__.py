"""Tool system for agent capabilities."""

from nimdetect.tools.base import Tool, ToolContext, ToolResult
from nimdetect.tools.builtin import AIImageDetectionTool
from nimdetect.tools.registry import ToolRegistry

__all__ = [
    "AIImageDetectionTool",
    "Tool",
    "ToolContext",
    "ToolRegistry",
    "ToolResult",
]
