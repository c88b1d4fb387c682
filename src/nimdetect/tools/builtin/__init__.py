"""Built-in tools."""

from nimdetect.tools.builtin.ai_image import AIImageDetectionTool

__all__ = ["AIImageDetectionTool"]
