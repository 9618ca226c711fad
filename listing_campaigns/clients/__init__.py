"""API clients for external services."""

from .llm import LLMClient
from .render import RenderClient, RenderError, RenderSession, RenderTimeoutError

__all__ = ["LLMClient", "RenderClient", "RenderError", "RenderSession", "RenderTimeoutError"]
