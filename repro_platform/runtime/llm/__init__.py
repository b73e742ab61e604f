"""
LLM client layer for report summaries (Anthropic and OpenAI).
"""

from .base import LLMClient, ToolCallResult
from .factory import SUPPORTED_PROVIDERS, create_client

__all__ = [
    "LLMClient",
    "ToolCallResult",
    "SUPPORTED_PROVIDERS",
    "create_client",
]
