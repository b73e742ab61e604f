"""
Provider-agnostic interface used by the report summarizer.

Summaries are always requested as a forced tool call so the provider returns
a structured object rather than free text. ``ToolCallResult.raw_text`` keeps any
plain text the model emitted alongside (or instead of) the call.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class ToolCallResult:
    """Outcome of a forced tool call.

    Attributes:
        tool_input: Arguments of the tool call, already decoded to a dict.
                    Empty when the model did not call the tool.
        truncated:  True if generation stopped at the token limit.
        raw_text:   Non-tool text content, used as a JSON fallback.
    """

    tool_input: dict = field(default_factory=dict)
    truncated: bool = False
    raw_text: str = ""


class LLMClient(ABC):
    """Async client able to force a single named tool call."""

    @abstractmethod
    async def call_tool(
        self,
        model: str,
        max_tokens: int,
        prompt: str,
        tool_schema: dict,
        system: Optional[str] = None,
    ) -> ToolCallResult:
        """Send one user prompt and force the model to call ``tool_schema``.

        ``tool_schema`` uses the Anthropic layout (``name``, ``description``,
        ``input_schema``); other providers translate it.
        """
