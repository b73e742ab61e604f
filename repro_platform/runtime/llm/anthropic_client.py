"""
Anthropic (Claude) implementation of ``LLMClient``.
"""

import logging
from typing import Optional

from anthropic import AsyncAnthropic

from .base import LLMClient, ToolCallResult

logger = logging.getLogger(__name__)


class AnthropicClient(LLMClient):
    """LLMClient backed by the Anthropic messages API."""

    def __init__(self, api_key: str):
        self._client = AsyncAnthropic(api_key=api_key)

    async def call_tool(
        self,
        model: str,
        max_tokens: int,
        prompt: str,
        tool_schema: dict,
        system: Optional[str] = None,
    ) -> ToolCallResult:
        tool_name = tool_schema["name"]
        kwargs: dict = dict(
            model=model,
            max_tokens=max_tokens,
            messages=[{"role": "user", "content": prompt}],
            tools=[tool_schema],
            tool_choice={"type": "tool", "name": tool_name},
        )
        if system is not None:
            kwargs["system"] = system

        response = await self._client.messages.create(**kwargs)

        tool_input: dict = {}
        raw_texts: list[str] = []
        for block in response.content:
            if block.type == "tool_use" and block.name == tool_name:
                tool_input = dict(block.input)
            elif block.type == "text":
                raw_texts.append(block.text)

        return ToolCallResult(
            tool_input=tool_input,
            truncated=getattr(response, "stop_reason", None) == "max_tokens",
            raw_text="\n".join(raw_texts),
        )
