"""
OpenAI implementation of ``LLMClient``.

The system prompt becomes a leading ``system`` message and the Anthropic-style
tool schema is rewritten into OpenAI's function-calling format.
"""

import json
import logging
from typing import Optional

from openai import AsyncOpenAI

from .base import LLMClient, ToolCallResult

logger = logging.getLogger(__name__)


def _to_openai_tool(tool_schema: dict) -> dict:
    """Translate ``{name, description, input_schema}`` to an OpenAI function tool."""
    return {
        "type": "function",
        "function": {
            "name": tool_schema["name"],
            "description": tool_schema.get("description", ""),
            "parameters": tool_schema.get("input_schema", {}),
        },
    }


class OpenAIClient(LLMClient):
    """LLMClient backed by the OpenAI chat completions API."""

    def __init__(self, api_key: str):
        self._client = AsyncOpenAI(api_key=api_key)

    async def call_tool(
        self,
        model: str,
        max_tokens: int,
        prompt: str,
        tool_schema: dict,
        system: Optional[str] = None,
    ) -> ToolCallResult:
        messages: list[dict] = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})

        response = await self._client.chat.completions.create(
            model=model,
            max_tokens=max_tokens,
            messages=messages,
            tools=[_to_openai_tool(tool_schema)],
            tool_choice={"type": "function", "function": {"name": tool_schema["name"]}},
        )

        choice = response.choices[0]
        raw_text = choice.message.content or ""
        tool_input: dict = {}
        if choice.message.tool_calls:
            arguments = choice.message.tool_calls[0].function.arguments
            try:
                tool_input = json.loads(arguments)
            except json.JSONDecodeError as e:
                logger.warning("Could not decode OpenAI tool arguments: %s", e)
                # Hand the undecodable arguments to the text fallback.
                raw_text = raw_text or arguments

        return ToolCallResult(
            tool_input=tool_input if isinstance(tool_input, dict) else {},
            truncated=choice.finish_reason == "length",
            raw_text=raw_text,
        )
