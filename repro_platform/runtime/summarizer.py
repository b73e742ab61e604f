"""
Summarizer collaborators for report summaries.

A summarizer turns a report's entries into a JSON object (a dict, or text that
decodes to one). Validation of the shape happens in the summary service, not
here, so any implementation is held to the same contract.
"""

import json
import logging
from typing import Any, Optional, Protocol

from .config import default_summary_model, resolve_api_key, resolve_model
from .llm import LLMClient, create_client
from .prompts import SUMMARY_SYSTEM_PROMPT, SUMMARY_TOOL, get_summary_prompt

logger = logging.getLogger(__name__)

_FENCE_OPEN = "```json"
_FENCE = "```"


class Summarizer(Protocol):
    """Port for the external report summarizer."""

    async def summarize(
        self,
        *,
        report_name: str,
        generated_at: str,
        targets: list[str],
        entries: list[str],
    ) -> dict[str, Any] | str: ...


def strip_code_fences(text: str) -> str:
    """Remove a surrounding ```json ... ``` (or bare ```) block."""
    text = text.strip()
    if text.startswith(_FENCE_OPEN):
        text = text[len(_FENCE_OPEN):].lstrip()
    elif text.startswith(_FENCE):
        text = text[len(_FENCE):].lstrip()
    if text.endswith(_FENCE):
        text = text[: -len(_FENCE)].rstrip()
    return text


def parse_summary_text(text: str) -> Any:
    """Decode summarizer text output as JSON.

    Raises ``json.JSONDecodeError`` when the text is not JSON.
    """
    return json.loads(strip_code_fences(text))


class LLMSummarizer:
    """Summarizer backed by an ``LLMClient`` using a forced tool call."""

    def __init__(self, client: LLMClient, model: Optional[str] = None):
        self.client = client
        self.model_cfg = resolve_model(model or default_summary_model())

    @classmethod
    def from_env(cls, model: Optional[str] = None,
                 api_key: Optional[str] = None) -> "LLMSummarizer":
        """Build a summarizer for ``model`` using the provider's API key.

        Raises ValueError for an unknown model or missing key, and ImportError
        when the provider SDK is not installed.
        """
        name = model or default_summary_model()
        provider = resolve_model(name)["provider"]
        client = create_client(provider, resolve_api_key(provider, api_key))
        return cls(client, name)

    async def summarize(
        self,
        *,
        report_name: str,
        generated_at: str,
        targets: list[str],
        entries: list[str],
    ) -> dict[str, Any] | str:
        prompt = get_summary_prompt(report_name, generated_at, targets, entries)
        logger.info(
            "Requesting summary for report '%s' from %s", report_name, self.model_cfg["id"]
        )
        result = await self.client.call_tool(
            model=self.model_cfg["id"],
            max_tokens=self.model_cfg["max_tokens"],
            prompt=prompt,
            tool_schema=SUMMARY_TOOL,
            system=SUMMARY_SYSTEM_PROMPT,
        )
        if result.truncated:
            logger.warning("Summary for report '%s' hit the token limit", report_name)
        if result.tool_input:
            return result.tool_input

        # No tool call: hand back whatever text the model produced.
        logger.warning("Model did not call %s; falling back to text output", SUMMARY_TOOL["name"])
        return result.raw_text
