# leads_assistant/completion.py

"""
Chat completion client: tool-enabled requests and streamed result narration.

Environment Variables:
  - OPENAI_API_KEY: provider credential (required unless a client is injected)
  - OPENAI_MODEL: model identifier (required)
  - OPENAI_MAX_TOKENS: max_tokens for both calls (default 16384)
"""

from __future__ import annotations

import os
import sys
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, TextIO, Tuple

from openai import AsyncOpenAI

from .schema import TOOLS

logger = logging.getLogger(__name__)

DEFAULT_MAX_TOKENS = 16384
SUMMARY_PROMPT = "Please provide a natural language response of everything you see do not summarize it:\n"
SUMMARY_APOLOGY = "I'm sorry, but I couldn't generate a summary based on the data."


@dataclass
class ToolCall:
    name: str
    arguments: Dict[str, Any] = field(default_factory=dict)


@dataclass
class CompletionResult:
    """Either a direct reply (content) or a request to invoke a tool."""

    content: Optional[str] = None
    tool_call: Optional[ToolCall] = None


def _parse_arguments(raw: Any) -> Dict[str, Any]:
    # Malformed arguments are treated as absent; the caller apologizes.
    if isinstance(raw, dict):
        return raw
    if not raw:
        return {}
    try:
        parsed = json.loads(raw)
    except (TypeError, ValueError) as e:
        logger.warning("Could not parse tool call arguments %r: %s", raw, e)
        return {}
    return parsed if isinstance(parsed, dict) else {}


class CompletionClient:
    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        max_tokens: Optional[int] = None,
        client: Any = None,
    ) -> None:
        self.api_key = api_key or os.getenv("OPENAI_API_KEY")
        self.model = model or os.getenv("OPENAI_MODEL")
        self.max_tokens = max_tokens or int(os.getenv("OPENAI_MAX_TOKENS", DEFAULT_MAX_TOKENS))
        missing = []
        if client is None and not self.api_key:
            missing.append("OPENAI_API_KEY")
        if not self.model:
            missing.append("OPENAI_MODEL")
        if missing:
            raise ValueError("Missing completion provider configuration: " + ", ".join(missing))
        self.client = client or AsyncOpenAI(api_key=self.api_key)

    async def request_completion(self, messages: List[Dict[str, str]]) -> Optional[CompletionResult]:
        """Send the full transcript with the tool schema.

        Returns None on any transport or provider error so the caller can
        report the outage and re-prompt.
        """
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                max_tokens=self.max_tokens,
                tools=TOOLS,
            )
            message = response.choices[0].message
        except Exception as e:  # noqa: BLE001
            logger.error("Error communicating with OpenAI: %s", e)
            return None
        logger.debug("Completion response received")

        tool_calls = getattr(message, "tool_calls", None) or []
        if tool_calls:
            fn = tool_calls[0].function
            return CompletionResult(tool_call=ToolCall(fn.name, _parse_arguments(fn.arguments)))
        return CompletionResult(content=message.content or "")

    async def summarize(self, formatted: str, out: Optional[TextIO] = None) -> Tuple[str, bool]:
        """Stream a prose rendering of `formatted`, echoing each fragment to `out`.

        Returns (text, ok). On failure text is SUMMARY_APOLOGY and ok is False.
        """
        out = out or sys.stdout
        collected: List[str] = []
        try:
            stream = await self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": SUMMARY_PROMPT + formatted}],
                max_tokens=self.max_tokens,
                stream=True,
            )
            logger.info("Natural language summary streaming started.")
            async for chunk in stream:
                if not chunk.choices:
                    continue
                piece = chunk.choices[0].delta.content
                if piece:
                    collected.append(piece)
                    out.write(piece)
                    out.flush()
            out.write("\n")
        except Exception as e:  # noqa: BLE001
            logger.error("Error generating summary: %s", e)
            if collected:
                out.write("\n")
            return SUMMARY_APOLOGY, False
        return "".join(collected).strip(), True


# Convenience factory using environment variables
def get_completion_client_from_env() -> CompletionClient:
    return CompletionClient()
