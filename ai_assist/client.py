"""Thin wrapper around the Anthropic Messages API.

One user message in, the first text block out. No retries and no timeout
beyond the SDK's own; callers decide what to do when a call fails.
"""

import json
import re

from anthropic import Anthropic
from django.conf import settings


PLACEHOLDER_KEYS = {"", "your_anthropic_api_key_here"}

_FENCE_START = re.compile(r"^```(?:json)?\s*", re.IGNORECASE)
_FENCE_END = re.compile(r"\s*```$")


class AIUnavailable(Exception):
    """No usable API key is configured."""


class AIResponseError(Exception):
    """The provider answered with something other than text."""


def is_configured() -> bool:
    return (settings.ANTHROPIC_API_KEY or "").strip() not in PLACEHOLDER_KEYS


def get_client() -> Anthropic:
    if not is_configured():
        raise AIUnavailable("ANTHROPIC_API_KEY is not set")
    return Anthropic(api_key=settings.ANTHROPIC_API_KEY)


def complete(prompt: str, max_tokens: int = None) -> str:
    """Send `prompt` as a single user message and return the text reply."""
    client = get_client()
    message = client.messages.create(
        model=settings.ANTHROPIC_MODEL,
        max_tokens=max_tokens or settings.ANTHROPIC_MAX_TOKENS,
        messages=[{"role": "user", "content": prompt}],
    )
    for block in message.content:
        if getattr(block, "type", None) == "text":
            return block.text
    raise AIResponseError("Unexpected response format")


def parse_json(text: str):
    """Parse a JSON reply, tolerating a surrounding Markdown code fence."""
    clean = _FENCE_START.sub("", text.strip())
    clean = _FENCE_END.sub("", clean)
    return json.loads(clean)
