"""codegpt API client - one request, one response."""

from codegpt.client.api_client import (
    ChatMessage,
    ChatRequest,
    CompletionClient,
    send_completion,
)
from codegpt.client.response import MISSING, extract_text, lookup_path, unescape

__all__ = [
    "ChatMessage",
    "ChatRequest",
    "CompletionClient",
    "send_completion",
    "MISSING",
    "extract_text",
    "lookup_path",
    "unescape",
]
