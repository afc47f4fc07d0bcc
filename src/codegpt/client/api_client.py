"""
Chat-completion API client.

Sends a single user message to an OpenAI-compatible endpoint and hands back
the raw response body. The response status is not interpreted here; callers
parse the body whatever the status.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Literal, Optional

import httpx
from pydantic import BaseModel, Field

from codegpt.core.config import DEFAULT_TIMEOUT, Settings
from codegpt.exceptions import NetworkError

logger = logging.getLogger(__name__)

# The request always asks for this model, whatever --model says.
CHAT_MODEL = "gpt-3.5-turbo"
TEMPERATURE = 0.8


class ChatMessage(BaseModel):
    """A single role/content pair."""
    role: Literal["user"] = "user"
    content: str


class ChatRequest(BaseModel):
    """Body of a chat-completion request."""
    model: str = CHAT_MODEL
    messages: List[ChatMessage] = Field(default_factory=list)
    temperature: float = TEMPERATURE
    # max_tokens is never part of the body

    @classmethod
    def for_prompt(cls, prompt_text: str) -> "ChatRequest":
        return cls(messages=[ChatMessage(content=prompt_text)])


class CompletionClient:
    """
    Blocking client for one chat-completion endpoint.

    Example:
        client = CompletionClient.from_settings(settings)
        body = client.complete("write python, a hello world program. ...")
    """

    def __init__(
        self,
        endpoint: str,
        api_key: str,
        model_name: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.endpoint = endpoint
        self.api_key = api_key
        self.model_name = model_name
        self.timeout = timeout
        self.transport = transport

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> "CompletionClient":
        if settings.max_tokens:
            logger.debug(f"max_tokens={settings.max_tokens} is not sent with the request")
        return cls(
            endpoint=settings.endpoint,
            api_key=settings.api_key,
            model_name=settings.model,
            timeout=settings.timeout,
            transport=transport,
        )

    def _build_headers(self) -> Dict[str, str]:
        """Build request headers."""
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }

    def _client_options(self) -> Dict[str, Any]:
        options: Dict[str, Any] = {"timeout": self.timeout}
        if self.transport is not None:
            options["transport"] = self.transport
        return options

    def complete(self, prompt_text: str) -> str:
        """
        Send ``prompt_text`` as a user message and return the response body.

        Returns:
            The response body as text, for any HTTP status

        Raises:
            NetworkError: if the connection fails, times out or the body
                cannot be read
        """
        payload = ChatRequest.for_prompt(prompt_text).model_dump()

        if self.model_name and self.model_name != payload["model"]:
            logger.debug(
                f"Ignoring requested model {self.model_name!r}; sending {payload['model']!r}"
            )
        logger.debug(f"POST {self.endpoint} ({len(prompt_text)} chars of prompt)")

        with httpx.Client(**self._client_options()) as client:
            try:
                response = client.post(
                    self.endpoint,
                    json=payload,
                    headers=self._build_headers(),
                )
                body = response.text
            except httpx.TimeoutException as e:
                raise NetworkError(f"Request to {self.endpoint} timed out: {e}") from e
            except (httpx.HTTPError, httpx.InvalidURL) as e:
                raise NetworkError(f"Request to {self.endpoint} failed: {e}") from e

        if response.is_error:
            logger.warning(f"Endpoint answered with status {response.status_code}")
        else:
            logger.debug(f"Endpoint answered with status {response.status_code}")

        return body


def send_completion(
    endpoint: str,
    api_key: str,
    model_name: Optional[str],
    prompt_text: str,
    *,
    timeout: float = DEFAULT_TIMEOUT,
    transport: Optional[httpx.BaseTransport] = None,
) -> str:
    """Send one prompt to ``endpoint`` and return the raw response body."""
    client = CompletionClient(
        endpoint=endpoint,
        api_key=api_key,
        model_name=model_name,
        timeout=timeout,
        transport=transport,
    )
    return client.complete(prompt_text)
