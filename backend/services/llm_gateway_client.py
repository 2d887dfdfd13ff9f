"""
LLM Gateway Client - Interface for OpenAI-compatible chat-completions gateways.

Provides a simple async client for the hosted model that answers legal
questions. One blocking round-trip per call: no streaming, no retries.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from config import LLM_API_KEY, LLM_GATEWAY_URL, LLM_MODEL, LLM_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)


class LLMGatewayError(Exception):
    """Raised when the gateway call fails or returns an unusable reply."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class RateLimitError(LLMGatewayError):
    """Gateway answered 429."""


class CreditsExhaustedError(LLMGatewayError):
    """Gateway answered 402."""


class LLMGatewayClient:
    """Async client for the chat-completions gateway."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        default_model: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key or LLM_API_KEY
        self.base_url = (base_url or LLM_GATEWAY_URL).rstrip("/")
        self.default_model = default_model or LLM_MODEL
        self.timeout = timeout if timeout is not None else LLM_TIMEOUT_SECONDS
        self._transport = transport

        if not self.api_key:
            logger.warning("LLM_API_KEY not configured")

    async def chat_completion(
        self,
        messages: List[Dict[str, str]],
        model: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Make a chat completion request to the gateway.

        Args:
            messages: List of message dicts with 'role' and 'content'
            model: Model to use (defaults to configured model)

        Returns:
            Gateway response dict

        Raises:
            ValueError: If no API key is configured
            RateLimitError: On HTTP 429
            CreditsExhaustedError: On HTTP 402
            LLMGatewayError: On any other failure
        """
        if not self.api_key:
            raise ValueError("LLM_API_KEY is not configured")

        payload = {
            "model": model or self.default_model,
            "messages": messages,
        }

        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.post(
                    f"{self.base_url}/chat/completions",
                    json=payload,
                    headers=headers,
                )
        except httpx.HTTPError as e:
            logger.error(f"LLM gateway request failed: {e}")
            raise LLMGatewayError(f"AI API request failed: {e}") from e

        if response.status_code == 429:
            raise RateLimitError("Rate limit exceeded", status_code=429)
        if response.status_code == 402:
            raise CreditsExhaustedError("AI credits depleted", status_code=402)
        if response.status_code != 200:
            logger.error(f"LLM gateway error: {response.status_code} - {response.text}")
            raise LLMGatewayError(
                f"AI API error: {response.status_code}", status_code=response.status_code
            )

        return response.json()

    async def generate_reply(
        self,
        messages: List[Dict[str, str]],
        model: Optional[str] = None,
    ) -> str:
        """
        Run a chat completion and return the reply text.

        Args:
            messages: Full prompt, system message first
            model: Model to use

        Returns:
            The content of the first choice
        """
        response = await self.chat_completion(messages=messages, model=model)

        try:
            return response["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise LLMGatewayError(f"Unexpected AI API response shape: {e}") from e
