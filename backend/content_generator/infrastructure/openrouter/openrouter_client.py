"""OpenRouter API client — implements the ChatProvider interface.

Communicates with the OpenRouter API (https://openrouter.ai/api/v1)
using httpx for non-streaming chat completions. Requests are never
retried: any failure is surfaced to the caller as a TransportError.
"""

import logging
from typing import Any

import httpx

from content_generator.application.interfaces.chat_provider import ChatProvider
from content_generator.domain.entities import (
    ChatMessage,
    ChatCompletionResult,
    TokenUsage,
)
from content_generator.domain.exceptions import (
    ConfigError,
    EmptyContentError,
    TransportError,
)

logger = logging.getLogger(__name__)

# Used when the request never got a response (DNS, connect, timeout).
_NETWORK_ERROR_STATUS = 503


class OpenRouterClient(ChatProvider):
    """Infrastructure adapter — connects to the OpenRouter API.

    The API key is checked at construction time, so a missing credential
    fails application startup instead of the first request.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://openrouter.ai/api/v1",
        app_name: str = "AI Content Generator",
        site_url: str = "http://localhost:3000",
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 120.0,
    ):
        if not api_key or not api_key.strip():
            raise ConfigError("openrouter_api_key", "OpenRouter API key is not configured")
        self._api_key = api_key.strip()
        self._base_url = base_url.rstrip("/")
        self._app_name = app_name
        self._site_url = site_url
        self._http_client = http_client
        self._timeout = timeout

    @property
    def provider_name(self) -> str:
        return "openrouter"

    def _get_headers(self) -> dict[str, str]:
        """Standard headers for OpenRouter requests."""
        return {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
            "HTTP-Referer": self._site_url,
            "X-Title": self._app_name,
        }

    @staticmethod
    def _build_payload(
        messages: list[ChatMessage],
        model: str,
        *,
        temperature: float | None = None,
        max_tokens: int | None = None,
        top_p: float | None = None,
    ) -> dict[str, Any]:
        """Build the request payload for the OpenRouter API."""
        payload: dict[str, Any] = {
            "model": model,
            "messages": [{"role": m.role, "content": m.content} for m in messages],
        }
        if max_tokens is not None:
            payload["max_tokens"] = max_tokens
        if temperature is not None:
            payload["temperature"] = temperature
        if top_p is not None:
            payload["top_p"] = top_p
        return payload

    async def _get_client(self) -> httpx.AsyncClient:
        """Return the injected client or create a new one."""
        if self._http_client is not None:
            return self._http_client
        return httpx.AsyncClient(timeout=self._timeout)

    async def complete(
        self,
        messages: list[ChatMessage],
        model: str,
        *,
        temperature: float | None = None,
        max_tokens: int | None = None,
        top_p: float | None = None,
    ) -> ChatCompletionResult:
        """Send a non-streaming chat completion to OpenRouter."""
        payload = self._build_payload(
            messages, model, temperature=temperature, max_tokens=max_tokens, top_p=top_p
        )
        url = f"{self._base_url}/chat/completions"

        client = await self._get_client()
        should_close = self._http_client is None

        logger.info("Requesting completion from %s (model=%s)", self.provider_name, model)
        try:
            try:
                response = await client.post(
                    url, headers=self._get_headers(), json=payload
                )
            except httpx.HTTPError as e:
                logger.error("OpenRouter request failed: %s", e)
                raise TransportError(
                    provider=self.provider_name,
                    status_code=_NETWORK_ERROR_STATUS,
                    message=f"Could not reach {self.provider_name}",
                    details=str(e),
                ) from e

            logger.info("API response status: %d", response.status_code)
            if not response.is_success:
                self._raise_provider_error(response)

            try:
                data = response.json()
            except ValueError as e:
                logger.error("Failed to parse response as JSON: %s", response.text)
                raise TransportError(
                    provider=self.provider_name,
                    status_code=response.status_code,
                    message="Invalid response from API",
                    details=str(e),
                ) from e

            return self._parse_completion_response(data)

        finally:
            if should_close:
                await client.aclose()

    def _parse_completion_response(self, data: Any) -> ChatCompletionResult:
        """Parse the OpenRouter JSON response into a domain entity."""
        if not isinstance(data, dict):
            raise TransportError(
                provider=self.provider_name,
                status_code=502,
                message="Invalid response from API",
                details=data,
            )

        # OpenRouter may report upstream failures inside a 200 body
        if "error" in data:
            error = data["error"] if isinstance(data["error"], dict) else {}
            raise TransportError(
                provider=self.provider_name,
                status_code=error.get("code", 500),
                message=error.get("message", "Failed to generate content"),
                details=data,
            )

        choices = data.get("choices") or []
        if not choices:
            logger.error("No choices in response: %s", data)
            raise EmptyContentError(
                "No content received from API",
                details=f"Response structure: {data}",
            )

        choice = choices[0] if isinstance(choices, list) else None
        message = (choice.get("message") or {}) if isinstance(choice, dict) else None
        if not isinstance(message, dict) or not all(
            message.get(key) is None or isinstance(message.get(key), str)
            for key in ("content", "reasoning", "refusal")
        ):
            logger.error("Malformed choice in response: %s", data)
            raise TransportError(
                provider=self.provider_name,
                status_code=502,
                message="Invalid response from API",
                details=data,
            )
        usage_data = data.get("usage") or {}

        return ChatCompletionResult(
            model=data.get("model", ""),
            content=message.get("content") or "",
            finish_reason=choice.get("finish_reason") or "stop",
            usage=TokenUsage(
                prompt_tokens=usage_data.get("prompt_tokens", 0),
                completion_tokens=usage_data.get("completion_tokens", 0),
                total_tokens=usage_data.get("total_tokens", 0),
            ),
            provider=self.provider_name,
            reasoning=message.get("reasoning") or None,
            refusal=message.get("refusal") or None,
        )

    def _raise_provider_error(self, response: httpx.Response) -> None:
        """Raise TransportError from a non-2xx httpx Response."""
        details: Any = response.text
        try:
            details = response.json()
            error = details.get("error", {})
            message = error.get("message") or f"API error: {response.status_code}"
        except Exception:
            message = f"API error: {response.status_code}"

        logger.error("API error response (%d): %s", response.status_code, details)
        raise TransportError(
            provider=self.provider_name,
            status_code=response.status_code,
            message=message,
            details=details,
        )
