"""Language-model HTTP client for the in-app assistant"""

import logging
import httpx
from uzhavar_gateway.config import settings
from uzhavar_gateway.domain.exceptions import AssistantAPIError
from uzhavar_gateway.domain.prompts import ASSISTANT_SYSTEM_PROMPT, EMPTY_REPLY, UNAVAILABLE_REPLY
from uzhavar_gateway.infrastructure.observability.metrics import (
    assistant_latency_histogram,
    assistant_failure_counter,
)

logger = logging.getLogger(__name__)


class AssistantClient:
    """Client for the hosted Gemini generateContent API"""

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        model: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url or settings.assistant_api_base
        self.api_key = api_key if api_key is not None else settings.assistant_api_key
        self.model = model or settings.assistant_model
        self.timeout = timeout or settings.http_timeout_seconds
        self.temperature = settings.assistant_temperature
        self.transport = transport

    async def generate(self, prompt: str) -> str:
        """
        Send one prompt with the fixed system preamble.

        Returns the concatenated text parts of the first candidate, possibly empty.

        Raises:
            AssistantAPIError: On missing key, timeout, HTTP errors, or malformed response
        """
        if not self.api_key:
            raise AssistantAPIError("Assistant API key is not configured")

        payload = {
            "systemInstruction": {"parts": [{"text": ASSISTANT_SYSTEM_PROMPT}]},
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {"temperature": self.temperature},
        }

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                with assistant_latency_histogram.time():
                    response = await client.post(
                        f"{self.base_url}/models/{self.model}:generateContent",
                        headers={"x-goog-api-key": self.api_key},
                        json=payload,
                    )
                response.raise_for_status()
                data = response.json()

                candidates = data.get("candidates") or []
                if not candidates:
                    return ""
                parts = candidates[0].get("content", {}).get("parts", [])
                return "".join(part.get("text", "") for part in parts)

            except httpx.TimeoutException as e:
                raise AssistantAPIError(f"Assistant API timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise AssistantAPIError(f"Assistant API error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise AssistantAPIError(f"Assistant API unreachable: {e}") from e
            except (KeyError, ValueError, TypeError, AttributeError) as e:
                raise AssistantAPIError(f"Invalid response from assistant API: {e}") from e

    async def ask(self, prompt: str) -> str:
        """Answer a prompt; failures become the fixed fallback reply, never an exception"""
        try:
            reply = await self.generate(prompt)
        except AssistantAPIError as e:
            assistant_failure_counter.inc()
            logger.error(f"Assistant error: {e}")
            return UNAVAILABLE_REPLY
        return reply or EMPTY_REPLY
