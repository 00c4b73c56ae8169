"""
ElevenLabs API Client

Thin wrapper over the ElevenLabs REST API.
Built once at application startup, closed at shutdown, never mutated.
Safe for concurrent read-only use. No retries.
"""

import logging
from typing import Any, Optional

import httpx

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.elevenlabs.io"


class ElevenLabsClientError(Exception):
    """ElevenLabs API call failed."""
    pass


class ElevenLabsClient:
    """Shared connection handle for ElevenLabs Conversational AI endpoints."""

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            api_key: ElevenLabs API key (sent as xi-api-key)
            base_url: API root
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport (tests inject a MockTransport)
        """
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={"xi-api-key": api_key},
            timeout=timeout,
            transport=transport,
        )

    @property
    def is_closed(self) -> bool:
        return self._client.is_closed

    async def get_conversation(self, conversation_id: str) -> dict[str, Any]:
        """
        Fetch full conversation details.

        Raises:
            ElevenLabsClientError: Non-2xx response or transport failure
        """
        path = f"/v1/convai/conversations/{conversation_id}"

        try:
            response = await self._client.get(path)
        except httpx.RequestError as e:
            logger.error(f"ElevenLabs request failed: {e}", exc_info=True)
            raise ElevenLabsClientError(f"HTTP request failed: {e}")

        if response.is_error:
            logger.error(
                f"ElevenLabs API error: {response.status_code}",
                extra={
                    "status_code": response.status_code,
                    "conversation_id": conversation_id,
                    "error_body": response.text,
                }
            )
            raise ElevenLabsClientError(
                f"ElevenLabs API returned {response.status_code}"
            )

        return response.json()

    async def aclose(self) -> None:
        await self._client.aclose()
