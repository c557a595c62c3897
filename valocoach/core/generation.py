"""Text-generation client contract and the HTTP client for ``/api/chat``."""

import logging
from collections.abc import AsyncIterator, Sequence
from dataclasses import dataclass
from typing import Protocol, TypedDict, runtime_checkable

import httpx

logger = logging.getLogger(__name__)


class ChatTurn(TypedDict):
    """Role/content pair exchanged with the generation endpoint."""

    role: str
    content: str


class GenerationError(Exception):
    """Text generation failed. Subtypes are not distinguished for callers."""


@runtime_checkable
class TextGenerator(Protocol):
    """Protocol for text-generation clients."""

    async def generate(self, messages: Sequence[ChatTurn]) -> str:
        """Return the complete generated text."""
        ...

    def stream(self, messages: Sequence[ChatTurn]) -> AsyncIterator[str]:
        """Yield concatenable text fragments."""
        ...


@dataclass
class HttpTextGenerator:
    """Client for the ``POST /api/chat`` generation endpoint.

    Example:
        generator = HttpTextGenerator("http://localhost:8000/api/chat")
        text = await generator.generate([{"role": "user", "content": "hi"}])
    """

    url: str
    timeout: float = 120.0
    transport: httpx.AsyncBaseTransport | None = None

    def _client(self) -> httpx.AsyncClient:
        # One client per call keeps the generator usable across event loops.
        return httpx.AsyncClient(timeout=self.timeout, transport=self.transport)

    @staticmethod
    def _error_detail(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text[:200]
        if isinstance(body, dict):
            return str(body.get("details") or body.get("error") or body)
        return str(body)

    async def generate(self, messages: Sequence[ChatTurn]) -> str:
        """Request a complete reply."""
        payload = {"messages": list(messages), "stream": False}
        try:
            async with self._client() as client:
                response = await client.post(self.url, json=payload)
                if response.is_error:
                    logger.warning(
                        "Chat endpoint returned %d: %s",
                        response.status_code,
                        self._error_detail(response),
                    )
                    raise GenerationError(
                        f"Chat endpoint returned {response.status_code}"
                    )
                data = response.json()
        except httpx.HTTPError as e:
            raise GenerationError(f"Chat endpoint unreachable: {e}") from e
        except ValueError as e:
            raise GenerationError("Chat endpoint returned invalid JSON") from e

        if not isinstance(data, dict):
            raise GenerationError("Chat endpoint returned an unexpected body")
        return str(data.get("content") or "")

    async def stream(self, messages: Sequence[ChatTurn]) -> AsyncIterator[str]:
        """Request a streamed reply and yield its fragments."""
        payload = {"messages": list(messages), "stream": True}
        try:
            async with self._client() as client:
                async with client.stream("POST", self.url, json=payload) as response:
                    if response.is_error:
                        await response.aread()
                        logger.warning(
                            "Chat endpoint returned %d: %s",
                            response.status_code,
                            self._error_detail(response),
                        )
                        raise GenerationError(
                            f"Chat endpoint returned {response.status_code}"
                        )
                    async for fragment in response.aiter_text():
                        if fragment:
                            yield fragment
        except httpx.HTTPError as e:
            raise GenerationError(f"Chat stream failed: {e}") from e
