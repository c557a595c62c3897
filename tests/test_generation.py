"""Tests for the HTTP text-generation client."""

import json

import httpx
import pytest

from valocoach.core.generation import GenerationError, HttpTextGenerator

URL = "http://coach.test/api/chat"
TURNS = [
    {"role": "user", "content": "How do I play Jett?"},
    {"role": "assistant", "content": "Dash in, then trade."},
    {"role": "user", "content": "And on Bind?"},
]


def _generator(handler) -> HttpTextGenerator:
    return HttpTextGenerator(URL, transport=httpx.MockTransport(handler))


class TestGenerate:
    @pytest.mark.asyncio
    async def test_sends_full_log_and_returns_content(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen.update(json.loads(request.content))
            return httpx.Response(200, json={"content": "Use the teleporter."})

        text = await _generator(handler).generate(TURNS)

        assert text == "Use the teleporter."
        assert seen["messages"] == TURNS
        assert seen["stream"] is False

    @pytest.mark.asyncio
    async def test_missing_content_is_empty_text(self):
        text = await _generator(lambda request: httpx.Response(200, json={})).generate(TURNS)
        assert text == ""

    @pytest.mark.asyncio
    async def test_server_error_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                500, json={"error": "Failed to process chat request", "details": "quota"}
            )

        with pytest.raises(GenerationError, match="500"):
            await _generator(handler).generate(TURNS)

    @pytest.mark.asyncio
    async def test_transport_error_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(GenerationError):
            await _generator(handler).generate(TURNS)

    @pytest.mark.asyncio
    async def test_invalid_json_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="not json")

        with pytest.raises(GenerationError):
            await _generator(handler).generate(TURNS)


class TestStream:
    @pytest.mark.asyncio
    async def test_fragments_concatenate_to_reply(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert json.loads(request.content)["stream"] is True
            return httpx.Response(200, text="Check corners, then clear site.")

        chunks = [chunk async for chunk in _generator(handler).stream(TURNS)]

        assert "".join(chunks) == "Check corners, then clear site."

    @pytest.mark.asyncio
    async def test_error_status_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(503, json={"error": "unavailable"})

        with pytest.raises(GenerationError):
            async for _ in _generator(handler).stream(TURNS):
                pass

    @pytest.mark.asyncio
    async def test_cut_off_body_raises(self):
        class CutOffStream(httpx.AsyncByteStream):
            async def __aiter__(self):
                yield b"Hold B "
                raise httpx.RemoteProtocolError("incomplete chunked read")

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, stream=CutOffStream())

        chunks = []
        with pytest.raises(GenerationError):
            async for chunk in _generator(handler).stream(TURNS):
                chunks.append(chunk)

        assert chunks == ["Hold B "]
