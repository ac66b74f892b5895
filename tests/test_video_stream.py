from __future__ import annotations

import asyncio

import httpx
import pytest

from adapters.video_stream import open_video_stream
from core.config import AppSettings
from core.errors import UpstreamFetchError

from conftest import VIDEO_URL, make_transport

PAYLOAD = b"\x00\x01mp4" * 50_000


def _transport(status: int = 200) -> httpx.MockTransport:
    return make_transport({VIDEO_URL: lambda request: httpx.Response(status, content=PAYLOAD)})


def test_stream_forwards_all_bytes_and_closes():
    async def scenario():
        stream = await open_video_stream(VIDEO_URL, AppSettings(), transport=_transport())
        chunks = [chunk async for chunk in stream.iter_bytes()]
        return stream, chunks

    stream, chunks = asyncio.run(scenario())

    assert b"".join(chunks) == PAYLOAD
    assert len(chunks) > 1
    assert stream.bytes_sent == len(PAYLOAD)
    assert stream._closed
    assert stream.content_length == str(len(PAYLOAD))


def test_abandoned_stream_releases_upstream():
    async def scenario():
        stream = await open_video_stream(VIDEO_URL, AppSettings(), transport=_transport())
        chunks = stream.iter_bytes()
        await chunks.__anext__()
        await chunks.aclose()
        return stream

    stream = asyncio.run(scenario())

    assert stream._closed
    assert stream.bytes_sent < len(PAYLOAD)


def test_aclose_is_idempotent():
    async def scenario():
        stream = await open_video_stream(VIDEO_URL, AppSettings(), transport=_transport())
        await stream.aclose()
        await stream.aclose()
        return stream

    assert asyncio.run(scenario())._closed


def test_error_status_is_raised_before_streaming():
    with pytest.raises(UpstreamFetchError) as excinfo:
        asyncio.run(open_video_stream(VIDEO_URL, AppSettings(), transport=_transport(404)))

    assert excinfo.value.reason == "HTTP 404"
