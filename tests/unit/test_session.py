"""Tests for stream sessions."""

import asyncio
import json

import httpx
import pytest
import respx

from jsonui.core import Settings, StreamError
from jsonui.streaming import HttpPatchSource, UIStream

API_URL = "http://test.local/api/generate"


async def settle():
    """Let scheduled tasks run until they block."""
    for _ in range(5):
        await asyncio.sleep(0)


def make_source(chunks, gate=None):
    """Fake patch source yielding ``chunks``, optionally waiting on ``gate`` first."""
    payloads = []

    async def source(payload):
        payloads.append(payload)
        if gate is not None:
            await gate.wait()
        for chunk in chunks:
            yield chunk

    source.payloads = payloads
    return source


@pytest.mark.unit
@pytest.mark.asyncio
async def test_send_builds_tree(patch_lines):
    """A stream produces snapshots and a final tree."""
    source = make_source([line.encode() + b"\n" for line in patch_lines])
    snapshots, completed = [], []
    stream = UIStream(source=source, on_snapshot=snapshots.append, on_complete=completed.append)

    tree = await stream.send("Make a card", context={"theme": "dark"})

    assert tree.root == "main-card"
    assert tree.is_complete
    assert len(snapshots) == 4
    assert completed == [tree]
    assert stream.tree is tree
    assert stream.is_streaming is False
    assert stream.error is None
    assert source.payloads == [
        {"prompt": "Make a card", "context": {"theme": "dark"}, "currentTree": {"root": "", "elements": {}}}
    ]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_send_applies_trailing_line(patch_lines):
    """The final line needs no newline."""
    source = make_source(["\n".join(patch_lines)])
    tree = await UIStream(source=source).send("x")
    assert set(tree.elements) == {"main-card", "greeting", "ok-btn"}


@pytest.mark.unit
@pytest.mark.asyncio
async def test_new_send_aborts_previous(patch_lines):
    """Starting a new request cancels the one in flight."""
    gate = asyncio.Event()
    slow = make_source([b'{"op":"set","path":"/root","value":"stale"}\n'], gate=gate)
    stream = UIStream(source=slow)

    first = asyncio.create_task(stream.send("first"))
    await settle()
    assert stream.is_streaming

    stream.source = make_source([line + "\n" for line in patch_lines])
    second = await stream.send("second")
    gate.set()

    assert await first is None
    assert second.root == "main-card"
    assert stream.tree.root == "main-card"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_clear_aborts_and_resets():
    """clear() cancels the stream and forgets the tree."""
    gate = asyncio.Event()
    stream = UIStream(source=make_source([b""], gate=gate))

    task = asyncio.create_task(stream.send("x"))
    await settle()
    stream.clear()

    assert await task is None
    assert stream.tree is None
    assert stream.is_streaming is False


@pytest.mark.unit
@pytest.mark.asyncio
async def test_transport_error_raises_once():
    """Transport failures raise a single StreamError."""

    async def broken(payload):
        yield b'{"op":"set","path":"/root","value":"a"}\n'
        raise httpx.ReadError("connection reset")

    errors = []
    stream = UIStream(source=broken, on_error=errors.append)

    with pytest.raises(StreamError) as exc_info:
        await stream.send("x")

    assert isinstance(exc_info.value.original, httpx.ReadError)
    assert errors == [exc_info.value]
    assert stream.error is exc_info.value
    assert stream.tree.root == "a"
    assert stream.is_streaming is False


@pytest.mark.unit
@pytest.mark.asyncio
async def test_source_closed_when_consumer_fails(patch_lines):
    """The source is closed as soon as the run ends, not at garbage collection."""
    closed = []

    async def source(payload):
        try:
            for line in patch_lines:
                yield (line + "\n").encode()
        finally:
            closed.append(True)

    def broken_render(tree):
        raise RuntimeError("render failed")

    stream = UIStream(source=source, on_snapshot=broken_render)

    with pytest.raises(RuntimeError):
        await stream.send("x")

    assert closed == [True]
    assert stream.is_streaming is False


@pytest.mark.unit
@pytest.mark.asyncio
@respx.mock
async def test_http_source_streams_body(patch_stream):
    """The HTTP source POSTs JSON and streams the response body."""
    route = respx.post(API_URL).mock(return_value=httpx.Response(200, content=patch_stream.encode()))
    stream = UIStream(settings=Settings(stream_api_url=API_URL))

    tree = await stream.send("Make a card")

    assert tree.is_complete
    sent = json.loads(route.calls.last.request.content)
    assert sent["prompt"] == "Make a card"
    assert sent["context"] is None
    assert sent["currentTree"] == {"root": "", "elements": {}}


@pytest.mark.unit
@pytest.mark.asyncio
@respx.mock
async def test_http_source_error_status():
    """Non-success responses raise StreamError with the body."""
    respx.post(API_URL).mock(return_value=httpx.Response(500, text="model overloaded"))
    errors = []
    stream = UIStream(api_url=API_URL, on_error=errors.append)

    with pytest.raises(StreamError, match="HTTP 500: model overloaded"):
        await stream.send("x")
    assert len(errors) == 1


@pytest.mark.unit
@pytest.mark.asyncio
@respx.mock
async def test_http_source_with_shared_client(patch_stream):
    """A caller-owned client is used and left open."""
    respx.post(API_URL).mock(return_value=httpx.Response(200, content=patch_stream.encode()))

    async with httpx.AsyncClient() as client:
        source = HttpPatchSource(API_URL, client=client, headers={"X-Test": "1"})
        chunks = [chunk async for chunk in source({"prompt": "x"})]
        assert not client.is_closed

    assert b"".join(chunks) == patch_stream.encode()
    assert respx.calls.last.request.headers["X-Test"] == "1"
